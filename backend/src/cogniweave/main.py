import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cogniweave.agents.gateway import ModelGateway
from cogniweave.config import settings
from cogniweave.db.session import init_models
from cogniweave.errors import CogniWeaveError
from cogniweave.routers import health, transform, users

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    app.state.model_gateway = ModelGateway()
    yield


app = FastAPI(title="CogniWeave", version="0.1.0", lifespan=lifespan)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

if "*" in settings.cors_origins:
    # CORSMiddleware only answers requests that carry an Origin header.
    @app.middleware("http")
    async def open_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        response.headers.setdefault("Access-Control-Allow-Headers", "Content-Type")
        response.headers.setdefault("Access-Control-Allow-Methods", "POST,GET,OPTIONS")
        return response


@app.exception_handler(CogniWeaveError)
async def cogniweave_error_handler(request: Request, exc: CogniWeaveError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(exc.to_body(), status_code=exc.status_code)


app.include_router(health.router)
app.include_router(users.router)
app.include_router(transform.router)
