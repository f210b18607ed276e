from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cogniweave.agents.gateway import ModelGateway
from cogniweave.db.session import get_db_session
from cogniweave.dependencies import get_model_gateway

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check(
    db: AsyncSession = Depends(get_db_session),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    """Store round-trip only; the model is named but not called."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok", "model": gateway.model_name}
