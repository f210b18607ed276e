from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cogniweave.agents.gateway import ModelGateway
from cogniweave.db.session import get_db_session
from cogniweave.services.profile_store import ProfileStore, SqlProfileStore


def get_model_gateway(request: Request) -> ModelGateway:
    """The gateway built once in the app lifespan."""
    return request.app.state.model_gateway


async def get_profile_store(db: AsyncSession = Depends(get_db_session)) -> ProfileStore:
    return SqlProfileStore(db)
