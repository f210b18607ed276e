import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from cogniweave.db.models import UserProfile, utcnow
from cogniweave.schemas.profile import CognitiveProfile, ProfileRecord

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    async def put(self, user_id: str, profile: CognitiveProfile) -> ProfileRecord: ...

    async def get(self, user_id: str) -> ProfileRecord | None: ...


def _to_record(row: UserProfile) -> ProfileRecord:
    return ProfileRecord(
        user_id=row.user_id,
        profile=CognitiveProfile.model_validate(row.profile),
        created_at=row.created_at,
        last_updated=row.last_updated,
    )


class SqlProfileStore:
    """Profile records in the ``user_profiles`` table, last write wins."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def put(self, user_id: str, profile: CognitiveProfile) -> ProfileRecord:
        now = utcnow()
        row = await self.db.get(UserProfile, user_id)
        if row is None:
            row = UserProfile(user_id=user_id)
            self.db.add(row)

        # Whole-record replace: no merge with the previous profile, no history.
        row.profile = profile.model_dump(by_alias=True)
        row.created_at = now
        row.last_updated = now
        # Durable before the response is built; a failed commit fails the request.
        await self.db.commit()

        logger.info("Saved profile for userId %s", user_id)
        return _to_record(row)

    async def get(self, user_id: str) -> ProfileRecord | None:
        row = await self.db.get(UserProfile, user_id)
        if row is None:
            return None
        return _to_record(row)
