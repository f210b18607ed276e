import time

from fastapi import APIRouter, Depends

from cogniweave.agents.gateway import ModelGateway
from cogniweave.dependencies import get_model_gateway, get_profile_store
from cogniweave.errors import ProfileNotFoundError
from cogniweave.schemas.profile import CreateProfileRequest, CreateProfileResponse, ProfileRecord
from cogniweave.services.profile_store import ProfileStore
from cogniweave.services.synthesis import create_profile

router = APIRouter(prefix="/v1/users", tags=["users"])


@router.post("", response_model=CreateProfileResponse)
async def create_user_profile(
    req: CreateProfileRequest,
    store: ProfileStore = Depends(get_profile_store),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    start = time.monotonic()
    answers = req.user_responses.as_payload() if req.user_responses else None

    record, result = await create_profile(store, gateway, req.user_id, answers)

    return CreateProfileResponse(
        processing_time_ms=int((time.monotonic() - start) * 1000),
        user_id=record.user_id,
        ai_generated=result.ai_generated,
        confidence=result.confidence,
        reasoning=result.reasoning,
        profile=record.profile,
    )


@router.get("/{user_id}", response_model=ProfileRecord)
async def get_user_profile(
    user_id: str,
    store: ProfileStore = Depends(get_profile_store),
):
    record = await store.get(user_id)
    if record is None:
        raise ProfileNotFoundError(user_id)
    return record
