import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from cogniweave.agents.gateway import ModelGateway
from cogniweave.dependencies import get_model_gateway, get_profile_store
from cogniweave.errors import TransformationFailedError
from cogniweave.schemas.transform import TransformRequest, TransformResponse
from cogniweave.services.profile_store import ProfileStore
from cogniweave.services.transformation import transform_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/transform", tags=["transform"])


@router.post("", response_model=TransformResponse)
async def transform(
    req: TransformRequest,
    store: ProfileStore = Depends(get_profile_store),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    start = time.monotonic()
    try:
        result = await transform_content(store, gateway, req.user_id, req.text_content)
    except SQLAlchemyError as e:
        logger.exception("Profile lookup failed for userId %s", req.user_id)
        raise TransformationFailedError(str(e), original_text=req.text_content) from e

    return TransformResponse(
        user_id=result.user_id,
        transformed_text=result.transformed_text,
        original_text=result.original_text,
        processing_time=f"{time.monotonic() - start:.1f}s",
    )
