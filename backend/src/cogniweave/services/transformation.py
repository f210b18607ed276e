import logging
from dataclasses import dataclass

from cogniweave.agents.content_transformer import run_content_transformer
from cogniweave.agents.gateway import ModelGateway
from cogniweave.errors import (
    MissingFieldError,
    ModelGatewayError,
    ProfileNotFoundError,
    TransformationFailedError,
)
from cogniweave.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class TransformationResult:
    user_id: str
    original_text: str
    transformed_text: str


def validate_transform_input(user_id: str | None, text_content: str | None) -> None:
    if not user_id:
        raise MissingFieldError("userId")
    if not text_content or not text_content.strip():
        raise MissingFieldError("textContent")


async def transform_content(
    store: ProfileStore,
    gateway: ModelGateway,
    user_id: str | None,
    text_content: str | None,
) -> TransformationResult:
    """Rewrite text for a user's stored profile.

    Input is validated before the store or the model is touched. A missing
    profile is a not-found error; there is no transformation without one.
    """
    validate_transform_input(user_id, text_content)

    record = await store.get(user_id)
    if record is None:
        raise ProfileNotFoundError(user_id)
    logger.info("Fetched profile for userId %s", user_id)

    try:
        transformed = await run_content_transformer(gateway, record.profile, text_content)
    except ModelGatewayError as e:
        raise TransformationFailedError(str(e), original_text=text_content) from e

    return TransformationResult(
        user_id=user_id,
        original_text=text_content,
        transformed_text=transformed,
    )
