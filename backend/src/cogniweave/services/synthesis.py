import logging
from dataclasses import dataclass
from typing import Any

from cogniweave.agents.gateway import ModelGateway
from cogniweave.agents.profile_synthesizer import run_profile_synthesizer
from cogniweave.errors import MissingFieldError, SynthesisError
from cogniweave.schemas.profile import CognitiveProfile, ProfileRecord, default_profile
from cogniweave.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class SynthesisResult:
    profile: CognitiveProfile
    ai_generated: bool
    confidence: float = 0
    reasoning: str | dict[str, Any] = "N/A"


async def synthesize_profile(
    gateway: ModelGateway,
    user_responses: dict[str, Any],
) -> SynthesisResult:
    """Derive a profile from onboarding answers, falling back to the fixed default.

    The fallback is a static safety net: it never looks at the answers.
    """
    outcome = await run_profile_synthesizer(gateway, user_responses)

    if isinstance(outcome, SynthesisError):
        logger.warning("Profile synthesis fell back to default profile: %s", outcome.message)
        return SynthesisResult(
            profile=default_profile(),
            ai_generated=False,
            reasoning=f"AI generation failed with error: {outcome.message}",
        )

    return SynthesisResult(
        profile=outcome.recommended_profile,
        ai_generated=True,
        confidence=outcome.confidence,
        reasoning=outcome.reasoning,
    )


async def create_profile(
    store: ProfileStore,
    gateway: ModelGateway,
    user_id: str | None,
    user_responses: dict[str, Any] | None,
) -> tuple[ProfileRecord, SynthesisResult]:
    """Synthesize and persist a profile. Persistence happens on both paths."""
    if not user_id:
        raise MissingFieldError("userId")
    if not user_responses:
        raise MissingFieldError("userResponses", plural=True)

    result = await synthesize_profile(gateway, user_responses)
    if result.ai_generated:
        logger.info(
            "AI profile generated for userId %s with confidence %s", user_id, result.confidence
        )

    record = await store.put(user_id, result.profile)
    return record, result
