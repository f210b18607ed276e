from typing import Any

from pydantic import ValidationError

from cogniweave.agents.gateway import ModelGateway
from cogniweave.config import settings
from cogniweave.errors import ModelGatewayError, SynthesisError
from cogniweave.schemas.profile import PROFILE_FIELDS, ProfileSynthesisOutput

SYSTEM_PROMPT = (
    "You are an expert in cognitive accessibility and educational psychology. Analyze the "
    "user's onboarding responses to create an optimal cognitive profile. Your output must be "
    "a single, valid JSON object matching the specified format, with no additional text or "
    "explanations outside of the JSON structure."
)


def build_profile_payload(user_responses: dict[str, Any]) -> dict[str, Any]:
    return {
        "task": "generate_cognitive_profile",
        "user_responses": user_responses,
        "instructions": {
            "analyze": [
                "Identify cognitive patterns from the responses",
                "Consider learning style preferences",
                "Evaluate complexity tolerance",
                "Assess visual processing needs",
                "Infer potential cognitive needs (e.g., 'dyslexia_support', 'adhd_support') "
                "and represent them as an array of strings.",
            ],
            "generate": {
                "profile_parameters": PROFILE_FIELDS,
                "confidence_threshold": 0.8,
                "reasoning_required": True,
            },
        },
        "output_format": {
            "recommended_profile": (
                "object with all required profile parameters, including an array for "
                "'cognitiveNeeds'"
            ),
            "confidence": "number between 0 and 1",
            "reasoning": "explanation of recommendations",
        },
    }


def strip_code_fence(text: str) -> str:
    s = text.strip()
    if s.startswith("```"):
        s = "\n".join(s.splitlines()[1:])
        if s.endswith("```"):
            s = "\n".join(s.splitlines()[:-1])
    return s


def parse_synthesis_output(text: str) -> ProfileSynthesisOutput | SynthesisError:
    try:
        return ProfileSynthesisOutput.model_validate_json(strip_code_fence(text))
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "response"
        return SynthesisError(
            f"model output failed validation ({e.error_count()} errors, first at "
            f"'{location}': {first['msg']})"
        )


async def run_profile_synthesizer(
    gateway: ModelGateway,
    user_responses: dict[str, Any],
) -> ProfileSynthesisOutput | SynthesisError:
    """Ask the model for a profile. Never raises for model-side problems."""
    try:
        text = await gateway.invoke(
            SYSTEM_PROMPT,
            build_profile_payload(user_responses),
            settings.profile_max_tokens,
            agent_name="profile_synthesizer",
        )
    except ModelGatewayError as e:
        return SynthesisError(str(e))

    return parse_synthesis_output(text)
