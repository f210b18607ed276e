from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic.alias_generators import to_camel

from cogniweave.schemas.common import CamelModel

ReadingLevel = Literal["grade_6", "grade_8", "grade_10"]
ParagraphStrategy = Literal["one_idea_per_paragraph", "short_blocks", "medium_blocks", "long_form"]
SentenceLength = Literal["short", "medium", "long"]
VocabularyLevel = Literal["simple", "moderate", "advanced"]
VisualDistraction = Literal["low", "medium", "high"]

Reasoning = Annotated[str, Field(min_length=1)] | dict[str, Any]


class CognitiveProfile(CamelModel):
    """Text-presentation preferences used to personalize rewriting.

    Every field is required; booleans are strict so that ``"yes"`` or ``1``
    from a model response is rejected rather than coerced.
    """

    target_reading_level: ReadingLevel
    paragraph_strategy: ParagraphStrategy
    sentence_length: SentenceLength
    avoid_jargon: StrictBool
    use_active_voice: StrictBool
    vocabulary_level: VocabularyLevel
    visual_distraction: VisualDistraction
    cognitive_needs: list[StrictStr]


PROFILE_FIELDS: list[str] = [field.alias for field in CognitiveProfile.model_fields.values()]

DEFAULT_PROFILE = CognitiveProfile(
    target_reading_level="grade_8",
    paragraph_strategy="one_idea_per_paragraph",
    sentence_length="short",
    avoid_jargon=True,
    use_active_voice=True,
    vocabulary_level="simple",
    visual_distraction="low",
    cognitive_needs=[],
)


def default_profile() -> CognitiveProfile:
    return DEFAULT_PROFILE.model_copy(deep=True)


class ProfileSynthesisOutput(BaseModel):
    """Expected JSON object in the profile synthesizer's response."""

    recommended_profile: CognitiveProfile
    confidence: float = Field(ge=0, le=1)
    reasoning: Reasoning


class OnboardingAnswers(CamelModel):
    """Questionnaire answers, forwarded to the model as-is (unknown keys kept)."""

    reading_preference: str | None = None
    vocabulary_level: str | None = None
    visual_distraction_sensitivity: str | None = None
    preferred_structure: str | None = None
    reading_pace: str | None = None
    attention_span: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def as_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateProfileRequest(CamelModel):
    # Optional here so that missing values get our own 400 message instead of a 422.
    user_id: str | None = None
    user_responses: OnboardingAnswers | None = None


class CreateProfileResponse(CamelModel):
    message: str = "Profile creation process completed successfully."
    processing_time_ms: int
    user_id: str
    profile_created: bool = True
    ai_generated: bool
    confidence: float
    reasoning: Reasoning
    profile: CognitiveProfile


class ProfileRecord(CamelModel):
    user_id: str
    profile: CognitiveProfile
    created_at: datetime
    last_updated: datetime
