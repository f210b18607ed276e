import json

import pytest
from fastapi.testclient import TestClient

from cogniweave.db.models import utcnow
from cogniweave.dependencies import get_model_gateway, get_profile_store
from cogniweave.main import app
from cogniweave.schemas.profile import CognitiveProfile, ProfileRecord

ANSWERS = {
    "readingPreference": "short_sentences",
    "vocabularyLevel": "simple",
    "visualDistractionSensitivity": "high",
    "preferredStructure": "bullet_points_for_lists",
    "readingPace": "slow_and_steady",
    "attentionSpan": "short_bursts",
}

AI_PROFILE = {
    "targetReadingLevel": "grade_6",
    "paragraphStrategy": "short_blocks",
    "sentenceLength": "short",
    "avoidJargon": True,
    "useActiveVoice": True,
    "vocabularyLevel": "simple",
    "visualDistraction": "low",
    "cognitiveNeeds": ["adhd_support", "chunked_content"],
}

DEFAULT_PROFILE_BODY = {
    "targetReadingLevel": "grade_8",
    "paragraphStrategy": "one_idea_per_paragraph",
    "sentenceLength": "short",
    "avoidJargon": True,
    "useActiveVoice": True,
    "vocabularyLevel": "simple",
    "visualDistraction": "low",
    "cognitiveNeeds": [],
}


def synthesis_output(**overrides) -> str:
    body = {
        "recommended_profile": AI_PROFILE,
        "confidence": 0.87,
        "reasoning": "Short bursts of attention suggest small chunks.",
    }
    body.update(overrides)
    return json.dumps(body)


class FakeGateway:
    """Records every call; returns ``output`` or raises ``error``."""

    def __init__(self, output: str = "", error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[dict] = []

    async def invoke(self, system_instruction, payload, max_output_tokens, agent_name="model"):
        self.calls.append({
            "system_instruction": system_instruction,
            "payload": payload,
            "max_output_tokens": max_output_tokens,
            "agent_name": agent_name,
        })
        if self.error is not None:
            raise self.error
        return self.output


class InMemoryProfileStore:
    def __init__(self):
        self.records: dict[str, ProfileRecord] = {}
        self.puts: list[str] = []
        self.gets: list[str] = []

    def seed(self, user_id: str, profile: dict) -> None:
        now = utcnow()
        self.records[user_id] = ProfileRecord(
            user_id=user_id,
            profile=CognitiveProfile.model_validate(profile),
            created_at=now,
            last_updated=now,
        )

    async def put(self, user_id: str, profile: CognitiveProfile) -> ProfileRecord:
        self.puts.append(user_id)
        now = utcnow()
        record = ProfileRecord(
            user_id=user_id,
            profile=profile,
            created_at=now,
            last_updated=now,
        )
        self.records[user_id] = record
        return record

    async def get(self, user_id: str) -> ProfileRecord | None:
        self.gets.append(user_id)
        return self.records.get(user_id)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def client(store, gateway):
    app.dependency_overrides[get_profile_store] = lambda: store
    app.dependency_overrides[get_model_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()
