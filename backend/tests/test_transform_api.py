"""HTTP contract of content transformation."""

import re

from cogniweave.agents.content_transformer import SYSTEM_PROMPT
from cogniweave.errors import ModelGatewayError

from conftest import AI_PROFILE, ANSWERS, synthesis_output


def test_transform_returns_model_text_verbatim(client, gateway, store):
    store.seed("reader", AI_PROFILE)
    gateway.output = "Hello, world.\n\nThis is {not json}."

    response = client.post("/v1/transform", json={"userId": "reader", "textContent": "Hello world"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["userId"] == "reader"
    assert body["originalText"] == "Hello world"
    assert body["transformedText"] == "Hello, world.\n\nThis is {not json}."
    assert re.fullmatch(r"\d+\.\d+s", body["processingTime"])

    call = gateway.calls[0]
    assert call["system_instruction"] == SYSTEM_PROMPT
    assert call["max_output_tokens"] == 4096
    assert call["payload"] == {
        "task": "simplify_text",
        "profile": AI_PROFILE,
        "text_content": "Hello world",
    }


def test_transform_gateway_failure_keeps_original_text(client, gateway, store):
    store.seed("reader", AI_PROFILE)
    gateway.error = ModelGatewayError("Read timed out")

    response = client.post("/v1/transform", json={"userId": "reader", "textContent": "Hello world"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Read timed out",
        "originalText": "Hello world",
    }


def test_transform_unknown_user_is_not_found(client, gateway):
    response = client.post("/v1/transform", json={"userId": "ghost", "textContent": "Hello world"})

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Error: No profile found for userId: ghost.",
    }
    assert gateway.calls == []


def test_transform_missing_user_id(client, gateway, store):
    response = client.post("/v1/transform", json={"textContent": "Hello world"})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Error: 'userId' is required in the request body.",
    }
    assert gateway.calls == []
    assert store.gets == []


def test_transform_missing_text(client, gateway, store):
    for body in ({"userId": "reader"}, {"userId": "reader", "textContent": "   "}):
        response = client.post("/v1/transform", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Error: 'textContent' is required in the request body."

    assert gateway.calls == []
    assert store.gets == []


def test_profile_created_then_used_for_transform(client, gateway, store):
    gateway.output = synthesis_output()
    client.post("/v1/users", json={"userId": "fresh", "userResponses": ANSWERS})

    gateway.output = "Short text."
    response = client.post("/v1/transform", json={"userId": "fresh", "textContent": "Long text."})

    assert response.status_code == 200
    assert gateway.calls[-1]["payload"]["profile"] == AI_PROFILE


def test_store_failure_keeps_original_text(client, gateway, store):
    from sqlalchemy.exc import OperationalError

    async def broken_get(user_id):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    store.get = broken_get

    response = client.post("/v1/transform", json={"userId": "reader", "textContent": "Hello world"})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "connection refused" in body["error"]
    assert body["originalText"] == "Hello world"
    assert gateway.calls == []


def test_cors_headers_without_origin(client):
    response = client.post("/v1/transform", json={"textContent": "Hello world"})

    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
