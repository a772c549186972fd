"""Shared fixtures for the client tests."""

from __future__ import annotations

import pytest

from apiai.config import AIConfiguration


class FakeTransport:
    """Records outgoing JSON and replays a canned answer."""

    def __init__(self, answer: str = "", error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.text_calls: list[str] = []
        self.voice_calls: list[tuple[bytes, str]] = []
        self.closed = False

    def text_request(self, request_json: str) -> str:
        self.text_calls.append(request_json)
        if self.error is not None:
            raise self.error
        return self.answer

    def voice_request(self, voice_stream, request_json: str) -> str:
        self.voice_calls.append((voice_stream.read(), request_json))
        if self.error is not None:
            raise self.error
        return self.answer

    def close(self) -> None:
        self.closed = True


OK_ANSWER = """{
  "id": "c1b9a0ba-2b8f-4d54-8a7f-2d8d0c3b1f3e",
  "timestamp": "2015-09-10T12:00:00.000Z",
  "result": {
    "source": "agent",
    "resolvedQuery": "hello",
    "action": "greeting",
    "actionIncomplete": false,
    "parameters": {"name": "Sam"},
    "contexts": [{"name": "greeted", "parameters": {"time": "morning"}, "lifespan": 5}],
    "metadata": {"intentId": "42", "intentName": "Greeting"},
    "fulfillment": {"speech": "Hi there"}
  },
  "status": {"code": 200, "errorType": "success"}
}"""

ERROR_ANSWER = '{"status": {"code": 401, "errorType": "unauthorized", "errorDetails": "Bad token"}}'


@pytest.fixture
def config() -> AIConfiguration:
    return AIConfiguration(
        api_key="test-api-key",
        subscription_key="test-subscription-key",
        language="de",
        service_url="https://nlp.example.com/v1/",
        timezone="Europe/Berlin",
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport(answer=OK_ANSWER)
