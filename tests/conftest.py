from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from agent_bootstrap.agents.agent import Agent
from agent_bootstrap.app.config import reset_settings
from agent_bootstrap.infrastructure.data_models import Message, Role


class FakeCompletions:
    """Stands in for `client.chat.completions`; records every request."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def make_client(response: Any = None, error: Exception | None = None) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(response, error)))


def completion_payload(content: str | None = "ok", role: str = "assistant") -> dict[str, Any]:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": "gpt-4o-mini-2024-07-18",
        "choices": [
            {"index": 0, "message": {"role": role, "content": content}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Any:
    for name in ("GPT_API_KEY", "GPT_MODEL", "OUTPUT_ROOT", "REGION", "AVAILABILITY_ZONES"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("GPT_API_KEY", "sk-test")
    return "sk-test"


class RecordingController:
    """Controller double that returns a canned reply (or raises) and records requests."""

    def __init__(self, reply: Message | None = None, error: Exception | None = None) -> None:
        self.reply = reply or Message(role=Role.ASSISTANT, content="ok")
        self.error = error
        self.requests: list[Any] = []

    def generate_response(self, messages: Any) -> Message:
        self.requests.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


def make_agent(agent_id: str, controller: Any = None) -> Agent:
    return Agent(agent_id, controller or RecordingController())
