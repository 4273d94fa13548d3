"""
Shared data models.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    DEVELOPER = "developer"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def __post_init__(self) -> None:
        # Accept plain strings ("user") and reject anything outside the Role enumeration
        try:
            role = Role(self.role)
        except ValueError as e:
            raise ValueError(f"Unsupported message role: {self.role!r}") from e
        object.__setattr__(self, "role", role)

        # A null content from the API means "no content produced"
        if self.content is None:
            object.__setattr__(self, "content", "")
        elif not isinstance(self.content, str):
            raise ValueError(f"Message content must be a string, got {type(self.content).__name__}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        if "role" not in data:
            raise ValueError("Message is missing a role")
        return cls(role=data["role"], content=data.get("content"))

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


PromptRequest = tuple[Message, ...]


def build_prompt_request(messages: Iterable[Message | Mapping[str, Any]]) -> PromptRequest:
    """
    Build an immutable, ordered prompt from Message objects or wire-format dicts.

    Raises:
        ValueError: If the prompt is empty or a message is malformed
    """
    request = tuple(m if isinstance(m, Message) else Message.from_dict(m) for m in messages)
    if not request:
        raise ValueError("A prompt needs at least one message")
    return request


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


@dataclass(frozen=True)
class Completion:
    """The first choice of a chat completion plus the metadata that came with it."""

    message: Message
    model: str | None = None
    usage: Usage | None = None
    finish_reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        usage = None
        if self.usage is not None:
            usage = {
                "prompt_tokens": self.usage.prompt_tokens,
                "completion_tokens": self.usage.completion_tokens,
                "total_tokens": self.usage.total_tokens,
            }
        return {
            "message": self.message.to_dict(),
            "model": self.model,
            "usage": usage,
            "finish_reason": self.finish_reason,
        }


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    text: str

    @classmethod
    def now(cls, text: str) -> "LogEntry":
        timestamp = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return cls(timestamp=timestamp, text=text)

    def __str__(self) -> str:
        return f"[{self.timestamp}] {self.text}"
