from collections.abc import Iterable, Mapping
from typing import Any

import openai
from openai import OpenAI

from agent_bootstrap.app.config import DEFAULT_GPT_MODEL, Settings, get_settings
from agent_bootstrap.app.errors import ConfigurationError, ServiceFailure, ServiceFailureKind
from agent_bootstrap.infrastructure.data_models import (
    Completion,
    Message,
    Usage,
    build_prompt_request,
)
from agent_bootstrap.infrastructure.platform_manager import create_logger

SERVICE_FAILURE_MESSAGE = "Failed to communicate with GPT API"

logger = create_logger(logger_name="agent-bootstrap")


class MalformedResponseError(ValueError):
    """The API answered, but not with a usable chat completion."""


def _as_dict(response: Any) -> dict[str, Any]:
    """Normalise an SDK response object (pydantic model) or a plain dict into a dict."""
    if isinstance(response, Mapping):
        return dict(response)
    model_dump = getattr(response, "model_dump", None)
    if callable(model_dump):
        dumped = model_dump()
        if isinstance(dumped, dict):
            return dumped
    raise MalformedResponseError(f"Unexpected response type: {type(response).__name__}")


def _parse_usage(raw: Any) -> Usage | None:
    if not isinstance(raw, Mapping):
        return None
    return Usage(
        prompt_tokens=raw.get("prompt_tokens"),
        completion_tokens=raw.get("completion_tokens"),
        total_tokens=raw.get("total_tokens"),
    )


def parse_completion(response: Any) -> Completion:
    """
    Reduce a chat completion response to its first choice.

    Args:
        response: The SDK `ChatCompletion` or its JSON form
            ({"choices": [{"message": {"role": ..., "content": ...}}], ...})

    Returns:
        Completion with the first choice's message and the response metadata

    Raises:
        MalformedResponseError: If there is no first choice or its message is invalid
    """
    data = _as_dict(response)

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MalformedResponseError("Response contains no choices")

    first = choices[0]
    if not isinstance(first, Mapping) or not isinstance(first.get("message"), Mapping):
        raise MalformedResponseError("First choice has no message")

    try:
        message = Message.from_dict(first["message"])
    except ValueError as e:
        raise MalformedResponseError(f"Invalid message in first choice: {e}") from e

    return Completion(
        message=message,
        model=data.get("model"),
        usage=_parse_usage(data.get("usage")),
        finish_reason=first.get("finish_reason"),
    )


def _failure_kind(error: Exception) -> ServiceFailureKind:
    if isinstance(error, MalformedResponseError | openai.APIResponseValidationError):
        return ServiceFailureKind.MALFORMED_RESPONSE
    if isinstance(error, openai.APIStatusError):
        return ServiceFailureKind.REMOTE_STATUS
    return ServiceFailureKind.TRANSPORT


class GPTService:
    """
    The only component that talks to the OpenAI Chat Completions endpoint.

    One synchronous, non-streamed request per prompt. The SDK client is built with
    retries disabled; no timeout is set beyond the SDK default.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_GPT_MODEL,
        client: Any | None = None,
    ) -> None:
        """
        Initialize the GPT service.

        Args:
            api_key: The OpenAI API key
            model: The chat model to use (e.g., 'gpt-4o-mini')
            client: Pre-built client exposing `chat.completions.create`; built from
                `api_key` when omitted

        Raises:
            ConfigurationError: If the API key is missing
        """
        if not api_key:
            raise ConfigurationError('Environment variable "GPT_API_KEY" is not defined')

        self.model = model
        self.client = client if client is not None else OpenAI(api_key=api_key, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "GPTService":
        settings = settings or get_settings()
        return cls(api_key=settings.gpt_api_key, model=settings.gpt_model)

    def send_prompt(self, messages: Iterable[Message | Mapping[str, Any]]) -> Completion:
        """
        Send an ordered prompt to the model and return the first completion choice.

        Args:
            messages: The conversation, in order

        Returns:
            Completion for the first choice, with model id, usage and finish reason

        Raises:
            ValueError: If the prompt is empty or contains a malformed message
            ServiceFailure: If the call fails or the response cannot be interpreted
        """
        request = build_prompt_request(messages)

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[m.to_dict() for m in request],
            )
            completion = parse_completion(response)
        except Exception as e:
            detail = getattr(e, "body", None) or str(e)
            logger.error(f"GPT API Error: {detail}")
            raise ServiceFailure(
                SERVICE_FAILURE_MESSAGE, kind=_failure_kind(e), cause=e
            ) from e

        logger.debug(f"GPT response: {completion.message.to_dict()}")
        return completion
