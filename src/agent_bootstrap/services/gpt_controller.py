from collections.abc import Iterable, Mapping
from typing import Any

from agent_bootstrap.app.errors import ServiceFailure, ServiceFailureKind
from agent_bootstrap.infrastructure.data_models import Message
from agent_bootstrap.infrastructure.openai_gpt_manager import GPTService
from agent_bootstrap.infrastructure.platform_manager import create_logger

GENERATE_FAILURE_MESSAGE = "Failed to generate response"

logger = create_logger(logger_name="agent-bootstrap")


class GPTController:
    """Agent-facing seam over GPTService that turns every failure into one ServiceFailure."""

    def __init__(self, service: GPTService | None = None) -> None:
        self.gpt_service = service if service is not None else GPTService.from_settings()

    def generate_response(self, messages: Iterable[Message | Mapping[str, Any]]) -> Message:
        try:
            completion = self.gpt_service.send_prompt(messages)
            return completion.message
        except Exception as e:
            logger.error(f"Controller Error: {e}")
            raise ServiceFailure(
                GENERATE_FAILURE_MESSAGE, kind=ServiceFailureKind.GENERATION, cause=e
            ) from e
