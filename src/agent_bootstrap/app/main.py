import json
from typing import Any

from agent_bootstrap.app.config import get_settings
from agent_bootstrap.app.errors import ServiceFailure
from agent_bootstrap.app.logging import log_completion
from agent_bootstrap.infrastructure.data_models import Message, Role
from agent_bootstrap.infrastructure.openai_gpt_manager import GPTService
from agent_bootstrap.infrastructure.platform_manager import create_logger

DEFAULT_MESSAGE = "Hello, GPT!"

logger = create_logger(logger_name="agent-bootstrap")

_gpt_service: GPTService | None = None


def get_gpt_service() -> GPTService:
    """Build the service once per Lambda container."""
    global _gpt_service
    if _gpt_service is None:
        _gpt_service = GPTService.from_settings()
    return _gpt_service


def create_response(
    status_code: int, body: str, content_type: str = "application/json"
) -> dict[str, Any]:
    """
    Create a standard HTTP response.

    Args:
        status_code (int): HTTP status code.
        body (str): Response body.
        content_type (str, optional): Content-Type header. Defaults to "application/json".

    Returns:
        dict: Standardized response dictionary.
    """
    return {
        "statusCode": status_code,
        "body": body,
        "headers": {"Content-Type": content_type},
        "isBase64Encoded": False,
    }


def extract_user_message(event: dict[str, Any]) -> str:
    """
    Read the user message from the API Gateway event body.

    A missing body or a body without "message" falls back to DEFAULT_MESSAGE.

    Raises:
        ValueError: If the body is not a JSON object or "message" is not a non-empty string
    """
    body = event.get("body")
    if body is None or body == "":
        return DEFAULT_MESSAGE

    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as e:
            raise ValueError(f"Body is not valid JSON: {e}") from e

    if not isinstance(body, dict):
        raise ValueError("Body must be a JSON object")

    message = body.get("message", DEFAULT_MESSAGE)
    if not isinstance(message, str) or not message.strip():
        raise ValueError("Field 'message' must be a non-empty string")
    return message


def process(event: dict[str, Any]) -> dict[str, Any]:
    """Process the incoming HTTP Gateway event."""
    settings = get_settings()
    logger.info(f"region 👉 {settings.region}")
    logger.info(f"availability zones 👉 {settings.availability_zones}")

    try:
        user_message = extract_user_message(event)
    except ValueError as e:
        logger.error(e)
        return create_response(status_code=400, body=json.dumps({"message": str(e)}))

    try:
        completion = get_gpt_service().send_prompt([Message(role=Role.USER, content=user_message)])
    except ServiceFailure as e:
        logger.error(f"LLM error ({e.kind.value}): {e}")
        return create_response(status_code=500, body=json.dumps({"message": str(e)}))

    log_completion(completion, logger)

    return create_response(
        status_code=200,
        body=json.dumps({"message": "SUCCESS 🎉", "response": completion.to_dict()}),
    )
