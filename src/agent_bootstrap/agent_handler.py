from typing import Any

from agent_bootstrap.app.main import process


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entry point for the base agent."""
    try:
        result = process(event)
        assert isinstance(result, dict)
        return result
    except Exception as e:
        import traceback

        traceback.print_exc()
        raise Exception(f"Error in processing base agent: {e}") from e
