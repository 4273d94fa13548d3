import logging

from agent_bootstrap.infrastructure.data_models import Completion


def log_completion(completion: Completion, logger: logging.Logger) -> None:
    logger.info(f"Completion created by model: {completion.model or 'Unknown'}")
    logger.info(f"Usage: {completion.usage or 'Unknown'}")
    logger.info(f"Finish reason: {completion.finish_reason or 'Unknown'}")
    logger.debug(f"Message: {completion.message.to_dict()}")
