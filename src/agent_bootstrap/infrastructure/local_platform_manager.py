import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


def _load_env_file() -> None:
    """
    Load a `.env` file into the process environment without overriding existing values.

    AGENT_ENV_FILE points at an explicit file; otherwise the nearest `.env` above the
    working directory is used, if any.
    """
    env_file = os.getenv("AGENT_ENV_FILE") or find_dotenv(usecwd=True)
    if not env_file or not Path(env_file).exists():
        return
    try:
        load_dotenv(env_file, encoding="utf-8", override=False)
    except UnicodeDecodeError:
        load_dotenv(env_file, encoding="latin-1", override=False)


_load_env_file()


def create_logger(
    log_level: str | None = None,
    logger_name: str = "agent-bootstrap",
    logs_dir: str | Path | None = None,
) -> logging.Logger:
    """
    Create a logger that outputs to console and optionally to a file.

    Args:
        log_level (str | None): Logging level (e.g., "INFO", "DEBUG"). Defaults to LOG_LEVEL
            or INFO.
        logger_name (str): Name for the logger instance.
        logs_dir (str | Path | None): Directory for log files. If None, AGENT_LOGS_DIR is used;
            when that is unset too, only console logging is configured.

    Returns:
        logging.Logger: Configured logger instance.
    """
    log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
    logs_dir = logs_dir or os.getenv("AGENT_LOGS_DIR")

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.DEBUG))
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    if not logger.hasHandlers():  # Prevent handler duplication
        # Console handler (stdio) - always add this
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if logs_dir:
            try:
                logs_path = Path(logs_dir)
                logs_path.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(logs_path / f"{logger_name}.log")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError as e:
                # If file logging fails, just continue with console logging
                logger.warning(f"File logging disabled: {e}")

    return logger


def get_parameters(
    param_names: list[str] | str,
    base_path: str,
    *,
    decrypt: bool = False,
    region_name: str | None = None,
) -> dict[str, str | None]:
    """
    Retrieve parameters from environment variables.
    THIS FUNCTION EXISTS AS A LOCAL STAND-IN FOR THE AWS PARAMETER STORE.

    Args:
        param_names (list[str] | str): Leaf names of the parameters to retrieve.
        base_path (str): Parameter Store path. Ignored locally.

    Returns:
        dict[str, str | None]: Lower-cased leaf name mapped to the value of the upper-cased
            environment variable, or None if it is not set.
    """
    if isinstance(param_names, str):
        param_names = [param_names]

    result = {}
    for param_name in param_names:
        # Parameters are stored in the environment variables in uppercase
        # But we want to store them in lowercase in the result dictionary
        param_name = param_name.upper()
        result[param_name.lower()] = os.getenv(param_name) or None
    return result
