from pathlib import Path

from agent_bootstrap.app.config import get_optional_env
from agent_bootstrap.app.errors import IOFailure
from agent_bootstrap.infrastructure.platform_manager import create_logger

logger = create_logger(logger_name="agent-bootstrap")


def write_to_file(content: str, path: str | Path, root: str | Path | None = None) -> Path:
    """
    Create or overwrite the file at `path` with `content`.

    Relative paths are resolved against `root`, which defaults to OUTPUT_ROOT or the
    working directory. Parent directories are not created.

    Returns:
        Path: The absolute path written

    Raises:
        IOFailure: If the file cannot be written
    """
    if root is None:
        root = get_optional_env("OUTPUT_ROOT", ".")
    full_path = (Path(root) / path).resolve()

    try:
        with open(full_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        logger.error(f"Failed to write {full_path}: {e}")
        raise IOFailure(full_path, e) from e

    logger.info(f"File written successfully to {full_path}")
    return full_path
