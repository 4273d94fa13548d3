from enum import Enum
from pathlib import Path


class AgentBootstrapError(Exception):
    """Base class for errors raised by agent-bootstrap."""


class ConfigurationError(AgentBootstrapError):
    """A required configuration value (e.g. the API key) is missing."""


class ServiceFailureKind(str, Enum):
    TRANSPORT = "transport"
    REMOTE_STATUS = "remote_status"
    MALFORMED_RESPONSE = "malformed_response"
    GENERATION = "generation"


class ServiceFailure(AgentBootstrapError):
    """
    Any failure reaching or interpreting the remote model.

    The message is fixed per layer so callers get a stable failure. The underlying
    exception is kept in `cause` for logging and tests; it is not part of `str()`.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ServiceFailureKind,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.cause = cause


class IOFailure(AgentBootstrapError, OSError):
    """The sink could not write the target path."""

    def __init__(self, path: str | Path, cause: OSError | None = None) -> None:
        super().__init__(f"Failed to write file: {path}")
        self.path = Path(path)
        self.cause = cause
