import os
from dataclasses import dataclass

from agent_bootstrap.app.errors import ConfigurationError
from agent_bootstrap.infrastructure.platform_manager import get_parameters

# Constants that don't change
DEFAULT_GPT_MODEL = "gpt-4o-mini"
PARAMETER_BASE_PATH = "/apps/prod/agent-bootstrap/"
SECRETS_BASE_PATH = "/apps/prod/agent-bootstrap/secrets/"


def get_env(key: str) -> str:
    """Return a required environment variable, failing fast if it is unset or empty."""
    value = os.getenv(key)
    if not value:
        raise ConfigurationError(f'Environment variable "{key}" is not defined')
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Return an environment variable, or `default` if it is unset or empty."""
    return os.getenv(key) or default


@dataclass(frozen=True)
class Settings:
    """Agent configuration settings loaded from the parameter store."""

    gpt_api_key: str
    gpt_model: str = DEFAULT_GPT_MODEL
    output_root: str = "."

    # Lambda environment, reported by the entrypoint only
    region: str | None = None
    availability_zones: str | None = None


class Config:
    """Singleton configuration manager for agent-bootstrap."""

    _instance = None
    _settings: Settings | None = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> Settings:
        """Get settings, loading from the parameter store if not already cached."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def reset(self) -> None:
        self._settings = None

    def _load_settings(self) -> Settings:
        """Load settings from the parameter store (environment variables when running locally)."""
        secrets = get_parameters(["gpt_api_key"], SECRETS_BASE_PATH, decrypt=True)
        params = get_parameters(
            ["gpt_model", "output_root"],
            PARAMETER_BASE_PATH,
        )

        settings = Settings(
            gpt_api_key=secrets["gpt_api_key"] or "",
            gpt_model=params["gpt_model"] or DEFAULT_GPT_MODEL,
            output_root=params["output_root"] or ".",
            region=get_optional_env("REGION"),
            availability_zones=get_optional_env("AVAILABILITY_ZONES"),
        )

        self._validate_settings(settings)

        return settings

    def _validate_settings(self, settings: Settings) -> None:
        """Validate that all required settings have valid values."""
        required_fields = ["gpt_api_key"]

        for field in required_fields:
            if not getattr(settings, field):
                raise ConfigurationError(f'Environment variable "{field.upper()}" is not defined')


# Create singleton instance
config = Config()


# Convenience functions
def get_settings() -> Settings:
    """Get settings from the singleton config."""
    return config.get_settings()


def reset_settings() -> None:
    """Forget cached settings so the next call reloads them."""
    config.reset()
