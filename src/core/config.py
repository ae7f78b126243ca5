"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

The gateway API key is the only secret. It is read once at startup but is
not required at load time: a missing key is reported by the chat endpoint
as a server misconfiguration instead of preventing the app from booting.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


DEFAULT_GATEWAY_BASE_URL = "https://ai-gateway.vercel.sh/v1"
DEFAULT_MODEL = "openai/gpt-4o"
SEARCH_MODEL = "perplexity/sonar"
DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant that can answer questions and help with tasks"
)


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        ai_gateway_api_key: Secret for the AI gateway (None when unset)
        ai_gateway_base_url: OpenAI-compatible base URL of the gateway
        default_model: Model used when the request names none
        search_model: Search-capable model forced by webSearch=true
        system_prompt: System message prepended to every conversation
        request_timeout_seconds: httpx timeout applied to each network
            operation (connect, each read, write). It does not cap the total
            duration of a streamed reply, which may run longer as long as
            chunks keep arriving.
        enable_audit_logging: Whether the audit middleware is installed
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str

    # Gateway settings
    ai_gateway_api_key: Optional[str]
    ai_gateway_base_url: str
    default_model: str
    search_model: str
    system_prompt: str
    request_timeout_seconds: float

    # Safety settings
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def has_gateway_credentials(self) -> bool:
        """Check whether a gateway API key is configured."""
        return bool(self.ai_gateway_api_key)


def _get_env(key: str, default: str) -> str:
    """
    Get environment variable, falling back to a default.

    Args:
        key: Environment variable name
        default: Value used when the variable is not set

    Returns:
        Environment variable value
    """
    return os.environ.get(key, default)


def _get_secret(*keys: str) -> Optional[str]:
    """Return the first non-blank value among the given variables."""
    for key in keys:
        value = os.environ.get(key, "").strip()
        if value:
            return value
    return None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once at startup; call ``get_settings.cache_clear()``
    to force a re-read (tests do this after changing the environment).

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "GatewayChat"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "DEBUG"),

        # Gateway
        # NUXT_ prefixed name is accepted so an existing deployment env keeps working
        ai_gateway_api_key=_get_secret("AI_GATEWAY_API_KEY", "NUXT_AI_GATEWAY_API_KEY"),
        ai_gateway_base_url=_get_env("AI_GATEWAY_BASE_URL", DEFAULT_GATEWAY_BASE_URL),
        default_model=_get_env("DEFAULT_MODEL", DEFAULT_MODEL),
        search_model=_get_env("SEARCH_MODEL", SEARCH_MODEL),
        system_prompt=_get_env("SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT),
        request_timeout_seconds=float(_get_env("REQUEST_TIMEOUT_SECONDS", "30")),

        # Safety
        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
    )
