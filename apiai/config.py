"""
Configuration management with three-tier precedence system:
1. Default values from codebase
2. Environment variables from .env
3. Explicit values passed by the embedding application

Precedence: Explicit values > Environment Variables > Defaults

The resolved values are frozen into an AIConfiguration, which is handed to
AIDataService once at setup and outlives all requests.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

SUPPORTED_LANGUAGES = (
    "en",
    "ru",
    "de",
    "pt",
    "pt-BR",
    "es",
    "fr",
    "it",
    "ja",
    "ko",
    "zh-CN",
    "zh-HK",
    "zh-TW",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigManager:
    """Resolves configuration values with three-tier precedence."""

    # Default values (Tier 1 - Codebase defaults)
    DEFAULTS = {
        "APIAI_API_KEY": "",
        "APIAI_SUBSCRIPTION_KEY": "",
        "APIAI_LANGUAGE": "en",
        "APIAI_SERVICE_URL": "https://api.api.ai/v1/",
        "APIAI_PROTOCOL_VERSION": "20150910",
        "APIAI_WRITE_SOUND_LOG": "false",
        "APIAI_SOUND_LOG_DIR": "sound_logs",
        "APIAI_TIMEZONE": "",
        "APIAI_TIMEOUT": "",
        "APIAI_LOG_LEVEL": "WARNING",
    }

    @staticmethod
    def get(key: str, override: Optional[Any] = None) -> Any:
        """
        Get configuration value with three-tier precedence.

        Args:
            key: Configuration key
            override: Explicit value (highest priority)

        Returns:
            Configuration value from highest priority source
        """
        value, _ = ConfigManager.get_with_source(key, override)
        return value

    @staticmethod
    def get_with_source(key: str, override: Optional[Any] = None) -> tuple[Any, str]:
        """
        Get configuration value and its source.

        Returns:
            Tuple of (value, source) where source is 'explicit', 'env', or 'default'
        """
        if override is not None and override != "":
            return override, "explicit"

        env_value = os.getenv(key)
        if env_value is not None and env_value != "":
            return env_value, "env"

        return ConfigManager.DEFAULTS.get(key, ""), "default"

    @staticmethod
    def get_bool(key: str, override: Optional[bool] = None) -> bool:
        """Get a flag; strings such as "1", "true" or "yes" count as set."""
        value = ConfigManager.get(key, override)
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE_VALUES

    @staticmethod
    def is_using_default(key: str, override: Optional[Any] = None) -> bool:
        """Check if configuration is using default value."""
        _, source = ConfigManager.get_with_source(key, override)
        return source == "default"


@dataclass(frozen=True)
class AIConfiguration:
    """Read-only connection settings for the query service."""

    api_key: str
    subscription_key: str
    language: str = "en"
    service_url: str = ConfigManager.DEFAULTS["APIAI_SERVICE_URL"]
    protocol_version: Optional[str] = ConfigManager.DEFAULTS["APIAI_PROTOCOL_VERSION"]
    write_sound_log: bool = False
    sound_log_dir: str = ConfigManager.DEFAULTS["APIAI_SOUND_LOG_DIR"]
    timezone: Optional[str] = None
    timeout: Optional[float] = None

    def __post_init__(self):
        if self.language not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language '{self.language}'. Expected one of: {', '.join(SUPPORTED_LANGUAGES)}"
            )
        if not self.service_url:
            raise ValueError("service_url must not be empty")

    @property
    def question_url(self) -> str:
        """Endpoint that receives both text and voice queries."""
        base = self.service_url if self.service_url.endswith("/") else self.service_url + "/"
        if self.protocol_version:
            return f"{base}query?v={self.protocol_version}"
        return f"{base}query"

    @classmethod
    def from_env(cls, **overrides: Any) -> "AIConfiguration":
        """
        Build a configuration from explicit values, the environment and defaults.

        Args:
            **overrides: Any AIConfiguration field; takes precedence over APIAI_* variables

        Returns:
            Frozen AIConfiguration
        """
        timeout = ConfigManager.get("APIAI_TIMEOUT", overrides.get("timeout"))
        return cls(
            api_key=ConfigManager.get("APIAI_API_KEY", overrides.get("api_key")),
            subscription_key=ConfigManager.get("APIAI_SUBSCRIPTION_KEY", overrides.get("subscription_key")),
            language=ConfigManager.get("APIAI_LANGUAGE", overrides.get("language")),
            service_url=ConfigManager.get("APIAI_SERVICE_URL", overrides.get("service_url")),
            protocol_version=ConfigManager.get("APIAI_PROTOCOL_VERSION", overrides.get("protocol_version")) or None,
            write_sound_log=ConfigManager.get_bool("APIAI_WRITE_SOUND_LOG", overrides.get("write_sound_log")),
            sound_log_dir=ConfigManager.get("APIAI_SOUND_LOG_DIR", overrides.get("sound_log_dir")),
            timezone=ConfigManager.get("APIAI_TIMEZONE", overrides.get("timezone")) or None,
            timeout=float(timeout) if timeout not in (None, "") else None,
        )


def configure_logging(level: Optional[str] = None) -> None:
    """Set the package log level from the argument or APIAI_LOG_LEVEL."""
    log_level = str(ConfigManager.get("APIAI_LOG_LEVEL", level)).upper()
    logging.getLogger("apiai").setLevel(getattr(logging, log_level, logging.WARNING))
