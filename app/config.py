"""Configuration management for the shortener relay bot.

Handles all application configuration including environment variables, the
optional YAML shortener profile, and default settings. Provides structured
configuration classes for different aspects of the application (bot,
shortener API, settings storage, album buffering).
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_RESULT_FIELDS = ["shortenedUrl", "shortened", "short"]


class ShortenerConfig(BaseSettings):
    """PowerURLShortener API parameters.

    Attributes:
        api_url: Endpoint used for both shortening and userinfo queries.
        timeout: Per-request timeout in seconds.
        result_fields: Response keys holding the short link, in priority order.
        powered_by: Suffix always appended after the user's footer.
    """
    api_url: str = Field(
        default="https://powerurlshortener.link/api", validation_alias="SHORTENER_API_URL"
    )
    timeout: float = Field(default=10.0, validation_alias="SHORTENER_TIMEOUT")
    result_fields: list[str] = Field(default_factory=lambda: list(DEFAULT_RESULT_FIELDS))
    powered_by: str = "✅ Powered by PowerURLShortener.link"


class StorageConfig(BaseSettings):
    """Per-chat settings persistence.

    Attributes:
        db_path: Path to the JSON settings file.
    """
    db_path: str = Field(default="data/database.json", validation_alias="DATABASE_PATH")


class AlbumConfig(BaseSettings):
    """Media group buffering configuration.

    Attributes:
        debounce_seconds: Wait after the first fragment before flushing.
    """
    debounce_seconds: float = Field(default=0.5, validation_alias="ALBUM_DEBOUNCE_SECONDS")


class BotConfig(BaseSettings):
    """Main Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        port: Server port for webhook mode.
        listen_host: Interface the webhook server binds to.
        railway_domain: Railway public domain for webhooks.
        railway_url: Railway URL for webhooks (fallback).
        log_level: Root logging level name.
    """
    bot_token: str = Field(default="", validation_alias="BOT_TOKEN")
    port: int = Field(default=8080, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    railway_domain: str | None = Field(default=None, validation_alias="RAILWAY_PUBLIC_DOMAIN")
    railway_url: str | None = Field(default=None, validation_alias="RAILWAY_URL")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def webhook_domain(self) -> str | None:
        """Get webhook domain for Railway deployment.

        Returns:
            Domain string if available, None for polling mode.
        """
        return self.railway_domain or self.railway_url

    @property
    def use_webhook(self) -> bool:
        """Determine if webhook mode should be used.

        Returns:
            True if webhook domain is configured, False for polling mode.
        """
        return bool(self.webhook_domain)


class Config:
    """Application configuration manager.

    Centralizes loading and management of all configuration sources including
    environment variables, YAML files, and default values. Provides typed
    access to configuration sections for different application components.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to app/config.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)

        self.bot = BotConfig()
        self.storage = StorageConfig()
        self.album = AlbumConfig()
        self.shortener = self._load_shortener_config()

    def _load_shortener_config(self) -> ShortenerConfig:
        """Load shortener profile from YAML, environment taking precedence.

        Returns:
            ShortenerConfig populated from shortener.yml when present.
        """
        shortener_path = self.config_dir / "shortener.yml"
        if not shortener_path.exists():
            return ShortenerConfig()

        with open(shortener_path) as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        defaults = ShortenerConfig()
        overrides: dict[str, Any] = {}
        # Fields set from the environment win over the file
        explicit = defaults.model_fields_set
        if "api_url" in data and "api_url" not in explicit:
            overrides["api_url"] = data["api_url"]
        if "timeout" in data and "timeout" not in explicit:
            overrides["timeout"] = float(data["timeout"])
        if data.get("result_fields"):
            overrides["result_fields"] = list(data["result_fields"])
        if data.get("powered_by"):
            overrides["powered_by"] = data["powered_by"]

        return defaults.model_copy(update=overrides)


# Global configuration instance
config = Config()
