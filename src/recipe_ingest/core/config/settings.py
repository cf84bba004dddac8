"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (local, test, development, production)
- Environment variable loading for secrets
- Computed properties for derived values
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Ingest Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    admin_host: str = "0.0.0.0"  # noqa: S104
    admin_port: int = 3001


class ApiSettings(BaseModel):
    """API configuration settings."""

    prefix: str = ""


class RedisSettings(BaseModel):
    """Redis configuration settings."""

    host: str = "localhost"
    port: int = 6379
    user: str | None = None  # Redis ACL username (Redis 6.0+)
    queue_db: int = 1


class DatabaseSettings(BaseModel):
    """PostgreSQL database configuration settings."""

    host: str = "localhost"
    port: int = 5432
    name: str = "recipe_ingest"
    user: str | None = None
    min_pool_size: int = 1
    max_pool_size: int = 5
    command_timeout: float = 30.0
    ssl: bool = False


class RateLimitingSettings(BaseModel):
    """Rate limiting configuration."""

    ingest: str = "30/minute"
    storage_uri: str = "memory://"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


class AnthropicSettings(BaseModel):
    """Anthropic Messages API configuration."""

    url: str = "https://api.anthropic.com"
    model: str = "claude-3-5-haiku-latest"
    api_version: str = "2023-06-01"
    max_tokens: int = 2048
    timeout: float = 60.0
    max_retries: int = 2
    requests_per_minute: float = 50.0


class LLMSettings(BaseModel):
    """LLM configuration settings."""

    anthropic: AnthropicSettings = AnthropicSettings()


class ScrapingSettings(BaseModel):
    """Recipe page fetching configuration."""

    fetch_timeout: float = 10.0
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/124.0.0.0 Safari/537.36"
    )
    accept: str = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    accept_language: str = "en-US,en;q=0.9"


class ApifySettings(BaseModel):
    """Apify Instagram scraper actor configuration."""

    url: str = "https://api.apify.com/v2"
    actor_id: str = "nH2AHrwxeTRJoN5hX"
    results_limit: int = 1
    timeout: float = 120.0


class SocialSettings(BaseModel):
    """Social post fetching configuration."""

    platform_domain: str = "instagram.com"
    apify: ApifySettings = ApifySettings()


class MediaSettings(BaseModel):
    """Cover image download configuration."""

    download_timeout: float = 15.0


class RecipeListSettings(BaseModel):
    """List-service (AnyList) client configuration."""

    url: str = "https://www.anylist.com"
    timeout: float = 15.0


class NtfySettings(BaseModel):
    """ntfy push notification configuration."""

    enabled: bool = True
    url: str = "https://ntfy.sh"
    timeout: float = 10.0


class NotificationsSettings(BaseModel):
    """Notification sink configuration."""

    ntfy: NtfySettings = NtfySettings()


class ArqSettings(BaseModel):
    """ARQ background worker configuration."""

    queue_name: str = "ingest:queue:jobs"
    health_check_key: str = "ingest:queue:health-check"
    job_timeout: int = 300
    max_jobs: int = 10


# =============================================================================
# Main Settings Class
# =============================================================================


REQUIRED_SECRETS: tuple[str, ...] = (
    "API_TOKEN",
    "APIFY_TOKEN",
    "ANYLIST_EMAIL",
    "ANYLIST_PASSWORD",
    "ANTHROPIC_API_KEY",
    "NTFY_TOPIC",
)


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Environment variables
    2. .env file (secrets only)
    3. Environment-specific YAML files (config/environments/{APP_ENV}/)
    4. Base YAML files (config/base/)
    5. Default values in code

    Environment variables can override any setting using the nested delimiter '__'.
    For example: LLM__ANTHROPIC__MODEL=claude-3-5-sonnet-latest.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    redis: RedisSettings = RedisSettings()
    database: DatabaseSettings = DatabaseSettings()
    rate_limiting: RateLimitingSettings = RateLimitingSettings()
    logging: LoggingSettings = LoggingSettings()
    llm: LLMSettings = LLMSettings()
    scraping: ScrapingSettings = ScrapingSettings()
    social: SocialSettings = SocialSettings()
    media: MediaSettings = MediaSettings()
    recipe_list: RecipeListSettings = RecipeListSettings()
    notifications: NotificationsSettings = NotificationsSettings()
    arq: ArqSettings = ArqSettings()

    # =========================================================================
    # Secrets (from .env only - never in YAML)
    # =========================================================================
    API_TOKEN: str = ""
    APIFY_TOKEN: str = ""
    ANYLIST_EMAIL: str = ""
    ANYLIST_PASSWORD: str = ""
    ANTHROPIC_API_KEY: str = ""
    NTFY_TOPIC: str = ""
    REDIS_PASSWORD: str = ""
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings loading order.

        Priority (highest to lowest):
        1. init_settings - Values passed to Settings()
        2. env_settings - Environment variables
        3. dotenv_settings - .env file (secrets)
        4. yaml_settings - YAML files (base + environment)
        5. file_secret_settings - Docker secrets
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    def missing_secrets(self) -> list[str]:
        """Names of required secrets that are not set."""
        return [name for name in REQUIRED_SECRETS if not getattr(self, name)]

    def ensure_secrets(self) -> None:
        """Refuse to run without the credentials every job needs.

        Raises:
            RuntimeError: If a required secret is missing outside tests.
        """
        missing = self.missing_secrets()
        if missing and not self.is_testing:
            msg = f"Missing required environment variables: {', '.join(missing)}"
            raise RuntimeError(msg)

    @property
    def database_url(self) -> str:
        """Build PostgreSQL connection URL (without password)."""
        auth_part = f"{self.database.user}@" if self.database.user else ""
        return (
            f"postgresql://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Using lru_cache ensures settings are only loaded once,
    improving performance and consistency.
    """
    return Settings()
