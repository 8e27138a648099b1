"""Application settings and configuration.

This module defines all configuration options for the Lions Bible API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or an ``.env`` file.
    """

    # Application metadata
    app_name: str = Field(default="Lions Bible", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Identity provider token verification
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_audience: str | None = Field(default=None, alias="JWT_AUDIENCE")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./lions_bible.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Moderation policy: report counts at which content is auto-hidden
    interpretation_hide_threshold: int = Field(
        default=10,
        ge=1,
        alias="INTERPRETATION_HIDE_THRESHOLD",
    )
    reply_hide_threshold: int = Field(default=5, ge=1, alias="REPLY_HIDE_THRESHOLD")

    # Content submission rules (whitespace-separated words)
    interpretation_min_words: int = Field(default=12, ge=1, alias="INTERPRETATION_MIN_WORDS")
    flag_explanation_max_words: int = Field(
        default=20,
        ge=1,
        alias="FLAG_EXPLANATION_MAX_WORDS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for Alembic.

        Converts asyncpg URLs to psycopg for synchronous tooling.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def moderation_thresholds(self) -> dict[str, int]:
        """Return the auto-hide thresholds keyed by subject kind."""
        return {
            "interpretation": self.interpretation_hide_threshold,
            "reply": self.reply_hide_threshold,
        }


settings = Settings()  # type: ignore[call-arg]
