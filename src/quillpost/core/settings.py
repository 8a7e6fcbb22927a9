"""Application settings and configuration.

This module defines all configuration options for the Quillpost application.
Settings are loaded from environment variables with sensible defaults and are
validated once at startup; they are not meant to be mutated at runtime.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SECRET_KEY_BYTES = 32
MIN_HASH_ROUNDS = 12
MAX_HASH_ROUNDS = 31


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or an ``.env`` file.
    A signing key shorter than 32 bytes or an out-of-range hash cost is a hard
    configuration error and aborts startup.
    """

    # Application metadata
    app_name: str = Field(default="Quillpost", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Token signing
    jwt_secret: str = Field(
        default="aVerySecureSecretKeyForJWTTokenGenerationThatShouldBeChangedInProduction",
        alias="JWT_SECRET",
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_validity_ms: int = Field(default=86_400_000, gt=0, alias="JWT_VALIDITY_MS")

    # Password hashing (bcrypt cost factor)
    password_hash_rounds: int = Field(default=12, alias="PASSWORD_HASH_ROUNDS")

    # Database configuration
    database_url: str = Field(default="sqlite:///./quillpost.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        frozen=True,
        extra="ignore",
    )

    @field_validator("jwt_secret")
    @classmethod
    def _check_secret_length(cls, value: str) -> str:
        if len(value.encode("utf-8")) < MIN_SECRET_KEY_BYTES:
            raise ValueError(
                f"JWT_SECRET must be at least {MIN_SECRET_KEY_BYTES} bytes long"
            )
        return value

    @field_validator("password_hash_rounds")
    @classmethod
    def _check_hash_rounds(cls, value: int) -> int:
        if not MIN_HASH_ROUNDS <= value <= MAX_HASH_ROUNDS:
            raise ValueError(
                f"PASSWORD_HASH_ROUNDS must be between {MIN_HASH_ROUNDS} and {MAX_HASH_ROUNDS}"
            )
        return value

    @property
    def database_url_sync(self) -> str:
        """Return the database URL with any async driver suffix removed.

        Alembic and the migrate script run synchronously; an ``+asyncpg`` or
        ``+aiosqlite`` URL falls back to the dialect's default driver.
        """
        url = self.database_url
        for async_driver in ("+asyncpg", "+aiosqlite"):
            url = url.replace(async_driver, "", 1)
        return url


settings = Settings()
