"""Application settings and configuration.

This module defines all configuration options for the Ayoma application.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Ayoma", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    # Cost 10 keeps a hash around 100ms on commodity hardware
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # JSON datastore and uploaded media
    data_dir: Path = Field(default=Path("./db"), alias="DATA_DIR")
    upload_dir: Path = Field(default=Path("./uploads"), alias="UPLOAD_DIR")
    upload_url_prefix: str = Field(default="/uploads", alias="UPLOAD_URL_PREFIX")

    # Defaults applied to newly registered users
    default_profile_pic: str = Field(default="/img/profile.jpg", alias="DEFAULT_PROFILE_PIC")
    default_bio: str = Field(default="Welcome to Ayoma!", alias="DEFAULT_BIO")

    seed_demo_data: bool = Field(default=False, alias="SEED_DEMO_DATA")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]
