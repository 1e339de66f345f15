import os
import logging
from dotenv import load_dotenv
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings
from typing import ClassVar, List, Optional

# Load environment variables from .env file
load_dotenv(".env", override=False)
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the Daily Planner application."""

    # ------------------------------
    # Database - Optional (store is unavailable without it)
    # ------------------------------
    DATABASE_URL: Optional[str] = Field(default=None, env="DATABASE_URL")
    DB_ECHO: bool = Field(default=False, env="DB_ECHO")

    # ------------------------------
    # Auth - Required
    # ------------------------------
    SECRET_KEY: str = Field(default="dev-secret-key", env="SECRET_KEY")
    ALGORITHM: str = Field(default="HS256", env="ALGORITHM")
    ACCESS_TOKEN_EXPIRE_HOURS: int = Field(default=8, env="ACCESS_TOKEN_EXPIRE_HOURS")
    SESSION_SECRET_KEY: str = Field(default="dev-session-secret", env="SESSION_SECRET_KEY")
    COOKIE_NAME: str = Field(default="app_session_id", env="COOKIE_NAME")

    # ------------------------------
    # OAuth (OpenID Connect identity provider)
    # ------------------------------
    OAUTH_CLIENT_ID: str = Field(default="", env="OAUTH_CLIENT_ID")
    OAUTH_CLIENT_SECRET: str = Field(default="", env="OAUTH_CLIENT_SECRET")
    OAUTH_SERVER_METADATA_URL: str = Field(default="", env="OAUTH_SERVER_METADATA_URL")
    OAUTH_SCOPE: str = Field(default="openid email profile", env="OAUTH_SCOPE")
    OAUTH_PROVIDER_NAME: str = Field(default="oidc", env="OAUTH_PROVIDER_NAME")
    OWNER_OPEN_ID: Optional[str] = Field(default=None, env="OWNER_OPEN_ID")

    # ------------------------------
    # URLs
    # ------------------------------
    FRONTEND_URL: str = Field(default="http://localhost:3000", env="FRONTEND_URL")
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        env="ALLOWED_ORIGINS",
    )

    # ------------------------------
    # Environment
    # ------------------------------
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    RATE_LIMIT: str = Field(default="60/minute", env="RATE_LIMIT")
    RATE_LIMIT_ENABLED: bool = Field(default=True, env="RATE_LIMIT_ENABLED")

    # ------------------------------
    # Notification sweep
    # ------------------------------
    NOTIFICATION_SWEEP_ENABLED: bool = Field(False, env="NOTIFICATION_SWEEP_ENABLED")
    NOTIFICATION_SWEEP_SECONDS: int = Field(60, env="NOTIFICATION_SWEEP_SECONDS")
    NOTIFICATION_TIMEZONE: str = Field("UTC", env="NOTIFICATION_TIMEZONE")

    # ------------------------------
    # Database models
    # ------------------------------
    DB_MODELS: ClassVar[List[str]] = [
        "planner.models.user",
        "planner.models.task",
        "planner.models.feedback",
        "planner.models.notifications",
    ]

    # ------------------------------
    # Computed Fields
    # ------------------------------
    @computed_field
    @property
    def COOKIE_DOMAIN(self) -> Optional[str]:
        """Computed field for cookie domain based on environment."""
        return os.getenv("COOKIE_DOMAIN") if self.ENVIRONMENT == "production" else None

    class Config:
        """Configuration for the settings class."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate the settings
settings = Settings()
