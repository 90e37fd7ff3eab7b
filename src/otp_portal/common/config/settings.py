# File: common/config/settings.py

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Calculate base directory for consistent file paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent.parent
ENV_PATH = BASE_DIR / ".env"


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    BASE_DIR: Path = Field(default=BASE_DIR, description="Base directory of the project")
    LOG_DIR: str = Field("", description="Directory for daily log files; empty disables file logging")

    # OTP
    OTP_VALIDITY_MINUTES: int = Field(10, ge=1, description="OTP validity window in minutes")
    OTP_STORE_BACKEND: Literal["memory", "redis"] = Field("memory", description="Where OTP codes are kept")
    OTP_CONSUME_ON_SUCCESS: bool = Field(False, description="Delete the OTP once it has been validated")

    # Redis
    REDIS_HOST: str = Field("localhost", description="Redis host")
    REDIS_PORT: int = Field(6379, description="Redis port")
    REDIS_DB: int = Field(0, description="Redis database number")
    REDIS_PASSWORD: str = Field("", description="Redis password")
    REDIS_KEY_PREFIX: str = Field("otp", description="Prefix for OTP keys")

    # SMTP
    SMTP_SERVER: str = Field("localhost", description="SMTP relay host")
    SMTP_PORT: int = Field(587, description="SMTP relay port")
    SMTP_USERNAME: str = Field("", description="SMTP login user")
    SMTP_PASSWORD: str = Field("", description="SMTP login password")
    SMTP_USE_TLS: bool = Field(True, description="Issue STARTTLS before sending")
    SMTP_TIMEOUT: float = Field(10.0, description="SMTP socket timeout in seconds")

    # OTP email
    OTP_SENDER_EMAIL: str = Field("no-reply@example.com", description="From address of OTP emails")
    OTP_EMAIL_SUBJECT: str = Field("Your one-time password", description="Subject of OTP emails")
    OTP_HTML_PRE_OTP: str = Field(
        "<p>Your one-time password is <strong>",
        description="HTML placed before the code"
    )
    OTP_HTML_POST_OTP: str = Field(
        "</strong>. It expires in 10 minutes.</p>",
        description="HTML placed after the code"
    )

    # Sentry
    SENTRY_DSN: str = Field("", description="Sentry DSN; empty disables Sentry")
    SENTRY_TRACES_SAMPLE_RATE: float = Field(0.0, description="Sentry traces sample rate")

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Singleton settings instance
settings = Settings()
