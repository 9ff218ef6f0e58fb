import os
from typing import List

from dotenv import load_dotenv
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_TEMPLATE_PATH = os.path.join(BASE_DIR, "templates", "emails", "email-layout.html")

ENV_VARIABLES_ERROR = "Missing environment variables: GOOGLE_EMAIL, GOOGLE_PASS, TO_EMAILS"
TO_EMAILS_SEPARATOR = ","
REQUIRED_VARIABLES = ("GOOGLE_EMAIL", "GOOGLE_PASS", "TO_EMAILS")
# Level names uvicorn accepts
LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


class ConfigurationError(Exception):
    """Raised when the service cannot start with the given environment or assets."""


class Settings(BaseSettings):
    # Sender account (Gmail needs an app password)
    GOOGLE_EMAIL: str
    GOOGLE_PASS: str
    TO_EMAILS: str

    # Relay settings
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USE_TLS: bool = False
    SMTP_TIMEOUT: float = 60

    EMAIL_SUBJECT: str = "DEMO REQUEST"
    EMAIL_TEMPLATE_PATH: str = DEFAULT_TEMPLATE_PATH

    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8080
    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "info"

    DISPATCH_WORKERS: int = 4
    DISPATCH_QUEUE_SIZE: int = 100

    @field_validator("GOOGLE_EMAIL", "GOOGLE_PASS", "TO_EMAILS")
    def require_non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("TO_EMAILS")
    def require_recipient(cls, value: str) -> str:
        if not _split(value):
            raise ValueError("must contain at least one address")
        return value

    @field_validator("LOG_LEVEL")
    def require_known_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of: {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("DISPATCH_WORKERS", "DISPATCH_QUEUE_SIZE")
    def require_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @property
    def to_emails(self) -> List[str]:
        return _split(self.TO_EMAILS)

    @property
    def allowed_origins(self) -> List[str]:
        return _split(self.ALLOWED_ORIGINS)


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(TO_EMAILS_SEPARATOR) if item.strip()]


def load_settings() -> Settings:
    """
    Load settings from the process environment, after merging a local `.env` file.

    Raises:
        ConfigurationError: if a required variable is missing or invalid.
    """
    load_dotenv()
    try:
        return Settings()
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        prefix = ENV_VARIABLES_ERROR if set(fields) & set(REQUIRED_VARIABLES) else "Invalid configuration"
        raise ConfigurationError(f"{prefix} (invalid: {', '.join(fields)})") from e
