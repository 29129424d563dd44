"""Application configuration with structured settings groups."""
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_LOGO_PATH = Path(__file__).parent / "static" / "white-logo.png"


# =============================================================================
# Nested Settings Models
# =============================================================================


class SmtpSettings(BaseModel):
    """
    Outbound mail submission settings.

    use_ssl: Implicit TLS (SMTPS, usually port 465). When False, a plain
        connection is opened and upgraded only if starttls is set.
    verify_certificates: Disable only for servers with self-signed certificates.
    """

    host: str = "smtpout.secureserver.net"
    port: int = 465
    username: str | None = None
    password: str | None = None
    use_ssl: bool = True
    starttls: bool = False
    verify_certificates: bool = True
    timeout_seconds: float = 30.0


class NotificationSettings(BaseModel):
    """
    Confirmation email content and routing.

    sender_address: From header. Falls back to the SMTP username.
    operator_address: Copied on every confirmation. Falls back to the sender.
    """

    sender_address: str | None = None
    operator_address: str | None = None
    subject: str = "Charginality: We've received your quote request!"
    company_name: str = "Charginality"
    company_tagline: str = "Charging Today, Powering Tomorrow"
    company_address: str = "Kemp House, 160 City Road, London, United Kingdom, EC1V 2NX"
    logo_path: Path = DEFAULT_LOGO_PATH
    logo_cid: str = "logo"


class RateLimitSettings(BaseModel):
    """Per-client-IP request limit, in `limits` notation (e.g. "100 per 15 minutes")."""

    enabled: bool = True
    limit: str = "100 per 15 minutes"


class CorsSettings(BaseModel):
    """Cross-origin resource sharing policy."""

    allow_origins: list[str] = ["*"]
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]
    allow_credentials: bool = False


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Application settings with nested configuration groups.

    Environment variables use double underscore as delimiter for nested values.
    Example: SMTP__USERNAME=quotes@example.com, RATE_LIMIT__LIMIT="10 per minute"

    DATABASE_URL has no default: the application refuses to start without a store.
    """

    # Application metadata
    app_name: str = "Quote Request API"
    app_version: str = "1.0.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    # Database
    database_url: str

    # Nested settings groups
    smtp: SmtpSettings = SmtpSettings()
    notification: NotificationSettings = NotificationSettings()
    rate_limit: RateLimitSettings = RateLimitSettings()
    cors: CorsSettings = CorsSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL is not defined in the environment variables")
        return v.strip()

    @property
    def sender_address(self) -> str | None:
        """Address used in the From header of confirmations."""
        return self.notification.sender_address or self.smtp.username

    @property
    def operator_address(self) -> str | None:
        """Address copied on every confirmation."""
        return self.notification.operator_address or self.sender_address


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
