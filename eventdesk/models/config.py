"""Configuration models for the application."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class EventDeskConfig(BaseSettings):
    """Main configuration for the eventdesk service."""

    # HTTP Server configuration
    http_host: str = Field(default="0.0.0.0")
    http_port: int = Field(default=3000)
    api_prefix: str = Field(default="/api", description="Path prefix the event routes are mounted under")
    cors_origins: str = Field(default="*", description="Comma-separated list of allowed origins")
    log_level: str = Field(default="INFO")

    # Email integration
    sendgrid_api_key: str = Field(default="")
    sendgrid_timeout: float = Field(default=10.0, gt=0)
    sender_email: str = Field(default="verified-sender@yourdomain.com")
    admin_email: str = Field(default="admin@yourcompany.com")

    # Calendar integration
    calendar_sync_enabled: bool = Field(default=True)

    # Notification delivery
    notification_max_retries: int = Field(default=2, ge=0)
    notification_retry_delay: float = Field(default=0.5, ge=0)

    class Config:
        """Pydantic config."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def cors_origin_list(self) -> List[str]:
        """Split the configured CORS origins."""
        origins = [origin.strip() for origin in self.cors_origins.split(",")]
        return [origin for origin in origins if origin] or ["*"]

    def normalized_api_prefix(self) -> str:
        """Return the API prefix with a leading and no trailing slash."""
        prefix = self.api_prefix.strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = f"/{prefix}"
        return prefix
