"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Office Hours Queue"
    app_env: str = "development"  # development, staging, production
    debug: bool = True
    log_level: str = "INFO"
    port: int = 3001

    # Key for the phone number fingerprint (HMAC). Changing it invalidates
    # duplicate detection for students already in line.
    fingerprint_key: str = "change-me-in-production"

    # JWT Authentication
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 12  # one office-hours day

    # Staff login
    staff_username: str = "ta"
    staff_password: Optional[str] = None  # Login disabled until set

    # Twilio WhatsApp
    twilio_account_sid: Optional[str] = None
    twilio_auth_token: Optional[str] = None
    twilio_whatsapp_number: str = "whatsapp:+14155238886"  # Twilio sandbox

    # Rooms
    room_code_alphabet: str = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no 0/O, 1/I
    room_code_length: int = 6
    default_room_code: str = "MAIN"
    default_room_name: str = "Office Hours"

    # Which front-of-line changes send a "you're next" message
    notify_on_serve: bool = True
    notify_on_remove: bool = True

    cors_origins: list[str] = [
        "http://localhost:3000",  # Local web dev
        "http://localhost:5173",  # Vite
    ]

    @property
    def delivery_configured(self) -> bool:
        return bool(self.twilio_account_sid and self.twilio_auth_token)

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
