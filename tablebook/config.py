"""
Application configuration using Pydantic Settings
"""

from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Slot model
    slot_granularity_minutes: int = 30
    default_dining_minutes: int = 120
    default_opening_time: str = "11:00"
    default_closing_time: str = "23:00"

    # Redis / Celery
    redis_url: str = "redis://localhost:6379/0"

    # Twilio (waitlist notifications)
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""

    # Payments
    payment_provider: str = "simulated"
    payment_declined_methods: str = "declined_card"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    cors_origins: str = "http://localhost:3000"

    # Demo data
    seed_demo_data: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def payment_declined_methods_list(self) -> List[str]:
        return [m.strip() for m in self.payment_declined_methods.split(",") if m.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
