# app/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment (Docker Compose passes the
    # root .env through), so no env_file is configured here.
    model_config = SettingsConfigDict(extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Production URLs (for inside Docker) ---
    DATABASE_URL_PROD: str = "postgresql://booking:booking@db:5432/booking_db"
    REDIS_URL_PROD: str = ""

    # --- Local Development URLs (for running locally) ---
    DATABASE_URL_LOCAL: str = "sqlite:///./booking.db"
    REDIS_URL_LOCAL: str = ""

    # Admin authentication
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"

    # Availability engine
    SLOT_CACHE_TTL_SECONDS: int = 15
    MAX_DATE_RANGE_DAYS: int = 93

    # Booking notifications are published here for the mail worker
    NOTIFICATION_CHANNEL: str = "platform.bookings.notifications.v1"

    # slowapi limit string for the public booking endpoint
    BOOKING_RATE_LIMIT: str = "30/minute"

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # --- Dynamic Properties ---
    # These properties return the correct URL based on the ENV
    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )

    @property
    def REDIS_URL(self) -> str:
        return self.REDIS_URL_LOCAL if self.ENV == "local" else self.REDIS_URL_PROD


# Create a single instance of the settings
settings = Settings()
