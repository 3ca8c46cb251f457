from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Studio Booking API"
    API_V1_STR: str = "/api/v1"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "studio_booking"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Booking times are location-local; aware instants are converted into this zone
    TIMEZONE: str = "Europe/Berlin"
    LOG_LEVEL: str = "INFO"

    ALLOW_PAST_BOOKINGS: bool = False
    MAX_DURATION_MINUTES: int = 480
    PRICE_PREVIEW_DURATIONS: List[int] = [15, 30, 60, 90, 120, 180, 240]

    DEFAULT_ROOM_COLOR: str = "#3B82F6"
    DEFAULT_PROVIDER_COLOR: str = "#10B981"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"


settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
