from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "json"
    DATA_DIR: str = "./data"
    BOOKINGS_FILE: str = "bookings.json"
    BOOKING_SERIALIZE_WRITES: bool = False

    MAX_BODY_BYTES: int = 1_000_000
    STATIC_DIR: str | None = None

    @property
    def bookings_path(self) -> Path:
        return Path(self.DATA_DIR) / self.BOOKINGS_FILE


settings = Settings()
