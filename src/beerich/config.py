"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Loads and validates application settings from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    BOT_TOKEN: str = "YOUR_TELEGRAM_BOT_TOKEN"
    ATTACHMENTS_DIR: str = "uploads"
    CLEANUP_INTERVAL_MINUTES: int = 15
    CLEANUP_MAX_ATTEMPTS: int = 5


settings = Settings()
