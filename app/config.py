from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str | None = None  # e.g. sqlite+aiosqlite:///./lodging.db
    use_in_memory: bool = True
    log_level: str = "INFO"

    # A pending booking holds its room until it is confirmed or cancelled
    occupy_room_on_pending: bool = True

    notification_timeout_seconds: float = 5.0
    notification_retry_enabled: bool = True
    notification_max_attempts: int = 5
    notification_retry_base_seconds: float = 30.0
    # Background retry loop started with the app; POST /notifications/retry works either way
    notification_worker_enabled: bool = False
    notification_worker_poll_seconds: float = 5.0
    notification_webhook_url: str | None = None
    notification_webhook_timeout_seconds: float = 5.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
