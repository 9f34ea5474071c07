# collab/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    PROJECT_NAME: str = "Collab Sync"
    PROJECT_VERSION: str = "1.0.0"
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REALTIME_CHANNEL_PREFIX: str = "realtime"
    REALTIME_POLL_TIMEOUT: float = 1.0
    FILE_URL_BASE: str = "https://example.com/files/"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="allow")
