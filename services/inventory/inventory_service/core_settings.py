from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    PORT: int = 8080

    POSTGRES_HOST: str = "127.0.0.1"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "inventory"
    POSTGRES_USER: str = "inventory"
    POSTGRES_PASSWORD: str = "inventory"
    # Local socket directory (e.g. /cloudsql/<instance>); takes precedence over host:port
    INSTANCE_UNIX_SOCKET: Optional[str] = None
    # Full SQLAlchemy URL, overrides everything above
    DATABASE_URL: Optional[str] = None

    DB_POOL_MAX: int = 10
    DB_POOL_ACQUIRE_TIMEOUT: float = 30.0
    DB_POOL_IDLE: int = 10

    SERVICE_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "dev"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

@lru_cache
def get_settings() -> Settings:
    return Settings()
