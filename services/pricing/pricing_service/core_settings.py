from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    # PORT (set by the platform) wins over PRICING_PORT
    PORT: Optional[int] = None
    PRICING_PORT: int = 4003

    SERVICE_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "dev"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def listen_port(self) -> int:
        return self.PORT or self.PRICING_PORT

@lru_cache
def get_settings() -> Settings:
    return Settings()
