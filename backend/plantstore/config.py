import os
import tempfile
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./plantstore.db"
    DB_TIMEOUT_SECONDS: int = 20
    LOCK_TIMEOUT_SECONDS: int = 10
    LOCKS_DIR: str = os.path.join(tempfile.gettempdir(), "plantstore_locks")
    RESET_DB: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 5000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    MAX_ITEM_QUANTITY: int = Field(999, ge=1, le=2**31 - 1)
    WISHLIST_NOTES_MAX_LENGTH: int = Field(500, ge=1, le=500)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


settings = Settings()
