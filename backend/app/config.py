from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # "local" | "remote"; anything else falls back to local
    DB_MODE: Optional[str] = None
    DATABASE_URL_REMOTE: Optional[str] = None
    APP_HOST: str = "0.0.0.0"
    PORT: int = 3000
    SCHEMA_PATH: str = "prisma/schema.prisma"
    SCHEMA_LOCK_TIMEOUT_SECONDS: int = 10
    SHUTDOWN_GRACE_SECONDS: int = 10
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

settings = Settings()
