from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Group Chat"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = ["*"]

    WS_HEARTBEAT_SECONDS: float = 30

    MAX_NAME_LENGTH: int = 50
    MAX_LABEL_LENGTH: int = 50
    MAX_MESSAGE_LENGTH: int = 2000

    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
