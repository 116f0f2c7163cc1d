# app/core/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Service account json used by firebase_admin
    FIREBASE_CREDENTIALS: str = "app/core/firebase_key.json"

    # File that backs the local (permission-denied) fallback store
    LOCAL_STORE_PATH: str = ".healthtrackr/local_storage.json"

    # Artificial latency of the mock wearable providers, in seconds
    WEARABLE_FETCH_DELAY: float = 0.6

    # Report mail transport
    GMAIL_SMTP_USER: str = ""
    GMAIL_SMTP_PASS: str = ""
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465

    # Logging
    LOG_LEVEL: str = "INFO"
    AI_DEBUG_MODE: bool = False

    # If you want to read from a .env file, keep this:
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
