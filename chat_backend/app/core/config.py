"""Application configuration settings"""

import os
from typing import List, Optional

from dotenv import load_dotenv

from .paths import get_default_db_path

load_dotenv()


def _build_database_url() -> Optional[str]:
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return url
    host = os.getenv("DB_HOST", "").strip()
    if not host:
        return None
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD", "postgres")
    name = os.getenv("DB_NAME", "chat")
    port = os.getenv("DB_PORT", "5432")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    # Database
    DATABASE_URL = _build_database_url()

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s",
    )

    # HTTP
    CORS_ORIGINS = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000",
        )
    )

    # Chat rules
    MAX_TITLE_LENGTH = 200
    MAX_TEXT_LENGTH = 5000
    DEFAULT_MESSAGE_LIMIT = 20
    MAX_MESSAGE_LIMIT = 100

    @classmethod
    def database_url(cls) -> str:
        """Configured URL, or a SQLite file in the app data directory."""
        if cls.DATABASE_URL:
            return cls.DATABASE_URL
        return f"sqlite:///{get_default_db_path()}"
