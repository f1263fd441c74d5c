"""Environment-driven settings."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[2]

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class Settings:
    # The auto-mpg CSV is not shipped; place it at data/auto-mpg.csv or point DATA_PATH at it.
    data_path: Path = Path(os.getenv("DATA_PATH", str(BASE_DIR / "data" / "auto-mpg.csv")))
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _env_int("PORT", 5000)
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    default_page_size: int = max(1, _env_int("DEFAULT_PAGE_SIZE", 50))
    cors_origins: list[str] = _env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)

    def as_flask_config(self) -> dict:
        return {
            "DATA_PATH": self.data_path,
            "DEFAULT_PAGE_SIZE": self.default_page_size,
            "CORS_ORIGINS": self.cors_origins,
        }


settings = Settings()
