"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtWise"
    DB_FILENAME = "debtwise.db"
    CURRENCY_CODE = "PHP"
    DEFAULT_PROJECTION_HORIZON = 60
    DEFAULT_SESSION_TTL_MINUTES = 12 * 60

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("DEBTWISE_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("DEBTWISE_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("DEBTWISE_DATABASE_URL", self._build_sqlite_url())
        self.PROJECTION_HORIZON = _env_int(
            "DEBTWISE_PROJECTION_HORIZON", self.DEFAULT_PROJECTION_HORIZON
        )
        self.SESSION_TTL_MINUTES = _env_int(
            "DEBTWISE_SESSION_TTL_MINUTES", self.DEFAULT_SESSION_TTL_MINUTES
        )
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("DEBTWISE_SECRET_KEY must be set in non-dev mode.")
        if self.PROJECTION_HORIZON <= 0:
            raise ValueError("DEBTWISE_PROJECTION_HORIZON must be positive.")
        if self.SESSION_TTL_MINUTES <= 0:
            raise ValueError("DEBTWISE_SESSION_TTL_MINUTES must be positive.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        path = Path(os.getenv("DEBTWISE_DATA_DIR", "instance")).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration for the test-suite: in-memory database, no secrets."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        # A single shared connection keeps the in-memory schema alive across sessions.
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
