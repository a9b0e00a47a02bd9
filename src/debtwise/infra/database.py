"""Database engine, schema and session helpers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Tuple

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""
    return create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())


def init_database(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register with SQLModel metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database schema ready", extra={"url": str(engine.url)})


def create_session_factory(engine: Engine) -> SessionFactory:
    """Return a factory producing transactional session scopes."""

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple[Engine, SessionFactory]:
    """Create engine, ensure schema, and return (engine, session_factory)."""

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)
