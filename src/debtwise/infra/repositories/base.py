"""Ownership-scoped repository base.

Every query for user-owned rows is built by ``owned_query``; concrete
repositories never filter by ``user_id`` on their own. A row owned by another
user is indistinguishable from a missing one.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from sqlmodel import Session, SQLModel, select
from sqlmodel.sql.expression import SelectOfScalar

from ...logging_config import get_logger
from ..database import SessionFactory

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def owned_query(model: type[ModelT], *, user_id: int) -> SelectOfScalar[ModelT]:
    """SELECT restricted to rows owned by ``user_id``."""
    return select(model).where(model.user_id == user_id)  # type: ignore[attr-defined]


def fetch_owned(
    session: Session, model: type[ModelT], entity_id: int, *, user_id: int
) -> Optional[ModelT]:
    """Return the row if it exists and belongs to ``user_id``."""
    statement = owned_query(model, user_id=user_id).where(
        model.id == entity_id  # type: ignore[attr-defined]
    )
    return session.exec(statement).first()


class OwnedRepository(Generic[ModelT]):
    """CRUD helpers for tables carrying a ``user_id`` column."""

    model: type[ModelT]
    mutable_fields: frozenset[str] = frozenset()

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, entity_id: int, *, user_id: int) -> Optional[ModelT]:
        with self.session_factory() as session:
            row = fetch_owned(session, self.model, entity_id, user_id=user_id)
            if row is not None:
                session.expunge(row)
            return row

    def list_all(self, *, user_id: int) -> list[ModelT]:
        with self.session_factory() as session:
            statement = owned_query(self.model, user_id=user_id).order_by(
                self.model.id  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def _insert(self, row: ModelT, *, user_id: int) -> ModelT:
        with self.session_factory() as session:
            row.user_id = user_id  # type: ignore[attr-defined]
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            logger.info(
                "Created %s",
                self.model.__tablename__,
                extra={"entity_id": row.id, "user_id": user_id},  # type: ignore[attr-defined]
            )
            return row

    def update(self, entity_id: int, *, user_id: int, **changes: Any) -> Optional[ModelT]:
        """Apply ``changes`` to an owned row; ``None`` when not found."""

        unknown = set(changes) - self.mutable_fields
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        with self.session_factory() as session:
            row = fetch_owned(session, self.model, entity_id, user_id=user_id)
            if row is None:
                return None
            for field, value in changes.items():
                setattr(row, field, value)
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row

    def delete(self, entity_id: int, *, user_id: int) -> bool:
        """Delete an owned row; ``False`` when not found."""

        with self.session_factory() as session:
            row = fetch_owned(session, self.model, entity_id, user_id=user_id)
            if row is None:
                return False
            self._before_delete(session, row, user_id=user_id)
            session.delete(row)
            session.commit()
            logger.info(
                "Deleted %s",
                self.model.__tablename__,
                extra={"entity_id": entity_id, "user_id": user_id},
            )
            return True

    def _before_delete(self, session: Session, row: ModelT, *, user_id: int) -> None:
        """Hook for cascading deletes."""
