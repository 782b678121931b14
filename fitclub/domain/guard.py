"""At-most-one-open-instance-per-user guard.

Used for gym check-ins (open while ``checked_out_at`` is null) and workout
sessions (open while ``status == 'in_progress'``). Each guarded table carries a
partial unique index over ``user_id`` restricted to the open predicate, so the
insert itself is the arbiter when two requests race past the pre-check.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fitclub.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class ActiveInstanceGuard:
    def __init__(
        self,
        model,
        open_clause: Callable[[], Any],
        label: str,
        conflict_message: str,
    ) -> None:
        self.model = model
        self._open_clause = open_clause
        self.label = label
        self.conflict_message = conflict_message

    @property
    def open_clause(self):
        return self._open_clause()

    def find_open(self, session: Session, user_id: str):
        return (
            session.query(self.model)
            .filter(self.model.user_id == user_id, self.open_clause)
            .first()
        )

    def open(self, session: Session, user_id: str, **values):
        """Insert a new open instance for ``user_id`` and flush it.

        Raises ``ConflictError`` when one is already open, whether it was seen
        by the pre-check or only surfaced by the unique index.
        """
        if self.find_open(session, user_id) is not None:
            raise ConflictError(self.conflict_message)

        instance = self.model(user_id=user_id, **values)
        session.add(instance)
        try:
            session.flush()
        except IntegrityError as exc:
            session.rollback()
            logger.info(f"Concurrent open rejected for {self.model.__tablename__} user={user_id}")
            raise ConflictError(self.conflict_message) from exc
        return instance

    def load_open(self, session: Session, user_id: str, instance_id: Optional[str] = None):
        """Return the caller's open instance (a specific one if ``instance_id``)."""
        query = session.query(self.model).filter(self.model.user_id == user_id, self.open_clause)
        if instance_id is not None:
            query = query.filter(self.model.id == instance_id)
        instance = query.first()
        if instance is None:
            raise NotFoundError(self.label)
        return instance

    def close(self, session: Session, instance, values: Dict[str, Any]):
        """Apply ``values`` only if ``instance`` is still open.

        The open predicate is part of the UPDATE so two concurrent closes
        cannot both finalize the same row.
        """
        result = session.execute(
            update(self.model)
            .where(
                self.model.id == instance.id,
                self.model.user_id == instance.user_id,
                self.open_clause,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            session.rollback()
            raise NotFoundError(self.label)
        session.refresh(instance)
        return instance
