"""Generic CRUD service for user-owned records.

Subclasses name the table, the read model and the entity label used in
not-found messages, and hook into saves and deletes where a record type
has extra rules.

Example usage:
    >>> class QuoteService(RecordService[Quote, QuoteRead]):
    ...     entity = "Quote"
    ...     row_type = Quote
    ...     read_type = QuoteRead
    ...
    >>> quotes = QuoteService(db, bus)
    >>> result = quotes.create(UserContext(user_id=1), QuoteCreate(text="Keep going"))
"""

import logging
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlmodel import Session, SQLModel

from lifedash.application.context import UserContext
from lifedash.application.events import EventBus
from lifedash.domain.shared import DomainError, Err, Ok, Result, not_found
from lifedash.infrastructure.storage import Database, OwnedRepository
from lifedash.models import PatchModel

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=SQLModel)
ReadT = TypeVar("ReadT", bound=BaseModel)


class RecordService(Generic[RowT, ReadT]):
    """List, get, create, update and delete one kind of record."""

    entity: ClassVar[str] = "Record"
    row_type: ClassVar[type[Any]]
    read_type: ClassVar[type[Any]]

    def __init__(self, db: Database, bus: EventBus) -> None:
        self.db = db
        self.bus = bus

    # --- hooks ---------------------------------------------------------------

    def _before_save(self, session: Session, ctx: UserContext, row: RowT) -> Result[None, DomainError]:
        """Validate or adjust a row before it is written. Must not write on Err."""
        return Ok(None)

    def _before_delete(self, session: Session, row: RowT) -> None:
        """Remove rows that depend on ``row``."""

    # --- helpers -------------------------------------------------------------

    def _repo(self, session: Session) -> OwnedRepository[RowT]:
        return OwnedRepository(session, self.row_type)

    def _to_read(self, row: RowT) -> ReadT:
        return self.read_type.model_validate(row)

    def _missing(self) -> Err[DomainError]:
        return Err(not_found(self.entity))

    # --- operations ----------------------------------------------------------

    def list(self, ctx: UserContext) -> list[ReadT]:
        """All records of the caller."""
        with self.db.session() as session:
            return [self._to_read(row) for row in self._repo(session).list(ctx.user_id)]

    def get(self, ctx: UserContext, record_id: int) -> Result[ReadT, DomainError]:
        with self.db.session() as session:
            row = self._repo(session).get(ctx.user_id, record_id)
            if row is None:
                return self._missing()
            return Ok(self._to_read(row))

    def create(self, ctx: UserContext, data: BaseModel) -> Result[ReadT, DomainError]:
        """Insert a record owned by the caller.

        Args:
            ctx: Caller context; sets the owner.
            data: Validated ``*Create`` model.

        Returns:
            Ok(read model) or Err when a record rule rejects it.
        """
        with self.db.unit_of_work() as session:
            row = self.row_type(user_id=ctx.user_id, **data.model_dump())
            checked = self._before_save(session, ctx, row)
            if isinstance(checked, Err):
                return checked
            self._repo(session).add(row)
            logger.debug("Created %s %s for user %s", self.entity, row.id, ctx.user_id)
            return Ok(self._to_read(row))

    def update(
        self,
        ctx: UserContext,
        record_id: int,
        changes: PatchModel,
    ) -> Result[ReadT, DomainError]:
        """Apply the fields the caller sent; other fields keep their values."""
        with self.db.unit_of_work() as session:
            repo = self._repo(session)
            row = repo.get(ctx.user_id, record_id)
            if row is None:
                return self._missing()
            values = changes.changes()
            previous = {name: getattr(row, name) for name in values}
            for name, value in values.items():
                setattr(row, name, value)
            checked = self._before_save(session, ctx, row)
            if isinstance(checked, Err):
                for name, value in previous.items():
                    setattr(row, name, value)
                return checked
            session.add(row)
            session.flush()
            return Ok(self._to_read(row))

    def delete(self, ctx: UserContext, record_id: int) -> Result[None, DomainError]:
        with self.db.unit_of_work() as session:
            repo = self._repo(session)
            row = repo.get(ctx.user_id, record_id)
            if row is None:
                return self._missing()
            self._before_delete(session, row)
            repo.delete(row)
            logger.debug("Deleted %s %s for user %s", self.entity, record_id, ctx.user_id)
            return Ok(None)
