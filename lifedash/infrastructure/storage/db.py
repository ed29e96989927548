"""Database engine and session management."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Ensure SQLModel metadata is populated
from lifedash.infrastructure.storage import tables  # noqa: F401

logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and hands out sessions.

    For SQLite, foreign keys are switched on for every connection so that
    ``ON DELETE CASCADE`` applies. An in-memory URL keeps a single shared
    connection, otherwise each session would see an empty database.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        kwargs: dict = {"echo": echo}
        if _is_sqlite(url):
            kwargs["connect_args"] = {"check_same_thread": False}
            if _is_memory(url):
                kwargs["poolclass"] = StaticPool
            else:
                self._ensure_parent_dir(url)
        self.engine: Engine = create_engine(url, **kwargs)
        if _is_sqlite(url):
            event.listen(self.engine, "connect", _enable_foreign_keys)

    @staticmethod
    def _ensure_parent_dir(url: str) -> None:
        path = url.split("///", 1)[-1]
        if path and not path.startswith(":"):
            Path(path).parent.mkdir(parents=True, exist_ok=True)

    def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        SQLModel.metadata.create_all(self.engine)
        logger.debug("Schema ready on %s", self.engine.url.render_as_string(hide_password=True))

    def session(self) -> Session:
        """A plain session for read-only work; the caller closes it."""
        return Session(self.engine, expire_on_commit=False)

    @contextmanager
    def unit_of_work(self) -> Iterator[Session]:
        """Session committed on success and rolled back on any exception.

        Example:
            >>> with db.unit_of_work() as session:
            ...     session.add(Habit(user_id=1, title="Read"))
        """
        with Session(self.engine, expire_on_commit=False) as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    def dispose(self) -> None:
        self.engine.dispose()
