"""Engine and session ownership for the record tables."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storage.schemas import Base

logger = logging.getLogger("crud.storage")

MEMORY_URL = "sqlite://"


def database_url(target: str | Path) -> str:
    """Turn a filesystem path into a SQLite url; pass urls through."""
    if isinstance(target, Path):
        return f"sqlite+pysqlite:///{target}"
    return target


class SQLStore:
    """Owns the engine for one database and hands out transactional sessions.

    ``target`` is either a SQLAlchemy url or a filesystem path to a SQLite
    file. The schema is created once, when the store is opened.
    """

    def __init__(self, target: str | Path = MEMORY_URL) -> None:
        if isinstance(target, Path):
            target.parent.mkdir(parents=True, exist_ok=True)
        self.url = make_url(database_url(target))
        self.engine = self._engine()
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        Base.metadata.create_all(self.engine)
        logger.debug("Opened record database %s", self.url.render_as_string(hide_password=True))

    @property
    def in_memory(self) -> bool:
        return self.url.get_backend_name() == "sqlite" and self.url.database in (None, "", ":memory:")

    def _engine(self) -> Engine:
        # An in-memory SQLite database lives on its connection, so every
        # session has to share the same one.
        if self.in_memory:
            return create_engine(
                self.url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_engine(self.url)

    @contextmanager
    def session(self) -> Iterator[Session]:
        sess = self._session_factory()
        try:
            yield sess
            sess.commit()
        except Exception:
            sess.rollback()
            raise
        finally:
            sess.close()
