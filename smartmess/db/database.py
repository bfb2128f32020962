"""
Database engine and session management.

`Database` is the explicitly constructed persistence gateway: the
application opens it at startup, hands out one session per request and
closes it at shutdown.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from smartmess.config.settings import Settings
from smartmess.models import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine, its connection pool and the session factory."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.url = settings.DATABASE_URL
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"echo": self.settings.DB_ECHO, "future": True}

        if not self.is_sqlite:
            options.update(
                pool_pre_ping=True,
                pool_size=self.settings.DB_POOL_SIZE,
                max_overflow=self.settings.DB_POOL_OVERFLOW,
            )
            return options

        options["connect_args"] = {"check_same_thread": False}
        # An in-memory database lives inside one connection; share it
        if ":memory:" in self.url or self.url in ("sqlite://", "sqlite+pysqlite://"):
            options["poolclass"] = StaticPool
        return options

    def open(self) -> None:
        """Create the engine and session factory. Safe to call twice."""
        if self._engine is not None:
            return

        self._engine = create_engine(self.url, **self._engine_options())
        if self.is_sqlite:
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(
            bind=self._engine, autocommit=False, autoflush=False, expire_on_commit=False
        )
        logger.info(f"Database engine opened ({self._engine.dialect.name})")

    def close(self) -> None:
        """Drain and dispose of the connection pool."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine closed")

    def create_all(self) -> None:
        """
        Create all tables.

        Suitable for development and testing; production schemas are
        managed out of band.
        """
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ensured")

    def drop_all(self) -> None:
        """Drop all tables. Development and testing only."""
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("All database tables dropped")

    def new_session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Yield a session that is always closed afterwards.

        Usage:
            with database.session() as db:
                ...
        """
        db = self.new_session()
        try:
            yield db
        finally:
            db.close()
