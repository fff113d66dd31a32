"""Core classes for DB connections"""

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Optional, cast

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from components.core import config

Base = declarative_base()
SessionMaker = Callable[[], ContextManager[Session]]


class DatabaseManager:
    def __init__(self, engine: Optional[Engine] = None, url: Optional[str] = None) -> None:
        """Initialize DatabaseManager with optional engine for testing."""
        self.engine = engine or self._create_engine(url or config.get_settings().sync_db_url)
        Base.metadata.create_all(self.engine)

    def _create_engine(self, url: str) -> Engine:
        """Create engine, sharing one connection when the database lives in memory."""
        if url.startswith("sqlite"):
            return create_engine(
                url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(url, echo=False, pool_pre_ping=True)

    def get_session(self) -> SessionMaker:
        """Returns SessionMaker for database sessions."""
        if not self.engine:
            raise ValueError("Database engine wasn't initialized")

        return cast(
            SessionMaker,
            sessionmaker(
                self.engine,
                class_=Session,
                expire_on_commit=False,
                autoflush=False,
            ),
        )

    @contextmanager
    def get_db(self) -> Iterator[Session]:
        """Get database session context manager."""
        session_factory = self.get_session()
        session = session_factory()
        try:
            yield session
        finally:
            session.close()
