"""
Database configuration and session management.

The store handle is an explicitly constructed ``Database`` object. The FastAPI
lifespan opens one at startup and disposes it at shutdown; tests build their
own against SQLite.
"""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("nutridesk.database")

# Create SQLAlchemy Base
Base = declarative_base()


class Database:
    """Engine plus session factory with an explicit open/close lifecycle."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: Engine = _build_engine(url, echo)
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False, future=True
        )

    def init_schema(self) -> None:
        """Create all tables that do not exist yet."""
        # Import models so every table is registered on Base.metadata
        import domain.models  # noqa: F401

        with self.engine.begin() as conn:
            Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")

    def drop_schema(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def get_session(self) -> Generator[Session, None, None]:
        """Yield a session that is always closed (for FastAPI dependency injection)"""
        db = self.session()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")


def _build_engine(url: str, echo: bool) -> Engine:
    if url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith("sqlite:")):
        # A single shared connection so every session sees the same in-memory DB
        return create_engine(
            url,
            echo=echo,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(
            url, echo=echo, future=True, connect_args={"check_same_thread": False}
        )
    return create_engine(url, echo=echo, future=True, pool_pre_ping=True)


def create_database(url: Optional[str] = None, echo: Optional[bool] = None) -> Database:
    """Build a Database from explicit arguments or the application settings."""
    from app.config import settings

    return Database(
        url or settings.database_url,
        echo=settings.db_echo if echo is None else echo,
    )
