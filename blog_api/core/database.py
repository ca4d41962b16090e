"""
Database configuration using SQLAlchemy
The pooled engine lives on an explicitly constructed Database handle that is
opened at startup, closed at shutdown and handed to repositories per request
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import declarative_base

from blog_api.config import Settings

logger = logging.getLogger(__name__)

# Base class for all table declarations
Base = declarative_base()


class Database:
    """Owns the connection pool for the lifetime of the process"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        """Create the pool, check connectivity and make sure tables exist"""
        if self._engine is not None:
            return

        # Each statement commits on its own; mutations here are single statements.
        # statement_timeout bounds every query server side.
        self._engine = create_engine(
            self.settings.DATABASE_URL,
            pool_size=self.settings.DB_POOL_SIZE,
            max_overflow=self.settings.DB_MAX_OVERFLOW,
            pool_timeout=self.settings.DB_POOL_TIMEOUT,
            pool_pre_ping=True,
            isolation_level="AUTOCOMMIT",
            connect_args={
                "options": f"-c statement_timeout={self.settings.DB_STATEMENT_TIMEOUT_MS}",
            },
        )

        logger.info("Testing database connection...")
        self.ping()
        logger.info("Database connection successful")

        logger.info("Creating database tables (if needed)...")
        Base.metadata.create_all(bind=self._engine)
        logger.info("Database tables ready")

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.info("Database connections closed")

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Borrow a pooled connection for the duration of one request"""
        with self.engine.connect() as conn:
            yield conn

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
