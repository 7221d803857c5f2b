"""
Database Connection Management.

This module owns the SQLAlchemy engine for the bookstore database.
It provides:
- Engine creation from DATABASE_URL (SQLite by default)
- Session management with commit/rollback
- Health checks
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from snippets.core.config import get_settings
from snippets.core.logging_config import get_logger

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _redact(db_url: str) -> str:
    return db_url.split("@")[-1] if "@" in db_url else db_url


class DatabaseConnection:
    """
    Manages database connections and session lifecycle.

    Example:
        >>> db = DatabaseConnection("sqlite:///bookstore.db")
        >>> with db.get_session() as session:
        ...     result = session.execute(text("SELECT 1"))
    """

    def __init__(self, connection_url: Optional[str] = None):
        """
        Initialize database engine.

        Args:
            connection_url: Optional connection URL. If not provided, uses settings.
        """
        self.url = connection_url or get_settings().database_url
        self.engine = self._create_engine(self.url)

        # Session factory - creates new sessions
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
        )

        logger.info(f"Database connection initialized: {_redact(self.url)}")

    @staticmethod
    def _create_engine(db_url: str) -> Engine:
        if db_url.startswith("sqlite"):
            # Sessions may be used from FastAPI's threadpool
            engine = create_engine(
                db_url,
                connect_args={"check_same_thread": False},
                echo=False,
            )
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
            return engine

        # pool_pre_ping: Test connections before using (handles stale connections)
        return create_engine(
            db_url,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            echo=False,
        )

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session with automatic cleanup.

        Usage:
            with db.get_session() as session:
                result = session.execute(text("SELECT * FROM Books"))

        Transactions are rolled back on error, committed on success.

        Yields:
            SQLAlchemy Session object
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error, rolling back: {e}")
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection is healthy, False otherwise.
        """
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
            logger.debug("Database connection check: OK")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def close(self) -> None:
        """Close all connections in the pool."""
        self.engine.dispose()
        logger.info("Database connections closed")


# Module-level instance (singleton pattern)
_db_connection: Optional[DatabaseConnection] = None


def get_database() -> DatabaseConnection:
    """
    Get or create the database connection instance.

    This lazy initialization prevents connection before app startup.
    """
    global _db_connection
    if _db_connection is None:
        _db_connection = DatabaseConnection()
    return _db_connection


def close_database() -> None:
    """Dispose the shared connection, if one was created."""
    global _db_connection
    if _db_connection is not None:
        _db_connection.close()
        _db_connection = None
