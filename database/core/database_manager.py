# database/core/database_manager.py
"""
Core database management and connection handling
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError,
)
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from configurations.settings_database import DatabaseConfig
# ***> imported for its side effect: every table lands on Base.metadata <***
import database.schemas  # noqa: F401
from database.base import Base
from exceptions import (
    DatabaseConfigurationError,
    DatabaseConnectionError,
    DatabaseOperationError,
)

SUPPORTED_SCHEMES = ("sqlite", "postgresql")


class DatabaseManager:
    """
    Core database connection and session management
    Handles: engine creation, sessions, table creation
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        config: Optional[DatabaseConfig] = None,
    ):
        """
        Initialize database manager with connection parameters

        Args:
            database_url: Database connection URL
            echo: Whether to echo SQL statements (for debugging)
            config: Pool settings for PostgreSQL; defaults apply when omitted

        Raises:
            DatabaseConfigurationError: If database URL is invalid or unsupported
            DatabaseConnectionError: If connection cannot be established
        """
        if not database_url or not isinstance(database_url, str):
            raise DatabaseConfigurationError("Database URL must be a non-empty string")
        if not database_url.startswith(SUPPORTED_SCHEMES):
            raise DatabaseConfigurationError(
                f"Unsupported database type in URL: {database_url.split(':', 1)[0]}"
            )

        self.database_url = database_url
        self.echo = echo
        self.config = config
        self.engine = None
        self.SessionLocal = None
        self.db_type = "sqlite" if database_url.startswith("sqlite") else "postgresql"

        self._initialize_database()

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "DatabaseManager":
        return cls(database_url=config.database_url, echo=config.echo, config=config)

    @property
    def is_memory(self) -> bool:
        return self.db_type == "sqlite" and ":memory:" in self.database_url

    def _initialize_database(self) -> None:
        """
        Create the engine, check connectivity, build the session factory

        Raises:
            DatabaseConnectionError: If database connection fails
        """
        try:
            if self.db_type == "sqlite":
                self.engine = self._create_sqlite_engine()
            else:
                self.engine = self._create_postgresql_engine()

            # ***> Test connection <***
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            self.SessionLocal = sessionmaker(
                autocommit=False, autoflush=False, bind=self.engine
            )

        except OperationalError as error:
            raise DatabaseConnectionError(f"Failed to connect to database: {error}") from error
        except SQLAlchemyError as error:
            raise DatabaseConnectionError(f"Database configuration error: {error}") from error

    def _create_sqlite_engine(self):
        """
        SQLite engine; an in-memory database lives on one shared connection
        """
        if self.is_memory:
            engine = create_engine(
                self.database_url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self._ensure_sqlite_directory()
            engine = create_engine(
                self.database_url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                pool_pre_ping=True,
                pool_recycle=300,
            )

        # ***> Enable foreign key constraints for SQLite <***
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if not self.is_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.close()

        return engine

    def _create_postgresql_engine(self):
        config = self.config
        return create_engine(
            self.database_url,
            echo=self.echo,
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_size=config.pool_size if config else 5,
            max_overflow=config.max_overflow if config else 10,
            pool_timeout=config.pool_timeout if config else 30,
        )

    @contextmanager
    def get_session(self):
        """
        Context manager for database sessions with automatic commit/rollback

        Yields:
            Session: SQLAlchemy session object

        Raises:
            DatabaseConnectionError: If the connection is lost
            DatabaseOperationError: If a statement inside the session fails
        """
        if not self.SessionLocal:
            raise DatabaseConnectionError(
                "Database not initialized - SessionLocal is None"
            )

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except DisconnectionError as error:
            session.rollback()
            raise DatabaseConnectionError(
                f"Database connection lost: {error}"
            ) from error
        except IntegrityError as error:
            session.rollback()
            raise DatabaseOperationError(
                f"Data integrity violation: {error.orig}"
            ) from error
        except TimeoutError as error:
            session.rollback()
            raise DatabaseOperationError(
                f"Database operation timeout: {error}"
            ) from error
        except SQLAlchemyError as error:
            session.rollback()
            raise DatabaseOperationError(f"Database session error: {error}") from error
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """
        Create all tables defined in the schemas

        Raises:
            DatabaseOperationError: If table creation fails
        """
        try:
            Base.metadata.create_all(bind=self.engine)
        except OperationalError as error:
            raise DatabaseConnectionError(
                f"Database connection lost during table creation: {error}"
            ) from error
        except SQLAlchemyError as error:
            raise DatabaseOperationError(f"Failed to create tables: {error}") from error

    def _ensure_sqlite_directory(self) -> None:
        db_path = self.database_url.replace("sqlite:///", "")
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    def get_connection_info(self) -> Dict[str, Any]:
        """
        Connection details for the run log, without credentials
        """
        safe_url = self.database_url
        if "@" in safe_url:
            safe_url = safe_url.split("@")[-1]

        return {
            "database_type": self.db_type,
            "database_url": safe_url,
            "engine_echo": self.echo,
            "pool_class": self.engine.pool.__class__.__name__ if self.engine else "N/A",
        }

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
