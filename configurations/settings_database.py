# configurations/settings_database.py
"""
Single source of truth for database configuration.
Manages environment-based database selection with clear rules:
- Development: SQLite (local file)
- Production: PostgreSQL (from environment)
- Testing: SQLite (in-memory)
DATABASE_URL, when set, wins over all of the above.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote_plus

from dotenv import load_dotenv

from configurations.settings_base import EnvironmentVariables, resolve_environment

logger = logging.getLogger(__name__)

# ***> Load environment variables from .env file <***
env_path = EnvironmentVariables.env_file_path
if env_path and Path(env_path).exists():
    load_dotenv(env_path)
    logger.info("Loaded environment from: %s", env_path)
else:
    logger.debug("Environment file not found: %s", env_path)

POSTGRES_DRIVER = "postgresql+psycopg2"


@dataclass
class DatabaseConfig:
    """
    Database configuration with environment-based selection.
    """

    database_url: str
    database_type: str  # ***> sqlite, postgresql <***
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30

    @classmethod
    def _build_sqlite_url(cls, environment: str) -> str:
        """
        Development uses a file under data/, testing uses memory.
        """
        if environment == "testing":
            return "sqlite:///:memory:"

        data_dir = Path(os.getenv("KSI_DATA_DIR", "data"))
        data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{data_dir / f'ksi_{environment}.db'}"

    @classmethod
    def _build_postgres_url(cls) -> str:
        """
        Build PostgreSQL URL from POSTGRES_* variables with proper encoding.

        Raises:
            ValueError: If POSTGRES_PASSWORD is missing
        """
        user = os.getenv("POSTGRES_USER", "ksi")
        password = os.getenv("POSTGRES_PASSWORD")
        host = os.getenv("POSTGRES_HOST", "localhost")
        port = os.getenv("POSTGRES_PORT", "5432")
        database = os.getenv("POSTGRES_DB", "ksi_match_data")

        if not password:
            raise ValueError(
                "POSTGRES_PASSWORD not found in environment. "
                "Please set it in .env file for production use."
            )

        url = (
            f"{POSTGRES_DRIVER}://{quote_plus(user)}:{quote_plus(password)}"
            f"@{host}:{port}/{database}"
        )
        logger.info(
            "PostgreSQL URL configured: %s://%s:***@%s:%s/%s",
            POSTGRES_DRIVER,
            user,
            host,
            port,
            database,
        )
        return url

    @classmethod
    def for_environment(cls, environment: str) -> "DatabaseConfig":
        """
        Create database configuration based on environment.

        Args:
            environment: 'development', 'testing', or 'production'

        Returns:
            DatabaseConfig with appropriate database type and settings
        """
        environment = resolve_environment(environment)

        override = os.getenv("DATABASE_URL")
        if override and environment != "testing":
            return cls.from_url(override)

        if environment == "production":
            return cls(
                database_url=cls._build_postgres_url(),
                database_type="postgresql",
                pool_size=10,
                max_overflow=20,
                pool_timeout=60,
            )
        if environment == "testing":
            return cls(
                database_url=cls._build_sqlite_url(environment),
                database_type="sqlite",
                pool_size=1,
            )
        return cls(
            database_url=cls._build_sqlite_url(environment),
            database_type="sqlite",
            pool_size=3,
        )

    @classmethod
    def development(cls) -> "DatabaseConfig":
        return cls.for_environment("development")

    @classmethod
    def testing(cls) -> "DatabaseConfig":
        return cls.for_environment("testing")

    @classmethod
    def production(cls) -> "DatabaseConfig":
        return cls.for_environment("production")

    @classmethod
    def from_url(cls, url: str) -> "DatabaseConfig":
        """
        Create config from custom URL.
        Determines database type from URL scheme.
        """
        if url.startswith("postgres://"):
            url = POSTGRES_DRIVER + url[len("postgres") :]
        elif url.startswith("postgresql://"):
            url = POSTGRES_DRIVER + url[len("postgresql") :]
        db_type = "postgresql" if url.startswith("postgresql") else "sqlite"
        return cls(database_url=url, database_type=db_type)

    def is_sqlite(self) -> bool:
        return self.database_type == "sqlite"

    def is_postgresql(self) -> bool:
        return self.database_type == "postgresql"

    def get_connection_info(self) -> dict:
        """
        Get safe connection information for logging.
        """
        info = {
            "database_type": self.database_type,
            "pool_size": self.pool_size,
            "echo": self.echo,
        }

        if self.is_postgresql():
            _, _, rest = self.database_url.partition("://")
            credentials, _, host_db = rest.rpartition("@")
            info.update({"user": credentials.split(":")[0], "host_db": host_db})
        else:
            info["database_file"] = self.database_url.split("/")[-1]

        return info
