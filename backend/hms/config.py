"""
Application configuration loaded from environment variables.

Supports switching between local PostgreSQL, cloud PostgreSQL and a
SQLite file via DATABASE_MODE. DATABASE_URL, when set, wins over all modes.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from backend directory
backend_dir = Path(__file__).parent.parent
load_dotenv(backend_dir / ".env")

logger = logging.getLogger("hms.config")


class Config:
    """Application configuration."""

    DEBUG = os.getenv("HMS_DEBUG", "0") == "1"
    DB_ECHO = os.getenv("DB_ECHO", "0") == "1"

    # Environment mode: "local", "cloud" or "sqlite"
    DATABASE_MODE = os.getenv("DATABASE_MODE", "local")

    # Explicit URL override (any SQLAlchemy URL)
    DATABASE_URL = os.getenv("DATABASE_URL", "")

    # PostgreSQL - Local
    POSTGRES_HOST_LOCAL = os.getenv("POSTGRES_HOST_LOCAL", "localhost")
    POSTGRES_PORT_LOCAL = os.getenv("POSTGRES_PORT_LOCAL", "5432")
    POSTGRES_DB_LOCAL = os.getenv("POSTGRES_DB_LOCAL", "hospital_management_system")
    POSTGRES_USER_LOCAL = os.getenv("POSTGRES_USER_LOCAL", "postgres")
    POSTGRES_PASSWORD_LOCAL = os.getenv("POSTGRES_PASSWORD_LOCAL", "")

    # PostgreSQL - Cloud
    POSTGRES_HOST_CLOUD = os.getenv("POSTGRES_HOST_CLOUD", "")
    POSTGRES_PORT_CLOUD = os.getenv("POSTGRES_PORT_CLOUD", "5432")
    POSTGRES_DB_CLOUD = os.getenv("POSTGRES_DB_CLOUD", "hospital_management_system")
    POSTGRES_USER_CLOUD = os.getenv("POSTGRES_USER_CLOUD", "postgres")
    POSTGRES_PASSWORD_CLOUD = os.getenv("POSTGRES_PASSWORD_CLOUD", "")

    # SQLite (development and tests)
    SQLITE_PATH = os.getenv("SQLITE_PATH", str(backend_dir / "hospital_dev.db"))

    @classmethod
    def get_database_url(cls) -> str:
        """Build the SQLAlchemy connection URL based on DATABASE_MODE."""
        if cls.DATABASE_URL:
            logger.info("Database: URL override")
            return cls.DATABASE_URL

        if cls.DATABASE_MODE == "sqlite":
            logger.info(f"Database: SQLITE ({cls.SQLITE_PATH})")
            return f"sqlite:///{cls.SQLITE_PATH}"

        if cls.DATABASE_MODE == "cloud":
            host = cls.POSTGRES_HOST_CLOUD
            port = cls.POSTGRES_PORT_CLOUD
            db = cls.POSTGRES_DB_CLOUD
            user = cls.POSTGRES_USER_CLOUD
            password = cls.POSTGRES_PASSWORD_CLOUD
            mode_label = "CLOUD"
        else:
            host = cls.POSTGRES_HOST_LOCAL
            port = cls.POSTGRES_PORT_LOCAL
            db = cls.POSTGRES_DB_LOCAL
            user = cls.POSTGRES_USER_LOCAL
            password = cls.POSTGRES_PASSWORD_LOCAL
            mode_label = "LOCAL"

        if password:
            url = f"postgresql+psycopg://{user}:{password}@{host}:{port}/{db}"
        else:
            url = f"postgresql+psycopg://{user}@{host}:{port}/{db}"

        logger.info(f"Database: PostgreSQL {mode_label} ({host})")
        return url


# Singleton instance
config = Config()
