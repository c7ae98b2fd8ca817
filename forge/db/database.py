"""Database connection management."""

import os

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker


def get_database_url() -> str:
    """Get database URL from environment or use default SQLite."""
    return os.getenv("DATABASE_URL", "sqlite:///./forge.db")


def create_db_engine(database_url: str | None = None, echo: bool | None = None):
    """Create database engine with appropriate settings."""
    url = database_url or get_database_url()
    if echo is None:
        echo = os.getenv("SQL_ECHO", "").lower() == "true"

    # SQLite-specific settings
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    # PostgreSQL settings
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=echo,
    )


def init_db(database_url: str | None = None, echo: bool | None = None) -> tuple:
    """Initialize database with custom URL. Returns (engine, SessionLocal)."""
    db_engine = create_db_engine(database_url, echo=echo)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    return db_engine, session_factory


def ping(db: Session) -> bool:
    """Return True if the database answers a trivial query."""
    db.execute(text("SELECT 1"))
    return True
