"""Migration utilities for programmatic migration running."""

import os
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy.orm import Session


def get_alembic_config(database_url: str | None = None) -> Config:
    """Get Alembic config pointing to our migration setup."""
    ini_path = Path(__file__).parent / "alembic.ini"
    config = Config(str(ini_path))
    config.set_main_option("script_location", str(Path(__file__).parent / "alembic"))

    # Explicit URL wins over DATABASE_URL
    url = database_url or os.getenv("DATABASE_URL")
    if url:
        config.set_main_option("sqlalchemy.url", url)

    return config


def run_migrations(database_url: str | None = None) -> None:
    """Run all pending migrations."""
    config = get_alembic_config(database_url)
    config.attributes["configure_logger"] = False
    command.upgrade(config, "head")


def get_current_revision(database_url: str | None = None) -> str | None:
    """Get the current migration revision."""
    from sqlalchemy import create_engine

    config = get_alembic_config(database_url)
    url = config.get_main_option("sqlalchemy.url")

    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(url, connect_args=connect_args)
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            return context.get_current_revision()
    finally:
        engine.dispose()


def get_session_revision(db: Session) -> str | None:
    """Get the migration revision of the database a session is bound to."""
    context = MigrationContext.configure(db.connection())
    return context.get_current_revision()
