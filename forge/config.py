"""Process configuration loaded once at startup."""

import os
from dataclasses import dataclass

from forge import __version__


DEFAULT_APP_ID = "forge-app"
DEFAULT_DATABASE_URL = "sqlite:///./forge.db"
DEFAULT_PORT = 3001


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Service settings shared read-only by all request handlers."""

    app_id: str = DEFAULT_APP_ID
    database_url: str = DEFAULT_DATABASE_URL
    port: int = DEFAULT_PORT
    enable_diagnostics: bool = False
    auto_migrate: bool = True
    log_level: str = "INFO"
    sql_echo: bool = False
    version: str = __version__

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            app_id=os.getenv("FORGE_APP_ID", DEFAULT_APP_ID),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            enable_diagnostics=_env_flag("FORGE_ENABLE_DIAGNOSTICS"),
            auto_migrate=_env_flag("AUTO_MIGRATE", default=True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            sql_echo=_env_flag("SQL_ECHO"),
        )

    @property
    def profile_path(self) -> str:
        """Document path template where merchant profiles live."""
        return f"/artifacts/{self.app_id}/users/{{uid}}"
