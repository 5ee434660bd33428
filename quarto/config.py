"""
Configuration - Environment-driven settings.

Variables:
    QUARTO_DATABASE_URL   SQLite database (falls back to DATABASE_URL)
    QUARTO_ENV            development / production
    QUARTO_LOG_LEVEL      Logging level name
    QUARTO_HOST           API bind host
    QUARTO_PORT           API bind port
    ALLOWED_ORIGINS       Comma-separated CORS origins
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os

DEFAULT_DATABASE_URL = "sqlite:///quarto.db"


def database_path(url: str) -> str:
    """Strip a sqlite:// or sqlite:/// prefix to get a filesystem path."""
    for prefix in ("sqlite:///", "sqlite://"):
        if url.startswith(prefix):
            return url[len(prefix):]
    return url


@dataclass
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    env: str = "development"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @property
    def database_path(self) -> str:
        return database_path(self.database_url)

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            database_url=os.getenv(
                "QUARTO_DATABASE_URL",
                os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            ),
            env=os.getenv("QUARTO_ENV", "development"),
            log_level=os.getenv("QUARTO_LOG_LEVEL", "INFO").upper(),
            host=os.getenv("QUARTO_HOST", "127.0.0.1"),
            port=int(os.getenv("QUARTO_PORT", "8000")),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings.from_env()
