"""Runtime configuration loaded from the environment.

Values are read from environment variables after ``load_dotenv()`` so a local
``.env`` file can provide them during development:

- DB_URL: SQLAlchemy database URL (defaults to a SQLite file at the project root)
- STORAGE_BACKEND: ``local`` or ``remote``
- UPLOAD_DIR / UPLOAD_URL_PREFIX: local storage location and URL mount point
- OBJECT_STORAGE_URL / OBJECT_STORAGE_KEY / OBJECT_STORAGE_BUCKET: remote bucket
- STORAGE_TIMEOUT: timeout in seconds for remote storage calls
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL

from portfolio_cms.errors import ConfigurationError

STORAGE_BACKENDS = ("local", "remote")

DEFAULT_BUCKET = "portfolio"
DEFAULT_URL_PREFIX = "/uploads"
DEFAULT_STORAGE_TIMEOUT = 10.0


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def get_database_url() -> str:
    """Return the database URL, allowing overrides via environment variable."""
    env_url = os.getenv("DB_URL")
    if env_url:
        return env_url

    db_path = _project_root() / "portfolio.db"
    return URL.create("sqlite", database=str(db_path)).render_as_string(hide_password=False)


@dataclass(frozen=True)
class Settings:
    """Application settings resolved once at startup."""

    database_url: str
    storage_backend: str = "local"
    upload_dir: Path = Path("uploads")
    upload_url_prefix: str = DEFAULT_URL_PREFIX
    object_storage_url: str | None = None
    object_storage_key: str | None = None
    object_storage_bucket: str = DEFAULT_BUCKET
    storage_timeout: float = DEFAULT_STORAGE_TIMEOUT

    @classmethod
    def from_env(cls) -> Settings:
        load_dotenv()

        upload_dir = os.getenv("UPLOAD_DIR")
        timeout = os.getenv("STORAGE_TIMEOUT")
        try:
            storage_timeout = float(timeout) if timeout else DEFAULT_STORAGE_TIMEOUT
        except ValueError as exc:
            raise ConfigurationError(f"STORAGE_TIMEOUT must be a number, got {timeout!r}") from exc

        settings = cls(
            database_url=get_database_url(),
            storage_backend=os.getenv("STORAGE_BACKEND", "local").strip().lower(),
            upload_dir=(
                Path(upload_dir).expanduser().resolve()
                if upload_dir
                else _project_root() / "uploads"
            ),
            upload_url_prefix=os.getenv("UPLOAD_URL_PREFIX", DEFAULT_URL_PREFIX),
            object_storage_url=os.getenv("OBJECT_STORAGE_URL") or None,
            object_storage_key=os.getenv("OBJECT_STORAGE_KEY") or None,
            object_storage_bucket=os.getenv("OBJECT_STORAGE_BUCKET", DEFAULT_BUCKET),
            storage_timeout=storage_timeout,
        )
        settings.check()
        return settings

    def check(self) -> None:
        """Raise ConfigurationError if the settings cannot produce a working app."""
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )
        if self.storage_backend == "remote" and not (
            self.object_storage_url and self.object_storage_key
        ):
            raise ConfigurationError(
                "OBJECT_STORAGE_URL and OBJECT_STORAGE_KEY are required for remote storage"
            )
        if self.storage_timeout <= 0:
            raise ConfigurationError("STORAGE_TIMEOUT must be positive")
