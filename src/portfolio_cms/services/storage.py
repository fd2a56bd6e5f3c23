"""Storage backends for uploaded images.

A backend stores bytes under a generated name and hands back a URL; that URL
is the only reference kept in the database. Deleting re-derives the storage
location from the URL.

Two implementations share the ``StorageBackend`` contract:
- ``LocalStorage`` writes under a base directory and returns ``/uploads/...`` URLs
- ``RemoteStorage`` (in ``object_storage``) talks to an object-storage bucket

``build_storage`` picks one from the settings at startup.
"""

from __future__ import annotations

import logging
import re
import uuid
from abc import ABC, abstractmethod
from collections.abc import Collection
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from portfolio_cms.errors import FileTooLarge, UnsupportedFileType, UploadError

if TYPE_CHECKING:
    from portfolio_cms.config import Settings

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass(frozen=True)
class StoredFile:
    """Result of an upload. ``url`` is what callers persist."""

    name: str
    folder: str
    url: str


def file_extension(filename: str | None) -> str:
    """Return the lower-cased extension of ``filename`` (with the dot), or ""."""
    if not filename:
        return ""
    suffix = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
    return suffix if _EXTENSION_RE.match(suffix) else ""


def normalize_folder(folder: str | None) -> str:
    return (folder or "").strip().strip("/")


def generate_object_name(original_name: str | None) -> str:
    """Return a collision-resistant name keeping only the original extension."""
    return f"{uuid.uuid4().hex}{file_extension(original_name)}"


def validate_file(
    size_bytes: int,
    extension: str,
    max_size_mb: int,
    allowed_extensions: Collection[str],
) -> None:
    """Check size and extension before anything is written.

    Raises:
        FileTooLarge: ``size_bytes`` exceeds ``max_size_mb`` megabytes.
        UnsupportedFileType: ``extension`` is not in ``allowed_extensions``
            (compared case-insensitively, with or without the leading dot).
    """
    if size_bytes > max_size_mb * 1024 * 1024:
        raise FileTooLarge(size_bytes, max_size_mb)

    allowed = {"." + ext.lower().lstrip(".") for ext in allowed_extensions}
    normalized = "." + extension.lower().lstrip(".") if extension else ""
    if normalized not in allowed:
        raise UnsupportedFileType(extension, allowed)


class StorageBackend(ABC):
    """Upload, delete and validate files on some storage medium."""

    @abstractmethod
    def upload(self, content: bytes, original_name: str | None, folder: str) -> StoredFile:
        """Store ``content`` under a generated name inside ``folder``."""

    @abstractmethod
    def delete(self, url: str) -> None:
        """Delete the object a previous ``upload`` returned ``url`` for."""

    def validate(
        self,
        size_bytes: int,
        extension: str,
        max_size_mb: int,
        allowed_extensions: Collection[str],
    ) -> None:
        validate_file(size_bytes, extension, max_size_mb, allowed_extensions)

    def close(self) -> None:
        """Release any resources held by the backend."""


class LocalStorage(StorageBackend):
    """Stores files on the local filesystem below ``base_dir``."""

    def __init__(self, base_dir: Path | str, url_prefix: str = "/uploads") -> None:
        self.base_dir = Path(base_dir).expanduser().resolve()
        self.url_prefix = "/" + url_prefix.strip("/")
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def upload(self, content: bytes, original_name: str | None, folder: str) -> StoredFile:
        folder = normalize_folder(folder)
        name = generate_object_name(original_name)
        target_dir = self.base_dir / folder if folder else self.base_dir
        target = target_dir / name

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            logger.error("Failed to write upload to %s: %s", target, exc)
            raise UploadError(f"Failed to store file: {exc.strerror or exc}") from exc

        relative = f"{folder}/{name}" if folder else name
        stored = StoredFile(name=name, folder=folder, url=f"{self.url_prefix}/{relative}")
        logger.info("Stored %d bytes at %s (url=%s)", len(content), target, stored.url)
        return stored

    def delete(self, url: str) -> None:
        path = self.path_for_url(url)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise UploadError(f"File not found: {url}") from exc
        except OSError as exc:
            raise UploadError(f"Failed to delete {url}: {exc.strerror or exc}") from exc
        logger.info("Deleted %s (url=%s)", path, url)

    def path_for_url(self, url: str) -> Path:
        """Map a URL produced by ``upload`` back to a path under ``base_dir``."""
        prefix = self.url_prefix + "/"
        if not url.startswith(prefix):
            raise UploadError(f"URL is not served from {self.url_prefix}: {url}")

        path = (self.base_dir / url[len(prefix) :]).resolve()
        if not path.is_relative_to(self.base_dir) or path == self.base_dir:
            raise UploadError(f"URL points outside the upload directory: {url}")
        return path


def build_storage(settings: Settings) -> StorageBackend:
    """Create the storage backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "remote":
        from portfolio_cms.services.object_storage import RemoteStorage

        logger.info(
            "Using remote object storage at %s (bucket=%s)",
            settings.object_storage_url,
            settings.object_storage_bucket,
        )
        return RemoteStorage(
            base_url=settings.object_storage_url or "",
            api_key=settings.object_storage_key or "",
            bucket=settings.object_storage_bucket,
            timeout=settings.storage_timeout,
        )

    logger.info("Using local storage in %s", settings.upload_dir)
    return LocalStorage(settings.upload_dir, settings.upload_url_prefix)
