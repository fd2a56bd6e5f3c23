"""Upload handling shared by services whose entities carry a stored file.

The storage backend and the database are two separate systems with no shared
transaction. These helpers keep them consistent on a best-effort basis:

- create: upload, persist; if persisting fails, delete the new upload
- update: upload the replacement, persist; delete the previous file only once
  the new row is committed, otherwise delete the replacement instead
- delete: remove the row, then the file; a failed file delete is only logged
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from dataclasses import dataclass
from typing import TypeVar

from portfolio_cms.errors import MissingFile, UploadError
from portfolio_cms.services.storage import StorageBackend, file_extension

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class UploadedFile:
    """A file received from a client, read fully into memory."""

    filename: str | None
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return file_extension(self.filename)


@dataclass(frozen=True)
class UploadPolicy:
    """Per-endpoint upload rules.

    Attributes:
        folder: Storage folder for this kind of file (e.g. "projects").
        max_size_mb: Largest accepted file.
        allowed_extensions: Accepted extensions, with the leading dot.
        required: Whether a missing file is an error or simply skipped.
        field: Form field name, used in error messages.
    """

    folder: str
    max_size_mb: int
    allowed_extensions: Collection[str]
    required: bool = False
    field: str = "image"

    def optional(self) -> UploadPolicy:
        return UploadPolicy(
            folder=self.folder,
            max_size_mb=self.max_size_mb,
            allowed_extensions=self.allowed_extensions,
            required=False,
            field=self.field,
        )


def check_file(storage: StorageBackend, policy: UploadPolicy, file: UploadedFile | None) -> None:
    """Validate ``file`` against ``policy`` without storing anything."""
    if file is None:
        if policy.required:
            raise MissingFile(policy.field)
        return
    storage.validate(file.size, file.extension, policy.max_size_mb, policy.allowed_extensions)


def store_file(
    storage: StorageBackend, policy: UploadPolicy, file: UploadedFile | None
) -> str | None:
    """Validate and upload ``file``; return its URL, or None when no file was sent."""
    check_file(storage, policy, file)
    if file is None:
        return None
    logger.info(
        "Received %s (%d bytes, %s) for %s",
        file.filename,
        file.size,
        file.content_type or "unknown type",
        policy.folder,
    )
    return storage.upload(file.content, file.filename, policy.folder).url


def discard_file(storage: StorageBackend, url: str | None, reason: str) -> None:
    """Best-effort delete of a stored file. Failures are logged, never raised."""
    if not url:
        return
    try:
        storage.delete(url)
        logger.info("Removed %s (%s)", url, reason)
    except UploadError as exc:
        logger.warning("Cleanup warning: could not remove %s (%s): %s", url, reason, exc)


def create_with_upload(
    storage: StorageBackend,
    policy: UploadPolicy,
    file: UploadedFile | None,
    persist: Callable[[str | None], T],
) -> T:
    """Upload ``file`` and persist the entity; never leave an orphaned upload behind."""
    url = store_file(storage, policy, file)
    try:
        return persist(url)
    except Exception:
        discard_file(storage, url, "entity could not be saved")
        raise


def replace_with_upload(
    storage: StorageBackend,
    policy: UploadPolicy,
    file: UploadedFile | None,
    previous_url: str | None,
    persist: Callable[[str | None], T],
) -> T:
    """Persist an update, swapping the stored file when a new one is supplied.

    ``persist`` receives the new URL, or None when the stored file is kept.
    The previous file is deleted only after ``persist`` succeeds.
    """
    new_url = store_file(storage, policy, file)
    try:
        result = persist(new_url)
    except Exception:
        discard_file(storage, new_url, "entity update failed")
        raise

    if new_url and previous_url and previous_url != new_url:
        discard_file(storage, previous_url, "replaced by a new upload")
    return result


def delete_with_file(
    storage: StorageBackend,
    url: str | None,
    remove: Callable[[], None],
) -> None:
    """Delete the entity row, then its stored file."""
    remove()
    discard_file(storage, url, "entity deleted")
