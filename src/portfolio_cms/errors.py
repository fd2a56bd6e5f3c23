"""Error taxonomy shared by repositories, storage backends and services.

The API layer maps these to HTTP status codes; nothing below it knows about
HTTP.
"""

from __future__ import annotations


class PortfolioError(Exception):
    """Base class for all request-scoped, recoverable failures."""


class ConfigurationError(PortfolioError):
    """Settings cannot produce a working application."""


class ValidationError(PortfolioError):
    """Bad or missing input. Raised before any storage or database side effect."""


class FileTooLarge(ValidationError):
    def __init__(self, size_bytes: int, max_size_mb: int) -> None:
        super().__init__(f"File is {size_bytes} bytes; the maximum is {max_size_mb} MB")
        self.size_bytes = size_bytes
        self.max_size_mb = max_size_mb


class UnsupportedFileType(ValidationError):
    def __init__(self, extension: str, allowed: frozenset[str] | set[str]) -> None:
        shown = ", ".join(sorted(ext.lstrip(".") for ext in allowed))
        super().__init__(f"File type {extension or '(none)'!r} is not allowed. Allowed: {shown}")
        self.extension = extension


class MissingFile(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f"A file must be uploaded in '{field}'")
        self.field = field


class NotFoundError(PortfolioError):
    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class UploadError(PortfolioError):
    """The storage backend rejected or failed an upload or delete."""


class PersistenceError(PortfolioError):
    """A database transaction failed and was rolled back."""
