"""Remote storage backend for a bucket served over HTTP.

The endpoint follows the object-storage REST layout:

- upload:  POST/PUT ``{base}/storage/v1/object/{bucket}/{path}``
- delete:  DELETE ``{base}/storage/v1/object/{bucket}`` with ``{"prefixes": [path]}``
- public:  GET ``{base}/storage/v1/object/public/{bucket}/{path}``

Uploads go through a long-lived ``httpx.Client`` first; if that fails, one
raw ``PUT`` with upsert is attempted before giving up.
"""

from __future__ import annotations

import logging
import mimetypes

import httpx

from portfolio_cms.errors import UploadError
from portfolio_cms.services.storage import (
    StorageBackend,
    StoredFile,
    generate_object_name,
    normalize_folder,
)

logger = logging.getLogger(__name__)

PUBLIC_MARKER = "/object/public/"

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".pdf": "application/pdf",
}


def guess_content_type(name: str) -> str:
    suffix = name[name.rfind(".") :].lower() if "." in name else ""
    return (
        CONTENT_TYPES.get(suffix) or mimetypes.guess_type(name)[0] or "application/octet-stream"
    )


class RemoteStorage(StorageBackend):
    """Stores files in a bucket reached through authenticated HTTP calls."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport
        self._client = httpx.Client(
            base_url=f"{self.base_url}/storage/v1",
            headers=self._auth_headers(),
            timeout=timeout,
            transport=transport,
        )

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}", "apikey": self._api_key}

    def object_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/{self.bucket}/{path}"

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path.lstrip('/')}"

    def upload(self, content: bytes, original_name: str | None, folder: str) -> StoredFile:
        folder = normalize_folder(folder)
        name = generate_object_name(original_name)
        stored_path = f"{folder}/{name}" if folder else name
        content_type = guess_content_type(name)

        logger.info(
            "Uploading %d bytes to bucket %s at %s (%s)",
            len(content),
            self.bucket,
            stored_path,
            content_type,
        )
        try:
            self._upload_with_client(stored_path, content, content_type)
        except httpx.HTTPError as exc:
            logger.warning(
                "Primary upload of %s failed (%s); retrying with a raw PUT", stored_path, exc
            )
            try:
                self._upload_raw(stored_path, content, content_type)
            except httpx.HTTPError as retry_exc:
                logger.error("Upload of %s failed: %s", stored_path, retry_exc)
                raise UploadError(
                    f"Upload to bucket {self.bucket} failed: {retry_exc}"
                ) from retry_exc

        stored = StoredFile(name=name, folder=folder, url=self.public_url(stored_path))
        logger.info("Upload successful: %s", stored.url)
        return stored

    def _upload_with_client(self, path: str, content: bytes, content_type: str) -> None:
        response = self._client.post(
            f"/object/{self.bucket}/{path}",
            content=content,
            headers={"Content-Type": content_type, "Cache-Control": "no-cache"},
        )
        response.raise_for_status()

    def _upload_raw(self, path: str, content: bytes, content_type: str) -> None:
        with httpx.Client(timeout=self.timeout, transport=self._transport) as raw:
            response = raw.put(
                self.object_url(path),
                content=content,
                headers={
                    **self._auth_headers(),
                    "Content-Type": content_type,
                    "x-upsert": "true",
                },
            )
            response.raise_for_status()

    def delete(self, url: str) -> None:
        path = self.path_for_url(url)
        try:
            response = self._client.request(
                "DELETE", f"/object/{self.bucket}", json={"prefixes": [path]}
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Failed to delete %s from bucket %s: %s", path, self.bucket, exc)
            raise UploadError(f"Failed to delete {url}: {exc}") from exc
        logger.info("Deleted %s from bucket %s", path, self.bucket)

    def path_for_url(self, url: str) -> str:
        """Extract the object path from a public URL of this bucket."""
        index = url.find(PUBLIC_MARKER)
        if index == -1:
            raise UploadError(f"Not an object-storage public URL: {url}")

        bucket, _, path = url[index + len(PUBLIC_MARKER) :].partition("/")
        if bucket != self.bucket or not path:
            raise UploadError(f"URL does not belong to bucket {self.bucket}: {url}")
        return path.split("?", 1)[0]

    def close(self) -> None:
        self._client.close()
