"""Certificate service. A certificate is always backed by an image or PDF."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from portfolio_cms.data.crud import EntityRepository
from portfolio_cms.errors import ValidationError
from portfolio_cms.services.common import (
    check_display_order,
    is_blank,
    pick_fields,
    require_fields,
)
from portfolio_cms.services.storage import StorageBackend
from portfolio_cms.services.uploads import (
    UploadedFile,
    UploadPolicy,
    create_with_upload,
    delete_with_file,
    replace_with_upload,
)

logger = logging.getLogger(__name__)

CERTIFICATE_FILE_POLICY = UploadPolicy(
    folder="certificates",
    max_size_mb=10,
    allowed_extensions=frozenset({".jpg", ".jpeg", ".png", ".webp", ".pdf"}),
    required=True,
    field="image",
)

_CERTIFICATE_FIELDS = ("name", "issue_date", "issuer", "credential_url", "display_order")


def parse_issue_date(value: Any) -> date | None:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if is_blank(value):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"issue_date must be YYYY-MM-DD, got {value!r}") from exc


class CertificateService:
    def __init__(
        self,
        repository: EntityRepository,
        storage: StorageBackend,
        policy: UploadPolicy = CERTIFICATE_FILE_POLICY,
    ) -> None:
        self.repository = repository
        self.storage = storage
        self.policy = policy

    def create(self, data: dict[str, Any], image: UploadedFile | None) -> dict:
        require_fields(data, "name")
        check_display_order(data.get("display_order"))
        fields = {
            "name": data["name"].strip(),
            "issue_date": parse_issue_date(data.get("issue_date")),
            "issuer": data.get("issuer") or "-",
            "credential_url": data.get("credential_url") or None,
            "display_order": data.get("display_order") or 0,
        }
        certificate = create_with_upload(
            self.storage,
            self.policy,
            image,
            lambda image_url: self.repository.create({**fields, "image_url": image_url}),
        )
        logger.info("Created certificate %d (%s)", certificate["id"], certificate["name"])
        return certificate

    def update(
        self, certificate_id: int, data: dict[str, Any], image: UploadedFile | None = None
    ) -> dict:
        existing = self.repository.get(certificate_id)
        check_display_order(data.get("display_order"))
        changes = pick_fields(data, _CERTIFICATE_FIELDS)
        if "issue_date" in changes:
            changes["issue_date"] = parse_issue_date(changes["issue_date"])

        def persist(image_url: str | None) -> dict:
            fields = {**changes, "image_url": image_url} if image_url else changes
            return self.repository.update(certificate_id, fields)

        return replace_with_upload(
            self.storage, self.policy.optional(), image, existing["image_url"], persist
        )

    def delete(self, certificate_id: int) -> None:
        existing = self.repository.get(certificate_id)
        delete_with_file(
            self.storage,
            existing["image_url"],
            lambda: self.repository.delete(certificate_id),
        )
        logger.info("Deleted certificate %d", certificate_id)

    def get(self, certificate_id: int) -> dict:
        return self.repository.get(certificate_id)

    def list(self) -> list[dict]:
        return self.repository.list()
