"""Skill service. Each skill may carry an uploaded icon."""

from __future__ import annotations

import logging
from typing import Any

from portfolio_cms.data.crud import EntityRepository
from portfolio_cms.errors import ValidationError
from portfolio_cms.services.common import check_display_order, pick_fields, require_fields
from portfolio_cms.services.storage import StorageBackend
from portfolio_cms.services.uploads import (
    UploadedFile,
    UploadPolicy,
    create_with_upload,
    delete_with_file,
    replace_with_upload,
)

logger = logging.getLogger(__name__)

SKILL_ICON_POLICY = UploadPolicy(
    folder="skills",
    max_size_mb=5,
    allowed_extensions=frozenset({".jpg", ".jpeg", ".png", ".webp", ".svg", ".ico"}),
    required=False,
    field="icon",
)

DEFAULT_CATEGORY = "programming"

_SKILL_FIELDS = ("name", "value", "category", "display_order")


def _check_value(value: Any) -> None:
    if value is None:
        return
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 100:
        raise ValidationError("value must be an integer between 0 and 100")


class SkillService:
    def __init__(
        self,
        repository: EntityRepository,
        storage: StorageBackend,
        policy: UploadPolicy = SKILL_ICON_POLICY,
    ) -> None:
        self.repository = repository
        self.storage = storage
        self.policy = policy

    def create(self, data: dict[str, Any], icon: UploadedFile | None = None) -> dict:
        require_fields(data, "name")
        _check_value(data.get("value"))
        check_display_order(data.get("display_order"))

        fields = {
            "name": data["name"].strip(),
            "value": data.get("value") or 0,
            "category": data.get("category") or DEFAULT_CATEGORY,
            "display_order": data.get("display_order") or 0,
            "is_featured": bool(data.get("is_featured", False)),
        }
        skill = create_with_upload(
            self.storage,
            self.policy,
            icon,
            lambda icon_url: self.repository.create({**fields, "icon_url": icon_url}),
        )
        logger.info("Created skill %d (%s)", skill["id"], skill["name"])
        return skill

    def update(self, skill_id: int, data: dict[str, Any], icon: UploadedFile | None = None) -> dict:
        """Update a skill; a new icon replaces the old one once the row is saved."""
        existing = self.repository.get(skill_id)
        _check_value(data.get("value"))
        check_display_order(data.get("display_order"))
        changes = pick_fields(data, _SKILL_FIELDS, flags=("is_featured",))

        def persist(icon_url: str | None) -> dict:
            fields = {**changes, "icon_url": icon_url} if icon_url else changes
            return self.repository.update(skill_id, fields)

        return replace_with_upload(self.storage, self.policy, icon, existing["icon_url"], persist)

    def delete(self, skill_id: int) -> None:
        existing = self.repository.get(skill_id)
        delete_with_file(
            self.storage, existing["icon_url"], lambda: self.repository.delete(skill_id)
        )
        logger.info("Deleted skill %d", skill_id)

    def get(self, skill_id: int) -> dict:
        return self.repository.get(skill_id)

    def list(self) -> list[dict]:
        return self.repository.list()

    def list_featured(self) -> list[dict]:
        return self.repository.list(is_featured=True)

    def list_by_category(self, category: str) -> list[dict]:
        return self.repository.list(category=category)
