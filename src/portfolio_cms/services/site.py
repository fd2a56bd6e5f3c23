"""Site-wide content: page sections, social links and settings.

These resources only support create, list and delete.
"""

from __future__ import annotations

from typing import Any

from portfolio_cms.data.crud import EntityRepository
from portfolio_cms.errors import ValidationError
from portfolio_cms.services.common import check_display_order, require_fields

SETTING_TYPES = ("string", "number", "boolean", "json")


class SectionService:
    def __init__(self, repository: EntityRepository) -> None:
        self.repository = repository

    def create(self, data: dict[str, Any]) -> dict:
        require_fields(data, "section_key", "label")
        check_display_order(data.get("display_order"))
        return self.repository.create(
            {
                "section_key": data["section_key"].strip(),
                "label": data["label"].strip(),
                "display_order": data.get("display_order") or 0,
                "is_active": bool(data.get("is_active", True)),
            }
        )

    def list(self) -> list[dict]:
        return self.repository.list()

    def delete(self, section_id: int) -> None:
        self.repository.delete(section_id)


class SocialLinkService:
    def __init__(self, repository: EntityRepository) -> None:
        self.repository = repository

    def create(self, data: dict[str, Any]) -> dict:
        require_fields(data, "platform", "url")
        check_display_order(data.get("display_order"))
        return self.repository.create(
            {
                "platform": data["platform"].strip(),
                "url": data["url"].strip(),
                "icon_name": data.get("icon_name") or None,
                "display_order": data.get("display_order") or 0,
                "is_active": bool(data.get("is_active", True)),
            }
        )

    def list(self) -> list[dict]:
        return self.repository.list()

    def delete(self, link_id: int) -> None:
        self.repository.delete(link_id)


class SettingService:
    def __init__(self, repository: EntityRepository) -> None:
        self.repository = repository

    def create(self, data: dict[str, Any]) -> dict:
        require_fields(data, "key")
        data_type = data.get("data_type") or "string"
        if data_type not in SETTING_TYPES:
            raise ValidationError(f"data_type must be one of {', '.join(SETTING_TYPES)}")
        return self.repository.create(
            {
                "key": data["key"].strip(),
                "value": data.get("value"),
                "data_type": data_type,
                "description": data.get("description") or None,
            }
        )

    def list(self) -> list[dict]:
        return self.repository.list()

    def delete(self, setting_id: int) -> None:
        self.repository.delete(setting_id)
