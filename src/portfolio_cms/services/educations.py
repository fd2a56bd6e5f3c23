"""Education service."""

from __future__ import annotations

import logging
from typing import Any

from portfolio_cms.data.crud import EducationRepository
from portfolio_cms.services.common import (
    check_display_order,
    check_year_range,
    ordered_children,
    pick_fields,
    require_fields,
)

logger = logging.getLogger(__name__)

_EDUCATION_FIELDS = (
    "school",
    "degree",
    "major",
    "start_year",
    "end_year",
    "description",
    "display_order",
)


class EducationService:
    def __init__(self, repository: EducationRepository) -> None:
        self.repository = repository

    def create(self, data: dict[str, Any]) -> dict:
        require_fields(data, "school", "degree")
        check_display_order(data.get("display_order"))
        check_year_range(data.get("start_year"), data.get("end_year"))

        fields = {
            "school": data["school"].strip(),
            "degree": data["degree"].strip(),
            "major": data.get("major") or None,
            "start_year": data.get("start_year"),
            "end_year": data.get("end_year"),
            "description": data.get("description") or None,
            "display_order": data.get("display_order") or 0,
        }
        achievements = ordered_children(data.get("achievements"), "achievement")
        education = self.repository.create_with_children(fields, {"achievements": achievements})
        logger.info("Created education %d (%s)", education["id"], education["school"])
        return education

    def update(self, education_id: int, data: dict[str, Any]) -> dict:
        existing = self.repository.get_with_children(education_id)
        check_display_order(data.get("display_order"))
        changes = pick_fields(data, _EDUCATION_FIELDS)
        check_year_range(
            changes.get("start_year", existing["start_year"]),
            changes.get("end_year", existing["end_year"]),
        )

        children = {}
        if data.get("achievements") is not None:
            children["achievements"] = ordered_children(data["achievements"], "achievement")
        return self.repository.update_with_children(education_id, changes, children)

    def delete(self, education_id: int) -> None:
        self.repository.delete_with_children(education_id)
        logger.info("Deleted education %d", education_id)

    def get(self, education_id: int) -> dict:
        return self.repository.get_with_children(education_id)

    def list(self) -> list[dict]:
        return self.repository.list_with_children()
