"""Experience service: jobs with responsibilities and the skills used."""

from __future__ import annotations

import logging
from typing import Any

from portfolio_cms.data.crud import ExperienceRepository
from portfolio_cms.services.common import (
    check_display_order,
    check_year_range,
    ordered_children,
    pick_fields,
    require_fields,
)

logger = logging.getLogger(__name__)

_EXPERIENCE_FIELDS = (
    "title",
    "company",
    "location",
    "start_year",
    "end_year",
    "description",
    "display_order",
)


def _children(data: dict[str, Any], *, replace_only_supplied: bool) -> dict[str, list[dict]]:
    children: dict[str, list[dict]] = {}
    for key, value_field in (("responsibilities", "description"), ("skills", "skill_name")):
        items = data.get(key)
        if items is None and replace_only_supplied:
            continue
        children[key] = ordered_children(items, value_field)
    return children


class ExperienceService:
    def __init__(self, repository: ExperienceRepository) -> None:
        self.repository = repository

    def create(self, data: dict[str, Any]) -> dict:
        require_fields(data, "title", "company")
        check_display_order(data.get("display_order"))
        current_job = bool(data.get("current_job", False))
        end_year = None if current_job else data.get("end_year")
        check_year_range(data.get("start_year"), end_year)

        fields = {
            "title": data["title"].strip(),
            "company": data["company"].strip(),
            "location": data.get("location") or None,
            "start_year": data.get("start_year"),
            "end_year": end_year,
            "current_job": current_job,
            "description": data.get("description") or None,
            "display_order": data.get("display_order") or 0,
        }
        experience = self.repository.create_with_children(
            fields, _children(data, replace_only_supplied=False)
        )
        logger.info("Created experience %d at %s", experience["id"], experience["company"])
        return experience

    def update(self, experience_id: int, data: dict[str, Any]) -> dict:
        """Apply a partial update; responsibilities and skills are replaced when given."""
        existing = self.repository.get_with_children(experience_id)
        check_display_order(data.get("display_order"))
        changes = pick_fields(data, _EXPERIENCE_FIELDS, flags=("current_job",))
        if changes["current_job"]:
            changes["end_year"] = None
        check_year_range(
            changes.get("start_year", existing["start_year"]),
            changes.get("end_year", existing["end_year"]),
        )
        return self.repository.update_with_children(
            experience_id, changes, _children(data, replace_only_supplied=True)
        )

    def delete(self, experience_id: int) -> None:
        self.repository.delete_with_children(experience_id)
        logger.info("Deleted experience %d", experience_id)

    def get(self, experience_id: int) -> dict:
        return self.repository.get_with_children(experience_id)

    def list(self) -> list[dict]:
        return self.repository.list_with_children()
