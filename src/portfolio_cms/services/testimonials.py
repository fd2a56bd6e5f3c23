"""Testimonial service."""

from __future__ import annotations

import logging
from typing import Any

from portfolio_cms.data.crud import EntityRepository
from portfolio_cms.errors import ValidationError
from portfolio_cms.services.common import (
    check_display_order,
    is_blank,
    pick_fields,
    require_fields,
)

logger = logging.getLogger(__name__)

TESTIMONIAL_STATUSES = ("pending", "approved", "rejected")

_TESTIMONIAL_FIELDS = (
    "name",
    "title",
    "message",
    "avatar_url",
    "rating",
    "display_order",
    "status",
)


def _validate(data: dict[str, Any]) -> None:
    rating = data.get("rating")
    if rating is not None and (
        not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5
    ):
        raise ValidationError("rating must be an integer between 1 and 5")
    status = data.get("status")
    if not is_blank(status) and status not in TESTIMONIAL_STATUSES:
        raise ValidationError(f"status must be one of {', '.join(TESTIMONIAL_STATUSES)}")
    check_display_order(data.get("display_order"))


class TestimonialService:
    def __init__(self, repository: EntityRepository) -> None:
        self.repository = repository

    def create(self, data: dict[str, Any]) -> dict:
        require_fields(data, "name", "message")
        _validate(data)
        testimonial = self.repository.create(
            {
                "name": data["name"].strip(),
                "title": data.get("title") or None,
                "message": data["message"],
                "avatar_url": data.get("avatar_url") or None,
                "rating": data.get("rating") or 5,
                "is_featured": bool(data.get("is_featured", False)),
                "display_order": data.get("display_order") or 0,
                "status": data.get("status") or "approved",
            }
        )
        logger.info("Created testimonial %d from %s", testimonial["id"], testimonial["name"])
        return testimonial

    def update(self, testimonial_id: int, data: dict[str, Any]) -> dict:
        _validate(data)
        changes = pick_fields(data, _TESTIMONIAL_FIELDS, flags=("is_featured",))
        return self.repository.update(testimonial_id, changes)

    def delete(self, testimonial_id: int) -> None:
        self.repository.delete(testimonial_id)

    def get(self, testimonial_id: int) -> dict:
        return self.repository.get(testimonial_id)

    def list(self) -> list[dict]:
        return self.repository.list()

    def list_featured(self) -> list[dict]:
        return self.repository.list(is_featured=True)

    def list_by_status(self, status: str) -> list[dict]:
        _validate({"status": status})
        return self.repository.list(status=status)
