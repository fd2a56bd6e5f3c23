"""Pydantic schemas for skills API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SkillResponse(BaseModel):
    """Public-facing skill schema for API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    value: int
    icon_url: str | None = None
    category: str
    display_order: int = 0
    is_featured: bool = False
    created_at: datetime
    updated_at: datetime
