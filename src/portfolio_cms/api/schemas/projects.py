"""Pydantic schemas for project API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProjectTagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str | None = None
    display_order: int = 0


class ProjectResponse(BaseModel):
    """Project with its tags, ordered by display order."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    image_url: str | None = None
    demo_url: str
    code_url: str
    display_order: int = 0
    is_featured: bool = False
    status: str
    tags: list[ProjectTagResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class TagSummary(BaseModel):
    name: str
    color: str | None = None


class TagCreateRequest(BaseModel):
    name: str = Field(..., description="Tag name, unique within the project")
    color: str | None = Field(None, description="Display colour, e.g. #3776ab")
