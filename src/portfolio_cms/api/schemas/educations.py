"""Pydantic schemas for education API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AchievementItem(BaseModel):
    achievement: str
    display_order: int | None = None


class AchievementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    achievement: str
    display_order: int


class EducationResponse(BaseModel):
    """Response schema for education data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    school: str
    degree: str
    major: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    description: str | None = None
    display_order: int = 0
    achievements: list[AchievementResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class EducationCreateRequest(BaseModel):
    """Request schema for creating an education entry."""

    school: str = Field(..., description="School or university name")
    degree: str = Field(..., description="Degree type (e.g., Bachelor of Science)")
    major: str | None = Field(None, description="Major or field of study")
    start_year: int | None = None
    end_year: int | None = Field(None, description="None while still enrolled")
    description: str | None = None
    display_order: int | None = Field(None, description="Lower values are shown first")
    achievements: list[AchievementItem] = Field(default_factory=list)


class EducationUpdateRequest(BaseModel):
    """Request schema for updating an education entry.

    All fields are optional; only provided fields are updated.
    """

    school: str | None = None
    degree: str | None = None
    major: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    description: str | None = None
    display_order: int | None = None
    achievements: list[AchievementItem] | None = Field(
        None, description="Replaces all achievements when present"
    )
