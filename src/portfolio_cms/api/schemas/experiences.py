"""Pydantic schemas for work experience API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ResponsibilityItem(BaseModel):
    description: str
    display_order: int | None = Field(None, description="Defaults to the list position")


class ExperienceSkillItem(BaseModel):
    skill_name: str
    display_order: int | None = Field(None, description="Defaults to the list position")


class ResponsibilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    display_order: int


class ExperienceSkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    skill_name: str
    display_order: int


class ExperienceResponse(BaseModel):
    """Response schema for an experience with its responsibilities and skills."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    company: str
    location: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    current_job: bool = False
    description: str | None = None
    display_order: int = 0
    responsibilities: list[ResponsibilityResponse] = Field(default_factory=list)
    skills: list[ExperienceSkillResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ExperienceCreateRequest(BaseModel):
    title: str = Field(..., description="Job title or position")
    company: str = Field(..., description="Company or organization name")
    location: str | None = None
    start_year: int | None = None
    end_year: int | None = Field(None, description="Ignored when current_job is true")
    current_job: bool = False
    description: str | None = None
    display_order: int | None = None
    responsibilities: list[ResponsibilityItem] = Field(default_factory=list)
    skills: list[ExperienceSkillItem] = Field(default_factory=list)


class ExperienceUpdateRequest(BaseModel):
    """Request schema for updating an experience.

    Empty fields keep their stored value. ``responsibilities`` and ``skills``
    replace the stored lists when present and are left alone when omitted.
    """

    title: str | None = None
    company: str | None = None
    location: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    current_job: bool = False
    description: str | None = None
    display_order: int | None = None
    responsibilities: list[ResponsibilityItem] | None = None
    skills: list[ExperienceSkillItem] | None = None
