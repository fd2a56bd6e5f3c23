"""Pydantic schemas for sections, social links and settings."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    section_key: str
    label: str
    display_order: int = 0
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class SectionCreateRequest(BaseModel):
    section_key: str = Field(..., description="Stable key such as 'about' or 'projects'")
    label: str
    display_order: int | None = None
    is_active: bool = True


class SocialLinkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    platform: str
    url: str
    icon_name: str | None = None
    display_order: int = 0
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class SocialLinkCreateRequest(BaseModel):
    platform: str
    url: str
    icon_name: str | None = None
    display_order: int | None = None
    is_active: bool = True


class SettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    value: str | None = None
    data_type: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class SettingCreateRequest(BaseModel):
    key: str
    value: str | None = None
    data_type: str | None = Field(None, description="string, number, boolean or json")
    description: str | None = None
