"""Pydantic schemas for testimonial API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TestimonialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    title: str | None = None
    message: str
    avatar_url: str | None = None
    rating: int
    is_featured: bool = False
    display_order: int = 0
    status: str
    created_at: datetime
    updated_at: datetime


class TestimonialCreateRequest(BaseModel):
    name: str
    title: str | None = Field(None, description="Author's role or company")
    message: str
    avatar_url: str | None = None
    rating: int | None = Field(None, description="1 to 5, defaults to 5")
    is_featured: bool = False
    display_order: int | None = None
    status: str | None = Field(None, description="pending, approved or rejected")


class TestimonialUpdateRequest(BaseModel):
    name: str | None = None
    title: str | None = None
    message: str | None = None
    avatar_url: str | None = None
    rating: int | None = None
    is_featured: bool = False
    display_order: int | None = None
    status: str | None = None
