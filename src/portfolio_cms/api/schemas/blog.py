"""Pydantic schemas for blog API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BlogTagItem(BaseModel):
    name: str
    display_order: int | None = None


class BlogTagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    display_order: int


class BlogPostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    excerpt: str | None = None
    slug: str
    featured_image: str | None = None
    publish_date: datetime | None = None
    status: str
    view_count: int = 0
    tags: list[BlogTagResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class BlogPostCreateRequest(BaseModel):
    title: str
    content: str
    excerpt: str | None = None
    slug: str | None = Field(None, description="Generated from the title when omitted")
    featured_image: str | None = None
    publish_date: datetime | None = None
    status: str | None = Field(None, description="draft, published or archived")
    tags: list[BlogTagItem] = Field(default_factory=list)


class BlogPostUpdateRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    slug: str | None = None
    featured_image: str | None = None
    publish_date: datetime | None = None
    status: str | None = None
    tags: list[BlogTagItem] | None = None
