"""ORM models for portfolio projects and their tags.

A project owns an ordered list of tags. Tag names are unique per project;
duplicate names in one write are dropped by the database.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_cms.data.db import Base


class Project(Base):
    """A showcased project.

    Attributes:
        id: Auto-incrementing primary key.
        title: Project title.
        description: Longer description shown on the project card.
        image_url: URL returned by the storage backend, or None if no image.
        demo_url: Live demo link ("#" when there is none).
        code_url: Source code link.
        display_order: Ordering on the site (lower first).
        is_featured: Whether the project is highlighted.
        status: Publication status (e.g. "published", "draft").
    """

    __tablename__ = "portfolio_projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    demo_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="#")
    code_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="published")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )


class ProjectTag(Base):
    """A tag attached to one project."""

    __tablename__ = "project_tags"
    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_project_tag_name"),
        Index("ix_project_tags_project_id", "project_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("portfolio_projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
