"""Skill model shown in the skills section of the portfolio."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from portfolio_cms.data.db import Base


class Skill(Base):
    """A skill with a proficiency value and an optional icon.

    Attributes:
        id: Auto-incrementing primary key.
        name: Skill name (e.g., "Python").
        value: Proficiency between 0 and 100.
        icon_url: URL returned by the storage backend, or None if no icon.
        category: Grouping on the site (e.g., "programming", "tools").
        display_order: Ordering on the site (lower first).
        is_featured: Whether the skill is highlighted.
    """

    __tablename__ = "portfolio_skills"
    __table_args__ = (
        CheckConstraint("value >= 0 AND value <= 100", name="ck_skill_value_range"),
        Index("ix_portfolio_skills_category", "category"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    icon_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    category: Mapped[str] = mapped_column(String(64), nullable=False, default="programming")
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    @validates("value")
    def validate_value(self, key: str, value: int) -> int:
        """Validate value is a percentage."""
        if value < 0 or value > 100:
            raise ValueError("Skill value must be between 0 and 100")
        return value
