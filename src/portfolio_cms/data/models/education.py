"""Education model with its ordered achievements."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_cms.data.db import Base


class Education(Base):
    """Education entry.

    Attributes:
        id: Auto-incrementing primary key.
        school: Name of school/university.
        degree: Degree type (e.g., Bachelor of Science).
        major: Field of study.
        start_year: Year studies started.
        end_year: Year studies ended (None if ongoing).
        description: Free-form notes.
        display_order: Ordering on the site (lower first).
    """

    __tablename__ = "portfolio_education"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    school: Mapped[str] = mapped_column(String(255), nullable=False)
    degree: Mapped[str] = mapped_column(String(255), nullable=False)
    major: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    end_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )


class EducationAchievement(Base):
    """An honor, award or activity attached to an education entry."""

    __tablename__ = "education_achievements"
    __table_args__ = (Index("ix_education_achievements_education_id", "education_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    education_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("portfolio_education.id", ondelete="CASCADE"),
        nullable=False,
    )
    achievement: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
