"""Experience aggregate: experience + responsibilities + skills."""

from __future__ import annotations

from portfolio_cms.data.crud.aggregate import AggregateRepository, ChildCollection
from portfolio_cms.data.models import Experience, ExperienceResponsibility, ExperienceSkill


class ExperienceRepository(AggregateRepository):
    model = Experience
    entity_name = "Experience"
    parent_order_by = (Experience.display_order.asc(), Experience.created_at.desc())
    children = (
        ChildCollection(
            key="responsibilities",
            model=ExperienceResponsibility,
            parent_column="experience_id",
        ),
        ChildCollection(
            key="skills",
            model=ExperienceSkill,
            parent_column="experience_id",
            order_by=("display_order", "skill_name"),
            conflict_columns=("experience_id", "skill_name"),
        ),
    )
