"""Education aggregate: education entry + achievements."""

from __future__ import annotations

from portfolio_cms.data.crud.aggregate import AggregateRepository, ChildCollection
from portfolio_cms.data.models import Education, EducationAchievement


class EducationRepository(AggregateRepository):
    model = Education
    entity_name = "Education"
    parent_order_by = (Education.display_order.asc(), Education.start_year.desc(), Education.id)
    children = (
        ChildCollection(
            key="achievements",
            model=EducationAchievement,
            parent_column="education_id",
        ),
    )
