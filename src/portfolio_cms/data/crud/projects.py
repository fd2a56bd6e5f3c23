"""Project aggregate: project + tags."""

from __future__ import annotations

from sqlalchemy import func, select

from portfolio_cms.data.crud.aggregate import (
    AggregateRepository,
    ChildCollection,
    row_to_dict,
    transaction,
)
from portfolio_cms.data.models import Project, ProjectTag
from portfolio_cms.errors import NotFoundError


class ProjectRepository(AggregateRepository):
    model = Project
    entity_name = "Project"
    parent_order_by = (Project.display_order.asc(), Project.id)
    children = (
        ChildCollection(
            key="tags",
            model=ProjectTag,
            parent_column="project_id",
            order_by=("display_order", "name"),
            conflict_columns=("project_id", "name"),
        ),
    )

    def get(self, project_id: int) -> dict:
        """Return the project row alone, without tags."""
        with transaction(self.db, f"load project {project_id}") as session:
            project = session.get(Project, project_id)
            if project is None:
                raise NotFoundError(self.entity_name, project_id)
            return row_to_dict(project)

    def list_projects(self) -> list[dict]:
        with transaction(self.db, "list projects") as session:
            stmt = select(Project).order_by(*self.parent_order_by)
            return [row_to_dict(row) for row in session.scalars(stmt)]

    def list_tags(self) -> list[dict]:
        """Return every distinct tag name with the colour it was first given."""
        with transaction(self.db, "list project tags") as session:
            first_ids = select(func.min(ProjectTag.id)).group_by(ProjectTag.name)
            stmt = (
                select(ProjectTag.name, ProjectTag.color)
                .where(ProjectTag.id.in_(first_ids))
                .order_by(ProjectTag.name)
            )
            return [{"name": name, "color": color} for name, color in session.execute(stmt)]
