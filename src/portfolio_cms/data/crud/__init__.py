"""Repositories over the ORM models."""

from portfolio_cms.data.crud.aggregate import AggregateRepository, ChildCollection
from portfolio_cms.data.crud.blog_posts import BlogPostRepository
from portfolio_cms.data.crud.educations import EducationRepository
from portfolio_cms.data.crud.entities import EntityRepository
from portfolio_cms.data.crud.experiences import ExperienceRepository
from portfolio_cms.data.crud.projects import ProjectRepository

__all__ = [
    "AggregateRepository",
    "BlogPostRepository",
    "ChildCollection",
    "EducationRepository",
    "EntityRepository",
    "ExperienceRepository",
    "ProjectRepository",
]
