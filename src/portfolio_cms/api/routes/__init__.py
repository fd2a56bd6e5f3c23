"""Route handlers for the API."""

from portfolio_cms.api.routes import (
    blog,
    certificates,
    educations,
    experiences,
    health,
    projects,
    site,
    skills,
    testimonials,
)

__all__ = [
    "health",
    "projects",
    "experiences",
    "skills",
    "certificates",
    "educations",
    "testimonials",
    "blog",
    "site",
]
