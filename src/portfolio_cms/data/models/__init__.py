"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- Project / ProjectTag: showcased projects and their tags
- Experience / ExperienceResponsibility / ExperienceSkill: work history
- Education / EducationAchievement: education history
- BlogPost / BlogPostTag: blog articles
- Skill, Certificate, Testimonial: single-table portfolio content
- Section, SocialLink, Setting: site-wide content

All models inherit from the shared Base declarative class defined in data.db.
"""

from portfolio_cms.data.db import Base
from portfolio_cms.data.models.blog import BlogPost, BlogPostTag
from portfolio_cms.data.models.certificate import Certificate
from portfolio_cms.data.models.education import Education, EducationAchievement
from portfolio_cms.data.models.experience import (
    Experience,
    ExperienceResponsibility,
    ExperienceSkill,
)
from portfolio_cms.data.models.project import Project, ProjectTag
from portfolio_cms.data.models.site import Section, Setting, SocialLink
from portfolio_cms.data.models.skill import Skill
from portfolio_cms.data.models.testimonial import Testimonial

__all__ = [
    "Base",
    "BlogPost",
    "BlogPostTag",
    "Certificate",
    "Education",
    "EducationAchievement",
    "Experience",
    "ExperienceResponsibility",
    "ExperienceSkill",
    "Project",
    "ProjectTag",
    "Section",
    "Setting",
    "Skill",
    "SocialLink",
    "Testimonial",
]
