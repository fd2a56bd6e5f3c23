"""Shared dependencies for API routes.

The ``Database`` and storage backend are created once by ``create_app`` and
kept on ``app.state``; services are cheap wrappers built per request.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request, UploadFile

from portfolio_cms.data.crud import (
    BlogPostRepository,
    EducationRepository,
    EntityRepository,
    ExperienceRepository,
    ProjectRepository,
)
from portfolio_cms.data.db import Database
from portfolio_cms.data.models import (
    Certificate,
    Section,
    Setting,
    Skill,
    SocialLink,
    Testimonial,
)
from portfolio_cms.services import (
    BlogService,
    CertificateService,
    EducationService,
    ExperienceService,
    ProjectService,
    SectionService,
    SettingService,
    SkillService,
    SocialLinkService,
    StorageBackend,
    TestimonialService,
    UploadedFile,
)


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_storage(request: Request) -> StorageBackend:
    return request.app.state.storage


DatabaseDep = Annotated[Database, Depends(get_database)]
StorageDep = Annotated[StorageBackend, Depends(get_storage)]


async def read_upload(file: UploadFile | None) -> UploadedFile | None:
    """Read a multipart file into memory; an absent or unnamed part counts as no file."""
    if file is None or not file.filename:
        return None
    return UploadedFile(
        filename=file.filename,
        content=await file.read(),
        content_type=file.content_type,
    )


def get_project_service(db: DatabaseDep, storage: StorageDep) -> ProjectService:
    return ProjectService(ProjectRepository(db), storage)


def get_skill_service(db: DatabaseDep, storage: StorageDep) -> SkillService:
    repository = EntityRepository(
        db, Skill, entity_name="Skill", order_by=(Skill.display_order, Skill.id)
    )
    return SkillService(repository, storage)


def get_certificate_service(db: DatabaseDep, storage: StorageDep) -> CertificateService:
    repository = EntityRepository(
        db,
        Certificate,
        entity_name="Certificate",
        order_by=(Certificate.display_order, Certificate.issue_date.desc(), Certificate.id),
    )
    return CertificateService(repository, storage)


def get_experience_service(db: DatabaseDep) -> ExperienceService:
    return ExperienceService(ExperienceRepository(db))


def get_education_service(db: DatabaseDep) -> EducationService:
    return EducationService(EducationRepository(db))


def get_blog_service(db: DatabaseDep) -> BlogService:
    return BlogService(BlogPostRepository(db))


def get_testimonial_service(db: DatabaseDep) -> TestimonialService:
    repository = EntityRepository(
        db,
        Testimonial,
        entity_name="Testimonial",
        order_by=(Testimonial.display_order, Testimonial.created_at.desc(), Testimonial.id),
    )
    return TestimonialService(repository)


def get_section_service(db: DatabaseDep) -> SectionService:
    repository = EntityRepository(
        db, Section, entity_name="Section", order_by=(Section.display_order, Section.id)
    )
    return SectionService(repository)


def get_social_link_service(db: DatabaseDep) -> SocialLinkService:
    repository = EntityRepository(
        db,
        SocialLink,
        entity_name="Social link",
        order_by=(SocialLink.display_order, SocialLink.id),
    )
    return SocialLinkService(repository)


def get_setting_service(db: DatabaseDep) -> SettingService:
    return SettingService(
        EntityRepository(db, Setting, entity_name="Setting", order_by=(Setting.key,))
    )
