"""Tests for the skill, certificate, experience, education, blog, testimonial and site services."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from portfolio_cms.data.crud import (
    BlogPostRepository,
    EducationRepository,
    EntityRepository,
    ExperienceRepository,
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
from portfolio_cms.errors import MissingFile, NotFoundError, PersistenceError, ValidationError
from portfolio_cms.services import blog as blog_module
from portfolio_cms.services import testimonials as testimonial_module
from portfolio_cms.services.certificates import CertificateService, parse_issue_date
from portfolio_cms.services.educations import EducationService
from portfolio_cms.services.experiences import ExperienceService
from portfolio_cms.services.site import SectionService, SettingService, SocialLinkService
from portfolio_cms.services.skills import SkillService
from portfolio_cms.services.storage import LocalStorage
from portfolio_cms.services.uploads import UploadedFile

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake"


def _files(upload_dir: Path) -> list[Path]:
    return sorted(path.resolve() for path in upload_dir.rglob("*") if path.is_file())


# ---- skills -----------------------------------------------------------------


@pytest.fixture
def skills(db: Database, storage: LocalStorage) -> SkillService:
    repository = EntityRepository(
        db, Skill, entity_name="Skill", order_by=(Skill.display_order, Skill.id)
    )
    return SkillService(repository, storage)


def test_skill_defaults_and_listings(skills: SkillService) -> None:
    python = skills.create({"name": "Python", "value": 90, "is_featured": True})
    docker = skills.create({"name": "Docker", "value": 70, "category": "tools"})

    assert python["category"] == "programming"
    assert python["icon_url"] is None
    assert [s["id"] for s in skills.list()] == [python["id"], docker["id"]]
    assert [s["name"] for s in skills.list_featured()] == ["Python"]
    assert [s["name"] for s in skills.list_by_category("tools")] == ["Docker"]
    assert skills.list_by_category("design") == []


@pytest.mark.parametrize("value", [-1, 101, True])
def test_skill_value_must_be_a_percentage(skills: SkillService, value: object) -> None:
    with pytest.raises(ValidationError, match="value"):
        skills.create({"name": "Python", "value": value})


def test_skill_value_zero_is_kept(skills: SkillService) -> None:
    created = skills.create({"name": "COBOL", "value": 50})
    assert skills.update(created["id"], {"value": 0})["value"] == 0


def test_skill_icon_replaced_only_after_update(
    skills: SkillService, storage: LocalStorage, upload_dir: Path
) -> None:
    created = skills.create({"name": "Python"}, UploadedFile("python.svg", b"<svg/>"))
    assert created["icon_url"].startswith("/uploads/skills/")

    kept = skills.update(created["id"], {"name": "Python 3"})
    assert kept["icon_url"] == created["icon_url"]

    replaced = skills.update(created["id"], {}, UploadedFile("python.ico", b"ico"))
    assert replaced["icon_url"] != created["icon_url"]
    assert _files(upload_dir) == [storage.path_for_url(replaced["icon_url"])]

    skills.delete(created["id"])
    assert _files(upload_dir) == []


def test_skill_icon_size_limit(skills: SkillService) -> None:
    with pytest.raises(ValidationError):
        skills.create({"name": "Big"}, UploadedFile("big.png", b"0" * (5 * 1024 * 1024 + 1)))


# ---- certificates -----------------------------------------------------------


@pytest.fixture
def certificates(db: Database, storage: LocalStorage) -> CertificateService:
    repository = EntityRepository(db, Certificate, entity_name="Certificate")
    return CertificateService(repository, storage)


def test_certificate_requires_image(certificates: CertificateService) -> None:
    with pytest.raises(MissingFile):
        certificates.create({"name": "AWS Architect"}, None)
    assert certificates.list() == []


def test_certificate_create_and_update(
    certificates: CertificateService, upload_dir: Path
) -> None:
    created = certificates.create(
        {"name": "AWS Architect", "issue_date": "2024-05-01"},
        UploadedFile("cert.pdf", b"%PDF-1.7", "application/pdf"),
    )

    assert created["issuer"] == "-"
    assert created["issue_date"] == date(2024, 5, 1)
    assert created["image_url"].endswith(".pdf")

    updated = certificates.update(created["id"], {"issuer": "Amazon"}, None)
    assert updated["issuer"] == "Amazon"
    assert updated["image_url"] == created["image_url"]
    assert len(_files(upload_dir)) == 1


def test_parse_issue_date() -> None:
    assert parse_issue_date("2023-01-31") == date(2023, 1, 31)
    assert parse_issue_date(date(2020, 2, 2)) == date(2020, 2, 2)
    assert parse_issue_date("") is None
    with pytest.raises(ValidationError):
        parse_issue_date("31/01/2023")


# ---- experiences ------------------------------------------------------------


@pytest.fixture
def experiences(db: Database) -> ExperienceService:
    return ExperienceService(ExperienceRepository(db))


def test_experience_create_orders_children_by_position(experiences: ExperienceService) -> None:
    created = experiences.create(
        {
            "title": "Engineer",
            "company": "Acme",
            "start_year": 2020,
            "responsibilities": [{"description": "Build"}, {"description": "Test"}],
            "skills": [{"skill_name": "Go"}, {"skill_name": "Go"}, {"skill_name": "SQL"}],
        }
    )

    assert [(r["description"], r["display_order"]) for r in created["responsibilities"]] == [
        ("Build", 0),
        ("Test", 1),
    ]
    assert [s["skill_name"] for s in created["skills"]] == ["Go", "SQL"]


def test_current_job_clears_end_year(experiences: ExperienceService) -> None:
    created = experiences.create(
        {
            "title": "Engineer",
            "company": "Acme",
            "start_year": 2020,
            "end_year": 2022,
            "current_job": True,
        }
    )
    assert created["end_year"] is None

    ended = experiences.update(created["id"], {"end_year": 2023})
    assert ended["current_job"] is False
    assert ended["end_year"] == 2023


def test_experience_validation(experiences: ExperienceService) -> None:
    with pytest.raises(ValidationError, match="company"):
        experiences.create({"title": "Engineer"})
    with pytest.raises(ValidationError, match="end_year"):
        experiences.create(
            {"title": "Engineer", "company": "Acme", "start_year": 2022, "end_year": 2021}
        )
    with pytest.raises(ValidationError, match="display_order"):
        experiences.create({"title": "Engineer", "company": "Acme", "display_order": -2})


def test_experience_update_keeps_omitted_lists(experiences: ExperienceService) -> None:
    created = experiences.create(
        {
            "title": "Engineer",
            "company": "Acme",
            "responsibilities": [{"description": "Build"}],
            "skills": [{"skill_name": "Go"}],
        }
    )

    updated = experiences.update(created["id"], {"skills": [], "responsibilities": None})

    assert updated["skills"] == []
    assert [r["description"] for r in updated["responsibilities"]] == ["Build"]


def test_experience_delete(experiences: ExperienceService) -> None:
    created = experiences.create({"title": "Engineer", "company": "Acme"})
    experiences.delete(created["id"])

    assert experiences.list() == []
    with pytest.raises(NotFoundError):
        experiences.delete(created["id"])


# ---- education --------------------------------------------------------------


@pytest.fixture
def educations(db: Database) -> EducationService:
    return EducationService(EducationRepository(db))


def test_education_create_update_and_order(educations: EducationService) -> None:
    older = educations.create(
        {"school": "College", "degree": "Diploma", "start_year": 2014, "end_year": 2016}
    )
    newer = educations.create(
        {
            "school": "UBC",
            "degree": "BSc",
            "start_year": 2018,
            "achievements": [{"achievement": "Dean's List"}, {"achievement": "  "}],
        }
    )

    assert [a["achievement"] for a in newer["achievements"]] == ["Dean's List"]
    assert [e["id"] for e in educations.list()] == [newer["id"], older["id"]]

    updated = educations.update(newer["id"], {"major": "Computer Science", "achievements": []})
    assert updated["major"] == "Computer Science"
    assert updated["achievements"] == []

    with pytest.raises(ValidationError):
        educations.update(older["id"], {"end_year": 2010})


def test_education_requires_school_and_degree(educations: EducationService) -> None:
    with pytest.raises(ValidationError, match="degree"):
        educations.create({"school": "UBC"})


# ---- blog -------------------------------------------------------------------


@pytest.fixture
def blog(db: Database) -> blog_module.BlogService:
    return blog_module.BlogService(BlogPostRepository(db))


@pytest.mark.parametrize(
    ("title", "slug"),
    [
        ("Hello, World!", "hello-world"),
        ("  FastAPI & SQLAlchemy 2.0  ", "fastapi-sqlalchemy-2-0"),
        ("!!!", ""),
    ],
)
def test_slugify(title: str, slug: str) -> None:
    assert blog_module.slugify(title) == slug


def test_blog_generates_unique_slugs(blog: blog_module.BlogService) -> None:
    first = blog.create({"title": "Hello World", "content": "one"})
    second = blog.create({"title": "Hello World", "content": "two"})
    untitled = blog.create({"title": "???", "content": "three"})

    assert first["slug"] == "hello-world"
    assert second["slug"] == "hello-world-2"
    assert untitled["slug"] == "post"
    assert first["status"] == "draft"
    assert first["publish_date"] is None


def test_blog_explicit_slug_must_be_free(blog: blog_module.BlogService) -> None:
    blog.create({"title": "A", "content": "c", "slug": "My Post"})

    with pytest.raises(ValidationError, match="my-post"):
        blog.create({"title": "B", "content": "c", "slug": "my-post"})


def test_blog_status_and_publish_date(blog: blog_module.BlogService) -> None:
    with pytest.raises(ValidationError, match="status"):
        blog.create({"title": "A", "content": "c", "status": "hidden"})

    draft = blog.create({"title": "A", "content": "c"})
    published = blog.update(draft["id"], {"status": "published"})

    assert published["status"] == "published"
    assert published["publish_date"] is not None
    assert [p["id"] for p in blog.list_published()] == [draft["id"]]


def test_blog_reads_count_views(blog: blog_module.BlogService) -> None:
    post = blog.create({"title": "Views", "content": "c", "tags": [{"name": "meta"}]})

    assert blog.get(post["id"])["view_count"] == 1
    assert blog.get_by_slug("views")["view_count"] == 2
    assert blog.list()[0]["view_count"] == 2
    assert blog.list_tags() == ["meta"]

    with pytest.raises(NotFoundError):
        blog.get(999)


def test_blog_update_replaces_tags_and_keeps_content(blog: blog_module.BlogService) -> None:
    post = blog.create({"title": "T", "content": "body", "tags": [{"name": "a"}, {"name": "b"}]})

    updated = blog.update(post["id"], {"content": "", "tags": [{"name": "c"}], "slug": "t"})

    assert updated["content"] == "body"
    assert updated["slug"] == "t"
    assert [t["name"] for t in updated["tags"]] == ["c"]


# ---- testimonials -----------------------------------------------------------


@pytest.fixture
def testimonials(db: Database) -> testimonial_module.TestimonialService:
    repository = EntityRepository(db, Testimonial, entity_name="Testimonial")
    return testimonial_module.TestimonialService(repository)


def test_testimonial_defaults_and_filters(
    testimonials: testimonial_module.TestimonialService,
) -> None:
    ada = testimonials.create({"name": "Ada", "message": "Great work", "is_featured": True})
    testimonials.create({"name": "Bob", "message": "Fine", "rating": 3, "status": "pending"})

    assert ada["rating"] == 5
    assert ada["status"] == "approved"
    assert [t["name"] for t in testimonials.list_featured()] == ["Ada"]
    assert [t["name"] for t in testimonials.list_by_status("pending")] == ["Bob"]

    with pytest.raises(ValidationError):
        testimonials.list_by_status("unknown")


@pytest.mark.parametrize("rating", [0, 6])
def test_testimonial_rating_range(
    testimonials: testimonial_module.TestimonialService, rating: int
) -> None:
    with pytest.raises(ValidationError, match="rating"):
        testimonials.create({"name": "Ada", "message": "Hi", "rating": rating})


def test_testimonial_update_missing(testimonials: testimonial_module.TestimonialService) -> None:
    with pytest.raises(NotFoundError):
        testimonials.update(5, {"message": "x"})


# ---- site -------------------------------------------------------------------


def test_sections_social_links_and_settings(db: Database) -> None:
    sections = SectionService(EntityRepository(db, Section, entity_name="Section"))
    links = SocialLinkService(EntityRepository(db, SocialLink, entity_name="Social link"))
    settings = SettingService(EntityRepository(db, Setting, entity_name="Setting"))

    about = sections.create({"section_key": "about", "label": "About me"})
    assert about["is_active"] is True
    with pytest.raises(PersistenceError):
        sections.create({"section_key": "about", "label": "Again"})

    github = links.create({"platform": "GitHub", "url": "https://github.com/me"})
    assert [link["platform"] for link in links.list()] == ["GitHub"]

    theme = settings.create({"key": "theme", "value": "dark"})
    assert theme["data_type"] == "string"
    with pytest.raises(ValidationError, match="data_type"):
        settings.create({"key": "x", "data_type": "date"})

    sections.delete(about["id"])
    links.delete(github["id"])
    settings.delete(theme["id"])
    assert sections.list() == links.list() == settings.list() == []
    with pytest.raises(NotFoundError):
        settings.delete(theme["id"])
