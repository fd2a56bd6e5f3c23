"""Tests for transactional aggregate reads and writes."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import pytest
from sqlalchemy import event, func, select

from portfolio_cms.data.crud import (
    BlogPostRepository,
    EducationRepository,
    EntityRepository,
    ExperienceRepository,
    ProjectRepository,
)
from portfolio_cms.data.db import Database
from portfolio_cms.data.models import (
    Experience,
    ExperienceResponsibility,
    ExperienceSkill,
    Setting,
)
from portfolio_cms.errors import NotFoundError, PersistenceError


@contextmanager
def count_queries(db: Database) -> Iterator[list[str]]:
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany) -> None:
        statements.append(statement)

    event.listen(db.engine, "before_cursor_execute", record)
    try:
        yield statements
    finally:
        event.remove(db.engine, "before_cursor_execute", record)


def _row_count(db: Database, model) -> int:
    with db.session() as session:
        return session.scalar(select(func.count()).select_from(model))


@pytest.fixture
def experiences(db: Database) -> ExperienceRepository:
    return ExperienceRepository(db)


def _create_experience(repo: ExperienceRepository, **overrides) -> dict:
    fields = {"title": "Backend Engineer", "company": "Acme", "display_order": 0}
    fields.update(overrides)
    return repo.create_with_children(
        fields,
        {
            "responsibilities": [
                {"description": "Ship APIs", "display_order": 1},
                {"description": "Review code", "display_order": 0},
            ],
            "skills": [
                {"skill_name": "Python", "display_order": 0},
                {"skill_name": "SQL", "display_order": 1},
            ],
        },
    )


def test_create_and_get_returns_children_in_display_order(
    experiences: ExperienceRepository,
) -> None:
    created = _create_experience(experiences)

    assert created["id"] > 0
    assert [r["description"] for r in created["responsibilities"]] == ["Review code", "Ship APIs"]
    assert [s["skill_name"] for s in created["skills"]] == ["Python", "SQL"]
    assert all(r["experience_id"] == created["id"] for r in created["responsibilities"])

    fetched = experiences.get_with_children(created["id"])
    assert fetched["title"] == "Backend Engineer"
    assert fetched["responsibilities"] == created["responsibilities"]
    assert fetched["skills"] == created["skills"]


def test_duplicate_child_rows_are_dropped_not_fatal(
    experiences: ExperienceRepository, db: Database
) -> None:
    created = experiences.create_with_children(
        {"title": "Engineer", "company": "Acme"},
        {
            "skills": [
                {"skill_name": "Go", "display_order": 0},
                {"skill_name": "Go", "display_order": 1},
                {"skill_name": "Rust", "display_order": 2},
            ]
        },
    )

    assert [s["skill_name"] for s in created["skills"]] == ["Go", "Rust"]
    assert _row_count(db, ExperienceSkill) == 2


def test_update_replaces_children(experiences: ExperienceRepository, db: Database) -> None:
    created = _create_experience(experiences)

    updated = experiences.update_with_children(
        created["id"],
        {"title": "Staff Engineer"},
        {
            "responsibilities": [{"description": "Lead team", "display_order": 0}],
            "skills": [],
        },
    )

    assert updated["title"] == "Staff Engineer"
    assert updated["company"] == "Acme"
    assert [r["description"] for r in updated["responsibilities"]] == ["Lead team"]
    assert updated["skills"] == []
    assert _row_count(db, ExperienceResponsibility) == 1
    assert _row_count(db, ExperienceSkill) == 0


def test_update_leaves_unlisted_collections_alone(experiences: ExperienceRepository) -> None:
    created = _create_experience(experiences)

    updated = experiences.update_with_children(
        created["id"], {"location": "Remote"}, {"skills": [{"skill_name": "Go"}]}
    )

    assert updated["location"] == "Remote"
    assert [s["skill_name"] for s in updated["skills"]] == ["Go"]
    assert updated["responsibilities"] == created["responsibilities"]


def test_update_missing_entity_raises_not_found(experiences: ExperienceRepository) -> None:
    with pytest.raises(NotFoundError):
        experiences.update_with_children(404, {"title": "x"}, {"skills": []})


def test_delete_removes_parent_and_children(
    experiences: ExperienceRepository, db: Database
) -> None:
    created = _create_experience(experiences)
    _create_experience(experiences, company="Other")

    experiences.delete_with_children(created["id"])

    with pytest.raises(NotFoundError):
        experiences.get_with_children(created["id"])
    assert _row_count(db, Experience) == 1
    assert _row_count(db, ExperienceResponsibility) == 2
    assert _row_count(db, ExperienceSkill) == 2


def test_delete_missing_entity_writes_nothing(
    experiences: ExperienceRepository, db: Database
) -> None:
    _create_experience(experiences)

    with count_queries(db) as statements, pytest.raises(NotFoundError):
        experiences.delete_with_children(999)

    assert not any(s.lstrip().upper().startswith("DELETE") for s in statements)
    assert _row_count(db, Experience) == 1


def test_failed_child_insert_rolls_back_parent(
    experiences: ExperienceRepository, db: Database
) -> None:
    with pytest.raises(PersistenceError):
        experiences.create_with_children(
            {"title": "Engineer", "company": "Acme"},
            {"responsibilities": [{"description": None, "display_order": 0}]},
        )

    assert _row_count(db, Experience) == 0
    assert _row_count(db, ExperienceResponsibility) == 0


def test_failed_update_keeps_previous_children(
    experiences: ExperienceRepository,
) -> None:
    created = _create_experience(experiences)

    with pytest.raises(PersistenceError):
        experiences.update_with_children(
            created["id"],
            {"title": "Changed"},
            {"responsibilities": [{"description": None}]},
        )

    current = experiences.get_with_children(created["id"])
    assert current["title"] == "Backend Engineer"
    assert current["responsibilities"] == created["responsibilities"]


def test_constraint_violation_on_parent_is_persistence_error(
    experiences: ExperienceRepository,
) -> None:
    with pytest.raises(PersistenceError):
        experiences.create_with_children(
            {"title": "Engineer", "company": "Acme", "display_order": -1}, {}
        )


def test_list_orders_parents_and_groups_children(experiences: ExperienceRepository) -> None:
    second = _create_experience(experiences, company="Second", display_order=2)
    first = _create_experience(experiences, company="First", display_order=1)
    bare = experiences.create_with_children(
        {"title": "Intern", "company": "Bare", "display_order": 3}, {}
    )

    listed = experiences.list_with_children()

    assert [e["id"] for e in listed] == [first["id"], second["id"], bare["id"]]
    assert listed[0]["skills"] == first["skills"]
    assert listed[2]["responsibilities"] == []
    assert listed[2]["skills"] == []


def test_list_issues_constant_number_of_queries(
    experiences: ExperienceRepository, db: Database
) -> None:
    _create_experience(experiences)
    with count_queries(db) as statements:
        experiences.list_with_children()
    single = len(statements)

    for index in range(5):
        _create_experience(experiences, company=f"Company {index}")
    with count_queries(db) as statements:
        listed = experiences.list_with_children()

    assert len(listed) == 6
    assert len(statements) == single == 1 + len(ExperienceRepository.children)


def test_list_with_no_parents_skips_child_queries(
    experiences: ExperienceRepository, db: Database
) -> None:
    with count_queries(db) as statements:
        assert experiences.list_with_children() == []
    assert len(statements) == 1


def test_list_filters(db: Database) -> None:
    posts = BlogPostRepository(db)
    posts.create_with_children(
        {"title": "Draft", "content": "c", "slug": "draft", "status": "draft"}, {}
    )
    published = posts.create_with_children(
        {"title": "Live", "content": "c", "slug": "live", "status": "published"},
        {"tags": [{"name": "python", "display_order": 0}]},
    )

    listed = posts.list_with_children(status="published")

    assert [p["id"] for p in listed] == [published["id"]]
    assert [t["name"] for t in listed[0]["tags"]] == ["python"]


def test_education_achievements_round_trip(db: Database) -> None:
    repo = EducationRepository(db)
    created = repo.create_with_children(
        {"school": "UBC", "degree": "BSc", "start_year": 2019},
        {
            "achievements": [
                {"achievement": "Dean's List", "display_order": 1},
                {"achievement": "Scholarship", "display_order": 0},
            ]
        },
    )

    assert [a["achievement"] for a in created["achievements"]] == ["Scholarship", "Dean's List"]


def test_project_tags_listing(db: Database) -> None:
    repo = ProjectRepository(db)
    base = {"title": "P", "description": "d", "code_url": "https://git.example/p"}
    first = repo.create_with_children(
        base, {"tags": [{"name": "python", "color": "#3776ab", "display_order": 0}]}
    )
    repo.create_with_children(
        base,
        {
            "tags": [
                {"name": "python", "color": "#000000", "display_order": 0},
                {"name": "fastapi", "color": None, "display_order": 1},
            ]
        },
    )

    assert "tags" not in repo.get(first["id"])
    assert repo.list_tags() == [
        {"name": "fastapi", "color": None},
        {"name": "python", "color": "#3776ab"},
    ]
    assert all("tags" not in project for project in repo.list_projects())


def test_blog_slug_lookup_and_view_count(db: Database) -> None:
    repo = BlogPostRepository(db)
    post = repo.create_with_children({"title": "Hello", "content": "c", "slug": "hello"}, {})

    repo.increment_view_count(post["id"])
    repo.increment_view_count(post["id"])

    assert repo.get_by_slug("hello")["view_count"] == 2
    assert repo.slug_taken("hello") is True
    assert repo.slug_taken("hello", exclude_id=post["id"]) is False
    with pytest.raises(NotFoundError):
        repo.get_by_slug("missing")


def test_entity_repository_crud(db: Database) -> None:
    repo = EntityRepository(db, Setting, entity_name="Setting", order_by=(Setting.key,))
    theme = repo.create({"key": "theme", "value": "dark"})
    repo.create({"key": "accent", "value": "#ff0000"})

    assert [s["key"] for s in repo.list()] == ["accent", "theme"]
    assert repo.update(theme["id"], {"value": "light"})["value"] == "light"
    assert repo.list(key="theme")[0]["value"] == "light"

    repo.delete(theme["id"])
    with pytest.raises(NotFoundError):
        repo.get(theme["id"])
    with pytest.raises(NotFoundError):
        repo.delete(theme["id"])


def test_entity_repository_unique_violation(db: Database) -> None:
    repo = EntityRepository(db, Setting, entity_name="Setting")
    repo.create({"key": "theme", "value": "dark"})

    with pytest.raises(PersistenceError):
        repo.create({"key": "theme", "value": "light"})
