"""Project service: projects with an optional image and a list of tags."""

from __future__ import annotations

import logging
from typing import Any, TypedDict

from portfolio_cms.data.crud import ProjectRepository
from portfolio_cms.errors import NotFoundError, ValidationError
from portfolio_cms.services.common import (
    check_display_order,
    is_blank,
    ordered_children,
    pick_fields,
    require_fields,
)
from portfolio_cms.services.storage import StorageBackend
from portfolio_cms.services.uploads import (
    UploadedFile,
    UploadPolicy,
    create_with_upload,
    delete_with_file,
    replace_with_upload,
)

logger = logging.getLogger(__name__)

__all__ = ["PROJECT_IMAGE_POLICY", "ProjectData", "ProjectService"]

PROJECT_IMAGE_POLICY = UploadPolicy(
    folder="projects",
    max_size_mb=10,
    allowed_extensions=frozenset({".jpg", ".jpeg", ".png", ".webp"}),
    required=False,
    field="image",
)

PROJECT_STATUSES = ("published", "draft", "archived")

_PROJECT_FIELDS = ("title", "description", "demo_url", "code_url", "display_order", "status")


class TagData(TypedDict, total=False):
    name: str
    color: str | None
    display_order: int | None


class ProjectData(TypedDict, total=False):
    """Fields accepted when creating or updating a project."""

    title: str
    description: str
    demo_url: str
    code_url: str
    display_order: int
    is_featured: bool
    status: str
    tags: list[TagData]


def _validate(data: ProjectData) -> None:
    check_display_order(data.get("display_order"))
    status = data.get("status")
    if not is_blank(status) and status not in PROJECT_STATUSES:
        raise ValidationError(f"status must be one of {', '.join(PROJECT_STATUSES)}")


class ProjectService:
    def __init__(
        self,
        repository: ProjectRepository,
        storage: StorageBackend,
        policy: UploadPolicy = PROJECT_IMAGE_POLICY,
    ) -> None:
        self.repository = repository
        self.storage = storage
        self.policy = policy

    def create(self, data: ProjectData, image: UploadedFile | None = None) -> dict:
        """Create a project, uploading ``image`` first when one is given.

        Raises:
            ValidationError: Required fields are missing or the image is rejected.
            UploadError: The storage backend failed; nothing was saved.
            PersistenceError: The project could not be saved; the upload was removed.
        """
        require_fields(data, "title", "description", "code_url")
        _validate(data)

        fields: dict[str, Any] = {
            "title": data["title"],
            "description": data["description"],
            "code_url": data["code_url"],
            "demo_url": data.get("demo_url") or "#",
            "display_order": data.get("display_order") or 0,
            "is_featured": bool(data.get("is_featured", False)),
            "status": data.get("status") or "published",
        }
        tags = ordered_children(data.get("tags"), "name", "color")

        def persist(image_url: str | None) -> dict:
            return self.repository.create_with_children(
                {**fields, "image_url": image_url}, {"tags": tags}
            )

        project = create_with_upload(self.storage, self.policy, image, persist)
        logger.info("Created project %d (%s)", project["id"], project["title"])
        return project

    def update(
        self, project_id: int, data: ProjectData, image: UploadedFile | None = None
    ) -> dict:
        """Update a project. Omitted fields keep their values; tags are replaced if given."""
        existing = self.repository.get(project_id)
        _validate(data)

        changes = pick_fields(data, _PROJECT_FIELDS, flags=("is_featured",))
        children = {}
        if data.get("tags") is not None:
            children["tags"] = ordered_children(data["tags"], "name", "color")

        def persist(image_url: str | None) -> dict:
            fields = {**changes, "image_url": image_url} if image_url else changes
            return self.repository.update_with_children(project_id, fields, children)

        return replace_with_upload(
            self.storage, self.policy, image, existing["image_url"], persist
        )

    def delete(self, project_id: int) -> None:
        existing = self.repository.get(project_id)
        delete_with_file(
            self.storage,
            existing["image_url"],
            lambda: self.repository.delete_with_children(project_id),
        )
        logger.info("Deleted project %d", project_id)

    def get(self, project_id: int, *, with_tags: bool = True) -> dict:
        if with_tags:
            return self.repository.get_with_children(project_id)
        return self.repository.get(project_id)

    def list(self, *, with_tags: bool = True) -> list[dict]:
        if with_tags:
            return self.repository.list_with_children()
        return self.repository.list_projects()

    def list_tags(self) -> list[dict]:
        return self.repository.list_tags()

    def add_tag(self, project_id: int, name: str, color: str | None = None) -> dict:
        """Append a tag by rewriting the project's whole tag set."""
        if is_blank(name):
            raise ValidationError("name is required")
        project = self.repository.get_with_children(project_id)
        tags = [
            {"name": tag["name"], "color": tag["color"], "display_order": tag["display_order"]}
            for tag in project["tags"]
        ]
        next_order = max((tag["display_order"] for tag in tags), default=-1) + 1
        tags.append({"name": name.strip(), "color": color, "display_order": next_order})
        return self.repository.update_with_children(project_id, {}, {"tags": tags})

    def remove_tag(self, project_id: int, name: str) -> dict:
        project = self.repository.get_with_children(project_id)
        tags = [
            {"name": tag["name"], "color": tag["color"], "display_order": tag["display_order"]}
            for tag in project["tags"]
            if tag["name"] != name
        ]
        if len(tags) == len(project["tags"]):
            raise NotFoundError("Tag", name)
        return self.repository.update_with_children(project_id, {}, {"tags": tags})
