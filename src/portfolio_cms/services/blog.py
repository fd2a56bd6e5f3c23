"""Blog service: posts with tags, addressed by id or slug."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from typing import Any

from portfolio_cms.data.crud import BlogPostRepository
from portfolio_cms.errors import ValidationError
from portfolio_cms.services.common import is_blank, ordered_children, pick_fields, require_fields

logger = logging.getLogger(__name__)

BLOG_STATUSES = ("draft", "published", "archived")

_BLOG_FIELDS = ("title", "content", "excerpt", "featured_image", "publish_date", "status")

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lower-case ``text`` and join its alphanumeric runs with hyphens."""
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def parse_publish_date(value: Any) -> datetime | None:
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError as exc:
            raise ValidationError(f"publish_date must be an ISO timestamp, got {value!r}") from exc
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _check_status(status: Any) -> None:
    if not is_blank(status) and status not in BLOG_STATUSES:
        raise ValidationError(f"status must be one of {', '.join(BLOG_STATUSES)}")


class BlogService:
    def __init__(self, repository: BlogPostRepository) -> None:
        self.repository = repository

    def _unique_slug(self, base: str, exclude_id: int | None = None) -> str:
        slug = base or "post"
        suffix = 2
        while self.repository.slug_taken(slug, exclude_id=exclude_id):
            slug = f"{base or 'post'}-{suffix}"
            suffix += 1
        return slug

    def _explicit_slug(self, value: str, exclude_id: int | None = None) -> str:
        slug = slugify(value)
        if not slug:
            raise ValidationError("slug must contain letters or digits")
        if self.repository.slug_taken(slug, exclude_id=exclude_id):
            raise ValidationError(f"slug {slug!r} is already in use")
        return slug

    def create(self, data: dict[str, Any]) -> dict:
        """Create a post. A slug is derived from the title unless one is given.

        Publishing without a publish date stamps the current time.
        """
        require_fields(data, "title", "content")
        _check_status(data.get("status"))

        if is_blank(data.get("slug")):
            slug = self._unique_slug(slugify(data["title"]))
        else:
            slug = self._explicit_slug(data["slug"])

        status = data.get("status") or "draft"
        publish_date = parse_publish_date(data.get("publish_date"))
        if status == "published" and publish_date is None:
            publish_date = datetime.now(UTC)

        fields = {
            "title": data["title"].strip(),
            "content": data["content"],
            "excerpt": data.get("excerpt") or None,
            "slug": slug,
            "featured_image": data.get("featured_image") or None,
            "publish_date": publish_date,
            "status": status,
        }
        tags = ordered_children(data.get("tags"), "name")
        post = self.repository.create_with_children(fields, {"tags": tags})
        logger.info("Created blog post %d (%s)", post["id"], post["slug"])
        return post

    def update(self, post_id: int, data: dict[str, Any]) -> dict:
        existing = self.repository.get_with_children(post_id)
        _check_status(data.get("status"))

        changes = pick_fields(data, _BLOG_FIELDS)
        if "publish_date" in changes:
            changes["publish_date"] = parse_publish_date(changes["publish_date"])
        if not is_blank(data.get("slug")):
            changes["slug"] = self._explicit_slug(data["slug"], exclude_id=post_id)
        if changes.get("status") == "published" and existing["publish_date"] is None:
            changes.setdefault("publish_date", datetime.now(UTC))

        children = {}
        if data.get("tags") is not None:
            children["tags"] = ordered_children(data["tags"], "name")
        return self.repository.update_with_children(post_id, changes, children)

    def delete(self, post_id: int) -> None:
        self.repository.delete_with_children(post_id)
        logger.info("Deleted blog post %d", post_id)

    def get(self, post_id: int) -> dict:
        """Return a post and count the read."""
        post = self.repository.get_with_children(post_id)
        return self._count_view(post)

    def get_by_slug(self, slug: str) -> dict:
        post = self.repository.get_by_slug(slug)
        return self._count_view(post)

    def _count_view(self, post: dict) -> dict:
        self.repository.increment_view_count(post["id"])
        post["view_count"] += 1
        return post

    def list(self) -> list[dict]:
        return self.repository.list_with_children()

    def list_published(self) -> list[dict]:
        return self.repository.list_with_children(status="published")

    def list_tags(self) -> list[str]:
        return self.repository.list_tags()
