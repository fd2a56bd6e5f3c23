"""Blog aggregate: post + tags, with slug lookup and view counting."""

from __future__ import annotations

from sqlalchemy import select, update

from portfolio_cms.data.crud.aggregate import AggregateRepository, ChildCollection, transaction
from portfolio_cms.data.models import BlogPost, BlogPostTag
from portfolio_cms.errors import NotFoundError


class BlogPostRepository(AggregateRepository):
    model = BlogPost
    entity_name = "Blog post"
    parent_order_by = (BlogPost.publish_date.desc(), BlogPost.created_at.desc(), BlogPost.id)
    children = (
        ChildCollection(
            key="tags",
            model=BlogPostTag,
            parent_column="post_id",
            order_by=("display_order", "name"),
            conflict_columns=("post_id", "name"),
        ),
    )

    def get_by_slug(self, slug: str) -> dict:
        with transaction(self.db, f"load blog post {slug!r}") as session:
            post_id = session.scalar(select(BlogPost.id).where(BlogPost.slug == slug))
            if post_id is None:
                raise NotFoundError(self.entity_name, slug)
            return self._load(session, post_id)

    def slug_taken(self, slug: str, *, exclude_id: int | None = None) -> bool:
        with transaction(self.db, f"check blog slug {slug!r}") as session:
            stmt = select(BlogPost.id).where(BlogPost.slug == slug)
            if exclude_id is not None:
                stmt = stmt.where(BlogPost.id != exclude_id)
            return session.scalar(stmt) is not None

    def increment_view_count(self, post_id: int) -> None:
        with transaction(self.db, f"count view of blog post {post_id}") as session:
            session.execute(
                update(BlogPost)
                .where(BlogPost.id == post_id)
                .values(view_count=BlogPost.view_count + 1)
            )

    def list_tags(self) -> list[str]:
        with transaction(self.db, "list blog tags") as session:
            stmt = select(BlogPostTag.name).distinct().order_by(BlogPostTag.name)
            return list(session.scalars(stmt))
