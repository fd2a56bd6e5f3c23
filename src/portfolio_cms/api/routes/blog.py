"""Blog routes for the API. Reading a single post counts as a view."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from portfolio_cms.api.dependencies import get_blog_service
from portfolio_cms.api.schemas.blog import (
    BlogPostCreateRequest,
    BlogPostResponse,
    BlogPostUpdateRequest,
)
from portfolio_cms.services import BlogService

router = APIRouter(prefix="/blog", tags=["blog"])

BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


@router.get("", response_model=list[BlogPostResponse])
def list_posts(service: BlogServiceDep) -> list[BlogPostResponse]:
    return [BlogPostResponse(**post) for post in service.list()]


@router.get("/published", response_model=list[BlogPostResponse])
def list_published_posts(service: BlogServiceDep) -> list[BlogPostResponse]:
    return [BlogPostResponse(**post) for post in service.list_published()]


@router.get("/tags", response_model=list[str])
def list_blog_tags(service: BlogServiceDep) -> list[str]:
    return service.list_tags()


@router.get("/slug/{slug}", response_model=BlogPostResponse)
def get_post_by_slug(
    slug: Annotated[str, Path(description="URL slug of the post")],
    service: BlogServiceDep,
) -> BlogPostResponse:
    return BlogPostResponse(**service.get_by_slug(slug))


@router.get("/{post_id}", response_model=BlogPostResponse)
def get_post(
    post_id: Annotated[int, Path(description="Post ID")],
    service: BlogServiceDep,
) -> BlogPostResponse:
    return BlogPostResponse(**service.get(post_id))


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
def create_post(data: BlogPostCreateRequest, service: BlogServiceDep) -> BlogPostResponse:
    return BlogPostResponse(**service.create(data.model_dump()))


@router.put("/{post_id}", response_model=BlogPostResponse)
def update_post(
    post_id: Annotated[int, Path(description="Post ID")],
    data: BlogPostUpdateRequest,
    service: BlogServiceDep,
) -> BlogPostResponse:
    return BlogPostResponse(**service.update(post_id, data.model_dump()))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: Annotated[int, Path(description="Post ID")],
    service: BlogServiceDep,
) -> Response:
    service.delete(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
