"""Project routes for the API.

Create and update take multipart form data so an image can travel with the
fields. Tags are sent as repeated ``tags`` form fields, with optional
repeated ``tag_colors`` fields matched to them by position.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Query, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from portfolio_cms.api.dependencies import get_project_service, read_upload
from portfolio_cms.api.schemas.projects import (
    ProjectResponse,
    TagCreateRequest,
    TagSummary,
)
from portfolio_cms.services import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])

ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]


def _tag_items(tags: list[str] | None, colors: list[str] | None) -> list[dict] | None:
    """Pair each tag name with the colour sent at the same position, if any."""
    if tags is None:
        return None
    colors = colors or []
    return [
        {"name": name, "color": (colors[index] if index < len(colors) else None) or None}
        for index, name in enumerate(tags)
    ]


@router.get("", response_model=list[ProjectResponse])
def list_projects(
    service: ProjectServiceDep,
    with_tags: Annotated[bool, Query(description="Attach each project's tags")] = True,
) -> list[ProjectResponse]:
    return [ProjectResponse(**project) for project in service.list(with_tags=with_tags)]


@router.get("/tags", response_model=list[TagSummary])
def list_project_tags(service: ProjectServiceDep) -> list[TagSummary]:
    """List every distinct tag used by any project."""
    return [TagSummary(**tag) for tag in service.list_tags()]


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: Annotated[int, Path(description="Project ID")],
    service: ProjectServiceDep,
    with_tags: bool = True,
) -> ProjectResponse:
    return ProjectResponse(**service.get(project_id, with_tags=with_tags))


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing field or rejected image"},
        502: {"description": "Image storage failed"},
    },
)
async def create_project(
    service: ProjectServiceDep,
    title: Annotated[str, Form()],
    description: Annotated[str, Form()],
    code_url: Annotated[str, Form()],
    demo_url: Annotated[str | None, Form()] = None,
    display_order: Annotated[int | None, Form()] = None,
    is_featured: Annotated[bool, Form()] = False,
    project_status: Annotated[str | None, Form(alias="status")] = None,
    tags: Annotated[list[str] | None, Form()] = None,
    tag_colors: Annotated[
        list[str] | None, Form(description="Colour for the tag at the same position")
    ] = None,
    image: Annotated[UploadFile | None, File(description="Project image")] = None,
) -> ProjectResponse:
    data = {
        "title": title,
        "description": description,
        "code_url": code_url,
        "demo_url": demo_url,
        "display_order": display_order,
        "is_featured": is_featured,
        "status": project_status,
        "tags": _tag_items(tags, tag_colors) or [],
    }
    project = await run_in_threadpool(service.create, data, await read_upload(image))
    return ProjectResponse(**project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: Annotated[int, Path(description="Project ID")],
    service: ProjectServiceDep,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    code_url: Annotated[str | None, Form()] = None,
    demo_url: Annotated[str | None, Form()] = None,
    display_order: Annotated[int | None, Form()] = None,
    is_featured: Annotated[bool, Form()] = False,
    project_status: Annotated[str | None, Form(alias="status")] = None,
    tags: Annotated[list[str] | None, Form()] = None,
    tag_colors: Annotated[
        list[str] | None, Form(description="Colour for the tag at the same position")
    ] = None,
    image: Annotated[UploadFile | None, File(description="Replacement image")] = None,
) -> ProjectResponse:
    """Update a project. Empty fields keep their value; a new image replaces the old one."""
    data = {
        "title": title,
        "description": description,
        "code_url": code_url,
        "demo_url": demo_url,
        "display_order": display_order,
        "is_featured": is_featured,
        "status": project_status,
        "tags": _tag_items(tags, tag_colors),
    }
    image_file = await read_upload(image)
    project = await run_in_threadpool(service.update, project_id, data, image_file)
    return ProjectResponse(**project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: Annotated[int, Path(description="Project ID")],
    service: ProjectServiceDep,
) -> Response:
    service.delete(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{project_id}/tags",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_project_tag(
    project_id: Annotated[int, Path(description="Project ID")],
    tag: TagCreateRequest,
    service: ProjectServiceDep,
) -> ProjectResponse:
    return ProjectResponse(**service.add_tag(project_id, tag.name, tag.color))


@router.delete("/{project_id}/tags/{name}", response_model=ProjectResponse)
def remove_project_tag(
    project_id: Annotated[int, Path(description="Project ID")],
    name: Annotated[str, Path(description="Tag name")],
    service: ProjectServiceDep,
) -> ProjectResponse:
    return ProjectResponse(**service.remove_tag(project_id, name))
