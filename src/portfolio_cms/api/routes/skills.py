"""Skill routes for the API. Icons are uploaded with the multipart form."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from portfolio_cms.api.dependencies import get_skill_service, read_upload
from portfolio_cms.api.schemas.skills import SkillResponse
from portfolio_cms.services import SkillService

router = APIRouter(prefix="/skills", tags=["skills"])

SkillServiceDep = Annotated[SkillService, Depends(get_skill_service)]


@router.get("", response_model=list[SkillResponse])
def list_skills(service: SkillServiceDep) -> list[SkillResponse]:
    return [SkillResponse(**skill) for skill in service.list()]


@router.get("/featured", response_model=list[SkillResponse])
def list_featured_skills(service: SkillServiceDep) -> list[SkillResponse]:
    return [SkillResponse(**skill) for skill in service.list_featured()]


@router.get("/category/{category}", response_model=list[SkillResponse])
def list_skills_by_category(
    category: Annotated[str, Path(description="Skill category, e.g. programming")],
    service: SkillServiceDep,
) -> list[SkillResponse]:
    return [SkillResponse(**skill) for skill in service.list_by_category(category)]


@router.get("/{skill_id}", response_model=SkillResponse)
def get_skill(
    skill_id: Annotated[int, Path(description="Skill ID")],
    service: SkillServiceDep,
) -> SkillResponse:
    return SkillResponse(**service.get(skill_id))


@router.post("", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def create_skill(
    service: SkillServiceDep,
    name: Annotated[str, Form()],
    value: Annotated[int | None, Form(description="Proficiency, 0 to 100")] = None,
    category: Annotated[str | None, Form()] = None,
    display_order: Annotated[int | None, Form()] = None,
    is_featured: Annotated[bool, Form()] = False,
    icon: Annotated[UploadFile | None, File(description="Skill icon")] = None,
) -> SkillResponse:
    data = {
        "name": name,
        "value": value,
        "category": category,
        "display_order": display_order,
        "is_featured": is_featured,
    }
    skill = await run_in_threadpool(service.create, data, await read_upload(icon))
    return SkillResponse(**skill)


@router.put("/{skill_id}", response_model=SkillResponse)
async def update_skill(
    skill_id: Annotated[int, Path(description="Skill ID")],
    service: SkillServiceDep,
    name: Annotated[str | None, Form()] = None,
    value: Annotated[int | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    display_order: Annotated[int | None, Form()] = None,
    is_featured: Annotated[bool, Form()] = False,
    icon: Annotated[UploadFile | None, File(description="Replacement icon")] = None,
) -> SkillResponse:
    data = {
        "name": name,
        "value": value,
        "category": category,
        "display_order": display_order,
        "is_featured": is_featured,
    }
    skill = await run_in_threadpool(service.update, skill_id, data, await read_upload(icon))
    return SkillResponse(**skill)


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(
    skill_id: Annotated[int, Path(description="Skill ID")],
    service: SkillServiceDep,
) -> Response:
    service.delete(skill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
