"""Work experience routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from portfolio_cms.api.dependencies import get_experience_service
from portfolio_cms.api.schemas.experiences import (
    ExperienceCreateRequest,
    ExperienceResponse,
    ExperienceUpdateRequest,
)
from portfolio_cms.services import ExperienceService

router = APIRouter(prefix="/experiences", tags=["experiences"])

ExperienceServiceDep = Annotated[ExperienceService, Depends(get_experience_service)]


@router.get("", response_model=list[ExperienceResponse])
def list_experiences(service: ExperienceServiceDep) -> list[ExperienceResponse]:
    """List experiences with responsibilities and skills, ordered for display."""
    return [ExperienceResponse(**experience) for experience in service.list()]


@router.get("/{experience_id}", response_model=ExperienceResponse)
def get_experience(
    experience_id: Annotated[int, Path(description="Experience ID")],
    service: ExperienceServiceDep,
) -> ExperienceResponse:
    return ExperienceResponse(**service.get(experience_id))


@router.post("", response_model=ExperienceResponse, status_code=status.HTTP_201_CREATED)
def create_experience(
    data: ExperienceCreateRequest, service: ExperienceServiceDep
) -> ExperienceResponse:
    return ExperienceResponse(**service.create(data.model_dump()))


@router.put("/{experience_id}", response_model=ExperienceResponse)
def update_experience(
    experience_id: Annotated[int, Path(description="Experience ID")],
    data: ExperienceUpdateRequest,
    service: ExperienceServiceDep,
) -> ExperienceResponse:
    """Update an experience. Omitted lists keep their stored entries."""
    return ExperienceResponse(**service.update(experience_id, data.model_dump()))


@router.delete("/{experience_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_experience(
    experience_id: Annotated[int, Path(description="Experience ID")],
    service: ExperienceServiceDep,
) -> Response:
    service.delete(experience_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
