"""Education routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from portfolio_cms.api.dependencies import get_education_service
from portfolio_cms.api.schemas.educations import (
    EducationCreateRequest,
    EducationResponse,
    EducationUpdateRequest,
)
from portfolio_cms.services import EducationService

router = APIRouter(prefix="/education", tags=["education"])

EducationServiceDep = Annotated[EducationService, Depends(get_education_service)]


@router.get("", response_model=list[EducationResponse])
def list_educations(service: EducationServiceDep) -> list[EducationResponse]:
    return [EducationResponse(**education) for education in service.list()]


@router.get("/{education_id}", response_model=EducationResponse)
def get_education(
    education_id: Annotated[int, Path(description="Education entry ID")],
    service: EducationServiceDep,
) -> EducationResponse:
    return EducationResponse(**service.get(education_id))


@router.post("", response_model=EducationResponse, status_code=status.HTTP_201_CREATED)
def create_education(
    data: EducationCreateRequest, service: EducationServiceDep
) -> EducationResponse:
    """Create a new education entry with its achievements."""
    return EducationResponse(**service.create(data.model_dump()))


@router.put("/{education_id}", response_model=EducationResponse)
def update_education(
    education_id: Annotated[int, Path(description="Education entry ID")],
    data: EducationUpdateRequest,
    service: EducationServiceDep,
) -> EducationResponse:
    """Update an existing education entry. Only provided fields are updated."""
    return EducationResponse(**service.update(education_id, data.model_dump()))


@router.delete("/{education_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_education(
    education_id: Annotated[int, Path(description="Education entry ID")],
    service: EducationServiceDep,
) -> Response:
    service.delete(education_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
