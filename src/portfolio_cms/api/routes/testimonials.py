"""Testimonial routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from portfolio_cms.api.dependencies import get_testimonial_service
from portfolio_cms.api.schemas.testimonials import (
    TestimonialCreateRequest,
    TestimonialResponse,
    TestimonialUpdateRequest,
)
from portfolio_cms.services import TestimonialService

router = APIRouter(prefix="/testimonials", tags=["testimonials"])

TestimonialServiceDep = Annotated[TestimonialService, Depends(get_testimonial_service)]


@router.get("", response_model=list[TestimonialResponse])
def list_testimonials(service: TestimonialServiceDep) -> list[TestimonialResponse]:
    return [TestimonialResponse(**item) for item in service.list()]


@router.get("/featured", response_model=list[TestimonialResponse])
def list_featured_testimonials(service: TestimonialServiceDep) -> list[TestimonialResponse]:
    return [TestimonialResponse(**item) for item in service.list_featured()]


@router.get("/status/{testimonial_status}", response_model=list[TestimonialResponse])
def list_testimonials_by_status(
    testimonial_status: Annotated[str, Path(description="pending, approved or rejected")],
    service: TestimonialServiceDep,
) -> list[TestimonialResponse]:
    return [TestimonialResponse(**item) for item in service.list_by_status(testimonial_status)]


@router.get("/{testimonial_id}", response_model=TestimonialResponse)
def get_testimonial(
    testimonial_id: Annotated[int, Path(description="Testimonial ID")],
    service: TestimonialServiceDep,
) -> TestimonialResponse:
    return TestimonialResponse(**service.get(testimonial_id))


@router.post("", response_model=TestimonialResponse, status_code=status.HTTP_201_CREATED)
def create_testimonial(
    data: TestimonialCreateRequest, service: TestimonialServiceDep
) -> TestimonialResponse:
    return TestimonialResponse(**service.create(data.model_dump()))


@router.put("/{testimonial_id}", response_model=TestimonialResponse)
def update_testimonial(
    testimonial_id: Annotated[int, Path(description="Testimonial ID")],
    data: TestimonialUpdateRequest,
    service: TestimonialServiceDep,
) -> TestimonialResponse:
    return TestimonialResponse(**service.update(testimonial_id, data.model_dump()))


@router.delete("/{testimonial_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_testimonial(
    testimonial_id: Annotated[int, Path(description="Testimonial ID")],
    service: TestimonialServiceDep,
) -> Response:
    service.delete(testimonial_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
