"""Certificate routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from portfolio_cms.api.dependencies import get_certificate_service, read_upload
from portfolio_cms.api.schemas.certificates import CertificateResponse
from portfolio_cms.services import CertificateService

router = APIRouter(prefix="/certificates", tags=["certificates"])

CertificateServiceDep = Annotated[CertificateService, Depends(get_certificate_service)]


@router.get("", response_model=list[CertificateResponse])
def list_certificates(service: CertificateServiceDep) -> list[CertificateResponse]:
    return [CertificateResponse(**certificate) for certificate in service.list()]


@router.get("/{certificate_id}", response_model=CertificateResponse)
def get_certificate(
    certificate_id: Annotated[int, Path(description="Certificate ID")],
    service: CertificateServiceDep,
) -> CertificateResponse:
    return CertificateResponse(**service.get(certificate_id))


@router.post(
    "",
    response_model=CertificateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing name or image, or rejected file"}},
)
async def create_certificate(
    service: CertificateServiceDep,
    name: Annotated[str, Form()],
    issue_date: Annotated[str | None, Form(description="YYYY-MM-DD")] = None,
    issuer: Annotated[str | None, Form()] = None,
    credential_url: Annotated[str | None, Form()] = None,
    display_order: Annotated[int | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Certificate image or PDF")] = None,
) -> CertificateResponse:
    """Create a certificate. The image is required; it is checked before anything is saved."""
    data = {
        "name": name,
        "issue_date": issue_date,
        "issuer": issuer,
        "credential_url": credential_url,
        "display_order": display_order,
    }
    certificate = await run_in_threadpool(service.create, data, await read_upload(image))
    return CertificateResponse(**certificate)


@router.put("/{certificate_id}", response_model=CertificateResponse)
async def update_certificate(
    certificate_id: Annotated[int, Path(description="Certificate ID")],
    service: CertificateServiceDep,
    name: Annotated[str | None, Form()] = None,
    issue_date: Annotated[str | None, Form()] = None,
    issuer: Annotated[str | None, Form()] = None,
    credential_url: Annotated[str | None, Form()] = None,
    display_order: Annotated[int | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> CertificateResponse:
    data = {
        "name": name,
        "issue_date": issue_date,
        "issuer": issuer,
        "credential_url": credential_url,
        "display_order": display_order,
    }
    image_file = await read_upload(image)
    certificate = await run_in_threadpool(service.update, certificate_id, data, image_file)
    return CertificateResponse(**certificate)


@router.delete("/{certificate_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_certificate(
    certificate_id: Annotated[int, Path(description="Certificate ID")],
    service: CertificateServiceDep,
) -> Response:
    service.delete(certificate_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
