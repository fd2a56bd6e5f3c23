"""Routes for page sections, social links and settings (create, list, delete)."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from portfolio_cms.api.dependencies import (
    get_section_service,
    get_setting_service,
    get_social_link_service,
)
from portfolio_cms.api.schemas.site import (
    SectionCreateRequest,
    SectionResponse,
    SettingCreateRequest,
    SettingResponse,
    SocialLinkCreateRequest,
    SocialLinkResponse,
)
from portfolio_cms.services import SectionService, SettingService, SocialLinkService

sections_router = APIRouter(prefix="/sections", tags=["sections"])
social_links_router = APIRouter(prefix="/social-links", tags=["social-links"])
settings_router = APIRouter(prefix="/settings", tags=["settings"])

SectionServiceDep = Annotated[SectionService, Depends(get_section_service)]
SocialLinkServiceDep = Annotated[SocialLinkService, Depends(get_social_link_service)]
SettingServiceDep = Annotated[SettingService, Depends(get_setting_service)]


@sections_router.get("", response_model=list[SectionResponse])
def list_sections(service: SectionServiceDep) -> list[SectionResponse]:
    return [SectionResponse(**section) for section in service.list()]


@sections_router.post("", response_model=SectionResponse, status_code=status.HTTP_201_CREATED)
def create_section(data: SectionCreateRequest, service: SectionServiceDep) -> SectionResponse:
    return SectionResponse(**service.create(data.model_dump()))


@sections_router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section(
    section_id: Annotated[int, Path(description="Section ID")],
    service: SectionServiceDep,
) -> Response:
    service.delete(section_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@social_links_router.get("", response_model=list[SocialLinkResponse])
def list_social_links(service: SocialLinkServiceDep) -> list[SocialLinkResponse]:
    return [SocialLinkResponse(**link) for link in service.list()]


@social_links_router.post(
    "", response_model=SocialLinkResponse, status_code=status.HTTP_201_CREATED
)
def create_social_link(
    data: SocialLinkCreateRequest, service: SocialLinkServiceDep
) -> SocialLinkResponse:
    return SocialLinkResponse(**service.create(data.model_dump()))


@social_links_router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_social_link(
    link_id: Annotated[int, Path(description="Social link ID")],
    service: SocialLinkServiceDep,
) -> Response:
    service.delete(link_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@settings_router.get("", response_model=list[SettingResponse])
def list_settings(service: SettingServiceDep) -> list[SettingResponse]:
    return [SettingResponse(**setting) for setting in service.list()]


@settings_router.post("", response_model=SettingResponse, status_code=status.HTTP_201_CREATED)
def create_setting(data: SettingCreateRequest, service: SettingServiceDep) -> SettingResponse:
    return SettingResponse(**service.create(data.model_dump()))


@settings_router.delete("/{setting_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_setting(
    setting_id: Annotated[int, Path(description="Setting ID")],
    service: SettingServiceDep,
) -> Response:
    service.delete(setting_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
