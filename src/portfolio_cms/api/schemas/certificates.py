"""Pydantic schemas for certificate API responses."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class CertificateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image_url: str | None = None
    issue_date: date | None = None
    issuer: str
    credential_url: str | None = None
    display_order: int = 0
    created_at: datetime
    updated_at: datetime
