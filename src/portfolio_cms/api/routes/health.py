"""Health check routes."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from portfolio_cms.api.dependencies import DatabaseDep

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: DatabaseDep, response: Response) -> dict[str, str]:
    """Return the current status of the API and its database."""
    if not db.ping():
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "unhealthy", "database": "unreachable"}
    return {"status": "healthy", "database": "ok"}
