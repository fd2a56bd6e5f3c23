"""FastAPI application entry point for the portfolio CMS API."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_cms import __version__
from portfolio_cms.api.routes import (
    blog,
    certificates,
    educations,
    experiences,
    health,
    projects,
    site,
    skills,
    testimonials,
)
from portfolio_cms.config import Settings
from portfolio_cms.data.db import Database
from portfolio_cms.errors import (
    NotFoundError,
    PersistenceError,
    PortfolioError,
    UploadError,
    ValidationError,
)
from portfolio_cms.services.storage import StorageBackend, build_storage

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

_ERROR_STATUS: tuple[tuple[type[PortfolioError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UploadError, status.HTTP_502_BAD_GATEWAY),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: PortfolioError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def portfolio_error_handler(request: Request, exc: PortfolioError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables on startup and release the engine and storage client on shutdown."""
    app.state.db.create_all()
    yield
    app.state.storage.close()
    app.state.db.dispose()


def create_app(
    settings: Settings | None = None,
    *,
    storage: StorageBackend | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Resolved settings; read from the environment when omitted.
        storage: Storage backend to use instead of the one ``settings`` names.

    Raises:
        ConfigurationError: The settings are invalid. Raised before serving.
    """
    if settings is None:
        settings = Settings.from_env()
    else:
        settings.check()

    app = FastAPI(
        title="Portfolio CMS API",
        description="Content API for a personal portfolio: projects, skills, blog and more",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url)
    app.state.storage = storage or build_storage(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(PortfolioError, portfolio_error_handler)

    app.include_router(health.router)
    app.include_router(projects.router, prefix=API_PREFIX)
    app.include_router(experiences.router, prefix=API_PREFIX)
    app.include_router(skills.router, prefix=API_PREFIX)
    app.include_router(certificates.router, prefix=API_PREFIX)
    app.include_router(educations.router, prefix=API_PREFIX)
    app.include_router(testimonials.router, prefix=API_PREFIX)
    app.include_router(blog.router, prefix=API_PREFIX)
    app.include_router(site.sections_router, prefix=API_PREFIX)
    app.include_router(site.social_links_router, prefix=API_PREFIX)
    app.include_router(site.settings_router, prefix=API_PREFIX)
    return app


def main() -> None:
    """Start the development server."""
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "portfolio_cms.api.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "").lower() in ("1", "true", "yes"),
    )


if __name__ == "__main__":
    main()
