"""FastAPI application entry point."""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from careerpage.config import settings
from careerpage.errors import CareerPageError
from careerpage.logging_config import configure_logging
from careerpage.routers import (
    applications,
    career_pages,
    companies,
    jobs,
    public,
    sections,
    uploads,
)

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Career Page API",
    description="Backend API for composing and publishing company career pages",
    version="0.1.0",
)

# CORS middleware to allow the frontend to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CareerPageError)
async def career_page_error_handler(request: Request, exc: CareerPageError) -> JSONResponse:
    """Serialize domain errors as ``{error, details?}`` bodies."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Report store failures that escaped a service as StoreError bodies."""
    logger.error("%s %s hit a store error: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Store error"})


# Mount routers
app.include_router(companies.router, prefix="/api")
app.include_router(career_pages.router, prefix="/api")
app.include_router(sections.router, prefix="/api")
app.include_router(jobs.router, prefix="/api")
app.include_router(applications.router, prefix="/api")
app.include_router(uploads.router, prefix="/api")
app.include_router(public.router)

if settings.storage_backend == "local":
    app.mount(
        "/uploads",
        StaticFiles(directory=os.path.join(settings.data_root, "uploads"), check_dir=False),
        name="uploads",
    )
