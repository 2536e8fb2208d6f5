"""FastAPI application entry point.

Personal website archive API with endpoints for:
- Draft lifecycle (start, revise, share, publish, discard)
- Patches on published articles (revise, share, release, discard)
- Published article reads, listings and editorial flags
- Tag and topic management
"""

import logging
import os
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from folio.api.core import PROBLEM_CONTENT_TYPE, FieldFailure, InternalError, Problem, ValidationError
from folio.api.db import DBManager
from folio.api.observability import clear_context, configure_logging, set_context
from folio.api.repositories import SQLArchiveRepository, SQLTagsRepository, SQLTopicsRepository
from folio.api.routers import articles, auth, drafts, health, labels, patches
from folio.api.services import ArticlesService, DraftsService, PatchesService, TagsService, TopicsService

configure_logging()
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


# =============================================================================
# Application Lifecycle
# =============================================================================

# Global infrastructure instances
db_manager: DBManager | None = None
drafts_service: DraftsService | None = None
patches_service: PatchesService | None = None
articles_service: ArticlesService | None = None
tags_service: TagsService | None = None
topics_service: TopicsService | None = None


def validate_environment() -> list[str]:
    """Validate environment variables.

    Returns:
        List of warning messages for missing optional variables
    """
    warnings = []

    if not os.getenv("EDITOR_PASSWORD"):
        warnings.append("EDITOR_PASSWORD is not set. Editor login is disabled.")

    if os.getenv("ENVIRONMENT", "development") != "development" and not os.getenv("JWT_SECRET_KEY"):
        warnings.append("JWT_SECRET_KEY is not set. Tokens are signed with the development key.")

    return warnings


def get_db_manager() -> DBManager:
    """Get the global DBManager instance."""
    if db_manager is None:
        raise RuntimeError("DBManager not initialized")
    return db_manager


def get_drafts_service() -> DraftsService:
    """Get the global DraftsService instance."""
    if drafts_service is None:
        raise RuntimeError("DraftsService not initialized")
    return drafts_service


def get_patches_service() -> PatchesService:
    """Get the global PatchesService instance."""
    if patches_service is None:
        raise RuntimeError("PatchesService not initialized")
    return patches_service


def get_articles_service() -> ArticlesService:
    """Get the global ArticlesService instance."""
    if articles_service is None:
        raise RuntimeError("ArticlesService not initialized")
    return articles_service


def get_tags_service() -> TagsService:
    """Get the global TagsService instance."""
    if tags_service is None:
        raise RuntimeError("TagsService not initialized")
    return tags_service


def get_topics_service() -> TopicsService:
    """Get the global TopicsService instance."""
    if topics_service is None:
        raise RuntimeError("TopicsService not initialized")
    return topics_service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    global db_manager, drafts_service, patches_service, articles_service, tags_service, topics_service

    logger.info("=" * 60)
    logger.info("Folio Archive - API Server Starting")
    logger.info("=" * 60)

    for warning in validate_environment():
        logger.warning(warning)

    # Log configuration
    logger.info(f"Environment: {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"Log Level: {os.getenv('LOG_LEVEL', 'INFO')}")
    logger.info(f"CORS Origins: {os.getenv('CORS_ORIGINS', '*')}")

    db_manager = DBManager()
    await db_manager.create_tables()

    archive = SQLArchiveRepository(db_manager)
    tags_service = TagsService(SQLTagsRepository(db_manager))
    topics_service = TopicsService(SQLTopicsRepository(db_manager))
    articles_service = ArticlesService(archive, tags=tags_service, topics=topics_service)
    drafts_service = DraftsService(archive)
    patches_service = PatchesService(archive)
    logger.info("Archive services initialized")

    yield

    # Cleanup
    if db_manager:
        await db_manager.close()
        logger.info("DBManager connections closed")

    db_manager = None
    drafts_service = patches_service = articles_service = None
    tags_service = topics_service = None
    logger.info("API Server shutting down...")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Folio Archive API",
    description="API for drafting, publishing and amending website articles",
    version=VERSION,
    lifespan=lifespan,
)

cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
cors_origins = [origin.strip() for origin in cors_origins if origin.strip()]
if not cors_origins:
    cors_origins = ["http://localhost:3000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)


@app.middleware("http")
async def request_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Tag every log line emitted while serving a request with its id."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
    set_context(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(drafts.router)
app.include_router(patches.router)
app.include_router(labels.tags_router)
app.include_router(labels.topics_router)
app.include_router(articles.router)


# =============================================================================
# Error Handlers
# =============================================================================


def problem_response(problem: Problem, request: Request, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.to_detail(instance=request.url.path).model_dump(mode="json", exclude_none=True),
        media_type=PROBLEM_CONTENT_TYPE,
        headers=headers,
    )


def field_failure(error: dict[str, Any]) -> FieldFailure:
    """Translate a pydantic error into a field rule violation."""
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    ctx = error.get("ctx") or {}
    parameter = next(iter(ctx.values()), None) if ctx else None
    criterion = "required" if error.get("type") == "missing" else str(error.get("type", "invalid"))
    return FieldFailure(
        field=".".join(loc) or "body",
        criterion=criterion,
        parameter=None if parameter is None else str(parameter),
    )


@app.exception_handler(Problem)
async def problem_handler(request: Request, exc: Problem) -> JSONResponse:
    if exc.status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    else:
        logger.info(f"{request.method} {request.url.path} refused: {exc!r}")
    return problem_response(exc, request)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    failures = [field_failure(error) for error in exc.errors()]
    problem = ValidationError(failures[0].field, failures[0].criterion, failures[0].parameter)
    problem.extensions["errors"] = [failure.model_dump(exclude_none=True) for failure in failures]
    return problem_response(problem, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        title = f"{HTTPStatus(exc.status_code).phrase}."
    except ValueError:
        title = "Error."
    problem = Problem(str(exc.detail) if exc.detail else None, title=title, status=exc.status_code)
    return problem_response(problem, request, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler with request correlation."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

    logger.error(
        f"Unhandled exception [request_id={request_id}]: {exc}",
        exc_info=True,
        extra={
            "extra_data": {
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method,
            },
        },
    )

    is_development = os.getenv("ENVIRONMENT", "development") == "development"
    if is_development:
        problem = InternalError(str(exc), exception=type(exc).__name__, request_id=request_id)
    else:
        problem = InternalError(request_id=request_id)
    return problem_response(problem, request)


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "folio.api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
    )
