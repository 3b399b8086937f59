"""FastAPI application factory for the Spacefleet ship registry."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from spacefleet.config import settings
from spacefleet.database.engine import create_schema, engine
from spacefleet.exceptions import AppException, BadRequestException
from spacefleet.logging_config import setup_logging
from spacefleet.middleware.rate_limit import limiter
from spacefleet.middleware.request_id import RequestIdMiddleware, get_request_id
from spacefleet.schemas.responses import error_response

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup, dispose the async engine on shutdown."""
    if settings.create_schema_on_startup:
        await create_schema()
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    setup_logging(settings.log_level, settings.log_file)

    application = FastAPI(
        title="Spacefleet Ship Registry API",
        description="Ship registry with filtered listing, validated updates and derived ratings.",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Rate limiter
    application.state.limiter = limiter

    # --- Middleware (last added = outermost in Starlette) ---

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID — registered last so it runs first (outermost)
    application.add_middleware(RequestIdMiddleware)

    # --- Routers ---
    from spacefleet.api.rest import rest_router

    application.include_router(rest_router)

    # --- Exception Handlers ---

    @application.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return error_response(
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            request_id=get_request_id(request),
            details=exc.details,
        )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Malformed ids and bodies are client errors like any other field violation
        details = [
            {"field": ".".join(str(loc) for loc in err.get("loc", [])), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return error_response(
            status_code=BadRequestException.status_code,
            code=BadRequestException.code,
            message="Validation failed",
            request_id=get_request_id(request),
            details=details,
        )

    @application.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        return error_response(
            status_code=429,
            code="RATE_LIMITED",
            message=str(exc.detail),
            request_id=get_request_id(request),
        )

    @application.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return error_response(
            status_code=500,
            code="INTERNAL_ERROR",
            message="An unexpected error occurred.",
            request_id=get_request_id(request),
        )

    # Health check
    @application.get("/health")
    async def health_check() -> dict:
        return {"status": "ok"}

    return application


app = create_app()
