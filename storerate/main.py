"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storerate.api import auth, dashboard, ratings, stores, users
from storerate.config import get_settings
from storerate.errors import AppError, UnauthenticatedError
from storerate.schemas.common import ErrorResponse, FieldError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Store Ratings API ({settings.environment})")
    yield
    logger.info("Shutting down Store Ratings API")


app = FastAPI(
    title="Store Ratings API",
    description="Role-based store rating platform with owner and admin dashboards",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error_response(status_code: int, body: ErrorResponse, headers: dict | None = None):
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return _error_response(
        exc.status_code, ErrorResponse(message=exc.message, error=exc.code), headers
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        errors.append(FieldError(field=".".join(location) or "request", message=error["msg"]))

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(message="Validation failed", error="VALIDATION_ERROR", errors=errors),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(
        exc.status_code,
        ErrorResponse(message=str(exc.detail), error=f"HTTP_{exc.status_code}"),
        getattr(exc, "headers", None),
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return _error_response(
        status.HTTP_409_CONFLICT,
        ErrorResponse(message="Request conflicts with existing data", error="CONFLICT"),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(message="An unexpected error occurred", error="UNEXPECTED"),
    )


# Register routers
app.include_router(auth.router)
app.include_router(stores.router)
app.include_router(users.router)
app.include_router(ratings.router)
app.include_router(dashboard.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
