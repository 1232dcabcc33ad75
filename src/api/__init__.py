"""FastAPI application setup."""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.controller import product_router
from src.config import AppConfig
from src.services import NotFoundError, ProductRegistry, ValidationError

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning(f"Not found {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are bad requests, not 422.

    The rejected input is left out of the error list; it may hold values
    such as NaN that cannot be encoded as JSON.
    """
    logger.warning(f"Malformed request {request.method} {request.url.path}")
    errors = [{key: value for key, value in error.items() if key != "input"} for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(errors)},
    )


def create_app(
    config: Optional[AppConfig] = None,
    registry: Optional[ProductRegistry] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Loaded application configuration. Defaults apply when omitted.
        registry: Registry to serve. A new empty one is created when omitted.

    Returns:
        The configured FastAPI application.
    """
    title = config.api.title if config else "Product Registry API"
    version = config.api.version if config else "1.0.0"
    prefix = config.api.prefix if config else ""
    cors_origins = config.api.cors_origins if config else ["*"]

    app = FastAPI(
        title=title,
        description="In-memory product registry with CRUD endpoints",
        version=version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # One registry per application, handed to handlers via get_registry
    app.state.registry = registry if registry is not None else ProductRegistry()

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    app.include_router(product_router, prefix=prefix)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    logger.debug(f"Application created with product routes under '{prefix}/products'")
    return app


app = create_app()
