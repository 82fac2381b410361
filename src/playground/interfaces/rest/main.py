"""
FastAPI application

Entry point of the playground HTTP service.
"""
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from playground.domain.errors import (
    DomainError,
    InputError,
    NotFoundError,
    RemoteServiceError,
)
from playground.infrastructure.config.settings import Settings, get_settings
from playground.infrastructure.logging import configure_logging, get_logger
from playground.interfaces.rest.api.v1 import compile, github, health, items
from playground.interfaces.rest.dependencies import cleanup_dependencies, initialize_dependencies
from playground.interfaces.rest.middleware import RequestLoggingMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    logger.info("Starting playground", version=settings.app_version, environment=settings.environment)

    initialize_dependencies(app, settings)
    started = time.time()

    yield

    logger.info("Shutting down playground", uptime_seconds=round(time.time() - started, 1))
    await cleanup_dependencies(app)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Services are built in the lifespan handler; tests that skip the
    lifespan supply them through dependency overrides.
    """
    settings = settings or get_settings()
    configure_logging(log_level=settings.log_level, log_format=settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        description="Run JavaScript, TypeScript, Python, C, C++ and Java snippets and push them to GitHub",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    _register_middleware(app)
    _register_routes(app)

    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        else:
            message = "Invalid request"
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(InputError)
    async def input_exception_handler(request: Request, exc: InputError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(NotFoundError)
    async def not_found_exception_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.warning("Resource not found", path=request.url.path, details=exc.details)
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(RemoteServiceError)
    async def remote_service_exception_handler(request: Request, exc: RemoteServiceError) -> JSONResponse:
        logger.warning("Remote service error", path=request.url.path, status_code=exc.status_code)
        return _error(exc.status_code or status.HTTP_502_BAD_GATEWAY, exc.message)

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        logger.error("Unhandled domain error", path=request.url.path, error=exc.message)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal Server Error")


def _register_routes(app: FastAPI) -> None:
    app.include_router(health.router, prefix="/api")
    app.include_router(compile.router, prefix="/api")
    app.include_router(items.router, prefix="/api")
    app.include_router(github.router, prefix="/api")


def _register_middleware(app: FastAPI) -> None:
    app.add_middleware(RequestLoggingMiddleware)


def main() -> None:
    """Console entry point."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "playground.interfaces.rest.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
