"""FastAPI application server."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from coder_artifacts.api.a2a_routes import a2a_router
from coder_artifacts.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from coder_artifacts.api.routes import router
from coder_artifacts.config import get_settings
from coder_artifacts.exceptions import CoderArtifactsError
from coder_artifacts.observability.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager: configures logging and reports startup."""
    settings = get_settings()

    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service_name=settings.service_name,
    )

    logger.info(
        "Coder artifacts API ready",
        extra={
            "version": settings.api_version,
            "environment": settings.service_environment,
        },
    )

    if settings.service_environment == "production" and "*" in settings.cors_origins:
        logger.warning(
            "Production: CORS_ORIGINS allows all origins (*). Restrict to your front-end domains."
        )

    yield

    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=(
            "Extracts fenced code blocks from coder agent responses "
            "and turns them into named file artifacts."
        ),
        lifespan=lifespan,
    )

    # Domain exception handler: map CoderArtifactsError to JSON response
    @app.exception_handler(CoderArtifactsError)
    async def coder_artifacts_error_handler(request: Request, exc: CoderArtifactsError):
        logger.warning(
            exc.message,
            extra={"status_code": exc.status_code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(router)
    app.include_router(a2a_router)

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "coder_artifacts.api.server:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
