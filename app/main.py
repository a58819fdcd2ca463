"""
Clinick API - FastAPI Application Entry Point

Emergency report intake for clinics and field reporters: reports are
submitted, listed and acknowledged on a dashboard, exported monthly as CSV,
and fanned out as push + email alerts on submission.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.config.resources import AppResources, create_resources
from app.core.exceptions import ClinickError
from app.core.logging import configure_logging
from app.core.settings import Settings, settings as default_settings
from app.routes import devices, health, reports

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def create_app(resources: Optional[AppResources] = None, settings: Settings = default_settings) -> FastAPI:
    """
    Build the application.

    Args:
        resources: Pre-built components (tests inject these). When None,
            Firebase is initialized on startup and released on shutdown.
        settings: Configuration source
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Initialize Firebase-backed resources unless they were injected,
        and release them on shutdown.
        """
        configure_logging(settings.LOG_LEVEL)
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

        if app.state.resources is None:
            try:
                app.state.resources = create_resources(settings)
            except Exception as e:
                logger.warning(f"Firebase initialization failed: {e}")
                logger.warning("The app will start but database operations will fail.")

        yield

        logger.info(f"Shutting down {settings.APP_NAME}")
        if app.state.owns_resources and app.state.resources is not None:
            app.state.resources.close()
            app.state.resources = None

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Emergency report intake, dashboard and alert fan-out",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.resources = resources
    app.state.owns_resources = resources is None

    @app.exception_handler(ClinickError)
    async def clinick_exception_handler(request: Request, exc: ClinickError):
        if exc.status_code >= 500:
            logger.error(f"🔥 {request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed body or query parameters are client errors."""
        logger.info(f"{request.method} {request.url.path} invalid request: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch all unhandled exceptions and log them with full traceback."""
        logger.error(
            f"🔥 Unhandled exception on {request.method} {request.url.path}",
            exc_info=exc,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    # CORS - narrow allow-list, credentials allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness message."""
        return "Clinick API is running..."

    app.include_router(health.router)
    app.include_router(reports.router)
    app.include_router(devices.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=default_settings.HOST, port=default_settings.PORT)
