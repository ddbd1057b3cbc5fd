"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Application
from .errors import register_error_handlers
from .routes import create_admin_router, create_health_router


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="DM Auto-Reply API",
        description="Admin and health endpoints for the DM auto-reply bot",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_error_handlers(fastapi_app, application.settings.webhook_base_url)

    fastapi_app.include_router(create_health_router())
    fastapi_app.include_router(create_admin_router(application))

    return fastapi_app
