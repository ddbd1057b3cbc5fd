"""Admin error responses."""

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from .pages import setup_page


class AdminError(Exception):
    """Structured ``{"error": ...}`` response raised from admin routes."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class SetupRequired(Exception):
    """Raised by admin routes while initial setup has not run."""


def admin_base_url(request: Request, configured: str | None) -> str:
    """Public base URL, from settings or the incoming request."""
    if configured:
        return configured.rstrip("/")
    return str(request.base_url).rstrip("/")


def register_error_handlers(fastapi_app: FastAPI, base_url: str | None) -> None:
    """Install handlers that render AdminError and SetupRequired."""

    @fastapi_app.exception_handler(AdminError)
    async def handle_admin_error(request: Request, exc: AdminError) -> JSONResponse:
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @fastapi_app.exception_handler(SetupRequired)
    async def handle_setup_required(request: Request, exc: SetupRequired) -> HTMLResponse:
        return HTMLResponse(setup_page(admin_base_url(request, base_url)))
