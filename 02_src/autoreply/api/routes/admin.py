"""Admin API routes: setup, login, configuration."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import BaseModel

from ...app import Application
from ...auth import (
    SESSION_COOKIE_NAME,
    SESSION_TTL,
    AdminState,
    hash_password,
    issue_session,
    resolve_admin_state,
    verify_password,
)
from ...logging_config import get_logger
from ...models import BotConfig
from ...storage import (
    ConfigValidationError,
    clamp_delay,
    normalize_welcome,
    validate_password,
    validate_send_cap,
)
from ..errors import AdminError, SetupRequired, admin_base_url
from ..pages import admin_page, login_page, setup_page

logger = get_logger(__name__)


class SetupRequest(BaseModel):
    """Request model for initial setup."""

    admin_password: str = ""
    welcome_message: str | None = None
    enabled: bool = False
    message_delay_seconds: float | None = None
    per_cycle_send_cap: int | None = None


class LoginRequest(BaseModel):
    """Request model for login."""

    password: str = ""


class ConfigUpdateRequest(BaseModel):
    """Partial configuration update; absent fields keep their value."""

    welcome_message: str | None = None
    enabled: bool | None = None
    message_delay_seconds: float | None = None
    per_cycle_send_cap: int | None = None


class ToggleRequest(BaseModel):
    """Request model for toggling the flow. Absent ``enabled`` flips it."""

    enabled: bool | None = None


class PasswordChangeRequest(BaseModel):
    """Request model for changing the admin password."""

    current_password: str
    new_password: str


class ConfigResponse(BaseModel):
    """Response model for configuration."""

    welcome_message: str
    enabled: bool
    message_delay_seconds: int
    per_cycle_send_cap: int | None


class AdminSession:
    """Per-request admin context."""

    def __init__(self, config: BotConfig, state: AdminState, secret: str | None):
        self.config = config
        self.state = state
        self.secret = secret


def _config_response(config: BotConfig) -> dict:
    return {
        "welcome_message": config.welcome_message,
        "enabled": config.enabled,
        "message_delay_seconds": config.message_delay_seconds,
        "per_cycle_send_cap": config.per_cycle_send_cap,
    }


def create_admin_router(app: Application) -> APIRouter:
    """Create admin router."""
    router = APIRouter(prefix="/admin", tags=["admin"])
    settings = app.settings

    def base_url(request: Request) -> str:
        return admin_base_url(request, settings.webhook_base_url)

    async def admin_session(request: Request) -> AdminSession:
        """Resolve the admin state; everything but setup needs it configured."""
        config = await app.config_store.load()
        secret = settings.admin_session_secret
        state = resolve_admin_state(
            config, request.cookies.get(SESSION_COOKIE_NAME), secret
        )
        if state is AdminState.UNCONFIGURED:
            raise SetupRequired()
        if not secret:
            raise AdminError(503, "Admin not configured: ADMIN_SESSION_SECRET missing.")
        return AdminSession(config, state, secret)

    async def logged_in(session: AdminSession = Depends(admin_session)) -> AdminSession:
        if session.state is not AdminState.LOGGED_IN:
            raise AdminError(401, "Unauthorized")
        return session

    @router.post("/api/setup")
    async def run_setup(body: SetupRequest) -> dict:
        """One-time setup. A no-op once setup has completed."""
        existing = await app.config_store.load()
        if existing.setup_complete:
            raise AdminError(409, "Setup already completed")

        try:
            password = validate_password(body.admin_password)
            cap = validate_send_cap(body.per_cycle_send_cap)
        except ConfigValidationError as e:
            raise AdminError(400, str(e))

        config = BotConfig(
            welcome_message=normalize_welcome(body.welcome_message),
            enabled=body.enabled,
            message_delay_seconds=clamp_delay(body.message_delay_seconds or 0),
            per_cycle_send_cap=cap,
            admin_password_hash=hash_password(password),
        )
        if not await app.config_store.complete_setup(config):
            raise AdminError(409, "Setup already completed")
        return {"success": True}

    @router.post("/login")
    async def login(
        request: Request,
        body: LoginRequest,
        session: AdminSession = Depends(admin_session),
    ) -> Response:
        """Check the password and set the session cookie."""
        if not verify_password(body.password, session.config.admin_password_hash):
            logger.warning("Rejected admin login")
            raise AdminError(401, "Invalid password")

        response = RedirectResponse("/admin", status_code=302)
        response.set_cookie(
            SESSION_COOKIE_NAME,
            issue_session(session.secret),
            max_age=int(SESSION_TTL.total_seconds()),
            path="/",
            httponly=True,
            secure=base_url(request).startswith("https://"),
            samesite="lax",
        )
        return response

    @router.get("/logout")
    async def logout(
        request: Request, session: AdminSession = Depends(admin_session)
    ) -> Response:
        """Clear the session cookie."""
        response = RedirectResponse("/admin", status_code=302)
        response.delete_cookie(
            SESSION_COOKIE_NAME,
            path="/",
            httponly=True,
            secure=base_url(request).startswith("https://"),
            samesite="lax",
        )
        return response

    @router.get("/api/config", response_model=ConfigResponse)
    async def get_config(session: AdminSession = Depends(logged_in)) -> dict:
        """Current operator configuration."""
        return _config_response(session.config)

    @router.post("/api/config")
    async def update_config(
        body: ConfigUpdateRequest, session: AdminSession = Depends(logged_in)
    ) -> dict:
        """Partial update; unspecified fields are kept."""
        config = session.config
        provided = body.model_fields_set

        try:
            if "per_cycle_send_cap" in provided:
                config.per_cycle_send_cap = validate_send_cap(body.per_cycle_send_cap)
        except ConfigValidationError as e:
            raise AdminError(400, str(e))

        if "welcome_message" in provided:
            config.welcome_message = normalize_welcome(body.welcome_message)
        if body.enabled is not None:
            config.enabled = body.enabled
        if "message_delay_seconds" in provided:
            config.message_delay_seconds = clamp_delay(body.message_delay_seconds)

        await app.config_store.save(config)
        return {"success": True, "config": _config_response(config)}

    @router.post("/api/toggle")
    async def toggle(
        body: ToggleRequest, session: AdminSession = Depends(logged_in)
    ) -> dict:
        """Switch the reply flow on or off."""
        config = session.config
        config.enabled = (not config.enabled) if body.enabled is None else body.enabled
        await app.config_store.save(config)
        logger.info("Reply flow %s", "enabled" if config.enabled else "disabled")
        return {"success": True, "enabled": config.enabled}

    @router.post("/api/password")
    async def change_password(
        body: PasswordChangeRequest, session: AdminSession = Depends(logged_in)
    ) -> dict:
        """Replace the admin password. Requires the current one."""
        config = session.config
        if not verify_password(body.current_password, config.admin_password_hash):
            raise AdminError(401, "Invalid password")
        try:
            password = validate_password(body.new_password)
        except ConfigValidationError as e:
            raise AdminError(400, str(e))

        config.admin_password_hash = hash_password(password)
        await app.config_store.save(config)
        return {"success": True}

    @router.get("/api/status")
    async def status(session: AdminSession = Depends(logged_in)) -> dict:
        """Flow state, ledger size and the last in-process cycle."""
        last = app.last_cycle
        return {
            "enabled": session.config.enabled,
            "notified_count": await app.ledger.notified_count(),
            "last_cycle": None
            if last is None
            else {
                "sent_count": last.sent_count,
                "conversations_seen": last.conversations_seen,
                "pages_fetched": last.pages_fetched,
                "failed_sends": last.failed_sends,
                "cap_reached": last.cap_reached,
                "finished_at": last.finished_at.isoformat() if last.finished_at else None,
            },
        }

    @router.get("", response_class=HTMLResponse)
    @router.get("/", response_class=HTMLResponse)
    async def admin_home(
        request: Request, session: AdminSession = Depends(admin_session)
    ) -> HTMLResponse:
        """Login page or admin page depending on the session."""
        if session.state is AdminState.LOGGED_IN:
            return HTMLResponse(admin_page(base_url(request)))
        return HTMLResponse(login_page(base_url(request)))

    @router.get("/{path:path}", response_class=HTMLResponse)
    async def admin_fallback(request: Request, path: str) -> HTMLResponse:
        """Unknown admin paths: the setup page before setup, 404 after."""
        config = await app.config_store.load()
        if not config.setup_complete:
            return HTMLResponse(setup_page(base_url(request)))
        return HTMLResponse("Not Found", status_code=404)

    return router
