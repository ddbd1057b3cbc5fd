"""API routes."""

from .admin import create_admin_router
from .health import create_health_router

__all__ = ["create_admin_router", "create_health_router"]
