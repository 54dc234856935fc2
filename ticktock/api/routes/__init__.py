"""API routers."""

from ticktock.api.routes.auth import router as auth_router
from ticktock.api.routes.timesheets import router as timesheets_router

__all__ = ["auth_router", "timesheets_router"]
