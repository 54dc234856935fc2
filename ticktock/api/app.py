"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from ticktock import __version__
from ticktock.api.errors import register_exception_handlers
from ticktock.api.routes import auth_router, timesheets_router
from ticktock.auth import DemoIdentityProvider
from ticktock.config.settings import TicktockConfig, get_config
from ticktock.data.baseline import Baseline, load_baseline
from ticktock.services.key_value_store import SessionDataBackend
from ticktock.utils.logging_utils import LogContext, generate_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def request_context_middleware(request: Request, call_next):
    """Tag every log record of a request with its correlation id."""
    correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
    with LogContext(correlation_id=correlation_id):
        logger.debug(f"{request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


def create_app(
    config: Optional[TicktockConfig] = None, baseline: Optional[Baseline] = None
) -> FastAPI:
    """Build the ticktock web application.

    Args:
        config: Settings (default: global configuration)
        baseline: Baseline weeks (default: loaded from ``config.baseline_file``
            or the built-in seed data)

    Returns:
        Configured FastAPI application

    Raises:
        BaselineError: If the configured baseline file is invalid
    """
    config = config or get_config()
    if baseline is None:
        baseline = load_baseline(config.baseline_file)

    app = FastAPI(title="ticktock", version=__version__, debug=config.debug)
    app.state.config = config
    app.state.baseline = tuple(baseline)
    app.state.identity_provider = DemoIdentityProvider.from_config(config)
    app.state.session_backend = SessionDataBackend(max_age=config.session_max_age)

    app.add_middleware(
        SessionMiddleware,
        secret_key=config.secret_key,
        session_cookie=config.session_cookie,
        max_age=config.session_max_age,
        same_site="lax",
        https_only=config.environment == "production",
    )
    app.middleware("http")(request_context_middleware)
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(timesheets_router)

    logger.info(
        f"ticktock app created ({config.environment}, "
        f"{len(app.state.baseline)} baseline weeks)"
    )
    return app
