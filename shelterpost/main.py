"""shelterpost FastAPI application entry point.

Wires the backend providers, the dashboard session and the routes together.
Loads configuration from ``.env`` and ``config/config.yaml`` and configures
structured logging.

``POST_BACKEND=stub`` runs the whole dashboard against the in-memory
providers, with no platform API needed.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from shelterpost import __version__
from shelterpost.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from shelterpost.api.routes import router as api_router
from shelterpost.config.loader import load_config
from shelterpost.config.settings import Settings
from shelterpost.providers.categories import HttpCategoryProvider, StubCategoryProvider
from shelterpost.providers.platform_http import PlatformHttpClient
from shelterpost.providers.posts import HttpPostProvider, StubPostProvider
from shelterpost.services.dashboard_session import DashboardSession
from shelterpost.utils.errors import BackendError, ConfigurationError
from shelterpost.utils.logging import clear_session_context, configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct the backend providers selected by ``post_backend``.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    if app_settings.post_backend == "stub":
        return {
            "http_client": None,
            "post_backend": StubPostProvider(),
            "category_backend": StubCategoryProvider(),
        }

    if not app_settings.api_base_url:
        raise ConfigurationError("API_BASE_URL is required when POST_BACKEND=live")

    http_client = httpx.AsyncClient(timeout=app_settings.request_timeout)
    platform = PlatformHttpClient(
        http_client=http_client,
        base_url=app_settings.api_base_url,
        headers=app_settings.auth_headers(),
        timeout=app_settings.request_timeout,
    )
    return {
        "http_client": http_client,
        "post_backend": HttpPostProvider(platform),
        "category_backend": HttpCategoryProvider(platform),
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    components: dict[str, Any] | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings to use; the module-level settings when omitted.
    components:
        Pre-built ``post_backend`` / ``category_backend`` (and optionally
        ``http_client``), used instead of :func:`_build_all`.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Build the dashboard session on startup, dispose it on shutdown."""
        built = components if components is not None else _build_all(app_settings)
        post_backend = built["post_backend"]
        session = DashboardSession(
            post_backend=post_backend,
            category_backend=built["category_backend"],
            page_size=app_settings.posts_page_size,
            author_id=app_settings.session_author_id,
        )
        application.state.dashboard_session = session
        application.state.post_backend_name = post_backend.get_provider_name()

        try:
            await session.mount()
        except BackendError as exc:
            # The app still starts; /health reports posts_loaded=false.
            _logger.error("initial_post_load_failed", error=str(exc), status_code=exc.status_code)

        _logger.info(
            "app_startup",
            version=__version__,
            environment=app_settings.app_env,
            backend=application.state.post_backend_name,
        )

        yield

        await session.dispose()
        clear_session_context()
        http_client: httpx.AsyncClient | None = built.get("http_client")
        if http_client is not None:
            await http_client.aclose()
        _logger.info("app_shutdown", message="Dashboard session disposed")

    application = FastAPI(
        title="shelterpost API",
        version=__version__,
        description=(
            "Moderation dashboard for shelter blog posts: review, approve or "
            "reject submissions, and create new posts."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=config.get("app", {}).get("cors_origins"))

    application.include_router(api_router)
    return application


app = create_app()


def main() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "shelterpost.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    main()
