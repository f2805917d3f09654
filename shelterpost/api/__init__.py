"""shelterpost API layer - routes, schemas, and middleware."""

from shelterpost.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from shelterpost.api.routes import router
from shelterpost.api.schemas import (
    ErrorResponse,
    HealthResponse,
    ModerationStateResponse,
    OutcomeResponse,
    PostListResponse,
    PostResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "ModerationStateResponse",
    "OutcomeResponse",
    "PostListResponse",
    "PostResponse",
]
