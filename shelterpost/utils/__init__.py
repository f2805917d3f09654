"""Utility modules for shelterpost.

- **errors** -- Domain exception hierarchy rooted at ShelterPostError.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **thumbnails** -- Pillow-backed validation and ``data:`` URL encoding for
  uploaded post thumbnails.
"""

from shelterpost.utils.errors import (
    BackendError,
    ConfigurationError,
    FieldValidationError,
    ModerationInProgressError,
    PostAlreadyApprovedError,
    ModerationStateError,
    PostNotFoundError,
    ProviderUnavailableError,
    ShelterPostError,
)
from shelterpost.utils.logging import configure_logging, get_logger
from shelterpost.utils.thumbnails import to_data_url

__all__ = [
    "BackendError",
    "ConfigurationError",
    "FieldValidationError",
    "ModerationInProgressError",
    "PostAlreadyApprovedError",
    "ModerationStateError",
    "PostNotFoundError",
    "ProviderUnavailableError",
    "ShelterPostError",
    "configure_logging",
    "get_logger",
    "to_data_url",
]
