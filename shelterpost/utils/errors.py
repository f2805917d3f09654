"""Custom exception hierarchy for shelterpost.

All application exceptions inherit from :class:`ShelterPostError`, which
carries an optional ``provider_name`` so error handlers can identify which
backend adapter (e.g. "http_posts", "stub_categories") caused the failure.

The hierarchy is organized by failure kind:

    ShelterPostError  (base -- catch-all for any shelterpost error)
    +-- BackendError               (non-2xx response or transport failure)
    |   +-- ProviderUnavailableError (backend unreachable / not configured)
    +-- FieldValidationError       (local, field-keyed form validation)
    +-- PostNotFoundError          (post id not in the session store)
    +-- ModerationStateError       (illegal moderation phase transition)
    |   +-- ModerationInProgressError (second action while one is in flight)
    |   +-- PostAlreadyApprovedError  (approve chosen for a published post)
    +-- ConfigurationError         (startup / missing config)

Validation errors are raised before any network call is made; backend errors
are surfaced to the reviewer once and never retried automatically.
"""

from __future__ import annotations


class ShelterPostError(Exception):
    """Base exception for all shelterpost errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which backend adapter triggered the
    error.  ``__str__`` prefixes the provider name in brackets for
    structured log output, e.g. ``[http_posts] Approve request failed``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Backend / network errors
# ---------------------------------------------------------------------------

class BackendError(ShelterPostError):
    """Raised when a backend call fails (non-2xx status or transport error).

    ``status_code`` is ``None`` for transport-level failures (timeouts,
    refused connections) where no HTTP response was received.
    """

    def __init__(
        self,
        message: str = "Backend request failed",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status_code = status_code

    @property
    def status_code(self) -> int | None:
        return self._status_code


class ProviderUnavailableError(BackendError):
    """Raised when the configured backend cannot be reached at all."""

    def __init__(
        self,
        message: str = "Backend service is unavailable",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


# ---------------------------------------------------------------------------
# Local errors (never reach the network layer)
# ---------------------------------------------------------------------------

class FieldValidationError(ShelterPostError):
    """Raised when user input fails local validation.

    ``errors`` maps a form field name (``"topic"``, ``"categoryId"``,
    ``"category_name"`` ...) to the message shown beside that field.
    """

    def __init__(
        self,
        errors: dict[str, str],
        message: str = "Validation failed",
    ) -> None:
        super().__init__(message=message)
        self._errors = dict(errors)

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)


class PostNotFoundError(ShelterPostError):
    """Raised when a post id is not present in the session store."""

    def __init__(self, post_id: str) -> None:
        super().__init__(message=f"Post not found: {post_id}")
        self._post_id = post_id

    @property
    def post_id(self) -> str:
        return self._post_id


class ModerationStateError(ShelterPostError):
    """Raised on an illegal moderation state-machine transition."""

    def __init__(self, message: str = "Invalid moderation state transition") -> None:
        super().__init__(message=message)


class ModerationInProgressError(ModerationStateError):
    """Raised when an action is requested while another one is in flight."""

    def __init__(self, message: str = "A moderation action is already in flight") -> None:
        super().__init__(message=message)


class PostAlreadyApprovedError(ModerationStateError):
    """Raised when approve is chosen for a post that is already published."""

    def __init__(self, post_id: str) -> None:
        super().__init__(message=f"Post already approved: {post_id}")
        self._post_id = post_id

    @property
    def post_id(self) -> str:
        return self._post_id


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(ShelterPostError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
