"""Unit tests for the error hierarchy, HTTP status mapping and log context."""

from __future__ import annotations

import structlog

from shelterpost.api.middleware import status_for
from shelterpost.utils.errors import (
    BackendError,
    ConfigurationError,
    FieldValidationError,
    ModerationInProgressError,
    ModerationStateError,
    PostAlreadyApprovedError,
    PostNotFoundError,
    ProviderUnavailableError,
    ShelterPostError,
)
from shelterpost.utils.logging import bind_session_context, clear_session_context


# ─── Error hierarchy ──────────────────────────────────────────────

class TestErrors:
    def test_provider_prefix_in_str(self):
        exc = BackendError("Approve request failed", provider_name="http_posts", status_code=500)
        assert str(exc) == "[http_posts] Approve request failed"
        assert exc.message == "Approve request failed"
        assert exc.status_code == 500

    def test_plain_message_without_provider(self):
        assert str(ShelterPostError("boom")) == "boom"

    def test_unavailable_is_backend_error(self):
        exc = ProviderUnavailableError(provider_name="http_categories")
        assert isinstance(exc, BackendError)
        assert exc.status_code is None

    def test_field_errors_are_copied(self):
        source = {"topic": "Title is required"}
        exc = FieldValidationError(source)
        source["topic"] = "changed"
        exc.errors["extra"] = "ignored"
        assert exc.errors == {"topic": "Title is required"}

    def test_not_found_keeps_id(self):
        exc = PostNotFoundError("42")
        assert exc.post_id == "42"
        assert "42" in exc.message

    def test_in_progress_is_state_error(self):
        assert isinstance(ModerationInProgressError(), ModerationStateError)


# ─── HTTP status mapping ──────────────────────────────────────────

class TestStatusFor:
    def test_mapping(self):
        assert status_for(FieldValidationError({"topic": "x"})) == 422
        assert status_for(ModerationInProgressError()) == 409
        assert status_for(PostAlreadyApprovedError("1")) == 409
        assert status_for(PostNotFoundError("1")) == 404
        assert status_for(ProviderUnavailableError()) == 502
        assert status_for(ConfigurationError()) == 500
        assert status_for(ShelterPostError()) == 500


# ─── Log context ──────────────────────────────────────────────────

class TestSessionContext:
    def test_bind_and_clear(self):
        bind_session_context("session-1", reviewer="r1")
        assert structlog.contextvars.get_contextvars() == {
            "dashboard_session": "session-1",
            "reviewer": "r1",
        }
        clear_session_context()
        assert structlog.contextvars.get_contextvars() == {}
