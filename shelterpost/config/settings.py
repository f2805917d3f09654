"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources (priority order):
#
#   1. Environment variables, e.g. API_BASE_URL=https://api.example.org
#   2. The .env file in the project root (local development only)
#
# Field ``api_base_url`` maps to env var ``API_BASE_URL``.  Defaults below
# apply when neither source provides a value.
#
# ``post_backend`` selects the data source injected into the dashboard:
#   "live" -> httpx providers talking to the shelter platform API
#   "stub" -> in-memory providers seeded with sample shelter posts
# ──────────────────────────────────────────────────────────────────────
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """shelterpost application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Shelter platform API ===
    api_base_url: str = "http://localhost:8080/api"
    api_token: str = ""  # Bearer token; empty = send no Authorization header
    request_timeout: float = Field(default=30.0, gt=0)

    # === Dashboard behaviour ===
    post_backend: Literal["live", "stub"] = "live"
    posts_page_size: int = Field(default=10, ge=1, le=100)
    # Author id attached to locally-synthesised posts when the create
    # endpoint does not echo one back.
    session_author_id: str = "current-shelter-id"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def auth_headers(self) -> dict[str, str]:
        """Return the Authorization header for backend calls, if a token is set."""
        if self.api_token:
            return {"Authorization": f"Bearer {self.api_token}"}
        return {}
