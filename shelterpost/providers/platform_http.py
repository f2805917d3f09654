"""Shared httpx plumbing for the live shelter platform providers.

Both live providers talk to the same API with the same auth header and the
same failure semantics, so the request/response handling lives here once:

  - every call goes through an injected ``httpx.AsyncClient``
  - non-2xx responses and transport errors become ``BackendError``
  - an empty response body is returned as ``{}``
  - no automatic retries; a failed call is reported once to the caller
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from shelterpost.utils.errors import BackendError, ProviderUnavailableError

logger = structlog.get_logger(logger_name=__name__)


class PlatformHttpClient:
    """Thin JSON request helper bound to the platform base URL.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` (shared connection pool, mockable).
    base_url:
        Platform API root, e.g. ``https://api.example.org/api``.
    headers:
        Extra headers sent with every request (typically Authorization).
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        headers: Mapping[str, str] | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._headers = {"Accept": "application/json", **(headers or {})}
        self._timeout = timeout

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        provider_name: str,
        json: Any | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises
        ------
        BackendError
            On any non-2xx status or undecodable body.
        ProviderUnavailableError
            When the platform cannot be reached (connect error, timeout).
        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = await self._http.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("platform_http_status_error", method=method, path=path, status=status)
            raise BackendError(
                message=f"{method} {path} returned HTTP {status}",
                provider_name=provider_name,
                status_code=status,
            ) from exc
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            logger.warning("platform_unreachable", method=method, path=path, error=str(exc))
            raise ProviderUnavailableError(
                message=f"{method} {path} could not reach the platform: {exc}",
                provider_name=provider_name,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("platform_http_error", method=method, path=path, error=str(exc))
            raise BackendError(
                message=f"{method} {path} failed: {exc}",
                provider_name=provider_name,
            ) from exc

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise BackendError(
                message=f"{method} {path} returned a non-JSON body",
                provider_name=provider_name,
                status_code=response.status_code,
            ) from exc


def unwrap_record(body: Any) -> Mapping[str, Any]:
    """Return the single record in *body*, unwrapping a ``{"data": {...}}`` wrapper."""
    if isinstance(body, Mapping):
        inner = body.get("data")
        if isinstance(inner, Mapping):
            return inner
        return body
    return {}
