from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from .observability import log_event

DEFAULT_BASE_URL = "https://app.honeybadger.io/v2"

# The adapter never mutates upstream state.
READ_ONLY_METHODS = frozenset({"GET", "HEAD"})


class HoneybadgerClientError(Exception):
    """Base error for client failures."""


class HoneybadgerHTTPError(HoneybadgerClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        response_text: str = "",
    ):
        super().__init__(f"Honeybadger API error ({status_code}): {response_text}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_text = response_text


class HoneybadgerParseError(HoneybadgerClientError):
    pass


class ReadOnlyViolationError(HoneybadgerClientError):
    """Raised when a caller asks for anything other than a read."""


class HoneybadgerClient:
    """
    Shared HTTP client for the Honeybadger v2 REST API.
    - Handles auth (token as basic-auth username), base URL, timeouts
    - Returns parsed JSON payloads; 204/empty bodies become {}
    - No retries and no business logic; accessors own response shapes
    """

    def __init__(
        self,
        *,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        api_token = api_token or ""

        if not api_token:
            raise ValueError("api_token must be provided.")

        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("honeybadger_mcp.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            auth=httpx.BasicAuth(api_token, ""),
            headers={"Accept": "application/json"},
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HoneybadgerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _url(self, path: str) -> str:
        # Paths are joined onto the full base so the /v2 prefix survives.
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        """
        Core request method.
        - Rejects non-read methods with ReadOnlyViolationError
        - Raises HoneybadgerHTTPError on non-2xx responses (status + raw body)
        - Re-raises httpx transport errors unchanged after logging them
        - Raises HoneybadgerParseError if a 2xx body isn't valid JSON
        """
        method = method.upper()
        if method not in READ_ONLY_METHODS:
            raise ReadOnlyViolationError(
                f"{method} is not allowed; the Honeybadger adapter is read-only."
            )

        url = self._url(path)
        start = time.perf_counter()
        try:
            resp = await self.http.request(
                method, url, params=params, headers=headers
            )
        except httpx.HTTPError as exc:
            log_event(
                "op_call",
                tool=tool,
                method=method,
                endpoint=path,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            self.log.error("API request failed: %s %s: %s", method, url, exc)
            raise

        log_event(
            "op_call",
            tool=tool,
            method=method,
            endpoint=path,
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            error = HoneybadgerHTTPError(
                status_code=resp.status_code,
                method=method,
                url=str(resp.request.url),
                response_text=resp.text or "",
            )
            self.log.error("API request failed: %s", error)
            raise error

        return self._safe_json(resp)

    def _safe_json(self, resp: httpx.Response) -> Any:
        # 204 No Content and other empty bodies read as an empty object
        if resp.status_code == 204 or not resp.content:
            return {}

        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            error = HoneybadgerParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            )
            self.log.error("API request failed: %s", error)
            raise error from exc

    async def get(
        self,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        return await self.request("GET", path, params=params, headers=headers, tool=tool)


__all__ = [
    "DEFAULT_BASE_URL",
    "READ_ONLY_METHODS",
    "HoneybadgerClient",
    "HoneybadgerClientError",
    "HoneybadgerHTTPError",
    "HoneybadgerParseError",
    "ReadOnlyViolationError",
]
