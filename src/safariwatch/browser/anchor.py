"""Anchor Browser backend for the remote automation client.

Talks to the Anchor Browser REST API over HTTPS, authenticating every
request with a static API key header.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from safariwatch.browser.base import (
    AutomationError,
    BrowserAutomationClient,
    RemoteTaskError,
    SessionCreationError,
)
from safariwatch.config.settings import AnchorConfig
from safariwatch.domain.models import (
    AnchorBrowserConfig,
    AnchorSessionConfig,
    ProxySettings,
    SessionRequest,
    SessionTimeout,
    Viewport,
    VisualTaskRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.anchorbrowser.io/v1"


def build_session_request(config: AnchorConfig | None = None) -> SessionRequest:
    """Build the create-session body from the anchor configuration."""
    if config is None:
        config = AnchorConfig()
    return SessionRequest(
        session=AnchorSessionConfig(
            proxy=ProxySettings(type=config.proxy_type, country_code=config.proxy_country),
            timeout=SessionTimeout(
                max_duration=config.max_duration_minutes,
                idle_timeout=config.idle_timeout_minutes,
            ),
        ),
        browser=AnchorBrowserConfig(
            viewport=Viewport(width=config.viewport_width, height=config.viewport_height),
        ),
    )


class AnchorBrowserClient(BrowserAutomationClient):
    """Async client for the Anchor Browser API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 120.0,
        session_request: SessionRequest | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session_request = session_request or SessionRequest()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        api_key: str,
        config: AnchorConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AnchorBrowserClient:
        return cls(
            api_key=api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            session_request=build_session_request(config),
            transport=transport,
        )

    @property
    def session_request(self) -> SessionRequest:
        return self._session_request

    async def connect(self) -> None:
        """Create the HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers={
                "anchor-api-key": self._api_key,
                "Content-Type": "application/json",
            },
            transport=self._transport,
        )
        logger.debug("Anchor client ready (base_url=%s)", self._base_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Anchor client closed")

    async def create_session(self) -> str:
        """Create a session with the fixed configuration payload."""
        data = await self._request(
            "POST", "/sessions", payload=self._session_request.model_dump()
        )
        session_id = None
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            session_id = data["data"].get("id")
        if not session_id:
            raise SessionCreationError("Failed to create session", body=str(data)[:500])
        logger.info("Created browser session %s", session_id)
        return str(session_id)

    async def run_visual_task(self, session_id: str, prompt: str, url: str) -> str:
        """Run a perform-web-task call and return its free-text result."""
        body = VisualTaskRequest(
            prompt=prompt,
            url=url,
            proxy=self._session_request.session.proxy,
        )
        data = await self._request(
            "POST",
            "/tools/perform-web-task",
            payload=body.model_dump(),
            params={"sessionId": session_id},
            error_cls=RemoteTaskError,
        )
        result = data.get("result") if isinstance(data, dict) else None
        if result is None:
            return ""
        return result if isinstance(result, str) else json.dumps(result)

    async def delete_session(self, session_id: str) -> None:
        """Delete the session, logging and swallowing any failure."""
        try:
            await self._request("DELETE", f"/sessions/{session_id}")
            logger.info("Deleted browser session %s", session_id)
        except Exception as e:
            logger.warning("Session cleanup failed for %s: %s", session_id, e)

    async def fetch_webpage(
        self, session_id: str, url: str, format: str = "markdown"
    ) -> dict[str, Any]:
        """Fetch a page through the session, as markdown by default."""
        data = await self._request(
            "POST",
            "/tools/fetch-webpage",
            payload={"url": url, "format": format},
            params={"sessionId": session_id},
        )
        if isinstance(data, dict):
            return data
        return {"content": data}

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict | None = None,
        params: dict[str, str] | None = None,
        error_cls: type[AutomationError] = AutomationError,
    ) -> Any:
        """Send a request and decode the response body."""
        if self._client is None:
            raise AutomationError("Anchor client is not connected")
        try:
            if method == "DELETE" or payload is None:
                resp = await self._client.request(method, path, params=params)
            else:
                resp = await self._client.request(method, path, json=payload, params=params)
        except httpx.HTTPError as e:
            raise AutomationError(f"{method} {path} failed: {e}") from e

        if not resp.is_success:
            raise error_cls(
                f"HTTP {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )
        return decode_response(resp)


def decode_response(resp: httpx.Response) -> Any:
    """Decode a response body, tolerating a missing or wrong content type.

    JSON content types are parsed directly. Anything else is parsed as
    JSON if possible, and otherwise wrapped as raw content.
    """
    if not resp.content:
        return {}

    content_type = resp.headers.get("content-type", "")
    logger.debug("Response content type: %s", content_type or "(none)")

    if "application/json" in content_type:
        return resp.json()

    text = resp.text
    logger.debug("Non-JSON response: %s", text[:200])
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return {"content": text, "rawResponse": True}
