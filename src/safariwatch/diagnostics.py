"""Connectivity check for the automation service.

Creates a session, fetches a page through it as markdown, and deletes
the session again. Used to verify credentials and proxy setup without
spending a vision task.
"""

from __future__ import annotations

import logging

from safariwatch.browser.base import BrowserAutomationClient
from safariwatch.domain.models import DiagnosticResult, DiagnosticStatus

logger = logging.getLogger(__name__)

DEFAULT_TEST_URL = "https://httpbin.org/ip"


async def run_session_diagnostic(
    client: BrowserAutomationClient,
    test_url: str | None = None,
) -> DiagnosticResult:
    """Run the session-scoped fetch-webpage check. Never raises."""
    session_id: str | None = None
    try:
        session_id = await client.create_session()
        logger.info("Created session: %s", session_id)

        result = await client.fetch_webpage(session_id, test_url or DEFAULT_TEST_URL)
        content = result.get("content")
        length = len(content) if isinstance(content, str) else "unknown"
        return DiagnosticResult(
            status=DiagnosticStatus.SUCCESS,
            message=f"Session approach worked! Content length: {length}",
            session_id=session_id,
        )
    except Exception as e:
        logger.error("Session diagnostic failed: %s", e)
        return DiagnosticResult(
            status=DiagnosticStatus.ERROR,
            message=f"Session approach failed: {e}",
            session_id=session_id or "none",
        )
    finally:
        if session_id:
            await client.delete_session(session_id)
