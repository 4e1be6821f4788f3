"""Abstract base class for remote browser-automation clients.

A client owns the connection to a hosted browser service and exposes the
three calls the counting operations need: create a session, run a
natural-language visual task against a URL, and delete the session.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

logger = logging.getLogger(__name__)


class BrowserAutomationClient(ABC):
    """Abstract interface for a hosted browser-automation service.

    Example usage::

        async with AnchorBrowserClient(api_key="...") as client:
            async with client.session() as session_id:
                text = await client.run_visual_task(
                    session_id, "How many tigers are visible?", url
                )
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying transport. Must be called before any request."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the underlying transport. Safe to call multiple times."""
        ...

    @abstractmethod
    async def create_session(self) -> str:
        """Create a remote browser session with the fixed configuration.

        Returns:
            The opaque session identifier.

        Raises:
            SessionCreationError: If the response carries no identifier.
            AutomationError: On transport or HTTP failures.
        """
        ...

    @abstractmethod
    async def run_visual_task(self, session_id: str, prompt: str, url: str) -> str:
        """Ask the remote vision agent to perform a task on a page.

        Args:
            session_id: Session the task belongs to.
            prompt: Natural-language instruction.
            url: Page or image to open before answering.

        Returns:
            Whatever free text the remote service produced, possibly empty.

        Raises:
            RemoteTaskError: On a non-success HTTP status.
            AutomationError: On transport failures.
        """
        ...

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        """Delete a session. Best-effort: never raises."""
        ...

    @abstractmethod
    async def fetch_webpage(
        self, session_id: str, url: str, format: str = "markdown"
    ) -> dict[str, Any]:
        """Fetch a page's content through a session (diagnostic path)."""
        ...

    @asynccontextmanager
    async def session(self) -> AsyncIterator[str]:
        """Acquire a session and delete it on every exit path.

        A creation failure propagates and nothing is deleted, since no
        session exists yet.
        """
        session_id = await self.create_session()
        try:
            yield session_id
        finally:
            await self.delete_session(session_id)

    async def __aenter__(self) -> BrowserAutomationClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


class AutomationError(Exception):
    """Raised when a call to the automation service fails."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SessionCreationError(AutomationError):
    """Raised when the service does not return a session identifier."""


class RemoteTaskError(AutomationError):
    """Raised when the visual-task endpoint answers with a failure status."""
