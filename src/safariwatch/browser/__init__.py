"""Remote browser-automation module for safariwatch.

Provides the session lifecycle (create, run visual task, delete) against
a hosted browser service.

Public API:
    BrowserAutomationClient -- Abstract base class
    AnchorBrowserClient -- Anchor Browser REST implementation
"""

from safariwatch.browser.base import (
    AutomationError,
    BrowserAutomationClient,
    RemoteTaskError,
    SessionCreationError,
)

__all__ = [
    "AnchorBrowserClient",
    "AutomationError",
    "BrowserAutomationClient",
    "RemoteTaskError",
    "SessionCreationError",
]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "AnchorBrowserClient":
        from safariwatch.browser.anchor import AnchorBrowserClient
        return AnchorBrowserClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
