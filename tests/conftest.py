"""Shared test fixtures for the safariwatch test suite.

Provides camera feeds, canned count results, a fake Anchor API served
through httpx.MockTransport, and fake chat-completion responses.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Callable

import httpx
import pytest

from safariwatch.browser.anchor import AnchorBrowserClient
from safariwatch.domain.models import CameraFeed, Confidence, CountResult


# ---------------------------------------------------------------------------
# Feed / Result Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tiger_feed() -> CameraFeed:
    return CameraFeed(
        species="tigers",
        noun="tiger",
        image_url="https://zssd-tiger.preview.api.camzonecdn.com/previewimage",
    )


@pytest.fixture
def giraffe_feed() -> CameraFeed:
    return CameraFeed(
        species="giraffes",
        noun="giraffe",
        image_url="https://zssd-kijami.preview.api.camzonecdn.com/previewimage",
    )


@pytest.fixture
def tiger_result() -> CountResult:
    return CountResult(count=2, confidence=Confidence.HIGH, detail="I see 2 tigers.", success=True)


@pytest.fixture
def giraffe_result() -> CountResult:
    return CountResult(count=3, confidence=Confidence.HIGH, detail="3 giraffes near the tree", success=True)


# ---------------------------------------------------------------------------
# Fake Anchor API
# ---------------------------------------------------------------------------


Responder = Callable[[httpx.Request], httpx.Response]


class FakeAnchorAPI:
    """In-memory stand-in for the Anchor REST API.

    Each route has a responder that can be swapped per test. A responder
    may raise an httpx exception to simulate a transport failure.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.create: Responder = lambda r: httpx.Response(200, json={"data": {"id": "sess-1"}})
        self.task: Responder = lambda r: httpx.Response(200, json={"result": "I can see 3 tigers"})
        self.delete: Responder = lambda r: httpx.Response(200, json={"success": True})
        self.fetch: Responder = lambda r: httpx.Response(200, json={"content": "# origin 1.2.3.4"})

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "POST" and path.endswith("/sessions"):
            return self.create(request)
        if request.method == "POST" and path.endswith("/tools/perform-web-task"):
            return self.task(request)
        if request.method == "POST" and path.endswith("/tools/fetch-webpage"):
            return self.fetch(request)
        if request.method == "DELETE" and "/sessions/" in path:
            return self.delete(request)
        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path_suffix: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.endswith(path_suffix)
        ]

    @property
    def task_calls(self) -> list[httpx.Request]:
        return self.calls("POST", "/tools/perform-web-task")

    @property
    def delete_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "DELETE"]


@pytest.fixture
def anchor_api() -> FakeAnchorAPI:
    return FakeAnchorAPI()


@pytest.fixture
def anchor_client(anchor_api: FakeAnchorAPI) -> AnchorBrowserClient:
    """An unconnected client wired to the fake API. Use with ``async with``."""
    return AnchorBrowserClient(api_key="test-key", transport=anchor_api.transport)


# ---------------------------------------------------------------------------
# Fake chat completions
# ---------------------------------------------------------------------------


def _tool_call(call_id: str, name: str, arguments: str = "{}") -> SimpleNamespace:
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


def _chat_response(content: str | None = None, tool_calls: list | None = None) -> SimpleNamespace:
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def make_tool_call() -> Callable[..., SimpleNamespace]:
    return _tool_call


@pytest.fixture
def make_chat_response() -> Callable[..., SimpleNamespace]:
    return _chat_response
