"""Tests for the scoped session acquisition on BrowserAutomationClient."""

from __future__ import annotations

import httpx
import pytest

from safariwatch.browser.base import BrowserAutomationClient, SessionCreationError


class TestBrowserAutomationClientInterface:
    def test_cannot_instantiate_abstract_class(self) -> None:
        with pytest.raises(TypeError):
            BrowserAutomationClient()  # type: ignore[abstract]


class TestSessionScope:
    @pytest.mark.asyncio
    async def test_yields_id_and_deletes_once(self, anchor_client, anchor_api) -> None:
        async with anchor_client:
            async with anchor_client.session() as session_id:
                assert session_id == "sess-1"
                assert anchor_api.delete_calls == []
        assert len(anchor_api.delete_calls) == 1
        assert anchor_api.delete_calls[0].url.path.endswith("/sessions/sess-1")

    @pytest.mark.asyncio
    async def test_deletes_when_body_raises(self, anchor_client, anchor_api) -> None:
        async with anchor_client:
            with pytest.raises(RuntimeError):
                async with anchor_client.session():
                    raise RuntimeError("task blew up")
        assert len(anchor_api.delete_calls) == 1

    @pytest.mark.asyncio
    async def test_nothing_deleted_when_creation_fails(self, anchor_client, anchor_api) -> None:
        anchor_api.create = lambda r: httpx.Response(200, json={"data": None})
        async with anchor_client:
            with pytest.raises(SessionCreationError):
                async with anchor_client.session():
                    pass
        assert anchor_api.delete_calls == []
