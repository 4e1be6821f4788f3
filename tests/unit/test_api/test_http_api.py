"""Tests for the FastAPI HTTP surface."""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from safariwatch.agent.tools import AgentTool, ToolRegistry
from safariwatch.agent.zookeeper import AgentError, AgentReply
from safariwatch.domain.models import CountResult
from safariwatch.server import create_app
from safariwatch.workflow.pipeline import generate_report


@pytest.fixture
def runtime(tiger_feed, giraffe_feed, tiger_result, giraffe_result) -> SimpleNamespace:
    tigers = AsyncMock(return_value=tiger_result.to_tool_output(tiger_feed))
    run = generate_report(
        tiger_result, giraffe_result, timestamp=datetime(2025, 6, 1, tzinfo=timezone.utc)
    )
    return SimpleNamespace(
        open=AsyncMock(),
        close=AsyncMock(),
        tools=ToolRegistry([AgentTool("count-tigers", "Count tigers", tigers)]),
        watch=SimpleNamespace(tiger_feed=tiger_feed, giraffe_feed=giraffe_feed),
        workflow=SimpleNamespace(run=AsyncMock(return_value=run)),
        agent=SimpleNamespace(generate=AsyncMock(
            return_value=AgentReply(text="Giraffes: 3", tool_calls=["animal-watch-tool"], rounds=2)
        )),
    )


@pytest.fixture
def client(runtime: SimpleNamespace) -> TestClient:
    return TestClient(create_app(runtime))


class TestHttpApi:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["tools"] == ["count-tigers"]

    def test_invoke_tool(self, client: TestClient) -> None:
        resp = client.post("/tools/count-tigers")
        assert resp.status_code == 200
        assert resp.json()["tigerCount"] == 2

    def test_unknown_tool_is_404(self, client: TestClient) -> None:
        resp = client.post("/tools/count-lions")
        assert resp.status_code == 404

    def test_run_workflow(self, client: TestClient, runtime: SimpleNamespace) -> None:
        resp = client.post("/workflows/safari-monitoring/run", json={"schedule_check": True})
        assert resp.status_code == 200
        body = resp.json()
        assert body["totalAnimals"] == 5
        assert body["success"] is True
        assert body["timestamp"] == "2025-06-01T00:00:00+00:00"
        assert body["steps"]["countGiraffes"]["giraffeCount"] == 3
        trigger = runtime.workflow.run.await_args.args[0]
        assert trigger.schedule_check is True

    def test_generate_from_prompt(self, client: TestClient, runtime: SimpleNamespace) -> None:
        resp = client.post("/agents/zookeeper/generate", json={"prompt": "Count please"})
        assert resp.status_code == 200
        assert resp.json()["text"] == "Giraffes: 3"
        runtime.agent.generate.assert_awaited_once_with("Count please")

    def test_generate_from_messages(self, client: TestClient, runtime: SimpleNamespace) -> None:
        messages = [{"role": "user", "content": "Count please"}]
        resp = client.post("/agents/zookeeper/generate", json={"messages": messages})
        assert resp.status_code == 200
        runtime.agent.generate.assert_awaited_once_with(messages)

    def test_generate_requires_input(self, client: TestClient) -> None:
        resp = client.post("/agents/zookeeper/generate", json={})
        assert resp.status_code == 422

    def test_generate_agent_error_is_502(self, client: TestClient, runtime: SimpleNamespace) -> None:
        runtime.agent.generate.side_effect = AgentError("rate limited")
        resp = client.post("/agents/zookeeper/generate", json={"prompt": "Count"})
        assert resp.status_code == 502
        assert "rate limited" in resp.json()["detail"]

    def test_lifespan_opens_and_closes_runtime(self, runtime: SimpleNamespace) -> None:
        with TestClient(create_app(runtime)) as client:
            client.get("/health")
            runtime.open.assert_awaited_once()
        runtime.close.assert_awaited_once()

    def test_run_workflow_passes_schedule_check(self, client: TestClient, runtime: SimpleNamespace) -> None:
        resp = client.post("/workflows/safari-monitoring/run", json={"scheduleCheck": True})
        assert resp.status_code == 200
        trigger = runtime.workflow.run.await_args.args[0]
        assert trigger.schedule_check is True

    @pytest.mark.asyncio
    async def test_lifespan_closes_runtime_when_app_errors(self, runtime: SimpleNamespace) -> None:
        app = create_app(runtime)
        with pytest.raises(RuntimeError, match="server crashed"):
            async with app.router.lifespan_context(app):
                runtime.open.assert_awaited_once()
                raise RuntimeError("server crashed")
        runtime.close.assert_awaited_once()
