"""Tests for the fixed-step SafariMonitoringWorkflow."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from safariwatch.counting.operation import AnimalCounter
from safariwatch.counting.report import AnimalWatch
from safariwatch.domain.models import CountResult
from safariwatch.workflow.pipeline import (
    SafariMonitoringWorkflow,
    WorkflowTrigger,
    generate_report,
)


@pytest.fixture
def watch(tiger_result, giraffe_result) -> MagicMock:
    mock = MagicMock(spec=AnimalWatch)
    mock.count_tigers = AsyncMock(return_value=tiger_result)
    mock.count_giraffes = AsyncMock(return_value=giraffe_result)
    return mock


class TestGenerateReport:
    def test_report_contents(self, tiger_result, giraffe_result) -> None:
        ts = datetime(2025, 6, 1, 9, 30, tzinfo=timezone.utc)
        run = generate_report(tiger_result, giraffe_result, timestamp=ts)

        assert run.total_animals == 5
        assert run.timestamp == ts
        assert run.success is True
        assert run.report.startswith("Safari Park Monitoring Report\nGenerated: 2025-06-01T09:30:00+00:00")
        assert "- Giraffes: 3 (High confidence)" in run.report
        assert "- Tigers: 2 (High confidence)" in run.report
        assert "- Total Animals: 5" in run.report
        assert "Tiger Camera: I see 2 tigers." in run.report
        assert "Giraffe Camera: 3 giraffes near the tree" in run.report
        assert run.report.endswith("Status: All cameras operational")

    def test_status_reports_camera_issues(self, tiger_result) -> None:
        failed = CountResult.failure("Error analyzing giraffe image: gone")
        run = generate_report(tiger_result, failed)
        assert run.success is False
        assert run.report.endswith("Status: Some camera issues detected")


class TestSafariMonitoringWorkflow:
    @pytest.mark.asyncio
    async def test_runs_all_steps_in_order(self, watch: MagicMock) -> None:
        order: list[str] = []
        watch.count_tigers.side_effect = lambda: order.append("tigers") or watch.count_tigers.return_value
        watch.count_giraffes.side_effect = lambda: order.append("giraffes") or watch.count_giraffes.return_value

        run = await SafariMonitoringWorkflow(watch).run(WorkflowTrigger(schedule_check=True))

        assert order == ["tigers", "giraffes"]
        assert run.total_animals == 5

    @pytest.mark.asyncio
    async def test_failed_step_does_not_skip_the_rest(self, watch: MagicMock) -> None:
        watch.count_tigers.return_value = CountResult.failure("Error analyzing tiger image: x")
        run = await SafariMonitoringWorkflow(watch).run()

        watch.count_giraffes.assert_awaited_once()
        assert run.success is False
        assert run.total_animals == 3

    @pytest.mark.asyncio
    async def test_schedule_runs_requested_iterations(self, watch: MagicMock) -> None:
        workflow = SafariMonitoringWorkflow(watch)
        runs = [run async for run in workflow.schedule(interval=0, iterations=3)]
        assert len(runs) == 3
        assert watch.count_tigers.await_count == 3
        assert watch.count_giraffes.await_count == 3

    @pytest.mark.asyncio
    async def test_overlong_number_from_remote_task_completes_run(
        self, anchor_client, anchor_api, tiger_feed, giraffe_feed
    ) -> None:
        anchor_api.task = lambda r: httpx.Response(200, json={"result": "1" * 5000})
        watch = AnimalWatch(AnimalCounter(anchor_client), tiger_feed, giraffe_feed)
        async with anchor_client:
            run = await SafariMonitoringWorkflow(watch).run()
        assert run.total_animals == 0
        assert run.success is True
        assert len(anchor_api.delete_calls) == 2


class TestWorkflowTrigger:
    def test_accepts_camel_case_field(self) -> None:
        trigger = WorkflowTrigger.model_validate({"scheduleCheck": True})
        assert trigger.schedule_check is True

    def test_accepts_field_name(self) -> None:
        assert WorkflowTrigger(schedule_check=False).schedule_check is False
