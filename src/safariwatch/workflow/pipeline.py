"""Fixed-step safari monitoring workflow.

Runs countTigers -> countGiraffes -> generateReport unconditionally and
in order. Intended for scheduled or externally triggered runs, where no
model decides which steps to take.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import AsyncIterator

from pydantic import BaseModel, ConfigDict, Field

from safariwatch.counting.report import AnimalWatch
from safariwatch.domain.models import CountResult, WorkflowRun

logger = logging.getLogger(__name__)


STEP_NAMES = ("countTigers", "countGiraffes", "generateReport")

WORKFLOW_REPORT_TEMPLATE = """Safari Park Monitoring Report
Generated: {timestamp}

Animal Counts:
- Giraffes: {giraffes} ({giraffe_confidence} confidence)
- Tigers: {tigers} ({tiger_confidence} confidence)
- Total Animals: {total}

Camera Feed Analysis:
Tiger Camera: {tiger_detail}
Giraffe Camera: {giraffe_detail}

Status: {status}"""


class WorkflowTrigger(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schedule_check: bool | None = Field(default=None, alias="scheduleCheck")


def generate_report(
    tiger: CountResult,
    giraffe: CountResult,
    timestamp: datetime | None = None,
) -> WorkflowRun:
    """Build the workflow report from both step results."""
    timestamp = timestamp or datetime.now(timezone.utc)
    total = tiger.count + giraffe.count
    status = (
        "All cameras operational"
        if tiger.success and giraffe.success
        else "Some camera issues detected"
    )
    report = WORKFLOW_REPORT_TEMPLATE.format(
        timestamp=timestamp.isoformat(),
        giraffes=giraffe.count,
        giraffe_confidence=giraffe.confidence.value,
        tigers=tiger.count,
        tiger_confidence=tiger.confidence.value,
        total=total,
        tiger_detail=tiger.detail,
        giraffe_detail=giraffe.detail,
        status=status,
    ).strip()
    return WorkflowRun(
        tiger=tiger,
        giraffe=giraffe,
        report=report,
        total_animals=total,
        timestamp=timestamp,
    )


class SafariMonitoringWorkflow:
    """Safari Park Animal Monitoring workflow."""

    name = "Safari Park Animal Monitoring"

    def __init__(self, watch: AnimalWatch) -> None:
        self._watch = watch

    async def run(self, trigger: WorkflowTrigger | None = None) -> WorkflowRun:
        """Execute all three steps in order."""
        trigger = trigger or WorkflowTrigger()
        logger.info("Workflow '%s' started (trigger=%s)", self.name, trigger.model_dump())

        logger.info("Step %s", STEP_NAMES[0])
        tiger = await self._watch.count_tigers()

        logger.info("Step %s", STEP_NAMES[1])
        giraffe = await self._watch.count_giraffes()

        logger.info("Step %s", STEP_NAMES[2])
        run = generate_report(tiger, giraffe)

        logger.info(
            "Workflow finished: total=%d success=%s", run.total_animals, run.success
        )
        return run

    async def schedule(
        self,
        interval: float,
        iterations: int | None = None,
    ) -> AsyncIterator[WorkflowRun]:
        """Run the workflow every ``interval`` seconds.

        Yields each run as it completes. Runs forever when ``iterations``
        is None, until the consuming task is cancelled.
        """
        completed = 0
        while iterations is None or completed < iterations:
            yield await self.run(WorkflowTrigger(schedule_check=True))
            completed += 1
            if iterations is not None and completed >= iterations:
                break
            await asyncio.sleep(interval)
