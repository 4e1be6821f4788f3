"""Aggregation of both feeds into a single safari report."""

from __future__ import annotations

import logging

from safariwatch.counting.operation import AnimalCounter
from safariwatch.domain.models import CameraFeed, CountResult, SafariReport

logger = logging.getLogger(__name__)


REPORT_TEMPLATE = """Safari Park Animal Count Report:
- Giraffes: {giraffes} ({giraffe_confidence} confidence)
- Tigers: {tigers} ({tiger_confidence} confidence)
- Total Animals: {total}

Details:
Tiger Analysis: {tiger_detail}
Giraffe Analysis: {giraffe_detail}"""


def build_report(tiger: CountResult, giraffe: CountResult) -> str:
    """Render the count report. Detail strings are embedded verbatim."""
    return REPORT_TEMPLATE.format(
        giraffes=giraffe.count,
        giraffe_confidence=giraffe.confidence.value,
        tigers=tiger.count,
        tiger_confidence=tiger.confidence.value,
        total=tiger.count + giraffe.count,
        tiger_detail=tiger.detail,
        giraffe_detail=giraffe.detail,
    )


def aggregate(tiger: CountResult, giraffe: CountResult) -> SafariReport:
    return SafariReport(
        giraffes=giraffe.count,
        tigers=tiger.count,
        total_animals=tiger.count + giraffe.count,
        report=build_report(tiger, giraffe),
        success=tiger.success and giraffe.success,
    )


class AnimalWatch:
    """Counts both feeds and aggregates them into a SafariReport."""

    def __init__(
        self,
        counter: AnimalCounter,
        tiger_feed: CameraFeed,
        giraffe_feed: CameraFeed,
    ) -> None:
        self._counter = counter
        self._tiger_feed = tiger_feed
        self._giraffe_feed = giraffe_feed

    @property
    def counter(self) -> AnimalCounter:
        return self._counter

    @property
    def tiger_feed(self) -> CameraFeed:
        return self._tiger_feed

    @property
    def giraffe_feed(self) -> CameraFeed:
        return self._giraffe_feed

    async def count_tigers(self) -> CountResult:
        return await self._counter.count(self._tiger_feed)

    async def count_giraffes(self) -> CountResult:
        return await self._counter.count(self._giraffe_feed)

    async def run(self) -> SafariReport:
        """Count tigers, then giraffes, and build the report. Never raises."""
        try:
            logger.info("Starting complete safari animal count...")
            tiger = await self.count_tigers()
            logger.info("Tiger count result: %s", tiger)
            giraffe = await self.count_giraffes()
            logger.info("Giraffe count result: %s", giraffe)
            return aggregate(tiger, giraffe)
        except Exception as e:
            logger.error("Error during safari analysis: %s", e)
            return SafariReport(
                giraffes=0,
                tigers=0,
                total_animals=0,
                report=f"Error during safari analysis: {e}",
                success=False,
            )
