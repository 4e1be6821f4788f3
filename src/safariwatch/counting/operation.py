"""The per-feed counting operation.

Runs create session -> visual task -> extract count -> delete session
for one camera feed, turning every failure into a structured result.
"""

from __future__ import annotations

import logging

from safariwatch.browser.base import BrowserAutomationClient
from safariwatch.counting.extract import extract_count
from safariwatch.domain.models import CameraFeed, Confidence, CountResult

logger = logging.getLogger(__name__)


COUNT_PROMPT = (
    "Analyze this image and count the number of {species} visible. "
    "Look carefully at the entire image. "
    "Return just the number of {species} you can see clearly. "
    "Be precise and only count {species} that are clearly visible."
)


def build_count_prompt(feed: CameraFeed) -> str:
    return COUNT_PROMPT.format(species=feed.species)


class AnimalCounter:
    """Counts animals on a camera feed through the automation client.

    Each call to count() owns exactly one remote session, which is
    deleted before the call returns whether or not the task succeeded.
    """

    def __init__(self, client: BrowserAutomationClient) -> None:
        self._client = client

    async def count(self, feed: CameraFeed) -> CountResult:
        """Count the animals visible on ``feed``. Never raises."""
        try:
            async with self._client.session() as session_id:
                logger.info("Analyzing %s camera feed...", feed.noun)
                text = await self._client.run_visual_task(
                    session_id, build_count_prompt(feed), feed.image_url
                )
            logger.info("%s analysis result: %s", feed.noun.capitalize(), text)
            return CountResult(
                count=extract_count(text),
                confidence=Confidence.HIGH,
                detail=text,
                success=True,
            )
        except Exception as e:
            logger.error("Error counting %s: %s", feed.species, e)
            return CountResult.failure(f"Error analyzing {feed.noun} image: {e}")
