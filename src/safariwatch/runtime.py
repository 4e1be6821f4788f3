"""Component wiring for safariwatch.

Builds the automation client, counters, workflow and agent from a
Settings object once, so every entry point shares the same wiring.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from safariwatch.agent.tools import ToolRegistry, build_tools
from safariwatch.agent.zookeeper import ZookeeperAgent
from safariwatch.browser.anchor import AnchorBrowserClient
from safariwatch.config.settings import FeedConfig, Settings
from safariwatch.counting.operation import AnimalCounter
from safariwatch.counting.report import AnimalWatch
from safariwatch.domain.models import CameraFeed
from safariwatch.workflow.pipeline import SafariMonitoringWorkflow

logger = logging.getLogger(__name__)


def feed_from_config(config: FeedConfig) -> CameraFeed:
    return CameraFeed(species=config.species, noun=config.noun, image_url=config.image_url)


class SafariRuntime:
    """All safariwatch components, built from one Settings instance.

    Use as an async context manager so the automation client is opened
    and closed around the work::

        async with SafariRuntime(settings) as runtime:
            report = await runtime.watch.run()
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        chat_client: Any = None,
    ) -> None:
        self.settings = settings
        anchor_key = settings.anchor_api_key.get_secret_value()
        if not anchor_key:
            logger.warning("ANCHOR_API_KEY is not set; automation calls will be rejected")

        self.client = AnchorBrowserClient.from_config(
            api_key=anchor_key,
            config=settings.anchor,
            transport=transport,
        )
        self.counter = AnimalCounter(self.client)
        self.watch = AnimalWatch(
            self.counter,
            tiger_feed=feed_from_config(settings.feeds.tiger),
            giraffe_feed=feed_from_config(settings.feeds.giraffe),
        )
        self.workflow = SafariMonitoringWorkflow(self.watch)
        self.tools: ToolRegistry = build_tools(self.watch, self.client)

        agent_cfg = settings.agent
        self.agent = ZookeeperAgent(
            api_key=settings.groq_api_key.get_secret_value(),
            tools=self.tools,
            model=agent_cfg.model,
            base_url=agent_cfg.base_url,
            max_tokens=agent_cfg.max_tokens,
            temperature=agent_cfg.temperature,
            max_tool_rounds=agent_cfg.max_tool_rounds,
            client=chat_client,
        )

    async def open(self) -> None:
        await self.client.connect()

    async def close(self) -> None:
        await self.client.disconnect()

    async def __aenter__(self) -> SafariRuntime:
        await self.open()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.close()
