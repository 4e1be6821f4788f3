"""Callable capabilities exposed to the zookeeper agent.

Each tool pairs an id and JSON-schema parameters (in the shape the
chat-completions function-calling API expects) with an async handler
that returns a JSON-serializable dict.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from safariwatch.browser.base import BrowserAutomationClient
from safariwatch.counting.report import AnimalWatch
from safariwatch.diagnostics import run_session_diagnostic

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]

_NO_PARAMETERS: dict[str, Any] = {"type": "object", "properties": {}}


class AgentTool:
    """A single named capability the agent can call."""

    def __init__(
        self,
        tool_id: str,
        description: str,
        handler: ToolHandler,
        parameters: dict[str, Any] | None = None,
    ) -> None:
        self.tool_id = tool_id
        self.description = description
        self.parameters = parameters or _NO_PARAMETERS
        self._handler = handler

    def to_openai_spec(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.tool_id,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    async def __call__(self, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self._handler(arguments or {})


class ToolRegistry:
    """Ordered collection of agent tools, looked up by id."""

    def __init__(self, tools: list[AgentTool] | None = None) -> None:
        self._tools: dict[str, AgentTool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: AgentTool) -> None:
        if tool.tool_id in self._tools:
            raise ValueError(f"Duplicate tool id: {tool.tool_id}")
        self._tools[tool.tool_id] = tool

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def ids(self) -> list[str]:
        return list(self._tools)

    def get(self, tool_id: str) -> AgentTool:
        try:
            return self._tools[tool_id]
        except KeyError:
            raise KeyError(f"Unknown tool: {tool_id}") from None

    def openai_specs(self) -> list[dict[str, Any]]:
        return [tool.to_openai_spec() for tool in self._tools.values()]

    async def invoke(self, tool_id: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """Invoke a tool by id.

        Raises:
            KeyError: If no tool with that id is registered.
        """
        tool = self.get(tool_id)
        logger.info("Invoking tool %s", tool_id)
        return await tool(arguments)


def build_tools(watch: AnimalWatch, client: BrowserAutomationClient) -> ToolRegistry:
    """Build the zookeeper toolset over the given watch and client."""

    async def count_tigers(_: dict[str, Any]) -> dict[str, Any]:
        result = await watch.count_tigers()
        return result.to_tool_output(watch.tiger_feed)

    async def count_giraffes(_: dict[str, Any]) -> dict[str, Any]:
        result = await watch.count_giraffes()
        return result.to_tool_output(watch.giraffe_feed)

    async def animal_watch(_: dict[str, Any]) -> dict[str, Any]:
        report = await watch.run()
        return report.to_tool_output()

    async def session_diagnostic(arguments: dict[str, Any]) -> dict[str, Any]:
        result = await run_session_diagnostic(client, arguments.get("testUrl"))
        return result.to_tool_output()

    return ToolRegistry([
        AgentTool(
            "animal-watch-tool",
            "Get complete count of animals in the safari park by analyzing both camera feeds",
            animal_watch,
        ),
        AgentTool(
            "count-tigers",
            "Analyze the tiger camera feed to count the number of tigers present",
            count_tigers,
        ),
        AgentTool(
            "count-giraffes",
            "Analyze the giraffe camera feed to count the number of giraffes present",
            count_giraffes,
        ),
        AgentTool(
            "test-session-approach",
            "Test session-based fetch webpage approach with correct query param",
            session_diagnostic,
            parameters={
                "type": "object",
                "properties": {
                    "testUrl": {
                        "type": "string",
                        "description": "URL to fetch through the session",
                    },
                },
            },
        ),
    ])
