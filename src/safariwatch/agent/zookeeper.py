"""Conversational zookeeper agent.

Wraps an OpenAI-compatible chat-completions endpoint (Groq by default)
in a bounded tool-calling loop. The model decides when to call the
counting tools; their outputs are fed back as JSON tool messages until
the model answers in plain text.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from pydantic import BaseModel, Field

from safariwatch.agent.tools import ToolRegistry

logger = logging.getLogger(__name__)


ZOOKEEPER_INSTRUCTIONS = """You are a professional Zookeeper responsible for monitoring the safari park.

Your primary function is to analyze camera feeds to count the number of animals present in different areas of the safari park.

When performing animal counts:
- Be patient and wait for images to load completely
- Use the available tools to analyze tiger and giraffe camera feeds
- Provide accurate counts for each animal type
- Always present results in this clear format:
  Giraffes: X
  Tigers: Y
  Total Animals: Z

- If there are any issues with the camera feeds, report them clearly
- Keep responses professional and concise
- Focus on accuracy over speed

Use the available tools to gather the latest animal count data from both camera feeds.
"""

TOOL_LIMIT_NOTICE = "Stopped after reaching the tool call limit without a final answer."


class AgentReply(BaseModel):
    """Final answer of one agent turn plus the tools it used."""

    text: str
    tool_calls: list[str] = Field(default_factory=list)
    rounds: int = Field(default=0, ge=0)


class ZookeeperAgent:
    """Tool-calling agent over an OpenAI-compatible chat API.

    Example usage::

        agent = ZookeeperAgent(api_key="gsk_...", tools=registry)
        reply = await agent.generate("How many animals are in the park?")
        print(reply.text)
    """

    def __init__(
        self,
        api_key: str,
        tools: ToolRegistry,
        model: str = "meta-llama/llama-4-scout-17b-16e-instruct",
        base_url: str | None = "https://api.groq.com/openai/v1",
        instructions: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.2,
        max_tool_rounds: int = 5,
        client: Any = None,
    ) -> None:
        self._api_key = api_key
        self._tools = tools
        self._model = model
        self._base_url = base_url
        self._instructions = instructions or ZOOKEEPER_INSTRUCTIONS
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._max_tool_rounds = max_tool_rounds
        self._client = client

    @property
    def model(self) -> str:
        return self._model

    @property
    def tools(self) -> ToolRegistry:
        return self._tools

    async def _ensure_client(self) -> None:
        """Lazily initialize the OpenAI async client."""
        if self._client is not None:
            return
        from openai import AsyncOpenAI
        kwargs = {"api_key": self._api_key}
        if self._base_url:
            kwargs["base_url"] = self._base_url
        self._client = AsyncOpenAI(**kwargs)
        logger.info("Initialized chat client (model=%s, base_url=%s)", self._model, self._base_url)

    async def generate(self, conversation: str | list[dict[str, Any]]) -> AgentReply:
        """Answer a prompt or continue a conversation.

        Args:
            conversation: A single user prompt, or a list of
                          ``{"role", "content"}`` messages.

        Raises:
            AgentError: If the chat API call fails.
        """
        await self._ensure_client()
        if isinstance(conversation, str):
            conversation = [{"role": "user", "content": conversation}]
        messages: list[dict[str, Any]] = [
            {"role": "system", "content": self._instructions},
            *conversation,
        ]

        used: list[str] = []
        last_text = ""
        for round_number in range(1, self._max_tool_rounds + 1):
            message = await self._complete(messages)
            last_text = message.content or last_text
            tool_calls = message.tool_calls or []
            if not tool_calls:
                return AgentReply(text=message.content or "", tool_calls=used, rounds=round_number)

            messages.append({
                "role": "assistant",
                "content": message.content or "",
                "tool_calls": [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {
                            "name": call.function.name,
                            "arguments": call.function.arguments,
                        },
                    }
                    for call in tool_calls
                ],
            })
            outputs = await asyncio.gather(*(self._run_tool_call(call) for call in tool_calls))
            for call, output in zip(tool_calls, outputs):
                used.append(call.function.name)
                messages.append({
                    "role": "tool",
                    "tool_call_id": call.id,
                    "content": json.dumps(output),
                })

        logger.warning("Tool round limit (%d) reached", self._max_tool_rounds)
        return AgentReply(
            text=last_text or TOOL_LIMIT_NOTICE,
            tool_calls=used,
            rounds=self._max_tool_rounds,
        )

    async def _complete(self, messages: list[dict[str, Any]]) -> Any:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                messages=messages,
                tools=self._tools.openai_specs(),
                tool_choice="auto",
            )
        except Exception as e:
            raise AgentError(f"Chat completion failed: {e}", model=self._model) from e
        message = response.choices[0].message
        logger.debug("Agent response: %s", (message.content or "")[:200])
        return message

    async def _run_tool_call(self, call: Any) -> dict[str, Any]:
        """Run one requested tool call, reporting problems back to the model."""
        name = call.function.name
        try:
            arguments = json.loads(call.function.arguments or "{}")
        except json.JSONDecodeError:
            return {"error": f"Invalid JSON arguments for {name}"}
        if not isinstance(arguments, dict):
            arguments = {}
        if name not in self._tools:
            logger.warning("Model requested unknown tool %s", name)
            return {"error": f"Unknown tool: {name}"}
        return await self._tools.invoke(name, arguments)


class AgentError(Exception):
    """Raised when the conversational agent cannot reach its model."""

    def __init__(self, message: str, model: str = "") -> None:
        super().__init__(message)
        self.model = model
