"""FastAPI HTTP surface for safariwatch.

Exposes the counting tools, the monitoring workflow, and the zookeeper
agent over HTTP so they can be triggered by a scheduler or a chat UI.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Literal

import uvicorn
from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel, Field

from safariwatch import __version__
from safariwatch.agent.zookeeper import AgentError, AgentReply
from safariwatch.runtime import SafariRuntime
from safariwatch.workflow.pipeline import WorkflowTrigger

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class GenerateRequest(BaseModel):
    prompt: str | None = Field(default=None, description="Single user prompt")
    messages: list[ChatMessage] | None = Field(
        default=None, description="Conversation so far, oldest first"
    )


class ServerStatus(BaseModel):
    status: str = "ok"
    version: str = __version__
    tools: list[str] = Field(default_factory=list)


def create_app(runtime: SafariRuntime) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.runtime.open()
        logger.info("safariwatch server started")
        try:
            yield
        finally:
            await app.state.runtime.close()
            logger.info("safariwatch server stopped")

    app = FastAPI(
        title="safariwatch",
        description="Safari park animal counting over webcam feeds",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.runtime = runtime

    @app.get("/health")
    async def health_check() -> ServerStatus:
        return ServerStatus(tools=app.state.runtime.tools.ids)

    @app.post("/tools/{tool_id}")
    async def invoke_tool(
        tool_id: str,
        arguments: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, Any]:
        tools = app.state.runtime.tools
        if tool_id not in tools:
            raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_id}")
        return await tools.invoke(tool_id, arguments or {})

    @app.post("/workflows/safari-monitoring/run")
    async def run_workflow(trigger: WorkflowTrigger | None = None) -> dict[str, Any]:
        run = await app.state.runtime.workflow.run(trigger)
        return {
            "report": run.report,
            "totalAnimals": run.total_animals,
            "timestamp": run.timestamp.isoformat(),
            "success": run.success,
            "steps": {
                "countTigers": run.tiger.to_tool_output(app.state.runtime.watch.tiger_feed),
                "countGiraffes": run.giraffe.to_tool_output(app.state.runtime.watch.giraffe_feed),
            },
        }

    @app.post("/agents/zookeeper/generate")
    async def generate(request: GenerateRequest) -> AgentReply:
        if request.messages:
            conversation: str | list[dict[str, Any]] = [m.model_dump() for m in request.messages]
        elif request.prompt:
            conversation = request.prompt
        else:
            raise HTTPException(status_code=422, detail="Provide 'prompt' or 'messages'")
        try:
            return await app.state.runtime.agent.generate(conversation)
        except AgentError as e:
            logger.error("Agent generation failed: %s", e)
            raise HTTPException(status_code=502, detail=str(e)) from e

    return app


def serve(runtime: SafariRuntime, host: str = "0.0.0.0", port: int = 4111) -> None:
    """Run the HTTP surface with uvicorn until interrupted."""
    uvicorn.run(create_app(runtime), host=host, port=port)
