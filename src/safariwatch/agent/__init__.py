"""Conversational agent module for safariwatch.

Public API:
    ZookeeperAgent -- Tool-calling chat agent
    ToolRegistry -- Named capabilities the agent can call
    build_tools -- The zookeeper toolset
"""

from safariwatch.agent.tools import AgentTool, ToolRegistry, build_tools
from safariwatch.agent.zookeeper import AgentError, AgentReply, ZookeeperAgent

__all__ = [
    "AgentError",
    "AgentReply",
    "AgentTool",
    "ToolRegistry",
    "ZookeeperAgent",
    "build_tools",
]
