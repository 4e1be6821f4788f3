"""Command-line interface for safariwatch.

Provides entry points for a one-off animal count, the fixed monitoring
workflow (once or on a schedule), the conversational zookeeper agent,
a connectivity diagnostic, and the HTTP server.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="safariwatch",
        description="Count safari park animals on webcam feeds",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/safariwatch.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("count", help="Count tigers and giraffes and print the report")

    workflow_parser = subparsers.add_parser(
        "workflow", help="Run the fixed monitoring workflow",
    )
    workflow_parser.add_argument(
        "--interval", type=float, default=None,
        help="Repeat every N seconds (default: run once)",
    )
    workflow_parser.add_argument(
        "--iterations", type=int, default=None,
        help=(
            "Stop after this many scheduled runs (default: run until interrupted); "
            "without --interval, runs use workflow.interval_seconds"
        ),
    )

    chat_parser = subparsers.add_parser("chat", help="Talk to the zookeeper agent")
    chat_parser.add_argument(
        "--prompt", type=str, default=None,
        help="Ask a single question and exit (default: interactive session)",
    )

    diagnose_parser = subparsers.add_parser(
        "diagnose", help="Check the automation service with a session-scoped page fetch",
    )
    diagnose_parser.add_argument(
        "--url", type=str, default=None,
        help="Page to fetch (default: https://httpbin.org/ip)",
    )

    subparsers.add_parser("serve", help="Start the HTTP server")

    return parser.parse_args(argv)


async def _count(runtime) -> int:
    """Run the aggregator once and print the report."""
    async with runtime:
        result = await runtime.watch.run()
    print(result.report)
    return 0 if result.success else 1


async def _workflow(runtime, args) -> int:
    """Run the monitoring workflow once or on a schedule."""
    interval = args.interval
    if interval is None and args.iterations is not None:
        interval = runtime.settings.workflow.interval_seconds

    async with runtime:
        if interval is None:
            run = await runtime.workflow.run()
            print(run.report)
            return 0 if run.success else 1

        failures = 0
        async for run in runtime.workflow.schedule(interval, args.iterations):
            print(run.report)
            print()
            if not run.success:
                failures += 1
        return 0 if failures == 0 else 1


async def _chat(runtime, args) -> int:
    """Ask the agent one question, or hold an interactive conversation."""
    from safariwatch.agent.zookeeper import AgentError

    async with runtime:
        if args.prompt:
            try:
                reply = await runtime.agent.generate(args.prompt)
            except AgentError as e:
                print(f"Agent error: {e}", file=sys.stderr)
                return 1
            print(reply.text)
            return 0

        print("Zookeeper agent ready. Type 'exit' or press Ctrl-D to quit.")
        history: list[dict[str, str]] = []
        while True:
            try:
                line = await asyncio.to_thread(input, "you> ")
            except EOFError:
                print()
                return 0
            line = line.strip()
            if not line:
                continue
            if line.lower() in ("exit", "quit"):
                return 0
            history.append({"role": "user", "content": line})
            try:
                reply = await runtime.agent.generate(history)
            except AgentError as e:
                print(f"Agent error: {e}", file=sys.stderr)
                history.pop()
                continue
            history.append({"role": "assistant", "content": reply.text})
            print(f"zookeeper> {reply.text}")


async def _diagnose(runtime, args) -> int:
    """Run the session + fetch-webpage diagnostic."""
    from safariwatch.diagnostics import run_session_diagnostic

    async with runtime:
        result = await run_session_diagnostic(runtime.client, args.url)
    print(f"Status:  {result.status.value}")
    print(f"Message: {result.message}")
    print(f"Session: {result.session_id}")
    return 0 if result.status.value == "SUCCESS" else 1


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the safariwatch CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from safariwatch.config.settings import load_settings
    from safariwatch.runtime import SafariRuntime
    from safariwatch.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)
    runtime = SafariRuntime(settings)

    exit_code = 0
    if args.command == "count":
        logger.info("Running animal count")
        exit_code = asyncio.run(_count(runtime))

    elif args.command == "workflow":
        logger.info("Running monitoring workflow")
        try:
            exit_code = asyncio.run(_workflow(runtime, args))
        except KeyboardInterrupt:
            logger.info("Scheduled workflow interrupted")

    elif args.command == "chat":
        exit_code = asyncio.run(_chat(runtime, args))

    elif args.command == "diagnose":
        logger.info("Running session diagnostic")
        exit_code = asyncio.run(_diagnose(runtime, args))

    elif args.command == "serve":
        from safariwatch.server import serve
        logger.info("Starting HTTP server")
        serve(runtime, host=settings.server.host, port=settings.server.port)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
