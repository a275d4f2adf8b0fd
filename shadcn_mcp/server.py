#!/usr/bin/env python3
"""
shadcn MCP Server - Model Context Protocol interface for the shadcn-ui CLI.

Supports stdio transport for MCP clients (Claude Desktop, IDE agents).
Run with: python -m shadcn_mcp

Tools:
- init_shadcn: npx shadcn-ui@latest init -y
- add_component: npx shadcn-ui@latest add <components>
- list_components: npx shadcn-ui@latest list

Each tool takes a `directory` (project root); the command runs there and its
stdout/stderr are returned.
"""  # noqa: I001

from __future__ import annotations

import asyncio
import logging
import sys
import time
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import TextContent, Tool

from shadcn_mcp import __version__
from shadcn_mcp.config import LOG_LEVELS, McpConfig, load_config
from shadcn_mcp.dispatcher import ToolDispatcher
from shadcn_mcp.errors import error_kind, internal_error
from shadcn_mcp.observability import ObservabilityContext, setup_logging
from shadcn_mcp.registry import list_tools
from shadcn_mcp.tools.runner import CommandRunner, make_runner

SERVER_NAME = "shadcn-mcp"
READY_MESSAGE = "shadcn MCP server running on stdio"

logger = logging.getLogger("shadcn-mcp")


class ShadcnMcpServer:
    """shadcn MCP Server implementation."""

    def __init__(self, config: McpConfig, runner: CommandRunner | None = None):
        self.config = config
        self.server = Server(SERVER_NAME, version=__version__)
        self.obs = ObservabilityContext(config.observability)

        if runner is None:
            runner = make_runner(timeout=config.cli.timeout_or_none)
        self.dispatcher = ToolDispatcher(runner=runner, cli=config.cli)
        self.tools = list_tools()

        self._register_handlers()
        logger.info(
            f"shadcn MCP server initialized ({__version__}, "
            f"cli={config.cli.runner} {config.cli.package})"
        )

    def _register_handlers(self):
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def _list_tools() -> list[Tool]:
            logger.debug("list_tools called")
            return self.tools

        async def _call_tool(req: types.CallToolRequest) -> types.ServerResult:
            content = await self.call_tool(req.params.name, req.params.arguments)
            return types.ServerResult(types.CallToolResult(content=content, isError=False))

        # Registered directly rather than via @server.call_tool(): that decorator
        # turns exceptions into isError content, and tool failures here must go
        # back as JSON-RPC errors.
        self.server.request_handlers[types.CallToolRequest] = _call_tool

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """Dispatch one tool call with logging and metrics. Raises McpError on failure."""
        cid = self.obs.correlation_id()
        start_time = time.time()
        success = False
        error_msg = None

        logger.info(f"call_tool: {name}", extra={"correlation_id": cid, "tool": name})

        try:
            text = await self.dispatcher.dispatch(name, arguments)
            success = True
            return [TextContent(type="text", text=text)]
        except McpError as e:
            error_msg = e.error.message
            kind = error_kind(e)
            logger.warning(
                f"Tool {name} failed ({kind.name if kind else e.error.code}): {error_msg}",
                extra={"correlation_id": cid, "tool": name},
            )
            raise
        except Exception as e:
            error_msg = str(e)
            logger.exception(
                f"Tool {name} crashed: {e}", extra={"correlation_id": cid, "tool": name}
            )
            raise internal_error(error_msg) from e
        finally:
            latency_ms = (time.time() - start_time) * 1000
            self.obs.record(tool=name, latency_ms=latency_ms, success=success)
            logger.info(
                f"call_tool done: {name}",
                extra={
                    "correlation_id": cid,
                    "tool": name,
                    "latency_ms": round(latency_ms, 2),
                    "status": "ok" if success else "error",
                    "error": error_msg,
                },
            )

    async def run(self):
        """Run the server with stdio transport until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            print(READY_MESSAGE, file=sys.stderr, flush=True)
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    def log_stats(self) -> None:
        if not self.obs.enabled:
            return
        stats = self.obs.get_stats()
        logger.info(
            f"Served {stats['total_requests']} tool calls "
            f"({stats['total_errors']} errors) in {stats['uptime_s']}s"
        )


def serve(config: McpConfig) -> None:
    """Configure logging, build the server and block on the stdio loop."""
    setup_logging(config.observability, config.server.log_level, SERVER_NAME)

    logger.info(
        f"Config loaded: log_level={config.server.log_level}, "
        f"runner={config.cli.runner}, package={config.cli.package}, "
        f"timeout={config.cli.timeout_or_none}"
    )

    server = ShadcnMcpServer(config)
    try:
        asyncio.run(server.run())
    finally:
        server.log_stats()


def main():
    """Entry point for the shadcn MCP server."""
    import argparse

    parser = argparse.ArgumentParser(description="shadcn MCP Server")
    parser.add_argument(
        "--config",
        "-c",
        help="Path to shadcn-mcp.toml config file",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Override log level",
    )
    args = parser.parse_args()

    try:
        config = load_config(args.config)
        if args.log_level:
            config.server.log_level = args.log_level
        serve(config)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"[{SERVER_NAME}] fatal: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
