"""Tool dispatch: arguments in, shadcn-ui command out, text back."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from shadcn_mcp.arguments import (
    AddComponentArguments,
    InitShadcnArguments,
    ListComponentsArguments,
    parse_arguments,
)
from shadcn_mcp.config import CliConfig
from shadcn_mcp.errors import internal_error
from shadcn_mcp.registry import ADD_COMPONENT, INIT_SHADCN, LIST_COMPONENTS
from shadcn_mcp.tools.runner import (
    CommandExecutionError,
    CommandResult,
    CommandRunner,
    run_command,
)
from shadcn_mcp.tools.shadcn import add_command, init_command, list_command


class ToolDispatcher:
    """Maps a tool invocation to one run of the wrapped CLI."""

    def __init__(self, runner: CommandRunner | None = None, cli: CliConfig | None = None):
        self.runner: CommandRunner = runner or run_command
        self.cli = cli or CliConfig()
        self.tool_handlers: dict[str, Callable[[Any], Awaitable[str]]] = {
            INIT_SHADCN: self._handle_init_shadcn,
            ADD_COMPONENT: self._handle_add_component,
            LIST_COMPONENTS: self._handle_list_components,
        }

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> str:
        """
        Run tool ``name`` and return its text payload.

        Raises:
            McpError: METHOD_NOT_FOUND, INVALID_PARAMS, or INTERNAL_ERROR when
                the command fails. No partial output is returned on error.
        """
        args = parse_arguments(name, arguments)
        handler = self.tool_handlers[name]
        return await handler(args)

    async def _run(self, argv: list[str], directory: str) -> CommandResult:
        try:
            return await self.runner(argv, directory)
        except CommandExecutionError as e:
            raise internal_error(e.message) from e

    async def _handle_init_shadcn(self, args: InitShadcnArguments) -> str:
        result = await self._run(init_command(self.cli), args.directory)
        return f"shadcn-ui initialized in {args.directory}\n{result.stdout}\n{result.stderr}"

    async def _handle_add_component(self, args: AddComponentArguments) -> str:
        result = await self._run(add_command(self.cli, args.components), args.directory)
        return f"Added components to {args.directory}\n{result.stdout}\n{result.stderr}"

    async def _handle_list_components(self, args: ListComponentsArguments) -> str:
        # No directory echo here, unlike init/add.
        result = await self._run(list_command(self.cli), args.directory)
        return result.stdout or result.stderr
