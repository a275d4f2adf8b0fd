"""CLI for running and poking at the shadcn MCP server."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

from mcp.shared.exceptions import McpError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import typer

from shadcn_mcp.config import McpConfig, load_config

app = typer.Typer(
    name="shadcn-mcp",
    help="shadcn MCP Server management CLI",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

ConfigOption = typer.Option(None, "--config", "-c", help="Path to shadcn-mcp.toml")


def _load(config_path: str | None, log_level: str | None = None) -> McpConfig:
    try:
        config = load_config(config_path)
        if log_level:
            config.server.log_level = log_level
            config.validate()
        return config
    except ValueError as e:
        err_console.print(f"[red]✗[/] Invalid config: {escape(str(e))}")
        raise typer.Exit(1) from None


@app.command()
def serve(
    config_path: Optional[str] = ConfigOption,
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Override log level"),
) -> None:
    """Run the MCP server over stdio."""
    from shadcn_mcp.server import serve as run_server

    config = _load(config_path, log_level)

    try:
        run_server(config)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        err_console.print(f"[red]✗[/] fatal: {escape(str(e))}")
        raise typer.Exit(1) from None


@app.command()
def tools() -> None:
    """List the tools the server advertises."""
    from shadcn_mcp.registry import list_tools

    table = Table(title="shadcn MCP tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in list_tools():
        required = ", ".join(tool.inputSchema.get("required", []))
        table.add_row(tool.name, tool.description or "", required)

    console.print(table)


@app.command(name="config")
def show_config(config_path: Optional[str] = ConfigOption) -> None:
    """Show the effective configuration (TOML + ENV)."""
    config = _load(config_path)

    console.print_json(json.dumps(config.as_dict()))


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name (init_shadcn, add_component, list_components)"),
    directory: str = typer.Option(..., "--directory", "-d", help="Project root"),
    components: Optional[list[str]] = typer.Option(
        None, "--component", help="Component to add (repeatable)"
    ),
    config_path: Optional[str] = ConfigOption,
) -> None:
    """Run one tool call locally, without an MCP client."""
    from shadcn_mcp.dispatcher import ToolDispatcher
    from shadcn_mcp.tools.runner import make_runner

    config = _load(config_path)
    dispatcher = ToolDispatcher(
        runner=make_runner(timeout=config.cli.timeout_or_none), cli=config.cli
    )

    arguments: dict[str, Any] = {"directory": directory}
    if components:
        arguments["components"] = components

    try:
        text = asyncio.run(dispatcher.dispatch(name, arguments))
    except McpError as e:
        err_console.print(f"[red]✗[/] {escape(e.error.message)} (code {e.error.code})")
        raise typer.Exit(1) from None

    console.print(text, markup=False, highlight=False)


def main() -> None:
    """Entry point for shadcn-mcp CLI."""
    app()


if __name__ == "__main__":
    main()
