"""shadcn MCP tools - command runner and shadcn-ui command builders."""

from shadcn_mcp.tools.runner import (  # noqa: F401
    CommandExecutionError,
    CommandResult,
    CommandRunner,
    make_runner,
    run_command,
)
from shadcn_mcp.tools.shadcn import add_command, init_command, list_command  # noqa: F401
