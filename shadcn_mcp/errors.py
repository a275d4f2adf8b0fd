"""Protocol error taxonomy for the shadcn MCP server.

Every failure on the tool path is raised as :class:`mcp.shared.exceptions.McpError`
so the SDK answers the request with a JSON-RPC error object instead of content.
"""

from __future__ import annotations

from enum import Enum

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class ErrorKind(Enum):
    """Kinds of protocol error a tool call can end with."""

    INVALID_PARAMS = INVALID_PARAMS
    METHOD_NOT_FOUND = METHOD_NOT_FOUND
    INTERNAL_ERROR = INTERNAL_ERROR

    @property
    def code(self) -> int:
        return self.value


def protocol_error(kind: ErrorKind, message: str) -> McpError:
    """Build an McpError carrying the JSON-RPC code for ``kind``."""
    return McpError(ErrorData(code=kind.code, message=message))


def invalid_params(message: str) -> McpError:
    return protocol_error(ErrorKind.INVALID_PARAMS, message)


def method_not_found(message: str) -> McpError:
    return protocol_error(ErrorKind.METHOD_NOT_FOUND, message)


def internal_error(message: str) -> McpError:
    return protocol_error(ErrorKind.INTERNAL_ERROR, message)


def error_kind(err: McpError) -> ErrorKind | None:
    """Map an McpError back to its kind, or None for codes outside the taxonomy."""
    try:
        return ErrorKind(err.error.code)
    except ValueError:
        return None
