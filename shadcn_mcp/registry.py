"""Tool descriptors advertised on tools/list."""

from __future__ import annotations

from mcp.types import Tool

INIT_SHADCN = "init_shadcn"
ADD_COMPONENT = "add_component"
LIST_COMPONENTS = "list_components"

_DIRECTORY_PROPERTY = {
    "type": "string",
    "description": "Absolute path to the project root",
}

TOOLS: list[Tool] = [
    Tool(
        name=INIT_SHADCN,
        description="Initialize shadcn-ui in a project directory",
        inputSchema={
            "type": "object",
            "properties": {
                "directory": dict(_DIRECTORY_PROPERTY),
            },
            "required": ["directory"],
        },
    ),
    Tool(
        name=ADD_COMPONENT,
        description="Add one or more shadcn-ui components to a project",
        inputSchema={
            "type": "object",
            "properties": {
                "directory": dict(_DIRECTORY_PROPERTY),
                "components": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Component names to add (e.g. button, card)",
                },
            },
            "required": ["directory", "components"],
        },
    ),
    Tool(
        name=LIST_COMPONENTS,
        description="List available shadcn-ui components",
        inputSchema={
            "type": "object",
            "properties": {
                "directory": dict(_DIRECTORY_PROPERTY),
            },
            "required": ["directory"],
        },
    ),
]


def list_tools() -> list[Tool]:
    """Return the registered tools. Same three descriptors on every call."""
    return [t.model_copy(deep=True) for t in TOOLS]
