"""shadcn MCP - expose the shadcn-ui CLI as MCP tools over stdio."""

__version__ = "0.1.0"
