"""MCP server exposing the Render cloud-hosting API as assistant tools."""

__version__ = "1.0.0"
