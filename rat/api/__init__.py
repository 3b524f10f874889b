"""
Interface & Serving Layer

MCP stdio server exposing the generate_response tool.
"""

from rat.api.server import GENERATE_RESPONSE_TOOL, TOOL_NAME, RatServer, main, serve, to_mcp_error

__all__ = [
    "GENERATE_RESPONSE_TOOL",
    "RatServer",
    "TOOL_NAME",
    "main",
    "serve",
    "to_mcp_error",
]
