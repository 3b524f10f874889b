"""
MCP Server

Exposes the generate_response tool over stdio.

Design decisions:
- Low-level mcp Server so the tool schema keeps its camelCase wire names
- tools/call is served by a raw request handler, so raised McpErrors go
  out as JSON-RPC errors rather than isError tool results
- Tool calls are dispatched to the TurnOrchestrator; nothing else lives here
- RatError codes map onto JSON-RPC error codes at this boundary only
- Logging goes to stderr; stdout belongs to the protocol
"""

import asyncio
import sys
from typing import Any
from uuid import uuid4

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from rat.config.settings import Settings, get_settings
from rat.core.exceptions import RatError, ToolNotFoundError
from rat.core.types import GenerateRequest
from rat.observability.logging import configure_logging, get_logger
from rat.runtime.factory import create_orchestrator
from rat.runtime.orchestrator import TurnOrchestrator

logger = get_logger("rat.api.server")

TOOL_NAME = "generate_response"

GENERATE_RESPONSE_TOOL = types.Tool(
    name=TOOL_NAME,
    description=(
        "Generate a response using DeepSeek's reasoning and a configurable "
        "answering model. Conversation context is kept between calls."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "prompt": {
                "type": "string",
                "description": "The user's input prompt",
            },
            "model": {
                "type": "string",
                "description": (
                    "Model for the final answer, e.g. 'openai/gpt-4', "
                    "'claude-3-5-sonnet-20241022' or 'mistralai/mistral-large'. "
                    "Ids containing 'claude' go to Anthropic; others go to OpenRouter."
                ),
            },
            "showReasoning": {
                "type": "boolean",
                "description": "Include the reasoning in the returned text",
                "default": False,
            },
            "clearContext": {
                "type": "boolean",
                "description": "Clear conversation history before this request",
                "default": False,
            },
        },
        "required": ["prompt"],
    },
)

_ERROR_CODES = {
    "METHOD_NOT_FOUND": types.METHOD_NOT_FOUND,
    "INVALID_PARAMS": types.INVALID_PARAMS,
}


def to_mcp_error(error: RatError) -> McpError:
    """Translate a RatError into a protocol error."""
    code = _ERROR_CODES.get(error.code, types.INTERNAL_ERROR)
    data = error.context or None
    return McpError(types.ErrorData(code=code, message=error.message, data=data))


class RatServer:
    """
    Binds the orchestrator to an MCP Server.

    Handlers are plain methods so they can be exercised without a transport.
    """

    def __init__(self, orchestrator: TurnOrchestrator, settings: Settings):
        self._orchestrator = orchestrator
        self._settings = settings
        self.server = Server(settings.app_name, version=settings.app_version)

        self.server.list_tools()(self.list_tools)
        self.server.request_handlers[types.CallToolRequest] = self.handle_call_tool_request

    @property
    def orchestrator(self) -> TurnOrchestrator:
        return self._orchestrator

    async def list_tools(self) -> list[types.Tool]:
        return [GENERATE_RESPONSE_TOOL]

    async def handle_call_tool_request(self, request: types.CallToolRequest) -> types.ServerResult:
        """Serve one tools/call request."""
        content = await self.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        """
        Handle one tool invocation.

        Raises:
            McpError: Unknown tool, bad arguments, or a failed turn
        """
        with logger.context(request_id=uuid4().hex, tool=name):
            try:
                if name != TOOL_NAME:
                    raise ToolNotFoundError(f"Unknown tool: {name}", context={"tool": name})

                request = GenerateRequest.from_arguments(arguments)
                logger.info(
                    "Handling tool call",
                    model=request.model or "default",
                    show_reasoning=request.show_reasoning,
                    clear_context=request.clear_context,
                )
                result = await self._orchestrator.handle(request)
            except RatError as e:
                logger.error("Tool call failed", error=e, code=e.code)
                raise to_mcp_error(e) from e

        return [types.TextContent(type="text", text=result.text)]

    async def run(self) -> None:
        """Serve over stdio until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "RAT MCP server running on stdio",
                name=self._settings.app_name,
                version=self._settings.app_version,
            )
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


async def serve(settings: Settings) -> None:
    """Build the orchestrator, serve, and release backends on the way out."""
    orchestrator = create_orchestrator(settings)
    try:
        await RatServer(orchestrator, settings).run()
    finally:
        await orchestrator.aclose()
        logger.info("Server stopped")


def main() -> int:
    """Console entry point."""
    settings = get_settings()
    configure_logging(
        settings.logging.level,
        json_output=settings.logging.format == "json",
        log_file=settings.logging.file,
    )

    try:
        settings.validate_credentials()
    except RatError as e:
        logger.critical("Cannot start server", error=e, code=e.code)
        return 1

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as e:
        logger.critical("Server crashed", error=e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
