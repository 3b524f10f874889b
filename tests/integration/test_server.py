"""
Integration Tests - MCP Server

Exercises tool listing and tool calls through RatServer with stub backends.
"""

import pytest
from mcp import types
from mcp.shared.exceptions import McpError

from rat.api.server import TOOL_NAME, RatServer, to_mcp_error
from rat.core.exceptions import BackendConnectionError, ValidationError
from rat.reasoning.extractor import ReasoningExtractor
from rat.reasoning.llm.stub_adapter import StubBackend
from rat.reasoning.router import ResponseRouter, Route
from rat.runtime.orchestrator import TurnOrchestrator

pytestmark = pytest.mark.integration


@pytest.fixture
def rat_server(orchestrator, offline_settings):
    return RatServer(orchestrator, offline_settings)


async def send_tool_call(server: RatServer, name: str, arguments) -> types.ServerResult:
    """Dispatch a tools/call request through the handler the MCP server uses."""
    handler = server.server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    return await handler(request)


class TestListTools:
    """Tests for tool discovery."""

    @pytest.mark.asyncio
    async def test_single_tool(self, rat_server):
        """Test exactly one tool is advertised."""
        tools = await rat_server.list_tools()

        assert [tool.name for tool in tools] == [TOOL_NAME]

    @pytest.mark.asyncio
    async def test_schema(self, rat_server):
        """Test the input schema uses camelCase flags and requires prompt."""
        (tool,) = await rat_server.list_tools()
        schema = tool.inputSchema

        assert schema["required"] == ["prompt"]
        assert set(schema["properties"]) == {"prompt", "model", "showReasoning", "clearContext"}
        assert schema["properties"]["showReasoning"]["default"] is False
        assert schema["properties"]["clearContext"]["default"] is False


class TestCallTool:
    """Tests for tool invocation."""

    @pytest.mark.asyncio
    async def test_answer_only(self, rat_server):
        """Test a call returns one text item with the answer."""
        content = await rat_server.call_tool(TOOL_NAME, {"prompt": "What is 2+2?"})

        assert len(content) == 1
        assert content[0].type == "text"
        assert content[0].text == "4"

    @pytest.mark.asyncio
    async def test_show_reasoning(self, rat_server):
        """Test the reasoning section is included on request."""
        content = await rat_server.call_tool(
            TOOL_NAME,
            {"prompt": "What is 2+2?", "model": "openai/gpt-4", "showReasoning": True},
        )

        assert content[0].text == "Reasoning:\nAdd 2 and 2.\n\nResponse:\n4"

    @pytest.mark.asyncio
    async def test_context_shared_across_calls(self, rat_server, reasoning_backend):
        """Test a second call sees the first turn."""
        await rat_server.call_tool(TOOL_NAME, {"prompt": "What is 2+2?"})
        await rat_server.call_tool(TOOL_NAME, {"prompt": "Double it"})

        assert reasoning_backend.last_call.prompt.startswith("Previous conversation:\n")
        assert len(rat_server.orchestrator.context) == 2

    @pytest.mark.asyncio
    async def test_unknown_tool(self, rat_server, reasoning_backend):
        """Test an unknown tool name is a method-not-found error."""
        with pytest.raises(McpError) as exc_info:
            await send_tool_call(rat_server, "other_tool", {"prompt": "q"})

        assert exc_info.value.error.code == types.METHOD_NOT_FOUND
        assert exc_info.value.error.message == "Unknown tool: other_tool"
        assert reasoning_backend.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [None, {}, {"prompt": 1}])
    async def test_invalid_arguments(self, rat_server, reasoning_backend, arguments):
        """Test malformed arguments are rejected before any backend call."""
        with pytest.raises(McpError) as exc_info:
            await send_tool_call(rat_server, TOOL_NAME, arguments)

        assert exc_info.value.error.code == types.INVALID_PARAMS
        assert exc_info.value.error.message == "Invalid generate_response arguments"
        assert reasoning_backend.call_count == 0
        assert len(rat_server.orchestrator.context) == 0

    @pytest.mark.asyncio
    async def test_backend_failure_is_internal_error(self, reasoning_backend, context_store, offline_settings):
        """Test backend failures surface as internal errors and commit nothing."""
        orchestrator = TurnOrchestrator(
            extractor=ReasoningExtractor(reasoning_backend),
            router=ResponseRouter(default=Route(
                name="openrouter",
                backend=StubBackend(error=BackendConnectionError("connection refused")),
            )),
            context=context_store,
        )
        server = RatServer(orchestrator, offline_settings)

        with pytest.raises(McpError) as exc_info:
            await send_tool_call(server, TOOL_NAME, {"prompt": "q"})

        assert exc_info.value.error.code == types.INTERNAL_ERROR
        assert exc_info.value.error.message == "connection refused"
        assert len(context_store) == 0

    @pytest.mark.asyncio
    async def test_request_handler_returns_tool_result(self, rat_server):
        """Test a successful tools/call answers with a non-error tool result."""
        result = await send_tool_call(rat_server, TOOL_NAME, {"prompt": "What is 2+2?"})

        tool_result = result.root
        assert isinstance(tool_result, types.CallToolResult)
        assert tool_result.isError is False
        assert [item.text for item in tool_result.content] == ["4"]

    @pytest.mark.asyncio
    async def test_wrong_argument_type_reaches_handler(self, rat_server):
        """Test a mistyped prompt is reported with the tool's own message and code."""
        with pytest.raises(McpError) as exc_info:
            await send_tool_call(rat_server, TOOL_NAME, {"prompt": 1, "showReasoning": True})

        assert exc_info.value.error.code == types.INVALID_PARAMS
        assert exc_info.value.error.message == "Invalid generate_response arguments"
        assert exc_info.value.error.data["errors"]

    @pytest.mark.asyncio
    async def test_each_call_logs_its_own_request_id(self, rat_server, log_buffer):
        """Test records of one call share a request id distinct from other calls."""
        await send_tool_call(rat_server, TOOL_NAME, {"prompt": "q1"})
        await send_tool_call(rat_server, TOOL_NAME, {"prompt": "q2"})

        handling = [r for r in log_buffer.records if r.message == "Handling tool call"]
        assert len(handling) == 2
        assert all(r.tool == TOOL_NAME for r in handling)
        assert handling[0].request_id and handling[1].request_id
        assert handling[0].request_id != handling[1].request_id

        first_call = [r for r in log_buffer.records if r.request_id == handling[0].request_id]
        assert "Context updated" in [r.message for r in first_call]


class TestErrorMapping:
    """Tests for RatError to protocol error translation."""

    def test_validation_maps_to_invalid_params(self):
        """Test validation errors keep their context as error data."""
        error = to_mcp_error(ValidationError("bad", context={"errors": ["x"]}))
        assert error.error.code == types.INVALID_PARAMS
        assert error.error.data == {"errors": ["x"]}

    def test_backend_maps_to_internal(self):
        """Test backend errors map to internal errors."""
        error = to_mcp_error(BackendConnectionError("down"))
        assert error.error.code == types.INTERNAL_ERROR
        assert error.error.message == "down"
