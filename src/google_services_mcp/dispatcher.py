"""
Request dispatcher for Google Services MCP Server.

Routes a decoded protocol request to the matching operation and returns
exactly one envelope: a success payload or an error envelope. This is the
only place protocol errors are translated to the wire.
"""

import json
from collections.abc import Mapping
from typing import Any

from mcp.types import (
    Implementation,
    InitializeResult,
    ServerCapabilities,
    TextContent,
    ToolsCapability,
)

from google_services_mcp import SERVER_NAME, __version__
from google_services_mcp.api import HANDLERS, Handler
from google_services_mcp.catalog import list_tools
from google_services_mcp.session import SessionProvider
from google_services_mcp.types import (
    InternalError,
    MethodNotFound,
    ProtocolError,
    ToolDescriptor,
    ValidationError,
)
from google_services_mcp.utils import log
from google_services_mcp.validation import validate

PROTOCOL_VERSION = "2024-11-05"

INITIALIZE = "initialize"
LIST_TOOLS = "tools/list"
CALL_TOOL = "tools/call"

# Accepted method names -> canonical method
METHODS = {
    INITIALIZE: INITIALIZE,
    LIST_TOOLS: LIST_TOOLS,
    "list-tools": LIST_TOOLS,
    CALL_TOOL: CALL_TOOL,
    "call-tool": CALL_TOOL,
}


def _dump(model: Any) -> dict:
    return model.model_dump(by_alias=True, exclude_none=True)


def text_envelope(payload: Any) -> dict:
    """Wrap a handler result as a tools/call success envelope."""
    content = TextContent(type="text", text=json.dumps(payload, indent=2))
    return {"content": [_dump(content)]}


def error_envelope(error: ProtocolError) -> dict:
    return _dump(error.to_error_data())


class Dispatcher:
    """
    Routes initialize, tools/list and tools/call requests.

    The dispatcher starts uninitialized and becomes ready on the first
    initialize request. Tool calls acquire the shared capability session
    from the provider; the provider owns its lazy construction.
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        tools: tuple[ToolDescriptor, ...] | None = None,
        handlers: Mapping[str, Handler] | None = None,
    ):
        tools = list_tools() if tools is None else tools
        handlers = HANDLERS if handlers is None else handlers

        tool_names = [tool.name for tool in tools]
        if len(set(tool_names)) != len(tool_names):
            raise ValueError("Tool names must be unique")
        if set(tool_names) != set(handlers):
            raise ValueError(
                "Every tool needs exactly one handler: "
                f"unbound {sorted(set(tool_names) - set(handlers))}, "
                f"unknown {sorted(set(handlers) - set(tool_names))}"
            )

        self._tools = tuple(tools)
        self._tools_by_name = {tool.name: tool for tool in self._tools}
        self._handlers = dict(handlers)
        self._session_provider = session_provider
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def tools(self) -> tuple[ToolDescriptor, ...]:
        return self._tools

    async def route(self, request: Any) -> dict:
        """
        Route one request and return its envelope.

        Args:
            request: Decoded JSON body: {"method": ..., "params": {...}}

        Returns:
            The success payload for the method, or an error envelope
            {"code", "message", "data"}
        """
        method = request.get("method") if isinstance(request, Mapping) else None
        canonical = METHODS.get(method) if isinstance(method, str) else None
        if canonical is None:
            log(f"Unknown method: {method}")
            return error_envelope(MethodNotFound.for_method(method))

        if canonical == INITIALIZE:
            return self.initialize()
        if canonical == LIST_TOOLS:
            return self.list_tools()

        params = request.get("params")
        if not isinstance(params, Mapping):
            params = {}
        tool_name = params.get("name", params.get("toolName"))
        return await self.call_tool(tool_name, params.get("arguments"))

    def initialize(self) -> dict:
        """Mark the dispatcher ready and return static server metadata."""
        if not self._initialized:
            log("Client initialized session.")
        self._initialized = True
        result = InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools=ToolsCapability()),
            serverInfo=Implementation(name=SERVER_NAME, version=__version__),
        )
        return _dump(result)

    def list_tools(self) -> dict:
        return {"tools": [_dump(tool.to_tool()) for tool in self._tools]}

    async def call_tool(self, tool_name: Any, arguments: Any) -> dict:
        """
        Validate arguments, run the bound handler and wrap its result.

        Unknown tools and invalid arguments are rejected before the session
        is touched. Any other failure, session construction included, is
        reported as an InternalError naming the tool.
        """
        descriptor = (
            self._tools_by_name.get(tool_name) if isinstance(tool_name, str) else None
        )
        if descriptor is None:
            log(f"Unknown tool: {tool_name}")
            return error_envelope(MethodNotFound.for_tool(tool_name))

        try:
            args = validate(descriptor, arguments)
            log(f"Calling tool {tool_name}")
            session = await self._session_provider.get()
            payload = await self._handlers[tool_name](args, session)
            return text_envelope(payload)
        except ValidationError as e:
            log(f"Rejected arguments for {tool_name}: {e.message}")
            return error_envelope(e)
        except Exception as e:
            log(f"Error executing {tool_name}: {e}")
            return error_envelope(InternalError(tool_name, str(e)))
