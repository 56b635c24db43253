"""
Google Services MCP Server

Transport entry points. Both transports serve the same Dispatcher:
- stdio: a FastMCP server whose tools are the catalog descriptors
- HTTP: a Starlette app exposing POST /mcp plus info and health routes

IMPORTANT: All logging must use stderr, never stdout.
The stdio transport uses stdout for JSON-RPC communication.
"""

import os
import time
from datetime import datetime, timezone
from typing import Any

import uvicorn
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from google_services_mcp import SERVER_NAME, __version__
from google_services_mcp.auth import create_session
from google_services_mcp.dispatcher import Dispatcher
from google_services_mcp.session import SessionProvider
from google_services_mcp.types import ToolDescriptor
from google_services_mcp.utils import log

INSTRUCTIONS = """
This MCP server provides tools for Google Drive, Sheets, Slides, Docs and Forms.

Key capabilities:
- Create folders, list, move and delete Drive files
- Create spreadsheets, read, write and append cell values
- Create presentations, add slides, text boxes and images
- Create, read, insert into and find-and-replace in documents
- Create forms, add questions, read form structure and responses

Every tool returns its result as JSON text.
"""

ENDPOINTS = {"health": "/health", "mcp": "/mcp (POST)"}

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def build_dispatcher() -> Dispatcher:
    """Create a dispatcher backed by an environment-configured session."""
    return Dispatcher(SessionProvider(create_session))


# === STDIO TRANSPORT ===


class CatalogTool(Tool):
    """A FastMCP tool served by the dispatcher."""

    dispatcher: Any = Field(exclude=True)

    @classmethod
    def from_descriptor(
        cls, descriptor: ToolDescriptor, dispatcher: Dispatcher
    ) -> "CatalogTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.to_tool().inputSchema,
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        envelope = await self.dispatcher.call_tool(self.name, arguments)
        if "content" not in envelope:
            raise ToolError(envelope["message"])
        return ToolResult(
            content=[TextContent(**block) for block in envelope["content"]]
        )


def create_stdio_server(dispatcher: Dispatcher) -> FastMCP:
    """Build a FastMCP server exposing every catalog tool."""
    mcp = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS)
    for descriptor in dispatcher.tools:
        mcp.add_tool(CatalogTool.from_descriptor(descriptor, dispatcher))
    return mcp


# === HTTP TRANSPORT ===


def info_payload(dispatcher: Dispatcher) -> dict:
    return {
        "name": SERVER_NAME,
        "version": __version__,
        "endpoints": ENDPOINTS,
        "tools": [tool.name for tool in dispatcher.tools],
    }


def create_http_app(dispatcher: Dispatcher) -> Starlette:
    """
    Build the HTTP app.

    Routes:
        GET /          server info and tool names
        GET /health    health check
        /mcp           OPTIONS no-op, GET info, POST protocol request
    """
    started = time.monotonic()

    async def info(request: Request) -> Response:
        return JSONResponse(info_payload(dispatcher))

    async def health(request: Request) -> Response:
        return JSONResponse(
            {
                "status": "ok",
                "service": SERVER_NAME,
                "version": __version__,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "uptime": time.monotonic() - started,
                "tools": len(dispatcher.tools),
                "endpoints": ENDPOINTS,
            }
        )

    async def mcp_endpoint(request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200)
        if request.method == "GET":
            return JSONResponse(info_payload(dispatcher))

        try:
            body = await request.json()
            envelope = await dispatcher.route(body)
        except Exception as e:
            log(f"MCP Error: {e}")
            return JSONResponse(
                {"error": "Internal server error", "message": str(e)},
                status_code=500,
            )
        return JSONResponse(envelope)

    return Starlette(
        routes=[
            Route("/", info, methods=["GET"]),
            Route("/health", health, methods=["GET"]),
            Route("/mcp", mcp_endpoint, methods=["GET", "POST", "OPTIONS"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["Content-Type", "Authorization"],
            )
        ],
    )


def main() -> None:
    """Run the Google Services MCP Server over stdio."""
    log("Starting Google Services MCP Server...")
    create_stdio_server(build_dispatcher()).run()


def http_main() -> None:
    """Run the Google Services MCP Server over HTTP."""
    host = os.environ.get("HOST", DEFAULT_HOST)
    port = int(os.environ.get("PORT", DEFAULT_PORT))
    log(f"Starting Google Services MCP Server on http://{host}:{port}")
    uvicorn.run(create_http_app(build_dispatcher()), host=host, port=port)


if __name__ == "__main__":
    main()
