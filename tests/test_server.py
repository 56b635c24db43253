"""
Tests for the stdio and HTTP transports.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastmcp.exceptions import ToolError
from starlette.testclient import TestClient

from google_services_mcp import SERVER_NAME, __version__
from google_services_mcp.catalog import get_tool
from google_services_mcp.server import (
    CatalogTool,
    create_http_app,
    create_stdio_server,
)

from helpers import call_request, decode_payload


@pytest.fixture
def client(dispatcher):
    return TestClient(create_http_app(dispatcher))


class TestHttpTransport:
    def test_info(self, client):
        response = client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == SERVER_NAME
        assert body["version"] == __version__
        assert body["endpoints"] == {"health": "/health", "mcp": "/mcp (POST)"}
        assert len(body["tools"]) == 20

    def test_health(self, client):
        body = client.get("/health").json()

        assert body["status"] == "ok"
        assert body["tools"] == 20
        assert body["uptime"] >= 0
        assert "timestamp" in body

    def test_mcp_get_returns_info(self, client):
        assert client.get("/mcp").json() == client.get("/").json()

    def test_mcp_options(self, client):
        response = client.options("/mcp")
        assert response.status_code == 200

    def test_cors_headers(self, client):
        response = client.get("/health", headers={"Origin": "http://example.com"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_list_tools(self, client):
        response = client.post("/mcp", json={"method": "list-tools"})

        assert response.status_code == 200
        assert len(response.json()["tools"]) == 20

    def test_protocol_errors_are_200(self, client):
        response = client.post("/mcp", json={"method": "resources/list"})

        assert response.status_code == 200
        assert response.json()["data"]["kind"] == "MethodNotFound"

    def test_tool_call(self, client, session):
        session.drive.files.return_value.delete.return_value.execute.return_value = ""

        response = client.post(
            "/mcp", json=call_request("drive_delete_file", {"fileId": "F1"})
        )

        assert response.status_code == 200
        assert decode_payload(response.json()) == {
            "success": True,
            "message": "File F1 deleted successfully",
        }

    def test_invalid_json(self, client):
        response = client.post(
            "/mcp", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"

    def test_unexpected_failure(self, client, dispatcher):
        with patch.object(dispatcher, "route", AsyncMock(side_effect=RuntimeError("boom"))):
            response = client.post("/mcp", json={"method": "initialize"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "message": "boom"}


class TestStdioTransport:
    @pytest.mark.asyncio
    async def test_registers_every_tool(self, dispatcher):
        mcp = create_stdio_server(dispatcher)

        tools = await mcp.get_tools()

        assert set(tools) == {tool.name for tool in dispatcher.tools}

    @pytest.mark.asyncio
    async def test_run_returns_text(self, dispatcher, session):
        session.drive.files.return_value.delete.return_value.execute.return_value = ""
        tool = CatalogTool.from_descriptor(get_tool("drive_delete_file"), dispatcher)

        result = await tool.run({"fileId": "F1"})

        assert len(result.content) == 1
        assert "File F1 deleted successfully" in result.content[0].text

    @pytest.mark.asyncio
    async def test_run_raises_tool_error(self, dispatcher):
        tool = CatalogTool.from_descriptor(get_tool("drive_delete_file"), dispatcher)

        with pytest.raises(ToolError, match="fileId"):
            await tool.run({})
