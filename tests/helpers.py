"""Shared helpers for Google Services MCP Server tests."""

import json


def decode_payload(envelope: dict):
    """Decode the JSON payload of a tools/call success envelope."""
    assert list(envelope) == ["content"]
    assert len(envelope["content"]) == 1
    assert envelope["content"][0]["type"] == "text"
    return json.loads(envelope["content"][0]["text"])


def call_request(tool_name: str, arguments: dict | None = None) -> dict:
    """Build a tools/call request."""
    return {
        "method": "tools/call",
        "params": {"name": tool_name, "arguments": arguments or {}},
    }
