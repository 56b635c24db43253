"""
Google Services MCP Server utility modules.
"""

import sys


def log(message: str) -> None:
    """Log a message to stderr.

    The stdio transport uses stdout for JSON-RPC, so nothing else may
    write there.
    """
    print(message, file=sys.stderr)
