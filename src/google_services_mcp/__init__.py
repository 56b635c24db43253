"""
Google Services MCP Server

A Model Context Protocol (MCP) server for Google Drive, Sheets, Slides, Docs
and Forms. Exposes a fixed catalog of twenty tools through one dispatcher.
"""

__version__ = "0.1.0"

SERVER_NAME = "Google Services MCP Server"
