"""MCP interface for the mock creator."""

from ts_mock_creator.mcp.server import MockServer

__all__ = ["MockServer"]
