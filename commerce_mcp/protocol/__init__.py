"""
Protocol module: tool/resource registration and per-request MCP sessions.
"""
from commerce_mcp.protocol.lifecycle import McpEndpoint, RequestSession, SessionState
from commerce_mcp.protocol.registry import create_commerce_server
from commerce_mcp.protocol.tools import SEARCH_PRODUCTS_TOOL, WIDGET_URI, run_search_products

__all__ = [
    "McpEndpoint",
    "RequestSession",
    "SessionState",
    "create_commerce_server",
    "SEARCH_PRODUCTS_TOOL",
    "WIDGET_URI",
    "run_search_products",
]
