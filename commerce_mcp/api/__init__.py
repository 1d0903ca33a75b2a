"""
API module for the commerce MCP server.

Provides the catalog/tool models and the HTTP app (commerce_mcp.api.server).
"""
from commerce_mcp.api.models import (
    Product,
    SearchProductsInput,
    ReplyEnvelope,
    ProductsPayload,
    TextItem,
)

__all__ = [
    "Product",
    "SearchProductsInput",
    "ReplyEnvelope",
    "ProductsPayload",
    "TextItem",
]
