"""
Registration of the shop widget resource and the search_products tool on a
low-level MCP server.

A new server is built for every inbound request (see protocol.lifecycle), so
nothing registered here outlives a single request.
"""
from typing import List

from mcp import types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError
from pydantic import ValidationError

from commerce_mcp.api.formatters import error_result, to_call_tool_result
from commerce_mcp.api.models import SearchProductsInput
from commerce_mcp.core.config import ServerConfig
from commerce_mcp.data.catalog_store import CatalogStore
from commerce_mcp.protocol.tools import (
    SEARCH_PRODUCTS_TOOL,
    WIDGET_META,
    WIDGET_MIME_TYPE,
    WIDGET_RESOURCE_NAME,
    WIDGET_URI,
    run_search_products,
    search_products_tool,
)
from commerce_mcp.utils.logger import get_logger

logger = get_logger("protocol.registry")


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {item.get('msg')}")
    return "Input validation error: " + "; ".join(parts)


def register_widget_resource(server: Server, widget_html: str) -> None:
    """Expose the widget markup as a renderable UI resource."""

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return [
            types.Resource(
                name=WIDGET_RESOURCE_NAME,
                uri=WIDGET_URI,
                mimeType=WIDGET_MIME_TYPE,
                _meta=WIDGET_META,
            )
        ]

    # Registered directly so the contents can carry _meta
    async def read_resource(req: types.ReadResourceRequest) -> types.ServerResult:
        uri = str(req.params.uri)
        if uri != WIDGET_URI:
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=f"Unknown resource: {uri}"))
        return types.ServerResult(
            types.ReadResourceResult(
                contents=[
                    types.TextResourceContents(
                        uri=WIDGET_URI,
                        mimeType=WIDGET_MIME_TYPE,
                        text=widget_html,
                        _meta=WIDGET_META,
                    )
                ]
            )
        )

    server.request_handlers[types.ReadResourceRequest] = read_resource


def register_search_tool(server: Server, catalog: CatalogStore, config: ServerConfig) -> None:
    """
    Expose search_products.

    Arguments are validated against SearchProductsInput before the handler
    runs; invalid shapes come back as an isError result the agent can read.
    """

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [search_products_tool()]

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        if name != SEARCH_PRODUCTS_TOOL:
            return types.ServerResult(error_result(f"Unknown tool: {name}"))

        try:
            params = SearchProductsInput.model_validate(req.params.arguments or {})
        except ValidationError as e:
            logger.info(f"Rejected {name} arguments: {e.error_count()} error(s)")
            return types.ServerResult(error_result(_format_validation_error(e)))

        envelope = run_search_products(
            catalog,
            params.query,
            params.category,
            top_results_threshold=config.top_results_threshold,
        )
        logger.debug(f"{name} query={params.query!r} category={params.category!r} -> {len(envelope.products)} products")
        return types.ServerResult(to_call_tool_result(envelope))

    server.request_handlers[types.CallToolRequest] = call_tool


def create_commerce_server(catalog: CatalogStore, widget_html: str, config: ServerConfig) -> Server:
    """Build a new protocol server with the widget resource and search tool."""
    server: Server = Server(config.server_name, version=config.server_version)
    register_widget_resource(server, widget_html)
    register_search_tool(server, catalog, config)
    return server
