"""
search_products tool: agent-facing metadata and the invocation handler.

The handler is deterministic and keeps no state between calls. Everything
it needs (catalog, reply threshold) is passed in per call.
"""
from typing import Any, Dict, Optional

from mcp import types

from commerce_mcp.api.formatters import format_reply
from commerce_mcp.api.models import ReplyEnvelope, SearchProductsInput
from commerce_mcp.data.catalog_store import CatalogStore
from commerce_mcp.search.product_search import search_products

SEARCH_PRODUCTS_TOOL = "search_products"

WIDGET_RESOURCE_NAME = "bunnings-shop-widget"
WIDGET_URI = "ui://widget/shop.html"
WIDGET_MIME_TYPE = "text/html+skybridge"
WIDGET_META: Dict[str, Any] = {"openai/widgetPrefersBorder": False}

SEARCH_PRODUCTS_META: Dict[str, Any] = {
    "openai/outputTemplate": WIDGET_URI,
    "openai/toolInvocation/invoking": "Searching Bunnings catalog...",
    "openai/toolInvocation/invoked": "Found products",
}

EMPTY_QUERY_MESSAGE = "Please tell me what you're looking for!"
DEFAULT_TOP_RESULTS_THRESHOLD = 3


def search_products_tool() -> types.Tool:
    """Tool definition advertised in tools/list."""
    return types.Tool(
        name=SEARCH_PRODUCTS_TOOL,
        title="Search Products",
        description=(
            "Search for Bunnings products. Use this when customer asks to find "
            "items like 'drill', 'hammer', or any hardware product."
        ),
        inputSchema=SearchProductsInput.model_json_schema(),
        annotations=types.ToolAnnotations(readOnlyHint=True, openWorldHint=False),
        _meta=SEARCH_PRODUCTS_META,
    )


def no_match_message(query: str) -> str:
    return (
        f'Sorry, I couldn\'t find any products matching "{query}". '
        "Try searching for drills, hammers, or other tools!"
    )


def found_message(query: str, count: int, top_results_threshold: int) -> str:
    noun = "product" if count == 1 else "products"
    message = f'Found {count} {noun} matching "{query}".'
    if count > top_results_threshold:
        message += " Showing top results."
    return message


def run_search_products(
    catalog: CatalogStore,
    query: Optional[str],
    category: Optional[str] = None,
    top_results_threshold: int = DEFAULT_TOP_RESULTS_THRESHOLD,
) -> ReplyEnvelope:
    """
    Execute one search_products call.

    An empty query (after trimming) and a search with no hits are both normal
    replies with an empty product list, not errors. All matches are returned;
    the threshold only changes the message wording.
    """
    query = (query or "").strip()
    category = (category or "").strip() or None

    if not query:
        return format_reply(EMPTY_QUERY_MESSAGE, [])

    results = search_products(catalog, query, category)

    if not results:
        return format_reply(no_match_message(query), [])

    return format_reply(found_message(query, len(results), top_results_threshold), results)
