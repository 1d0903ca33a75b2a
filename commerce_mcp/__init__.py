"""
Commerce MCP - Bunnings agentic commerce server

A stateless Model Context Protocol server with:
- A read-only hardware product catalog
- A search_products tool with substring matching and category filtering
- An embeddable shop widget bound to the tool's structured output
"""

from commerce_mcp.core.config import ServerConfig, get_config, set_config
from commerce_mcp.data.catalog_store import CatalogStore, load_catalog
from commerce_mcp.search.product_search import search_products

__all__ = [
    'ServerConfig',
    'get_config',
    'set_config',
    'CatalogStore',
    'load_catalog',
    'search_products',
]

__version__ = '1.0.0'
