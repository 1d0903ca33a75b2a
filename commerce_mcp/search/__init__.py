from commerce_mcp.search.product_search import search_products

__all__ = ["search_products"]
