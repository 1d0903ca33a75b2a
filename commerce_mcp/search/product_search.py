"""
Substring product search over the catalog.

A product matches when the lowercased query is contained in its name,
description, or category. The optional category filter is an exact,
case-sensitive comparison. Results keep catalog order; nothing is re-ranked.
"""
from typing import Iterable, List, Optional

from commerce_mcp.api.models import Product


def matches_query(product: Product, query: str) -> bool:
    """Case-insensitive containment across name, description and category."""
    needle = query.lower()
    return (
        needle in product.name.lower()
        or needle in product.description.lower()
        or needle in product.category.lower()
    )


def matches_category(product: Product, category: Optional[str]) -> bool:
    # No category means no constraint
    if not category:
        return True
    return product.category == category


def search_products(
    products: Iterable[Product],
    query: str,
    category: Optional[str] = None,
) -> List[Product]:
    """
    Filter products by query text and optional category.

    Args:
        products: Catalog products, in catalog order
        query: Trimmed, non-empty search text
        category: Exact category name, or None for all categories

    Returns:
        Matching products in catalog order (empty list if none match)
    """
    return [
        product for product in products
        if matches_query(product, query) and matches_category(product, category)
    ]
