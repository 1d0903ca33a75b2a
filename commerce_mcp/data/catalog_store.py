"""
Read-only product catalog backed by a bundled JSON file.

The catalog is loaded once at startup (see core.preload), held on app.state
and shared by every request handler. There are no mutation operations: the
product tuple and the frozen Product records are never written after load.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

from pydantic import ValidationError

from commerce_mcp.api.models import Product
from commerce_mcp.utils.logger import get_logger

logger = get_logger("data.catalog_store")


class CatalogLoadError(RuntimeError):
    """Raised when the product catalog cannot be loaded."""


@dataclass(frozen=True)
class CatalogStore:
    """Ordered, immutable sequence of products."""
    products: Tuple[Product, ...] = ()

    def __len__(self) -> int:
        return len(self.products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self.products)


def build_catalog(records: Sequence[dict]) -> CatalogStore:
    """
    Validate raw product records and build a CatalogStore.

    Raises:
        CatalogLoadError: on an invalid record or a duplicate id.
    """
    products: List[Product] = []
    seen_ids = set()
    for index, record in enumerate(records):
        try:
            product = Product.model_validate(record)
        except ValidationError as e:
            raise CatalogLoadError(f"Invalid product record at index {index}: {e}") from e
        if product.id in seen_ids:
            raise CatalogLoadError(f"Duplicate product id: {product.id}")
        seen_ids.add(product.id)
        products.append(product)
    return CatalogStore(products=tuple(products))


def load_catalog(path: Path) -> CatalogStore:
    """
    Load the catalog from a JSON array of product records.

    Args:
        path: Path to the products JSON file

    Returns:
        CatalogStore with products in file order

    Raises:
        CatalogLoadError: if the file is missing, malformed, or invalid
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Malformed catalog JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise CatalogLoadError(f"Catalog root must be a JSON array, got {type(data).__name__}")

    store = build_catalog(data)
    logger.info(f"Loaded {len(store)} products from {path}")
    return store
