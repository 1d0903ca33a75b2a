"""
Data module: the read-only product catalog and static widget assets.
"""
from commerce_mcp.data.catalog_store import (
    CatalogLoadError,
    CatalogStore,
    load_catalog,
)
from commerce_mcp.data.assets import WidgetLoadError, load_widget_markup

__all__ = [
    "CatalogLoadError",
    "CatalogStore",
    "load_catalog",
    "WidgetLoadError",
    "load_widget_markup",
]
