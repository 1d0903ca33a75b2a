"""
Preload module for the commerce MCP server.

Loads the static resources every request depends on, once, before the server
starts listening:
- Product catalog (JSON)
- Shop widget markup (HTML)

Unlike optional warm-ups, both are required: a failure here is raised so the
process never reaches a listening state with a partial catalog or no widget.

Usage:
    from commerce_mcp.core.preload import preload_all
    catalog, widget_html, timings = preload_all(config)
"""
import time
from typing import Dict, Optional, Tuple

from commerce_mcp.core.config import ServerConfig, get_config
from commerce_mcp.data.assets import load_widget_markup
from commerce_mcp.data.catalog_store import CatalogStore, load_catalog
from commerce_mcp.utils.logger import get_logger

logger = get_logger("core.preload")


def preload_all(config: Optional[ServerConfig] = None) -> Tuple[CatalogStore, str, Dict[str, float]]:
    """
    Load the catalog and widget markup.

    Args:
        config: Server configuration (defaults to the global config)

    Returns:
        (catalog, widget_html, timings) where timings maps component -> seconds

    Raises:
        CatalogLoadError: catalog missing or malformed
        WidgetLoadError: widget markup missing or empty
    """
    config = config or get_config()
    total_start = time.time()
    timings: Dict[str, float] = {}

    logger.info("=" * 60)
    logger.info("PRELOADING RESOURCES...")
    logger.info("=" * 60)

    # 1. Product catalog
    start = time.time()
    try:
        catalog = load_catalog(config.catalog_path)
    except Exception as e:
        logger.error(f"[FAIL] Catalog load failed: {e}")
        raise
    timings["catalog"] = time.time() - start
    logger.info(f"[OK] Catalog - {len(catalog)} products ({timings['catalog']:.2f}s)")

    # 2. Widget markup
    start = time.time()
    try:
        widget_html = load_widget_markup(config.widget_path)
    except Exception as e:
        logger.error(f"[FAIL] Widget load failed: {e}")
        raise
    timings["widget"] = time.time() - start
    logger.info(f"[OK] Widget markup ({timings['widget']:.2f}s)")

    timings["total"] = time.time() - total_start
    logger.info(f"Preload complete in {timings['total']:.2f}s")
    return catalog, widget_html, timings
