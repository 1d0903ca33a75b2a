"""Static widget markup served as the shop UI resource."""
from pathlib import Path

from commerce_mcp.utils.logger import get_logger

logger = get_logger("data.assets")


class WidgetLoadError(RuntimeError):
    """Raised when the widget markup cannot be read."""


def load_widget_markup(path: Path) -> str:
    """Read the widget HTML. An unreadable or empty file is fatal."""
    path = Path(path)
    try:
        markup = path.read_text(encoding="utf-8")
    except OSError as e:
        raise WidgetLoadError(f"Cannot read widget markup {path}: {e}") from e
    if not markup.strip():
        raise WidgetLoadError(f"Widget markup is empty: {path}")
    logger.info(f"Loaded widget markup ({len(markup)} chars) from {path}")
    return markup
