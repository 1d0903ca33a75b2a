from commerce_mcp.utils.logger import get_logger

__all__ = ["get_logger"]
