"""
Package logging for commerce_mcp.

Every module logs through a child of the "commerce_mcp" logger, e.g.
get_logger("protocol.lifecycle") -> commerce_mcp.protocol.lifecycle. Output
goes to stdout at LOG_LEVEL; main() re-applies the configured level through
set_level() once ServerConfig is loaded.
"""
import logging
import os
import sys

# Initial level; ServerConfig.log_level may override it at startup
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logger = logging.getLogger("commerce_mcp")
logger.setLevel(LOG_LEVEL)

if not logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(LOG_LEVEL)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

# uvicorn configures the root logger; keep our lines out of it
logger.propagate = False


def get_logger(name: str = None) -> logging.Logger:
    """Return commerce_mcp.<name>, or the package logger when name is empty."""
    if name:
        return logging.getLogger(f"commerce_mcp.{name}")
    return logger


def set_level(level: str) -> None:
    """Apply a log level to the package logger and its handlers."""
    level = level.upper()
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
