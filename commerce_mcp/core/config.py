"""
Configuration management for the commerce MCP server.

Loads settings from an optional YAML config file, then applies environment
variable overrides (PORT, HOST, LOG_LEVEL, COMMERCE_CATALOG_PATH,
COMMERCE_WIDGET_PATH).
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()


def _package_root() -> Path:
    """Return the commerce_mcp package directory."""
    return Path(__file__).resolve().parent.parent


def _project_root() -> Path:
    """Return project root (parent of commerce_mcp package)."""
    return _package_root().parent


DEFAULT_CONFIG_PATH = _project_root() / "config" / "default.yaml"
DEFAULT_CATALOG_PATH = _package_root() / "data" / "products.json"
DEFAULT_WIDGET_PATH = _package_root() / "public" / "shop-widget.html"
DEFAULT_PORT = 8787


def _resolve_path(value: Any, default: Path) -> Path:
    """Relative paths in the config file are taken from the project root."""
    if not value:
        return default
    path = Path(value)
    if not path.is_absolute():
        path = _project_root() / path
    return path


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid port: {value!r}")
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range: {port}")
    return port


@dataclass
class ServerConfig:
    """Configuration for the commerce MCP server."""

    # HTTP listener
    host: str = "0.0.0.0"  # nosec B104: containerized deployment
    port: int = DEFAULT_PORT
    mcp_path: str = "/mcp"

    # Protocol server identity
    server_name: str = "bunnings-commerce"
    server_version: str = "1.0.0"

    # Static data
    catalog_path: Path = field(default_factory=lambda: DEFAULT_CATALOG_PATH)
    widget_path: Path = field(default_factory=lambda: DEFAULT_WIDGET_PATH)

    # Match count above which the reply says only top results are shown
    top_results_threshold: int = 3

    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "ServerConfig":
        """Load configuration from YAML file."""
        path = config_path or DEFAULT_CONFIG_PATH
        if not path.exists():
            return cls()

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        server_config: Dict[str, Any] = data.get('server', {})
        catalog_config: Dict[str, Any] = data.get('catalog', {})
        tool_config: Dict[str, Any] = data.get('tool', {})

        return cls(
            host=server_config.get('host', "0.0.0.0"),  # nosec B104
            port=_parse_port(server_config.get('port', DEFAULT_PORT)),
            mcp_path=server_config.get('mcp_path', "/mcp"),
            server_name=server_config.get('name', "bunnings-commerce"),
            server_version=str(server_config.get('version', "1.0.0")),
            catalog_path=_resolve_path(catalog_config.get('products'), DEFAULT_CATALOG_PATH),
            widget_path=_resolve_path(catalog_config.get('widget'), DEFAULT_WIDGET_PATH),
            top_results_threshold=int(tool_config.get('top_results_threshold', 3)),
            log_level=str(server_config.get('log_level', "INFO")).upper(),
        )

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "ServerConfig":
        """
        Load the YAML config (COMMERCE_MCP_CONFIG or the default path) and
        apply environment variable overrides on top.
        """
        if config_path is None and os.getenv("COMMERCE_MCP_CONFIG"):
            config_path = Path(os.environ["COMMERCE_MCP_CONFIG"])
        config = cls.from_yaml(config_path)

        if os.getenv("PORT"):
            config.port = _parse_port(os.environ["PORT"])
        if os.getenv("HOST"):
            config.host = os.environ["HOST"]
        if os.getenv("LOG_LEVEL"):
            config.log_level = os.environ["LOG_LEVEL"].upper()
        if os.getenv("COMMERCE_CATALOG_PATH"):
            config.catalog_path = Path(os.environ["COMMERCE_CATALOG_PATH"])
        if os.getenv("COMMERCE_WIDGET_PATH"):
            config.widget_path = Path(os.environ["COMMERCE_WIDGET_PATH"])
        return config


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.load()
    return _config


def set_config(config: Optional[ServerConfig]) -> None:
    """Set the global configuration instance (None forces a reload)."""
    global _config
    _config = config
