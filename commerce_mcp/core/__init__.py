from commerce_mcp.core.config import ServerConfig, get_config, set_config

__all__ = ["ServerConfig", "get_config", "set_config"]
