"""
FastAPI server for the Bunnings agentic commerce MCP endpoint.

Routes:
    OPTIONS /mcp          CORS preflight (204)
    GET     /             plain-text banner
    POST|GET|DELETE /mcp  stateless MCP request, one server per request
    anything else         404

Usage:
    python -m commerce_mcp.api.server
    # or
    uvicorn commerce_mcp.api.server:app --port 8787
"""
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from commerce_mcp.core.config import ServerConfig, get_config
from commerce_mcp.core.preload import preload_all
from commerce_mcp.protocol.lifecycle import McpEndpoint
from commerce_mcp.utils.logger import get_logger, set_level

logger = get_logger("api.server")

BANNER = "Bunnings Agentic Commerce MCP Server"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every non-OPTIONS request with method, path, status, and duration_ms."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return await call_next(request)
        t0 = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - t0) * 1000, 1)
        logger.info(
            "[REQUEST] %s %s -> %d  %.1fms",
            request.method, request.url.path, response.status_code, duration_ms
        )
        return response


def create_app(config: Optional[ServerConfig] = None) -> FastAPI:
    """
    Build the HTTP application.

    The catalog and widget markup are loaded in the lifespan hook. A load
    failure propagates out of startup, so the server never starts listening.
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        catalog, widget_html, timings = preload_all(config)
        app.state.catalog = catalog
        app.state.widget_html = widget_html
        app.state.preload_timings = timings
        logger.info(f"Listening on http://localhost:{config.port}{config.mcp_path}")
        yield
        logger.info("Shutting down")

    app = FastAPI(
        title=BANNER,
        description="Stateless MCP server exposing the product catalog to AI agents",
        version=config.server_version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.config = config

    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods are both plain 404s
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not Found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return BANNER

    app.add_route(config.mcp_path, McpEndpoint(config), include_in_schema=False)

    return app


app = create_app()


def main() -> None:
    config = get_config()
    set_level(config.log_level)
    logger.info("=" * 60)
    logger.info(BANNER)
    logger.info(f"MCP endpoint: http://localhost:{config.port}{config.mcp_path}")
    logger.info("=" * 60)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
