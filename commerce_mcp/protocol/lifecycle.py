"""
Per-request protocol sessions.

Every inbound /mcp request gets its own server + transport pair:

    IDLE -> DISPATCHED -> HANDLING -> CLOSED

The pair is built when the session is entered, the request is handed to the
transport, and both are released when the session exits. Exit runs on
success, on client disconnect, and on error alike. No server, transport or
session id is shared between requests.
"""
from contextlib import AsyncExitStack
from enum import Enum
from typing import Optional

import anyio
from anyio.abc import TaskGroup
from mcp.server.lowlevel import Server
from mcp.server.streamable_http import StreamableHTTPServerTransport
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import Message, Receive, Scope, Send

from commerce_mcp.core.config import ServerConfig
from commerce_mcp.data.catalog_store import CatalogStore
from commerce_mcp.protocol.registry import create_commerce_server
from commerce_mcp.utils.logger import get_logger

logger = get_logger("protocol.lifecycle")

MCP_METHODS = frozenset({"POST", "GET", "DELETE"})

CORS_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "content-type, mcp-session-id",
    "Access-Control-Expose-Headers": "Mcp-Session-Id",
}

CORS_RESPONSE_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Expose-Headers": "Mcp-Session-Id",
}


class SessionState(str, Enum):
    IDLE = "idle"
    DISPATCHED = "dispatched"
    HANDLING = "handling"
    CLOSED = "closed"


class RequestSession:
    """
    One server + transport pair scoped to a single HTTP request.

    Usage:
        async with RequestSession(catalog, widget_html, config) as session:
            await session.handle(scope, receive, send)
    """

    def __init__(self, catalog: CatalogStore, widget_html: str, config: ServerConfig):
        self.catalog = catalog
        self.widget_html = widget_html
        self.config = config
        self.state = SessionState.IDLE
        self.server: Optional[Server] = None
        self.transport: Optional[StreamableHTTPServerTransport] = None
        self._task_group: Optional[TaskGroup] = None
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> "RequestSession":
        self.state = SessionState.DISPATCHED
        self.server = create_commerce_server(self.catalog, self.widget_html, self.config)
        self.transport = StreamableHTTPServerTransport(
            mcp_session_id=None,  # stateless: no session id is issued
            is_json_response_enabled=True,
        )

        stack = AsyncExitStack()
        self._exit_stack = stack
        try:
            read_stream, write_stream = await stack.enter_async_context(self.transport.connect())
            self._task_group = await stack.enter_async_context(anyio.create_task_group())
            await self._task_group.start(self._run_server, read_stream, write_stream)
        except BaseException:
            await self.close()
            raise

        self.state = SessionState.HANDLING
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _run_server(self, read_stream, write_stream, *, task_status=anyio.TASK_STATUS_IGNORED) -> None:
        task_status.started()
        try:
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
                stateless=True,
            )
        except Exception:
            logger.exception("Protocol server crashed")

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Hand the HTTP request to this session's transport."""
        if self.state is not SessionState.HANDLING:
            raise RuntimeError(f"Cannot handle a request in state {self.state.value}")
        await self.transport.handle_request(scope, receive, send)

    async def close(self) -> None:
        """Release the transport and stop the server. Safe to call twice."""
        if self.state is SessionState.CLOSED:
            return
        try:
            if self.transport is not None:
                # Shielded so the transport is released even when the request was cancelled
                with anyio.CancelScope(shield=True):
                    await self.transport.terminate()
        finally:
            if self._task_group is not None:
                self._task_group.cancel_scope.cancel()
            try:
                if self._exit_stack is not None:
                    # Re-raises the enclosing cancellation after unwinding
                    await self._exit_stack.aclose()
            finally:
                self.state = SessionState.CLOSED
                logger.debug("Request session closed")


class McpEndpoint:
    """
    Raw ASGI endpoint for the protocol path.

    OPTIONS answers the CORS preflight, POST/GET/DELETE are dispatched to a
    fresh RequestSession, and any other method is not found. The catalog and
    widget markup are read from app.state, where the startup hook put them.
    """

    def __init__(self, config: ServerConfig):
        self.config = config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        method = scope.get("method", "")
        if method == "OPTIONS":
            response: Response = Response(status_code=204, headers=CORS_PREFLIGHT_HEADERS)
            await response(scope, receive, send)
        elif method in MCP_METHODS:
            await self.dispatch(scope, receive, send)
        else:
            await PlainTextResponse("Not Found", status_code=404)(scope, receive, send)

    def open_session(self, scope: Scope) -> RequestSession:
        state = Request(scope).app.state
        return RequestSession(state.catalog, state.widget_html, self.config)

    async def dispatch(self, scope: Scope, receive: Receive, send: Send) -> None:
        response_started = False

        async def send_with_cors(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                headers = MutableHeaders(scope=message)
                for key, value in CORS_RESPONSE_HEADERS.items():
                    headers[key] = value
            await send(message)

        try:
            async with self.open_session(scope) as session:
                await session.handle(scope, receive, send_with_cors)
        except Exception:
            logger.exception("Error handling MCP request")
            if not response_started:
                await PlainTextResponse("Internal server error", status_code=500)(scope, receive, send)
