from typing import Optional, Sequence

from mcp import types

from .models import Product, ProductsPayload, ReplyEnvelope, TextItem


def format_reply(message: Optional[str], products: Optional[Sequence[Product]]) -> ReplyEnvelope:
    """
    Build the tool reply envelope shown to the agent and bound by the widget.

    Args:
        message: Human-readable summary; None or "" yields no text content
        products: Products to render; None is treated as an empty list

    Returns:
        ReplyEnvelope whose structuredContent.products is always a list
    """
    content = [TextItem(text=message)] if message else []
    return ReplyEnvelope(
        content=content,
        structuredContent=ProductsPayload(products=list(products or [])),
    )


def to_call_tool_result(envelope: ReplyEnvelope) -> types.CallToolResult:
    """Serialize a reply envelope into the protocol's CallToolResult."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item.text) for item in envelope.content],
        structuredContent=envelope.structuredContent.model_dump(mode="json"),
        isError=False,
    )


def error_result(message: str) -> types.CallToolResult:
    """Tool-level failure the agent can read and correct."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=message)],
        isError=True,
    )
