"""
MCP server wiring and tool registration.
"""

from __future__ import annotations

from typing import Any, Optional

from fastmcp import FastMCP

import core.config as config
from core.services import fact_service
from core.mcp.auth_middleware import get_current_context, MCPAuthMiddleware

READ_ONLY_TOOL_ANNOTATIONS = {"readOnlyHint": True}
WRITE_TOOL_ANNOTATIONS = {"readOnlyHint": False, "destructiveHint": False}

mcp = FastMCP(config.SERVICE_NAME)


@mcp.tool(annotations=WRITE_TOOL_ANNOTATIONS)
def create_topic(
    name: str,
    description: Optional[str] = None,
    slug: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> dict:
    return fact_service.create_topic(
        name=name,
        description=description,
        slug=slug,
        is_active=is_active,
        context=get_current_context(),
    )


@mcp.tool(annotations=WRITE_TOOL_ANNOTATIONS)
def update_topic(
    id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
    slug: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> dict:
    return fact_service.update_topic(
        id=id,
        name=name,
        description=description,
        slug=slug,
        is_active=is_active,
        context=get_current_context(),
    )


@mcp.tool(annotations=READ_ONLY_TOOL_ANNOTATIONS)
def list_topics(include_inactive: bool = False) -> dict:
    return fact_service.list_topics(
        include_inactive=include_inactive,
        context=get_current_context(),
    )


@mcp.tool(annotations=WRITE_TOOL_ANNOTATIONS)
def create_fact(
    content: str,
    topic_id: Optional[int] = None,
    difficulty: Optional[str] = None,
    source: Optional[str] = None,
    source_meta: Optional[Any] = None,
    origin: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> dict:
    return fact_service.create_fact(
        content=content,
        topic_id=topic_id,
        difficulty=difficulty,
        source=source,
        source_meta=source_meta,
        origin=origin,
        is_active=is_active,
        context=get_current_context(),
    )


@mcp.tool(annotations=WRITE_TOOL_ANNOTATIONS)
def update_fact(
    id: int,
    topic_id: Optional[int] = None,
    content: Optional[str] = None,
    difficulty: Optional[str] = None,
    source: Optional[str] = None,
    source_meta: Optional[Any] = None,
    origin: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> dict:
    return fact_service.update_fact(
        id=id,
        topic_id=topic_id,
        content=content,
        difficulty=difficulty,
        source=source,
        source_meta=source_meta,
        origin=origin,
        is_active=is_active,
        context=get_current_context(),
    )


@mcp.tool(annotations=READ_ONLY_TOOL_ANNOTATIONS)
def list_facts(
    topic_id: Optional[int] = None,
    include_inactive: bool = False,
) -> dict:
    return fact_service.list_facts(
        topic_id=topic_id,
        include_inactive=include_inactive,
        context=get_current_context(),
    )


@mcp.tool(annotations=WRITE_TOOL_ANNOTATIONS)
def create_request(
    topic_id: Optional[int] = None,
    prompt: Optional[str] = None,
    input: Optional[Any] = None,
    output: Optional[Any] = None,
    status: Optional[str] = None,
) -> dict:
    return fact_service.create_request(
        topic_id=topic_id,
        prompt=prompt,
        input=input,
        output=output,
        status=status,
        context=get_current_context(),
    )


@mcp.tool(annotations=WRITE_TOOL_ANNOTATIONS)
def update_user_fact_state(
    fact_id: int,
    seen: Optional[bool] = None,
    seen_at: Optional[str] = None,
    is_favorite: Optional[bool] = None,
    reaction: Optional[str] = None,
) -> dict:
    return fact_service.update_user_fact_state(
        fact_id=fact_id,
        seen=seen,
        seen_at=seen_at,
        is_favorite=is_favorite,
        reaction=reaction,
        context=get_current_context(),
    )


@mcp.tool(annotations=READ_ONLY_TOOL_ANNOTATIONS)
def list_user_fact_state(only_favorites: bool = False) -> dict:
    return fact_service.list_user_fact_state(
        only_favorites=only_favorites,
        context=get_current_context(),
    )


mcp_stream_app = MCPAuthMiddleware(mcp.http_app(
    path="/",
    transport="streamable-http",
    stateless_http=True,
    json_response=True,
))


class MCPRouteNormalizerASGI:
    """Pure ASGI middleware - no response buffering, SSE-safe."""
    def __init__(self, wrapped_app):
        self.wrapped_app = wrapped_app

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope.get("path") == "/mcp":
            scope = dict(scope)
            scope["path"] = "/mcp/"
        await self.wrapped_app(scope, receive, send)
