"""
MCP authentication middleware.

Reads the caller identity forwarded by the upstream auth provider and exposes
it as a RequestContext for the duration of the request using contextvars
(async-safe). Tools hand that context explicitly to the services.
"""

from __future__ import annotations

import json
from contextvars import ContextVar
from typing import Optional

from core.context import ANONYMOUS_CONTEXT, RequestContext
import core.config as config

# Context var for storing per-request caller context
_request_context: ContextVar[Optional[RequestContext]] = ContextVar(
    "mcp_request_context", default=None
)


def get_current_context() -> RequestContext:
    """Get current request context, or anonymous if not set."""
    ctx = _request_context.get()
    if ctx is not None:
        return ctx
    return ANONYMOUS_CONTEXT


def _header_value(scope, header_name: str) -> Optional[str]:
    wanted = header_name.lower()
    for raw_name, raw_value in scope.get("headers", []):
        if raw_name.decode("latin1").lower() == wanted:
            return raw_value.decode("latin1")
    return None


class MCPAuthMiddleware:
    """
    ASGI middleware that resolves the caller identity for MCP endpoints.
    """

    def __init__(self, app, require_auth: Optional[bool] = None):
        self.app = app
        self.require_auth = config.REQUIRE_MCP_AUTH if require_auth is None else require_auth

    def __getattr__(self, name):
        return getattr(self.app, name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        req_ctx = RequestContext.for_user(
            _header_value(scope, config.USER_HEADER),
            source="mcp",
        )
        if self.require_auth and not req_ctx.auth.is_authenticated:
            config.logger.info("mcp_auth_missing_identity")
            await self._send_error(send, 401, "Authenticated user required")
            return

        token = _request_context.set(req_ctx)
        try:
            await self.app(scope, receive, send)
        finally:
            _request_context.reset(token)

    async def _send_error(self, send, status_code: int, detail: str):
        """Send JSON error response."""
        body = json.dumps({"error": detail}).encode("utf-8")

        await send({
            "type": "http.response.start",
            "status": status_code,
            "headers": [
                [b"content-type", b"application/json"],
                [b"content-length", str(len(body)).encode("latin1")],
            ],
        })

        await send({
            "type": "http.response.body",
            "body": body,
        })
