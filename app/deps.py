"""
Dependency helpers for the standalone FastAPI app.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request

from core.context import AuthContext, RequestContext
from app.auth import get_current_user


async def get_auth_context(
    user_id: Optional[str] = Depends(get_current_user),
) -> AuthContext:
    if user_id:
        return AuthContext(user_id=user_id, actor=f"user_{user_id}")
    return AuthContext(actor="anonymous")


async def get_request_context(
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> RequestContext:
    return RequestContext(
        auth=auth,
        request_id=request.headers.get("x-request-id"),
        source="rest",
    )
