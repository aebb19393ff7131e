"""
Auth guard for core services.
"""

from __future__ import annotations

from typing import Optional

from core.context import RequestContext
from core.errors import Unauthorized


def require_user(context: Optional[RequestContext]) -> str:
    """Return the caller's user id or raise Unauthorized."""
    if context is None or context.auth is None or not context.auth.is_authenticated:
        raise Unauthorized()
    return str(context.auth.user_id)


__all__ = ["require_user"]
