"""
Request-scoped context objects for core services.

Services never read ambient request state; callers build a RequestContext at
the transport edge and pass it explicitly as ``context=``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthContext:
    user_id: Optional[str] = None
    actor: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)


@dataclass(frozen=True)
class RequestContext:
    auth: AuthContext
    request_id: Optional[str] = None
    source: Optional[str] = None

    @staticmethod
    def for_user(user_id: Optional[str], source: Optional[str] = None) -> "RequestContext":
        user_value = user_id.strip() if isinstance(user_id, str) else None
        if not user_value:
            return RequestContext(auth=AuthContext(actor="anonymous"), source=source)
        return RequestContext(
            auth=AuthContext(user_id=user_value, actor=f"user_{user_value}"),
            source=source,
        )


ANONYMOUS_CONTEXT = RequestContext(auth=AuthContext(actor="anonymous"))


__all__ = [
    "AuthContext",
    "RequestContext",
    "ANONYMOUS_CONTEXT",
]
