"""
Caller identity for the standalone FastAPI app.

Authentication happens upstream; the proxy forwards the authenticated user id
in a trusted header (FACTGATE_USER_HEADER, default X-User-Id).
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

import core.config as config


async def get_current_user(request: Request) -> Optional[str]:
    value = request.headers.get(config.USER_HEADER)
    if value is None:
        return None
    value = value.strip()
    return value or None
