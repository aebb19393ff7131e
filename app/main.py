"""
Standalone FastAPI app wiring for FactGate.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

import core.config as config
from core.db import DB, dispose_db, init_db
from core.mcp import mcp_stream_app, MCPRouteNormalizerASGI
from app.middleware import configure_middleware
from app.routes.actions import router as actions_router
from app.routes.health import router as health_router
from app.routes.root import router as root_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize on startup, cleanup on shutdown."""
    owns_db = DB.SessionLocal is None
    if owns_db:
        init_db()
    try:
        async with mcp_stream_app.lifespan(mcp_stream_app):
            yield
    finally:
        if owns_db:
            dispose_db()


app = FastAPI(
    title=config.SERVICE_NAME,
    version=config.SERVICE_VERSION,
    redirect_slashes=False,
    lifespan=lifespan,
)
configure_middleware(app)

app.include_router(actions_router)
app.include_router(health_router)
app.include_router(root_router)

app.mount("/mcp/", mcp_stream_app)


# =============================================================================
# ASGI Application (module-level for production deployment)
# =============================================================================

asgi_app = MCPRouteNormalizerASGI(app)
