"""
Root endpoint with service metadata.
"""

from __future__ import annotations

from fastapi import APIRouter

import core.config as config


router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": config.SERVICE_NAME,
        "version": config.SERVICE_VERSION,
        "description": "Topics, facts and per-user fact state",
        "identity_header": config.USER_HEADER,
        "endpoints": {
            "health": "/health",
            "mcp": "/mcp",
            "actions": {
                "createTopic": "/actions/createTopic",
                "updateTopic": "/actions/updateTopic",
                "listTopics": "/actions/listTopics",
                "createFact": "/actions/createFact",
                "updateFact": "/actions/updateFact",
                "listFacts": "/actions/listFacts",
                "createRequest": "/actions/createRequest",
                "updateUserFactState": "/actions/updateUserFactState",
                "listUserFactState": "/actions/listUserFactState",
            },
        },
    }
