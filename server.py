"""
FactGate - topics, facts and per-user fact state
REST actions + MCP server entrypoint
"""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "app.main:asgi_app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8080")),
        log_level=os.environ.get("LOG_LEVEL", "info"),
    )


if __name__ == "__main__":
    main()
