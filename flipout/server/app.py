"""
FastAPI Application Entry Point for Flipout.

This module creates and configures the FastAPI application with:
- HTTP routes for table management and showdowns
- WebSocket endpoint for paced dealing and reveals
- CORS middleware for browser clients
"""

import os
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flipout import __version__
from flipout.server.manager import TableManager
from flipout.server.routes import router
from flipout.server.websocket import websocket_endpoint

def get_log_level() -> int:
    """Log level from FLIPOUT_LOG_LEVEL, INFO when unset or unknown."""
    level = logging.getLevelName(os.getenv("FLIPOUT_LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


# Configure logging
logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each app gets its own TableManager, so two apps never share tables.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Flipout",
        description="Texas Hold'em deal and showdown engine with WebSocket API",
        version=__version__,
    )
    app.state.table_manager = TableManager()

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include HTTP routes
    app.include_router(router)

    # WebSocket endpoint
    app.websocket("/ws/{table_id}")(websocket_endpoint)

    logger.info("Flipout app created")
    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "flipout.server.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
