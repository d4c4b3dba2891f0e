"""
Flipout Server - FastAPI + WebSocket Server Layer
"""

from flipout.server.app import app, create_app

__all__ = ["app", "create_app"]
