#!/usr/bin/env python3
"""
Flipout - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--log-level LEVEL]
"""

import argparse
import os
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Flipout Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level for the server and table logs",
    )
    args = parser.parse_args()

    # Read by flipout.server.app, also in reload workers
    os.environ["FLIPOUT_LOG_LEVEL"] = args.log_level.upper()

    uvicorn.run(
        "flipout.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
