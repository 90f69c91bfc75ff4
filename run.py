#!/usr/bin/env python3
"""
PokerCoach - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload]

Session settings come from POKERCOACH_* environment variables, e.g.
POKERCOACH_HISTORY_PATH=data.json or POKERCOACH_COACH_ENDPOINT=http://...
"""

import argparse
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="PokerCoach Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    uvicorn.run(
        "pokercoach.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
