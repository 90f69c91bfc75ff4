"""
PokerCoach Server - FastAPI HTTP Layer
"""

from pokercoach.server.app import app, create_app

__all__ = ["app", "create_app"]
