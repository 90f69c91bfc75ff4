"""
FastAPI Application Entry Point for PokerCoach.

This module creates and configures the FastAPI application with:
- HTTP routes for the training table
- Session settings from POKERCOACH_* environment variables
- CORS middleware for development
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokercoach import __version__
from pokercoach.coach.session import SessionConfig
from pokercoach.coach.storage import KeyValueStore
from pokercoach.server import routes

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("PokerCoach server starting up...")
    yield
    routes.close_session()
    logger.info("PokerCoach server shutting down...")


def create_app(
    config: Optional[SessionConfig] = None,
    store: Optional[KeyValueStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Session settings; read from the environment if omitted
        store: Profile/history store; derived from the config if omitted

    Returns:
        Configured FastAPI application instance
    """
    routes.configure(config or SessionConfig.from_env(), store)

    app = FastAPI(
        title="PokerCoach",
        description="Texas Hold'em training table with bot opponents and coaching",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(routes.router)

    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "pokercoach.server.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
