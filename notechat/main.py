"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, notechat.api, notechat.observability, notechat.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notechat import __version__
from notechat.api import api_router
from notechat.api.deps import build_container
from notechat.api.routers import chat_stream_router
from notechat.boundary.db.connection import create_tables
from notechat.configs import Settings, get_settings
from notechat.observability.logger import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Explicit settings (tests); get_settings() when None

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.

        Builds providers, the database engine, and services once at startup
        and disposes the engine on shutdown.
        """
        configure_logging(settings.log_level)
        logger.info("Application startup: logging configured")

        try:
            container = build_container(settings)
            if settings.database.create_tables:
                await create_tables(container.engine)
                logger.info("Database tables ensured")
        except Exception as e:
            logger.exception(
                "Failed to initialize application resources",
                extra={"error": str(e)},
            )
            raise

        app.state.container = container
        logger.info("Application startup complete: all resources initialized")

        yield

        logger.info("Application shutdown")
        await container.close()

    app = FastAPI(
        title="NoteChat API",
        description="Question answering over personal notes with hybrid retrieval and streamed answers",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")
    app.include_router(chat_stream_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "notechat.main:app",
        host="localhost",
        port=8082,
        reload=get_settings().debug,
    )
