"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forum.config import Settings
from forum.interface.api.errors import register_error_handlers
from forum.interface.api.routes import health, posts, replies
from forum.util.di.container import create_container, setup_di
from forum.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function. In
    production, start_app.py handles this.

    Args:
        container: DI container to use; the production container when None

    Returns:
        Configured application
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Forum API",
        description="Backend API for a Q&A forum with threaded replies, votes and accepted answers",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(replies.router)

    return app_instance


# App instance for uvicorn
app = create_app()
