"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from meal_nutrition.api.nutrition import router as nutrition_router
from meal_nutrition.app_logging import configure_logging
from meal_nutrition.containers import AppContainer
from meal_nutrition.services.composition import CompositionUnavailableError
from meal_nutrition.services.sessions import ResolverSessions


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.composition_service.load()
        except CompositionUnavailableError:
            logger.exception("Failed to preload the composition table")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.sessions = ResolverSessions(
        factory=container.new_resolver,
        max_sessions=container.settings.max_sessions,
    )

    app.include_router(nutrition_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
