"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lifedash import __version__
from lifedash.application import Services, build_services
from lifedash.config import Settings, load_settings
from lifedash.interfaces.api.errors import install_error_handlers
from lifedash.interfaces.api.routes import router
from lifedash.interfaces.api.schemas import RootResponse

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to use; loaded from the config dir when omitted.
        services: Prebuilt services (tests pass one bound to a test database).

    Returns:
        The app. Tables are created, and default values / dreams seeded,
        when the app starts.
    """
    if settings is None:
        settings = services.settings if services is not None else load_settings()
    if services is None:
        services = build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create tables and seed defaults on startup."""
        services.init_db()
        if settings.seed_defaults:
            services.seed(settings.default_user_id)
        logger.info("lifedash API ready on %s", services.db.url)
        yield
        logger.info("lifedash API shutting down")

    app = FastAPI(
        title="lifedash",
        description="Personal life-management dashboard API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = services

    # CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)
    app.include_router(router)

    @app.get("/", response_model=RootResponse)
    def root():
        return RootResponse(name="lifedash", version=__version__)

    return app
