"""FastAPI application exposing the reroll sequence."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from villager_gen import __version__
from villager_gen.api.routes import catalog, config, sequence
from villager_gen.api.services import PhaseBroadcaster
from villager_gen.config import get_settings
from villager_gen.context import AppContext, build_context
from villager_gen.generator.config_generator import ConfigGenerator
from villager_gen.generator.random_source import SeededRandomSource

logger = logging.getLogger(__name__)


def create_app(context: AppContext | None = None) -> FastAPI:
    """Create the FastAPI application.

    Without a context one is built from settings on startup; a catalog that
    fails to load aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx = context or build_context(get_settings())
        app.state.context = ctx
        app.state.broadcaster = PhaseBroadcaster(ctx.controller)
        app.state.roll_generator = ConfigGenerator(
            ctx.catalog,
            SeededRandomSource(),
            weights=ctx.generator.weights,
            default_clothing_id=ctx.generator.default_clothing_id,
        )

        ctx.renderer.start()
        initial = ctx.controller.show_initial()
        logger.info("Initial villager: %s", ctx.generator.label_for(initial))
        try:
            yield
        finally:
            ctx.renderer.stop()

    app = FastAPI(
        title="Villager-Gen",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    prefix = "/api/v1"
    app.include_router(config.router, prefix=prefix, tags=["config"])
    app.include_router(catalog.router, prefix=prefix, tags=["catalog"])
    app.include_router(sequence.router, prefix=prefix, tags=["sequence"])

    return app
