"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from presence.application.background import BackgroundRefresher
from presence.interface.api.middleware import (
    AllowAnyOriginMiddleware,
    VanityDomainMiddleware,
)
from presence.interface.api.routes import root, users
from presence.util.di.container import create_container, setup_di
from presence.util.observability import instrument_fastapi, instrument_httpx


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the source refreshers for as long as the app serves requests.

    Refreshers are cancelled on shutdown without draining; caches are not
    persisted.
    """
    container: AsyncContainer = app.state.dishka_container
    refresher = await container.get(BackgroundRefresher)
    refresher.start()
    try:
        yield
    finally:
        await refresher.stop()
        await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use, a production container if omitted
    """
    # Instrument httpx for outbound requests to the upstream sources
    instrument_httpx()

    app_instance = FastAPI(
        title="Presence API",
        description="Aggregated chat, music, game and location presence for a fixed set of users",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    # Public read-only API: any origin, GET only
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["Authorization"],
        max_age=600,
    )
    app_instance.add_middleware(AllowAnyOriginMiddleware)
    app_instance.add_middleware(VanityDomainMiddleware)

    setup_di(app_instance, container or create_container())

    app_instance.include_router(root.router)
    app_instance.include_router(users.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
