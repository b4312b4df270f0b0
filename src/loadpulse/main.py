"""Main FastAPI application module."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loadpulse.api.health_check import router as health_router
from loadpulse.api.load_test import router as load_test_router
from loadpulse.config.settings import Settings, settings
from loadpulse.core.issuer import HttpxRequestIssuer, RequestIssuer
from loadpulse.core.targets import SearchTargetSelector, TargetSelector
from loadpulse.runtime.orchestrator import LoadTestOrchestrator

logger = logging.getLogger(__name__)


def configure_logging(app_settings: Settings) -> None:
    """Install the root handler once, with the configured level."""
    logging.basicConfig(
        level=app_settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    *,
    app_settings: Settings = settings,
    issuer: RequestIssuer | None = None,
    selector: TargetSelector | None = None,
) -> FastAPI:
    """
    Build the application.

    *issuer* and *selector* default to the httpx issuer and the search
    target selector; tests inject stubs to keep the network out.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application lifespan events."""
        # Startup
        owned_issuer = None
        run_issuer = issuer
        if run_issuer is None:
            owned_issuer = HttpxRequestIssuer(timeout_s=app_settings.request_timeout_s)
            run_issuer = owned_issuer

        app.state.orchestrator = LoadTestOrchestrator(
            issuer=run_issuer,
            selector=selector or SearchTargetSelector(app_settings.target_base_url),
            request_timeout_s=app_settings.request_timeout_s,
            update_interval_s=app_settings.update_interval_s,
            max_actors=app_settings.max_actors,
            max_requests_per_actor=app_settings.max_requests_per_actor,
        )
        logger.info("%s ready (%s)", app_settings.app_name, app_settings.environment)
        yield
        # Shutdown
        await app.state.orchestrator.shutdown()
        if owned_issuer is not None:
            await owned_issuer.aclose()

    app = FastAPI(
        title=app_settings.app_name,
        version="0.1.0",
        description="Cancellable synthetic load test with live statistics",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET", "POST"],
    )
    app.include_router(health_router)
    app.include_router(load_test_router)
    return app


app = create_app()
