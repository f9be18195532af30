"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import aiohttp
from fastapi import FastAPI

from likerid_gateway.api.healthcheck import router as healthcheck_router
from likerid_gateway.api.routes import RouteDependencies, router, set_dependencies
from likerid_gateway.core.config import Settings, get_settings
from likerid_gateway.core.profiles import LikerIdClient
from likerid_gateway.core.resolver import LikerIdResolver
from likerid_gateway.core.signer import ResponseSigner
from likerid_gateway.utils.decorators import init_sentry

# Configure logging for the application
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logging.getLogger("likerid_gateway").setLevel(logging.INFO)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the gateway application for the given settings."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Application lifespan handler."""
        # Startup
        app_settings = settings or get_settings()
        sentry_enabled = init_sentry(app_settings)

        # A bad key aborts startup before anything is served
        signer = ResponseSigner.from_settings(app_settings)

        timeout = aiohttp.ClientTimeout(total=app_settings.upstream_timeout)
        session = aiohttp.ClientSession(timeout=timeout)

        client = LikerIdClient(settings=app_settings, session=session)
        set_dependencies(
            RouteDependencies(
                settings=app_settings,
                signer=signer,
                resolver=LikerIdResolver(settings=app_settings, source=client),
            )
        )

        logger.info(
            f"Serving on port {app_settings.port} "
            f"with signing address {signer.address}"
        )
        logger.info(f"Network: {'testnet' if app_settings.development else 'mainnet'}")
        logger.info(f"TTL: {app_settings.ttl}s")
        logger.info(f"Sentry: {'enabled' if sentry_enabled else 'disabled'}")

        yield

        # Shutdown
        logger.info("LikerID gateway shutting down...")
        await session.close()

    application = FastAPI(
        title="LikerID ENS Gateway",
        description="CCIP-Read gateway serving signed LikerID ENS records",
        version="1.0.0",
        lifespan=lifespan,
    )

    application.include_router(healthcheck_router)
    application.include_router(router)

    return application


app = create_app()
