import asyncio
import contextlib
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from adapters.google.maps_client import GoogleMapsClient
from config.logging_config import setup_logging
from config.settings import LandingConfig
from core.infrastructure.http_client import init_http_client, close_http_client
from core.metadata import SERVICE_NAME, VERSION
from services.landing_session import LandingSessionStore
from services.lead_intake import LeadIntake

logger = structlog.get_logger(__name__)

STARTUP_BANNER = """
╔══════════════════════════════════════════════╗
║  {service} v{version}
║  Python {python} | env: {env} | {log_level}
║  maps: {maps}
╚══════════════════════════════════════════════╝"""

SHUTDOWN_BANNER = """
╔══════════════════════════════════════════════╗
║  {service} v{version} shutting down
╚══════════════════════════════════════════════╝"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    init_http_client(timeout=LandingConfig.MAPS_HTTP_TIMEOUT)
    logger.info("HTTP client initialized", component="http")

    maps_client = GoogleMapsClient()
    if not maps_client.is_available:
        logger.error("GOOGLE_MAPS_API_KEY is not set, map will not load", component="maps")

    intake = LeadIntake()
    store = LandingSessionStore(maps_client, intake)
    app.state.maps_client = maps_client
    app.state.lead_intake = intake
    app.state.session_store = store
    sweeper = asyncio.create_task(
        store.run_sweeper(LandingConfig.SESSION_SWEEP_INTERVAL_SECONDS)
    )

    environment = os.getenv("ENVIRONMENT", "local")
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    python_version = sys.version.split()[0]
    maps_state = "ready" if maps_client.is_available else "NOT CONFIGURED"

    print(
        STARTUP_BANNER.format(
            service=SERVICE_NAME,
            version=VERSION,
            python=python_version,
            env=environment,
            log_level=log_level,
            maps=maps_state,
        )
    )
    logger.info(
        "Service started",
        service=SERVICE_NAME,
        version=VERSION,
        python=python_version,
        environment=environment,
        log_level=log_level,
        maps=maps_state,
    )
    try:
        yield
    finally:
        print(SHUTDOWN_BANNER.format(service=SERVICE_NAME, version=VERSION))
        logger.info("Service shutting down", service=SERVICE_NAME, version=VERSION)
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        await close_http_client()
        logger.info("HTTP client closed", component="http")
