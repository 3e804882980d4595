"""Application lifespan: startup and shutdown.

Only infrastructure wiring here (logging, telemetry, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from eventops.core.config import get_settings
from eventops.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, telemetry (if enabled). Shutdown: telemetry
    shutdown, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    if settings.telemetry_enabled:
        from eventops.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()

        from eventops.infrastructure.persistence.database import get_engine

        engine = get_engine()
        if engine is not None:
            telemetry.instrument_sqlalchemy(engine)
        logger.info("Telemetry initialized")

    yield

    from eventops.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    from eventops.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
    logger.info("Database engine disposed")
