"""FastAPI application factory and lifespan for the Ecowitt bridge.

Run with:
    ecowitt-bridge --config ecowitt2db.toml
or:
    uvicorn app.main:create_app --factory
"""

import argparse
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .config import APP_VERSION, Settings, get_settings, load_settings
from .services.influxdb import InfluxDBWriter, PointWriter
from .api.router import api_router, report_router

LOG_FORMAT = "%(levelname)s:     %(name)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for our app (uvicorn only configures its own loggers)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open and close the InfluxDB writer."""
    settings: Settings = app.state.settings
    owned = app.state.writer is None

    if owned:
        app.state.writer = InfluxDBWriter(
            host=settings.influxdb.host,
            org=settings.influxdb.org,
            token=settings.influxdb.token,
            timeout=settings.influxdb.timeout,
        )
    logger.info(
        "Writing to InfluxDB %s (org=%s, bucket=%s)",
        settings.influxdb.host, settings.influxdb.org, settings.influxdb.bucket,
    )

    yield

    logger.info("Shutting down...")
    if owned:
        await app.state.writer.aclose()
        app.state.writer = None
    logger.info("Application shutdown complete")


def create_app(
    settings: Optional[Settings] = None,
    writer: Optional[PointWriter] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from env/.env/TOML if omitted.
        writer: Pre-built database writer; an InfluxDBWriter is created
            (and closed) by the lifespan if omitted.
    """
    app = FastAPI(
        title="Ecowitt Bridge",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings if settings is not None else get_settings()
    configure_logging(app.state.settings.log_level)
    app.state.writer = writer

    app.include_router(report_router)
    app.include_router(api_router)

    return app


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ecowitt-bridge",
        description="Receive Ecowitt station reports and store them in InfluxDB.",
    )
    parser.add_argument("--config", help="TOML config file (default: ./ecowitt2db.toml)")
    parser.add_argument("--host", help="Listen address (overrides config)")
    parser.add_argument("--port", type=int, help="Listen port (overrides config)")
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    configure_logging(settings.log_level)

    host = args.host or settings.host
    port = args.port if args.port is not None else settings.listen_port
    logger.info("Listening on %s:%d", host, port)

    import uvicorn

    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
