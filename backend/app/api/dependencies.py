"""Shared request dependencies for the API routes.

The writer and settings live on app.state, set up by main.py's
create_app()/lifespan. Tests swap them via app.dependency_overrides.
"""

from fastapi import Request

from ..config import Settings
from ..services.influxdb import PointWriter


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_writer(request: Request) -> PointWriter:
    writer = getattr(request.app.state, "writer", None)
    if writer is None:
        raise RuntimeError("InfluxDB writer not initialised; is the app lifespan running?")
    return writer
