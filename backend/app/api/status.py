"""GET /api/status - Bridge and database health."""

from fastapi import APIRouter, Depends

from ..config import APP_VERSION, Settings
from ..services.influxdb import PointWriter
from .dependencies import get_settings, get_writer

router = APIRouter()


@router.get("/status")
async def get_status(
    writer: PointWriter = Depends(get_writer),
    settings: Settings = Depends(get_settings),
):
    reachable = await writer.ping()

    return {
        "version": APP_VERSION,
        "bucket": settings.influxdb.bucket,
        "influxdb": {
            "host": settings.influxdb.host,
            "reachable": reachable,
        },
    }
