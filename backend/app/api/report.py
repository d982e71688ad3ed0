"""POST /data/report - Ecowitt custom-server upload endpoint.

The station is configured with "Customized" upload, protocol Ecowitt,
path /data/report. It posts a urlencoded form every interval and ignores
the response body, so status codes matter mostly for logs and proxies.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ..config import Settings
from ..services.influxdb import PointWriter
from ..services.ingestion import IngestStatus, ingest_report
from .dependencies import get_settings, get_writer

router = APIRouter()

STATUS_CODES = {
    IngestStatus.OK: 200,
    IngestStatus.MALFORMED: 400,
    IngestStatus.ERROR: 502,
}


@router.post("/data/report", response_class=PlainTextResponse)
@router.post("/data/report/", response_class=PlainTextResponse, include_in_schema=False)
async def post_report(
    request: Request,
    writer: PointWriter = Depends(get_writer),
    settings: Settings = Depends(get_settings),
):
    """Ingest one station report and write it to InfluxDB."""
    form = await request.form()
    status = await ingest_report(form, writer, settings.influxdb.bucket)
    return PlainTextResponse(status.value, status_code=STATUS_CODES[status])
