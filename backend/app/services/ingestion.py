"""Station report ingestion.

decode -> normalize -> assemble -> write, once per inbound report.
No state is kept between reports and failed writes are not retried.
"""

import enum
import logging
from typing import Any, Mapping

from ..protocol.ecowitt import MalformedReport, decode_report
from .influxdb import PointWriter, WriteFailure
from .normalizer import normalize
from .points import assemble_points

logger = logging.getLogger(__name__)


class IngestStatus(enum.Enum):
    OK = "OK"
    MALFORMED = "MALFORMED"
    ERROR = "ERROR"


async def ingest_report(
    fields: Mapping[str, Any],
    writer: PointWriter,
    bucket: str,
) -> IngestStatus:
    """Process one station report and write its points.

    Args:
        fields: Raw form fields posted by the station.
        writer: Database client the points are handed to.
        bucket: Target bucket name.

    Returns:
        MALFORMED if the report was rejected (nothing written),
        ERROR if the database write failed, OK otherwise.
    """
    try:
        report = decode_report(fields)
    except MalformedReport as exc:
        logger.warning(
            "Rejected station report: missing=%s invalid=%s",
            exc.missing, exc.invalid,
        )
        return IngestStatus.MALFORMED

    data = normalize(report)
    points = assemble_points(data, data.battery_ok)

    try:
        await writer.write(bucket, points)
    except WriteFailure as exc:
        logger.error("Failed to write station report: %s", exc)
        return IngestStatus.ERROR

    logger.debug(
        "Stored report from %s (%s) at %s",
        report.model, report.station_type, report.date_utc,
    )
    return IngestStatus.OK
