"""Shared fixtures for backend tests."""

from typing import Sequence

import pytest

from app.services.influxdb import WriteFailure
from app.services.points import TimeSeriesPoint

# A full report as posted by a GW1100 gateway with a WH65 outdoor array
SAMPLE_REPORT = {
    "PASSKEY": "0123456789ABCDEF0123456789ABCDEF",
    "stationtype": "GW1100A_V2.1.4",
    "runtime": "86400",
    "heap": "113832",
    "dateutc": "2024-06-01 12:00:00",
    "tempinf": "72.0",
    "humidityin": "40",
    "baromrelin": "30.00",
    "baromabsin": "29.92",
    "tempf": "98.6",
    "humidity": "45",
    "vpd": "0.8",
    "winddir": "180",
    "windspeedmph": "5.0",
    "windgustmph": "10.0",
    "solarradiation": "120.5",
    "uv": "3",
    "rainratein": "0.1",
    "eventrainin": "0.0",
    "hourlyrainin": "0.0",
    "dailyrainin": "0.05",
    "weeklyrainin": "0.2",
    "monthlyrainin": "1.0",
    "yearlyrainin": "5.0",
    "totalrainin": "1.0",
    "wh65batt": "0",
    "freq": "868M",
    "model": "GW1100A",
    "interval": "60",
}


class RecordingWriter:
    """In-memory PointWriter that records every write."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[str, list[TimeSeriesPoint]]] = []

    async def write(self, bucket: str, points: Sequence[TimeSeriesPoint]) -> None:
        self.calls.append((bucket, list(points)))
        if self.fail:
            raise WriteFailure("connection refused")

    async def ping(self) -> bool:
        return not self.fail


@pytest.fixture
def report_fields() -> dict[str, str]:
    return dict(SAMPLE_REPORT)


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def failing_writer() -> RecordingWriter:
    return RecordingWriter(fail=True)
