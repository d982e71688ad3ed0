"""Tests for the report ingestion pipeline."""

import asyncio
import logging
import math

from app.services.ingestion import IngestStatus, ingest_report


class TestIngestReport:
    def test_end_to_end(self, report_fields, writer):
        status = asyncio.run(ingest_report(report_fields, writer, "weather"))
        assert status is IngestStatus.OK
        assert status.value == "OK"

        assert len(writer.calls) == 1
        bucket, points = writer.calls[0]
        assert bucket == "weather"
        assert [p.measurement for p in points] == ["outdoor", "indoor", "station"]

        outdoor = points[0].as_dict()
        assert math.isclose(outdoor["temperature"], 37.0, abs_tol=0.01)
        assert outdoor["humidity"] == 45
        assert math.isclose(outdoor["windspeed"], 8.047, abs_tol=1e-3)
        assert math.isclose(outdoor["windgust"], 16.093, abs_tol=1e-3)
        assert outdoor["winddir"] == 180
        assert math.isclose(outdoor["rainrate"], 2.54)
        assert math.isclose(outdoor["pressure"], 1015.92, abs_tol=0.01)
        assert outdoor["solarradiation"] == 120.5
        assert outdoor["uv"] == 3
        assert outdoor["vpd"] == 0.8

        indoor = points[1].as_dict()
        assert math.isclose(indoor["temperature"], 22.22, abs_tol=0.01)
        assert indoor["humidity"] == 40

        assert points[2].as_dict() == {"battery_ok": True}

    def test_missing_field_writes_nothing(self, report_fields, writer):
        del report_fields["tempf"]
        status = asyncio.run(ingest_report(report_fields, writer, "weather"))
        assert status is IngestStatus.MALFORMED
        assert writer.calls == []

    def test_non_numeric_writes_nothing(self, report_fields, writer):
        report_fields["humidity"] = "wet"
        status = asyncio.run(ingest_report(report_fields, writer, "weather"))
        assert status is IngestStatus.MALFORMED
        assert writer.calls == []

    def test_malformed_is_logged_without_passkey(self, report_fields, writer, caplog):
        del report_fields["tempf"]
        with caplog.at_level(logging.WARNING, logger="app.services.ingestion"):
            asyncio.run(ingest_report(report_fields, writer, "weather"))
        assert "tempf" in caplog.text
        assert report_fields["PASSKEY"] not in caplog.text

    def test_write_failure(self, report_fields, failing_writer, caplog):
        with caplog.at_level(logging.ERROR, logger="app.services.ingestion"):
            status = asyncio.run(ingest_report(report_fields, failing_writer, "weather"))
        assert status is IngestStatus.ERROR
        assert status.value == "ERROR"
        # attempted exactly once, not retried
        assert len(failing_writer.calls) == 1
        assert "connection refused" in caplog.text

    def test_low_battery(self, report_fields, writer):
        report_fields["wh65batt"] = "1"
        asyncio.run(ingest_report(report_fields, writer, "weather"))
        _, points = writer.calls[0]
        assert points[2].as_dict() == {"battery_ok": False}

    def test_reports_are_independent(self, report_fields, writer):
        first = dict(report_fields)
        second = dict(report_fields, tempf="32")

        async def run():
            return await asyncio.gather(
                ingest_report(first, writer, "weather"),
                ingest_report(second, writer, "weather"),
            )

        statuses = asyncio.run(run())
        assert statuses == [IngestStatus.OK, IngestStatus.OK]
        temps = sorted(points[0].as_dict()["temperature"] for _, points in writer.calls)
        assert temps[0] == 0.0
        assert math.isclose(temps[1], 37.0, abs_tol=1e-9)
