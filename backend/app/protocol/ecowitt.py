"""Ecowitt custom-server report decoder.

The station POSTs a flat form (application/x-www-form-urlencoded) of
string values on every transmission interval. Field names are fixed by
the vendor firmware and must not be renamed. Every field below is
required; unknown extra fields are ignored so newer firmware keeps
working.

A report is accepted whole or not at all: any missing field or any value
that does not parse as its declared type rejects the entire report.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

# ASCII digits only; u64 needs at most 20 digits
_SIGNED_RE = re.compile(r"[+-]?[0-9]{1,20}")
_UNSIGNED_RE = re.compile(r"\+?[0-9]{1,20}")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

MAX_DECIMAL_LEN = 64

U8 = (0, 2**8 - 1)
U16 = (0, 2**16 - 1)
U32 = (0, 2**32 - 1)
U64 = (0, 2**64 - 1)
I32 = (-(2**31), 2**31 - 1)


class MalformedReport(ValueError):
    """Raised when a report is missing fields or has unparseable values."""

    def __init__(self, missing: list[str], invalid: list[str]):
        self.missing = missing
        self.invalid = invalid
        parts = []
        if missing:
            parts.append("missing: " + ", ".join(missing))
        if invalid:
            parts.append("invalid: " + ", ".join(invalid))
        super().__init__("Malformed station report (" + "; ".join(parts) + ")")


@dataclass(frozen=True)
class ReportField:
    """Definition of a single form field within a station report."""
    key: str    # form field name sent by the station
    attr: str   # StationReport attribute
    kind: type  # str, int or float
    bounds: Optional[tuple[int, int]] = None  # inclusive range for int fields


REPORT_FIELDS = [
    # Station data
    ReportField("freq", "frequency", str),
    ReportField("PASSKEY", "passkey", str),       # MD5 of the station MAC, opaque
    ReportField("stationtype", "station_type", str),
    ReportField("model", "model", str),
    ReportField("runtime", "runtime", int, U64),  # seconds since boot
    ReportField("wh65batt", "battery", int, U8),  # 0 = OK, 1 = low
    ReportField("heap", "heap", int, I32),        # free memory counter
    ReportField("dateutc", "date_utc", str),      # "YYYY-MM-DD HH:MM:SS"
    ReportField("interval", "interval", int, U32),
    # Weather data
    ReportField("tempf", "outdoor_temp_f", float),
    ReportField("humidity", "outdoor_humidity", int, I32),
    ReportField("tempinf", "indoor_temp_f", float),
    ReportField("humidityin", "indoor_humidity", int, I32),
    ReportField("windspeedmph", "wind_speed_mph", float),
    ReportField("windgustmph", "wind_gust_mph", float),
    ReportField("winddir", "wind_direction", int, U16),  # degrees, not clamped
    ReportField("baromabsin", "pressure_abs_inhg", float),
    ReportField("baromrelin", "pressure_rel_inhg", float),
    ReportField("solarradiation", "solar_radiation", float),  # W/m2
    ReportField("uv", "uv_index", int, I32),
    ReportField("vpd", "vpd", float),  # kPa
    # Rain accumulators, inches (rate in inches/hour)
    ReportField("rainratein", "rain_rate_in", float),
    ReportField("eventrainin", "rain_event_in", float),
    ReportField("totalrainin", "rain_total_in", float),
    ReportField("hourlyrainin", "rain_hourly_in", float),
    ReportField("dailyrainin", "rain_daily_in", float),
    ReportField("weeklyrainin", "rain_weekly_in", float),
    ReportField("monthlyrainin", "rain_monthly_in", float),
    ReportField("yearlyrainin", "rain_yearly_in", float),
]


@dataclass(frozen=True)
class StationReport:
    """One decoded station transmission. All values in station units.

    Temperatures: degrees F
    Humidity: percent
    Wind speed/gust: mph
    Wind direction: degrees as reported (0-360 expected)
    Pressure: inches Hg
    Rain: inches, rate in inches/hour
    Solar radiation: W/m2
    VPD: kPa
    """
    frequency: str
    passkey: str
    station_type: str
    model: str
    runtime: int
    battery: int
    heap: int
    date_utc: str
    interval: int

    outdoor_temp_f: float
    outdoor_humidity: int
    indoor_temp_f: float
    indoor_humidity: int
    wind_speed_mph: float
    wind_gust_mph: float
    wind_direction: int
    pressure_abs_inhg: float
    pressure_rel_inhg: float
    solar_radiation: float
    uv_index: int
    vpd: float

    rain_rate_in: float
    rain_event_in: float
    rain_total_in: float
    rain_hourly_in: float
    rain_daily_in: float
    rain_weekly_in: float
    rain_monthly_in: float
    rain_yearly_in: float


def _parse_int(raw: str, bounds: tuple[int, int]) -> Optional[int]:
    """Parse a decimal integer within inclusive bounds, or None."""
    lo, hi = bounds
    pattern = _UNSIGNED_RE if lo >= 0 else _SIGNED_RE
    if not pattern.fullmatch(raw):
        return None
    value = int(raw)
    if value < lo or value > hi:
        return None
    return value


def _parse_float(raw: str) -> Optional[float]:
    """Parse a finite decimal number, or None."""
    if len(raw) > MAX_DECIMAL_LEN or not _DECIMAL_RE.fullmatch(raw):
        return None
    value = float(raw)
    if not math.isfinite(value):
        return None  # e.g. 1e999 overflows to inf
    return value


def _parse_field(field: ReportField, raw: Any) -> Optional[Any]:
    if not isinstance(raw, str):
        return None  # file upload or other non-text part
    if field.kind is str:
        return raw
    if field.kind is int:
        return _parse_int(raw, field.bounds or I32)
    return _parse_float(raw)


def decode_report(fields: Mapping[str, Any]) -> StationReport:
    """Decode a flat form mapping into a StationReport.

    Args:
        fields: Form field name to string value, as posted by the station.

    Returns:
        StationReport with every declared field populated.

    Raises:
        MalformedReport: if any declared field is missing or unparseable.
    """
    values: dict[str, Any] = {}
    missing: list[str] = []
    invalid: list[str] = []

    for field in REPORT_FIELDS:
        if field.key not in fields:
            missing.append(field.key)
            continue
        value = _parse_field(field, fields[field.key])
        if value is None:
            invalid.append(field.key)
            continue
        values[field.attr] = value

    if missing or invalid:
        raise MalformedReport(missing, invalid)

    return StationReport(**values)
