"""Time-series point assembly.

Maps a MetricMeasurement onto the three measurement groups written to
the database, mirroring where the sensors physically sit:

    outdoor  - outdoor sensor array
    indoor   - console/indoor sensor
    station  - station health

Points carry no timestamp; the database assigns the write time.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .normalizer import MetricMeasurement

FieldValue = Union[float, int, bool]


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One named group of fields destined for a single database row."""
    measurement: str
    fields: tuple[tuple[str, FieldValue], ...]

    def __post_init__(self):
        # Bad construction is a programming error, never a bad report
        if not self.measurement:
            raise ValueError("Point has no measurement name")
        if not self.fields:
            raise ValueError(f"Point {self.measurement!r} has no fields")
        for name, value in self.fields:
            if not isinstance(value, (float, int, bool)):
                raise TypeError(
                    f"Field {self.measurement}.{name} has unsupported "
                    f"type {type(value).__name__}"
                )

    def as_dict(self) -> dict[str, FieldValue]:
        return dict(self.fields)


def assemble_points(
    data: MetricMeasurement,
    battery_ok: Optional[bool] = None,
) -> list[TimeSeriesPoint]:
    """Build the outdoor, indoor and station points, in that order.

    Args:
        data: Normalized measurement.
        battery_ok: Battery flag override; defaults to data.battery_ok.
    """
    if battery_ok is None:
        battery_ok = data.battery_ok

    return [
        TimeSeriesPoint("outdoor", (
            ("temperature", float(data.temp_outdoor)),
            ("humidity", int(data.humidity_outdoor)),
            ("windspeed", float(data.wind_speed)),
            ("windgust", float(data.wind_gust)),
            ("winddir", int(data.wind_direction)),
            ("rainrate", float(data.rain.rate)),
            ("pressure", float(data.pressure_rel)),
            ("solarradiation", float(data.solar_radiation)),
            ("uv", int(data.uv_index)),
            ("vpd", float(data.vpd)),
        )),
        TimeSeriesPoint("indoor", (
            ("temperature", float(data.temp_indoor)),
            ("humidity", int(data.humidity_indoor)),
        )),
        TimeSeriesPoint("station", (
            ("battery_ok", bool(battery_ok)),
        )),
    ]
