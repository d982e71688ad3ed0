"""Station report normalization to metric units.

Temperatures in Celsius, wind in km/h, pressure in hPa and rain in mm.
Humidity, wind direction, solar radiation, UV index and VPD are already
unit-free or metric and pass through unchanged.
"""

from dataclasses import dataclass

from ..protocol.ecowitt import StationReport
from .conversions import (
    fahrenheit_to_celsius,
    inches_to_mm,
    inhg_to_hpa,
    mph_to_kph,
)


@dataclass(frozen=True)
class Rain:
    """Rain accumulators in mm (rate in mm/h)."""
    rate: float
    event: float
    hourly: float
    daily: float
    weekly: float
    monthly: float
    yearly: float
    total: float


@dataclass(frozen=True)
class MetricMeasurement:
    temp_outdoor: float  # C
    humidity_outdoor: int  # %
    temp_indoor: float  # C
    humidity_indoor: int  # %
    wind_speed: float  # km/h
    wind_gust: float  # km/h
    wind_direction: int  # degrees
    pressure_abs: float  # hPa
    pressure_rel: float  # hPa
    rain: Rain
    solar_radiation: float  # W/m2
    uv_index: int
    vpd: float  # kPa
    battery_ok: bool


def normalize(report: StationReport) -> MetricMeasurement:
    """Convert a decoded station report to a MetricMeasurement.

    Pure and total: any well-typed report yields exactly one measurement.
    """
    rain = Rain(
        rate=inches_to_mm(report.rain_rate_in),
        event=inches_to_mm(report.rain_event_in),
        hourly=inches_to_mm(report.rain_hourly_in),
        daily=inches_to_mm(report.rain_daily_in),
        weekly=inches_to_mm(report.rain_weekly_in),
        monthly=inches_to_mm(report.rain_monthly_in),
        yearly=inches_to_mm(report.rain_yearly_in),
        total=inches_to_mm(report.rain_total_in),
    )

    return MetricMeasurement(
        temp_outdoor=fahrenheit_to_celsius(report.outdoor_temp_f),
        humidity_outdoor=report.outdoor_humidity,
        temp_indoor=fahrenheit_to_celsius(report.indoor_temp_f),
        humidity_indoor=report.indoor_humidity,
        wind_speed=mph_to_kph(report.wind_speed_mph),
        wind_gust=mph_to_kph(report.wind_gust_mph),
        wind_direction=report.wind_direction,
        pressure_abs=inhg_to_hpa(report.pressure_abs_inhg),
        pressure_rel=inhg_to_hpa(report.pressure_rel_inhg),
        rain=rain,
        solar_radiation=report.solar_radiation,
        uv_index=report.uv_index,
        vpd=report.vpd,
        battery_ok=report.battery == 0,
    )
