"""Unit conversion services.

Imperial station units to the metric units stored in the database.
All inputs and outputs are plain floats; NaN and infinity propagate.
"""

MPH_TO_KPH = 1.60934
INCH_TO_MM = 25.4
INHG_TO_HPA = 33.863889532611


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    """Convert degrees Fahrenheit to degrees Celsius."""
    return (fahrenheit - 32.0) * 5.0 / 9.0


def mph_to_kph(mph: float) -> float:
    """Convert miles per hour to kilometers per hour."""
    return mph * MPH_TO_KPH


def inches_to_mm(inches: float) -> float:
    """Convert inches (or inches/hour) to millimeters (or mm/hour)."""
    return inches * INCH_TO_MM


def inhg_to_hpa(inhg: float) -> float:
    """Convert inches of mercury to hectopascals."""
    return inhg * INHG_TO_HPA
