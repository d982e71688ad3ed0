"""Tests for unit conversion services."""

import math

from app.services.conversions import (
    fahrenheit_to_celsius,
    inches_to_mm,
    inhg_to_hpa,
    mph_to_kph,
)


class TestFahrenheitToCelsius:
    def test_freezing_point(self):
        assert fahrenheit_to_celsius(32) == 0

    def test_boiling_point(self):
        assert fahrenheit_to_celsius(212) == 100

    def test_minus_forty_is_the_same(self):
        assert fahrenheit_to_celsius(-40) == -40

    def test_body_temperature(self):
        assert math.isclose(fahrenheit_to_celsius(98.6), 37.0, abs_tol=1e-9)


class TestMphToKph:
    def test_zero(self):
        assert mph_to_kph(0) == 0

    def test_factor(self):
        assert mph_to_kph(1) == 1.60934

    def test_negative_passes_through(self):
        assert math.isclose(mph_to_kph(-10), -16.0934)


class TestInchesToMm:
    def test_one_inch(self):
        assert inches_to_mm(1) == 25.4

    def test_zero(self):
        assert inches_to_mm(0) == 0


class TestInhgToHpa:
    def test_one_inhg(self):
        assert abs(inhg_to_hpa(1) - 33.8639) < 1e-4
        assert math.isclose(inhg_to_hpa(1), 33.863889532611, abs_tol=1e-6)

    def test_standard_atmosphere(self):
        """29.92 inHg is the standard sea-level pressure, ~1013.2 hPa."""
        assert abs(inhg_to_hpa(29.92) - 1013.21) < 0.01


class TestNonFinite:
    def test_nan_propagates(self):
        assert math.isnan(fahrenheit_to_celsius(float("nan")))
        assert math.isnan(inhg_to_hpa(float("nan")))

    def test_infinity_propagates(self):
        assert mph_to_kph(float("inf")) == float("inf")
        assert inches_to_mm(float("-inf")) == float("-inf")
