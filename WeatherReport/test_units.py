"""Tests for unit conversions."""
import pytest
from units import DistanceUnit, SpeedUnit, TempUnit, Units, UnitSystem


def test_metric_is_identity():
    units = Units.for_system(UnitSystem.METRIC)
    assert units.temp(21.5) == (21.5, "°C")
    assert units.speed(12.0) == (12.0, "km/h")


def test_imperial_temperature_and_speed():
    units = Units.for_system(UnitSystem.IMPERIAL)
    value, label = units.temp(100.0)
    assert value == pytest.approx(212.0)
    assert label == "°F"
    value, label = units.speed(16.09)
    assert value == pytest.approx(10.0)
    assert label == "mph"


def test_si_uses_kelvin_and_metres_per_second():
    units = Units.for_system(UnitSystem.SI)
    assert units.temp(0.0) == (273.16, "K")
    value, label = units.speed(36.0)
    assert value == pytest.approx(10.0)
    assert label == "m/s"


def test_metric_ms():
    units = Units.for_system(UnitSystem.METRIC_MS)
    assert units.temp_unit is TempUnit.CELSIUS
    assert units.speed_unit is SpeedUnit.MS
    assert units.distance_unit is DistanceUnit.METRIC


@pytest.mark.parametrize("kmph,force", [
    (0.0, 0), (0.99, 0), (1.0, 1), (5.9, 1), (6.0, 2), (28.9, 4),
    (29.0, 5), (117.9, 11), (118.0, 12), (200.0, 12),
])
def test_beaufort_buckets(kmph, force):
    units = Units.for_system(UnitSystem.METRIC, beaufort=True)
    assert units.speed(kmph) == (force, "Bft")


@pytest.mark.parametrize("metres,expected", [
    (0.5, (500.0, "mm")),
    (999.0, (999.0, "m")),
    (1500.0, (1.5, "km")),
])
def test_metric_distance_thresholds(metres, expected):
    value, label = Units().distance(metres)
    assert value == pytest.approx(expected[0])
    assert label == expected[1]


def test_imperial_distance_thresholds():
    units = Units.for_system(UnitSystem.IMPERIAL)
    value, label = units.distance(0.0254 * 10)
    assert (round(value, 6), label) == (10.0, "in")

    value, label = units.distance(0.0254 * 36 * 100)
    assert (round(value, 6), label) == (100.0, "yd")

    value, label = units.distance(1609.344 * 2)
    assert label == "mi"
    assert value == pytest.approx(2.0)


def test_from_names_overrides_per_quantity():
    base = Units.for_system(UnitSystem.METRIC)
    units = Units.from_names("fahrenheit", "beaufort", None, base=base)
    assert units.temp_unit is TempUnit.FAHRENHEIT
    assert units.speed_unit is SpeedUnit.BEAUFORT
    assert units.distance_unit is DistanceUnit.METRIC


def test_from_names_ignores_unknown_names():
    base = Units.for_system(UnitSystem.IMPERIAL)
    assert Units.from_names("rankine", "knots", "furlongs", base=base) == base
