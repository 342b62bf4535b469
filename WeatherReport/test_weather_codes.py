"""Tests for weather code tables."""
import pytest
from weather_codes import CodeTable, WeatherCode, map_provider_code


@pytest.fixture
def table():
    return CodeTable("test", {"c01d": WeatherCode.SUNNY, 800: WeatherCode.SUNNY, 500: WeatherCode.LIGHT_SHOWERS})


def test_exactly_nineteen_codes():
    assert len(WeatherCode) == 19
    assert WeatherCode.UNKNOWN in WeatherCode


def test_lookup_known_codes(table):
    assert table.lookup("c01d") == WeatherCode.SUNNY
    assert table.lookup(500) == WeatherCode.LIGHT_SHOWERS
    assert map_provider_code(table, 800) == WeatherCode.SUNNY


@pytest.mark.parametrize("code", ["xyz", 999, None, "", 800.5, ["c01d"], {"a": 1}])
def test_lookup_is_total(table, code):
    """Anything not in the table, even unhashable input, maps to UNKNOWN."""
    assert table.lookup(code) == WeatherCode.UNKNOWN
    assert map_provider_code(table, code) == WeatherCode.UNKNOWN


def test_table_is_read_only(table):
    with pytest.raises(TypeError):
        table._mapping["new"] = WeatherCode.FOG


def test_table_copies_its_input():
    mapping = {1: WeatherCode.FOG}
    table = CodeTable("copy", mapping)
    mapping[2] = WeatherCode.SUNNY
    assert 2 not in table
    assert len(table) == 1


def test_contains_handles_unhashable(table):
    assert "c01d" in table
    assert ["c01d"] not in table
