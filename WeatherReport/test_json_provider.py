"""Tests for reading JSON dumps back in."""
import json
from datetime import date, datetime

import pytest
from json_provider import JsonFileProvider
from json_renderer import JsonRenderer
from units import Units
from weather_codes import WeatherCode
from weather_data import Cond, Data, Day
from weather_provider import WeatherProviderError


@pytest.fixture
def dumped_report(tmp_path):
    days = tuple(
        Day(date=date(2024, 5, n), slots=(Cond(time=datetime(2024, 5, n, 12), code=WeatherCode.FOG, temp_c=5.0),))
        for n in (1, 2, 3)
    )
    data = Data(current=days[0].slots[0], forecast=days, location="Foggy Bottom")
    path = tmp_path / "report.json"
    path.write_text(JsonRenderer().render(data, Units()), encoding="utf-8")
    return path, data


def test_json_provider_reads_renderer_output(dumped_report):
    path, data = dumped_report
    assert JsonFileProvider().fetch(str(path), 3) == data


def test_json_provider_trims_days(dumped_report):
    path, _ = dumped_report
    data = JsonFileProvider().fetch(str(path), 2)
    assert [day.date for day in data.forecast] == [date(2024, 5, 1), date(2024, 5, 2)]
    assert data.location == "Foggy Bottom"


def test_json_provider_missing_file(tmp_path):
    with pytest.raises(WeatherProviderError) as exc_info:
        JsonFileProvider().fetch(str(tmp_path / "missing.json"), 3)
    assert "Unable to read" in str(exc_info.value)


def test_json_provider_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(WeatherProviderError) as exc_info:
        JsonFileProvider().fetch(str(path), 3)
    assert "Unable to decode" in str(exc_info.value)


def test_json_provider_wrong_document(tmp_path):
    path = tmp_path / "other.json"
    path.write_text(json.dumps({"hello": "world"}), encoding="utf-8")
    with pytest.raises(WeatherProviderError) as exc_info:
        JsonFileProvider().fetch(str(path), 3)
    assert "not a weather report dump" in str(exc_info.value)
