"""Tests for the OpenWeatherMap provider."""
from datetime import date, timedelta, timezone
from unittest.mock import Mock, patch

import pytest
import requests
from openweathermap_provider import OpenWeatherMapProvider
from weather_codes import WeatherCode
from weather_data import Data
from weather_provider import WeatherProviderError

# 2024-05-01 00:00 UTC
BASE_TS = 1714521600


def entry(offset_hours, weather_id=800, **extra):
    item = {
        "dt": BASE_TS + offset_hours * 3600,
        "main": {"temp": 12.3, "feels_like": 11.0, "humidity": 71},
        "weather": [{"id": weather_id, "main": "Clear", "description": "clear sky"}],
        "wind": {"speed": 5.0, "deg": 400, "gust": 8.0},
        "visibility": 10000,
        "pop": 0.25,
    }
    item.update(extra)
    return item


@pytest.fixture
def sample_forecast_response():
    """Sample 5 day / 3 hour forecast for a city at UTC+4."""
    return {
        "cod": "200",
        "message": 0,
        "cnt": 4,
        "list": [
            entry(15, rain={"3h": 0.9}),
            entry(18, weather_id=501),
            entry(21, weather_id=781),
            entry(24),
        ],
        "city": {
            "name": "Testville",
            "country": "DE",
            "coord": {"lat": 52.5, "lon": 13.4},
            "timezone": 14400,
            "sunrise": BASE_TS + 3 * 3600,
            "sunset": BASE_TS + 18 * 3600,
        },
    }


@pytest.fixture
def provider():
    return OpenWeatherMapProvider(api_key="test_key", lang="de", timeout=5)


def mock_ok(payload):
    mock_response = Mock()
    mock_response.ok = True
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    return mock_response


def test_openweathermap_success(provider, sample_forecast_response):
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok(sample_forecast_response)

        data = provider.fetch("52.5,13.4", 3)

    assert isinstance(data, Data)
    assert data.location == "Testville, DE"
    assert data.geo_loc.latitude == 52.5
    # 21:00 UTC is already the next day at UTC+4
    assert [day.date for day in data.forecast] == [date(2024, 5, 1), date(2024, 5, 2)]
    assert len(data.forecast[0].slots) == 2
    assert data.forecast[0].astronomy.sunrise < data.forecast[0].astronomy.sunset

    current = data.current
    assert current.time.utcoffset() == timedelta(hours=4)
    assert current.time.hour == 19
    assert current.code == WeatherCode.SUNNY
    assert current.desc == "clear sky"
    assert current.temp_c == 12.3
    assert current.windspeed_kmph == pytest.approx(18.0)
    assert current.wind_gust_kmph == pytest.approx(28.8)
    assert current.winddir_degree == 40
    assert current.chance_of_rain_percent == 25
    assert current.precip_m == pytest.approx(0.0003)
    assert current.visible_dist_m == 10000
    assert current.humidity == 71

    params = mock_get.call_args[1]["params"]
    assert params["lat"] == "52.5"
    assert params["lon"] == "13.4"
    assert params["appid"] == "test_key"
    assert params["lang"] == "de"
    assert mock_get.call_args[1]["timeout"] == 5


def test_openweathermap_precipitation_absent_is_none(provider, sample_forecast_response):
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok(sample_forecast_response)
        data = provider.fetch("Testville", 3)

    assert data.forecast[0].slots[1].precip_m is None
    assert data.forecast[0].slots[1].code == WeatherCode.LIGHT_SHOWERS
    # tornado has no canonical code
    assert data.forecast[1].slots[0].code == WeatherCode.UNKNOWN


def test_openweathermap_location_params():
    assert OpenWeatherMapProvider._location_params("1.5,-2") == {"lat": "1.5", "lon": "-2"}
    assert OpenWeatherMapProvider._location_params("10115,de") == {"zip": "10115,de"}
    assert OpenWeatherMapProvider._location_params("Berlin") == {"q": "Berlin"}


def test_openweathermap_requires_api_key():
    with pytest.raises(WeatherProviderError) as exc_info:
        OpenWeatherMapProvider().fetch("Berlin", 3)
    assert "No openweathermap API key" in str(exc_info.value)


def test_openweathermap_http_error(provider):
    with patch('weather_provider.requests.get') as mock_get:
        mock_response = Mock()
        mock_response.ok = False
        mock_response.status_code = 401
        mock_response.json.return_value = {"cod": 401, "message": "Invalid API key"}
        mock_get.return_value = mock_response

        with pytest.raises(WeatherProviderError) as exc_info:
            provider.fetch("Berlin", 3)

    assert "401" in str(exc_info.value)
    assert "Invalid API key" in str(exc_info.value)


def test_openweathermap_network_error(provider):
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(WeatherProviderError) as exc_info:
            provider.fetch("Berlin", 3)

    assert "Network error" in str(exc_info.value)


def test_openweathermap_invalid_json(provider):
    with patch('weather_provider.requests.get') as mock_get:
        mock_response = Mock()
        mock_response.ok = True
        mock_response.status_code = 200
        mock_response.text = "<html>oops</html>"
        mock_response.json.side_effect = ValueError("Invalid JSON")
        mock_get.return_value = mock_response

        with pytest.raises(WeatherProviderError) as exc_info:
            provider.fetch("Berlin", 3)

    assert "Failed to decode" in str(exc_info.value)


def test_openweathermap_bad_cod(provider):
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok({"cod": "404", "message": "city not found"})

        with pytest.raises(WeatherProviderError) as exc_info:
            provider.fetch("Nowhere", 3)

    assert "Erroneous" in str(exc_info.value)


def test_openweathermap_empty_list(provider):
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok({"cod": "200", "list": [], "city": {}})

        with pytest.raises(WeatherProviderError) as exc_info:
            provider.fetch("Berlin", 3)

    assert "list" in str(exc_info.value)


def test_openweathermap_utc_city(provider, sample_forecast_response):
    sample_forecast_response["city"]["timezone"] = 0
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok(sample_forecast_response)
        data = provider.fetch("Berlin", 3)

    assert data.current.time.tzinfo == timezone.utc
    assert [day.date for day in data.forecast] == [date(2024, 5, 1), date(2024, 5, 2)]
    assert [len(day.slots) for day in data.forecast] == [3, 1]
