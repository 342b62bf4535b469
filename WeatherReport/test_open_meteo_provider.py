"""Tests for the Open-Meteo provider."""
from datetime import date, timedelta
from unittest.mock import Mock, patch

import pytest
from open_meteo_provider import OpenMeteoProvider
from weather_codes import WeatherCode
from weather_provider import WeatherProviderError

# 2024-05-01 00:00 UTC
BASE_TS = 1714521600
HOUR = 3600


@pytest.fixture
def sample_response():
    """Sample forecast for a location at UTC+1, hourly data cut down to four rows."""
    return {
        "latitude": 47.38,
        "longitude": 8.54,
        "utc_offset_seconds": HOUR,
        "current": {
            "time": BASE_TS + 5 * HOUR,
            "temperature_2m": 9.5,
            "apparent_temperature": 7.1,
            "weather_code": 3,
            "wind_speed_10m": 11.2,
            "wind_gusts_10m": 25.0,
            "wind_direction_10m": 200,
            "relative_humidity_2m": 81,
        },
        "hourly": {
            "time": [BASE_TS + 5 * HOUR, BASE_TS + 11 * HOUR, BASE_TS + 17 * HOUR, BASE_TS + 23 * HOUR],
            "temperature_2m": [9.5, 15.0, 13.2, 8.0],
            "apparent_temperature": [7.1, 14.0, 12.0, 6.5],
            "weather_code": [3, 61, 95, 1234],
            "wind_speed_10m": [11.2, 14.0, 9.0, 4.0],
            "wind_gusts_10m": [25.0, 30.0, 20.0, 10.0],
            "wind_direction_10m": [200, 210, 220, 230],
            "precipitation": [0.0, 1.2, 3.5, 0.0],
            "precipitation_probability": [5, 60, 90, 10],
            "relative_humidity_2m": [81, 70, 75, 90],
            "visibility": [24000.0, 18000.0, 9000.0, 20000.0],
        },
        "daily": {
            "time": [BASE_TS - HOUR, BASE_TS + 23 * HOUR],
            "temperature_2m_max": [16.0, 18.0],
            "temperature_2m_min": [6.0, 7.0],
            "sunrise": [BASE_TS + 4 * HOUR, BASE_TS + 28 * HOUR],
            "sunset": [BASE_TS + 19 * HOUR, BASE_TS + 43 * HOUR],
        },
    }


def mock_ok(payload):
    mock_response = Mock()
    mock_response.ok = True
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    return mock_response


def test_open_meteo_success(sample_response):
    provider = OpenMeteoProvider()
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok(sample_response)
        data = provider.fetch("47.38,8.54", 3)

    assert mock_get.call_args[0][0] == OpenMeteoProvider.BASE_URL
    params = mock_get.call_args[1]["params"]
    assert params["timeformat"] == "unixtime"
    assert params["timezone"] == "auto"
    assert params["forecast_days"] == 3
    assert "apikey" not in params

    assert data.location == "47.38,8.54"
    assert data.geo_loc.longitude == 8.54
    assert data.current.code == WeatherCode.PARTLY_CLOUDY
    assert data.current.precip_m is None
    assert data.current.time.utcoffset() == timedelta(hours=1)

    assert [day.date for day in data.forecast] == [date(2024, 5, 1), date(2024, 5, 2)]
    first = data.forecast[0]
    assert [slot.time.hour for slot in first.slots] == [6, 12, 18]
    assert first.max_temp_c == 16.0
    assert first.min_temp_c == 6.0
    assert first.astronomy.sunrise.hour == 5
    assert first.astronomy.sunset.hour == 20

    noon = first.slots[1]
    assert noon.code == WeatherCode.LIGHT_SHOWERS
    assert noon.precip_m == pytest.approx(0.0012)
    assert noon.chance_of_rain_percent == 60
    assert noon.visible_dist_m == 18000.0
    assert first.slots[2].code == WeatherCode.THUNDERY_SHOWERS
    assert data.forecast[1].slots[0].code == WeatherCode.UNKNOWN


def test_open_meteo_with_api_key_uses_customer_endpoint(sample_response):
    provider = OpenMeteoProvider(api_key="secret")
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok(sample_response)
        provider.fetch("47.38,8.54", 30)

    assert mock_get.call_args[0][0] == OpenMeteoProvider.CUSTOMER_URL
    params = mock_get.call_args[1]["params"]
    assert params["apikey"] == "secret"
    assert params["forecast_days"] == 16


def test_open_meteo_missing_columns_are_none(sample_response):
    del sample_response["hourly"]["visibility"]
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok(sample_response)
        data = OpenMeteoProvider().fetch("47.38,8.54", 1)

    assert len(data.forecast) == 1
    assert all(slot.visible_dist_m is None for slot in data.forecast[0].slots)


def test_open_meteo_needs_coordinates():
    with pytest.raises(WeatherProviderError) as exc_info:
        OpenMeteoProvider().fetch("Zurich", 3)
    assert "lat,lon" in str(exc_info.value)


def test_open_meteo_reported_error():
    with patch('weather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_ok({"error": True, "reason": "Latitude must be in range"})

        with pytest.raises(WeatherProviderError) as exc_info:
            OpenMeteoProvider().fetch("147.38,8.54", 3)

    assert "Latitude must be in range" in str(exc_info.value)
