"""Open-Meteo hourly forecast provider implementation."""
import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from timeline import bucket_days
from weather_codes import CodeTable, WeatherCode
from weather_data import Astro, Cond, Data, Day, LatLon
from weather_provider import HttpJsonProvider, WeatherProviderError, parse_lat_lon

HOURLY_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "weather_code",
    "wind_speed_10m",
    "wind_gusts_10m",
    "wind_direction_10m",
    "precipitation",
    "precipitation_probability",
    "relative_humidity_2m",
    "visibility",
)
CURRENT_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "weather_code",
    "wind_speed_10m",
    "wind_gusts_10m",
    "wind_direction_10m",
    "relative_humidity_2m",
)
DAILY_FIELDS = ("temperature_2m_max", "temperature_2m_min", "sunrise", "sunset")
MAX_FORECAST_DAYS = 16

# WMO weather interpretation codes
WMO_CODES = {
    0: WeatherCode.SUNNY,
    1: WeatherCode.PARTLY_CLOUDY,
    2: WeatherCode.PARTLY_CLOUDY,
    3: WeatherCode.PARTLY_CLOUDY,
    45: WeatherCode.FOG,
    48: WeatherCode.FOG,
    51: WeatherCode.LIGHT_RAIN,
    53: WeatherCode.LIGHT_RAIN,
    55: WeatherCode.LIGHT_RAIN,
    56: WeatherCode.LIGHT_SLEET,
    57: WeatherCode.LIGHT_SLEET,
    61: WeatherCode.LIGHT_SHOWERS,
    63: WeatherCode.LIGHT_SHOWERS,
    65: WeatherCode.LIGHT_SHOWERS,
    66: WeatherCode.HEAVY_RAIN,
    67: WeatherCode.HEAVY_RAIN,
    71: WeatherCode.LIGHT_SNOW,
    73: WeatherCode.LIGHT_SNOW,
    75: WeatherCode.HEAVY_SNOW,
    77: WeatherCode.LIGHT_SNOW,
    80: WeatherCode.LIGHT_SHOWERS,
    81: WeatherCode.HEAVY_SHOWERS,
    82: WeatherCode.HEAVY_SHOWERS,
    85: WeatherCode.LIGHT_SNOW_SHOWERS,
    86: WeatherCode.HEAVY_SNOW_SHOWERS,
    95: WeatherCode.THUNDERY_SHOWERS,
    96: WeatherCode.THUNDERY_HEAVY_RAIN,
    99: WeatherCode.THUNDERY_HEAVY_RAIN,
}


class OpenMeteoProvider(HttpJsonProvider):
    """
    Weather provider using the Open-Meteo forecast API.

    No key is needed for non-commercial use; with a key the customer
    endpoint is used instead. Only ``"lat,lon"`` locations are supported.
    """

    name = "openmeteo"
    BASE_URL = "https://api.open-meteo.com/v1/forecast"
    CUSTOMER_URL = "https://customer-api.open-meteo.com/v1/forecast"

    def __init__(self, api_key: Optional[str] = None, lang: str = "en", timeout: int = 10):
        super().__init__(api_key=api_key, lang=lang, timeout=timeout)
        self.codes = CodeTable("openmeteo", WMO_CODES)

    def fetch(self, location: str, num_days: int) -> Data:
        lat_lon = parse_lat_lon(location)
        if lat_lon is None:
            raise WeatherProviderError(
                f"openmeteo needs a location of the form 'lat,lon', got {location!r}"
            )

        params: Dict[str, Any] = {
            "latitude": lat_lon[0],
            "longitude": lat_lon[1],
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "daily": ",".join(DAILY_FIELDS),
            "timeformat": "unixtime",
            "timezone": "auto",
            "forecast_days": min(max(num_days, 1), MAX_FORECAST_DAYS),
        }
        url = self.BASE_URL
        if self.api_key:
            url = self.CUSTOMER_URL
            params["apikey"] = self.api_key

        data = self._get_json(url, params)
        if not isinstance(data, dict):
            raise WeatherProviderError(f"Unexpected openmeteo response: {str(data)[:200]}")
        if data.get("error"):
            raise WeatherProviderError(f"openmeteo API error: {data.get('reason', 'Unknown error')}")

        tz = timezone(timedelta(seconds=data.get("utc_offset_seconds") or 0))
        try:
            current = self.parse_current(data.get("current") or {}, tz)
            conds = self.parse_hourly(data.get("hourly") or {}, tz)
            forecast = self._attach_daily(bucket_days(conds, num_days), data.get("daily") or {}, tz)
        except (KeyError, ValueError, TypeError, IndexError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}") from e

        geo_loc = None
        if data.get("latitude") is not None and data.get("longitude") is not None:
            geo_loc = LatLon(data["latitude"], data["longitude"])

        return Data(current=current, forecast=tuple(forecast), location=location, geo_loc=geo_loc)

    def parse_current(self, current: Dict[str, Any], tz: timezone) -> Cond:
        return Cond(
            time=datetime.fromtimestamp(current["time"], tz),
            code=self.codes.lookup(current.get("weather_code")),
            temp_c=current.get("temperature_2m"),
            feels_like_c=current.get("apparent_temperature"),
            windspeed_kmph=current.get("wind_speed_10m"),
            wind_gust_kmph=current.get("wind_gusts_10m"),
            winddir_degree=current.get("wind_direction_10m"),
            humidity=current.get("relative_humidity_2m"),
        )

    def parse_hourly(self, hourly: Dict[str, Any], tz: timezone) -> List[Cond]:
        """Turn Open-Meteo's column arrays into one Cond per hour."""
        times = hourly.get("time") or []
        columns = {name: hourly.get(name) or [None] * len(times) for name in HOURLY_FIELDS}
        conds = []
        for index, timestamp in enumerate(times):
            row = {name: values[index] for name, values in columns.items()}
            precip_m = None
            if row["precipitation"] is not None:
                precip_m = row["precipitation"] / 1000
            conds.append(Cond(
                time=datetime.fromtimestamp(timestamp, tz),
                code=self.codes.lookup(row["weather_code"]),
                temp_c=row["temperature_2m"],
                feels_like_c=row["apparent_temperature"],
                windspeed_kmph=row["wind_speed_10m"],
                wind_gust_kmph=row["wind_gusts_10m"],
                winddir_degree=row["wind_direction_10m"],
                precip_m=precip_m,
                chance_of_rain_percent=row["precipitation_probability"],
                humidity=row["relative_humidity_2m"],
                visible_dist_m=row["visibility"],
            ))
        return conds

    @staticmethod
    def _attach_daily(days: List[Day], daily: Dict[str, Any], tz: timezone) -> List[Day]:
        """Add sunrise/sunset and min/max temperature from the daily block."""
        by_date = {}
        for index, timestamp in enumerate(daily.get("time") or []):
            by_date[datetime.fromtimestamp(timestamp, tz).date()] = index

        def column(name, index):
            values = daily.get(name) or []
            return values[index] if index < len(values) else None

        result = []
        for day in days:
            index = by_date.get(day.date)
            if index is None:
                result.append(day)
                continue
            sunrise = column("sunrise", index)
            sunset = column("sunset", index)
            result.append(replace(
                day,
                astronomy=Astro(
                    sunrise=datetime.fromtimestamp(sunrise, tz) if sunrise else None,
                    sunset=datetime.fromtimestamp(sunset, tz) if sunset else None,
                ),
                max_temp_c=column("temperature_2m_max", index),
                min_temp_c=column("temperature_2m_min", index),
            ))
        return result
