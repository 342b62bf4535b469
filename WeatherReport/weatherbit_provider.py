"""Weatherbit.io provider implementation."""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timeline import bucket_days, merge_today, replace_first_day_slots
from weather_codes import CodeTable, WeatherCode
from weather_data import Cond, Data, LatLon
from weather_provider import HttpJsonProvider, WeatherProviderError, parse_lat_lon


def _weatherbit_codes() -> CodeTable:
    by_icon = {
        "t01": WeatherCode.THUNDERY_SHOWERS,
        "t02": WeatherCode.THUNDERY_SHOWERS,
        "t03": WeatherCode.THUNDERY_HEAVY_RAIN,
        "t04": WeatherCode.THUNDERY_SHOWERS,
        "t05": WeatherCode.THUNDERY_SNOW_SHOWERS,
        "d01": WeatherCode.LIGHT_SHOWERS,
        "d02": WeatherCode.LIGHT_SHOWERS,
        "d03": WeatherCode.LIGHT_SHOWERS,
        "r01": WeatherCode.LIGHT_RAIN,
        "r02": WeatherCode.LIGHT_RAIN,
        "r03": WeatherCode.HEAVY_RAIN,
        "r04": WeatherCode.HEAVY_RAIN,
        "r05": WeatherCode.LIGHT_SHOWERS,
        "r06": WeatherCode.HEAVY_SHOWERS,
        "u00": WeatherCode.HEAVY_SHOWERS,
        "s01": WeatherCode.LIGHT_SNOW,
        "s02": WeatherCode.LIGHT_SNOW,
        "s03": WeatherCode.HEAVY_SNOW,
        "s04": WeatherCode.HEAVY_SNOW,
        "s05": WeatherCode.HEAVY_SNOW,
        "a01": WeatherCode.FOG,
        "a02": WeatherCode.FOG,
        "a03": WeatherCode.FOG,
        "a04": WeatherCode.FOG,
        "a05": WeatherCode.FOG,
        "a06": WeatherCode.FOG,
        "c01": WeatherCode.SUNNY,
        "c02": WeatherCode.PARTLY_CLOUDY,
        "c03": WeatherCode.PARTLY_CLOUDY,
        "c04": WeatherCode.VERY_CLOUDY,
    }
    # icons come in a day ("d") and a night ("n") variant
    mapping = {}
    for icon, code in by_icon.items():
        mapping[icon + "d"] = code
        mapping[icon + "n"] = code
    return CodeTable("weatherbit.io", mapping)


class WeatherbitProvider(HttpJsonProvider):
    """
    Weather provider using the weatherbit.io 3-hourly forecast API.

    The forecast only starts at the next slot, so the hours of today that
    already passed are fetched from the hourly history API in a background
    thread and merged into the first forecast day.
    """

    name = "weatherbit.io"
    FORECAST_URL = "https://api.weatherbit.io/v2.0/forecast/3hourly"
    HISTORY_URL = "https://api.weatherbit.io/v2.0/history/hourly"

    def __init__(self, api_key: Optional[str] = None, lang: str = "en", timeout: int = 10):
        super().__init__(api_key=api_key, lang=lang, timeout=timeout)
        self.codes = _weatherbit_codes()

    def fetch(self, location: str, num_days: int) -> Data:
        self._require_api_key("You have to register for one at https://www.weatherbit.io/account/create")

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="weatherbit-today") as executor:
            history_future = executor.submit(self.fetch_history, location, date.today())
            response = self._request(self.FORECAST_URL, location, {"days": num_days})

            tz = _zone(response)
            entries = response.get("data") or []
            if not entries:
                raise WeatherProviderError("Response missing 'data' array")
            try:
                conds = [self.parse_cond(entry, tz) for entry in entries]
            except (KeyError, ValueError, TypeError) as e:
                logging.error(f"Failed to parse API response: {e}", exc_info=True)
                raise WeatherProviderError(f"Failed to parse response: {str(e)}") from e

            forecast = tuple(bucket_days(conds, num_days))
            # A failed history request aborts the whole fetch.
            history = history_future.result()

        if forecast:
            today = [cond for cond in history if cond.time.date() == forecast[0].date]
            if today:
                forecast = replace_first_day_slots(forecast, merge_today(today, forecast[0].slots))
            else:
                logging.info(f"No history for {forecast[0].date} among {len(history)} slot(s); not merging")

        location_name, geo_loc = _describe_location(response, location)
        return Data(current=conds[0], forecast=forecast, location=location_name, geo_loc=geo_loc)

    def fetch_history(self, location: str, host_today: date) -> List[Cond]:
        """
        Fetch the hourly history around ``host_today``.

        The location's date can be a day ahead of or behind the host's, so the
        window spans host yesterday up to the day after host tomorrow. The
        caller picks the slots of the day it needs.

        Returns:
            Slots ordered by time, in the location's local time
        """
        params = {
            "start_date": (host_today - timedelta(days=1)).isoformat(),
            "end_date": (host_today + timedelta(days=2)).isoformat(),
        }
        response = self._request(self.HISTORY_URL, location, params)
        tz = _zone(response)
        try:
            conds = [self.parse_cond(entry, tz) for entry in response.get("data") or []]
        except (KeyError, ValueError, TypeError) as e:
            raise WeatherProviderError(f"Failed to parse todays weather data: {str(e)}") from e

        if not conds:
            logging.info("weatherbit.io returned no history")
        return sorted(conds, key=lambda cond: cond.time)

    def parse_cond(self, entry: Dict[str, Any], tz: Optional[ZoneInfo]) -> Cond:
        """Map one data point; ``timestamp_local`` is wall-clock time in ``tz``."""
        if not entry.get("timestamp_local"):
            raise ValueError("weatherbit.io data point without timestamp_local")
        moment = datetime.fromisoformat(entry["timestamp_local"])
        if tz is not None:
            moment = moment.replace(tzinfo=tz)

        weather = entry.get("weather") or {}

        chance_of_rain = None
        pop = entry.get("pop")
        if pop is not None and 0 <= pop <= 100:
            chance_of_rain = int(pop)

        precip_m = None
        if entry.get("precip") is not None and entry["precip"] >= 0:
            precip_m = entry["precip"] / 1000

        winddir = None
        if entry.get("wind_dir") is not None and entry["wind_dir"] >= 0:
            winddir = int(entry["wind_dir"]) % 360

        humidity = None
        rh = entry.get("rh")
        if rh is not None and 0 <= rh <= 100:
            humidity = int(rh)

        visibility = None
        if entry.get("vis") is not None and entry["vis"] >= 0:
            visibility = entry["vis"] * 1000

        return Cond(
            time=moment,
            code=self.codes.lookup(weather.get("icon")),
            desc=weather.get("description") or "",
            temp_c=entry.get("temp"),
            feels_like_c=entry.get("app_temp"),
            chance_of_rain_percent=chance_of_rain,
            precip_m=precip_m,
            visible_dist_m=visibility,
            windspeed_kmph=_kmph(entry.get("wind_spd")),
            wind_gust_kmph=_kmph(entry.get("wind_gust_spd")),
            winddir_degree=winddir,
            humidity=humidity,
        )

    def _request(self, url: str, location: str, extra: Dict[str, Any]) -> Dict[str, Any]:
        params: Dict[str, Any] = {"units": "M", "lang": self.lang, "key": self.api_key}
        lat_lon = parse_lat_lon(location)
        if lat_lon:
            params["lat"], params["lon"] = lat_lon
        else:
            params["city"] = location
        params.update(extra)

        data = self._get_json(url, params)
        if not isinstance(data, dict):
            raise WeatherProviderError(f"Unexpected weatherbit.io response: {str(data)[:200]}")
        if data.get("error"):
            raise WeatherProviderError(f"weatherbit.io API error: {data['error']}")
        return data


def _zone(response: Dict[str, Any]) -> Optional[ZoneInfo]:
    name = response.get("timezone")
    if not name:
        logging.warning("No timezone set in weatherbit.io response, using local time")
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logging.warning(f"Unknown timezone {name!r} in weatherbit.io response, using local time")
        return None


def _describe_location(response: Dict[str, Any], location: str) -> Tuple[str, Optional[LatLon]]:
    try:
        lat = float(response["lat"])
        lon = float(response["lon"])
    except (KeyError, TypeError, ValueError):
        logging.warning("No coordinates in weatherbit.io response")
        return response.get("city_name") or location, None

    geo_loc = LatLon(lat, lon)
    if response.get("city_name"):
        return f"{response['city_name']} ({lat:f},{lon:f})", geo_loc
    return f"{lat:f},{lon:f}", geo_loc


def _kmph(metres_per_second: Optional[float]) -> Optional[float]:
    if metres_per_second is None or metres_per_second < 0:
        return None
    return metres_per_second * 3.6
