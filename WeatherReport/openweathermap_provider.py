"""OpenWeather 5 day / 3 hour forecast provider implementation."""
import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from timeline import bucket_days
from weather_codes import CodeTable, WeatherCode
from weather_data import Astro, Cond, Data, LatLon
from weather_provider import HttpJsonProvider, WeatherProviderError, parse_lat_lon


def _owm_codes() -> CodeTable:
    thundery_showers = (200, 201, 210, 230, 231)
    thundery_heavy_rain = (202, 211, 212, 221, 232)
    light_rain = (300, 301, 310, 311, 313, 321)
    heavy_rain = (302, 312, 314)
    fog = (701, 711, 721, 741)
    mapping = {}
    for ids, code in (
        (thundery_showers, WeatherCode.THUNDERY_SHOWERS),
        (thundery_heavy_rain, WeatherCode.THUNDERY_HEAVY_RAIN),
        (light_rain, WeatherCode.LIGHT_RAIN),
        (heavy_rain, WeatherCode.HEAVY_RAIN),
        (fog, WeatherCode.FOG),
    ):
        mapping.update(dict.fromkeys(ids, code))
    mapping.update({
        500: WeatherCode.LIGHT_SHOWERS,
        501: WeatherCode.LIGHT_SHOWERS,
        502: WeatherCode.HEAVY_SHOWERS,
        503: WeatherCode.HEAVY_SHOWERS,
        504: WeatherCode.HEAVY_SHOWERS,
        511: WeatherCode.LIGHT_SLEET,
        520: WeatherCode.LIGHT_SHOWERS,
        521: WeatherCode.LIGHT_SHOWERS,
        522: WeatherCode.HEAVY_SHOWERS,
        531: WeatherCode.HEAVY_SHOWERS,
        600: WeatherCode.LIGHT_SNOW,
        601: WeatherCode.LIGHT_SNOW,
        602: WeatherCode.HEAVY_SNOW,
        611: WeatherCode.LIGHT_SLEET,
        612: WeatherCode.LIGHT_SLEET_SHOWERS,
        615: WeatherCode.LIGHT_SLEET,
        616: WeatherCode.LIGHT_SLEET,
        620: WeatherCode.LIGHT_SNOW_SHOWERS,
        621: WeatherCode.LIGHT_SNOW_SHOWERS,
        622: WeatherCode.HEAVY_SNOW_SHOWERS,
        800: WeatherCode.SUNNY,
        801: WeatherCode.PARTLY_CLOUDY,
        802: WeatherCode.CLOUDY,
        803: WeatherCode.VERY_CLOUDY,
        804: WeatherCode.VERY_CLOUDY,
    })
    # sand, dust, ash, squalls, tornado and the 9xx extreme/wind ids have no icon
    return CodeTable("openweathermap", mapping)


class OpenWeatherMapProvider(HttpJsonProvider):
    """
    Weather provider using the OpenWeather 5 day / 3 hour forecast API.

    Uses the free forecast API: https://openweathermap.org/forecast5
    The first entry of the forecast list doubles as the current condition.
    """

    name = "openweathermap"
    BASE_URL = "https://api.openweathermap.org/data/2.5/forecast"

    def __init__(self, api_key: Optional[str] = None, lang: str = "en", timeout: int = 10):
        super().__init__(api_key=api_key, lang=lang, timeout=timeout)
        self.codes = _owm_codes()

    def fetch(self, location: str, num_days: int) -> Data:
        api_key = self._require_api_key(
            "You have to register for one at https://home.openweathermap.org/users/sign_up"
        )
        params: Dict[str, Any] = {"appid": api_key, "units": "metric", "lang": self.lang}
        params.update(self._location_params(location))

        data = self._get_json(self.BASE_URL, params)
        if not isinstance(data, dict) or str(data.get("cod")) != "200":
            raise WeatherProviderError(f"Erroneous openweathermap response: {data}")

        entries = data.get("list") or []
        if not entries:
            logging.error("Response missing 'list' array")
            raise WeatherProviderError("Response missing 'list' array")

        city = data.get("city") or {}
        tz = timezone(timedelta(seconds=city.get("timezone") or 0))
        try:
            conds = [self.parse_cond(entry, tz) for entry in entries]
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}") from e

        forecast = tuple(bucket_days(conds, num_days))
        if forecast and city.get("sunrise") and city.get("sunset"):
            astronomy = Astro(
                sunrise=datetime.fromtimestamp(city["sunrise"], tz),
                sunset=datetime.fromtimestamp(city["sunset"], tz),
            )
            forecast = (replace(forecast[0], astronomy=astronomy),) + forecast[1:]

        coord = city.get("coord") or {}
        geo_loc = None
        if coord.get("lat") is not None and coord.get("lon") is not None:
            geo_loc = LatLon(coord["lat"], coord["lon"])

        location_name = ", ".join(part for part in (city.get("name"), city.get("country")) if part)
        logging.info(f"Parsed {len(conds)} openweathermap entries into {len(forecast)} day(s)")
        return Data(
            current=conds[0],
            forecast=forecast,
            location=location_name or location,
            geo_loc=geo_loc,
        )

    def parse_cond(self, entry: Dict[str, Any], tz: timezone) -> Cond:
        """Map one forecast list entry to a Cond in the city's local time."""
        weather = (entry.get("weather") or [{}])[0]
        main = entry.get("main") or {}
        wind = entry.get("wind") or {}
        rain = entry.get("rain") or {}

        precip_m = None
        if rain.get("3h") is not None:
            precip_m = rain["3h"] / 1000 / 3

        chance_of_rain = None
        if entry.get("pop") is not None:
            chance_of_rain = int(round(entry["pop"] * 100))

        winddir = None
        if wind.get("deg") is not None:
            winddir = int(wind["deg"]) % 360

        return Cond(
            time=datetime.fromtimestamp(entry["dt"], tz),
            code=self.codes.lookup(weather.get("id")),
            desc=weather.get("description", ""),
            temp_c=main.get("temp"),
            feels_like_c=main.get("feels_like"),
            humidity=main.get("humidity"),
            chance_of_rain_percent=chance_of_rain,
            precip_m=precip_m,
            visible_dist_m=entry.get("visibility"),
            windspeed_kmph=_kmph(wind.get("speed")),
            wind_gust_kmph=_kmph(wind.get("gust")),
            winddir_degree=winddir,
        )

    @staticmethod
    def _location_params(location: str) -> Dict[str, str]:
        lat_lon = parse_lat_lon(location)
        if lat_lon:
            return {"lat": lat_lon[0], "lon": lat_lon[1]}
        if location[:1].isdigit():
            return {"zip": location}
        return {"q": location}


def _kmph(metres_per_second: Optional[float]) -> Optional[float]:
    if metres_per_second is None:
        return None
    return metres_per_second * 3.6
