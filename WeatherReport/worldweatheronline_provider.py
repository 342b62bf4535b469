"""World Weather Online provider implementation."""
import logging
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from weather_codes import CodeTable, WeatherCode
from weather_data import Astro, Cond, Data, Day
from weather_provider import HttpJsonProvider, WeatherProviderError

WWO_CODES = {
    113: WeatherCode.SUNNY,
    116: WeatherCode.PARTLY_CLOUDY,
    119: WeatherCode.CLOUDY,
    122: WeatherCode.VERY_CLOUDY,
    143: WeatherCode.FOG,
    176: WeatherCode.LIGHT_SHOWERS,
    179: WeatherCode.LIGHT_SLEET_SHOWERS,
    182: WeatherCode.LIGHT_SLEET,
    185: WeatherCode.LIGHT_SLEET,
    200: WeatherCode.THUNDERY_SHOWERS,
    227: WeatherCode.LIGHT_SNOW,
    230: WeatherCode.HEAVY_SNOW,
    248: WeatherCode.FOG,
    260: WeatherCode.FOG,
    263: WeatherCode.LIGHT_SHOWERS,
    266: WeatherCode.LIGHT_RAIN,
    281: WeatherCode.LIGHT_SLEET,
    284: WeatherCode.LIGHT_SLEET,
    293: WeatherCode.LIGHT_RAIN,
    296: WeatherCode.LIGHT_RAIN,
    299: WeatherCode.HEAVY_SHOWERS,
    302: WeatherCode.HEAVY_RAIN,
    305: WeatherCode.HEAVY_SHOWERS,
    308: WeatherCode.HEAVY_RAIN,
    311: WeatherCode.LIGHT_SLEET,
    314: WeatherCode.LIGHT_SLEET,
    317: WeatherCode.LIGHT_SLEET,
    320: WeatherCode.LIGHT_SNOW,
    323: WeatherCode.LIGHT_SNOW_SHOWERS,
    326: WeatherCode.LIGHT_SNOW_SHOWERS,
    329: WeatherCode.HEAVY_SNOW,
    332: WeatherCode.HEAVY_SNOW,
    335: WeatherCode.HEAVY_SNOW_SHOWERS,
    338: WeatherCode.HEAVY_SNOW,
    350: WeatherCode.LIGHT_SLEET,
    353: WeatherCode.LIGHT_SHOWERS,
    356: WeatherCode.HEAVY_SHOWERS,
    359: WeatherCode.HEAVY_RAIN,
    362: WeatherCode.LIGHT_SLEET_SHOWERS,
    365: WeatherCode.LIGHT_SLEET_SHOWERS,
    368: WeatherCode.LIGHT_SNOW_SHOWERS,
    371: WeatherCode.HEAVY_SNOW_SHOWERS,
    374: WeatherCode.LIGHT_SLEET_SHOWERS,
    377: WeatherCode.LIGHT_SLEET,
    386: WeatherCode.THUNDERY_SHOWERS,
    389: WeatherCode.THUNDERY_HEAVY_RAIN,
    392: WeatherCode.THUNDERY_SNOW_SHOWERS,
    395: WeatherCode.HEAVY_SNOW_SHOWERS,
}


class WorldWeatherOnlineProvider(HttpJsonProvider):
    """
    Weather provider using the World Weather Online local weather API.

    The API already groups its 3-hourly slots by local day, and reports every
    number as a string.
    """

    name = "worldweatheronline"
    BASE_URL = "https://api.worldweatheronline.com/premium/v1/weather.ashx"

    def __init__(self, api_key: Optional[str] = None, lang: str = "en", timeout: int = 10):
        super().__init__(api_key=api_key, lang=lang, timeout=timeout)
        self.codes = CodeTable("worldweatheronline", WWO_CODES)

    def fetch(self, location: str, num_days: int) -> Data:
        params: Dict[str, Any] = {
            "key": self._require_api_key("Setup instructions are at https://www.worldweatheronline.com/"),
            "q": location,
            "format": "json",
            "num_of_days": num_days,
            "tp": 3,
        }
        if self.lang and self.lang != "en":
            params["lang"] = self.lang

        response = self._get_json(self.BASE_URL, params)
        data = response.get("data") if isinstance(response, dict) else None
        if not isinstance(data, dict):
            raise WeatherProviderError("Malformed worldweatheronline response")

        requests_info = data.get("request") or []
        if not requests_info:
            errors = data.get("error") or []
            if errors and errors[0].get("msg"):
                raise WeatherProviderError(errors[0]["msg"])
            raise WeatherProviderError("Malformed worldweatheronline response")

        try:
            current_conditions = data.get("current_condition") or []
            if current_conditions:
                current = self.parse_cond(current_conditions[0], datetime.now())
            else:
                current = Cond(time=datetime.now())
            forecast = [self.parse_day(day) for day in (data.get("weather") or [])[:max(num_days, 0)]]
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}") from e

        request_info = requests_info[0]
        return Data(
            current=current,
            forecast=tuple(day for day in forecast if day.slots),
            location=f"{request_info.get('type', '')}: {request_info.get('query', location)}",
        )

    def parse_day(self, raw: Dict[str, Any]) -> Day:
        day_date = date.fromisoformat(raw["date"])
        astronomy = Astro()
        if raw.get("astronomy"):
            astro = raw["astronomy"][0]
            astronomy = Astro(
                sunrise=_clock_time(day_date, astro.get("sunrise")),
                sunset=_clock_time(day_date, astro.get("sunset")),
                moonrise=_clock_time(day_date, astro.get("moonrise")),
                moonset=_clock_time(day_date, astro.get("moonset")),
            )
        midnight = datetime.combine(day_date, time())
        return Day(
            date=day_date,
            slots=tuple(self.parse_cond(slot, midnight) for slot in raw.get("hourly") or []),
            astronomy=astronomy,
            max_temp_c=_number(raw.get("maxtempC")),
            min_temp_c=_number(raw.get("mintempC")),
        )

    def parse_cond(self, raw: Dict[str, Any], moment: datetime) -> Cond:
        """
        Map one current or hourly condition.

        Hourly entries carry an ``hhmm`` time relative to ``moment``'s day;
        the current condition has none and keeps ``moment``.
        """
        hhmm = _integer(raw.get("time"))
        if hhmm is not None:
            moment = datetime.combine(moment.date(), time(hhmm // 100, hhmm % 100))

        desc = ""
        descriptions = raw.get(f"lang_{self.lang}") or raw.get("weatherDesc") or []
        if descriptions:
            desc = descriptions[0].get("value", "")

        temp_c = _number(raw.get("tempC"))
        if temp_c is None:
            temp_c = _number(raw.get("temp_C"))

        precip_mm = _number(raw.get("precipMM"))
        visibility_km = _number(raw.get("visibility"))
        winddir = _integer(raw.get("winddirDegree"))

        return Cond(
            time=moment,
            code=self.codes.lookup(_integer(raw.get("weatherCode"))),
            desc=desc,
            temp_c=temp_c,
            feels_like_c=_number(raw.get("FeelsLikeC")),
            chance_of_rain_percent=_integer(raw.get("chanceofrain")),
            precip_m=precip_mm / 1000 if precip_mm is not None else None,
            visible_dist_m=visibility_km * 1000 if visibility_km is not None else None,
            windspeed_kmph=_number(raw.get("windspeedKmph")),
            wind_gust_kmph=_number(raw.get("WindGustKmph")),
            winddir_degree=winddir % 360 if winddir is not None and winddir >= 0 else None,
            humidity=_integer(raw.get("humidity")),
        )


def _number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _integer(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _clock_time(day_date: date, value: Optional[str]) -> Optional[datetime]:
    """Parse ``"06:45 AM"``; values such as ``"No moonrise"`` mean absent."""
    if not value:
        return None
    try:
        return datetime.combine(day_date, datetime.strptime(value.strip(), "%I:%M %p").time())
    except ValueError:
        logging.debug(f"Ignoring astronomy time {value!r}")
        return None
