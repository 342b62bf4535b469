"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from weather_codes import WeatherCode


@dataclass(frozen=True)
class Cond:
    """
    Weather at one instant, observed or predicted.

    Every field except ``time``, ``code`` and ``desc`` is None when the
    provider did not supply it. None means "no data", never zero.
    """
    time: datetime
    code: WeatherCode = WeatherCode.UNKNOWN
    desc: str = ""

    temp_c: Optional[float] = None
    feels_like_c: Optional[float] = None
    chance_of_rain_percent: Optional[int] = None  # 0-100
    precip_m: Optional[float] = None  # metres per hour
    visible_dist_m: Optional[float] = None
    windspeed_kmph: Optional[float] = None
    wind_gust_kmph: Optional[float] = None
    winddir_degree: Optional[int] = None  # 0-359, direction the wind blows from
    humidity: Optional[int] = None  # relative, 0-100

    def to_dict(self) -> Dict[str, Any]:
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result["time"] = self.time.isoformat()
        result["code"] = self.code.name
        return result

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Cond":
        values = {f.name: raw.get(f.name) for f in fields(cls) if raw.get(f.name) is not None}
        values["time"] = datetime.fromisoformat(raw["time"])
        values["code"] = WeatherCode.__members__.get(raw.get("code") or "", WeatherCode.UNKNOWN)
        return cls(**values)


@dataclass(frozen=True)
class Astro:
    """Sun and moon times for one day; None when not available."""
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    moonrise: Optional[datetime] = None
    moonset: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _iso(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "Astro":
        raw = raw or {}
        return cls(**{f.name: _parse_instant(raw.get(f.name)) for f in fields(cls)})


@dataclass(frozen=True)
class Day:
    """All slots of one local calendar day, ordered by time."""
    date: date
    slots: Tuple[Cond, ...] = ()
    astronomy: Astro = field(default_factory=Astro)
    max_temp_c: Optional[float] = None
    min_temp_c: Optional[float] = None
    max_temp_time: Optional[datetime] = None
    min_temp_time: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "slots": [slot.to_dict() for slot in self.slots],
            "astronomy": self.astronomy.to_dict(),
            "max_temp_c": self.max_temp_c,
            "min_temp_c": self.min_temp_c,
            "max_temp_time": _iso(self.max_temp_time),
            "min_temp_time": _iso(self.min_temp_time),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Day":
        return cls(
            date=date.fromisoformat(raw["date"]),
            slots=tuple(Cond.from_dict(slot) for slot in raw.get("slots") or ()),
            astronomy=Astro.from_dict(raw.get("astronomy")),
            max_temp_c=raw.get("max_temp_c"),
            min_temp_c=raw.get("min_temp_c"),
            max_temp_time=_parse_instant(raw.get("max_temp_time")),
            min_temp_time=_parse_instant(raw.get("min_temp_time")),
        )


@dataclass(frozen=True)
class LatLon:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Data:
    """Everything one provider fetch produces and one renderer consumes."""
    current: Cond
    forecast: Tuple[Day, ...] = ()
    location: str = ""
    geo_loc: Optional[LatLon] = None

    def to_dict(self) -> Dict[str, Any]:
        geo_loc = None
        if self.geo_loc is not None:
            geo_loc = {"latitude": self.geo_loc.latitude, "longitude": self.geo_loc.longitude}
        return {
            "current": self.current.to_dict(),
            "forecast": [day.to_dict() for day in self.forecast],
            "location": self.location,
            "geo_loc": geo_loc,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Data":
        geo_loc = raw.get("geo_loc")
        return cls(
            current=Cond.from_dict(raw["current"]),
            forecast=tuple(Day.from_dict(day) for day in raw.get("forecast") or ()),
            location=raw.get("location") or "",
            geo_loc=LatLon(geo_loc["latitude"], geo_loc["longitude"]) if geo_loc else None,
        )


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_instant(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None
