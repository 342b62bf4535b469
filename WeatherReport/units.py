"""Unit systems for rendering temperature, speed and distance."""
from bisect import bisect_right
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

# Lower bounds (km/h) of Beaufort forces 1..12
BEAUFORT_THRESHOLDS_KMH = (1, 6, 12, 20, 29, 39, 50, 62, 75, 89, 103, 118)

METRES_PER_INCH = 0.0254
INCHES_PER_YARD = 3 * 12
INCHES_PER_MILE = 8 * 10 * 22 * 36


class UnitSystem(Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"
    SI = "si"
    METRIC_MS = "metric-ms"


class TempUnit(Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"
    KELVIN = "kelvin"


class SpeedUnit(Enum):
    KMH = "kmh"
    MPH = "mph"
    MS = "ms"
    BEAUFORT = "beaufort"


class DistanceUnit(Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclass(frozen=True)
class Units:
    """
    Output units chosen for one rendering run.

    Values are stored internally as degrees Celsius, km/h and metres; the
    conversion methods return ``(value, label)`` without any rounding so the
    caller decides how to format the number.
    """
    temp_unit: TempUnit = TempUnit.CELSIUS
    speed_unit: SpeedUnit = SpeedUnit.KMH
    distance_unit: DistanceUnit = DistanceUnit.METRIC

    @classmethod
    def for_system(cls, system: UnitSystem, beaufort: bool = False) -> "Units":
        if system is UnitSystem.IMPERIAL:
            units = cls(TempUnit.FAHRENHEIT, SpeedUnit.MPH, DistanceUnit.IMPERIAL)
        elif system is UnitSystem.SI:
            units = cls(TempUnit.KELVIN, SpeedUnit.MS, DistanceUnit.METRIC)
        elif system is UnitSystem.METRIC_MS:
            units = cls(TempUnit.CELSIUS, SpeedUnit.MS, DistanceUnit.METRIC)
        else:
            units = cls(TempUnit.CELSIUS, SpeedUnit.KMH, DistanceUnit.METRIC)
        if beaufort:
            units = replace(units, speed_unit=SpeedUnit.BEAUFORT)
        return units

    @classmethod
    def from_names(
        cls,
        temp: Optional[str] = None,
        speed: Optional[str] = None,
        distance: Optional[str] = None,
        base: Optional["Units"] = None,
    ) -> "Units":
        """
        Build units from per-quantity names such as ``"fahrenheit"``.

        Missing or unrecognised names keep the unit of ``base`` (metric by
        default) for that quantity.
        """
        units = base or cls()
        temp_unit = _enum_or_none(TempUnit, temp)
        speed_unit = _enum_or_none(SpeedUnit, speed)
        distance_unit = _enum_or_none(DistanceUnit, distance)
        return cls(
            temp_unit or units.temp_unit,
            speed_unit or units.speed_unit,
            distance_unit or units.distance_unit,
        )

    def temp(self, celsius: float) -> Tuple[float, str]:
        if self.temp_unit is TempUnit.FAHRENHEIT:
            return celsius * 1.8 + 32, "°F"
        if self.temp_unit is TempUnit.KELVIN:
            return celsius + 273.16, "K"
        return celsius, "°C"

    def speed(self, kmph: float) -> Tuple[float, str]:
        if self.speed_unit is SpeedUnit.MPH:
            return kmph / 1.609, "mph"
        if self.speed_unit is SpeedUnit.MS:
            return kmph / 3.6, "m/s"
        if self.speed_unit is SpeedUnit.BEAUFORT:
            return bisect_right(BEAUFORT_THRESHOLDS_KMH, kmph), "Bft"
        return kmph, "km/h"

    def distance(self, metres: float) -> Tuple[float, str]:
        if self.distance_unit is DistanceUnit.IMPERIAL:
            inches = metres / METRES_PER_INCH
            if inches < INCHES_PER_YARD:
                return inches, "in"
            if inches < INCHES_PER_MILE:
                return inches / INCHES_PER_YARD, "yd"
            return inches / INCHES_PER_MILE, "mi"
        if metres < 1:
            return metres * 1000, "mm"
        if metres < 1000:
            return metres, "m"
        return metres / 1000, "km"


def _enum_or_none(enum_cls, name: Optional[str]):
    if not name:
        return None
    try:
        return enum_cls(name.lower())
    except ValueError:
        return None
