"""Canonical weather condition codes and per-provider lookup tables."""
import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Hashable, Mapping


class WeatherCode(Enum):
    """Provider-independent weather conditions every renderer can draw."""
    UNKNOWN = "unknown"
    CLOUDY = "cloudy"
    VERY_CLOUDY = "very_cloudy"
    FOG = "fog"
    LIGHT_RAIN = "light_rain"
    HEAVY_RAIN = "heavy_rain"
    LIGHT_SHOWERS = "light_showers"
    HEAVY_SHOWERS = "heavy_showers"
    LIGHT_SLEET = "light_sleet"
    LIGHT_SLEET_SHOWERS = "light_sleet_showers"
    LIGHT_SNOW = "light_snow"
    HEAVY_SNOW = "heavy_snow"
    LIGHT_SNOW_SHOWERS = "light_snow_showers"
    HEAVY_SNOW_SHOWERS = "heavy_snow_showers"
    PARTLY_CLOUDY = "partly_cloudy"
    SUNNY = "sunny"
    THUNDERY_SHOWERS = "thundery_showers"
    THUNDERY_HEAVY_RAIN = "thundery_heavy_rain"
    THUNDERY_SNOW_SHOWERS = "thundery_snow_showers"


class CodeTable:
    """
    Read-only mapping from one provider's condition vocabulary to WeatherCode.

    Each provider adapter builds its own table once, at construction time.
    Lookups never fail: anything the provider sends that is not in the table
    resolves to WeatherCode.UNKNOWN.
    """

    def __init__(self, name: str, mapping: Mapping[Hashable, WeatherCode]):
        self.name = name
        self._mapping = MappingProxyType(dict(mapping))

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, provider_code: Any) -> bool:
        try:
            return provider_code in self._mapping
        except TypeError:
            return False

    def lookup(self, provider_code: Any) -> WeatherCode:
        try:
            code = self._mapping.get(provider_code)
        except TypeError:
            code = None
        if code is None:
            logging.debug(f"{self.name}: unmapped condition code {provider_code!r}")
            return WeatherCode.UNKNOWN
        return code


def map_provider_code(table: CodeTable, provider_code: Any) -> WeatherCode:
    """Resolve a provider code through ``table``; unmapped codes give UNKNOWN."""
    return table.lookup(provider_code)
