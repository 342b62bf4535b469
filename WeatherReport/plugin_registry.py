"""Lookup tables from provider and renderer names to their factories."""
from types import MappingProxyType
from typing import Callable, List, Mapping

from ascii_table_renderer import AsciiTableRenderer
from emoji_renderer import EmojiRenderer
from json_provider import JsonFileProvider
from json_renderer import JsonRenderer
from markdown_renderer import MarkdownRenderer
from open_meteo_provider import OpenMeteoProvider
from openweathermap_provider import OpenWeatherMapProvider
from png_renderer import PngRenderer
from renderer import RendererBase
from weather_config import Settings
from weather_provider import WeatherProviderBase
from weatherbit_provider import WeatherbitProvider
from worldweatheronline_provider import WorldWeatherOnlineProvider


class UnknownPluginError(Exception):
    """Raised when no provider or renderer is registered under a name."""
    pass


def _http_provider(cls, name: str) -> Callable[[Settings], WeatherProviderBase]:
    def factory(settings: Settings) -> WeatherProviderBase:
        return cls(api_key=settings.api_key(name), lang=settings.lang, timeout=settings.timeout)
    return factory


PROVIDERS: Mapping[str, Callable[[Settings], WeatherProviderBase]] = MappingProxyType({
    "openweathermap": _http_provider(OpenWeatherMapProvider, "openweathermap"),
    "openmeteo": _http_provider(OpenMeteoProvider, "openmeteo"),
    "weatherbit.io": _http_provider(WeatherbitProvider, "weatherbit.io"),
    "worldweatheronline": _http_provider(WorldWeatherOnlineProvider, "worldweatheronline"),
    "json": lambda settings: JsonFileProvider(),
})

RENDERERS: Mapping[str, Callable[[Settings], RendererBase]] = MappingProxyType({
    "ascii-art-table": lambda settings: AsciiTableRenderer(
        coords=settings.aat_coords,
        monochrome=settings.aat_monochrome,
        compact=settings.aat_compact,
    ),
    "emoji": lambda settings: EmojiRenderer(),
    "markdown": lambda settings: MarkdownRenderer(coords=settings.md_coords),
    "json": lambda settings: JsonRenderer(no_indent=settings.json_no_indent),
    "png": lambda settings: PngRenderer(output=settings.png_output),
})


def get_provider(name: str, settings: Settings) -> WeatherProviderBase:
    try:
        factory = PROVIDERS[name]
    except KeyError:
        raise UnknownPluginError(
            f"Unknown provider {name!r}, choose one of: {', '.join(provider_names())}"
        ) from None
    return factory(settings)


def get_renderer(name: str, settings: Settings) -> RendererBase:
    try:
        factory = RENDERERS[name]
    except KeyError:
        raise UnknownPluginError(
            f"Unknown renderer {name!r}, choose one of: {', '.join(renderer_names())}"
        ) from None
    return factory(settings)


def provider_names() -> List[str]:
    return sorted(PROVIDERS)


def renderer_names() -> List[str]:
    return sorted(RENDERERS)
