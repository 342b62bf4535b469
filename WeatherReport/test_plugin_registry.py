"""Tests for provider and renderer lookup."""
import pytest
from ascii_table_renderer import AsciiTableRenderer
from json_provider import JsonFileProvider
from json_renderer import JsonRenderer
from plugin_registry import (
    PROVIDERS,
    UnknownPluginError,
    get_provider,
    get_renderer,
    provider_names,
    renderer_names,
)
from png_renderer import PngRenderer
from weather_config import Settings
from weatherbit_provider import WeatherbitProvider


def test_names_are_sorted():
    assert provider_names() == ["json", "openmeteo", "openweathermap", "weatherbit.io", "worldweatheronline"]
    assert renderer_names() == ["ascii-art-table", "emoji", "json", "markdown", "png"]


def test_provider_gets_its_own_key():
    settings = Settings(api_keys={"weatherbit.io": "wb-key", "openweathermap": "owm-key"}, lang="fr", timeout=4)
    provider = get_provider("weatherbit.io", settings)
    assert isinstance(provider, WeatherbitProvider)
    assert provider.api_key == "wb-key"
    assert provider.lang == "fr"
    assert provider.timeout == 4
    assert isinstance(get_provider("json", settings), JsonFileProvider)


def test_renderer_options_come_from_settings():
    settings = Settings(aat_monochrome=True, aat_compact=True, json_no_indent=True, png_output="out.png")
    aat = get_renderer("ascii-art-table", settings)
    assert isinstance(aat, AsciiTableRenderer)
    assert aat.monochrome and aat.compact and not aat.coords
    assert get_renderer("json", settings).no_indent
    assert isinstance(get_renderer("json", settings), JsonRenderer)
    png = get_renderer("png", settings)
    assert isinstance(png, PngRenderer)
    assert png.output == "out.png"


def test_unknown_names_fail_fast():
    with pytest.raises(UnknownPluginError) as exc_info:
        get_provider("forecast.io", Settings())
    assert "forecast.io" in str(exc_info.value)
    assert "openmeteo" in str(exc_info.value)

    with pytest.raises(UnknownPluginError):
        get_renderer("html", Settings())


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        PROVIDERS["mine"] = lambda settings: None
