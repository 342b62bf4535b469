"""Settings resolved from command line flags, the environment and defaults."""
import logging
import os
from argparse import Namespace
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

from units import Units, UnitSystem

DEFAULT_LOCATION = "40.748,-73.985"
DEFAULT_DAYS = 3
DEFAULT_PROVIDER = "openweathermap"
DEFAULT_RENDERER = "ascii-art-table"
DEFAULT_UNITS = "metric"
DEFAULT_LANG = "en"
DEFAULT_TIMEOUT = 10
DEFAULT_PNG_OUTPUT = "weather.png"

API_KEY_VARS = {
    "openweathermap": "OWM_API_KEY",
    "openmeteo": "OPENMETEO_API_KEY",
    "weatherbit.io": "WEATHERBIT_API_KEY",
    "worldweatheronline": "WWO_API_KEY",
}
SHARED_API_KEY_VAR = "WEATHER_API_KEY"


@dataclass
class Settings:
    """Everything a provider and a renderer need for one run."""
    location: str = DEFAULT_LOCATION
    days: int = DEFAULT_DAYS
    provider: str = DEFAULT_PROVIDER
    renderer: str = DEFAULT_RENDERER
    units: Units = field(default_factory=Units)
    lang: str = DEFAULT_LANG
    timeout: int = DEFAULT_TIMEOUT
    api_keys: Dict[str, str] = field(default_factory=dict)

    aat_coords: bool = False
    aat_monochrome: bool = False
    aat_compact: bool = False
    md_coords: bool = False
    json_no_indent: bool = False
    png_output: str = DEFAULT_PNG_OUTPUT

    def api_key(self, provider: str) -> Optional[str]:
        return self.api_keys.get(provider)


def load_settings(args: Namespace) -> Settings:
    """
    Resolve settings: command line flags win over environment variables
    (including a ``.env`` file), which win over the built-in defaults.

    Raises:
        SystemExit: If a numeric or unit value is invalid
    """
    load_dotenv()

    def pick(flag: str, env_var: str, default):
        value = getattr(args, flag, None)
        if value is not None:
            return value
        return os.getenv(env_var) or default

    days = _integer("days", pick("days", "WEATHER_DAYS", DEFAULT_DAYS))
    if days < 0:
        raise SystemExit(f"Invalid number of days: {days}")
    timeout = _integer("timeout", pick("timeout", "WEATHER_TIMEOUT", DEFAULT_TIMEOUT))
    if timeout <= 0:
        raise SystemExit(f"Invalid timeout: {timeout}")

    system_name = pick("units", "WEATHER_UNITS", DEFAULT_UNITS)
    try:
        system = UnitSystem(system_name)
    except ValueError as exc:
        raise SystemExit(f"Invalid unit system: {system_name}") from exc
    units = Units.from_names(
        getattr(args, "unit_temperature", None),
        getattr(args, "unit_speed", None),
        getattr(args, "unit_distance", None),
        base=Units.for_system(system),
    )

    settings = Settings(
        location=pick("location", "WEATHER_LOCATION", DEFAULT_LOCATION),
        days=days,
        provider=pick("provider", "WEATHER_PROVIDER", DEFAULT_PROVIDER),
        renderer=pick("renderer", "WEATHER_RENDERER", DEFAULT_RENDERER),
        units=units,
        lang=pick("lang", "WEATHER_LANG", DEFAULT_LANG),
        timeout=timeout,
        api_keys=load_api_keys(),
        aat_coords=bool(getattr(args, "aat_coords", False)),
        aat_monochrome=bool(getattr(args, "aat_monochrome", False)),
        aat_compact=bool(getattr(args, "aat_compact", False)),
        md_coords=bool(getattr(args, "md_coords", False)),
        json_no_indent=bool(getattr(args, "json_no_indent", False)),
        png_output=getattr(args, "png_output", None) or DEFAULT_PNG_OUTPUT,
    )
    logging.info(
        f"Configuration loaded: location={settings.location} days={settings.days} "
        f"provider={settings.provider} renderer={settings.renderer} units={system.value}"
    )
    return settings


def load_api_keys() -> Dict[str, str]:
    """API key per provider, falling back to the shared WEATHER_API_KEY."""
    shared = os.getenv(SHARED_API_KEY_VAR)
    keys = {}
    for provider, env_var in API_KEY_VARS.items():
        key = os.getenv(env_var) or shared
        if key:
            keys[provider] = key
    return keys


def _integer(name: str, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise SystemExit(f"Invalid {name}: {value!r}") from exc
