"""Command line weather report: fetch from one provider, render with one renderer."""
import argparse
import logging
import sys
from typing import List, Optional

from plugin_registry import UnknownPluginError, get_provider, get_renderer, provider_names, renderer_names
from units import DistanceUnit, SpeedUnit, TempUnit, UnitSystem
from weather_config import load_settings
from weather_provider import WeatherProviderError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        "weather-report",
        description="Weather forecast for the terminal",
    )
    parser.add_argument("shortcuts", nargs="*", metavar="DAYS|LOCATION",
                        help="A single digit sets the number of days, anything else the location")
    parser.add_argument("-l", "--location", help="City name, zip code or 'lat,lon'")
    parser.add_argument("-d", "--days", type=int, help="Number of days to show")
    parser.add_argument("-b", "--provider", "--backend", dest="provider", help="Weather data provider")
    parser.add_argument("-f", "--renderer", "--frontend", dest="renderer", help="Output renderer")
    parser.add_argument("--units", choices=[system.value for system in UnitSystem])
    parser.add_argument("--unit-temperature", choices=[unit.value for unit in TempUnit])
    parser.add_argument("--unit-speed", choices=[unit.value for unit in SpeedUnit])
    parser.add_argument("--unit-distance", choices=[unit.value for unit in DistanceUnit])
    parser.add_argument("--lang", help="Language of the weather descriptions")
    parser.add_argument("--timeout", type=int, help="HTTP timeout in seconds")

    parser.add_argument("--aat-coords", action="store_true", help="ascii-art-table: show geo coordinates")
    parser.add_argument("--aat-monochrome", action="store_true", help="ascii-art-table: monochrome output")
    parser.add_argument("--aat-compact", action="store_true", help="ascii-art-table: no icons")
    parser.add_argument("--md-coords", action="store_true", help="markdown: show geo coordinates")
    parser.add_argument("--json-no-indent", action="store_true", help="json: do not indent the output")
    parser.add_argument("--png-output", help="png: file to write the image to")

    parser.add_argument("--list", action="store_true", help="List providers and renderers and exit")
    parser.add_argument("--log-file")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    # stdout carries the report itself
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def apply_shortcuts(args: argparse.Namespace) -> argparse.Namespace:
    """Let ``weather-report 5 Berlin`` mean ``-d 5 -l Berlin``; later ones win."""
    for shortcut in args.shortcuts:
        if len(shortcut) == 1 and shortcut.isdigit():
            args.days = int(shortcut)
        else:
            args.location = shortcut
    return args


def list_plugins() -> str:
    return (
        "Providers: " + ", ".join(provider_names()) + "\n"
        "Renderers: " + ", ".join(renderer_names()) + "\n"
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    if args.list:
        sys.stdout.write(list_plugins())
        return 0

    settings = load_settings(apply_shortcuts(args))
    try:
        provider = get_provider(settings.provider, settings)
        renderer = get_renderer(settings.renderer, settings)
        data = provider.fetch(settings.location, settings.days)
        logging.info(f"Fetched {len(data.forecast)} day(s) for {data.location}")
        renderer.write(data, settings.units, sys.stdout)
    except UnknownPluginError as err:
        raise SystemExit(str(err)) from err
    except WeatherProviderError as err:
        logging.error(f"Weather fetch failed: {err}")
        raise SystemExit(f"{settings.provider}: {err}") from err
    except OSError as err:
        logging.error(f"Unable to write report: {err}")
        raise SystemExit(f"Unable to write report: {err}") from err
    return 0


if __name__ == "__main__":
    sys.exit(main())
