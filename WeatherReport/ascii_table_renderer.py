"""Terminal renderer drawing ASCII-art weather icons in box tables."""
from datetime import date
from typing import List, Optional

from renderer import RendererBase
from table_layout import (
    COLUMN_LABELS,
    CellFormatter,
    format_geo,
    get_condition_text,
    pad,
    select_slots,
    strip_ansi,
    truncate,
)
from units import Units
from weather_codes import WeatherCode
from weather_data import Cond, Data, Day

ICON_WIDTH = 13
CELL_WIDTH = 15

ICONS = {
    WeatherCode.UNKNOWN: (
        "    .-.      ",
        "     __)     ",
        "    (        ",
        "     `-᾿     ",
        "      •      ",
    ),
    WeatherCode.CLOUDY: (
        "             ",
        "\033[38;5;250m     .--.    \033[0m",
        "\033[38;5;250m  .-(    ).  \033[0m",
        "\033[38;5;250m (___.__)__) \033[0m",
        "             ",
    ),
    WeatherCode.FOG: (
        "             ",
        "\033[38;5;251m _ - _ - _ - \033[0m",
        "\033[38;5;251m  _ - _ - _  \033[0m",
        "\033[38;5;251m _ - _ - _ - \033[0m",
        "             ",
    ),
    WeatherCode.HEAVY_RAIN: (
        "\033[38;5;244;1m     .-.     \033[0m",
        "\033[38;5;244;1m    (   ).   \033[0m",
        "\033[38;5;244;1m   (___(__)  \033[0m",
        "\033[38;5;33;1m  ‚ʻ‚ʻ‚ʻ‚ʻ   \033[0m",
        "\033[38;5;33;1m  ‚ʻ‚ʻ‚ʻ‚ʻ   \033[0m",
    ),
    WeatherCode.HEAVY_SHOWERS: (
        "\033[38;5;226m _`/\"\"\033[38;5;244;1m.-.    \033[0m",
        "\033[38;5;226m  ,\\_\033[38;5;244;1m(   ).  \033[0m",
        "\033[38;5;226m   /\033[38;5;244;1m(___(__) \033[0m",
        "\033[38;5;33;1m   ‚ʻ‚ʻ‚ʻ‚ʻ  \033[0m",
        "\033[38;5;33;1m   ‚ʻ‚ʻ‚ʻ‚ʻ  \033[0m",
    ),
    WeatherCode.HEAVY_SNOW: (
        "\033[38;5;244;1m     .-.     \033[0m",
        "\033[38;5;244;1m    (   ).   \033[0m",
        "\033[38;5;244;1m   (___(__)  \033[0m",
        "\033[38;5;255;1m   * * * *   \033[0m",
        "\033[38;5;255;1m  * * * *    \033[0m",
    ),
    WeatherCode.HEAVY_SNOW_SHOWERS: (
        "\033[38;5;226m _`/\"\"\033[38;5;244;1m.-.    \033[0m",
        "\033[38;5;226m  ,\\_\033[38;5;244;1m(   ).  \033[0m",
        "\033[38;5;226m   /\033[38;5;244;1m(___(__) \033[0m",
        "\033[38;5;255;1m    * * * *  \033[0m",
        "\033[38;5;255;1m   * * * *   \033[0m",
    ),
    WeatherCode.LIGHT_RAIN: (
        "\033[38;5;250m     .-.     \033[0m",
        "\033[38;5;250m    (   ).   \033[0m",
        "\033[38;5;250m   (___(__)  \033[0m",
        "\033[38;5;111m    ʻ ʻ ʻ ʻ  \033[0m",
        "\033[38;5;111m   ʻ ʻ ʻ ʻ   \033[0m",
    ),
    WeatherCode.LIGHT_SHOWERS: (
        "\033[38;5;226m _`/\"\"\033[38;5;250m.-.    \033[0m",
        "\033[38;5;226m  ,\\_\033[38;5;250m(   ).  \033[0m",
        "\033[38;5;226m   /\033[38;5;250m(___(__) \033[0m",
        "\033[38;5;111m     ʻ ʻ ʻ ʻ \033[0m",
        "\033[38;5;111m    ʻ ʻ ʻ ʻ  \033[0m",
    ),
    WeatherCode.LIGHT_SLEET: (
        "\033[38;5;250m     .-.     \033[0m",
        "\033[38;5;250m    (   ).   \033[0m",
        "\033[38;5;250m   (___(__)  \033[0m",
        "\033[38;5;111m    ʻ \033[38;5;255m*\033[38;5;111m ʻ \033[38;5;255m*  \033[0m",
        "\033[38;5;255m   *\033[38;5;111m ʻ \033[38;5;255m*\033[38;5;111m ʻ   \033[0m",
    ),
    WeatherCode.LIGHT_SLEET_SHOWERS: (
        "\033[38;5;226m _`/\"\"\033[38;5;250m.-.    \033[0m",
        "\033[38;5;226m  ,\\_\033[38;5;250m(   ).  \033[0m",
        "\033[38;5;226m   /\033[38;5;250m(___(__) \033[0m",
        "\033[38;5;111m     ʻ \033[38;5;255m*\033[38;5;111m ʻ \033[38;5;255m* \033[0m",
        "\033[38;5;255m    *\033[38;5;111m ʻ \033[38;5;255m*\033[38;5;111m ʻ  \033[0m",
    ),
    WeatherCode.LIGHT_SNOW: (
        "\033[38;5;250m     .-.     \033[0m",
        "\033[38;5;250m    (   ).   \033[0m",
        "\033[38;5;250m   (___(__)  \033[0m",
        "\033[38;5;255m    *  *  *  \033[0m",
        "\033[38;5;255m   *  *  *   \033[0m",
    ),
    WeatherCode.LIGHT_SNOW_SHOWERS: (
        "\033[38;5;226m _`/\"\"\033[38;5;250m.-.    \033[0m",
        "\033[38;5;226m  ,\\_\033[38;5;250m(   ).  \033[0m",
        "\033[38;5;226m   /\033[38;5;250m(___(__) \033[0m",
        "\033[38;5;255m     *  *  * \033[0m",
        "\033[38;5;255m    *  *  *  \033[0m",
    ),
    WeatherCode.PARTLY_CLOUDY: (
        "\033[38;5;226m   \\__/\033[0m      ",
        "\033[38;5;226m __/  \033[38;5;250m.-.    \033[0m",
        "\033[38;5;226m   \\_\033[38;5;250m(   ).  \033[0m",
        "\033[38;5;226m   /\033[38;5;250m(___(__) \033[0m",
        "             ",
    ),
    WeatherCode.SUNNY: (
        "\033[38;5;226m    \\ . /    \033[0m",
        "\033[38;5;226m   - .-. -   \033[0m",
        "\033[38;5;226m  ‒ (   ) ‒  \033[0m",
        "\033[38;5;226m   . `-᾿ .   \033[0m",
        "\033[38;5;226m    / ' \\    \033[0m",
    ),
    WeatherCode.THUNDERY_HEAVY_RAIN: (
        "\033[38;5;244;1m     .-.     \033[0m",
        "\033[38;5;244;1m    (   ).   \033[0m",
        "\033[38;5;244;1m   (___(__)  \033[0m",
        "\033[38;5;33;1m  ‚ʻ\033[38;5;228;5m⚡\033[38;5;33;25mʻ‚\033[38;5;228;5m⚡\033[38;5;33;25m‚ʻ   \033[0m",
        "\033[38;5;33;1m  ‚ʻ‚ʻ\033[38;5;228;5m⚡\033[38;5;33;25mʻ‚ʻ   \033[0m",
    ),
    WeatherCode.THUNDERY_SHOWERS: (
        "\033[38;5;226m _`/\"\"\033[38;5;250m.-.    \033[0m",
        "\033[38;5;226m  ,\\_\033[38;5;250m(   ).  \033[0m",
        "\033[38;5;226m   /\033[38;5;250m(___(__) \033[0m",
        "\033[38;5;228;5m    ⚡\033[38;5;111;25mʻ ʻ\033[38;5;228;5m⚡\033[38;5;111;25mʻ ʻ \033[0m",
        "\033[38;5;111m    ʻ ʻ ʻ ʻ  \033[0m",
    ),
    WeatherCode.THUNDERY_SNOW_SHOWERS: (
        "\033[38;5;226m _`/\"\"\033[38;5;250m.-.    \033[0m",
        "\033[38;5;226m  ,\\_\033[38;5;250m(   ).  \033[0m",
        "\033[38;5;226m   /\033[38;5;250m(___(__) \033[0m",
        "\033[38;5;255m     *\033[38;5;228;5m⚡\033[38;5;255;25m *\033[38;5;228;5m⚡\033[38;5;255;25m * \033[0m",
        "\033[38;5;255m    *  *  *  \033[0m",
    ),
    WeatherCode.VERY_CLOUDY: (
        "             ",
        "\033[38;5;244;1m     .--.    \033[0m",
        "\033[38;5;244;1m  .-(    ).  \033[0m",
        "\033[38;5;244;1m (___.__)__) \033[0m",
        "             ",
    ),
}

DAY_HEADER_LABELS = (
    "│           Morning            │             Noon      "
    "└──────┬──────┘    Evening            │            Night             │"
)


class AsciiTableRenderer(RendererBase):
    """
    Renders the current conditions and one four-column box per day.

    Args:
        coords: Append the coordinates to the location line
        monochrome: Leave out all ANSI colour sequences
        compact: Leave out the icons and draw slimmer boxes
    """

    def __init__(self, coords: bool = False, monochrome: bool = False, compact: bool = False):
        self.coords = coords
        self.monochrome = monochrome
        self.compact = compact

    def render(self, data: Data, units: Units) -> str:
        formatter = CellFormatter(units, color=not self.monochrome)
        geo = format_geo(data.geo_loc) if self.coords else ""
        lines = [f"Weather for {data.location}{geo}", ""]
        lines.extend(self.format_cond(data.current, formatter, current=True))
        for day in data.forecast:
            lines.extend(self.format_day(day, formatter))

        text = "\n".join(lines) + "\n"
        if self.monochrome:
            text = strip_ansi(text)
        return text

    def icon(self, code: WeatherCode) -> List[str]:
        if self.compact:
            return [""] * 5
        return list(ICONS[code])

    def format_cond(self, cond: Optional[Cond], formatter: CellFormatter, current: bool = False) -> List[str]:
        """
        Format the five lines of one condition cell: icon on the left,
        description, temperature, wind, visibility and rain on the right.
        """
        if cond is None:
            width = 2 + (0 if self.compact else ICON_WIDTH) + CELL_WIDTH
            return [" " * width] * 5

        desc = get_condition_text(cond)
        if not current:
            desc = truncate(desc, CELL_WIDTH)
        texts = (
            desc,
            pad(formatter.temp(cond), CELL_WIDTH),
            pad(formatter.wind(cond), CELL_WIDTH),
            pad(formatter.visibility(cond), CELL_WIDTH),
            pad(formatter.rain(cond), CELL_WIDTH),
        )
        return [f" {icon} {text}" for icon, text in zip(self.icon(cond.code), texts)]

    def format_day(self, day: Day, formatter: CellFormatter) -> List[str]:
        rows = ["│"] * 5
        for cond in select_slots(day.slots):
            cell = self.format_cond(cond, formatter)
            rows = [row + line + "│" for row, line in zip(rows, cell)]

        if self.compact:
            return self._compact_frame(day.date, rows)
        return self._frame(day.date, rows)

    @staticmethod
    def _frame(day_date: date, rows: List[str]) -> List[str]:
        bar = "─" * 30
        side = "─" * 23
        label = "┤ " + day_date.strftime("%a %d. %b") + " ├"
        return [
            " " * 55 + "┌─────────────┐" + " " * 55,
            f"┌{bar}┬{side}{label}{side}┬{bar}┐",
            DAY_HEADER_LABELS,
            f"├{bar}┼{bar}┼{bar}┼{bar}┤",
        ] + rows + [f"└{bar}┴{bar}┴{bar}┴{bar}┘"]

    @staticmethod
    def _compact_frame(day_date: date, rows: List[str]) -> List[str]:
        width = 2 + CELL_WIDTH
        bar = "─" * width
        titled = [label + bar[len(label):] for label in COLUMN_LABELS]
        return [
            day_date.strftime("%a %d. %b"),
            "┌" + "┬".join(titled) + "┐",
        ] + rows + ["└" + "┴".join([bar] * len(COLUMN_LABELS)) + "┘"]
