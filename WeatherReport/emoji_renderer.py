"""Compact terminal renderer using one emoji per weather condition."""
from typing import List, Optional

from renderer import RendererBase
from table_layout import CellFormatter, get_condition_text, pad, select_slots, truncate
from units import Units
from weather_codes import WeatherCode
from weather_data import Cond, Data, Day

CELL_WIDTH = 15

EMOJI = {
    WeatherCode.UNKNOWN: "✨",
    WeatherCode.CLOUDY: "☁️",
    WeatherCode.FOG: "🌫",
    WeatherCode.HEAVY_RAIN: "🌧",
    WeatherCode.HEAVY_SHOWERS: "🌧",
    WeatherCode.HEAVY_SNOW: "❄️",
    WeatherCode.HEAVY_SNOW_SHOWERS: "❄️",
    WeatherCode.LIGHT_RAIN: "🌦",
    WeatherCode.LIGHT_SHOWERS: "🌦",
    WeatherCode.LIGHT_SLEET: "🌧",
    WeatherCode.LIGHT_SLEET_SHOWERS: "🌧",
    WeatherCode.LIGHT_SNOW: "🌨",
    WeatherCode.LIGHT_SNOW_SHOWERS: "🌨",
    WeatherCode.PARTLY_CLOUDY: "⛅️",
    WeatherCode.SUNNY: "☀️",
    WeatherCode.THUNDERY_HEAVY_RAIN: "🌩",
    WeatherCode.THUNDERY_SHOWERS: "⛈",
    WeatherCode.THUNDERY_SNOW_SHOWERS: "⛈",
    WeatherCode.VERY_CLOUDY: "☁️",
}


class EmojiRenderer(RendererBase):
    """Two lines per condition: the description, then emoji and temperature."""

    def render(self, data: Data, units: Units) -> str:
        formatter = CellFormatter(units)
        lines = [f"Weather for {data.location}", ""]
        lines.extend(self.format_cond(data.current, formatter, current=True))
        for day in data.forecast:
            lines.extend(self.format_day(day, formatter))
        return "\n".join(lines) + "\n"

    def format_cond(self, cond: Optional[Cond], formatter: CellFormatter, current: bool = False) -> List[str]:
        if cond is None:
            return [" " * CELL_WIDTH] * 2

        desc = get_condition_text(cond)
        temp = f"{EMOJI[cond.code]} {formatter.temp(cond)}"
        if current:
            return [f" {desc}", f" {temp}"]
        return [
            pad(" " + truncate(desc, CELL_WIDTH - 2), CELL_WIDTH),
            pad(" " + temp, CELL_WIDTH),
        ]

    def format_day(self, day: Day, formatter: CellFormatter) -> List[str]:
        rows = ["│"] * 2
        for cond in select_slots(day.slots):
            rows = [row + line + "│" for row, line in zip(rows, self.format_cond(cond, formatter))]

        bar = "─" * CELL_WIDTH
        side = "─" * 11
        label = "┤  " + day.date.strftime("%a") + "  ├"
        return [
            " " * 28 + "┌───────┐ ",
            f"┌{bar}┬{side}{label}{side}┬{bar}┐",
            "│    Morning    │    Noon   └───┬───┘ Evening   │     Night     │",
            f"├{bar}┼{bar}┼{bar}┼{bar}┤",
        ] + rows + [f"└{bar}┴{bar}┴{bar}┴{bar}┘", " "]
