"""Layout logic shared by the renderers - pure functions for testability."""
import re
import unicodedata
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from units import Units
from weather_codes import WeatherCode
from weather_data import Cond, Data, LatLon

DEFAULT_TIMES_OF_DAY = (
    timedelta(hours=8),
    timedelta(hours=12),
    timedelta(hours=19),
    timedelta(hours=23),
)
COLUMN_LABELS = ("Morning", "Noon", "Evening", "Night")

ANSI_ESCAPE = re.compile(r"\033\[[0-9;]*m")
ANSI_RESET = "\033[0m"

# (upper bound exclusive, xterm-256 colour); anything hotter/faster is 196
TEMP_COLORS = (
    (-15, 21), (-12, 27), (-9, 33), (-6, 39), (-3, 45),
    (0, 51), (2, 50), (4, 49), (6, 48), (8, 47),
    (10, 46), (13, 82), (16, 118), (19, 154), (22, 190),
    (25, 226), (28, 220), (31, 214), (34, 208), (37, 202),
)
WIND_COLORS = (
    (0, 46), (4, 82), (7, 118), (10, 154), (13, 190),
    (16, 226), (20, 220), (24, 214), (28, 208), (32, 202),
)
WIND_ARROWS = ("↓", "↙", "←", "↖", "↑", "↗", "→", "↘")

CONDITION_TEXT = {
    WeatherCode.UNKNOWN: "Unknown",
    WeatherCode.CLOUDY: "Cloudy",
    WeatherCode.VERY_CLOUDY: "Overcast",
    WeatherCode.FOG: "Fog",
    WeatherCode.LIGHT_RAIN: "Light rain",
    WeatherCode.HEAVY_RAIN: "Heavy rain",
    WeatherCode.LIGHT_SHOWERS: "Showers",
    WeatherCode.HEAVY_SHOWERS: "Heavy showers",
    WeatherCode.LIGHT_SLEET: "Sleet",
    WeatherCode.LIGHT_SLEET_SHOWERS: "Sleet showers",
    WeatherCode.LIGHT_SNOW: "Light snow",
    WeatherCode.HEAVY_SNOW: "Heavy snow",
    WeatherCode.LIGHT_SNOW_SHOWERS: "Snow showers",
    WeatherCode.HEAVY_SNOW_SHOWERS: "Heavy snow showers",
    WeatherCode.PARTLY_CLOUDY: "Partly cloudy",
    WeatherCode.SUNNY: "Clear",
    WeatherCode.THUNDERY_SHOWERS: "Thundery showers",
    WeatherCode.THUNDERY_HEAVY_RAIN: "Thunderstorm",
    WeatherCode.THUNDERY_SNOW_SHOWERS: "Thundersnow",
}


def time_of_day(moment: datetime) -> timedelta:
    """Wall-clock offset of ``moment`` from its local midnight."""
    return timedelta(
        hours=moment.hour,
        minutes=moment.minute,
        seconds=moment.second,
        microseconds=moment.microsecond,
    )


def select_slots(
    slots: Sequence[Cond],
    targets: Sequence[timedelta] = DEFAULT_TIMES_OF_DAY,
) -> List[Optional[Cond]]:
    """
    Pick, for each target time of day, the slot closest to it.

    Each target is resolved independently, so one slot may fill several
    columns. On equal distance the slot seen first wins. Nothing is
    interpolated: every entry is one of ``slots`` unchanged, or None when
    ``slots`` is empty.

    Args:
        slots: Conditions of one day (order only matters for ties)
        targets: Offsets from midnight, one per output column

    Returns:
        One Cond (or None) per target
    """
    columns: List[Optional[Cond]] = []
    for target in targets:
        best = None
        best_distance = None
        for slot in slots:
            distance = abs(time_of_day(slot.time) - target)
            if best is None or distance < best_distance:
                best, best_distance = slot, distance
        columns.append(best)
    return columns


def char_width(char: str) -> int:
    if unicodedata.combining(char) or unicodedata.category(char) in ("Mn", "Me", "Cf"):
        return 0
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


def display_width(text: str) -> int:
    """Terminal cell width of ``text``, ignoring ANSI colour sequences."""
    return sum(char_width(char) for char in ANSI_ESCAPE.sub("", text))


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


def pad(text: str, width: int) -> str:
    """Pad or cut ``text`` to exactly ``width`` terminal cells."""
    has_escapes = ANSI_ESCAPE.search(text) is not None
    current = display_width(text)
    if current <= width:
        reset = ANSI_RESET if has_escapes and current < width else ""
        return text + reset + " " * (width - current)

    out = []
    used = 0
    full = False
    for token in re.split(f"({ANSI_ESCAPE.pattern})", text):
        if ANSI_ESCAPE.fullmatch(token):
            out.append(token)
            continue
        for char in token:
            w = char_width(char)
            if used + w > width:
                full = True
                break
            out.append(char)
            used += w
        if full:
            break
    if has_escapes:
        out.append(ANSI_RESET)
    return "".join(out) + " " * (width - used)


def truncate(text: str, width: int, ellipsis: str = "…") -> str:
    """Fill ``text`` to ``width`` cells, ending in ``ellipsis`` if it was cut."""
    if display_width(text) <= width:
        return pad(text, width)
    return pad(text, width - display_width(ellipsis)) + ellipsis


def pick_color(value: float, scale: Sequence[Tuple[float, int]]) -> int:
    for upper, color in scale:
        if value < upper:
            return color
    return 196


def colorize(text: str, color: int) -> str:
    return f"\033[38;5;{color:03d}m{text}{ANSI_RESET}"


def wind_arrow(degree: Optional[int]) -> str:
    """Arrow pointing where the wind blows to; ``degree`` is where it comes from."""
    if degree is None:
        return "?"
    return WIND_ARROWS[((degree + 22) % 360) // 45]


def get_condition_text(cond: Cond) -> str:
    """Description to show for ``cond``, falling back to the code's name."""
    return cond.desc or CONDITION_TEXT[cond.code]


def format_geo(coords: Optional[LatLon]) -> str:
    if coords is None:
        return ""
    lat = "S" if coords.latitude < 0 else "N"
    lon = "W" if coords.longitude < 0 else "E"
    return f" ({abs(coords.latitude):.1f}°{lat} {abs(coords.longitude):.1f}°{lon})"


def get_temperature_color(temp_c: float) -> Tuple[int, int, int]:
    """
    Get RGB color for temperature using a simple gradient.

    Cold (< 0°C) = blue
    Cool (0-15°C) = cyan
    Mild (15-25°C) = green/yellow
    Warm (25-35°C) = yellow/orange
    Hot (> 35°C) = red
    """
    if temp_c < 0:
        return (0, 0, 255)
    elif temp_c < 15:
        ratio = temp_c / 15.0
        return (0, int(255 * ratio), 255)
    elif temp_c < 25:
        ratio = (temp_c - 15) / 10.0
        return (int(255 * ratio), 255, int(255 * (1 - ratio)))
    elif temp_c < 35:
        ratio = (temp_c - 25) / 10.0
        return (255, int(255 * (1 - ratio * 0.5)), 0)
    else:
        ratio = min((temp_c - 35) / 10.0, 1.0)
        return (255, int(255 * (1 - ratio)), 0)


class CellFormatter:
    """
    Formats the fields of one Cond for table cells in the selected units.

    Absent fields print as "?" or blank, never as a zero measurement.
    """

    def __init__(self, units: Units, color: bool = True):
        self.units = units
        self.color = color

    def _number(self, value: float, raw: float, scale) -> str:
        text = f"{int(round(value))}"
        if self.color:
            return colorize(text, pick_color(raw, scale))
        return text

    def _temp_value(self, temp_c: float) -> str:
        return self._number(self.units.temp(temp_c)[0], temp_c, TEMP_COLORS)

    def _speed_value(self, kmph: float) -> str:
        return self._number(self.units.speed(kmph)[0], kmph, WIND_COLORS)

    def temp(self, cond: Cond) -> str:
        _, unit = self.units.temp(0.0)
        if cond.temp_c is None:
            return f"? {unit}"
        text = self._temp_value(cond.temp_c)
        if cond.feels_like_c is not None and cond.feels_like_c != cond.temp_c:
            text += f" ({self._temp_value(cond.feels_like_c)})"
        return f"{text} {unit}"

    def wind(self, cond: Cond) -> str:
        arrow = wind_arrow(cond.winddir_degree)
        if self.color:
            arrow = f"\033[1m{arrow}{ANSI_RESET}"
        if cond.windspeed_kmph is None:
            return arrow
        _, unit = self.units.speed(0.0)
        speed = self._speed_value(cond.windspeed_kmph)
        if cond.wind_gust_kmph is not None and cond.wind_gust_kmph > cond.windspeed_kmph:
            return f"{arrow} {speed} – {self._speed_value(cond.wind_gust_kmph)} {unit}"
        return f"{arrow} {speed} {unit}"

    def visibility(self, cond: Cond) -> str:
        if cond.visible_dist_m is None:
            return ""
        value, unit = self.units.distance(cond.visible_dist_m)
        return f"{int(round(value))} {unit}"

    def rain(self, cond: Cond) -> str:
        if cond.precip_m is not None:
            value, unit = self.units.distance(cond.precip_m)
            text = f"{value:.1f} {unit}/h"
            if cond.chance_of_rain_percent is not None:
                text += f" | {cond.chance_of_rain_percent}%"
            return text
        if cond.chance_of_rain_percent is not None:
            return f"{cond.chance_of_rain_percent}%"
        return ""


class DrawOp:
    """Represents a drawing operation (for testing/layout calculation)."""
    def __init__(self, op_type: str, **kwargs):
        self.op_type = op_type
        self.kwargs = kwargs


def calculate_layout(
    data: Data,
    units: Units,
    column_width: int = 170,
    line_height: int = 14,
) -> Tuple[List[DrawOp], int, int]:
    """
    Calculate the drawing operations of a forecast image.

    The image has a header with the location and the current conditions,
    then one block per forecast day with a column per time of day.

    Returns:
        Tuple of (operations, image width, image height)
    """
    ops: List[DrawOp] = []
    formatter = CellFormatter(units, color=False)
    margin = 10
    width = margin * 2 + column_width * len(DEFAULT_TIMES_OF_DAY)
    y = margin
    white = (230, 230, 230)
    grey = (160, 160, 160)

    ops.append(DrawOp("text", text=f"Weather for {data.location}", x=margin, y=y, color=white))
    y += line_height * 2
    y = _cell_ops(ops, data.current, formatter, margin, y, line_height, grey) + line_height

    for day in data.forecast:
        ops.append(DrawOp("line", x0=margin, y0=y, x1=width - margin, y1=y, color=grey))
        y += line_height // 2
        ops.append(DrawOp("text", text=day.date.strftime("%a %d. %b"), x=margin, y=y, color=white))
        y += line_height
        bottom = y
        for index, (label, cond) in enumerate(zip(COLUMN_LABELS, select_slots(day.slots))):
            x = margin + index * column_width
            ops.append(DrawOp("text", text=label, x=x, y=y, color=grey))
            if cond is None:
                continue
            bottom = max(bottom, _cell_ops(ops, cond, formatter, x, y + line_height, line_height, grey))
        y = max(bottom, y + line_height) + line_height

    return ops, width, y + margin


def _cell_ops(ops, cond, formatter, x, y, line_height, color) -> int:
    temp_color = get_temperature_color(cond.temp_c) if cond.temp_c is not None else color
    lines = (
        (get_condition_text(cond), color),
        (formatter.temp(cond), temp_color),
        (formatter.wind(cond), color),
        (formatter.visibility(cond), color),
        (formatter.rain(cond), color),
    )
    for text, line_color in lines:
        if text:
            ops.append(DrawOp("text", text=text, x=x, y=y, color=line_color))
        y += line_height
    return y
