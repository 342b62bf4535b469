"""Markdown renderer: a heading per day and a pipe table per forecast."""
from typing import List, Optional

from emoji_renderer import EMOJI
from renderer import RendererBase
from table_layout import COLUMN_LABELS, CellFormatter, format_geo, get_condition_text, select_slots
from units import Units
from weather_data import Cond, Data, Day


def _cell(text: str) -> str:
    # pipes inside a cell would split the table row
    return text.replace("|", "\\|")


class MarkdownRenderer(RendererBase):
    """
    Renders plain (uncoloured) markdown.

    Args:
        coords: Append the coordinates to the location heading
    """

    def __init__(self, coords: bool = False):
        self.coords = coords

    def render(self, data: Data, units: Units) -> str:
        formatter = CellFormatter(units, color=False)
        geo = format_geo(data.geo_loc) if self.coords else ""
        lines = [f"## Weather for {data.location}{geo}", ""]
        current = data.current
        lines.append(f"{EMOJI[current.code]} {get_condition_text(current)}")
        lines.append("")
        for label, text in (
            ("Temperature", formatter.temp(current)),
            ("Wind", formatter.wind(current)),
            ("Visibility", formatter.visibility(current)),
            ("Rain", formatter.rain(current)),
        ):
            if text:
                lines.append(f"- {label}: {text}")

        for day in data.forecast:
            lines.extend(self.format_day(day, formatter))
        return "\n".join(lines) + "\n"

    def format_day(self, day: Day, formatter: CellFormatter) -> List[str]:
        columns = select_slots(day.slots)
        lines = [
            "",
            f"### Forecast for {day.date.strftime('%a %b %d')}",
            "",
            "| " + " | ".join(COLUMN_LABELS) + " |",
            "|" + "|".join(" --- " for _ in COLUMN_LABELS) + "|",
        ]
        for row in zip(*(self.format_cond(cond, formatter) for cond in columns)):
            lines.append("| " + " | ".join(_cell(text) for text in row) + " |")
        return lines

    @staticmethod
    def format_cond(cond: Optional[Cond], formatter: CellFormatter) -> List[str]:
        if cond is None:
            return [""] * 5
        return [
            f"{EMOJI[cond.code]} {get_condition_text(cond)}",
            formatter.temp(cond),
            formatter.wind(cond),
            formatter.visibility(cond),
            formatter.rain(cond),
        ]
