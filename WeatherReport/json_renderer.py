"""Dumps the canonical data model as JSON."""
import json

from renderer import RendererBase
from units import Units
from weather_data import Data


class JsonRenderer(RendererBase):
    """
    Writes ``Data.to_dict()``; the json provider reads the result back in.

    Values stay in the canonical units whatever units are selected.
    """

    def __init__(self, no_indent: bool = False):
        self.no_indent = no_indent

    def render(self, data: Data, units: Units) -> str:
        if self.no_indent:
            return json.dumps(data.to_dict(), ensure_ascii=False, separators=(",", ":")) + "\n"
        return json.dumps(data.to_dict(), ensure_ascii=False, indent="\t") + "\n"
