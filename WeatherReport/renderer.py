"""Renderer abstraction - turns canonical weather data into output."""
from abc import ABC, abstractmethod
from typing import TextIO

from units import Units
from weather_data import Data


class RendererBase(ABC):
    """Abstract base class for weather report renderers."""

    @abstractmethod
    def render(self, data: Data, units: Units) -> str:
        """
        Render ``data`` in ``units``.

        Returns:
            The complete report as text
        """
        pass

    def write(self, data: Data, units: Units, stream: TextIO) -> None:
        """Write the rendered report to ``stream``."""
        stream.write(self.render(data, units))
