"""PNG image renderer - draws the forecast layout with Pillow."""
import logging
from typing import Optional, TextIO, Tuple

from PIL import Image, ImageDraw, ImageFont

from renderer import RendererBase
from table_layout import calculate_layout
from units import Units
from weather_data import Data

DEFAULT_OUTPUT = "weather.png"
BACKGROUND = (20, 22, 30)


class ImageCanvas:
    """
    Pillow image to draw layout operations on.

    Useful for testing and previewing: the image can be inspected with
    ``get_pixel`` or ``get_image`` before it is saved.
    """

    def __init__(self, width: int, height: int, scale: int = 1, font_path: Optional[str] = None,
                 font_size: int = 12):
        """
        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            scale: Scale factor for the saved image
            font_path: TrueType font to draw text with
            font_size: Font size in pixels
        """
        self._width = width
        self._height = height
        self._scale = scale
        self._image = Image.new("RGB", (width, height), BACKGROUND)
        self._draw = ImageDraw.Draw(self._image)
        self._font = _load_font(font_path, font_size)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def fill(self, r: int, g: int, b: int) -> None:
        self._image = Image.new("RGB", (self._width, self._height), (r, g, b))
        self._draw = ImageDraw.Draw(self._image)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        if 0 <= x < self._width and 0 <= y < self._height:
            return self._image.getpixel((x, y))
        return BACKGROUND

    def draw_text(self, x: int, y: int, text: str, color: Tuple[int, int, int]) -> None:
        self._draw.text((x, y), text, fill=color, font=self._font)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: Tuple[int, int, int], width: int = 1) -> None:
        self._draw.line((x0, y0, x1, y1), fill=color, width=width)

    def get_image(self):
        """Get the PIL Image object (for advanced usage)."""
        return self._image

    def save(self, filename: str) -> None:
        """
        Save canvas to a PNG file, scaled up if a scale was given.

        Args:
            filename: Output filename (e.g., "weather.png")
        """
        if self._scale > 1:
            scaled = self._image.resize(
                (self._width * self._scale, self._height * self._scale),
                Image.NEAREST
            )
            scaled.save(filename, format="PNG")
        else:
            self._image.save(filename, format="PNG")


def _load_font(font_path: Optional[str], font_size: int):
    try:
        return ImageFont.truetype(font_path or "DejaVuSans.ttf", font_size)
    except OSError:
        if font_path:
            logging.warning(f"Unable to load font {font_path}, using the default font")
        return ImageFont.load_default(size=font_size)


class PngRenderer(RendererBase):
    """
    Draws location, current conditions and one row of four columns per day.

    ``render`` returns the text drawn on the image, one item per line;
    ``write`` saves the image to ``output`` instead of writing to the stream.
    """

    def __init__(self, output: str = DEFAULT_OUTPUT, scale: int = 1, font_path: Optional[str] = None):
        self.output = output
        self.scale = scale
        self.font_path = font_path

    def draw(self, data: Data, units: Units) -> ImageCanvas:
        ops, width, height = calculate_layout(data, units)
        canvas = ImageCanvas(width, height, scale=self.scale, font_path=self.font_path)
        for op in ops:
            if op.op_type == "text":
                canvas.draw_text(op.kwargs["x"], op.kwargs["y"], op.kwargs["text"], op.kwargs["color"])
            elif op.op_type == "line":
                canvas.draw_line(op.kwargs["x0"], op.kwargs["y0"], op.kwargs["x1"], op.kwargs["y1"],
                                 op.kwargs["color"], width=2)
        logging.debug(f"Drew {len(ops)} operations on a {width}x{height} image")
        return canvas

    def render(self, data: Data, units: Units) -> str:
        ops, _, _ = calculate_layout(data, units)
        return "\n".join(op.kwargs["text"] for op in ops if op.op_type == "text") + "\n"

    def write(self, data: Data, units: Units, stream: TextIO) -> None:
        canvas = self.draw(data, units)
        canvas.save(self.output)
        logging.info(f"Saved weather image to {self.output}")
