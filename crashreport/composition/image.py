"""Overlays the weekly figures on the background template with Pillow."""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from PIL import Image, ImageDraw, ImageFont

from crashreport.composition.exceptions import RenderError
from crashreport.logging.logger import Log
from crashreport.reporting.models import AggregateStats


@dataclass(frozen=True)
class TextSlot:
    """Where one value goes, as fractions of the template's width and height."""

    field: str
    x: float
    y: float


class ImageRenderer:
    """Renders the report card image from a fixed template and layout."""

    LAYOUT: ClassVar[tuple[TextSlot, ...]] = (
        TextSlot("window", 0.50, 0.12),
        TextSlot("weekly_crash_count", 0.20, 0.42),
        TextSlot("weekly_fatalities", 0.50, 0.42),
        TextSlot("weekly_injuries", 0.80, 0.42),
        TextSlot("year_to_date_crash_count", 0.20, 0.80),
        TextSlot("year_to_date_fatalities", 0.50, 0.80),
        TextSlot("year_to_date_injuries", 0.80, 0.80),
    )
    ANCHOR: ClassVar[str] = "mm"
    FORMAT: ClassVar[str] = "PNG"
    # Never assigned a glyph, so every font draws its fallback box for it.
    UNASSIGNED_CHAR: ClassVar[str] = "\uffff"

    def __init__(
        self,
        *,
        template_path: Path,
        font_path: Path | None = None,
        font_size: int = 48,
        text_color: str = "#FFFFFF",
        stroke_width: int = 0,
    ) -> None:
        self._template_path = template_path
        self._font_path = font_path
        self._font_size = font_size
        self._text_color = text_color
        self._stroke_width = stroke_width

    def render(self, stats: AggregateStats, window_display: str) -> bytes:
        """Draw the window and the six statistics and encode as PNG.

        Raises:
            RenderError: if the template or font cannot be loaded, the font has
                no glyph for a character, or drawing fails.
        """
        values = self._slot_values(stats, window_display)
        font = self._load_font()
        self._check_glyphs(font, "".join(values.values()))
        try:
            with Image.open(self._template_path) as template:
                canvas = template.convert("RGB")
        except OSError as exc:
            raise RenderError(
                f"Failed to load image template {self._template_path}: {exc}"
            ) from exc

        try:
            draw = ImageDraw.Draw(canvas)
            width, height = canvas.size
            for slot in self.LAYOUT:
                draw.text(
                    (round(slot.x * width), round(slot.y * height)),
                    values[slot.field],
                    fill=self._text_color,
                    font=font,
                    anchor=self.ANCHOR,
                    stroke_width=self._stroke_width,
                )
            buf = io.BytesIO()
            canvas.save(buf, format=self.FORMAT, optimize=False)
        except (OSError, ValueError) as exc:
            raise RenderError(f"Text overlay failed: {exc}") from exc

        image_bytes = buf.getvalue()
        Log.debug(f"Rendered {width}x{height} report image ({len(image_bytes)} bytes)")
        return image_bytes

    def _load_font(self) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        try:
            if self._font_path is None:
                return ImageFont.load_default(size=self._font_size)
            return ImageFont.truetype(str(self._font_path), self._font_size)
        except OSError as exc:
            raise RenderError(f"Failed to load font {self._font_path}: {exc}") from exc

    @classmethod
    def _check_glyphs(
        cls, font: ImageFont.FreeTypeFont | ImageFont.ImageFont, text: str
    ) -> None:
        """Reject characters the font would draw as its fallback box.

        Bitmap fonts only cover Latin-1 and fail while drawing instead.
        """
        if not isinstance(font, ImageFont.FreeTypeFont):
            return
        fallback = cls._glyph_bitmap(font, cls.UNASSIGNED_CHAR)
        missing = sorted(
            {
                char
                for char in text
                if not char.isspace() and cls._glyph_bitmap(font, char) == fallback
            }
        )
        if missing:
            raise RenderError(
                f"Font {font.getname()[0]} has no glyph for {''.join(missing)!r}"
            )

    @staticmethod
    def _glyph_bitmap(font: ImageFont.FreeTypeFont, char: str) -> tuple[tuple[int, int], bytes]:
        left, top, right, bottom = font.getbbox(char)
        size = (max(right - left, 1), max(bottom - top, 1))
        glyph = Image.new("L", size)
        ImageDraw.Draw(glyph).text((-left, -top), char, fill=255, font=font)
        return glyph.size, glyph.tobytes()

    @staticmethod
    def _slot_values(stats: AggregateStats, window_display: str) -> dict[str, str]:
        return {
            "window": window_display,
            "weekly_crash_count": str(stats.weekly_crash_count),
            "weekly_fatalities": str(stats.weekly_fatalities),
            "weekly_injuries": str(stats.weekly_injuries),
            "year_to_date_crash_count": str(stats.year_to_date_crash_count),
            "year_to_date_fatalities": str(stats.year_to_date_fatalities),
            "year_to_date_injuries": str(stats.year_to_date_injuries),
        }
