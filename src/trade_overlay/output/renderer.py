"""
Module: output.renderer

Purpose:
    Rasterize layout drawing commands with Pillow.
    Draws rounded panel boxes and baseline-anchored text onto an
    existing image at a given origin.

Key Functions:
    - render_commands(): Draw a command sequence
    - load_font(): Cached TrueType font lookup with fallback

Dependencies:
    - PIL: Image drawing
    - layout.models: Drawing commands

Used By:
    - output.compositor: Final image assembly
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, Tuple

from PIL import Image, ImageDraw, ImageFont

from trade_overlay.layout.models import (
    MONOSPACE,
    SANS_SERIF,
    DrawCommand,
    RectCommand,
    TextBlockCommand,
    TextCommand,
)

logger = logging.getLogger(__name__)

# Candidate font files per (family, bold), first match wins
FONT_CANDIDATES = {
    (MONOSPACE, False): (
        "DejaVuSansMono.ttf",
        "consola.ttf",          # Consolas (Windows)
        "Menlo.ttc",            # Menlo (Mac)
        "cour.ttf",
    ),
    (MONOSPACE, True): (
        "DejaVuSansMono-Bold.ttf",
        "consolab.ttf",
        "Menlo.ttc",
        "courbd.ttf",
    ),
    (SANS_SERIF, False): (
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
    ),
    (SANS_SERIF, True): (
        "DejaVuSans-Bold.ttf",
        "arialbd.ttf",
        "Arial Bold.ttf",
    ),
}

UNDERLINE_OFFSET = 2


@lru_cache(maxsize=32)
def load_font(family: str, bold: bool, size: int) -> ImageFont.ImageFont:
    """
    Load a TrueType font for a family and weight.

    Falls back to Pillow's default font if none of the candidates
    is installed.

    Args:
        family: "monospace" or "sans-serif"
        bold: Bold variant
        size: Font size in pixels

    Returns:
        Font object
    """
    for font_name in FONT_CANDIDATES.get((family, bold), ()):
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning(f"Could not load TrueType font for {family} (bold={bold}), using default")
    return ImageFont.load_default(size)


def render_commands(
    image: Image.Image,
    commands: Iterable[DrawCommand],
    origin: Tuple[float, float] = (0, 0),
) -> None:
    """
    Draw layout commands onto ``image`` in place.

    Args:
        image: Target image (RGB or RGBA)
        commands: Commands in paint order
        origin: Offset added to every command position

    Example:
        >>> canvas = Image.new("RGB", (400, 300), "#141414")
        >>> render_commands(canvas, layout.commands, origin=(100, 0))
    """
    draw = ImageDraw.Draw(image)
    ox, oy = origin

    for command in commands:
        if isinstance(command, RectCommand):
            _draw_rect(draw, command.translated(ox, oy))
        elif isinstance(command, TextCommand):
            _draw_text(draw, command.translated(ox, oy))
        elif isinstance(command, TextBlockCommand):
            _draw_block(draw, command.translated(ox, oy))
        else:
            raise TypeError(f"Unknown draw command: {type(command).__name__}")


def _draw_rect(draw: ImageDraw.ImageDraw, rect: RectCommand) -> None:
    box = (rect.x, rect.y, rect.right, rect.bottom)
    if rect.radius > 0:
        draw.rounded_rectangle(box, radius=rect.radius, fill=rect.fill)
    else:
        draw.rectangle(box, fill=rect.fill)


def _draw_text(draw: ImageDraw.ImageDraw, text: TextCommand) -> None:
    if not text.text:
        return

    font = load_font(text.family, text.bold, text.font_size)
    draw.text((text.x, text.y), text.text, fill=text.color, font=font, anchor="ls")

    if text.underline:
        width = draw.textlength(text.text, font=font)
        line_y = text.y + UNDERLINE_OFFSET
        draw.line((text.x, line_y, text.x + width, line_y), fill=text.color, width=1)


def _draw_block(draw: ImageDraw.ImageDraw, block: TextBlockCommand) -> None:
    font = load_font(block.family, False, block.font_size)
    for i, line in enumerate(block.lines):
        if not line:
            continue
        baseline = block.y + i * block.line_height
        draw.text((block.x, baseline), line, fill=block.color, font=font, anchor="ls")
