"""
Module: output.compositor

Purpose:
    Combine a chart image with its rendered panel layout.
    The chart sits on the left, inset by the margin; the layout is
    drawn to its right on a dark background.

Key Functions:
    - compose_image(): Build the combined image
    - canvas_size(): Output dimensions for a chart and layout

Key Classes:
    - CompositionError: Unusable chart image

Dependencies:
    - PIL: Image compositing
    - layout: LayoutResult, StyleConfig
    - output.renderer: Command rasterization

Used By:
    - controller: Per-pair processing
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from PIL import Image

from trade_overlay.layout import LayoutResult, StyleConfig

from .renderer import render_commands

logger = logging.getLogger(__name__)

DEFAULT_MARGIN = 20


class CompositionError(Exception):
    """Chart image cannot be composed."""
    pass


def canvas_size(
    chart_size: Tuple[int, int],
    layout: LayoutResult,
    margin: int = DEFAULT_MARGIN,
) -> Tuple[int, int]:
    """
    Output dimensions for a chart and its layout.

    Width is chart + layout + margin; height is the taller of the
    inset chart and the layout.

    Example:
        >>> canvas_size((800, 600), layout)  # layout 420 x 500
        (1240, 640)
    """
    chart_width, chart_height = chart_size
    width = math.ceil(chart_width + layout.width + margin)
    height = math.ceil(max(chart_height + margin * 2, layout.height))
    return width, height


def compose_image(
    chart: Image.Image,
    layout: LayoutResult,
    style: Optional[StyleConfig] = None,
    *,
    margin: int = DEFAULT_MARGIN,
) -> Image.Image:
    """
    Build the combined chart + panels image.

    Args:
        chart: Decoded chart image (not modified)
        layout: Layout from compose_layout()
        style: Style configuration (background color)
        margin: Inset around the chart and gap before the panels

    Returns:
        New RGBA image

    Raises:
        CompositionError: If the chart has no usable dimensions
    """
    style = style or StyleConfig()

    if not chart.width or not chart.height:
        raise CompositionError("Failed to read valid dimensions from chart image.")

    size = canvas_size(chart.size, layout, margin)
    canvas = Image.new("RGBA", size, style.background_color)

    with chart.convert("RGBA") as rgba_chart:
        canvas.alpha_composite(rgba_chart, dest=(margin, margin))

    render_commands(canvas, layout.commands, origin=(chart.width + margin, 0))

    logger.debug(f"Composed {size[0]}x{size[1]} image from {chart.width}x{chart.height} chart")
    return canvas
