"""
Module: layout.config

Purpose:
    Styling configuration for the panel layout engine.
    Colors, font sizes, spacing and per-kind panel widths are injected
    into the engine instead of living as module globals.

Key Classes:
    - StyleConfig: Immutable style configuration

Dependencies:
    - dataclasses (std)

Used By:
    - layout.panels: Panel builders
    - layout.composer: Vertical flow composition
    - output.renderer: Font sizes and colors at raster time
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StyleConfig:
    """
    Configuration for panel styling and sizing (immutable).

    Panel widths are fixed per panel kind; heights are derived from
    the line count (see layout.geometry).

    Attributes:
        background_color: Canvas background
        text_color: Default text color
        panel_background_color: Fill of the rounded panel boxes
        bearish_color: Accent for BEARISH values and highlighted bids
        bullish_color: Accent for BULLISH values and highlighted asks
        font_size: Panel text size in pixels
        header_font_size: Section header size in pixels
        padding: Base padding unit in pixels
        table_gap: Horizontal gap between adjacent panels
        market_structure_width: Width of market structure / order volume panels
        candle_width: Width of candle panels
        imbalance_width: Width of imbalance zone tables
        trade_width: Width of the prospective trade box
        min_footer_height: Extra space always reserved below the content
        corner_radius: Panel corner radius
        column_offset: Offset of the asks column past the padding
        context_row_lines: Line count the context row height is sized for
        line_height_ratio: Line height as a multiple of font_size
        header_spacing_ratio: Header-to-box spacing as a multiple of line height
        char_width_ratio: Glyph advance as a fraction of font size (text width estimate)

    Example:
        >>> style = StyleConfig()
        >>> round(style.line_height, 1)
        19.6
    """

    # Colors
    background_color: str = "#141414"
    text_color: str = "#DCDCDC"
    panel_background_color: str = "#2a2a2a"
    bearish_color: str = "#ff4d4d"
    bullish_color: str = "#33cc33"

    # Typography
    font_size: int = 14
    header_font_size: int = 18
    line_height_ratio: float = 1.4
    header_spacing_ratio: float = 0.75
    char_width_ratio: float = 0.6

    # Spacing
    padding: int = 20
    table_gap: int = 25
    column_offset: int = 80
    corner_radius: int = 5
    min_footer_height: int = 150

    # Panel widths per kind
    market_structure_width: int = 180
    candle_width: int = 180
    imbalance_width: int = 192
    trade_width: int = 250

    # Context row is sized for a candle panel (title + 5 fields)
    context_row_lines: int = 6

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive: {self.font_size}")
        if self.header_font_size <= 0:
            raise ValueError(f"header_font_size must be positive: {self.header_font_size}")
        if self.line_height_ratio <= 0:
            raise ValueError(f"line_height_ratio must be positive: {self.line_height_ratio}")
        for name in (
            "padding",
            "table_gap",
            "column_offset",
            "corner_radius",
            "min_footer_height",
            "context_row_lines",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")
        for name in (
            "market_structure_width",
            "candle_width",
            "imbalance_width",
            "trade_width",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive: {value}")

    @property
    def line_height(self) -> float:
        """Height of one text line (font_size x line_height_ratio)."""
        return self.font_size * self.line_height_ratio

    @property
    def header_to_box_spacing(self) -> float:
        """Gap between a section header baseline and the panels below it."""
        return self.line_height * self.header_spacing_ratio
