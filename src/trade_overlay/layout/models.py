"""
Module: layout.models

Purpose:
    Data models for the panel layout.
    Immutable drawing commands, built panels and the final layout result.
    Coordinates are in pixels with y growing downward; text is
    positioned by its baseline.

Key Classes:
    - RectCommand: Rounded, filled rectangle
    - TextCommand: Single run of styled text
    - TextBlockCommand: Positioned multi-line plain text
    - Panel: Output of a panel builder
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - layout.panels: Creates Panels
    - layout.composer: Creates LayoutResult
    - output.renderer: Rasterizes commands
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple, Union

MONOSPACE = "monospace"
SANS_SERIF = "sans-serif"


@dataclass(frozen=True)
class RectCommand:
    """
    Filled rounded rectangle.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width in pixels
        height: Height in pixels
        fill: Fill color
        radius: Corner radius
    """

    x: float
    y: float
    width: float
    height: float
    fill: str
    radius: int = 0

    @property
    def right(self) -> float:
        """Right edge (x + width)."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge (y + height)."""
        return self.y + self.height

    def translated(self, dx: float, dy: float) -> "RectCommand":
        return replace(self, x=self.x + dx, y=self.y + dy)


@dataclass(frozen=True)
class TextCommand:
    """
    Single run of text drawn at a baseline position.

    Attributes:
        x: Left edge of the text
        y: Baseline
        text: Text to draw
        color: Fill color
        font_size: Size in pixels
        family: MONOSPACE or SANS_SERIF
        bold: Bold weight
        underline: Draw an underline below the run
    """

    x: float
    y: float
    text: str
    color: str
    font_size: int
    family: str = MONOSPACE
    bold: bool = False
    underline: bool = False

    def translated(self, dx: float, dy: float) -> "TextCommand":
        return replace(self, x=self.x + dx, y=self.y + dy)


@dataclass(frozen=True)
class TextBlockCommand:
    """
    Plain text block, one entry per line.

    The first line sits on baseline ``y``; each further line is
    ``line_height`` lower.
    """

    x: float
    y: float
    lines: Tuple[str, ...]
    line_height: float
    color: str
    font_size: int
    family: str = MONOSPACE

    @property
    def bottom(self) -> float:
        """Baseline of the line after the last one."""
        return self.y + len(self.lines) * self.line_height

    def translated(self, dx: float, dy: float) -> "TextBlockCommand":
        return replace(self, x=self.x + dx, y=self.y + dy)


DrawCommand = Union[RectCommand, TextCommand, TextBlockCommand]


@dataclass(frozen=True)
class Panel:
    """
    Result of a panel builder, in panel-local coordinates.

    Attributes:
        commands: Drawing commands relative to the panel's top-left
        width: Panel width (0 for an empty panel)
        height: Panel height (0 for an empty panel)
        advance: Horizontal cursor advance (width + gap, or 0)

    Example:
        >>> Panel.empty().is_empty
        True
    """

    commands: Tuple[DrawCommand, ...] = ()
    width: float = 0
    height: float = 0
    advance: float = 0

    @classmethod
    def empty(cls) -> "Panel":
        """Zero-size panel that emits nothing and does not move the cursor."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.commands

    def placed_at(self, x: float, y: float) -> Tuple[DrawCommand, ...]:
        """Commands translated to absolute layout coordinates."""
        return tuple(command.translated(x, y) for command in self.commands)


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output.

    Attributes:
        commands: All drawing commands in paint order
        width: Canvas width required by the layout (including margins)
        height: Canvas height required by the layout (including footer allowance)
        sections: Section headers emitted, in order
    """

    commands: Tuple[DrawCommand, ...]
    width: float
    height: float
    sections: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def rects(self) -> Tuple[RectCommand, ...]:
        """Panel rectangles only."""
        return tuple(c for c in self.commands if isinstance(c, RectCommand))

    @property
    def texts(self) -> Tuple[TextCommand, ...]:
        """Single text runs only."""
        return tuple(c for c in self.commands if isinstance(c, TextCommand))
