"""
Module: layout

Purpose:
    Panel layout engine.
    Converts a TradeRecord into positioned drawing commands and the
    canvas size that contains them.

Key Functions:
    - compose_layout(): Main entry point for layout

Key Classes:
    - StyleConfig: Colors, sizes and spacing
    - Panel: Output of a panel builder
    - LayoutResult: Final layout output

Dependencies:
    - loading.models: TradeRecord

Used By:
    - controller: Per-pair processing
    - output.compositor: Rasterization
"""

from .config import StyleConfig
from .models import (
    DrawCommand,
    LayoutResult,
    Panel,
    RectCommand,
    TextBlockCommand,
    TextCommand,
)
from .composer import compose_layout

__all__ = [
    # Config
    "StyleConfig",
    # Models
    "DrawCommand",
    "LayoutResult",
    "Panel",
    "RectCommand",
    "TextBlockCommand",
    "TextCommand",
    # Functions
    "compose_layout",
]
