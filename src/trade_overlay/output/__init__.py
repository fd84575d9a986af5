"""
Module: output

Purpose:
    Raster output: draws layout commands with Pillow, composites them
    beside the chart image and writes the result.

Key Functions:
    - compose_image(): Chart + panels image
    - render_commands(): Rasterize drawing commands
    - setup_output_directory(): Clear prior output
    - save_image(): Write without partial files

Dependencies:
    - PIL: Image drawing and compositing

Used By:
    - controller: Run orchestration
"""

from .compositor import CompositionError, canvas_size, compose_image
from .renderer import load_font, render_commands
from .writer import output_path_for, save_image, setup_output_directory

__all__ = [
    "CompositionError",
    "canvas_size",
    "compose_image",
    "load_font",
    "render_commands",
    "output_path_for",
    "save_image",
    "setup_output_directory",
]
