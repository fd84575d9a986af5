"""
Module: output.writer

Purpose:
    Output directory handling: clearing prior output, mirroring the
    source layout and writing images without leaving partial files.

Key Functions:
    - setup_output_directory(): Clear and create the output directory
    - output_path_for(): Destination path for a pair
    - save_image(): Write a PNG via a temporary sibling file

Dependencies:
    - shutil (std)
    - PIL: Image saving

Used By:
    - controller: Run orchestration
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from PIL import Image

from trade_overlay.loading.discovery import FilePair

logger = logging.getLogger(__name__)

DEFAULT_PRESERVE = frozenset({".obsidian"})


def setup_output_directory(
    output_dir: Path,
    preserve: Iterable[str] = DEFAULT_PRESERVE,
) -> Path:
    """
    Remove everything in ``output_dir`` except preserved names.

    Creates the directory if it does not exist.

    Args:
        output_dir: Output root
        preserve: Entry names to keep

    Returns:
        The output directory

    Raises:
        OSError: If entries cannot be removed or the directory created
    """
    keep = frozenset(preserve)
    if output_dir.exists():
        for entry in output_dir.iterdir():
            if entry.name in keep:
                continue
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()

    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Directory '{output_dir}' is ready.")
    return output_dir


def output_path_for(pair: FilePair, root: Path, output_dir: Path) -> Path:
    """
    Destination for a pair's combined image.

    Mirrors the image's directory relative to ``root`` and keeps its
    stem (not the normalized one).

    Example:
        >>> output_path_for(pair, Path("."), Path("log_outputs"))  # ./eu/EURUSD 1.png
        PosixPath('log_outputs/eu/EURUSD 1.png')
    """
    relative_dir = pair.image_path.parent.relative_to(root)
    return output_dir / relative_dir / f"{pair.image_path.stem}.png"


def save_image(image: Image.Image, path: Path) -> Path:
    """
    Save ``image`` as PNG at ``path``.

    The file is written next to the destination and renamed into
    place, so a failed save leaves no partial output.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        image.save(tmp_path, "PNG")
        tmp_path.replace(path)
    finally:
        tmp_path.unlink(missing_ok=True)
    return path
