"""
Module: loading.discovery

Purpose:
    Find chart image / record pairs under a root directory.
    Files pair up when their stems match after normalization
    (whitespace and underscores become hyphens).

Key Functions:
    - find_file_pairs(): Recursive pair discovery
    - normalize_stem(): Stem normalization

Key Classes:
    - FilePair: Matched .png and .json paths

Dependencies:
    - pathlib (std)

Used By:
    - controller: Run orchestration
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)

IMAGE_SUFFIX = ".png"
RECORD_SUFFIX = ".json"
DEFAULT_EXCLUDE_DIRS = frozenset({"log_outputs", "node_modules", ".git"})

_STEM_SEPARATORS = re.compile(r"[\s_]")


@dataclass(frozen=True)
class FilePair:
    """
    Chart image and its companion record.

    Attributes:
        stem: Normalized stem shared by both files
        image_path: Path to the .png
        record_path: Path to the .json
    """

    stem: str
    image_path: Path
    record_path: Path

    @property
    def name(self) -> str:
        """Image file name, used in log lines."""
        return self.image_path.name


def normalize_stem(stem: str) -> str:
    """
    Replace each whitespace or underscore character with a hyphen.

    Example:
        >>> normalize_stem("EURUSD 2024_01_05")
        'EURUSD-2024-01-05'
    """
    return _STEM_SEPARATORS.sub("-", stem)


def find_file_pairs(
    root: Path,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> List[FilePair]:
    """
    Recursively pair .png and .json files by normalized stem.

    Entries whose name is in ``exclude_dirs`` are skipped entirely.
    Directories are walked in sorted order; when two files share a
    normalized stem and suffix, the later one wins. Stems missing
    either file are dropped.

    Args:
        root: Directory to scan
        exclude_dirs: Entry names to skip

    Returns:
        Pairs in first-seen stem order

    Raises:
        OSError: If root cannot be listed
    """
    excluded = frozenset(exclude_dirs)
    found: Dict[str, Dict[str, Path]] = {}

    logger.info(f"Scanning for .png/.json pairs in '{root.resolve()}'...")
    _scan(root, excluded, found)

    pairs = [
        FilePair(stem=stem, image_path=files[IMAGE_SUFFIX], record_path=files[RECORD_SUFFIX])
        for stem, files in found.items()
        if IMAGE_SUFFIX in files and RECORD_SUFFIX in files
    ]
    logger.debug(f"{len(found)} stems seen, {len(pairs)} complete pairs")
    return pairs


def _scan(directory: Path, excluded: frozenset, found: Dict[str, Dict[str, Path]]) -> None:
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.name in excluded:
            continue
        if entry.is_dir():
            _scan(entry, excluded, found)
        elif entry.is_file() and entry.suffix in (IMAGE_SUFFIX, RECORD_SUFFIX):
            stem = normalize_stem(entry.stem)
            found.setdefault(stem, {})[entry.suffix] = entry
