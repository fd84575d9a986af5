"""
Module: config

Purpose:
    Configuration dataclass for one overlay run. Immutable
    configuration with validation on construction.

Key Classes:
    - RunConfig: Paths, exclusions and styling for a run

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - controller: Run orchestration
    - __main__: Command line entry point
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

from trade_overlay.layout.config import StyleConfig
from trade_overlay.loading.discovery import DEFAULT_EXCLUDE_DIRS
from trade_overlay.output.writer import DEFAULT_PRESERVE


@dataclass(frozen=True)
class RunConfig:
    """
    Configuration for processing a tree of chart/record pairs (immutable).

    Attributes:
        root_dir: Directory scanned recursively for pairs
        output_dir: Directory receiving combined images (cleared each run)
        exclude_dirs: Entry names skipped while scanning
        preserve_entries: Output entries kept when clearing
        margin: Inset around the chart and gap before the panels
        style: Panel styling

    Example:
        >>> config = RunConfig(root_dir=Path("journal"))
        >>> "log_outputs" in config.scan_excludes
        True
    """

    root_dir: Path = Path(".")
    output_dir: Path = Path("log_outputs")
    exclude_dirs: FrozenSet[str] = DEFAULT_EXCLUDE_DIRS
    preserve_entries: FrozenSet[str] = DEFAULT_PRESERVE
    margin: int = 20
    style: StyleConfig = field(default_factory=StyleConfig)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if not str(self.output_dir) or self.output_dir == Path("."):
            raise ValueError(f"output_dir must be a subdirectory: {self.output_dir!r}")

    @property
    def scan_excludes(self) -> FrozenSet[str]:
        """Excluded names plus the output directory itself."""
        return frozenset(self.exclude_dirs) | {self.output_dir.name}
