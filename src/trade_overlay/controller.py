"""
Module: controller

Purpose:
    Orchestrate one overlay run.
    Discover → (per pair) Load → Layout → Composite → Save

    Pairs are processed strictly one at a time; each pair's decoded
    chart and output canvas are closed before the next pair starts.
    A failing pair is logged and skipped, never aborting the run.

Key Functions:
    - run(): Process every pair under the configured root
    - process_pair(): Produce the combined image for one pair

Key Classes:
    - RunSummary: Outcome of a run
    - PairFailure: One failed pair
    - ProcessError: Exception for a failed pair

Dependencies:
    - PIL: Chart decoding
    - loading: Discovery and record parsing
    - layout: Panel layout engine
    - output: Compositing and writing

Used By:
    - __main__: Command line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image

from .config import RunConfig
from .layout import compose_layout
from .loading import FilePair, RecordError, find_file_pairs, load_record
from .output import (
    CompositionError,
    compose_image,
    output_path_for,
    save_image,
    setup_output_directory,
)

logger = logging.getLogger(__name__)


class ProcessError(Exception):
    """Error producing the combined image for one pair."""
    pass


@dataclass(frozen=True)
class PairFailure:
    """
    A pair that could not be processed.

    Attributes:
        name: Image file name
        error: Error message
    """
    name: str
    error: str


@dataclass(frozen=True)
class RunSummary:
    """
    Outcome of a run (immutable).

    Attributes:
        total: Number of pairs discovered
        outputs: Paths of images written
        failures: Pairs that failed
        elapsed: Wall time in seconds

    Example:
        >>> summary = run(RunConfig())
        >>> print(f"{summary.succeeded}/{summary.total} created")
    """
    total: int
    outputs: Tuple[Path, ...] = ()
    failures: Tuple[PairFailure, ...] = ()
    elapsed: float = 0.0

    @property
    def succeeded(self) -> int:
        return len(self.outputs)

    @property
    def failed(self) -> int:
        return len(self.failures)


def process_pair(pair: FilePair, config: RunConfig) -> Path:
    """
    Build and save the combined image for one pair.

    Nothing is written unless every step succeeds.

    Args:
        pair: Chart image and record
        config: Run configuration

    Returns:
        Path of the written image

    Raises:
        ProcessError: If the record is malformed, the chart unreadable
            or the output cannot be written
    """
    try:
        record = load_record(pair.record_path)
        layout = compose_layout(record, config.style)

        with Image.open(pair.image_path) as chart:
            chart.load()
            combined = compose_image(chart, layout, config.style, margin=config.margin)

        output_path = output_path_for(pair, config.root_dir, config.output_dir)
        try:
            save_image(combined, output_path)
        finally:
            combined.close()
    except (RecordError, CompositionError, OSError, Image.DecompressionBombError) as e:
        raise ProcessError(str(e)) from e

    return output_path


def run(config: Optional[RunConfig] = None) -> RunSummary:
    """
    Process every pair under ``config.root_dir``.

    Clears the output directory first (keeping preserved entries),
    then processes pairs sequentially. Logs one line per pair and a
    final summary.

    Args:
        config: Run configuration (defaults to RunConfig())

    Returns:
        RunSummary

    Raises:
        OSError: If the output directory cannot be prepared or the
            root cannot be scanned
    """
    config = config or RunConfig()
    start_time = time.perf_counter()

    setup_output_directory(config.output_dir, config.preserve_entries)
    pairs = find_file_pairs(config.root_dir, config.scan_excludes)

    if not pairs:
        logger.info("No matching .png/.json pairs found.")
        return RunSummary(total=0)

    logger.info(f"Found {len(pairs)} pairs. Starting processing...")

    outputs: List[Path] = []
    failures: List[PairFailure] = []
    for i, pair in enumerate(pairs, start=1):
        logger.info(f"Processing pair {i}/{len(pairs)}: {pair.name}")
        try:
            output_path = process_pair(pair, config)
        except ProcessError as e:
            logger.error(f"  Failed to process {pair.name}: {e}")
            failures.append(PairFailure(name=pair.name, error=str(e)))
            continue
        logger.info(f"  Created: {output_path}")
        outputs.append(output_path)

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Finished! Processed {len(pairs)} pairs: "
        f"{len(outputs)} created, {len(failures)} failed ({elapsed:.1f}s)"
    )

    return RunSummary(
        total=len(pairs),
        outputs=tuple(outputs),
        failures=tuple(failures),
        elapsed=elapsed,
    )
