"""Pixel exact image comparison producing a :class:`DifferenceMap`."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .diffmap import DifferenceMap
from .errors import ChannelMismatchError, DimensionMismatchError
from .pixels import PixelSource
from .presets import CompareParams

logger = logging.getLogger(__name__)


class Verdict(str, enum.Enum):
    IDENTICAL = "identical"
    DIFFERENT = "different"


class ScanOutcome(str, enum.Enum):
    """How the scan over the expected image ended."""

    SKIPPED = "skipped"  # zero-area input, nothing scanned
    EXHAUSTED = "exhausted"
    EARLY_EXIT = "early_exit"


@dataclass(frozen=True)
class ComparisonResult:
    diff_map: DifferenceMap
    outcome: ScanOutcome
    rows_scanned: int

    @property
    def identical(self) -> bool:
        return self.diff_map.size == 0

    @property
    def verdict(self) -> Verdict:
        return Verdict.IDENTICAL if self.identical else Verdict.DIFFERENT

    def to_dict(self) -> Dict[str, object]:
        return {
            "verdict": self.verdict.value,
            "outcome": self.outcome.value,
            "rows_scanned": self.rows_scanned,
            "regions": self.diff_map.to_dict(),
        }


def compare_images(
    expected: PixelSource,
    actual: PixelSource,
    params: Optional[CompareParams] = None,
) -> ComparisonResult:
    """Compare ``actual`` against ``expected`` pixel by pixel.

    Pixels are visited in row-major order and every mismatch (exact colour
    inequality) is fed to a fresh :class:`DifferenceMap`. When
    ``params.error_limit`` is positive the scan stops after the first row at
    whose end more than ``error_limit`` regions have been closed. The open
    region is rolled up exactly once, whichever way the scan ends.

    Images with zero width or height compare identical without scanning.
    Otherwise both images must have the same size or
    :class:`DimensionMismatchError` is raised before any pixel is read.
    """

    params = (params or CompareParams()).validate()
    diff_map = DifferenceMap(params.horizontal_tolerance, params.vertical_tolerance)

    if expected.width * expected.height == 0 or actual.width * actual.height == 0:
        logger.debug("Zero-area image (%s vs %s); skipping scan", expected.size, actual.size)
        return ComparisonResult(diff_map=diff_map, outcome=ScanOutcome.SKIPPED, rows_scanned=0)

    if expected.size != actual.size:
        raise DimensionMismatchError(expected.size, actual.size)
    if expected.channels != actual.channels:
        raise ChannelMismatchError(expected.channels, actual.channels)

    outcome = ScanOutcome.EXHAUSTED
    rows_scanned = 0
    for y in range(expected.height):
        for x in _mismatching_columns(expected.row(y), actual.row(y)):
            diff_map.add_pixel(int(x), y)
        rows_scanned += 1
        if params.error_limit > 0 and diff_map.size > params.error_limit:
            outcome = ScanOutcome.EARLY_EXIT
            break
    diff_map.rollup_errors()

    if outcome is ScanOutcome.EARLY_EXIT:
        logger.info(
            "Error limit %d exceeded after %d of %d rows",
            params.error_limit,
            rows_scanned,
            expected.height,
        )
    logger.debug("Comparison found %d region(s) in %d row(s)", diff_map.size, rows_scanned)
    return ComparisonResult(diff_map=diff_map, outcome=outcome, rows_scanned=rows_scanned)


def _mismatching_columns(expected_row: np.ndarray, actual_row: np.ndarray) -> np.ndarray:
    # ascending x; a pixel differs when any channel differs
    return np.flatnonzero(np.any(expected_row != actual_row, axis=-1))

