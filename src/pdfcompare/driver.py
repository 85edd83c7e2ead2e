"""Render samples, compare them against their masters and report."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from PIL import UnidentifiedImageError

from .compare import ScanOutcome, compare_images
from .errors import (
    ActualUnreadableError,
    ChannelMismatchError,
    DimensionMismatchError,
    MasterNotFoundError,
    MasterUnreadableError,
)
from .geometry import Rect
from .overlay import OverlayStyle
from .pixels import PixelSource
from .presets import DEFAULT_OVERLAY_SUFFIX, CompareParams
from .render import open_document, render_page, save_png
from .report import overlay_path, write_overlay

logger = logging.getLogger(__name__)


class SampleStatus(str, enum.Enum):
    IDENTICAL = "identical"
    DIFFERENT = "different"
    MASTER_MISSING = "master_missing"
    MASTER_UNREADABLE = "master_unreadable"
    ACTUAL_UNREADABLE = "actual_unreadable"
    DIMENSION_MISMATCH = "dimension_mismatch"


@dataclass(frozen=True)
class SamplePaths:
    """File layout of one rendered page: actual, master and overlay."""

    actual: Path
    master: Path
    overlay: Path

    @classmethod
    def for_page(
        cls,
        folder: str | Path,
        sample: str,
        page_index: int = 0,
        suffix: str = DEFAULT_OVERLAY_SUFFIX,
    ) -> "SamplePaths":
        folder = Path(folder)
        stem = sample if page_index == 0 else f"{sample}.p{page_index + 1}"
        actual = folder / f"{stem}.png"
        return cls(
            actual=actual,
            master=folder / f"{stem}.master.png",
            overlay=overlay_path(actual, suffix),
        )


@dataclass
class SampleResult:
    sample: str
    page_index: int
    status: SampleStatus
    paths: SamplePaths
    regions: List[Rect] = field(default_factory=list)
    overlay: Optional[Path] = None
    early_exit: bool = False
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is SampleStatus.IDENTICAL

    def to_dict(self) -> Dict[str, object]:
        return {
            "sample": self.sample,
            "page_index": self.page_index,
            "status": self.status.value,
            "actual": str(self.paths.actual),
            "master": str(self.paths.master),
            "overlay": str(self.overlay) if self.overlay else None,
            "early_exit": self.early_exit,
            "regions": [region.to_dict() for region in self.regions],
            "message": self.message,
        }


def _load_master(path: Path) -> PixelSource:
    try:
        return PixelSource.from_file(path)
    except FileNotFoundError as exc:
        raise MasterNotFoundError(path) from exc
    except (OSError, UnidentifiedImageError) as exc:
        raise MasterUnreadableError(path, str(exc)) from exc


def _load_actual(path: Path) -> PixelSource:
    try:
        return PixelSource.from_file(path)
    except (OSError, UnidentifiedImageError) as exc:
        raise ActualUnreadableError(path, str(exc)) from exc


def compare_to_master(
    paths: SamplePaths,
    *,
    actual: Optional[PixelSource] = None,
    sample: str = "",
    page_index: int = 0,
    params: Optional[CompareParams] = None,
    style: OverlayStyle = OverlayStyle(),
) -> SampleResult:
    """Compare the actual image against ``paths.master`` and write the overlay.

    ``actual`` is the freshly rendered page; without it ``paths.actual`` is
    decoded from disk. Missing or unreadable images and size mismatches are
    reported through the result status instead of being raised.
    """

    params = params or CompareParams()
    sample = sample or paths.actual.stem

    def failed(status: SampleStatus, exc: Exception) -> SampleResult:
        return SampleResult(sample, page_index, status, paths, message=str(exc))

    try:
        master = _load_master(paths.master)
    except MasterNotFoundError as exc:
        logger.warning("%s", exc)
        return failed(SampleStatus.MASTER_MISSING, exc)
    except MasterUnreadableError as exc:
        logger.error("%s", exc)
        return failed(SampleStatus.MASTER_UNREADABLE, exc)

    if actual is None:
        try:
            actual = _load_actual(paths.actual)
        except ActualUnreadableError as exc:
            logger.error("%s", exc)
            return failed(SampleStatus.ACTUAL_UNREADABLE, exc)

    try:
        result = compare_images(master, actual, params)
    except (DimensionMismatchError, ChannelMismatchError) as exc:
        logger.error("%s: %s", paths.actual, exc)
        return failed(SampleStatus.DIMENSION_MISMATCH, exc)

    if result.identical:
        logger.info("%s matches %s", paths.actual, paths.master)
        return SampleResult(sample, page_index, SampleStatus.IDENTICAL, paths)

    written = write_overlay(paths.actual, result, style=style, suffix=params.overlay_suffix)
    logger.warning(
        "%s differs from %s in %d region(s)", paths.actual, paths.master, result.diff_map.size
    )
    return SampleResult(
        sample,
        page_index,
        SampleStatus.DIFFERENT,
        paths,
        regions=list(result.diff_map.areas),
        overlay=written,
        early_exit=result.outcome is ScanOutcome.EARLY_EXIT,
    )


def compare_sample(
    folder: str | Path,
    sample: str,
    *,
    params: Optional[CompareParams] = None,
    style: OverlayStyle = OverlayStyle(),
) -> List[SampleResult]:
    """Render every page of ``folder/sample`` and compare it with its master.

    Failures to open or render the document propagate; per-page comparison
    failures are contained in the returned results.
    """

    params = (params or CompareParams()).validate()
    width, height = params.resolution
    results: List[SampleResult] = []

    doc = open_document(Path(folder) / sample)
    try:
        logger.debug("Rendering %s (%d page(s)) at %dx%d", sample, len(doc), width, height)
        for index in range(len(doc)):
            paths = SamplePaths.for_page(folder, sample, index, params.overlay_suffix)
            pixmap = render_page(doc[index], width, height)
            save_png(pixmap, paths.actual)
            actual = PixelSource.from_pixmap(pixmap, name=str(paths.actual))
            results.append(
                compare_to_master(
                    paths, actual=actual, sample=sample, page_index=index, params=params, style=style
                )
            )
    finally:
        doc.close()
    return results


def summarize(results: List[SampleResult]) -> Tuple[int, int]:
    """Return ``(passed, failed)`` page counts."""

    passed = sum(1 for result in results if result.ok)
    return passed, len(results) - passed
