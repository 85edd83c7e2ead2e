"""Visual regression testing of rendered PDF pages against master images."""

from __future__ import annotations

from .compare import ComparisonResult, ScanOutcome, Verdict, compare_images
from .diffmap import DifferenceMap
from .driver import SamplePaths, SampleResult, SampleStatus, compare_sample, compare_to_master
from .errors import (
    ActualUnreadableError,
    DimensionMismatchError,
    ChannelMismatchError,
    MasterNotFoundError,
    MasterUnreadableError,
    PDFCompareError,
)
from .geometry import Rect
from .pixels import PixelSource
from .presets import CompareParams, get_preset, iter_presets

__all__ = [
    "compare_images",
    "compare_sample",
    "compare_to_master",
    "ComparisonResult",
    "CompareParams",
    "DifferenceMap",
    "PixelSource",
    "Rect",
    "SamplePaths",
    "SampleResult",
    "SampleStatus",
    "ScanOutcome",
    "Verdict",
    "PDFCompareError",
    "MasterNotFoundError",
    "MasterUnreadableError",
    "ChannelMismatchError",
    "ActualUnreadableError",
    "DimensionMismatchError",
    "get_preset",
    "iter_presets",
]

__version__ = "0.1.0"
