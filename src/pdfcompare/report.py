"""Overlay artifacts and JSON reports."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from PIL import Image

from .compare import ComparisonResult
from .diffmap import DifferenceMap
from .overlay import OverlayStyle, draw_regions
from .presets import DEFAULT_OVERLAY_SUFFIX

logger = logging.getLogger(__name__)


def overlay_path(actual_path: str | Path, suffix: str = DEFAULT_OVERLAY_SUFFIX) -> Path:
    """``F/S.png`` -> ``F/S.png.compared.png``."""

    actual_path = Path(actual_path)
    return actual_path.with_name(actual_path.name + suffix)


def write_overlay(
    actual_path: str | Path,
    diff: Union[ComparisonResult, DifferenceMap],
    *,
    style: OverlayStyle = OverlayStyle(),
    suffix: str = DEFAULT_OVERLAY_SUFFIX,
) -> Optional[Path]:
    """Save the actual image with the difference regions outlined.

    Nothing is written when the map has no regions. An existing artifact at
    the target path is replaced. Returns the artifact path or ``None``.
    """

    diff_map = diff.diff_map if isinstance(diff, ComparisonResult) else diff
    if diff_map.size == 0:
        return None

    out_path = overlay_path(actual_path, suffix)
    if out_path.exists():
        out_path.unlink()

    with Image.open(actual_path) as actual:
        composed = draw_regions(actual, diff_map.areas, style)
    composed.save(out_path, format="PNG")
    logger.info("Wrote %d difference region(s) to %s", diff_map.size, out_path)
    return out_path


def write_json_report(results: Iterable[object], path: str | Path) -> None:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    data = [result.to_dict() for result in results]
    with out_path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, ensure_ascii=False, indent=2)
