"""Comparison parameter presets and environment overrides."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .diffmap import DEFAULT_HORIZONTAL_TOLERANCE, DEFAULT_VERTICAL_TOLERANCE

Resolution = Tuple[int, int]

DEFAULT_RESOLUTION: Resolution = (1200, 1600)
DEFAULT_OVERLAY_SUFFIX = ".compared.png"
FAST_ERROR_LIMIT = 50

ENV_PREFIX = "PDFCOMPARE_"


@dataclass(frozen=True)
class CompareParams:
    """Parameters driving a pixel comparison and its artifacts."""

    error_limit: int = 0
    horizontal_tolerance: int = DEFAULT_HORIZONTAL_TOLERANCE
    vertical_tolerance: int = DEFAULT_VERTICAL_TOLERANCE
    resolution: Resolution = DEFAULT_RESOLUTION
    overlay_suffix: str = DEFAULT_OVERLAY_SUFFIX

    def validate(self) -> "CompareParams":
        if self.error_limit < 0:
            raise ValueError("error_limit must be >= 0")
        if self.horizontal_tolerance < 0 or self.vertical_tolerance < 0:
            raise ValueError("tolerances must be >= 0")
        width, height = self.resolution
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid resolution {width}x{height}")
        if not self.overlay_suffix:
            raise ValueError("overlay_suffix must not be empty")
        return self

    def to_dict(self) -> Dict[str, object]:
        return {
            "error_limit": self.error_limit,
            "horizontal_tolerance": self.horizontal_tolerance,
            "vertical_tolerance": self.vertical_tolerance,
            "resolution": list(self.resolution),
            "overlay_suffix": self.overlay_suffix,
        }

    def copy(self, **overrides: object) -> "CompareParams":
        return replace(self, **overrides)


@dataclass(frozen=True)
class Preset:
    """Named bundle of parameters."""

    name: str
    description: str
    params: CompareParams

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "params": self.params.to_dict(),
        }


PRESETS: Mapping[str, Preset] = {
    "full": Preset(
        name="full",
        description="Scan every row and report every region.",
        params=CompareParams(),
    ),
    "fast": Preset(
        name="fast",
        description="Stop scanning once more than 50 regions were found.",
        params=CompareParams(error_limit=FAST_ERROR_LIMIT),
    ),
    "fine": Preset(
        name="fine",
        description="Small horizontal tolerance; keeps nearby defects apart.",
        params=CompareParams(horizontal_tolerance=1),
    ),
}


def get_preset(name: str) -> Preset:
    key = name.lower()
    if key not in PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(sorted(PRESETS))}")
    return PRESETS[key]


def iter_presets() -> Iterable[Preset]:
    return PRESETS.values()


def _env_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    value = environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX + name} must be an integer, got '{value}'") from exc


def params_from_env(
    base: Optional[CompareParams] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CompareParams:
    """Apply ``PDFCOMPARE_*`` environment variables on top of ``base``."""

    params = base or CompareParams()
    env = os.environ if environ is None else environ
    overrides: Dict[str, object] = {}
    for field_name, env_name in (
        ("error_limit", "ERROR_LIMIT"),
        ("horizontal_tolerance", "H_TOLERANCE"),
        ("vertical_tolerance", "V_TOLERANCE"),
    ):
        value = _env_int(env, env_name)
        if value is not None:
            overrides[field_name] = value

    width = _env_int(env, "WIDTH")
    height = _env_int(env, "HEIGHT")
    if width is not None or height is not None:
        overrides["resolution"] = (
            width if width is not None else params.resolution[0],
            height if height is not None else params.resolution[1],
        )
    return params.copy(**overrides)
