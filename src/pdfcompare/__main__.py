"""Command line interface for pdfcompare."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional

from dotenv import load_dotenv

from .driver import SampleResult, compare_sample, summarize
from .overlay import make_overlay_style
from .presets import CompareParams, get_preset, params_from_env
from .report import write_json_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfcompare",
        description="Render PDF samples and compare them pixel by pixel with master images.",
    )
    parser.add_argument("folder", nargs="?", help="Folder holding the samples and their masters")
    parser.add_argument("samples", nargs="*", help="Sample file names (e.g. report.pdf)")
    parser.add_argument("--preset", default="full", help="Preset name (full|fast|fine)")
    parser.add_argument("--width", type=int, help="Render width in pixels")
    parser.add_argument("--height", type=int, help="Render height in pixels")
    parser.add_argument("--error-limit", type=int, help="Stop scanning after this many regions (0 = no limit)")
    parser.add_argument("--h-tolerance", type=int, help="Horizontal merge tolerance (px)")
    parser.add_argument("--v-tolerance", type=int, help="Vertical merge tolerance (px)")
    parser.add_argument("--color", help="Overlay border color (#RRGGBB[AA] or r,g,b[,a])")
    parser.add_argument("--json", help="Write a JSON report to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__

        print(__version__)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.folder or not args.samples:
        parser.error("a folder and at least one sample are required")
        return 2

    try:
        preset = get_preset(args.preset)
        params = _override_params(params_from_env(preset.params), args).validate()
        style = make_overlay_style(args.color)
    except (KeyError, ValueError) as exc:
        parser.error(str(exc))
        return 2

    results: List[SampleResult] = []
    for sample in args.samples:
        results.extend(compare_sample(args.folder, sample, params=params, style=style))

    if args.json:
        write_json_report(results, args.json)

    passed, failed = summarize(results)
    logger.info("%d page(s) identical, %d page(s) different or failed", passed, failed)
    return 0 if failed == 0 else 1


def _override_params(params: CompareParams, args: argparse.Namespace) -> CompareParams:
    overrides = {}
    for field_name, arg_name in (
        ("error_limit", "error_limit"),
        ("horizontal_tolerance", "h_tolerance"),
        ("vertical_tolerance", "v_tolerance"),
    ):
        value = getattr(args, arg_name)
        if value is not None:
            overrides[field_name] = value
    if args.width is not None or args.height is not None:
        overrides["resolution"] = (
            args.width if args.width is not None else params.resolution[0],
            args.height if args.height is not None else params.resolution[1],
        )
    return params.copy(**overrides)


if __name__ == "__main__":
    sys.exit(main())
