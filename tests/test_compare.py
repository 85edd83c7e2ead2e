import numpy as np
import pytest

from pdfcompare.compare import ScanOutcome, Verdict, compare_images
from pdfcompare.errors import ChannelMismatchError, DimensionMismatchError, PDFCompareError
from pdfcompare.geometry import Rect
from pdfcompare.pixels import PixelSource
from pdfcompare.presets import CompareParams


def _blank(width, height, value=255):
    return np.full((height, width, 4), value, dtype=np.uint8)


def _sources(expected, actual):
    return PixelSource(expected, name="expected"), PixelSource(actual, name="actual")


def _with_mismatches(width, height, points):
    expected = _blank(width, height)
    actual = expected.copy()
    for x, y in points:
        actual[y, x] = (255, 0, 0, 255)
    return _sources(expected, actual)


def test_identical_images():
    expected, actual = _sources(_blank(8, 6), _blank(8, 6))
    result = compare_images(expected, actual)
    assert result.identical
    assert result.verdict is Verdict.IDENTICAL
    assert result.diff_map.size == 0
    assert result.outcome is ScanOutcome.EXHAUSTED
    assert result.rows_scanned == 6


@pytest.mark.parametrize(
    "expected_shape, actual_shape",
    [((0, 5), (5, 5)), ((5, 0), (5, 5)), ((5, 5), (0, 5)), ((0, 0), (3, 7))],
)
def test_zero_area_images_are_identical_without_scanning(expected_shape, actual_shape):
    expected = PixelSource(np.zeros(expected_shape + (4,), dtype=np.uint8))
    actual = PixelSource(np.zeros(actual_shape + (4,), dtype=np.uint8))
    result = compare_images(expected, actual)
    assert result.identical
    assert result.outcome is ScanOutcome.SKIPPED
    assert result.rows_scanned == 0


def test_single_mismatch():
    expected, actual = _with_mismatches(10, 10, [(3, 7)])
    result = compare_images(expected, actual)
    assert result.verdict is Verdict.DIFFERENT
    assert result.diff_map.areas == (Rect(3, 7, 1, 1),)


def test_alpha_only_difference_is_a_mismatch():
    expected = _blank(4, 4)
    actual = expected.copy()
    actual[1, 2, 3] = 0
    result = compare_images(*_sources(expected, actual))
    assert result.diff_map.areas == (Rect(2, 1, 1, 1),)


def test_block_of_mismatches_is_one_region():
    points = [(x, y) for y in range(10, 13) for x in range(10, 13)]
    result = compare_images(*_with_mismatches(30, 30, points))
    assert result.diff_map.areas == (Rect(10, 10, 3, 3),)


def test_regions_follow_row_major_order():
    result = compare_images(*_with_mismatches(20, 5, [(10, 0), (0, 1)]))
    assert result.diff_map.areas == (Rect(10, 0, 1, 1), Rect(0, 1, 1, 1))


def test_tolerances_come_from_params():
    points = [(5, 0), (7, 0)]
    merged = compare_images(*_with_mismatches(20, 2, points))
    split = compare_images(
        *_with_mismatches(20, 2, points),
        CompareParams(horizontal_tolerance=1),
    )
    assert merged.diff_map.areas == (Rect(5, 0, 3, 1),)
    assert split.diff_map.areas == (Rect(5, 0, 1, 1), Rect(7, 0, 1, 1))


@pytest.mark.parametrize("actual_size", [(9, 10), (10, 9), (11, 10)])
def test_dimension_mismatch_raises(actual_size):
    expected = PixelSource(_blank(10, 10))
    actual = PixelSource(_blank(*actual_size))
    with pytest.raises(DimensionMismatchError) as excinfo:
        compare_images(expected, actual)
    assert excinfo.value.expected_size == (10, 10)
    assert excinfo.value.actual_size == actual_size


def test_channel_mismatch_raises():
    expected = PixelSource(np.zeros((2, 2, 3), dtype=np.uint8))
    actual = PixelSource(np.zeros((2, 2, 4), dtype=np.uint8))
    with pytest.raises(ChannelMismatchError) as excinfo:
        compare_images(expected, actual)
    assert isinstance(excinfo.value, PDFCompareError)
    assert (excinfo.value.expected_channels, excinfo.value.actual_channels) == (3, 4)


def test_error_limit_stops_after_row():
    points = [(0, 0), (10, 0), (20, 0), (30, 0), (50, 5)]
    result = compare_images(*_with_mismatches(100, 10, points), CompareParams(error_limit=2))
    assert result.outcome is ScanOutcome.EARLY_EXIT
    assert result.rows_scanned == 1
    assert result.verdict is Verdict.DIFFERENT
    # three regions closed during row 0, the fourth added by the rollup
    assert result.diff_map.areas == (
        Rect(0, 0, 1, 1),
        Rect(10, 0, 1, 1),
        Rect(20, 0, 1, 1),
        Rect(30, 0, 1, 1),
    )


def test_error_limit_can_be_overshot_within_a_row():
    points = [(x, 0) for x in range(0, 60, 10)]
    result = compare_images(*_with_mismatches(100, 3, points), CompareParams(error_limit=1))
    assert result.outcome is ScanOutcome.EARLY_EXIT
    assert result.diff_map.size == 6


def test_error_limit_not_reached_scans_everything():
    points = [(0, 0), (10, 0), (50, 5)]
    result = compare_images(*_with_mismatches(100, 10, points), CompareParams(error_limit=10))
    assert result.outcome is ScanOutcome.EXHAUSTED
    assert result.rows_scanned == 10
    assert result.diff_map.size == 3


def test_zero_error_limit_means_unlimited():
    points = [(x, y) for y in range(0, 10, 3) for x in range(0, 100, 10)]
    result = compare_images(*_with_mismatches(100, 10, points), CompareParams(error_limit=0))
    assert result.outcome is ScanOutcome.EXHAUSTED
    assert result.diff_map.size == len(points)


def test_comparison_is_deterministic():
    rng = np.random.default_rng(7)
    expected = rng.integers(0, 2, size=(40, 60, 4), dtype=np.uint8)
    actual = rng.integers(0, 2, size=(40, 60, 4), dtype=np.uint8)
    first = compare_images(*_sources(expected, actual))
    second = compare_images(*_sources(expected, actual))
    assert first.diff_map.areas == second.diff_map.areas
    assert first.to_dict() == second.to_dict()


def test_negative_error_limit_rejected():
    with pytest.raises(ValueError):
        compare_images(*_sources(_blank(2, 2), _blank(2, 2)), CompareParams(error_limit=-1))
