"""Custom exceptions used across pdfcompare."""

from __future__ import annotations

from typing import Tuple

__all__ = [
    "PDFCompareError",
    "MasterNotFoundError",
    "MasterUnreadableError",
    "ActualUnreadableError",
    "DimensionMismatchError",
    "ChannelMismatchError",
]


class PDFCompareError(Exception):
    """Base class for comparison failures scoped to a single sample."""

    pass


class MasterNotFoundError(PDFCompareError):
    """Raised when the reference image of a sample does not exist."""

    def __init__(self, path) -> None:
        super().__init__(f"Master file {path} was not found")
        self.path = path


class MasterUnreadableError(PDFCompareError):
    """Raised when the reference image exists but cannot be decoded."""

    def __init__(self, path, reason: str = "") -> None:
        message = f"Master file {path} could not be read"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class ActualUnreadableError(PDFCompareError):
    """Raised when the rendered image cannot be decoded."""

    def __init__(self, path, reason: str = "") -> None:
        message = f"Actual image {path} could not be read"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class DimensionMismatchError(PDFCompareError):
    """Raised when expected and actual images differ in size."""

    def __init__(self, expected_size: Tuple[int, int], actual_size: Tuple[int, int]) -> None:
        super().__init__(
            "Image sizes differ: expected {}x{}, actual {}x{}".format(*expected_size, *actual_size)
        )
        self.expected_size = expected_size
        self.actual_size = actual_size


class ChannelMismatchError(PDFCompareError):
    """Raised when the images carry a different number of colour channels."""

    def __init__(self, expected_channels: int, actual_channels: int) -> None:
        super().__init__(f"Channel count differs: expected {expected_channels}, actual {actual_channels}")
        self.expected_channels = expected_channels
        self.actual_channels = actual_channels
