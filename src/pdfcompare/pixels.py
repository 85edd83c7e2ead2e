"""Read-only pixel access over decoded raster images."""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import fitz
import numpy as np
from PIL import Image


class PixelSource:
    """Decoded RGBA raster exposed as ``width``, ``height`` and ``pixel(x, y)``.

    Pixels are held in a read-only ``numpy`` array shaped
    ``(height, width, 4)``. Every constructor normalises to RGBA so that the
    same colours compare equal regardless of how the file was encoded.
    """

    def __init__(self, data: np.ndarray, name: str = "") -> None:
        if data.ndim == 2:
            data = data[:, :, np.newaxis]
        if data.ndim != 3:
            raise ValueError(f"Expected a (height, width, channels) array, got shape {data.shape}")
        self._data = np.array(data, dtype=np.uint8)
        self._data.setflags(write=False)
        self.name = name

    @classmethod
    def from_image(cls, image: Image.Image, name: str = "") -> "PixelSource":
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.asarray(image, dtype=np.uint8), name=name)

    @classmethod
    def from_file(cls, path: str | Path) -> "PixelSource":
        with Image.open(path) as image:
            image.load()
            return cls.from_image(image, name=str(path))

    @classmethod
    def from_pixmap(cls, pixmap: fitz.Pixmap, name: str = "") -> "PixelSource":
        if pixmap.colorspace is None or pixmap.colorspace.n != 3:
            pixmap = fitz.Pixmap(fitz.csRGB, pixmap)
        mode = "RGBA" if pixmap.alpha else "RGB"
        image = Image.frombytes(mode, (pixmap.width, pixmap.height), pixmap.samples)
        return cls.from_image(image, name=name)

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def channels(self) -> int:
        return int(self._data.shape[2])

    @property
    def array(self) -> np.ndarray:
        return self._data

    def pixel(self, x: int, y: int) -> Tuple[int, ...]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return tuple(int(channel) for channel in self._data[y, x])

    def row(self, y: int) -> np.ndarray:
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} outside image of height {self.height}")
        return self._data[y]

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<PixelSource{label} {self.width}x{self.height}>"
