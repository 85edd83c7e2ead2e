"""Page rendering through PyMuPDF."""
from __future__ import annotations

from pathlib import Path

import fitz


def open_document(path: str | Path) -> fitz.Document:
    """Open a PDF; failures are not recoverable and propagate to the caller."""

    return fitz.open(str(path))


def render_page(page: fitz.Page, width: int, height: int) -> fitz.Pixmap:
    """Rasterize ``page`` at ``width`` x ``height`` pixels.

    The page is stretched independently on each axis, the same way a
    renderer asked for a fixed output size behaves.
    """

    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid render size {width}x{height}")
    rect = page.rect
    if rect.width <= 0 or rect.height <= 0:
        raise ValueError(f"Invalid page dimensions: {rect.width}x{rect.height}")
    matrix = fitz.Matrix(width / rect.width, height / rect.height)
    pix = page.get_pixmap(matrix=matrix, colorspace=fitz.csRGB, alpha=False)
    return pix


def save_png(pixmap: fitz.Pixmap, path: str | Path) -> Path:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pixmap.save(str(out_path))
    return out_path
