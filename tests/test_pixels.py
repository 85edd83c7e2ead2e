import numpy as np
import pytest
from PIL import Image

from pdfcompare.pixels import PixelSource


def test_from_image_normalises_to_rgba():
    image = Image.new("RGB", (4, 3), (10, 20, 30))
    source = PixelSource.from_image(image, name="sample")
    assert source.size == (4, 3)
    assert source.channels == 4
    assert source.pixel(3, 2) == (10, 20, 30, 255)
    assert "sample" in repr(source)


def test_pixel_outside_image_raises():
    source = PixelSource(np.zeros((2, 3, 4), dtype=np.uint8))
    with pytest.raises(IndexError):
        source.pixel(3, 0)
    with pytest.raises(IndexError):
        source.pixel(0, -1)
    with pytest.raises(IndexError):
        source.row(2)


def test_pixels_are_read_only_and_copied():
    data = np.zeros((2, 2, 4), dtype=np.uint8)
    source = PixelSource(data)
    data[0, 0] = 255
    assert source.pixel(0, 0) == (0, 0, 0, 0)
    assert not source.array.flags.writeable


def test_rgb_and_rgba_files_compare_equal(tmp_path):
    Image.new("RGB", (5, 5), (200, 0, 0)).save(tmp_path / "rgb.png")
    Image.new("RGBA", (5, 5), (200, 0, 0, 255)).save(tmp_path / "rgba.png")
    a = PixelSource.from_file(tmp_path / "rgb.png")
    b = PixelSource.from_file(tmp_path / "rgba.png")
    assert np.array_equal(a.array, b.array)
    assert a.name.endswith("rgb.png")


def test_from_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        PixelSource.from_file(tmp_path / "nope.png")


def test_from_pixmap():
    fitz = pytest.importorskip("fitz")
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, 4, 3), False)
    pix.clear_with(255)
    pix.set_pixel(1, 2, (255, 0, 0))
    source = PixelSource.from_pixmap(pix)
    assert source.size == (4, 3)
    assert source.pixel(1, 2) == (255, 0, 0, 255)
    assert source.pixel(0, 0) == (255, 255, 255, 255)


def test_from_gray_pixmap_converts_to_rgb():
    fitz = pytest.importorskip("fitz")
    pix = fitz.Pixmap(fitz.csGRAY, fitz.IRect(0, 0, 2, 2), False)
    pix.clear_with(128)
    source = PixelSource.from_pixmap(pix)
    r, g, b, a = source.pixel(1, 1)
    assert r == g == b
    assert a == 255
