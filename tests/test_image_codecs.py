"""
Tests for image_codecs module.

Tests cover:
- Plain-text PPM parsing (comments, header, malformed data)
- PPM serialization layout
- Pillow-backed formats through real files
- Error reporting for missing files and bad extensions
"""

from pathlib import Path

import pytest
from PIL import Image

from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib.image_codecs import (
    from_pil_image,
    load_image,
    read_ppm,
    save_image,
    to_pil_image,
    write_ppm,
)
from IP_Libs.ImageEditingLib.image_models import Pixel, PixelImage
from conftest import make_image


PPM_2X2 = """P3
# a comment line
2 2
255
255 0 0   0 255 0
# another comment
0 0 255   10 20 30
"""


class TestReadPpm:
    """Tests for read_ppm function."""

    def test_parses_pixels_row_major(self):
        image = read_ppm(PPM_2X2.splitlines())

        assert image.size == (2, 2)
        assert image.get_pixel(0, 0) == Pixel(255, 0, 0, 255)
        assert image.get_pixel(0, 1) == Pixel(0, 255, 0, 255)
        assert image.get_pixel(1, 0) == Pixel(0, 0, 255, 255)
        assert image.get_pixel(1, 1) == Pixel(10, 20, 30, 255)

    def test_uses_header_max_value(self):
        image = read_ppm(["P3", "1 1", "100", "1 2 3"])

        assert image.get_pixel(0, 0) == Pixel(1, 2, 3, 100)

    def test_rejects_wrong_magic(self):
        with pytest.raises(InvalidOperationError):
            read_ppm(["P6", "1 1", "255", "0 0 0"])

    def test_rejects_empty_content(self):
        with pytest.raises(InvalidOperationError):
            read_ppm(["# only a comment"])

    def test_rejects_short_data(self):
        with pytest.raises(InvalidOperationError):
            read_ppm(["P3", "2 1", "255", "0 0 0 1 1"])

    def test_rejects_non_numeric(self):
        with pytest.raises(InvalidOperationError):
            read_ppm(["P3", "1 1", "255", "0 zero 0"])

    def test_rejects_out_of_range_channel(self):
        with pytest.raises(InvalidOperationError):
            read_ppm(["P3", "1 1", "100", "0 101 0"])


class TestWritePpm:
    """Tests for write_ppm function."""

    def test_layout(self):
        image = make_image([[(1, 2, 3), (4, 5, 6)]])

        lines = write_ppm(image).splitlines()

        assert lines[0] == "P3"
        assert lines[1].startswith("#")
        assert lines[2] == "2 1"
        assert lines[3] == "255"
        assert lines[4:] == ["1", "2", "3", "4", "5", "6"]

    def test_output_reads_back(self, gradient_image):
        assert read_ppm(write_ppm(gradient_image).splitlines()) == gradient_image


class TestPillowBridge:
    """Tests for to_pil_image and from_pil_image."""

    def test_to_pil_image(self, gradient_image):
        pil_image = to_pil_image(gradient_image)

        assert pil_image.mode == "RGB"
        assert pil_image.size == (4, 3)
        # Pillow indexes (x, y) = (col, row)
        assert pil_image.getpixel((3, 2)) == (23, 43, 63)

    def test_to_pil_image_rescales_max_value(self):
        image = make_image([[(50, 100, 0, 100)]])

        assert to_pil_image(image).getpixel((0, 0)) == (127, 255, 0)

    def test_from_pil_image_converts_mode(self):
        pil_image = Image.new("RGBA", (3, 2), (9, 8, 7, 128))

        image = from_pil_image(pil_image)

        assert image.size == (3, 2)
        assert image.get_pixel(1, 2) == Pixel(9, 8, 7, 255)


class TestFileIO:
    """Tests for load_image and save_image."""

    def test_ppm_file_round_trip(self, tmp_path, gradient_image):
        path = tmp_path / "gradient.ppm"

        save_image(path, gradient_image)

        assert path.read_text().startswith("P3\n")
        assert load_image(path) == gradient_image

    def test_png_file_round_trip(self, tmp_path, gradient_image):
        path = tmp_path / "gradient.png"

        save_image(str(path), gradient_image)

        with Image.open(path) as saved:
            assert saved.format == "PNG"
        assert load_image(str(path)) == gradient_image

    def test_uppercase_ppm_extension(self, tmp_path, gradient_image):
        path = tmp_path / "GRADIENT.PPM"

        save_image(path, gradient_image)

        assert path.read_text().startswith("P3\n")

    def test_jpg_uses_jpeg_encoder(self, tmp_path, gradient_image):
        path = tmp_path / "gradient.jpg"

        save_image(path, gradient_image)

        with Image.open(path) as saved:
            assert saved.format == "JPEG"
        assert load_image(path).size == gradient_image.size

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(InvalidOperationError, match="not found"):
            load_image(tmp_path / "missing.ppm")

        with pytest.raises(InvalidOperationError, match="not found"):
            load_image(tmp_path / "missing.png")

    def test_load_unreadable_raster(self, tmp_path):
        path = tmp_path / "not_an_image.png"
        path.write_text("hello")

        with pytest.raises(InvalidOperationError):
            load_image(path)

    def test_save_without_extension(self, tmp_path, gradient_image):
        with pytest.raises(InvalidOperationError, match="extension"):
            save_image(tmp_path / "gradient", gradient_image)

    def test_save_unknown_extension(self, tmp_path, gradient_image):
        with pytest.raises(InvalidOperationError):
            save_image(tmp_path / "gradient.notaformat", gradient_image)

    def test_save_into_missing_directory(self, tmp_path, gradient_image):
        with pytest.raises(InvalidOperationError):
            save_image(tmp_path / "nope" / "gradient.ppm", gradient_image)

    def test_returns_path(self, tmp_path, gradient_image):
        path = save_image(str(tmp_path / "out.ppm"), gradient_image)

        assert isinstance(path, Path)
        assert path.exists()
