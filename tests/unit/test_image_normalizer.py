import io
from unittest.mock import MagicMock, patch

import pymupdf
import pytest
from PIL import Image, UnidentifiedImageError

from app.extraction.models import NormalizationParams
from app.imaging.exceptions import ImageDecodeError
from app.imaging.normalizer import ImageNormalizer, binarization_table, decode_image


def _open(png: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(png))
    img.load()
    return img


class TestBinarizationTable:
    def test_has_one_entry_per_gray_level(self) -> None:
        assert len(binarization_table(175, 1.25)) == 256

    def test_only_black_and_white(self) -> None:
        assert set(binarization_table(175, 1.25)) == {0, 255}

    def test_higher_threshold_turns_more_levels_black(self) -> None:
        soft = binarization_table(150, 1.1).count(0)
        hard = binarization_table(200, 1.35).count(0)
        assert hard > soft

    def test_contrast_stretches_around_mid_gray(self) -> None:
        table = binarization_table(128, 2.0)
        assert table[127] == 0
        assert table[128] == 255


class TestImageNormalizer:
    def test_output_is_bitonal_png(self, text_image_png: bytes) -> None:
        result = ImageNormalizer().normalize(text_image_png, NormalizationParams())
        img = _open(result)
        assert img.format == "PNG"
        assert img.mode == "1"

    def test_light_background_becomes_white(self, text_image_png: bytes) -> None:
        result = _open(ImageNormalizer().normalize(text_image_png, NormalizationParams()))
        assert result.convert("L").getpixel((0, 0)) == 255

    def test_downscales_longer_edge(self, large_image_png: bytes) -> None:
        result = _open(
            ImageNormalizer().normalize(large_image_png, NormalizationParams(max_dimension=1800))
        )
        assert result.size == (1800, 600)

    def test_never_upscales(self, text_image_png: bytes) -> None:
        result = _open(ImageNormalizer().normalize(text_image_png, NormalizationParams()))
        assert result.size == (640, 160)

    def test_flattens_transparency_onto_white(self, transparent_image_png: bytes) -> None:
        result = _open(ImageNormalizer().normalize(transparent_image_png, NormalizationParams()))
        gray = result.convert("L")
        assert gray.getpixel((0, 0)) == 255
        assert gray.getpixel((20, 20)) == 0


class TestDecodeImage:
    def test_returns_rgb(self, transparent_image_png: bytes) -> None:
        assert decode_image(transparent_image_png).mode == "RGB"

    def test_garbage_raises_decode_error(self) -> None:
        with pytest.raises(ImageDecodeError):
            decode_image(b"definitely not an image")

    @pytest.mark.parametrize("colorspace", [pymupdf.csGRAY, pymupdf.csCMYK, pymupdf.csRGB])
    def test_pymupdf_fallback_converts_to_rgb(self, colorspace: "pymupdf.Colorspace") -> None:
        pix = pymupdf.Pixmap(colorspace, pymupdf.IRect(0, 0, 4, 2), False)
        pix.clear_with(255)
        doc = MagicMock()
        doc.__enter__.return_value = doc
        doc.page_count = 1
        doc.__getitem__.return_value.get_pixmap.return_value = pix
        with (
            patch("app.imaging.normalizer.Image.open", side_effect=UnidentifiedImageError("unknown")),
            patch("app.imaging.normalizer.pymupdf.open", return_value=doc),
        ):
            img = decode_image(b"exotic raster")
        assert img.mode == "RGB"
        assert img.size == (4, 2)
