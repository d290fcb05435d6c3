"""Bitonal image normalization for character recognition.

Processing flow:
1. Decode (Pillow first, PyMuPDF pixmap rendering as fallback).
2. Apply EXIF orientation and flatten transparency onto white.
3. Downscale so the longer edge fits ``max_dimension`` (never upscale).
4. Grayscale with luma weights 0.299 R + 0.587 G + 0.114 B.
5. Linear contrast stretch around mid-gray 128, then threshold to black/white.
6. Encode as 1-bit PNG.
"""

import io

import pymupdf
from PIL import Image, ImageOps, UnidentifiedImageError

from app.extraction.models import NormalizationParams
from app.imaging.exceptions import ImageDecodeError
from app.logging.logger import Log

_MID_GRAY = 128


def decode_image(data: bytes) -> Image.Image:
    """Decode *data* into an RGB Pillow image.

    Raises:
        ImageDecodeError: if neither Pillow nor the PyMuPDF fallback can read it.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return _flatten(ImageOps.exif_transpose(img))
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        Log.debug(f"Pillow could not decode image ({exc}); trying PyMuPDF")

    try:
        with pymupdf.open(stream=data) as doc:  # type: ignore[no-untyped-call]
            if doc.page_count < 1:
                raise ImageDecodeError("Image contains no frames")
            pix = doc[0].get_pixmap(alpha=False)
            if pix.n != 3:
                # grayscale and CMYK sources
                pix = pymupdf.Pixmap(pymupdf.csRGB, pix)
            return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
    except ImageDecodeError:
        raise
    except Exception as exc:
        raise ImageDecodeError(f"Image could not be decoded: {exc}") from exc


def _flatten(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")


def binarization_table(threshold: int, contrast: float) -> list[int]:
    """Lookup table mapping a gray level to 0 (black) or 255 (white)."""
    table = []
    for gray in range(256):
        stretched = (gray - _MID_GRAY) * contrast + _MID_GRAY
        table.append(255 if stretched >= threshold else 0)
    return table


class ImageNormalizer:
    """Turns an arbitrary raster image into a bitonal PNG tuned for OCR."""

    def normalize(self, image_bytes: bytes, params: NormalizationParams) -> bytes:
        img = decode_image(image_bytes)
        img = self._downscale(img, params.max_dimension)
        gray = img.convert("L")
        bitonal = gray.point(binarization_table(params.threshold, params.contrast))
        bitonal = bitonal.convert("1", dither=Image.Dither.NONE)

        buf = io.BytesIO()
        bitonal.save(buf, format="PNG", optimize=False)
        Log.debug(
            f"Normalized image to {bitonal.width}x{bitonal.height} "
            f"(threshold={params.threshold}, contrast={params.contrast})"
        )
        return buf.getvalue()

    @staticmethod
    def _downscale(img: Image.Image, max_dimension: int) -> Image.Image:
        longest = max(img.width, img.height)
        scale = min(1.0, max_dimension / longest) if longest else 1.0
        if scale >= 1.0:
            return img
        width = max(1, round(img.width * scale))
        height = max(1, round(img.height * scale))
        return img.resize((width, height), Image.Resampling.LANCZOS)
