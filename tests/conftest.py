import io

import pytest
from PIL import Image, ImageDraw
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

LETTER_TEXT = (
    "Sehr geehrte Damen und Herren, hiermit teilen wir Ihnen mit, dass Ihr Antrag "
    "auf Wohngeld bewilligt wurde. Bitte reichen Sie die fehlenden Unterlagen bis "
    "zum 15. Mai ein."
)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def dense_pdf_bytes() -> bytes:
    """A born-digital letter whose text layer is well above the OCR threshold."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    y = 720
    for start in range(0, len(LETTER_TEXT), 70):
        c.drawString(72, y, LETTER_TEXT[start:start + 70])
        y -= 16
    c.save()
    return buf.getvalue()


@pytest.fixture()
def blank_pages_pdf_bytes() -> bytes:
    """Seven blank pages, i.e. a scan without a text layer."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for _ in range(7):
        c.showPage()
    c.save()
    return buf.getvalue()


def _png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def text_image_png() -> bytes:
    """A gray-on-white RGB image with a few words drawn on it."""
    img = Image.new("RGB", (640, 160), (235, 235, 235))
    draw = ImageDraw.Draw(img)
    draw.text((20, 60), "Bescheid vom 12.03.2024", fill=(40, 40, 40))
    return _png(img)


@pytest.fixture()
def large_image_png() -> bytes:
    """An image whose longer edge exceeds the normalization cap."""
    return _png(Image.new("RGB", (3600, 1200), (255, 255, 255)))


@pytest.fixture()
def transparent_image_png() -> bytes:
    img = Image.new("RGBA", (100, 50), (0, 0, 0, 0))
    ImageDraw.Draw(img).rectangle((10, 10, 40, 40), fill=(0, 0, 0, 255))
    return _png(img)
