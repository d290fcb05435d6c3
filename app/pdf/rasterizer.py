import math
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import pymupdf

from app.logging.logger import Log
from app.pdf.exceptions import PdfExtractionError


@dataclass(frozen=True)
class RenderedPage:
    """A single rendered page, or the reason it could not be rendered."""

    index: int
    total: int
    png_bytes: bytes = b""
    error: str = ""


class PdfRasterizer:
    """Renders PDF pages to PNG bitmaps with PyMuPDF.

    MuPDF cannot interrupt a render, so cost is bounded up front: a page whose
    bitmap would exceed ``max_pixels`` is rendered at a reduced scale, and once
    ``budget_seconds`` have elapsed the remaining pages are reported as failed.
    """

    def __init__(
        self,
        *,
        max_pixels: int = 12_000_000,
        budget_seconds: float = 20.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_pixels = max_pixels
        self._budget_seconds = budget_seconds
        self._clock = clock

    def render(
        self,
        pdf_bytes: bytes,
        *,
        max_pages: int,
        scale: float,
    ) -> Iterator[RenderedPage]:
        """Yield the first ``max_pages`` pages in page order.

        A page that fails to render, or comes after the time budget ran out,
        is yielded with ``error`` set so the caller can skip it and keep going.

        Raises:
            PdfExtractionError: if the document itself cannot be opened.
        """
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise PdfExtractionError(f"PDF could not be opened: {exc}") from exc

        started = self._clock()
        with doc:
            total = min(doc.page_count, max_pages)
            for index in range(total):
                elapsed = self._clock() - started
                if elapsed > self._budget_seconds:
                    Log.warning(f"Render budget spent after {elapsed:.1f}s, skipping page {index + 1}")
                    yield RenderedPage(index=index, total=total, error="render time budget exhausted")
                    continue
                try:
                    page = doc[index]
                    page_scale = self.capped_scale(page.rect.width, page.rect.height, scale)
                    pix = page.get_pixmap(matrix=pymupdf.Matrix(page_scale, page_scale), alpha=False)
                    png = pix.tobytes("png")
                except Exception as exc:
                    Log.warning(f"Rendering page {index + 1} failed: {exc}")
                    yield RenderedPage(index=index, total=total, error=str(exc))
                    continue
                yield RenderedPage(index=index, total=total, png_bytes=png)

    def capped_scale(self, width: float, height: float, scale: float) -> float:
        """Largest scale up to *scale* whose bitmap stays within ``max_pixels``."""
        area = width * height * scale * scale
        if area <= self._max_pixels or area <= 0:
            return scale
        capped = scale * math.sqrt(self._max_pixels / area)
        Log.info(f"Page of {width:.0f}x{height:.0f}pt rendered at scale {capped:.2f} instead of {scale}")
        return capped
