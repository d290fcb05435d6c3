"""Multi-strategy text extraction.

Dispatch is resolved once per document:

- plain text: decoded verbatim;
- PDF: embedded text layer first, OCR over rendered pages when the layer is
  too sparse to be a born-digital document;
- image: OCR over an ordered list of normalization variants, first
  non-empty result wins.
"""

import threading
from collections.abc import Iterator
from contextlib import closing

from app.exceptions import (
    ExtractionCancelledError,
    NoTextRecognizedError,
    UnsupportedFormatError,
    UpstreamUnavailableError,
)
from app.extraction.media import ACCEPTED_KINDS_DESCRIPTION, resolve_media_kind
from app.extraction.models import (
    ExtractionAttempt,
    MediaKind,
    NormalizationParams,
    UploadedDocument,
)
from app.extraction.progress import ProgressCallback, ProgressTracker, scaled_progress
from app.extraction.text_cleanup import clean_extracted_text, decode_plain_text, text_density
from app.imaging.exceptions import ImageDecodeError
from app.imaging.normalizer import ImageNormalizer
from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.ocr.exceptions import OcrError, OcrUnavailableError
from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfExtractionError
from app.pdf.rasterizer import PdfRasterizer


def normalization_variants(max_dimension: int = 1800) -> Iterator[NormalizationParams]:
    """OCR attempts in retry order: default, softer, harder, unprocessed."""
    yield NormalizationParams(threshold=175, contrast=1.25, max_dimension=max_dimension)
    yield NormalizationParams(threshold=150, contrast=1.1, max_dimension=max_dimension)
    yield NormalizationParams(threshold=200, contrast=1.35, max_dimension=max_dimension)
    yield NormalizationParams(max_dimension=max_dimension, raw=True)


class Extractor:
    """Turns an uploaded document into cleaned, trimmed text."""

    VARIANT_COUNT = 4

    def __init__(
        self,
        *,
        pdf_extractor: BasePdfExtractor,
        rasterizer: PdfRasterizer,
        image_normalizer: ImageNormalizer,
        ocr_engine: BaseOcrEngine,
        min_text_chars: int = 80,
        max_ocr_pages: int = 5,
        render_scale: float = 2.0,
        max_image_dimension: int = 1800,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._rasterizer = rasterizer
        self._image_normalizer = image_normalizer
        self._ocr_engine = ocr_engine
        self._min_text_chars = min_text_chars
        self._max_ocr_pages = max_ocr_pages
        self._render_scale = render_scale
        self._max_image_dimension = max_image_dimension

    def extract(
        self,
        document: UploadedDocument,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Extract text from *document*.

        Args:
            document: The raw upload.
            on_progress: Receives a non-decreasing progress value in [0, 1].
            cancel_event: When set, extraction stops at the next page or
                attempt boundary.

        Raises:
            UnsupportedFormatError: if the media kind is not recognized.
            NoTextRecognizedError: if nothing readable was found.
            ExtractionCancelledError: if *cancel_event* was set.
            UpstreamUnavailableError: if the OCR engine is not available.
        """
        kind = resolve_media_kind(document.media_type, document.filename)
        tracker = ProgressTracker(on_progress)
        tracker.report(0.0)
        Log.info(f"Extracting {len(document.content)} bytes as {kind.value}")

        try:
            if kind is MediaKind.PLAIN_TEXT:
                raw_text = decode_plain_text(document.content)
            elif kind is MediaKind.PDF:
                raw_text = self._extract_pdf(document.content, tracker, cancel_event)
            elif kind is MediaKind.IMAGE:
                raw_text = self._extract_image(document.content, tracker, cancel_event)
            else:
                raise UnsupportedFormatError(
                    f"File type not supported. Accepted: {ACCEPTED_KINDS_DESCRIPTION}."
                )
        except OcrUnavailableError as exc:
            Log.error(f"OCR engine unavailable: {exc}")
            raise UpstreamUnavailableError() from exc

        text = clean_extracted_text(raw_text)
        tracker.complete()
        if not text:
            Log.info(f"No text recognized in {kind.value} document")
            raise NoTextRecognizedError()
        Log.info(f"Extracted {len(text)} chars from {kind.value} document")
        return text

    # ------------------------------------------------------------------
    # PDF
    # ------------------------------------------------------------------

    def _extract_pdf(
        self,
        content: bytes,
        tracker: ProgressTracker,
        cancel_event: threading.Event | None,
    ) -> str:
        try:
            layer = self._pdf_extractor.extract(content)
        except PdfExtractionError as exc:
            Log.warning(f"Text layer unreadable, falling back to OCR: {exc}")
            layer = ""

        density = text_density(layer)
        if density >= self._min_text_chars:
            Log.info(f"Accepted PDF text layer ({density} chars)")
            return layer

        Log.info(
            f"PDF text layer too sparse ({density} < {self._min_text_chars} chars), "
            f"running OCR on up to {self._max_ocr_pages} pages"
        )
        return self._ocr_pdf(content, tracker, cancel_event)

    def _ocr_pdf(
        self,
        content: bytes,
        tracker: ProgressTracker,
        cancel_event: threading.Event | None,
    ) -> str:
        pages = self._rasterizer.render(
            content,
            max_pages=self._max_ocr_pages,
            scale=self._render_scale,
        )
        page_texts: list[str] = []
        try:
            with self._ocr_engine.session() as ocr, closing(pages):
                for page in pages:
                    self._check_cancelled(cancel_event)
                    if page.error:
                        Log.warning(f"Skipping page {page.index + 1}: {page.error}")
                    else:
                        text = self._recognize_with_retry(
                            ocr,
                            page.png_bytes,
                            scaled_progress(
                                tracker.report,
                                page.index / page.total,
                                (page.index + 1) / page.total,
                            ),
                            cancel_event,
                        )
                        if text:
                            page_texts.append(text)
                    tracker.report((page.index + 1) / page.total)
        except PdfExtractionError as exc:
            Log.warning(f"PDF could not be rasterized: {exc}")
            raise NoTextRecognizedError(
                "The PDF file could not be read. Please check that it is not "
                "damaged or password protected."
            ) from exc

        Log.info(f"OCR recognized text on {len(page_texts)} PDF page(s)")
        return "\n\n".join(page_texts)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def _extract_image(
        self,
        content: bytes,
        tracker: ProgressTracker,
        cancel_event: threading.Event | None,
    ) -> str:
        with self._ocr_engine.session() as ocr:
            return self._recognize_with_retry(ocr, content, tracker.report, cancel_event)

    def _recognize_with_retry(
        self,
        ocr: BaseOcrEngine,
        image_bytes: bytes,
        on_progress: ProgressCallback,
        cancel_event: threading.Event | None,
    ) -> str:
        """Try each normalization variant in order; the first non-empty text wins."""
        step = 1.0 / self.VARIANT_COUNT
        for number, params in enumerate(normalization_variants(self._max_image_dimension)):
            self._check_cancelled(cancel_event)
            progress = scaled_progress(on_progress, number * step, (number + 1) * step)
            attempt = self._attempt(ocr, image_bytes, params, progress)
            if attempt is not None and attempt.succeeded:
                Log.info(f"OCR succeeded on attempt {number + 1}")
                return attempt.text
            Log.debug(f"OCR attempt {number + 1} produced no text")
        return ""

    def _attempt(
        self,
        ocr: BaseOcrEngine,
        image_bytes: bytes,
        params: NormalizationParams,
        on_progress: ProgressCallback,
    ) -> ExtractionAttempt | None:
        if params.raw:
            payload = image_bytes
        else:
            try:
                payload = self._image_normalizer.normalize(image_bytes, params)
            except ImageDecodeError as exc:
                Log.warning(f"Image normalization skipped: {exc}")
                return None

        try:
            text = ocr.recognize(payload, on_progress=on_progress)
        except OcrUnavailableError:
            raise
        except OcrError as exc:
            Log.warning(f"OCR attempt failed: {exc}")
            return None
        return ExtractionAttempt(params=params, text=text.strip())

    @staticmethod
    def _check_cancelled(cancel_event: threading.Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            Log.info("Extraction cancelled")
            raise ExtractionCancelledError()

