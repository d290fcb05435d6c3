from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from app.pdf.exceptions import PdfExtractionError

PageSelector = Callable[[int], range]


class BasePdfExtractor(ABC):
    """Reads the embedded text layer of a PDF.

    Adapters only open the document and read the selected pages; joining
    and error wrapping live here so every engine behaves the same.
    """

    PAGE_SEPARATOR = "\n\n"
    ENGINE = "pdf"

    def extract(self, pdf_bytes: bytes, page_range: range | None = None) -> str:
        """Extract the embedded text layer from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.
            page_range: Zero-based page indices to read. Defaults to all pages;
                indices past the last page are ignored.

        Returns:
            Page texts joined by a blank line, stripped. Empty when the PDF
            has no text layer.

        Raises:
            PdfExtractionError: if the document cannot be read.
        """
        def select(page_count: int) -> range:
            if page_range is None:
                return range(page_count)
            return range(page_range.start, min(page_range.stop, page_count), page_range.step)

        try:
            pages = self._read_pages(pdf_bytes, select)
        except Exception as exc:
            raise PdfExtractionError(f"{self.ENGINE} could not read the text layer: {exc}") from exc
        return self.PAGE_SEPARATOR.join(text.strip() for text in pages).strip()

    @abstractmethod
    def _read_pages(self, pdf_bytes: bytes, select: PageSelector) -> Sequence[str]:
        """Open the document and return the text of each selected page."""
