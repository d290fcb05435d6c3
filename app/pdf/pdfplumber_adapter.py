import io
from collections.abc import Sequence

import pdfplumber

from app.pdf.base import BasePdfExtractor, PageSelector


class PdfPlumberAdapter(BasePdfExtractor):
    """Text-layer reader on top of pdfplumber (pdfminer.six)."""

    ENGINE = "pdfplumber"

    def _read_pages(self, pdf_bytes: bytes, select: PageSelector) -> Sequence[str]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            return [pdf.pages[i].extract_text() or "" for i in select(len(pdf.pages))]
