from app.config.settings import Settings
from app.pdf.base import BasePdfExtractor
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Picks the text-layer reader named by ``settings.pdf_engine``."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        adapter.ENGINE: adapter for adapter in (PdfPlumberAdapter, PyMuPdfAdapter)
    }
    ALIASES = {"fitz": PyMuPdfAdapter.ENGINE, "mupdf": PyMuPdfAdapter.ENGINE}

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        name = settings.pdf_engine.strip().lower()
        adapter_cls = cls.ADAPTERS.get(cls.ALIASES.get(name, name))
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{name}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        return adapter_cls()
