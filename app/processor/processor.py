import threading

from app.config.settings import Settings
from app.entitlement.ledger import EntitlementLedger
from app.entitlement.models import EntitlementState
from app.exceptions import ConfigurationMissingError
from app.extraction.extractor import Extractor
from app.extraction.media import resolve_media_kind
from app.extraction.models import UploadedDocument
from app.extraction.progress import ProgressCallback
from app.imaging.normalizer import ImageNormalizer
from app.logging.logger import Log
from app.ocr.tesseract_adapter import TesseractAdapter
from app.pdf.factory import PdfExtractorFactory
from app.pdf.rasterizer import PdfRasterizer
from app.processor.models import PreparedDocument, SimplifyOutcome
from app.processor.pipeline import PipelineContext, PipelineStep, run_steps
from app.processor.steps import (
    CheckQuotaStep,
    ConsumeQuotaStep,
    EnforceSizeLimitStep,
    RedactStep,
    RequireTextStep,
    SimplifyStep,
    ValidateLanguageStep,
)
from app.redaction.base import BaseRedactor
from app.redaction.redactor import Redactor
from app.simplification.base import BaseSimplifier
from app.simplification.factory import SimplifierFactory


class Processor:
    """Orchestrates the disclosure pipeline.

    prepare:  extract -> size ceiling -> redact
    simplify: require text -> size ceiling -> language -> quota -> redact
              -> simplify -> consume quota
    """

    def __init__(
        self,
        *,
        extractor: Extractor,
        redactor: BaseRedactor,
        simplifier: BaseSimplifier | None,
        ledger: EntitlementLedger | None,
        max_text_chars: int = 60_000,
    ) -> None:
        self._extractor = extractor
        self._redactor = redactor
        self._simplifier = simplifier
        self._ledger = ledger
        self._max_text_chars = max_text_chars

    @property
    def ledger(self) -> EntitlementLedger:
        if self._ledger is None:
            raise ConfigurationMissingError(
                "Server is not configured: cookie secret is missing."
            )
        return self._ledger

    @property
    def entitlements_configured(self) -> bool:
        return self._ledger is not None

    @property
    def simplifier_configured(self) -> bool:
        return self._simplifier is not None

    def extract(
        self,
        document: UploadedDocument,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Raw extraction. Callers must redact before the text leaves the process."""
        return self._extractor.extract(document, on_progress=on_progress, cancel_event=cancel_event)

    def prepare(
        self,
        document: UploadedDocument,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> PreparedDocument:
        text = self.extract(document, on_progress=on_progress, cancel_event=cancel_event)
        context = run_steps(
            [EnforceSizeLimitStep(self._max_text_chars), RedactStep(self._redactor)],
            PipelineContext(text=text),
        )
        return PreparedDocument(
            redacted_text=context.redacted_text,
            media_kind=resolve_media_kind(document.media_type, document.filename),
        )

    def simplify(
        self,
        text: str,
        target_language: str | None,
        entitlement: EntitlementState,
    ) -> SimplifyOutcome:
        ledger = self.ledger
        steps: list[PipelineStep] = [
            RequireTextStep(),
            EnforceSizeLimitStep(self._max_text_chars),
            ValidateLanguageStep(),
            CheckQuotaStep(ledger),
            RedactStep(self._redactor),
            SimplifyStep(self._simplifier),
            ConsumeQuotaStep(ledger),
        ]
        context = run_steps(
            steps,
            PipelineContext(
                text=text,
                target_language_raw=target_language,
                entitlement=entitlement,
            ),
        )
        return SimplifyOutcome(
            simplified_text=context.simplified_text,
            target_language=context.target_language,
            usage_token=context.usage_token,
        )


def build_extractor(settings: Settings) -> Extractor:
    return Extractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        rasterizer=PdfRasterizer(
            max_pixels=settings.pdf_render_max_pixels,
            budget_seconds=settings.pdf_render_budget_seconds,
        ),
        image_normalizer=ImageNormalizer(),
        ocr_engine=TesseractAdapter(
            languages=settings.ocr_languages,
            page_segmentation_mode=settings.ocr_page_segmentation_mode,
            timeout_seconds=settings.ocr_timeout_seconds,
        ),
        min_text_chars=settings.pdf_min_text_chars,
        max_ocr_pages=settings.pdf_max_ocr_pages,
        render_scale=settings.pdf_render_scale,
        max_image_dimension=settings.image_max_dimension,
    )


def build_processor(settings: Settings, ledger: EntitlementLedger | None = None) -> Processor:
    """Build a Processor with all required adapters.

    A missing simplification credential is not fatal at startup: extraction
    keeps working and simplify requests fail closed.
    """
    try:
        simplifier: BaseSimplifier | None = SimplifierFactory.create(settings)
    except ConfigurationMissingError as exc:
        Log.warning(f"Simplification disabled: {exc.message}")
        simplifier = None
    return Processor(
        extractor=build_extractor(settings),
        redactor=Redactor(),
        simplifier=simplifier,
        ledger=ledger,
        max_text_chars=settings.max_text_chars,
    )
