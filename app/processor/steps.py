from app.entitlement.ledger import EntitlementLedger
from app.exceptions import (
    ConfigurationMissingError,
    InputTooLargeError,
    InvalidRequestError,
    UpstreamUnavailableError,
)
from app.logging.logger import Log
from app.processor.pipeline import PipelineContext, PipelineStep
from app.redaction.base import BaseRedactor
from app.simplification.base import BaseSimplifier
from app.simplification.exceptions import SimplificationError
from app.simplification.models import TargetLanguage


class RequireTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.text = context.text.strip()
        if not context.text:
            raise InvalidRequestError("No text provided.")
        return context


class EnforceSizeLimitStep(PipelineStep):
    def __init__(self, max_chars: int) -> None:
        self._max_chars = max_chars

    def run(self, context: PipelineContext) -> PipelineContext:
        if len(context.text) > self._max_chars:
            Log.info(f"Rejected text of {len(context.text)} chars (limit {self._max_chars})")
            raise InputTooLargeError()
        return context


class ValidateLanguageStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.target_language = TargetLanguage.from_value(context.target_language_raw)
        return context


class CheckQuotaStep(PipelineStep):
    def __init__(self, ledger: EntitlementLedger) -> None:
        self._ledger = ledger

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.entitlement is None:
            raise ValueError("PipelineContext.entitlement must be set before the quota check")
        self._ledger.check_quota(context.entitlement)
        return context


class RedactStep(PipelineStep):
    def __init__(self, redactor: BaseRedactor) -> None:
        self._redactor = redactor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.redacted_text = self._redactor.redact(context.text)
        return context


class SimplifyStep(PipelineStep):
    """Hands the redacted text, and only the redacted text, to the simplifier."""

    def __init__(self, simplifier: BaseSimplifier | None) -> None:
        self._simplifier = simplifier

    def run(self, context: PipelineContext) -> PipelineContext:
        if self._simplifier is None:
            raise ConfigurationMissingError(
                "Server is not configured: simplification provider is missing."
            )
        if context.target_language is None:
            raise ValueError("PipelineContext.target_language must be set before simplification")
        try:
            context.simplified_text = self._simplifier.simplify(
                context.redacted_text,
                context.target_language,
            )
        except SimplificationError as exc:
            Log.error(f"Simplification failed: {exc}")
            raise UpstreamUnavailableError() from exc
        return context


class ConsumeQuotaStep(PipelineStep):
    def __init__(self, ledger: EntitlementLedger) -> None:
        self._ledger = ledger

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.entitlement is None:
            raise ValueError("PipelineContext.entitlement must be set before consuming quota")
        context.usage_token = self._ledger.next_usage_token(context.entitlement)
        if context.usage_token is not None:
            Log.info(f"Usage counted: {context.entitlement.used + 1}")
        return context
