from unittest.mock import MagicMock

import pytest

from app.entitlement.ledger import EntitlementLedger
from app.entitlement.models import EntitlementState
from app.entitlement.signer import TokenSigner
from app.exceptions import (
    ConfigurationMissingError,
    InputTooLargeError,
    InvalidRequestError,
    InvalidTargetLanguageError,
    QuotaExceededError,
    UpstreamUnavailableError,
)
from app.extraction.models import MediaKind, UploadedDocument
from app.processor.processor import Processor
from app.redaction.redactor import Redactor
from app.simplification.exceptions import SimplificationNetworkError
from app.simplification.models import TargetLanguage

FREE = EntitlementState(premium=False, used=0)


@pytest.fixture()
def ledger() -> EntitlementLedger:
    return EntitlementLedger(TokenSigner("processor-secret"))


def _make_processor(
    *,
    extracted: str = "",
    simplifier: MagicMock | None = None,
    ledger: EntitlementLedger | None = None,
    max_text_chars: int = 60_000,
) -> Processor:
    extractor = MagicMock()
    extractor.extract.return_value = extracted
    if simplifier is None:
        simplifier = MagicMock()
        simplifier.simplify.return_value = "1) Kurzfassung"
    return Processor(
        extractor=extractor,
        redactor=Redactor(),
        simplifier=simplifier,
        ledger=ledger,
        max_text_chars=max_text_chars,
    )


class TestPrepare:
    def test_returns_redacted_text_only(self) -> None:
        processor = _make_processor(extracted="Kontakt: a@b.com")
        prepared = processor.prepare(UploadedDocument(b"x", "text/plain"))
        assert prepared.redacted_text == "Kontakt: [CONTACT]"
        assert prepared.media_kind is MediaKind.PLAIN_TEXT

    def test_oversized_extraction_is_rejected(self) -> None:
        processor = _make_processor(extracted="a" * 11, max_text_chars=10)
        with pytest.raises(InputTooLargeError):
            processor.prepare(UploadedDocument(b"x", "text/plain"))


class TestSimplify:
    def test_simplifier_only_sees_redacted_text(self, ledger: EntitlementLedger) -> None:
        simplifier = MagicMock()
        simplifier.simplify.return_value = "ok"
        processor = _make_processor(simplifier=simplifier, ledger=ledger)
        processor.simplify("Mail a@b.com", "de", FREE)
        simplifier.simplify.assert_called_once_with("Mail [CONTACT]", TargetLanguage.GERMAN)

    def test_free_client_gets_incremented_usage_token(self, ledger: EntitlementLedger) -> None:
        processor = _make_processor(ledger=ledger)
        outcome = processor.simplify("Brief", "en", EntitlementState(premium=False, used=1))
        assert outcome.simplified_text == "1) Kurzfassung"
        assert outcome.target_language is TargetLanguage.ENGLISH
        assert ledger.read_usage(outcome.usage_token) == 2

    def test_premium_client_is_not_counted(self, ledger: EntitlementLedger) -> None:
        outcome = _make_processor(ledger=ledger).simplify("Brief", None, EntitlementState(premium=True))
        assert outcome.usage_token is None

    def test_blank_text_is_invalid(self, ledger: EntitlementLedger) -> None:
        with pytest.raises(InvalidRequestError):
            _make_processor(ledger=ledger).simplify("   ", "de", FREE)

    def test_size_limit_is_checked_before_language(self, ledger: EntitlementLedger) -> None:
        processor = _make_processor(ledger=ledger, max_text_chars=3)
        with pytest.raises(InputTooLargeError):
            processor.simplify("abcd", "Klingonisch", FREE)

    def test_invalid_language(self, ledger: EntitlementLedger) -> None:
        with pytest.raises(InvalidTargetLanguageError):
            _make_processor(ledger=ledger).simplify("Brief", "Klingonisch", FREE)

    def test_quota_exhausted_never_reaches_simplifier(self, ledger: EntitlementLedger) -> None:
        simplifier = MagicMock()
        processor = _make_processor(simplifier=simplifier, ledger=ledger)
        with pytest.raises(QuotaExceededError):
            processor.simplify("Brief", "de", EntitlementState(premium=False, used=3))
        simplifier.simplify.assert_not_called()

    def test_provider_failure_is_upstream_unavailable(self, ledger: EntitlementLedger) -> None:
        simplifier = MagicMock()
        simplifier.simplify.side_effect = SimplificationNetworkError("timeout")
        with pytest.raises(UpstreamUnavailableError):
            _make_processor(simplifier=simplifier, ledger=ledger).simplify("Brief", "de", FREE)

    def test_missing_simplifier_fails_closed(self, ledger: EntitlementLedger) -> None:
        processor = Processor(
            extractor=MagicMock(), redactor=Redactor(), simplifier=None, ledger=ledger
        )
        with pytest.raises(ConfigurationMissingError):
            processor.simplify("Brief", "de", FREE)

    def test_missing_ledger_fails_closed(self) -> None:
        with pytest.raises(ConfigurationMissingError):
            _make_processor(ledger=None).simplify("Brief", "de", FREE)
