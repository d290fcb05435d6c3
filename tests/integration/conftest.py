from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
from flask import Flask
from flask.testing import FlaskClient

from app.api.application import create_app
from app.config.settings import Settings
from app.entitlement.ledger import EntitlementLedger
from app.entitlement.rate_limiter import RateLimiter, RateWindowTable
from app.entitlement.signer import TokenSigner
from app.extraction.extractor import Extractor
from app.imaging.normalizer import ImageNormalizer
from app.ocr.base import BaseOcrEngine
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.rasterizer import PdfRasterizer
from app.processor.processor import Processor
from app.redaction.redactor import Redactor
from app.simplification.example_client_adapter import ExampleClientAdapter
from app.simplification.simplifier import Simplifier

COOKIE_SECRET = "integration-secret"


class StubOcrEngine(BaseOcrEngine):
    def __init__(self, text: str = "") -> None:
        self.text = text

    def recognize(self, image_bytes, on_progress=None):  # type: ignore[no-untyped-def]
        return self.text


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        cookie_secret=COOKIE_SECRET,
        simplification_provider="example",
        stripe_secret_key="",
    )


@pytest.fixture()
def ocr_engine() -> StubOcrEngine:
    return StubOcrEngine()


@pytest.fixture()
def ledger(settings: Settings) -> EntitlementLedger:
    return EntitlementLedger(TokenSigner(settings.cookie_secret), free_limit=3)


@pytest.fixture()
def processor(ocr_engine: StubOcrEngine, ledger: EntitlementLedger) -> Processor:
    extractor = Extractor(
        pdf_extractor=PdfPlumberAdapter(),
        rasterizer=PdfRasterizer(),
        image_normalizer=ImageNormalizer(),
        ocr_engine=ocr_engine,
    )
    return Processor(
        extractor=extractor,
        redactor=Redactor(),
        simplifier=Simplifier(client=ExampleClientAdapter(), model="example", temperature=0.0),
        ledger=ledger,
    )


@pytest.fixture()
def payment_verifier() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def app(settings: Settings, processor: Processor, payment_verifier: MagicMock) -> Iterator[Flask]:
    app = create_app(
        settings,
        processor=processor,
        rate_limiter=RateLimiter(RateWindowTable(), window_seconds=60, max_requests=100),
        payment_verifier=payment_verifier,
    )
    app.config["TESTING"] = True
    yield app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
