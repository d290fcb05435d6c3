"""Flask application factory."""

from flask import Flask, Response, jsonify

from app.api.auth import register_basic_auth
from app.api.errors import register_error_handlers
from app.api.routes import api_bp
from app.api.services import EXTENSION_KEY, Services
from app.config.settings import Settings
from app.entitlement.ledger import EntitlementLedger
from app.entitlement.rate_limiter import RateLimiter, RateWindowTable
from app.entitlement.signer import TokenSigner
from app.exceptions import ConfigurationMissingError
from app.logging.logger import Log
from app.payments.base import BasePaymentVerifier
from app.payments.stripe_adapter import StripePaymentVerifier
from app.processor.processor import Processor, build_processor


def build_ledger(settings: Settings) -> EntitlementLedger | None:
    try:
        signer = TokenSigner(settings.cookie_secret)
    except ConfigurationMissingError:
        Log.warning("Cookie secret missing: entitlement endpoints will fail closed")
        return None
    return EntitlementLedger(
        signer,
        free_limit=settings.free_document_limit,
        usage_ceiling=settings.usage_count_ceiling,
    )


def build_payment_verifier(settings: Settings) -> BasePaymentVerifier | None:
    if not settings.stripe_secret_key:
        Log.warning("Stripe secret key missing: premium checkout is disabled")
        return None
    return StripePaymentVerifier(api_key=settings.stripe_secret_key)


def create_app(
    settings: Settings | None = None,
    *,
    processor: Processor | None = None,
    rate_limiter: RateLimiter | None = None,
    payment_verifier: BasePaymentVerifier | None = None,
) -> Flask:
    """Create the application. Collaborators not passed in are built from *settings*."""
    settings = settings or Settings()
    if processor is None:
        processor = build_processor(settings, ledger=build_ledger(settings))
    if rate_limiter is None:
        rate_limiter = RateLimiter(
            RateWindowTable(),
            window_seconds=settings.rate_limit_window_seconds,
            max_requests=settings.rate_limit_max_requests,
        )
    if payment_verifier is None:
        payment_verifier = build_payment_verifier(settings)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes
    app.extensions[EXTENSION_KEY] = Services(
        settings=settings,
        processor=processor,
        rate_limiter=rate_limiter,
        payment_verifier=payment_verifier,
    )

    register_basic_auth(app, settings)
    register_error_handlers(app)
    app.register_blueprint(api_bp)

    @app.route("/healthz")
    def healthz() -> Response:
        services: Services = app.extensions[EXTENSION_KEY]
        return jsonify(
            {
                "status": "ok",
                "env": settings.app_env,
                "entitlements": services.processor.entitlements_configured,
                "simplification": services.processor.simplifier_configured,
                "payments": services.payment_verifier is not None,
            }
        )

    return app
