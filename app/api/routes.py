from flask import Blueprint, Response, jsonify, request

from app.api.cookies import read_entitlement, set_entitlement_cookie
from app.api.services import current_services
from app.entitlement.rate_limiter import client_key
from app.exceptions import (
    ConfigurationMissingError,
    InvalidRequestError,
    PremiumNotConfirmedError,
    RateLimitedError,
    UpstreamUnavailableError,
)
from app.extraction.models import UploadedDocument
from app.logging.logger import Log
from app.payments.exceptions import PaymentVerificationError

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _enforce_rate_limit() -> None:
    services = current_services()
    key = client_key(
        request.headers.get("X-Forwarded-For"),
        request.remote_addr,
        request.headers.get("User-Agent"),
        services.settings.rate_limit_client_id_chars,
    )
    if not services.rate_limiter.allow(key):
        raise RateLimitedError(retry_after_seconds=services.rate_limiter.retry_after_seconds(key))


def _uploaded_document() -> UploadedDocument | None:
    upload = request.files.get("file")
    if upload is None:
        return None
    content = upload.read()
    if not content:
        raise InvalidRequestError("The uploaded file is empty.")
    return UploadedDocument(
        content=content,
        media_type=upload.mimetype or "",
        filename=upload.filename or "",
    )


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object.")
    return body


def _string_field(body: dict, name: str) -> str | None:
    value = body.get(name)
    if value is not None and not isinstance(value, str):
        raise InvalidRequestError(f"'{name}' must be a string.")
    return value


@api_bp.route("/extract", methods=["POST"])
def extract() -> Response:
    """Upload a document and get its redacted text back."""
    processor = current_services().processor
    _enforce_rate_limit()
    document = _uploaded_document()
    if document is None:
        raise InvalidRequestError("No file uploaded.")

    prepared = processor.prepare(document)
    return jsonify(
        {
            "text": prepared.redacted_text,
            "mediaKind": prepared.media_kind.value,
            "characters": len(prepared.redacted_text),
        }
    )


@api_bp.route("/simplify", methods=["POST"])
def simplify() -> Response:
    services = current_services()
    processor = services.processor
    ledger = processor.ledger
    _enforce_rate_limit()

    document = _uploaded_document()
    if document is not None:
        target_language = request.form.get("targetLanguage")
        text = processor.extract(document)
    elif request.form:
        target_language = request.form.get("targetLanguage")
        text = request.form.get("text", "")
    else:
        body = _json_body()
        target_language = _string_field(body, "targetLanguage")
        text = _string_field(body, "text") or ""

    entitlement = read_entitlement(request, ledger, services.settings)
    outcome = processor.simplify(text, target_language, entitlement)

    response = jsonify(
        {
            "simplifiedText": outcome.simplified_text,
            "targetLanguage": outcome.target_language.value if outcome.target_language else None,
        }
    )
    if outcome.usage_token is not None:
        set_entitlement_cookie(
            response, services.settings, services.settings.usage_cookie_name, outcome.usage_token
        )
    return response


@api_bp.route("/usage", methods=["GET"])
def usage() -> Response:
    services = current_services()
    ledger = services.processor.ledger
    state = read_entitlement(request, ledger, services.settings)
    return jsonify({"premium": state.premium, "remaining": state.remaining(ledger.free_limit)})


@api_bp.route("/premium/verify", methods=["POST"])
def verify_premium() -> Response:
    services = current_services()
    ledger = services.processor.ledger
    verifier = services.require_payments()

    session_id = (_string_field(_json_body(), "session_id") or "").strip()
    if not session_id:
        raise InvalidRequestError("session_id is missing.")

    try:
        status = verifier.verify_session(session_id)
    except PaymentVerificationError as exc:
        Log.error(f"Premium verification failed: {exc}")
        raise UpstreamUnavailableError() from exc
    if not status.confirmed:
        raise PremiumNotConfirmedError()

    response = jsonify({"ok": True, "premium": True})
    set_entitlement_cookie(
        response, services.settings, services.settings.premium_cookie_name, ledger.issue_premium()
    )
    Log.info("Premium activated")
    return response


@api_bp.route("/checkout", methods=["POST"])
def checkout() -> Response:
    services = current_services()
    verifier = services.require_payments()
    settings = services.settings
    if not settings.stripe_price_id:
        raise ConfigurationMissingError("Server is not configured: Stripe price is missing.")

    app_url = settings.app_url.rstrip("/")
    try:
        url = verifier.create_checkout_session(
            settings.stripe_price_id,
            success_url=f"{app_url}/premium/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{app_url}/",
        )
    except PaymentVerificationError as exc:
        Log.error(f"Checkout creation failed: {exc}")
        raise UpstreamUnavailableError() from exc
    return jsonify({"url": url})
