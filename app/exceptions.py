"""Service-level error taxonomy.

Every error a caller can see is a ``ServiceError`` subclass with a stable
``kind`` and an HTTP status. Adapter errors (PDF, OCR, AI provider, payments)
are translated into one of these at the seam where they are caught.
"""

from typing import ClassVar


class ServiceError(Exception):
    """Base exception for all user-visible service errors."""

    kind: ClassVar[str] = "internal_error"
    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = "Server error. Please try again later."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnsupportedFormatError(ServiceError):
    """Raised when the uploaded media kind is not one we can read."""

    kind = "unsupported_format"
    status_code = 415
    default_message = (
        "File type not supported. Please upload a PDF, a text file (.txt) "
        "or a photo (PNG, JPG, JPEG, WEBP, BMP, TIF, TIFF)."
    )


class NoTextRecognizedError(ServiceError):
    """Raised when extraction produced no usable text after every fallback."""

    kind = "no_text_recognized"
    status_code = 422
    default_message = (
        "No text recognized. Tip: hold the camera straight, move closer and use "
        "good lighting. For scanned PDFs, recognition only works on clearly "
        "readable scans (the first pages are analysed)."
    )


class InputTooLargeError(ServiceError):
    kind = "input_too_large"
    status_code = 413
    default_message = "Text is too long. Please use a shorter document."


class InvalidTargetLanguageError(ServiceError):
    kind = "invalid_target_language"
    status_code = 400
    default_message = "Invalid target language."


class QuotaExceededError(ServiceError):
    kind = "quota_exceeded"
    status_code = 402
    default_message = "Free limit reached. Please activate premium to continue."


class RateLimitedError(ServiceError):
    """Raised when a client exceeded the request budget of the current window."""

    kind = "rate_limited"
    status_code = 429
    default_message = "Too many requests. Please wait a moment and try again."

    def __init__(self, message: str | None = None, retry_after_seconds: int = 60) -> None:
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class UpstreamUnavailableError(ServiceError):
    """Raised when an external collaborator failed; the cause is only logged."""

    kind = "upstream_unavailable"
    status_code = 502
    default_message = "The service is temporarily unavailable. Please try again later."


class ConfigurationMissingError(ServiceError):
    """Raised when a required secret or credential is absent. Always fails closed."""

    kind = "configuration_missing"
    status_code = 500
    default_message = "Server is not configured."


class InvalidRequestError(ServiceError):
    kind = "invalid_request"
    status_code = 400
    default_message = "Invalid request."


class PremiumNotConfirmedError(ServiceError):
    kind = "premium_not_confirmed"
    status_code = 403
    default_message = "Premium could not be confirmed."


class ExtractionCancelledError(ServiceError):
    kind = "extraction_cancelled"
    status_code = 499
    default_message = "Extraction was cancelled."
