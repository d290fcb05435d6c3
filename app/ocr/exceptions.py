class OcrError(Exception):
    """Raised when the OCR engine fails on a single recognition call."""


class OcrTimeoutError(OcrError):
    """Raised when a recognition call exceeds its time budget."""


class OcrUnavailableError(OcrError):
    """Raised when the OCR engine cannot be acquired at all."""
