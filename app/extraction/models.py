from dataclasses import dataclass
from enum import Enum


class MediaKind(str, Enum):
    """Closed set of document kinds the extractor can dispatch on."""

    PLAIN_TEXT = "plain_text"
    PDF = "pdf"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class UploadedDocument:
    """Raw upload as received at the boundary. Never persisted."""

    content: bytes
    media_type: str = ""
    filename: str = ""


@dataclass(frozen=True)
class NormalizationParams:
    """Image normalization parameters for one OCR attempt.

    ``raw=True`` marks the last-resort attempt that sends the unprocessed image.
    """

    threshold: int = 175
    contrast: float = 1.25
    max_dimension: int = 1800
    raw: bool = False


@dataclass(frozen=True)
class ExtractionAttempt:
    """One OCR try: the parameters used and what the engine recognized."""

    params: NormalizationParams
    text: str

    @property
    def succeeded(self) -> bool:
        return bool(self.text.strip())
