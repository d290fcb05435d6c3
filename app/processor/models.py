from dataclasses import dataclass

from app.extraction.models import MediaKind
from app.simplification.models import TargetLanguage


@dataclass(frozen=True)
class PreparedDocument:
    """Extracted and redacted text of one upload. Never holds unredacted text."""

    redacted_text: str
    media_kind: MediaKind


@dataclass(frozen=True)
class SimplifyOutcome:
    """Result of one simplification request.

    ``usage_token`` is the re-issued usage-count token, or ``None`` when the
    client is premium and nothing was counted.
    """

    simplified_text: str
    target_language: TargetLanguage | None
    usage_token: str | None = None
