import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RedactionRule:
    """One substitution step of the redaction pipeline."""

    name: str  # e.g. "EMAIL", "PHONE", "IBAN"
    pattern: re.Pattern[str]
    replacement: str  # placeholder or backreference template


@dataclass
class RedactionResult:
    """Redacted text plus how many spans each rule replaced."""

    redacted_text: str
    counts: dict[str, int] = field(default_factory=dict)
