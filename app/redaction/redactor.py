"""Deterministic, ordered PII redaction.

Processing flow (each rule sees the output of the previous one):
1. Email addresses            -> [CONTACT]
2. Phone-number digit runs     -> [CONTACT]
3. IBANs                       -> [IBAN]
4. Postal code + city          -> [LOCATION]
5. Street name + house number  -> [ADDRESS]
6. Labeled header fields       -> "<label>: [REDACTED]"

Placeholders contain no digits, no "@" and start with "[", so no rule can
match a placeholder and re-running the pipeline is a no-op. The filter fails
open: text no rule recognizes passes through unchanged.
"""

from __future__ import annotations

import re
from typing import ClassVar

from app.logging.logger import Log
from app.redaction.base import BaseRedactor
from app.redaction.models import RedactionResult, RedactionRule

CONTACT = "[CONTACT]"
IBAN = "[IBAN]"
LOCATION = "[LOCATION]"
ADDRESS = "[ADDRESS]"
REDACTED = "[REDACTED]"

_STREET_SUFFIXES = (
    "straße|strasse|str\\.|gasse|weg|platz|allee|ring|damm|ufer|promenade"
)
_STREET_WORDS = (
    "straße|strasse|gasse|weg|platz|allee|ring|damm|ufer|promenade"
    "|street|avenue|road|lane|drive|boulevard"
)
_FIELD_LABELS = (
    "name|first name|last name|full name|vorname|nachname"
    "|address|adresse|anschrift|street|straße|strasse|plz|zip|postcode|ort|city"
    "|phone|telephone|telefon|tel\\.|mobile|handy|fax"
    "|e-mail|email|iban|bic|account holder|kontoinhaber"
    "|recipient|empfänger|sender|absender|date of birth|geburtsdatum"
)


class Redactor(BaseRedactor):
    """Regex rule pipeline replacing personal data with neutral placeholders."""

    _EMAIL_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}",
        re.IGNORECASE,
    )
    # Optional country code, optional area code, then at least two more groups.
    # Word-boundary guards keep it from biting into IBANs and other tokens.
    _PHONE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"(?<!\w)"
        r"(?:\+?\d{1,3}[\s-]?)?"
        r"(?:\(?\d{2,5}\)?[\s-]?)?"
        r"\d{3,}[\s-]?\d{2,}(?:[\s-]?\d{2,})"
        r"(?!\w)",
    )
    _IBAN_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b[A-Z]{2}\d{2}[A-Z0-9]{11,30}\b",
    )
    _POSTAL_CITY_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b\d{4,5}[ \t]+[A-ZÄÖÜ][\w-]+(?:[ \t]+[A-ZÄÖÜ][\w-]+)?",
    )
    _STREET_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b(?:"
        rf"[A-ZÄÖÜ][\w-]*[ \t]+(?i:{_STREET_WORDS})"
        rf"|[A-ZÄÖÜ][\w-]{{2,}}?(?i:{_STREET_SUFFIXES})"
        r")[ \t]+\d+[A-Za-z]?\b",
    )
    _FIELD_RE: ClassVar[re.Pattern[str]] = re.compile(
        rf"^([ \t]*)({_FIELD_LABELS})[ \t]*:[ \t]*\S.*$",
        re.IGNORECASE | re.MULTILINE,
    )

    RULES: ClassVar[list[RedactionRule]] = [
        RedactionRule("EMAIL", _EMAIL_RE, CONTACT),
        RedactionRule("PHONE", _PHONE_RE, CONTACT),
        RedactionRule("IBAN", _IBAN_RE, IBAN),
        RedactionRule("LOCATION", _POSTAL_CITY_RE, LOCATION),
        RedactionRule("ADDRESS", _STREET_RE, ADDRESS),
        RedactionRule("FIELD", _FIELD_RE, rf"\1\2: {REDACTED}"),
    ]

    def redact(self, text: str) -> str:
        return self.redact_with_report(text).redacted_text

    def redact_with_report(self, text: str) -> RedactionResult:
        """Run every rule in order and count replacements per rule."""
        counts: dict[str, int] = {}
        result = text
        for rule in self.RULES:
            result, replaced = rule.pattern.subn(rule.replacement, result)
            if replaced:
                counts[rule.name] = replaced

        if counts:
            Log.info(f"Redacted {sum(counts.values())} span(s): {counts}")
        return RedactionResult(redacted_text=result, counts=counts)
