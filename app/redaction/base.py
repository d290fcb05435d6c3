from abc import ABC, abstractmethod


class BaseRedactor(ABC):
    """Contract for all redaction filters."""

    @abstractmethod
    def redact(self, text: str) -> str:
        """Replace personal data in *text* with neutral placeholders.

        Must be deterministic and idempotent: ``redact(redact(x)) == redact(x)``.
        Never raises on unmatched input; unrecognized text passes through.
        """
