from abc import ABC, abstractmethod

from app.simplification.models import TargetLanguage


class BaseSimplifier(ABC):
    """Contract for the downstream plain-language transformation."""

    @abstractmethod
    def simplify(self, redacted_text: str, target_language: TargetLanguage) -> str:
        """Rewrite redacted official correspondence in plain language.

        Args:
            redacted_text: Text that has already passed the Redactor.
            target_language: Language of the whole output.

        Returns:
            The simplified text, trimmed and non-empty.

        Raises:
            SimplificationError: on any failure.
        """
