from enum import Enum

from app.exceptions import InvalidTargetLanguageError


class TargetLanguage(str, Enum):
    """Closed set of output languages, keyed by short code."""

    GERMAN = "de"
    ENGLISH = "en"
    TURKISH = "tr"
    UKRAINIAN = "uk"
    ARABIC = "ar"
    POLISH = "pl"
    RUSSIAN = "ru"
    SERBO_CROATIAN = "sh"
    ROMANIAN = "ro"
    ITALIAN = "it"
    SPANISH = "es"
    FRENCH = "fr"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self][0]

    @property
    def english_name(self) -> str:
        return _DISPLAY_NAMES[self][1]

    @classmethod
    def default(cls) -> "TargetLanguage":
        return cls.GERMAN

    @classmethod
    def from_value(cls, value: str | None) -> "TargetLanguage":
        """Look up by code, display name or English name, case-insensitively.

        A missing or blank value selects the default language.

        Raises:
            InvalidTargetLanguageError: for anything outside the closed set.
        """
        key = (value or "").strip().casefold()
        if not key:
            return cls.default()
        for language in cls:
            names = _DISPLAY_NAMES[language]
            if key == language.value or key in (n.casefold() for n in names):
                return language
        raise InvalidTargetLanguageError()


_DISPLAY_NAMES: dict[TargetLanguage, tuple[str, str]] = {
    TargetLanguage.GERMAN: ("Deutsch", "German"),
    TargetLanguage.ENGLISH: ("Englisch", "English"),
    TargetLanguage.TURKISH: ("Türkisch", "Turkish"),
    TargetLanguage.UKRAINIAN: ("Ukrainisch", "Ukrainian"),
    TargetLanguage.ARABIC: ("Arabisch", "Arabic"),
    TargetLanguage.POLISH: ("Polnisch", "Polish"),
    TargetLanguage.RUSSIAN: ("Russisch", "Russian"),
    TargetLanguage.SERBO_CROATIAN: ("Serbokroatisch", "Serbo-Croatian"),
    TargetLanguage.ROMANIAN: ("Rumänisch", "Romanian"),
    TargetLanguage.ITALIAN: ("Italienisch", "Italian"),
    TargetLanguage.SPANISH: ("Spanisch", "Spanish"),
    TargetLanguage.FRENCH: ("Französisch", "French"),
}
