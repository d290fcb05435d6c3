import pytest

from app.exceptions import InvalidTargetLanguageError
from app.simplification.models import TargetLanguage


class TestTargetLanguage:
    def test_has_twelve_languages(self) -> None:
        assert len(TargetLanguage) == 12

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("de", TargetLanguage.GERMAN),
            ("EN", TargetLanguage.ENGLISH),
            ("Türkisch", TargetLanguage.TURKISH),
            ("ukrainian", TargetLanguage.UKRAINIAN),
            ("  Französisch ", TargetLanguage.FRENCH),
            ("sh", TargetLanguage.SERBO_CROATIAN),
        ],
    )
    def test_lookup_by_code_or_name(self, value: str, expected: TargetLanguage) -> None:
        assert TargetLanguage.from_value(value) is expected

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_selects_default(self, value: str | None) -> None:
        assert TargetLanguage.from_value(value) is TargetLanguage.GERMAN

    @pytest.mark.parametrize("value", ["Klingonisch", "xx", "de-DE"])
    def test_unknown_language_is_rejected(self, value: str) -> None:
        with pytest.raises(InvalidTargetLanguageError):
            TargetLanguage.from_value(value)

    def test_display_names(self) -> None:
        assert TargetLanguage.ARABIC.display_name == "Arabisch"
        assert TargetLanguage.ARABIC.english_name == "Arabic"
