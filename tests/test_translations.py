"""Tests for dictionary lookup and batch translation."""

from leaflet_overlay.translations import (
    TRANSLATIONS,
    lookup,
    supported_languages,
    translate_many,
)


class TestLookup:
    def test_exact_match(self):
        assert lookup("5 mins", "Hindi") == "5 मिनट"
        assert lookup("12 hrs", "Tamil") == "12 மணி நேரம்"

    def test_case_insensitive_match(self):
        expected = TRANSLATIONS["Hindi"]["Quick onset of action within 5 mins"]
        assert lookup("QUICK ONSET OF ACTION WITHIN 5 MINS", "Hindi") == expected

    def test_miss_returns_input(self):
        assert lookup("Not a known claim", "Hindi") == "Not a known claim"

    def test_no_partial_matching(self):
        assert lookup("relief for all", "Hindi") == "relief for all"

    def test_unknown_language_returns_input(self):
        assert lookup("5 mins", "Klingon") == "5 mins"

    def test_source_language_is_identity(self):
        assert lookup("5 mins", "English") == "5 mins"

    def test_custom_dictionaries(self):
        table = {"Marathi": {"Fast Relief": "जलद आराम"}}
        assert lookup("fast relief", "Marathi", table) == "जलद आराम"
        assert lookup("5 mins", "Hindi", table) == "5 mins"


class TestTranslateMany:
    def test_flags_reflect_dictionary_presence(self):
        results = translate_many(["5 mins", "Unknown claim", "12%-15%"], "Hindi")
        assert results[0] == {"original": "5 mins", "translated": "5 मिनट", "has_translation": True}
        assert results[1]["translated"] == "Unknown claim"
        assert results[1]["has_translation"] is False
        # identical text in both languages still counts as translated
        assert results[2]["has_translation"] is True

    def test_english_never_has_translation(self):
        assert not any(r["has_translation"] for r in translate_many(["5 mins"], "English"))


def test_supported_languages():
    assert supported_languages() == ["English", "Hindi", "Tamil"]
