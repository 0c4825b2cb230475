"""Tests for translation merging."""

import itertools

import pytest

from devicehub.errors import TranslationConflictError
from devicehub.registry.translations import BASE_TRANSLATIONS, merge_translations

SWITCH = {"de": {"Switch": "Schalter", "OK": "OK"}}
DIMMER = {"de": {"Dimmer": "Dimmer", "OK": "OK"}, "fr": {"Dimmer": "Variateur"}}
COLOR = {"fr": {"Color": "Couleur"}}


class TestMergeTranslations:
    def test_merges_new_language(self):
        merged = merge_translations({"de": {"Name": "Name"}}, [COLOR])

        assert merged == {"de": {"Name": "Name"}, "fr": {"Color": "Couleur"}}

    def test_does_not_mutate_base(self):
        merge_translations(BASE_TRANSLATIONS, [SWITCH])

        assert "Switch" not in BASE_TRANSLATIONS["de"]

    def test_does_not_mutate_contributions(self):
        merge_translations({}, [COLOR, {"fr": {"Extra": "Plus"}}])

        assert COLOR == {"fr": {"Color": "Couleur"}}

    def test_identical_phrase_is_idempotent(self):
        merged = merge_translations({}, [SWITCH, DIMMER, SWITCH])

        assert merged["de"]["OK"] == "OK"

    def test_order_does_not_matter_without_conflicts(self):
        """Test every registration order yields the same table."""
        results = [
            merge_translations(BASE_TRANSLATIONS, order)
            for order in itertools.permutations([SWITCH, DIMMER, COLOR])
        ]

        assert all(result == results[0] for result in results)

    def test_conflict_raises(self):
        """Test two different translations of one phrase abort the merge."""
        with pytest.raises(TranslationConflictError) as exc_info:
            merge_translations({}, [SWITCH, {"de": {"OK": "In Ordnung"}}])

        error = exc_info.value
        assert error.language == "de"
        assert error.phrase == "OK"
        assert error.existing == "OK"
        assert error.conflicting == "In Ordnung"
        assert "OK" in str(error)

    def test_conflict_with_base_raises(self):
        with pytest.raises(TranslationConflictError):
            merge_translations(BASE_TRANSLATIONS, [{"de": {"Status": "Zustand"}}])

    def test_same_phrase_other_language_is_not_a_conflict(self):
        merged = merge_translations({}, [{"de": {"Light": "Licht"}}, {"fr": {"Light": "Lumière"}}])

        assert merged["de"]["Light"] == "Licht"
        assert merged["fr"]["Light"] == "Lumière"
