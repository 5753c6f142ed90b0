"""
Tests for converter.py - end-to-end conversion and dictionary lifecycle.
"""

from unittest.mock import patch

import pytest

from enka.constants import InvalidSearchModeError
from enka.converter import Converter


def katakana(records):
    return [r.katakana for r in records]


class TestConvert:
    """Tests for Converter.convert."""

    def test_computer(self, converter):
        records = converter.convert("computer")
        assert katakana(records) == ["コンピューター", "コンピュータ"]
        first = records[0]
        assert first.hiragana == "こんぴゅーたー"
        assert first.romaji == "konpyu-ta-"
        assert first.kanji is None
        assert first.meaning == "computer"
        assert first.common is True

    def test_case_and_whitespace_ignored(self, converter):
        assert katakana(converter.convert("  Computer ")) == ["コンピューター", "コンピュータ"]

    def test_mode_controls_tiers(self, converter):
        assert converter.convert("mobile") == []
        assert katakana(converter.convert("mobile", mode="normal")) == ["ケータイ", "モバイル"]

    def test_kanji_and_meaning(self, converter):
        record = converter.convert("mobile", mode="normal")[0]
        assert record.kanji == "携帯"
        assert record.meaning == "mobile phone, cell phone"

    def test_no_katakana_reading(self, converter):
        assert converter.convert("book") == []

    def test_fuzzy_disabled_by_default(self, converter):
        assert converter.convert("compter") == []

    def test_fuzzy_fallback(self, converter):
        records = converter.convert("compter", fuzzy=True)
        assert katakana(records) == ["コンピューター", "コンピュータ", "コンプリート"]

    def test_fuzzy_not_used_when_direct_match(self, converter):
        with patch.object(converter.engine, 'find_fuzzy_matches') as fuzzy:
            converter.convert("computer", fuzzy=True)
        fuzzy.assert_not_called()

    def test_max_results(self, converter):
        assert katakana(converter.convert("computer", max_results=1)) == ["コンピューター"]
        assert converter.convert("computer", max_results=0) == []

    def test_unique_katakana(self, converter):
        records = converter.convert("computer", mode="broad")
        assert len(katakana(records)) == len(set(katakana(records)))

    def test_invalid_mode_rejected_before_loading(self, tmp_path):
        converter = Converter(dictionary_path=tmp_path / "missing.json", download=False)
        with pytest.raises(InvalidSearchModeError) as exc_info:
            converter.convert("computer", mode="fast")
        assert str(exc_info.value) == 'Invalid mode "fast". Valid modes are: strict, normal, broad'
        assert not converter.is_initialized


class TestLifecycle:
    """Tests for lazy loading and reloading."""

    def test_initialize_once(self, dictionary):
        with patch('enka.converter.load_dictionary', return_value=dictionary) as load:
            converter = Converter()
            assert not converter.is_initialized
            assert converter.initialize() is dictionary
            assert converter.initialize() is dictionary
            converter.convert("computer")
        load.assert_called_once()
        assert converter.is_initialized

    def test_lazy_load_on_first_query(self, dictionary_file):
        converter = Converter(dictionary_path=dictionary_file, download=False)
        assert katakana(converter.convert("computer")) == ["コンピューター"]
        assert converter.is_initialized

    def test_reload_builds_new_index(self, dictionary_file):
        converter = Converter(dictionary_path=dictionary_file, download=False)
        first = converter.initialize()
        old_engine = converter.engine

        second = converter.reload()

        assert second is not first
        assert converter.dictionary is second
        assert converter.engine.dictionary is second
        assert old_engine.dictionary is first

    def test_reload_force_download(self, dictionary, tmp_path):
        with patch('enka.converter.load_dictionary', return_value=dictionary) as load:
            Converter(dictionary_path=tmp_path / "d.json").reload(force_download=True)
        load.assert_called_once_with(tmp_path / "d.json", download=True, force_download=True)

    def test_missing_file_without_download(self, tmp_path):
        converter = Converter(dictionary_path=tmp_path / "missing.json", download=False)
        with pytest.raises(FileNotFoundError):
            converter.convert("computer")
        assert not converter.is_initialized


class TestSearchSuggestions:
    def test_prefix(self, converter):
        assert converter.search_suggestions("comp") == [
            "company", "compare", "complete", "computer", "computing",
        ]

    def test_limit(self, converter):
        assert converter.search_suggestions("comp", 2) == ["company", "computer"]

    def test_no_match(self, converter):
        assert converter.search_suggestions("xyz") == []
