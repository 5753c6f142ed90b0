"""
Tests for cli.py - Command line interface.
"""

import json
from unittest.mock import patch

import pytest

from enka.cli import main, format_record, format_no_results
from enka.constants import SearchMode
from enka.models import ConversionRecord


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_version(self, capsys):
        """Test version flag."""
        result = main(['--version'])
        assert result == 0
        captured = capsys.readouterr()
        assert 'enka' in captured.out
        assert '0.1.0' in captured.out

    def test_help(self, capsys):
        """Test help flag."""
        with pytest.raises(SystemExit) as exc_info:
            main(['--help'])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert 'Katakana' in captured.out

    def test_no_args(self, capsys):
        """Test running with no arguments."""
        result = main([])
        assert result == 1

    def test_blank_word(self):
        assert main(['   ']) == 1


class TestCLIArgumentParsing:
    """Tests for argument parsing."""

    def test_invalid_mode(self, capsys):
        """Test an unknown mode fails before the dictionary is loaded."""
        with patch('enka.cli.Converter') as converter_cls:
            result = main(['computer', '--mode', 'fast'])
        assert result == 1
        converter_cls.assert_not_called()
        captured = capsys.readouterr()
        assert 'Invalid mode "fast"' in captured.err
        assert 'strict, normal, broad' in captured.err

    def test_mode_case_insensitive(self, dictionary_file, capsys):
        result = main(['mobile', '--mode', 'NORMAL', '-d', str(dictionary_file)])
        assert result == 0
        assert 'モバイル [RARE]' in capsys.readouterr().out

    def test_max_flag(self, converter, capsys):
        with patch('enka.cli.Converter', return_value=converter):
            result = main(['computer', '-m', '1'])
        assert result == 0
        captured = capsys.readouterr()
        assert '1. コンピューター' in captured.out
        assert 'コンピュータ\n' not in captured.out
        assert '2.' not in captured.out

    def test_multi_word_input(self, converter, capsys):
        with patch('enka.cli.Converter', return_value=converter):
            result = main(['cell', 'phone', '--mode', 'broad'])
        assert result == 0
        assert 'No results found for "cell phone"' in capsys.readouterr().out


class TestCLIOutput:
    """Tests for conversion output against a dictionary file."""

    def test_simple_output(self, dictionary_file, capsys):
        result = main(['computer', '-d', str(dictionary_file)])
        assert result == 0
        captured = capsys.readouterr()
        assert 'Loading dictionary...' in captured.out
        assert 'Results for "computer":' in captured.out
        assert '1. コンピューター [COMMON]' in captured.out
        assert 'Meaning: computer' in captured.out
        assert 'Romaji' not in captured.out

    def test_verbose_output(self, dictionary_file, capsys):
        result = main(['computer', '-v', '-d', str(dictionary_file)])
        assert result == 0
        captured = capsys.readouterr()
        assert 'Hiragana: こんぴゅーたー' in captured.out
        assert 'Romaji: konpyu-ta-' in captured.out

    def test_json_output(self, dictionary_file, capsys):
        result = main(['computer', '--json', '-d', str(dictionary_file)])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data['query'] == 'computer'
        assert data['mode'] == 'strict'
        assert data['fuzzy'] is False
        assert data['count'] == 1
        assert data['results'][0]['katakana'] == 'コンピューター'

    def test_json_no_results(self, dictionary_file, capsys):
        result = main(['zebra', '-j', '-d', str(dictionary_file)])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data['results'] == []
        assert data['count'] == 0

    def test_no_results_hints(self, dictionary_file, capsys):
        result = main(['mobile', '-d', str(dictionary_file)])
        assert result == 0
        out = capsys.readouterr().out
        assert 'No results found for "mobile"' in out
        assert 'Try different search modes:' in out
        assert '--mode normal' in out
        assert 'Suggestions:' in out
        assert '  mobile' in out

    def test_fuzzy_output(self, dictionary_file, capsys):
        result = main(['compter', '--fuzzy', '-d', str(dictionary_file)])
        assert result == 0
        assert '1. コンピューター [COMMON]' in capsys.readouterr().out

    def test_invalid_dictionary_file(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"version": "1"}', encoding='utf-8')
        result = main(['computer', '-d', str(path)])
        assert result == 1
        assert 'dictionary file is invalid' in capsys.readouterr().err

    def test_unexpected_error(self, capsys):
        with patch('enka.cli.Converter', side_effect=RuntimeError("boom")):
            result = main(['computer'])
        assert result == 1
        assert 'Error: boom' in capsys.readouterr().err


class TestFormatting:
    """Tests for the text formatters."""

    @pytest.fixture
    def record(self):
        return ConversionRecord(
            katakana="ケータイ", hiragana="けーたい", romaji="ke-tai",
            kanji="携帯", meaning="mobile phone", common=True,
        )

    def test_format_record(self, record):
        assert format_record(record, 1) == (
            "1. ケータイ [COMMON]\n"
            "   Kanji: 携帯\n"
            "   Meaning: mobile phone"
        )

    def test_format_record_verbose(self, record):
        assert format_record(record, 2, verbose=True) == (
            "2. ケータイ [COMMON]\n"
            "   Hiragana: けーたい\n"
            "   Kanji: 携帯\n"
            "   Romaji: ke-tai\n"
            "   Meaning: mobile phone"
        )

    def test_no_results_per_mode(self):
        broad = format_no_results("x", SearchMode.BROAD, [])
        assert 'Try fuzzy search:' in broad
        assert '--mode' not in broad
        assert 'Suggestions' not in broad

    def test_suggestions_capped(self):
        text = format_no_results("x", SearchMode.NORMAL, [f"s{i}" for i in range(8)])
        assert '  s4' in text
        assert '  s5' not in text


class TestSubcommands:
    """Tests for the suggest and update subcommands."""

    def test_suggest(self, dictionary_file, capsys):
        result = main(['suggest', 'comp', '-d', str(dictionary_file)])
        assert result == 0
        out = capsys.readouterr().out
        assert 'Suggestions for "comp":' in out
        assert '1. computer' in out
        assert '2. computing' in out

    def test_suggest_none(self, dictionary_file, capsys):
        result = main(['suggest', 'xyz', '-d', str(dictionary_file)])
        assert result == 0
        assert 'No suggestions found for "xyz"' in capsys.readouterr().out

    def test_update(self, dictionary, capsys):
        with patch('enka.cli.Converter') as converter_cls:
            converter_cls.return_value.reload.return_value = dictionary
            result = main(['update', '--force'])
        assert result == 0
        converter_cls.return_value.reload.assert_called_once_with(force_download=True)
        out = capsys.readouterr().out
        assert 'Updating dictionary...' in out
        assert 'Dictionary updated successfully! (10 entries)' in out

    def test_update_failure(self, capsys):
        with patch('enka.cli.Converter') as converter_cls:
            converter_cls.return_value.reload.side_effect = RuntimeError("offline")
            result = main(['update'])
        assert result == 1
        assert 'Update failed: offline' in capsys.readouterr().err
