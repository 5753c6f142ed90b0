"""
Command line interface for enka.

Usage:
    enka computer                   # strict search
    enka "mobile" --mode normal     # include compound glosses
    enka netwrk --fuzzy -v          # approximate matching, verbose output
    enka computer --json            # JSON output
    enka suggest comp               # prefix suggestions
    enka update --force             # re-download the dictionary
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from enka import __version__
from enka.constants import (
    SearchMode, InvalidSearchModeError, VALID_SEARCH_MODES, DEFAULT_SEARCH_MODE,
    parse_search_mode,
)
from enka.converter import Converter
from enka.dict_load import DictionaryFormatError
from enka.models import ConversionRecord, ConversionResponse
from enka.settings import (
    DEBUG, DEFAULT_MAX_RESULTS, SUGGESTION_LIMIT, CLI_SUGGESTION_LIMIT,
)

# Hints printed when a search finds nothing, keyed by the mode that was used
NO_RESULT_HINTS = {
    SearchMode.STRICT: (
        "Try different search modes:",
        [("--mode normal", "Include compound words"),
         ("--mode broad", "Include all related terms"),
         ("--fuzzy", "Enable fuzzy matching")],
    ),
    SearchMode.NORMAL: (
        "Try broader search:",
        [("--mode broad", "Include all related terms"),
         ("--fuzzy", "Enable fuzzy matching")],
    ),
    SearchMode.BROAD: (
        "Try fuzzy search:",
        [("--fuzzy", "Enable fuzzy matching")],
    ),
}


def setup_logging(debug: bool = False) -> None:
    """Configure logging for CLI runs."""
    logging.basicConfig(
        level=logging.INFO if debug else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )


# ============================================================================
# Output Formatting
# ============================================================================

def format_record(record: ConversionRecord, index: int, verbose: bool = False) -> str:
    """Format one conversion record as text."""
    badge = "[COMMON]" if record.common else "[RARE]"
    lines = [f"{index}. {record.katakana} {badge}"]

    if verbose:
        lines.append(f"   Hiragana: {record.hiragana}")
    if record.kanji:
        lines.append(f"   Kanji: {record.kanji}")
    if verbose:
        lines.append(f"   Romaji: {record.romaji}")
    if record.meaning:
        lines.append(f"   Meaning: {record.meaning}")

    return '\n'.join(lines)


def format_no_results(word: str, mode: SearchMode, suggestions: List[str]) -> str:
    """Format the hints shown when a search finds nothing."""
    title, hints = NO_RESULT_HINTS[mode]
    lines = [f'No results found for "{word}"', '', title]
    for flag, description in hints:
        lines.append(f"  enka {word} {flag:<14}# {description}")

    if suggestions:
        lines.append('')
        lines.append('Suggestions:')
        for suggestion in suggestions[:CLI_SUGGESTION_LIMIT]:
            lines.append(f"  {suggestion}")

    return '\n'.join(lines)


# ============================================================================
# Subcommands
# ============================================================================

def main_update(args: list) -> int:
    """CLI entry point for update subcommand."""
    parser = argparse.ArgumentParser(
        description='Update dictionary data',
        prog='enka update',
    )

    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Force download even if data exists',
    )

    parser.add_argument(
        '-d', '--dictionary',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to the dictionary JSON file',
    )

    parsed = parser.parse_args(args)
    setup_logging(DEBUG)

    print("Updating dictionary...")
    try:
        converter = Converter(dictionary_path=parsed.dictionary)
        dictionary = converter.reload(force_download=parsed.force)
    except Exception as e:
        print(f"Update failed: {e}", file=sys.stderr)
        return 1

    print(f"✅ Dictionary updated successfully! ({len(dictionary):,} entries)")
    return 0


def main_suggest(args: list) -> int:
    """CLI entry point for suggest subcommand."""
    parser = argparse.ArgumentParser(
        description='Get word suggestions based on partial input',
        prog='enka suggest',
    )

    parser.add_argument(
        'partial',
        help='Beginning of an English word',
    )

    parser.add_argument(
        '-m', '--max',
        type=int,
        default=SUGGESTION_LIMIT,
        metavar='N',
        help=f'Maximum number of suggestions (default: {SUGGESTION_LIMIT})',
    )

    parser.add_argument(
        '-d', '--dictionary',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to the dictionary JSON file',
    )

    parsed = parser.parse_args(args)

    try:
        converter = Converter(dictionary_path=parsed.dictionary)
        suggestions = converter.search_suggestions(parsed.partial, parsed.max)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not suggestions:
        print(f'No suggestions found for "{parsed.partial}"')
        return 0

    print(f'Suggestions for "{parsed.partial}":\n')
    for index, suggestion in enumerate(suggestions, 1):
        print(f"{index}. {suggestion}")
    return 0


# ============================================================================
# Main Entry Point
# ============================================================================

def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'update':
        return main_update(args_list[1:])
    if args_list and args_list[0] == 'suggest':
        return main_suggest(args_list[1:])

    parser = argparse.ArgumentParser(
        description='English to Katakana converter using JMdict',
        prog='enka',
        epilog='Subcommands:\n  enka update [--force]   Update dictionary data\n  enka suggest PARTIAL    Suggest words for a partial input',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'word',
        nargs='*',
        help='English word or phrase to convert',
    )

    parser.add_argument(
        '--mode',
        type=str,
        default=DEFAULT_SEARCH_MODE.value,
        help=f'Search mode, one of: {", ".join(VALID_SEARCH_MODES)} (default: {DEFAULT_SEARCH_MODE.value})',
    )

    parser.add_argument(
        '--fuzzy',
        action='store_true',
        help='Enable fuzzy search for approximate matches',
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show detailed information including hiragana and romaji',
    )

    parser.add_argument(
        '-m', '--max',
        type=int,
        default=DEFAULT_MAX_RESULTS,
        metavar='N',
        help=f'Maximum number of results (default: {DEFAULT_MAX_RESULTS})',
    )

    parser.add_argument(
        '-j', '--json',
        action='store_true',
        help='Print results as JSON',
    )

    parser.add_argument(
        '-d', '--dictionary',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to the dictionary JSON file',
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log loading progress',
    )

    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args_list)

    if parsed.version:
        print(f'enka {__version__}')
        return 0

    word = ' '.join(parsed.word) if parsed.word else ''
    if not word.strip():
        parser.print_help()
        return 1

    setup_logging(parsed.debug or DEBUG)

    # Reject a bad mode before paying for the dictionary load
    try:
        mode = parse_search_mode(parsed.mode)
    except InvalidSearchModeError as e:
        print(str(e), file=sys.stderr)
        return 1

    try:
        converter = Converter(dictionary_path=parsed.dictionary)
        if not parsed.json:
            print("Loading dictionary...")
        converter.initialize()

        results = converter.convert(
            word, mode=mode, fuzzy=parsed.fuzzy, max_results=parsed.max,
        )

        if parsed.json:
            response = ConversionResponse.from_records(word, mode.value, parsed.fuzzy, results)
            print(json.dumps(response.model_dump(), ensure_ascii=False))
            return 0

        if not results:
            suggestions = converter.search_suggestions(word[:3])
            print(format_no_results(word, mode, suggestions))
            return 0

        print(f'\nResults for "{word}":\n')
        for index, record in enumerate(results, 1):
            print(format_record(record, index, parsed.verbose))
            print()

        return 0

    except DictionaryFormatError as e:
        print(f'Error: dictionary file is invalid: {e}', file=sys.stderr)
        return 1
    except Exception as e:
        print(f'Error: {e}', file=sys.stderr)
        if parsed.debug or DEBUG:
            import traceback
            traceback.print_exc()
        return 1


def entry_point():
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
