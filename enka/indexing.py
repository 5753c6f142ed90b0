"""
Index builder for enka.

Turns dictionary entries into three scored inverted indexes keyed by
English terms taken from the glosses:

- exact: the gloss is a single meaningful word (score 100)
- compound: every word of a multi-word gloss (80 for the first, 60 after)
- description: words inside the gloss's parenthesised note (score 20)

A gloss can feed both a main tier and the description tier.
"""

import logging
import re
from typing import Dict, Iterable, List

from enka.characters import is_katakana
from enka.constants import (
    MatchType, EXACT_SCORE, PRIMARY_SCORE, COMPOUND_SCORE, DESCRIPTION_SCORE,
    MIN_TOKEN_LENGTH, is_stop_word,
)
from enka.dict import DictionaryEntry, IndexedDictionary, ScoredCandidate

logger = logging.getLogger(__name__)

_TOKEN_SEPARATOR = re.compile(r"[\s,;()\[\]]+")
_DESCRIPTION_SEPARATOR = re.compile(r"[\s,;]+")
_DESCRIPTION_PATTERN = re.compile(r"\(([^)]+)\)")

MutableIndex = Dict[str, List[ScoredCandidate]]


# ============================================================================
# Tokenization
# ============================================================================

def normalize_term(text: str) -> str:
    """Normalize a gloss or query the way index keys are normalized."""
    return text.lower().strip()


def is_meaningful(word: str) -> bool:
    """Check if a token is long enough and not a stop word."""
    return len(word) >= MIN_TOKEN_LENGTH and not is_stop_word(word)


def tokenize_gloss(text: str) -> List[str]:
    """
    Split a normalized gloss into meaningful tokens.

    Args:
        text: Lower-cased, trimmed gloss text.

    Returns:
        Tokens in gloss order, with short tokens and stop words removed.

    Example:
        >>> tokenize_gloss("mobile phone (esp. a smartphone)")
        ['mobile', 'phone', 'esp.', 'smartphone']
    """
    return [w for w in _TOKEN_SEPARATOR.split(text) if w and is_meaningful(w)]


def description_terms(text: str) -> List[str]:
    """
    Get the meaningful words of the first parenthesised segment.

    Args:
        text: Lower-cased, trimmed gloss text.

    Returns:
        Tokens of the ``(...)`` note, or an empty list if there is none.
    """
    match = _DESCRIPTION_PATTERN.search(text)
    if not match:
        return []
    return [w for w in _DESCRIPTION_SEPARATOR.split(match.group(1)) if w and is_meaningful(w)]


# ============================================================================
# Index Construction
# ============================================================================

def _add(index: MutableIndex, candidate: ScoredCandidate) -> None:
    index.setdefault(candidate.matched_term, []).append(candidate)


def index_gloss(
    text: str,
    entry: DictionaryEntry,
    exact_matches: MutableIndex,
    compound_words: MutableIndex,
    description_only: MutableIndex,
) -> None:
    """
    Index one English gloss of an entry into the tiered indexes.

    Args:
        text: Raw gloss text.
        entry: Entry owning the gloss.
        exact_matches: Exact tier, updated in place.
        compound_words: Compound tier, updated in place.
        description_only: Description tier, updated in place.
    """
    english = normalize_term(text)
    words = tokenize_gloss(english)

    if len(words) == 1:
        _add(exact_matches, ScoredCandidate(entry, EXACT_SCORE, MatchType.EXACT, words[0]))
    elif len(words) > 1:
        _add(compound_words, ScoredCandidate(entry, PRIMARY_SCORE, MatchType.PRIMARY, words[0]))
        for word in words[1:]:
            _add(compound_words, ScoredCandidate(entry, COMPOUND_SCORE, MatchType.COMPOUND, word))

    for word in description_terms(english):
        _add(description_only, ScoredCandidate(entry, DESCRIPTION_SCORE, MatchType.DESCRIPTION, word))


def build_index(entries: Iterable[DictionaryEntry], progress_callback=None) -> IndexedDictionary:
    """
    Build the read-only tiered index for a sequence of entries.

    The result depends only on the input order and content (apart from the
    build timestamp).

    Args:
        entries: Parsed dictionary entries.
        progress_callback: Optional callable receiving the running entry count.

    Returns:
        A new IndexedDictionary.
    """
    entries_map: Dict[str, DictionaryEntry] = {}
    exact_matches: MutableIndex = {}
    compound_words: MutableIndex = {}
    description_only: MutableIndex = {}
    katakana_words = set()

    count = 0
    for entry in entries:
        if entry.id in entries_map:
            logger.warning(f"Skipping duplicate dictionary entry id {entry.id}")
            continue
        entries_map[entry.id] = entry
        count += 1

        for kana in entry.kana:
            if is_katakana(kana.text):
                katakana_words.add(kana.text)

        for sense in entry.sense:
            for gloss in sense.english_glosses():
                index_gloss(gloss.text, entry, exact_matches, compound_words, description_only)

        if progress_callback:
            progress_callback(count)

    logger.debug(
        f"Indexed {count} entries: {len(exact_matches)} exact, "
        f"{len(compound_words)} compound, {len(description_only)} description keys"
    )

    return IndexedDictionary.freeze(
        entries_map, exact_matches, compound_words, description_only, katakana_words
    )
