"""
Consolidated constants for enka.

This module provides a single source of truth for:
- Search modes and the index tiers each one can see
- Match types and the score attached to each of them
- The English stop words excluded from indexing
"""

from enum import Enum
from typing import FrozenSet, Tuple, Union


# ============================================================================
# Search Modes
# ============================================================================

class SearchMode(str, Enum):
    """How far a query reaches into the tiered index."""
    STRICT = "strict"   # exact tier only
    NORMAL = "normal"   # exact + compound tiers
    BROAD = "broad"     # exact + compound + description tiers


DEFAULT_SEARCH_MODE = SearchMode.STRICT

VALID_SEARCH_MODES: Tuple[str, ...] = tuple(mode.value for mode in SearchMode)


class InvalidSearchModeError(ValueError):
    """Raised for a search mode outside of :data:`VALID_SEARCH_MODES`."""

    def __init__(self, mode: object):
        self.mode = mode
        self.valid_modes = VALID_SEARCH_MODES
        super().__init__(
            f'Invalid mode "{mode}". Valid modes are: {", ".join(VALID_SEARCH_MODES)}'
        )


def parse_search_mode(mode: Union[str, SearchMode, None]) -> SearchMode:
    """
    Validate and normalize a search mode.

    Args:
        mode: A SearchMode, its string value (case-insensitive), or None
            for the default mode.

    Returns:
        The matching SearchMode.

    Raises:
        InvalidSearchModeError: If the value names no known mode.
    """
    if mode is None:
        return DEFAULT_SEARCH_MODE
    if isinstance(mode, SearchMode):
        return mode
    if isinstance(mode, str):
        try:
            return SearchMode(mode.strip().lower())
        except ValueError:
            pass
    raise InvalidSearchModeError(mode)


# ============================================================================
# Match Types and Scores
# ============================================================================

class MatchType(str, Enum):
    """Syntactic role of the indexing term inside its source gloss."""
    EXACT = "exact"               # the gloss is this single word
    PRIMARY = "primary"           # first word of a compound gloss
    COMPOUND = "compound"         # later word of a compound gloss
    DESCRIPTION = "description"   # word inside a parenthesised note


EXACT_SCORE = 100
PRIMARY_SCORE = 80
COMPOUND_SCORE = 60
DESCRIPTION_SCORE = 20

# Multiplier applied to every candidate reached through approximate matching
FUZZY_PENALTY = 0.7

# Tokens shorter than this never become index keys
MIN_TOKEN_LENGTH = 3


# ============================================================================
# Stop Words
# ============================================================================
# Articles, primary auxiliaries, modals, conjunctions, common prepositions
# and demonstratives.

STOP_WORDS: FrozenSet[str] = frozenset([
    'the', 'and', 'or', 'but', 'for', 'with', 'without', 'from', 'to', 'at', 'in', 'on',
    'by', 'of', 'a', 'an', 'be', 'is', 'are', 'was', 'were', 'being', 'been',
    'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would', 'could', 'should',
    'may', 'might', 'can', 'must', 'shall', 'this', 'that', 'these', 'those',
])


def is_stop_word(word: str) -> bool:
    """Check if a word is an English function word excluded from indexing."""
    return word.lower() in STOP_WORDS
