"""
Search engine for enka.

Answers queries against one IndexedDictionary:
- scored lookups whose reach depends on the search mode
- approximate lookups through :mod:`enka.fuzzy`
- prefix suggestions for "did you mean" prompts

Nothing here raises for empty input, unknown queries or an empty
dictionary; those simply produce empty results.
"""

import dataclasses
import math
from typing import Dict, Iterable, List, Union

from enka.constants import FUZZY_PENALTY, SearchMode, parse_search_mode
from enka.dict import IndexedDictionary, ScoredCandidate
from enka.fuzzy import fuzzy_filter
from enka.indexing import normalize_term
from enka.settings import (
    DEFAULT_FUZZY_CANDIDATES, FUZZY_MIN_SIMILARITY, SUGGESTION_LIMIT,
)

Mode = Union[str, SearchMode, None]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward."""
    return int(math.floor(value + 0.5))


def apply_fuzzy_penalty(candidate: ScoredCandidate) -> ScoredCandidate:
    """Copy a candidate with its score reduced by the fuzzy penalty."""
    return dataclasses.replace(
        candidate, score=round_half_up(candidate.score * FUZZY_PENALTY)
    )


def deduplicate_by_entry(candidates: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """
    Keep one candidate per entry, the one with the highest score.

    On equal scores the first candidate seen wins; the result keeps the
    order in which entries were first seen.
    """
    best: Dict[str, ScoredCandidate] = {}
    for candidate in candidates:
        existing = best.get(candidate.entry.id)
        if existing is None or candidate.score > existing.score:
            best[candidate.entry.id] = candidate
    return list(best.values())


def rank(candidates: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """Deduplicate by entry and sort by score descending."""
    return sorted(deduplicate_by_entry(candidates), key=lambda c: -c.score)


class SearchEngine:
    """Search engine over a single, read-only IndexedDictionary."""

    def __init__(self, dictionary: IndexedDictionary,
                 min_similarity: float = FUZZY_MIN_SIMILARITY):
        self._dictionary = dictionary
        self.min_similarity = min_similarity

    @property
    def dictionary(self) -> IndexedDictionary:
        return self._dictionary

    def find_scored_matches(self, query: str, mode: Mode = SearchMode.STRICT) -> List[ScoredCandidate]:
        """
        Find entries indexed under a query in the tiers the mode can see.

        Args:
            query: English word (case and surrounding whitespace ignored).
            mode: strict (exact tier), normal (+compound) or broad
                (+description).

        Returns:
            One candidate per entry, best score first.

        Raises:
            InvalidSearchModeError: For an unknown mode.
        """
        mode = parse_search_mode(mode)
        term = normalize_term(query)
        if not term:
            return []
        return rank(self._dictionary.candidates(term, mode))

    def find_fuzzy_matches(
        self,
        query: str,
        mode: Mode = SearchMode.NORMAL,
        max_candidates: int = DEFAULT_FUZZY_CANDIDATES,
    ) -> List[ScoredCandidate]:
        """
        Find entries through approximate matching of index keys.

        The ``2 * max_candidates`` best keys among the tiers visible to the
        mode are expanded into their candidates, each with the fuzzy penalty
        applied, so a fuzzy hit never outranks an exact hit of the same
        base score.

        Args:
            query: Search text.
            mode: Search mode deciding which tiers' keys are searched.
            max_candidates: Maximum number of entries to return.

        Returns:
            Up to ``max_candidates`` candidates, one per entry, best first.
        """
        mode = parse_search_mode(mode)
        term = normalize_term(query)
        if not term or max_candidates <= 0:
            return []

        # dict.fromkeys keeps first-seen order across tiers
        keys = dict.fromkeys(
            key for index in self._dictionary.visible_indexes(mode) for key in index
        )
        matches = fuzzy_filter(term, keys, self.min_similarity, limit=max_candidates * 2)

        penalized = [
            apply_fuzzy_penalty(candidate)
            for match in matches
            for candidate in self._dictionary.candidates(match.key, mode)
        ]
        return rank(penalized)[:max_candidates]

    def get_suggestions(self, partial_query: str, max_results: int = SUGGESTION_LIMIT) -> List[str]:
        """
        Get index keys starting with a partial query.

        Exact-tier keys are collected first, then compound-tier keys, until
        ``max_results`` keys are found; the result is sorted.

        Args:
            partial_query: Prefix to complete.
            max_results: Maximum number of keys.

        Returns:
            Sorted list of distinct keys.
        """
        prefix = normalize_term(partial_query)
        if not prefix or max_results <= 0:
            return []

        suggestions: Dict[str, None] = {}
        for index in (self._dictionary.exact_matches, self._dictionary.compound_words):
            for key in index:
                if len(suggestions) >= max_results:
                    break
                if key.startswith(prefix):
                    suggestions.setdefault(key)

        return sorted(suggestions)
