"""
Approximate key matching for enka.

Ranks index keys against a query, case-insensitively, in three classes:

1. the key equals the query (score 3.0);
2. the key contains every query character in order (score in (1.0, 2.0]),
   higher when the matched characters form longer consecutive runs;
3. the key shares a long common subsequence with the query
   (score = LCS / len(query), in [min_similarity, 1.0)).

Keys below ``min_similarity`` are dropped, so every class-2 key outranks
every class-3 key and the exact key outranks everything.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional

from enka.settings import FUZZY_MIN_SIMILARITY

EXACT_SIMILARITY = 3.0
SUBSEQUENCE_BASE = 1.0


@dataclass(frozen=True)
class FuzzyMatch:
    """A key accepted by approximate matching."""
    key: str
    score: float
    index: int  # position of the key in the searched sequence


# ============================================================================
# Scoring
# ============================================================================

def _max_run_score(length: int) -> int:
    # Sum of 1, 3, 7, ... for `length` consecutive matches
    return 2 ** (length + 1) - 2 - length


def subsequence_score(query: str, key: str) -> Optional[float]:
    """
    Score a key containing the query's characters in order.

    Each matched character adds the running score of its consecutive run
    (1, 3, 7, ...), so contiguous matches weigh far more than scattered ones.

    Args:
        query: Normalized query.
        key: Normalized key.

    Returns:
        A score in (1.0, 2.0], or None if the query is not a subsequence.
    """
    if not query or len(query) > len(key):
        return None

    pos = 0
    run = 0
    total = 0
    for char in key:
        if pos < len(query) and char == query[pos]:
            pos += 1
            run += 1 + run
        else:
            run = 0
        total += run

    if pos < len(query):
        return None
    return SUBSEQUENCE_BASE + total / _max_run_score(len(query))


def lcs_length(a: str, b: str) -> int:
    """Length of the longest common subsequence of two strings."""
    if not a or not b:
        return 0
    previous = [0] * (len(b) + 1)
    for char_a in a:
        current = [0]
        for j, char_b in enumerate(b):
            if char_a == char_b:
                current.append(previous[j] + 1)
            else:
                current.append(max(previous[j + 1], current[j]))
        previous = current
    return previous[-1]


def similarity(query: str, key: str, min_similarity: float = FUZZY_MIN_SIMILARITY) -> Optional[float]:
    """
    Score a normalized key against a normalized query.

    Args:
        query: Normalized query.
        key: Normalized key.
        min_similarity: Lowest LCS ratio accepted for keys that do not
            contain the whole query.

    Returns:
        The similarity score, or None if the key is rejected.
    """
    if not query or not key:
        return None
    if key == query:
        return EXACT_SIMILARITY

    score = subsequence_score(query, key)
    if score is not None:
        return score

    # Shared characters bound the LCS; skip the quadratic pass when even
    # the bound is too low
    shared = sum((Counter(query) & Counter(key)).values())
    if shared / len(query) < min_similarity:
        return None

    ratio = lcs_length(query, key) / len(query)
    if ratio < min_similarity:
        return None
    return ratio


# ============================================================================
# Filtering
# ============================================================================

def fuzzy_filter(
    query: str,
    keys: Iterable[str],
    min_similarity: float = FUZZY_MIN_SIMILARITY,
    limit: Optional[int] = None,
) -> List[FuzzyMatch]:
    """
    Rank keys by similarity to a query.

    Args:
        query: Search text (lower-cased and trimmed here).
        keys: Candidate keys.
        min_similarity: Lowest LCS ratio accepted for non-subsequence keys.
        limit: Maximum number of matches to return.

    Returns:
        Matches sorted by score descending, then shorter key, then
        input key order.

    Example:
        >>> [m.key for m in fuzzy_filter("comp", ["company", "camp", "comp"])]
        ['comp', 'company', 'camp']
    """
    query = query.lower().strip()
    if not query:
        return []

    matches = []
    for index, key in enumerate(keys):
        score = similarity(query, key.lower(), min_similarity)
        if score is not None:
            matches.append(FuzzyMatch(key=key, score=score, index=index))

    matches.sort(key=lambda m: (-m.score, len(m.key), m.index))
    if limit is not None:
        matches = matches[:limit]
    return matches
