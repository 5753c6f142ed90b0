"""
Result processing for enka.

Turns scored candidates into the ranked, deduplicated list of
ConversionRecords shown to the user.

Entries are ordered by:
1. score, descending
2. commonality (any common kana reading first)
3. first katakana reading, by code point

Each entry then yields one record per katakana reading (common readings
first) and later duplicates of a katakana string are dropped.
"""

from typing import Iterable, List, Optional

from enka.characters import as_hiragana, is_katakana
from enka.dict import DictionaryEntry, KanaElement, KanjiElement, ScoredCandidate
from enka.models import ConversionRecord
from enka.romanize import romanize_katakana

MEANING_SEPARATOR = ", "


# ============================================================================
# Entry Helpers
# ============================================================================

def katakana_readings(entry: DictionaryEntry) -> List[KanaElement]:
    """Get the katakana readings of an entry, common ones first."""
    readings = [kana for kana in entry.kana if is_katakana(kana.text)]
    return sorted(readings, key=lambda kana: not kana.common)


def first_katakana(entry: DictionaryEntry) -> str:
    """Get the first katakana reading in dictionary order, or ''."""
    for kana in entry.kana:
        if is_katakana(kana.text):
            return kana.text
    return ""


def extract_meaning(entry: DictionaryEntry) -> str:
    """Join the English glosses of the first sense."""
    if not entry.sense:
        return ""
    return MEANING_SEPARATOR.join(g.text for g in entry.sense[0].english_glosses())


def find_corresponding_kanji(entry: DictionaryEntry, kana: KanaElement) -> Optional[KanjiElement]:
    """Get the first kanji spelling the reading applies to."""
    for kanji in entry.kanji:
        if kana.applies_to(kanji.text):
            return kanji
    return None


# ============================================================================
# Conversion
# ============================================================================

def entry_to_records(entry: DictionaryEntry) -> List[ConversionRecord]:
    """
    Expand an entry into one record per katakana reading.

    Args:
        entry: Dictionary entry.

    Returns:
        Records in reading order, common readings first.
    """
    meaning = extract_meaning(entry)
    records = []
    for kana in katakana_readings(entry):
        kanji = find_corresponding_kanji(entry, kana)
        records.append(ConversionRecord(
            katakana=kana.text,
            hiragana=as_hiragana(kana.text),
            romaji=romanize_katakana(kana.text),
            kanji=kanji.text if kanji else None,
            meaning=meaning,
            common=kana.common,
        ))
    return records


def deduplicate_records(records: Iterable[ConversionRecord]) -> List[ConversionRecord]:
    """Remove records whose katakana was already seen, keeping the first."""
    seen = set()
    result = []
    for record in records:
        if record.katakana in seen:
            continue
        seen.add(record.katakana)
        result.append(record)
    return result


def sort_candidates(candidates: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """Sort candidates by score, commonality, then first katakana reading."""
    return sorted(
        candidates,
        key=lambda c: (-c.score, not c.entry.is_common, first_katakana(c.entry)),
    )


def process_scored_results(candidates: Iterable[ScoredCandidate]) -> List[ConversionRecord]:
    """
    Turn scored candidates into ranked, deduplicated conversion records.

    Args:
        candidates: Scored candidates, typically one per entry.

    Returns:
        Records in ranking order; no two share a katakana string.
    """
    records = []
    for candidate in sort_candidates(candidates):
        records.extend(entry_to_records(candidate.entry))
    return deduplicate_records(records)
