"""
Dictionary module for enka.

Data classes for jmdict-simplified entries, the scored links the index
builder creates between index terms and entries, and the read-only
indexed dictionary the search engine queries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from enka.constants import MatchType, SearchMode


# ============================================================================
# Entry Data Classes
# ============================================================================

ENGLISH = "eng"

# appliesToKanji value meaning "every kanji spelling of the entry"
ALL_KANJI = "*"


def _strings(values: Optional[List[Any]]) -> Tuple[str, ...]:
    return tuple(str(v) for v in values) if values else ()


def _text(data: Dict[str, Any]) -> str:
    text = data['text']
    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")
    return text


@dataclass(frozen=True)
class KanjiElement:
    """Kanji spelling of an entry."""
    text: str
    common: bool = False
    tags: Tuple[str, ...] = ()
    info: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KanjiElement':
        return cls(
            text=_text(data),
            common=bool(data.get('common', False)),
            tags=_strings(data.get('tags')),
            info=_strings(data.get('info')),
        )


@dataclass(frozen=True)
class KanaElement:
    """Kana reading of an entry."""
    text: str
    common: bool = False
    tags: Tuple[str, ...] = ()
    info: Tuple[str, ...] = ()
    applies_to_kanji: Optional[Tuple[str, ...]] = None

    def applies_to(self, kanji_text: str) -> bool:
        """Check if this reading may be paired with a kanji spelling."""
        if self.applies_to_kanji is None or ALL_KANJI in self.applies_to_kanji:
            return True
        return kanji_text in self.applies_to_kanji

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KanaElement':
        applies = data.get('appliesToKanji')
        return cls(
            text=_text(data),
            common=bool(data.get('common', False)),
            tags=_strings(data.get('tags')),
            info=_strings(data.get('info')),
            applies_to_kanji=_strings(applies) if applies is not None else None,
        )


@dataclass(frozen=True)
class Gloss:
    """One meaning string of a sense."""
    text: str
    lang: Optional[str] = None
    gender: Optional[str] = None
    type: Optional[str] = None

    @property
    def is_english(self) -> bool:
        """English or unspecified language."""
        return not self.lang or self.lang == ENGLISH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Gloss':
        return cls(
            text=_text(data),
            lang=data.get('lang'),
            gender=data.get('gender'),
            type=data.get('type'),
        )


@dataclass(frozen=True)
class Sense:
    """A sense of an entry: glosses plus grammatical/usage tags."""
    gloss: Tuple[Gloss, ...] = ()
    part_of_speech: Tuple[str, ...] = ()
    field: Tuple[str, ...] = ()
    misc: Tuple[str, ...] = ()
    info: Tuple[str, ...] = ()

    def english_glosses(self) -> List[Gloss]:
        return [g for g in self.gloss if g.is_english]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Sense':
        return cls(
            gloss=tuple(Gloss.from_dict(g) for g in data.get('gloss') or ()),
            part_of_speech=_strings(data.get('partOfSpeech')),
            field=_strings(data.get('field')),
            misc=_strings(data.get('misc')),
            info=_strings(data.get('info')),
        )


@dataclass(frozen=True)
class DictionaryEntry:
    """
    Dictionary entry from jmdict-simplified.

    Attributes:
        id: Unique entry identifier (JMdict sequence number as a string)
        kanji: Kanji spellings, in dictionary order
        kana: Kana readings, in dictionary order
        sense: Senses, in dictionary order
    """
    id: str
    kanji: Tuple[KanjiElement, ...] = ()
    kana: Tuple[KanaElement, ...] = ()
    sense: Tuple[Sense, ...] = ()

    @property
    def is_common(self) -> bool:
        """True if any kana reading is flagged common."""
        return any(k.common for k in self.kana)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DictionaryEntry':
        """
        Build an entry from its jmdict-simplified JSON object.

        Raises:
            KeyError: If a required ``text`` or ``id`` key is missing.
            TypeError: If a nested value has the wrong shape.
        """
        return cls(
            id=str(data['id']),
            kanji=tuple(KanjiElement.from_dict(k) for k in data.get('kanji') or ()),
            kana=tuple(KanaElement.from_dict(k) for k in data.get('kana') or ()),
            sense=tuple(Sense.from_dict(s) for s in data.get('sense') or ()),
        )


# ============================================================================
# Index Data Classes
# ============================================================================

@dataclass(frozen=True)
class ScoredCandidate:
    """Link between an entry and the index term that produced it."""
    entry: DictionaryEntry
    score: int
    match_type: MatchType
    matched_term: str


ScoredIndex = Mapping[str, Tuple[ScoredCandidate, ...]]

_EMPTY: Tuple[ScoredCandidate, ...] = ()


@dataclass(frozen=True)
class IndexedDictionary:
    """
    Queryable, read-only index built once per dictionary load.

    Attributes:
        entries: Entry id -> entry
        exact_matches: Single-word glosses (score 100)
        compound_words: Words of multi-word glosses (score 80 / 60)
        description_only: Words inside parenthesised notes (score 20)
        katakana_words: Every katakana reading in the corpus
        last_updated: Build timestamp
    """
    entries: Mapping[str, DictionaryEntry]
    exact_matches: ScoredIndex
    compound_words: ScoredIndex
    description_only: ScoredIndex
    katakana_words: FrozenSet[str]
    last_updated: datetime = field(default_factory=datetime.now)

    @classmethod
    def freeze(
        cls,
        entries: Dict[str, DictionaryEntry],
        exact_matches: Dict[str, List[ScoredCandidate]],
        compound_words: Dict[str, List[ScoredCandidate]],
        description_only: Dict[str, List[ScoredCandidate]],
        katakana_words: set,
    ) -> 'IndexedDictionary':
        """Wrap mutable build products into read-only views."""
        def seal(index: Dict[str, List[ScoredCandidate]]) -> ScoredIndex:
            return MappingProxyType({key: tuple(vals) for key, vals in index.items()})

        return cls(
            entries=MappingProxyType(dict(entries)),
            exact_matches=seal(exact_matches),
            compound_words=seal(compound_words),
            description_only=seal(description_only),
            katakana_words=frozenset(katakana_words),
        )

    def __len__(self) -> int:
        return len(self.entries)

    def visible_indexes(self, mode: SearchMode) -> List[ScoredIndex]:
        """
        Get the tiers a search mode can see, strongest first.

        strict sees the exact tier, normal adds the compound tier and
        broad adds the description tier.
        """
        indexes = [self.exact_matches]
        if mode in (SearchMode.NORMAL, SearchMode.BROAD):
            indexes.append(self.compound_words)
        if mode == SearchMode.BROAD:
            indexes.append(self.description_only)
        return indexes

    def candidates(self, term: str, mode: SearchMode) -> Iterator[ScoredCandidate]:
        """Iterate the candidates stored under a term in every visible tier."""
        for index in self.visible_indexes(mode):
            yield from index.get(term, _EMPTY)
