"""
English to katakana converter for enka.

The Converter owns the loaded IndexedDictionary and the SearchEngine
built on it. Loading happens once (lazily or through ``initialize``);
``reload`` builds a new index and engine and swaps both in, so callers
still holding the previous engine keep a consistent view.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Tuple, Union

from enka.constants import SearchMode, parse_search_mode
from enka.dict import IndexedDictionary
from enka.dict_load import load_dictionary
from enka.models import ConversionRecord
from enka.output import process_scored_results
from enka.search import SearchEngine
from enka.settings import DEFAULT_MAX_RESULTS, SUGGESTION_LIMIT

logger = logging.getLogger(__name__)


class Converter:
    """
    Converts English words and phrases into katakana readings.

    Example:
        >>> converter = Converter()
        >>> converter.initialize()
        >>> [r.katakana for r in converter.convert("computer")]
        ['コンピューター']
    """

    def __init__(self,
                 dictionary: Optional[IndexedDictionary] = None,
                 dictionary_path: Optional[Union[str, Path]] = None,
                 download: bool = True):
        """
        Args:
            dictionary: Already-built index to use instead of loading one.
            dictionary_path: Dictionary JSON file (default: configured path).
            download: Download the dictionary when the file is missing.
        """
        self.dictionary_path = Path(dictionary_path) if dictionary_path else None
        self.download = download
        self._lock = threading.Lock()
        self._state: Optional[Tuple[IndexedDictionary, SearchEngine]] = None
        if dictionary is not None:
            self._state = (dictionary, SearchEngine(dictionary))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    def initialize(self) -> IndexedDictionary:
        """Load and index the dictionary once; later calls are no-ops."""
        state = self._state
        if state is None:
            with self._lock:
                if self._state is None:
                    self._state = self._build(force_download=False)
                state = self._state
        return state[0]

    def reload(self, force_download: bool = False) -> IndexedDictionary:
        """
        Rebuild the index from disk, optionally re-downloading first.

        The previous IndexedDictionary and SearchEngine are left untouched.
        """
        with self._lock:
            self._state = self._build(force_download=force_download)
            return self._state[0]

    def _build(self, force_download: bool) -> Tuple[IndexedDictionary, SearchEngine]:
        dictionary = load_dictionary(
            self.dictionary_path,
            download=self.download,
            force_download=force_download,
        )
        return dictionary, SearchEngine(dictionary)

    @property
    def dictionary(self) -> IndexedDictionary:
        return self.initialize()

    @property
    def engine(self) -> SearchEngine:
        self.initialize()
        return self._state[1]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def convert(self,
                text: str,
                mode: Union[str, SearchMode, None] = SearchMode.STRICT,
                fuzzy: bool = False,
                max_results: int = DEFAULT_MAX_RESULTS) -> List[ConversionRecord]:
        """
        Convert English text to ranked katakana readings.

        Args:
            text: English word or phrase.
            mode: strict, normal or broad.
            fuzzy: Fall back to approximate matching when nothing matches.
            max_results: Maximum number of records.

        Returns:
            Ranked records with unique katakana; empty if nothing matched.

        Raises:
            InvalidSearchModeError: For an unknown mode (before any lookup).
        """
        mode = parse_search_mode(mode)
        engine = self.engine

        candidates = engine.find_scored_matches(text, mode)
        if not candidates and fuzzy:
            logger.debug(f"No direct match for {text!r}, trying fuzzy search")
            candidates = engine.find_fuzzy_matches(text, mode, max_results)

        return process_scored_results(candidates)[:max(max_results, 0)]

    def search_suggestions(self, partial_text: str,
                           max_results: int = SUGGESTION_LIMIT) -> List[str]:
        """Get sorted index keys starting with a partial query."""
        return self.engine.get_suggestions(partial_text, max_results)
