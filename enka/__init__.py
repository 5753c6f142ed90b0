"""
enka: English to katakana converter backed by JMdict.

Basic Usage:
    import enka

    converter = enka.Converter()
    for record in converter.convert("computer", mode="normal"):
        print(f"{record.katakana} [{record.romaji}] {record.meaning}")
"""

import time
from typing import Optional, Tuple

__version__ = "0.1.0"

from enka.constants import InvalidSearchModeError, MatchType, SearchMode
from enka.converter import Converter
from enka.dict_load import DictionaryDownloadError, DictionaryFormatError
from enka.models import ConversionRecord, ConversionResponse


def warm_up(converter: Optional[Converter] = None, verbose: bool = False) -> Tuple[float, dict]:
    """
    Load the dictionary and build the index ahead of the first query.

    Args:
        converter: Converter to initialize (a new one if None).
        verbose: If True, print timing information.

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)

    Example:
        >>> elapsed, details = enka.warm_up(converter, verbose=True)
        Loading enka dictionary...
          Dictionary:       812.4ms (22,581 entries)
        Total warm-up:      812.6ms
    """
    timings = {}
    total_start = time.perf_counter()

    if converter is None:
        converter = Converter()

    if verbose:
        print("Loading enka dictionary...")

    t0 = time.perf_counter()
    dictionary = converter.initialize()
    timings['dictionary'] = (time.perf_counter() - t0) * 1000

    if verbose:
        print(f"  Dictionary:     {timings['dictionary']:>7.1f}ms ({len(dictionary):,} entries)")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def get_version() -> str:
    """Get the library version."""
    return __version__


__all__ = [
    "Converter",
    "ConversionRecord",
    "ConversionResponse",
    "SearchMode",
    "MatchType",
    "InvalidSearchModeError",
    "DictionaryFormatError",
    "DictionaryDownloadError",
    "warm_up",
    "get_version",
    "__version__",
]
