"""
Character handling and kana conversion for enka.

Provides katakana classification and katakana -> hiragana conversion.
Romanization lives in :mod:`enka.romanize`.
"""

import re
from typing import Dict

# ============================================================================
# Character Ranges
# ============================================================================

# Katakana block plus the prolonged sound mark and the combining
# (semi-)voiced sound marks
KATAKANA_REGEX = "[\u30A0-\u30FF\u30FC\u3099\u309A]"

# Katakana with a hiragana counterpart exactly 0x60 code points below
# (ァ..ヶ); ー, ヷ-ヺ and the iteration marks are outside of it
SHIFTABLE_KATAKANA_START = 0x30A1
SHIFTABLE_KATAKANA_END = 0x30F6
HIRAGANA_OFFSET = 0x60

SOKUON = "ッ"
LONG_VOWEL_MARK = "ー"

_KATAKANA_WORD_PATTERN = re.compile(rf"{KATAKANA_REGEX}+")

# Build katakana -> hiragana mapping for str.translate
_HIRAGANA_TABLE: Dict[int, int] = {
    code: code - HIRAGANA_OFFSET
    for code in range(SHIFTABLE_KATAKANA_START, SHIFTABLE_KATAKANA_END + 1)
}


# ============================================================================
# Character Testing Functions
# ============================================================================

def is_katakana(word: str) -> bool:
    """
    Check if word consists entirely of katakana.

    Args:
        word: The word to test.

    Returns:
        True for a non-empty, katakana-only word.
    """
    if not word:
        return False
    return bool(_KATAKANA_WORD_PATTERN.fullmatch(word))


# ============================================================================
# Kana Conversion
# ============================================================================

def as_hiragana(text: str) -> str:
    """
    Convert katakana to hiragana.

    Each katakana in the ァ..ヶ range is shifted down by 0x60 code points;
    everything else (including ー) is kept as-is.

    Args:
        text: Text to convert.

    Returns:
        Text with katakana converted to hiragana.
    """
    return text.translate(_HIRAGANA_TABLE)
