"""
Romanization module for enka.

Converts katakana readings to romaji with a fixed Hepburn-style syllable
table. Yoon and loanword digraphs (キャ, ピュ, ファ, ティ, ...) are looked
up before single kana, the prolonged sound mark is rendered as ``-`` and
the small tsu doubles the leading consonant of the following syllable.
"""

from typing import Dict, Optional, Tuple

from enka.characters import SOKUON


# ============================================================================
# Syllable Tables
# ============================================================================

KATAKANA_ROMAJI_TABLE: Dict[str, str] = {
    'ア': 'a',     'イ': 'i',     'ウ': 'u',     'エ': 'e',     'オ': 'o',
    'カ': 'ka',    'キ': 'ki',    'ク': 'ku',    'ケ': 'ke',    'コ': 'ko',
    'サ': 'sa',    'シ': 'shi',   'ス': 'su',    'セ': 'se',    'ソ': 'so',
    'タ': 'ta',    'チ': 'chi',   'ツ': 'tsu',   'テ': 'te',    'ト': 'to',
    'ナ': 'na',    'ニ': 'ni',    'ヌ': 'nu',    'ネ': 'ne',    'ノ': 'no',
    'ハ': 'ha',    'ヒ': 'hi',    'フ': 'fu',    'ヘ': 'he',    'ホ': 'ho',
    'マ': 'ma',    'ミ': 'mi',    'ム': 'mu',    'メ': 'me',    'モ': 'mo',
    'ヤ': 'ya',                   'ユ': 'yu',                   'ヨ': 'yo',
    'ラ': 'ra',    'リ': 'ri',    'ル': 'ru',    'レ': 're',    'ロ': 'ro',
    'ワ': 'wa',    'ヰ': 'wi',                   'ヱ': 'we',    'ヲ': 'wo',
    'ン': 'n',
    # Voiced consonants (dakuten)
    'ガ': 'ga',    'ギ': 'gi',    'グ': 'gu',    'ゲ': 'ge',    'ゴ': 'go',
    'ザ': 'za',    'ジ': 'ji',    'ズ': 'zu',    'ゼ': 'ze',    'ゾ': 'zo',
    'ダ': 'da',    'ヂ': 'ji',    'ヅ': 'zu',    'デ': 'de',    'ド': 'do',
    'バ': 'ba',    'ビ': 'bi',    'ブ': 'bu',    'ベ': 'be',    'ボ': 'bo',
    # Semi-voiced consonants (handakuten)
    'パ': 'pa',    'ピ': 'pi',    'プ': 'pu',    'ペ': 'pe',    'ポ': 'po',
    'ヴ': 'vu',
    # Small kana on their own
    'ァ': 'a',     'ィ': 'i',     'ゥ': 'u',     'ェ': 'e',     'ォ': 'o',
    'ャ': 'ya',                   'ュ': 'yu',                   'ョ': 'yo',
    'ヮ': 'wa',    'ヵ': 'ka',    'ヶ': 'ke',
    # Prolonged sound mark and small tsu
    'ー': '-',
    SOKUON: '',
}

DIGRAPH_ROMAJI_TABLE: Dict[str, str] = {
    'キャ': 'kya', 'キュ': 'kyu', 'キョ': 'kyo',
    'ギャ': 'gya', 'ギュ': 'gyu', 'ギョ': 'gyo',
    'シャ': 'sha', 'シュ': 'shu', 'ショ': 'sho', 'シェ': 'she',
    'ジャ': 'ja',  'ジュ': 'ju',  'ジョ': 'jo',  'ジェ': 'je',
    'チャ': 'cha', 'チュ': 'chu', 'チョ': 'cho', 'チェ': 'che',
    'ヂャ': 'ja',  'ヂュ': 'ju',  'ヂョ': 'jo',
    'ニャ': 'nya', 'ニュ': 'nyu', 'ニョ': 'nyo',
    'ヒャ': 'hya', 'ヒュ': 'hyu', 'ヒョ': 'hyo',
    'ビャ': 'bya', 'ビュ': 'byu', 'ビョ': 'byo',
    'ピャ': 'pya', 'ピュ': 'pyu', 'ピョ': 'pyo',
    'ミャ': 'mya', 'ミュ': 'myu', 'ミョ': 'myo',
    'リャ': 'rya', 'リュ': 'ryu', 'リョ': 'ryo',
    # Loanword combinations
    'ファ': 'fa',  'フィ': 'fi',  'フェ': 'fe',  'フォ': 'fo',  'フュ': 'fyu',
    'ティ': 'ti',  'ディ': 'di',  'トゥ': 'tu',  'ドゥ': 'du',
    'テュ': 'tyu', 'デュ': 'dyu',
    'ウィ': 'wi',  'ウェ': 'we',  'ウォ': 'wo',
    'ヴァ': 'va',  'ヴィ': 'vi',  'ヴェ': 've',  'ヴォ': 'vo',  'ヴュ': 'vyu',
    'イェ': 'ye',
    'ツァ': 'tsa', 'ツィ': 'tsi', 'ツェ': 'tse', 'ツォ': 'tso',
    'クァ': 'kwa', 'クィ': 'kwi', 'クェ': 'kwe', 'クォ': 'kwo',
    'グァ': 'gwa',
}

VOWELS = frozenset('aiueo')


# ============================================================================
# Syllable Matching
# ============================================================================

def match_syllable(text: str, pos: int) -> Optional[Tuple[str, str]]:
    """
    Find the longest table syllable starting at a position.

    Args:
        text: Katakana text.
        pos: Start index.

    Returns:
        (syllable, romaji) tuple, or None if the character is not in the tables.
    """
    pair = text[pos:pos + 2]
    if len(pair) == 2 and pair in DIGRAPH_ROMAJI_TABLE:
        return pair, DIGRAPH_ROMAJI_TABLE[pair]
    char = text[pos:pos + 1]
    if char in KATAKANA_ROMAJI_TABLE:
        return char, KATAKANA_ROMAJI_TABLE[char]
    return None


def geminate_consonant(romaji: str) -> str:
    """
    Get the consonant a preceding small tsu doubles.

    Returns an empty string when the syllable starts with a vowel sound
    or with something that is not a letter (e.g. the ``-`` long vowel).
    """
    if not romaji:
        return ''
    first = romaji[0]
    if first in VOWELS or not first.isalpha():
        return ''
    return first


# ============================================================================
# Main Romanization Function
# ============================================================================

def romanize_katakana(text: str) -> str:
    """
    Romanize a katakana word.

    Characters outside of the syllable tables are passed through unchanged.

    Args:
        text: Katakana text.

    Returns:
        Romanized string.

    Example:
        >>> romanize_katakana("コンピューター")
        'konpyu-ta-'
        >>> romanize_katakana("ベッド")
        'beddo'
    """
    result = []
    pos = 0

    while pos < len(text):
        char = text[pos]

        if char == SOKUON:
            following = match_syllable(text, pos + 1) if pos + 1 < len(text) else None
            if following:
                result.append(geminate_consonant(following[1]))
            pos += 1
            continue

        matched = match_syllable(text, pos)
        if matched is None:
            result.append(char)
            pos += 1
        else:
            syllable, romaji = matched
            result.append(romaji)
            pos += len(syllable)

    return ''.join(result)
