"""Shared fixtures for enka tests."""

import json

import pytest

from enka.converter import Converter
from enka.dict import DictionaryEntry
from enka.indexing import build_index
from enka.search import SearchEngine


def make_entry(id, kana, glosses, kanji=None, extra_senses=None):
    """
    Build a DictionaryEntry from compact test data.

    Args:
        id: Entry id.
        kana: List of (text, common) tuples or dicts.
        glosses: Gloss texts (or dicts) of the first sense.
        kanji: Optional list of (text, common) tuples.
        extra_senses: Optional list of gloss lists for further senses.
    """
    def element(value):
        if isinstance(value, dict):
            return value
        text, common = value
        return {"text": text, "common": common}

    def gloss(value):
        return value if isinstance(value, dict) else {"text": value, "lang": "eng"}

    senses = [{"gloss": [gloss(g) for g in glosses]}]
    for more in extra_senses or []:
        senses.append({"gloss": [gloss(g) for g in more]})

    data = {"id": id, "kana": [element(k) for k in kana], "sense": senses}
    if kanji:
        data["kanji"] = [element(k) for k in kanji]
    return DictionaryEntry.from_dict(data)


@pytest.fixture
def entries():
    """A small corpus covering every index tier."""
    return [
        make_entry("1000", [("コンピューター", True), ("コンピュータ", True)], ["computer"]),
        make_entry("1001", [("ケータイ", True)], ["mobile phone", "cell phone"],
                   kanji=[("携帯", True)]),
        make_entry("1002", [("モバイル", False)], ["mobile computing"]),
        make_entry("1003", [("サーバー", True), ("サーバ", False)], ["server (computer)"]),
        make_entry("1004", [("カンパニー", False)], ["company"]),
        make_entry("1005", [("コンプリート", False)], ["complete"]),
        make_entry("1006", [("コンペア", False)], ["compare"]),
        make_entry("1007", [("ネット", True)], ["net", "network"]),
        make_entry("1008", [("ベッド", True)], ["bed"]),
        make_entry("1009", [("ほん", True)], ["book"], kanji=[("本", True)]),
    ]


@pytest.fixture
def dictionary(entries):
    return build_index(entries)


@pytest.fixture
def engine(dictionary):
    return SearchEngine(dictionary)


@pytest.fixture
def converter(dictionary):
    return Converter(dictionary=dictionary)


@pytest.fixture
def dictionary_file(tmp_path):
    """A jmdict-simplified style JSON file on disk."""
    path = tmp_path / "jmdict.json"
    words = [
        {"id": "1", "kana": [{"text": "コンピューター", "common": True}],
         "sense": [{"gloss": [{"text": "computer", "lang": "eng"}]}]},
        {"id": "2", "kana": [{"text": "モバイル", "common": False}],
         "sense": [{"gloss": [{"text": "mobile computing", "lang": "eng"}]}]},
    ]
    path.write_text(json.dumps({"version": "3.6.1", "words": words}, ensure_ascii=False),
                    encoding="utf-8")
    return path
