"""
Dictionary loading module for enka.

Handles obtaining the jmdict-simplified JSON file (download, extraction,
caching), parsing it into DictionaryEntry objects and building the
tiered index.

When the download fails a small built-in sample corpus is written in its
place so the tool stays usable offline.
"""

import json
import logging
import os
import shutil
import time
import urllib.request
import zipfile
import zlib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from enka.dict import DictionaryEntry, IndexedDictionary
from enka.indexing import build_index
from enka.settings import DICT_PATH, JMDICT_URL, ensure_data_dirs

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DictionaryFormatError(ValueError):
    """The dictionary file is neither a JSON array nor an object with ``words``."""


class DictionaryDownloadError(RuntimeError):
    """Downloading or extracting the dictionary archive failed."""


# ============================================================================
# Sample Data
# ============================================================================
# Written to the dictionary path when the real corpus cannot be downloaded.

SAMPLE_DICTIONARY_DATA: List[Dict[str, Any]] = [
    {
        "id": "1",
        "kana": [{"text": "コンピューター", "common": True}],
        "sense": [{"gloss": [{"text": "computer", "lang": "eng"}]}],
    },
    {
        "id": "2",
        "kana": [{"text": "サーバー", "common": True}],
        "sense": [{"gloss": [{"text": "server", "lang": "eng"}]}],
    },
    {
        "id": "3",
        "kana": [{"text": "データベース", "common": True}],
        "sense": [{"gloss": [{"text": "database", "lang": "eng"}]}],
    },
    {
        "id": "4",
        "kana": [{"text": "プログラミング", "common": True}],
        "sense": [{"gloss": [{"text": "programming", "lang": "eng"}]}],
    },
    {
        "id": "5",
        "kana": [{"text": "アプリケーション", "common": True}, {"text": "アプリ", "common": True}],
        "sense": [{"gloss": [{"text": "application", "lang": "eng"}]}],
    },
    {
        "id": "6",
        "kana": [{"text": "ジャバスクリプト", "common": True}],
        "sense": [{"gloss": [{"text": "JavaScript", "lang": "eng"}]}],
    },
    {
        "id": "7",
        "kana": [{"text": "インターネット", "common": True}, {"text": "ネット", "common": True}],
        "sense": [{"gloss": [{"text": "internet", "lang": "eng"}, {"text": "net", "lang": "eng"}]}],
    },
    {
        "id": "8",
        "kana": [{"text": "ウェブサイト", "common": True}, {"text": "サイト", "common": True}],
        "sense": [{"gloss": [{"text": "website", "lang": "eng"}, {"text": "site", "lang": "eng"}]}],
    },
]


# ============================================================================
# Path Helpers
# ============================================================================

def get_dictionary_path() -> Path:
    """Get the configured dictionary path."""
    return DICT_PATH


def is_dictionary_available(path: Optional[PathLike] = None) -> bool:
    """Check if the dictionary file exists."""
    return Path(path or get_dictionary_path()).is_file()


# ============================================================================
# Download Helpers
# ============================================================================

def write_sample_dictionary(target: PathLike) -> Path:
    """Write the built-in sample corpus as a JSON array."""
    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, 'w', encoding='utf-8') as f:
        json.dump(SAMPLE_DICTIONARY_DATA, f, ensure_ascii=False, indent=2)
    return target


def extract_dictionary(archive_path: PathLike, target: PathLike) -> Path:
    """
    Extract the JSON member of a jmdict-simplified zip archive.

    Args:
        archive_path: Downloaded zip file.
        target: Where to write the JSON file.

    Returns:
        The target path.

    Raises:
        DictionaryDownloadError: If the archive is unreadable or holds no JSON file.
    """
    target = Path(target)
    partial = target.with_name(target.name + '.part')
    try:
        with zipfile.ZipFile(archive_path) as archive:
            members = [name for name in archive.namelist() if name.endswith('.json')]
            if not members:
                raise DictionaryDownloadError(f"No JSON file found in {archive_path}")
            with archive.open(members[0]) as src, open(partial, 'wb') as dst:
                shutil.copyfileobj(src, dst)
        # Only a fully extracted file replaces the target
        os.replace(partial, target)
    except (zipfile.BadZipFile, zlib.error, EOFError) as e:
        raise DictionaryDownloadError(f"Corrupt dictionary archive {archive_path}: {e}") from e
    finally:
        if partial.exists():
            os.remove(partial)
    return target


def fetch_jmdict(target: PathLike, url: str = JMDICT_URL) -> Path:
    """
    Download and extract the jmdict-simplified release.

    Args:
        target: Where to write the extracted JSON file.
        url: Zip archive URL.

    Returns:
        The target path.

    Raises:
        DictionaryDownloadError: On any failure, including malformed URLs and
            truncated responses.
    """
    target = Path(target)
    archive = target.with_name(target.name + '.zip')

    logger.info(f"Downloading JMdict from {url}...")
    try:
        urllib.request.urlretrieve(url, archive)
        logger.info(f"Extracting {archive}...")
        return extract_dictionary(archive, target)
    except DictionaryDownloadError:
        raise
    except Exception as e:
        raise DictionaryDownloadError(f"Could not download {url}: {e!r}") from e
    finally:
        if archive.exists():
            os.remove(archive)


def download_dictionary(force: bool = False,
                        target: Optional[PathLike] = None,
                        url: str = JMDICT_URL) -> Path:
    """
    Make sure the dictionary file exists, downloading it if needed.

    Falls back to the built-in sample corpus when the download fails.

    Args:
        force: Download even if the file already exists.
        target: Where to store the JSON file (default: configured path).
        url: Zip archive URL.

    Returns:
        Path of the dictionary file.
    """
    if target is None:
        ensure_data_dirs()
    target = Path(target or get_dictionary_path())

    if not force and target.is_file():
        logger.info(f"Dictionary data already exists at {target}, using cached version")
        return target

    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        fetch_jmdict(target, url)
        logger.info(f"Saved dictionary to {target}")
    except DictionaryDownloadError as e:
        logger.warning(f"Failed to download JMdict data, falling back to sample data: {e}")
        write_sample_dictionary(target)
        logger.warning("Using a sample dataset. Run 'enka update --force' to retry the download.")
    return target


# ============================================================================
# Parsing and Loading
# ============================================================================

def parse_dictionary_data(data: Any) -> List[DictionaryEntry]:
    """
    Parse decoded dictionary JSON.

    Two shapes are accepted: a plain array of entries, or the
    jmdict-simplified object carrying its entries under ``words``.

    Args:
        data: Decoded JSON.

    Returns:
        Parsed entries in file order.

    Raises:
        DictionaryFormatError: For any other shape, or a malformed entry.
    """
    if isinstance(data, list):
        raw_entries = data
    elif isinstance(data, dict) and isinstance(data.get('words'), list):
        raw_entries = data['words']
    else:
        raise DictionaryFormatError("Unsupported dictionary format")

    entries = []
    for position, raw in enumerate(raw_entries):
        if not isinstance(raw, dict):
            raise DictionaryFormatError(f"Entry #{position} is not a JSON object")
        try:
            entries.append(DictionaryEntry.from_dict(raw))
        except (KeyError, TypeError, AttributeError) as e:
            raise DictionaryFormatError(f"Malformed entry #{position}: {e!r}") from e
    return entries


def load_entries(path: PathLike) -> List[DictionaryEntry]:
    """
    Read and parse a dictionary JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        DictionaryFormatError: If the file is not valid dictionary JSON.
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DictionaryFormatError(f"Invalid JSON in {path}: {e}") from e
    return parse_dictionary_data(data)


def load_dictionary(path: Optional[PathLike] = None,
                    download: bool = True,
                    force_download: bool = False) -> IndexedDictionary:
    """
    Load the dictionary file and build a new index.

    Args:
        path: Dictionary file (default: configured path).
        download: Download the dictionary if the file is missing.
        force_download: Re-download even if the file exists.

    Returns:
        A freshly built IndexedDictionary.
    """
    path = Path(path or get_dictionary_path())

    if force_download or (download and not path.is_file()):
        download_dictionary(force=force_download, target=path)

    logger.info("Loading and indexing dictionary...")
    t0 = time.perf_counter()
    entries = load_entries(path)
    dictionary = build_index(entries)
    elapsed = (time.perf_counter() - t0) * 1000
    logger.info(f"Dictionary loaded with {len(entries)} entries ({elapsed:.1f}ms)")
    return dictionary
