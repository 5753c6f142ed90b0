"""
Settings and configuration for enka.

Every path and tunable can be overridden through an ``ENKA_*``
environment variable.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = Path(os.environ.get("ENKA_DATA_DIR", PACKAGE_DIR / "data"))

# Cached jmdict-simplified JSON file
DICT_FILENAME = "jmdict-eng-common.json"
DEFAULT_DICT_PATH = DATA_DIR / DICT_FILENAME
DICT_PATH = Path(os.environ.get("ENKA_DICT_PATH", DEFAULT_DICT_PATH))

# Download URL for the jmdict-simplified release (zip containing one JSON file)
JMDICT_URL = os.environ.get(
    "ENKA_JMDICT_URL",
    "https://github.com/scriptin/jmdict-simplified/releases/download/"
    "3.6.1%2B20250915122439/jmdict-eng-common-3.6.1+20250915122439.json.zip",
)

# Debug mode
DEBUG = os.environ.get("ENKA_DEBUG", "").lower() in ("1", "true", "yes")

# Result limits
DEFAULT_MAX_RESULTS = 10
DEFAULT_FUZZY_CANDIDATES = 5
SUGGESTION_LIMIT = 10
CLI_SUGGESTION_LIMIT = 5

# Keys scoring below this ratio are never returned by approximate matching
FUZZY_MIN_SIMILARITY = float(os.environ.get("ENKA_FUZZY_MIN_SIMILARITY", "0.75"))


def ensure_data_dirs():
    """Create necessary data directories if they don't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
