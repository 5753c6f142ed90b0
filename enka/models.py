"""
Pydantic models for enka conversion results.

These models are what the converter returns and what the CLI prints with
``--json``:

Usage:
    from enka.models import ConversionRecord, ConversionResponse

    records = converter.convert("computer")
    print(ConversionResponse.from_records("computer", "strict", False, records).model_dump_json())
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConversionRecord(BaseModel):
    """
    One katakana reading of one dictionary entry.

    Example:
        {"katakana": "コンピューター", "hiragana": "こんぴゅーたー",
         "romaji": "konpyu-ta-", "kanji": null, "meaning": "computer",
         "common": true}
    """
    model_config = ConfigDict(frozen=True)

    katakana: str = Field(..., description="Katakana reading")
    hiragana: str = Field(..., description="Reading converted to hiragana")
    romaji: str = Field(..., description="Romanized reading")
    kanji: Optional[str] = Field(None, description="Kanji spelling the reading applies to")
    meaning: str = Field("", description="English glosses of the first sense, comma separated")
    common: bool = Field(False, description="True if the reading is flagged common")


class ConversionResponse(BaseModel):
    """
    Conversion results for one query.

    Example response:
        {
            "query": "computer",
            "mode": "strict",
            "fuzzy": false,
            "results": [{"katakana": "コンピューター", ...}],
            "count": 1
        }
    """
    query: str = Field(..., description="Text as given by the caller")
    mode: str = Field(..., description="Search mode: strict, normal or broad")
    fuzzy: bool = Field(False, description="True if fuzzy fallback was enabled")
    results: List[ConversionRecord] = Field(default_factory=list, description="Ranked records")
    count: int = Field(0, description="Number of records")

    @classmethod
    def from_records(
        cls,
        query: str,
        mode: str,
        fuzzy: bool,
        records: List[ConversionRecord],
    ) -> "ConversionResponse":
        """Wrap converter output for serialization."""
        return cls(
            query=query,
            mode=mode,
            fuzzy=fuzzy,
            results=list(records),
            count=len(records),
        )
