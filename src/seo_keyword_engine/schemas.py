"""
Validated boundary models for the keyword engine.

Data crossing the engine boundary (caller input, provider payloads) is
parsed with pydantic so malformed values are rejected in one place
instead of deep inside the pipeline.
"""

import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SearchIntent(str, Enum):
    """Coarse classification of search purpose."""
    INFORMATIONAL = "informational"
    COMMERCIAL = "commercial"
    TRANSACTIONAL = "transactional"
    NAVIGATIONAL = "navigational"


# Shorthand spellings seen in keyword exports
INTENT_ALIASES = {
    "info": SearchIntent.INFORMATIONAL,
    "i": SearchIntent.INFORMATIONAL,
    "informational": SearchIntent.INFORMATIONAL,
    "comm": SearchIntent.COMMERCIAL,
    "c": SearchIntent.COMMERCIAL,
    "commercial": SearchIntent.COMMERCIAL,
    "trans": SearchIntent.TRANSACTIONAL,
    "t": SearchIntent.TRANSACTIONAL,
    "transactional": SearchIntent.TRANSACTIONAL,
    "nav": SearchIntent.NAVIGATIONAL,
    "n": SearchIntent.NAVIGATIONAL,
    "navigational": SearchIntent.NAVIGATIONAL,
}


class MonthlyVolume(BaseModel):
    """Search volume for a single month."""
    model_config = ConfigDict(frozen=True)

    month: str
    volume: int = Field(default=0, ge=0)

    @field_validator("month", mode="before")
    @classmethod
    def _stringify_month(cls, value: Any) -> str:
        return str(value)

    @field_validator("volume", mode="before")
    @classmethod
    def _none_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class KeywordMetrics(BaseModel):
    """
    Search metrics returned by a keyword-metrics provider for one phrase.

    Accepts both snake_case and the camelCase keys used in persisted
    results (searchVolume, keywordDifficulty). Missing numeric values
    default to zero and a missing intent defaults to informational.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    search_volume: int = Field(default=0, ge=0, alias="searchVolume")
    difficulty: float = Field(default=0.0, ge=0, le=100, alias="keywordDifficulty", allow_inf_nan=False)
    cpc: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    competition: float = Field(default=0.0, allow_inf_nan=False)
    intent: SearchIntent = SearchIntent.INFORMATIONAL
    trends: list[MonthlyVolume] = Field(default_factory=list, alias="trendsData")

    @field_validator("search_volume", "difficulty", "cpc", "competition", mode="before")
    @classmethod
    def _none_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("search_volume", mode="before")
    @classmethod
    def _whole_volume(cls, value: Any) -> Any:
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"search volume must be finite, got {value}")
            return int(value)
        return value

    @field_validator("intent", mode="before")
    @classmethod
    def _normalize_intent(cls, value: Any) -> Any:
        if value is None:
            return SearchIntent.INFORMATIONAL
        if isinstance(value, str):
            return INTENT_ALIASES.get(value.strip().lower(), value.strip().lower())
        return value

    @field_validator("trends", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def rank_potential(self) -> float:
        """Volume per point of difficulty, used to compare enriched keywords."""
        return self.search_volume / max(1.0, self.difficulty)

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys used by persisted results."""
        data = {
            "searchVolume": self.search_volume,
            "difficulty": self.difficulty,
            "cpc": self.cpc,
            "competition": self.competition,
            "intent": self.intent.value,
        }
        if self.trends:
            data["trendsData"] = [
                {"month": t.month, "volume": t.volume} for t in self.trends
            ]
        return data


class ContentInput(BaseModel):
    """
    Content handed to the engine by the caller.

    At least one of title or body must contain non-whitespace text.
    """
    model_config = ConfigDict(frozen=True)

    title: str = ""
    body: str = ""
    headings: Optional[list[str]] = None

    @field_validator("title", "body", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def _require_text(self) -> "ContentInput":
        if not self.title.strip() and not self.body.strip():
            raise ValueError("No content or title provided")
        return self
