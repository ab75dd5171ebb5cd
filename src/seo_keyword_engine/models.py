"""
Data models for the keyword extraction engine.

This module defines the transient pipeline entity (PhraseCandidate) and
the output entities handed back to the caller (RankedKeyword,
TopicSuggestion, ExtractionResult). None of them outlive a single
pipeline invocation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .schemas import KeywordMetrics


class CandidateSource(Enum):
    """Strongest placement signal found for a phrase."""
    BODY = "body"
    TITLE = "title"
    HEADING = "heading"
    INTRO = "intro"


@dataclass
class PhraseCandidate:
    """A multi-word keyword candidate moving through the pipeline."""
    phrase: str
    raw_score: float = 0.0
    source: CandidateSource = CandidateSource.BODY
    metrics: Optional[KeywordMetrics] = None

    @property
    def words(self) -> list[str]:
        """Tokens making up the phrase."""
        return self.phrase.split(" ")

    @property
    def word_count(self) -> int:
        """Number of tokens in the phrase."""
        return len(self.words)

    @property
    def has_metrics(self) -> bool:
        """Check if enrichment data was attached to this candidate."""
        return self.metrics is not None

    def boost(self, factor: float) -> None:
        """Multiply the raw score by a non-negative factor."""
        if factor < 0:
            raise ValueError(f"Boost factor must be >= 0, got {factor}")
        self.raw_score *= factor


@dataclass(frozen=True)
class RankedKeyword:
    """Final keyword with its score rescaled into (0, 1]."""
    keyword: str
    score: float
    source: CandidateSource
    metrics: Optional[KeywordMetrics] = None

    @property
    def word_count(self) -> int:
        """Number of words in the keyword."""
        return len(self.keyword.split())

    def to_dict(self) -> dict:
        """Serialize for persistence by the caller."""
        data = {
            "keyword": self.keyword,
            "score": self.score,
            "source": self.source.value,
        }
        if self.metrics is not None:
            data["seoStats"] = self.metrics.to_dict()
        return data


@dataclass(frozen=True)
class TopicSuggestion:
    """Human-readable topic idea derived from a ranked keyword."""
    topic: str
    score: float
    reason: str
    keyword: str = ""
    metrics: Optional[KeywordMetrics] = None

    def to_dict(self) -> dict:
        """Serialize for persistence by the caller."""
        data = {
            "topic": self.topic,
            "score": self.score,
            "reason": self.reason,
        }
        if self.metrics is not None:
            data["seoStats"] = self.metrics.to_dict()
        return data


@dataclass
class ExtractionResult:
    """Complete output of one pipeline invocation."""
    keywords: list[RankedKeyword] = field(default_factory=list)
    topics: list[TopicSuggestion] = field(default_factory=list)
    enriched: bool = False

    @property
    def top_keyword(self) -> Optional[RankedKeyword]:
        """The highest ranked keyword, if any survived filtering."""
        return self.keywords[0] if self.keywords else None

    def to_dict(self) -> dict:
        """Serialize the whole result."""
        return {
            "keywords": [kw.to_dict() for kw in self.keywords],
            "topics": [topic.to_dict() for topic in self.topics],
            "enriched": self.enriched,
        }
