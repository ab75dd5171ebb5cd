"""
SEO Keyword Engine

Keyword candidate extraction and SEO ranking for long-form content:
- Extracts multi-word keyword phrases from a title and body
- Boosts phrases that appear in the title, headings or intro
- Enriches the strongest candidates with search metrics when available
- Returns a ranked keyword list and article topic suggestions
"""

__version__ = "1.0.0"
__author__ = "SEO Keyword Engine Team"

from .config import EngineConfig

from .schemas import (
    ContentInput,
    KeywordMetrics,
    MonthlyVolume,
    SearchIntent,
)

from .models import (
    CandidateSource,
    PhraseCandidate,
    RankedKeyword,
    TopicSuggestion,
    ExtractionResult,
)

# Pipeline stages
from .text_normalizer import NormalizedContent, normalize_content, normalize_text
from .candidates import generate_candidates, generate_ngrams
from .positional import apply_positional_boost, apply_positional_boosts
from .enrichment import (
    EnrichmentOutcome,
    EnrichmentUnavailable,
    MetricsEnrichmentClient,
    MetricsProvider,
    metric_multiplier,
)
from .quality_filter import filter_candidates, is_quality_keyword, jaccard_similarity
from .ranker import rank_candidates
from .topics import generate_topics

# Engine
from .engine import InputError, KeywordEngine, extract_keywords

# Metrics providers
from .dataforseo_client import DataForSEOClient
from .metrics_loader import MetricsLoadError, StaticMetricsProvider, load_metrics_file

__all__ = [
    # Configuration
    "EngineConfig",
    # Boundary schemas
    "ContentInput",
    "KeywordMetrics",
    "MonthlyVolume",
    "SearchIntent",
    # Models
    "CandidateSource",
    "PhraseCandidate",
    "RankedKeyword",
    "TopicSuggestion",
    "ExtractionResult",
    # Pipeline stages
    "NormalizedContent",
    "normalize_content",
    "normalize_text",
    "generate_candidates",
    "generate_ngrams",
    "apply_positional_boost",
    "apply_positional_boosts",
    "EnrichmentOutcome",
    "EnrichmentUnavailable",
    "MetricsEnrichmentClient",
    "MetricsProvider",
    "metric_multiplier",
    "filter_candidates",
    "is_quality_keyword",
    "jaccard_similarity",
    "rank_candidates",
    "generate_topics",
    # Engine
    "InputError",
    "KeywordEngine",
    "extract_keywords",
    # Metrics providers
    "DataForSEOClient",
    "MetricsLoadError",
    "StaticMetricsProvider",
    "load_metrics_file",
]
