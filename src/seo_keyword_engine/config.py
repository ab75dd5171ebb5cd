# -*- coding: utf-8 -*-
"""
Centralized configuration for the keyword extraction engine.

All tuning constants used by the pipeline live here: n-gram weights,
positional boost tiers, enrichment batching, metric multipliers, quality
thresholds, ranking limits and topic generation settings.

The multipliers and the near-duplicate threshold were tuned empirically
and carry no documented derivation. They are exposed as defaults so they
can be adjusted per product without touching pipeline code.
"""

from dataclasses import dataclass, field


DEFAULT_TOPIC_REASON = "High search potential and relevance to your content"


@dataclass
class EngineConfig:
    """
    Configuration for one keyword extraction pipeline.

    Attributes:
        max_input_chars: Ceiling on the combined title + body length that is
            tokenized. Longer input is truncated silently.

        ngram_sizes: Window sizes used for candidate generation.
        ngram_weights: Per-occurrence score for each window size. Longer
            phrases carry more specific intent and weigh more.
        ngram_min_chars: Minimum joined-phrase length for each window size.
        max_phrase_chars: Maximum joined-phrase length for any window.

        title_exact_boost .. intro_partial_boost: Positional multipliers.
            Only the first matching rule applies (title, heading, intro;
            exact before partial).

        enrichment_pool_size: Number of top candidates sent for metrics.
        enrichment_batch_size: Phrases per provider request.
        enrichment_batch_delay: Seconds to wait between provider requests.

        sweet_spot_boost: Multiplier for volume >= sweet_spot_min_volume and
            difficulty < sweet_spot_max_difficulty.
        volume_tiers: (threshold, multiplier) pairs, first strict match wins.
        difficulty_tiers: (threshold, multiplier) pairs, first strict match wins.
        intent_multipliers: Multiplier per search intent.

        min_search_volume: Enriched candidates below this volume are dropped.
        max_difficulty: Enriched candidates above this difficulty are dropped.
        navigational_min_volume: Navigational keywords need at least this volume.
        similarity_threshold: Jaccard similarity above which a candidate is
            treated as a near-duplicate of an already accepted one.

        top_k: Keywords returned when enrichment data is available.
        degraded_top_k: Keywords returned when enrichment is unavailable.
        rank_ratio_gap: Minimum volume/difficulty ratio gap for the ranking
            comparator to prefer the better-metric keyword over raw score.
        sweet_spot_words: Inclusive word-count range preferred by the ranker.

        topic_count: Number of topic suggestions generated.
        topic_decay: Fractional score decay applied per topic position.
        topic_reason: Static reason attached to each topic suggestion.
    """

    # Normalization
    max_input_chars: int = 20000

    # Candidate generation
    ngram_sizes: tuple[int, ...] = (2, 3, 4)
    ngram_weights: dict[int, float] = field(
        default_factory=lambda: {2: 5.0, 3: 8.0, 4: 10.0}
    )
    ngram_min_chars: dict[int, int] = field(
        default_factory=lambda: {2: 8, 3: 10, 4: 12}
    )
    max_phrase_chars: int = 45

    # Positional boosts
    title_exact_boost: float = 5.0
    title_partial_boost: float = 3.0
    heading_exact_boost: float = 3.5
    heading_partial_boost: float = 2.2
    intro_exact_boost: float = 2.0
    intro_partial_boost: float = 1.5

    # Enrichment
    enrichment_pool_size: int = 40
    enrichment_batch_size: int = 50
    enrichment_batch_delay: float = 2.0

    # Metric-based score adjustments
    sweet_spot_boost: float = 2.2
    sweet_spot_min_volume: int = 500
    sweet_spot_max_difficulty: float = 40.0
    volume_tiers: tuple[tuple[int, float], ...] = (
        (50000, 1.9),
        (10000, 1.7),
        (5000, 1.5),
        (1000, 1.3),
        (500, 1.1),
    )
    difficulty_tiers: tuple[tuple[float, float], ...] = (
        (20.0, 1.6),
        (40.0, 1.4),
        (60.0, 1.2),
    )
    intent_multipliers: dict[str, float] = field(
        default_factory=lambda: {
            "commercial": 1.6,
            "informational": 1.5,
            "transactional": 1.3,
            "navigational": 1.0,
        }
    )

    # Quality filter
    min_search_volume: int = 100
    max_difficulty: float = 80.0
    navigational_min_volume: int = 500
    similarity_threshold: float = 0.75

    # Ranking
    top_k: int = 30
    degraded_top_k: int = 15
    rank_ratio_gap: float = 10.0
    sweet_spot_words: tuple[int, int] = (2, 3)

    # Topic recommendations
    topic_count: int = 6
    topic_decay: float = 0.04
    topic_reason: str = DEFAULT_TOPIC_REASON

    def ngram_weight(self, n: int) -> float:
        """Return the per-occurrence weight for an n-word window."""
        return self.ngram_weights.get(n, float(n))

    def min_phrase_chars(self, n: int) -> int:
        """Return the minimum joined-phrase length for an n-word window."""
        return self.ngram_min_chars.get(n, 8)

    def result_limit(self, enriched: bool) -> int:
        """Return the top-K bound for an enriched or degraded run."""
        return self.top_k if enriched else self.degraded_top_k

    def __post_init__(self):
        """Validate configuration values."""
        if self.max_input_chars < 1:
            raise ValueError(f"max_input_chars must be >= 1, got {self.max_input_chars}")
        if not self.ngram_sizes or any(n < 2 or n > 4 for n in self.ngram_sizes):
            raise ValueError(
                f"ngram_sizes must contain window sizes between 2 and 4, got {self.ngram_sizes}"
            )
        if self.enrichment_pool_size < 1:
            raise ValueError(
                f"enrichment_pool_size must be >= 1, got {self.enrichment_pool_size}"
            )
        if self.enrichment_batch_size < 1:
            raise ValueError(
                f"enrichment_batch_size must be >= 1, got {self.enrichment_batch_size}"
            )
        if self.enrichment_batch_delay < 0:
            raise ValueError(
                f"enrichment_batch_delay must be >= 0, got {self.enrichment_batch_delay}"
            )
        if not 0.0 < self.similarity_threshold <= 1.0:
            raise ValueError(
                f"similarity_threshold must be in (0, 1], got {self.similarity_threshold}"
            )
        if self.top_k < 1 or self.degraded_top_k < 1:
            raise ValueError(
                f"top_k and degraded_top_k must be >= 1, got {self.top_k} and {self.degraded_top_k}"
            )
        if self.topic_count < 0:
            raise ValueError(f"topic_count must be >= 0, got {self.topic_count}")
        if not 0.0 <= self.topic_decay < 1.0:
            raise ValueError(f"topic_decay must be in [0, 1), got {self.topic_decay}")
        if self.topic_count > 1 and (self.topic_count - 1) * self.topic_decay >= 1.0:
            raise ValueError(
                f"topic_decay {self.topic_decay} leaves no score for the last of "
                f"{self.topic_count} topics"
            )

    @classmethod
    def lightweight(cls, **overrides) -> "EngineConfig":
        """Create config for quick post-level keyword extraction.

        Lightweight mode:
        - Heavier per-occurrence weights (10/15/20)
        - Title boosts only (5x exact, 2x partial)
        - No heading or intro boosts
        - At most 15 keywords, topics decay 5% per position

        Args:
            **overrides: Override any config values

        Returns:
            EngineConfig with lightweight defaults
        """
        defaults = {
            "ngram_weights": {2: 10.0, 3: 15.0, 4: 20.0},
            "title_exact_boost": 5.0,
            "title_partial_boost": 2.0,
            "heading_exact_boost": 1.0,
            "heading_partial_boost": 1.0,
            "intro_exact_boost": 1.0,
            "intro_partial_boost": 1.0,
            "top_k": 15,
            "degraded_top_k": 15,
            "topic_decay": 0.05,
        }
        defaults.update(overrides)
        return cls(**defaults)
