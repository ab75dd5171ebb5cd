"""
Keyword metrics enrichment.

Sends the strongest candidates to a keyword-metrics provider in batches
and folds the returned search volume, difficulty and intent into each
candidate's score.

Providers implement a single call:

    fetch_keyword_metrics(phrases) -> {phrase: KeywordMetrics | dict}

Enrichment never fails the pipeline. A provider that raises, times out
or returns garbage simply yields no metrics, and the outcome is flagged
unavailable so later stages can widen their acceptance criteria.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from pydantic import ValidationError

from .config import EngineConfig
from .models import PhraseCandidate
from .schemas import KeywordMetrics

logger = logging.getLogger(__name__)


class EnrichmentUnavailable(Exception):
    """Raised when a metrics provider cannot be reached or answers badly."""
    pass


class MetricsProvider(Protocol):
    """Capability to look up search metrics for a batch of phrases."""

    def fetch_keyword_metrics(
        self, phrases: Sequence[str]
    ) -> Mapping[str, Any]:
        ...


@dataclass
class EnrichmentOutcome:
    """Result of one enrichment pass."""
    metrics: dict[str, KeywordMetrics] = field(default_factory=dict)
    available: bool = False
    requested: int = 0
    failed_batches: int = 0

    @property
    def matched(self) -> int:
        """Number of phrases that received metrics."""
        return len(self.metrics)


def select_enrichment_pool(
    candidates: Sequence[PhraseCandidate],
    pool_size: int,
) -> list[PhraseCandidate]:
    """
    Return the top candidates by current score.

    Ties are broken alphabetically so the pool is deterministic.

    Args:
        candidates: Scored candidates.
        pool_size: Maximum number of candidates to keep.

    Returns:
        At most pool_size candidates, highest score first.
    """
    ordered = sorted(candidates, key=lambda c: (-c.raw_score, c.phrase))
    return ordered[:pool_size]


def coerce_metrics(raw: Any) -> Optional[KeywordMetrics]:
    """
    Convert a provider payload entry into KeywordMetrics.

    Args:
        raw: KeywordMetrics instance or mapping of metric fields.

    Returns:
        KeywordMetrics, or None if the entry is malformed.
    """
    if isinstance(raw, KeywordMetrics):
        return raw
    if not isinstance(raw, Mapping):
        return None
    try:
        return KeywordMetrics.model_validate(dict(raw))
    except (ValidationError, ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Skipping malformed metrics entry: {e}")
        return None


def metric_multiplier(metrics: KeywordMetrics, config: Optional[EngineConfig] = None) -> float:
    """
    Compute the stacked score multiplier for a candidate's metrics.

    Factors applied in sequence:
    1. Sweet spot: enough volume at low difficulty
    2. Volume tier (first threshold strictly exceeded)
    3. Difficulty tier (first threshold strictly undercut)
    4. Search intent

    Args:
        metrics: Metrics returned for the phrase.
        config: Engine configuration holding the tiers.

    Returns:
        Product of all applicable multipliers.
    """
    config = config or EngineConfig()
    multiplier = 1.0

    if (metrics.search_volume >= config.sweet_spot_min_volume
            and metrics.difficulty < config.sweet_spot_max_difficulty):
        multiplier *= config.sweet_spot_boost

    for threshold, factor in config.volume_tiers:
        if metrics.search_volume > threshold:
            multiplier *= factor
            break

    for threshold, factor in config.difficulty_tiers:
        if metrics.difficulty < threshold:
            multiplier *= factor
            break

    multiplier *= config.intent_multipliers.get(metrics.intent.value, 1.0)
    return multiplier


def apply_metrics(
    candidates: Sequence[PhraseCandidate],
    metrics: Mapping[str, KeywordMetrics],
    config: Optional[EngineConfig] = None,
) -> int:
    """
    Attach metrics to candidates and adjust their scores.

    Candidates without a matching entry are left untouched.

    Args:
        candidates: Candidates to enrich in place.
        metrics: Metrics keyed by lower-cased phrase.
        config: Engine configuration.

    Returns:
        Number of candidates that received metrics.
    """
    config = config or EngineConfig()
    enriched = 0
    for candidate in candidates:
        found = metrics.get(candidate.phrase.lower())
        if found is None:
            continue
        candidate.metrics = found
        candidate.boost(metric_multiplier(found, config))
        enriched += 1
    return enriched


class MetricsEnrichmentClient:
    """
    Batches candidate phrases to a metrics provider.

    Batches are spaced by a fixed delay to respect provider rate limits.
    Failed batches are logged and skipped; the remaining batches still
    contribute their metrics.
    """

    def __init__(
        self,
        provider: Optional[MetricsProvider],
        config: Optional[EngineConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the enrichment client.

        Args:
            provider: Metrics provider, or None to skip enrichment.
            config: Engine configuration (batch size and spacing).
            sleep: Delay function, injectable for tests.
        """
        self.provider = provider
        self.config = config or EngineConfig()
        self._sleep = sleep

    def fetch(self, phrases: Sequence[str]) -> EnrichmentOutcome:
        """
        Look up metrics for the given phrases.

        Args:
            phrases: Candidate phrases.

        Returns:
            EnrichmentOutcome; `available` is True only when at least one
            phrase received metrics.
        """
        keys = list(dict.fromkeys(p.lower() for p in phrases))
        outcome = EnrichmentOutcome(requested=len(keys))

        if self.provider is None:
            logger.info("No metrics provider configured, skipping enrichment")
            return outcome
        if not keys:
            return outcome

        size = self.config.enrichment_batch_size
        batches = [keys[i:i + size] for i in range(0, len(keys), size)]

        for index, batch in enumerate(batches):
            logger.debug(f"Requesting metrics batch {index + 1}/{len(batches)} ({len(batch)} phrases)")
            try:
                payload = self.provider.fetch_keyword_metrics(batch)
                if not isinstance(payload, Mapping):
                    raise EnrichmentUnavailable(
                        f"Provider returned {type(payload).__name__}, expected a mapping"
                    )
            except Exception as e:
                outcome.failed_batches += 1
                logger.warning(f"Metrics batch {index + 1}/{len(batches)} failed: {e}")
            else:
                wanted = set(batch)
                for phrase, raw in payload.items():
                    key = str(phrase).lower()
                    if key not in wanted:
                        continue
                    metrics = coerce_metrics(raw)
                    if metrics is not None:
                        outcome.metrics[key] = metrics

            if index < len(batches) - 1 and self.config.enrichment_batch_delay > 0:
                self._sleep(self.config.enrichment_batch_delay)

        outcome.available = bool(outcome.metrics)
        if outcome.available:
            logger.info(f"Received metrics for {outcome.matched}/{outcome.requested} phrases")
        else:
            logger.warning("Keyword metrics unavailable, continuing without enrichment")
        return outcome

    def enrich(self, candidates: Sequence[PhraseCandidate]) -> EnrichmentOutcome:
        """
        Fetch metrics for candidates and apply score adjustments in place.

        Args:
            candidates: The enrichment pool.

        Returns:
            EnrichmentOutcome describing what was received.
        """
        outcome = self.fetch([c.phrase for c in candidates])
        if outcome.available:
            apply_metrics(candidates, outcome.metrics, self.config)
        return outcome
