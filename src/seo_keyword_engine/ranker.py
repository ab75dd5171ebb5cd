"""
Final keyword ranking.

Orders the filtered candidates, truncates to the configured top-K and
rescales scores so the first keyword scores 1.0.
"""

from functools import cmp_to_key
from typing import Optional, Sequence

from .config import EngineConfig
from .models import PhraseCandidate, RankedKeyword


# Smallest score a returned keyword can carry after rounding
MIN_NORMALIZED_SCORE = 0.01


def compare_candidates(
    a: PhraseCandidate,
    b: PhraseCandidate,
    config: Optional[EngineConfig] = None,
) -> int:
    """
    Ranking comparator; negative when `a` ranks first.

    1. A phrase inside the preferred word-count range beats a shorter one
    2. With equal word counts and metrics on both, a volume/difficulty
       gap larger than the configured threshold decides
    3. Otherwise higher raw score first, then alphabetical

    Args:
        a: First candidate.
        b: Second candidate.
        config: Engine configuration.

    Returns:
        -1, 0 or 1.
    """
    config = config or EngineConfig()
    low, high = config.sweet_spot_words
    a_words, b_words = a.word_count, b.word_count

    a_sweet = low <= a_words <= high
    b_sweet = low <= b_words <= high
    # Only reachable for callers ranking single words; generated candidates have 2+ words
    if a_sweet and b_words < low:
        return -1
    if b_sweet and a_words < low:
        return 1

    if a_words == b_words and a.metrics is not None and b.metrics is not None:
        a_potential = a.metrics.rank_potential
        b_potential = b.metrics.rank_potential
        if abs(a_potential - b_potential) > config.rank_ratio_gap:
            return -1 if a_potential > b_potential else 1

    if a.raw_score != b.raw_score:
        return -1 if a.raw_score > b.raw_score else 1
    if a.phrase != b.phrase:
        return -1 if a.phrase < b.phrase else 1
    return 0


def sort_candidates(
    candidates: Sequence[PhraseCandidate],
    config: Optional[EngineConfig] = None,
) -> list[PhraseCandidate]:
    """Sort candidates with the ranking comparator."""
    config = config or EngineConfig()
    return sorted(candidates, key=cmp_to_key(lambda a, b: compare_candidates(a, b, config)))


def normalize_scores(candidates: Sequence[PhraseCandidate]) -> list[RankedKeyword]:
    """
    Rescale raw scores against the first candidate.

    Scores are rounded to two decimals and clamped to
    [MIN_NORMALIZED_SCORE, 1.0]; a metric-driven reordering can place a
    lower raw score first, so later keywords may also reach 1.0.

    Args:
        candidates: Ranked candidates, best first.

    Returns:
        RankedKeyword projections in the same order.
    """
    if not candidates:
        return []

    top_score = candidates[0].raw_score or 1.0
    ranked = []
    for candidate in candidates:
        score = round(candidate.raw_score / top_score, 2)
        score = min(1.0, max(MIN_NORMALIZED_SCORE, score))
        ranked.append(RankedKeyword(
            keyword=candidate.phrase,
            score=score,
            source=candidate.source,
            metrics=candidate.metrics,
        ))
    return ranked


def rank_candidates(
    candidates: Sequence[PhraseCandidate],
    enriched: bool,
    config: Optional[EngineConfig] = None,
) -> list[RankedKeyword]:
    """
    Sort, truncate and rescale the surviving candidates.

    Args:
        candidates: Filtered candidates.
        enriched: Whether enrichment data was available for this run.
        config: Engine configuration.

    Returns:
        At most top_k (or degraded_top_k) ranked keywords.
    """
    config = config or EngineConfig()
    ordered = sort_candidates(candidates, config)
    return normalize_scores(ordered[:config.result_limit(enriched)])
