"""
Keyword quality filtering and near-duplicate suppression.

The structural checks apply to every candidate. The metrics checks only
apply to candidates that were enriched, so an unenriched run is judged on
structure alone.

Near-duplicates are suppressed greedily: candidates are visited in
descending score order and rejected when their word set is too similar
to one already accepted. The highest-scoring member of each cluster wins.
"""

import logging
import re
from typing import Iterable, Optional

from .config import EngineConfig
from .lexicon import is_specific_term, is_weak_term
from .models import PhraseCandidate
from .schemas import SearchIntent

logger = logging.getLogger(__name__)


# Letters separated by single spaces, nothing else
LETTERS_ONLY_RE = re.compile(r"^[a-z]+(?: [a-z]+)*$")

MIN_WORDS = 2
MAX_WORDS = 4
MIN_WORD_LENGTH = 3
SUBSTANTIAL_WORD_LENGTH = 6


def jaccard_similarity(a: str, b: str) -> float:
    """
    Jaccard similarity between the word sets of two phrases.

    Args:
        a: First phrase.
        b: Second phrase.

    Returns:
        Intersection size over union size, 0.0 for two empty phrases.
    """
    words_a = set(a.lower().split())
    words_b = set(b.lower().split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def is_quality_keyword(phrase: str) -> bool:
    """
    Check whether a phrase is structurally a usable keyword.

    Args:
        phrase: Lower-cased candidate phrase.

    Returns:
        True if the phrase passes every structural rule.
    """
    if not LETTERS_ONLY_RE.match(phrase):
        return False

    words = phrase.split(" ")
    if not MIN_WORDS <= len(words) <= MAX_WORDS:
        return False

    if any(len(w) < MIN_WORD_LENGTH for w in words):
        return False

    if not any(len(w) >= SUBSTANTIAL_WORD_LENGTH and not is_weak_term(w) for w in words):
        return False

    if is_weak_term(words[0]) or is_weak_term(words[-1]):
        return False

    if len(words) >= 3:
        specific = [w for w in words if is_specific_term(w)]
        if len(specific) < 2:
            return False

    return True


def passes_metrics_rules(candidate: PhraseCandidate, config: Optional[EngineConfig] = None) -> bool:
    """
    Check an enriched candidate against the search-metric thresholds.

    Candidates without metrics always pass.

    Args:
        candidate: Candidate to check.
        config: Engine configuration holding the thresholds.

    Returns:
        True if the candidate is rankable on its metrics.
    """
    metrics = candidate.metrics
    if metrics is None:
        return True

    config = config or EngineConfig()
    if metrics.search_volume < config.min_search_volume:
        return False
    if metrics.difficulty > config.max_difficulty:
        return False
    if (metrics.intent == SearchIntent.NAVIGATIONAL
            and metrics.search_volume < config.navigational_min_volume):
        return False
    return True


def filter_candidates(
    candidates: Iterable[PhraseCandidate],
    config: Optional[EngineConfig] = None,
    use_metrics: bool = True,
) -> list[PhraseCandidate]:
    """
    Drop low-quality candidates and suppress near-duplicates.

    Args:
        candidates: Scored (and possibly enriched) candidates.
        config: Engine configuration.
        use_metrics: Apply the metrics rules to enriched candidates. Turned
            off when enrichment was unavailable.

    Returns:
        Accepted candidates in descending score order.
    """
    config = config or EngineConfig()
    ordered = sorted(candidates, key=lambda c: (-c.raw_score, c.phrase))

    accepted: list[PhraseCandidate] = []
    rejected: dict[str, int] = {"structure": 0, "metrics": 0, "duplicate": 0}

    for candidate in ordered:
        if not is_quality_keyword(candidate.phrase):
            rejected["structure"] += 1
            continue

        if use_metrics and not passes_metrics_rules(candidate, config):
            rejected["metrics"] += 1
            continue

        if any(
            jaccard_similarity(candidate.phrase, kept.phrase) > config.similarity_threshold
            for kept in accepted
        ):
            rejected["duplicate"] += 1
            continue

        accepted.append(candidate)

    logger.debug(f"Quality filter kept {len(accepted)} candidates, rejected {rejected}")
    return accepted
