"""
Positional boosting of keyword candidates.

Title placement is the strongest relevance signal, headings come second
and the intro sentence third. Rules are checked in priority order and
only the first match applies, so boosts never compound.
"""

from typing import Iterable, Optional

from .config import EngineConfig
from .models import CandidateSource, PhraseCandidate
from .text_normalizer import NormalizedContent


def _contains_phrase(haystack: str, phrase: str) -> bool:
    """Exact phrase substring match."""
    if not haystack or not phrase:
        return False
    return phrase in haystack


def apply_positional_boost(
    candidate: PhraseCandidate,
    content: NormalizedContent,
    config: Optional[EngineConfig] = None,
) -> PhraseCandidate:
    """
    Boost one candidate according to where its words appear.

    Args:
        candidate: Candidate to boost in place.
        content: Normalized content views.
        config: Engine configuration holding the boost tiers.

    Returns:
        The same candidate, for chaining.
    """
    config = config or EngineConfig()
    words = candidate.words

    if _contains_phrase(content.title, candidate.phrase):
        candidate.boost(config.title_exact_boost)
        candidate.source = CandidateSource.TITLE
    elif any(w in content.title_tokens for w in words):
        candidate.boost(config.title_partial_boost)
        candidate.source = CandidateSource.TITLE
    elif _contains_phrase(content.headings_text, candidate.phrase):
        candidate.boost(config.heading_exact_boost)
        candidate.source = CandidateSource.HEADING
    elif any(w in content.heading_tokens for w in words):
        candidate.boost(config.heading_partial_boost)
        candidate.source = CandidateSource.HEADING
    elif _contains_phrase(content.intro, candidate.phrase):
        candidate.boost(config.intro_exact_boost)
        candidate.source = CandidateSource.INTRO
    elif any(w in content.intro_tokens for w in words):
        # Partial intro matches get a nudge but keep the body label
        candidate.boost(config.intro_partial_boost)
    else:
        candidate.source = CandidateSource.BODY

    return candidate


def apply_positional_boosts(
    candidates: Iterable[PhraseCandidate],
    content: NormalizedContent,
    config: Optional[EngineConfig] = None,
) -> list[PhraseCandidate]:
    """Apply positional boosts to every candidate."""
    config = config or EngineConfig()
    return [apply_positional_boost(c, content, config) for c in candidates]
