"""
N-gram candidate generation.

Slides 2-, 3- and 4-word windows over the filtered token sequence and
keeps windows that read like a keyword:
1. The joined phrase is long enough for its size (and not too long)
2. Stopword and generic-term budgets are respected
3. Every token has at least three characters
4. At least one substantial (5+ chars, non-generic) word is present
5. Neither boundary token is a stopword or generic term

Each admitted occurrence adds the window-size weight to the phrase score.
Overlapping candidates are kept; near-duplicates are resolved later so
positional and metric boosts can tell them apart first.
"""

import logging
from collections import Counter
from typing import Optional

from .config import EngineConfig
from .lexicon import is_generic, is_stopword, is_weak_term
from .models import PhraseCandidate

logger = logging.getLogger(__name__)


# Tokens this short never enter a window
MIN_TOKEN_LENGTH = 3

# Length of a word that can carry a phrase on its own
SUBSTANTIAL_WORD_LENGTH = 5


def filter_tokens(tokens: list[str]) -> list[str]:
    """
    Drop stopwords and tokens of two characters or fewer.

    Args:
        tokens: Normalized token sequence.

    Returns:
        Tokens eligible for windowing, in original order.
    """
    return [t for t in tokens if len(t) >= MIN_TOKEN_LENGTH and not is_stopword(t)]


def is_admissible_window(window: list[str], config: Optional[EngineConfig] = None) -> bool:
    """
    Check whether a token window forms an acceptable keyword phrase.

    Args:
        window: Consecutive tokens (2-4).
        config: Engine configuration for length limits.

    Returns:
        True if the window passes every admissibility rule.
    """
    config = config or EngineConfig()
    n = len(window)
    phrase = " ".join(window)

    if len(phrase) < config.min_phrase_chars(n) or len(phrase) > config.max_phrase_chars:
        return False

    stopword_count = sum(1 for t in window if is_stopword(t))
    if n == 2 and stopword_count > 0:
        return False
    if n >= 3 and stopword_count > 1:
        return False

    generic_count = sum(1 for t in window if is_generic(t))
    if n == 2 and generic_count > 1:
        return False
    if n >= 3 and generic_count > 2:
        return False

    if any(len(t) < MIN_TOKEN_LENGTH for t in window):
        return False

    if not any(len(t) >= SUBSTANTIAL_WORD_LENGTH and not is_generic(t) for t in window):
        return False

    if is_weak_term(window[0]) or is_weak_term(window[-1]):
        return False

    return True


def generate_ngrams(tokens: list[str], n: int, config: Optional[EngineConfig] = None) -> list[str]:
    """
    Return every admissible n-word phrase, one entry per occurrence.

    Args:
        tokens: Filtered token sequence.
        n: Window size.
        config: Engine configuration.

    Returns:
        Admissible phrases in the order they occur.
    """
    if n < 1:
        return []
    phrases = []
    for i in range(len(tokens) - n + 1):
        window = tokens[i:i + n]
        if is_admissible_window(window, config):
            phrases.append(" ".join(window))
    return phrases


def generate_candidates(
    tokens: list[str],
    config: Optional[EngineConfig] = None,
) -> dict[str, PhraseCandidate]:
    """
    Build the scored candidate map from a normalized token sequence.

    Args:
        tokens: Normalized tokens (stopwords still present).
        config: Engine configuration.

    Returns:
        Mapping of phrase to PhraseCandidate, keyed uniquely by phrase.
        On a phrase collision the higher score is kept.
    """
    config = config or EngineConfig()
    filtered = filter_tokens(tokens)

    candidates: dict[str, PhraseCandidate] = {}
    for n in config.ngram_sizes:
        frequencies = Counter(generate_ngrams(filtered, n, config))
        weight = config.ngram_weight(n)
        for phrase, count in frequencies.items():
            score = count * weight
            existing = candidates.get(phrase)
            if existing is None or score > existing.raw_score:
                candidates[phrase] = PhraseCandidate(phrase=phrase, raw_score=score)

    logger.debug(f"Generated {len(candidates)} candidates from {len(filtered)} tokens")
    return candidates
