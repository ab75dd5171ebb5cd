"""
Static word lists used by candidate generation and quality filtering.

Two sets are exposed:
- STOPWORDS: functional words that carry no topical signal
- GENERIC_TERMS: topically vague words ("best", "solution") that weaken
  keyword specificity when they lead, close, or dominate a phrase

Both are frozensets built once at import time and shared read-only by
every pipeline invocation.
"""

# Functional words, common verbs, and content-platform filler
STOPWORDS = frozenset({
    "the", "and", "a", "an", "in", "on", "for", "with", "to", "of", "is", "are",
    "was", "were", "it", "this", "that", "by", "from", "as", "at", "or", "be",
    "we", "you", "your", "our", "their", "them", "they", "he", "she", "i",
    "me", "my", "mine", "his", "her", "hers", "its", "us", "ours", "theirs",
    "will", "would", "should", "could", "can", "may", "might", "must", "shall",
    "do", "does", "did", "have", "has", "had", "am", "been", "being",
    "into", "through", "during", "before", "after", "above", "below", "up",
    "down", "out", "off", "over", "under", "again", "further", "then", "once",
    "here", "there", "when", "where", "why", "how", "all", "both", "each",
    "few", "more", "most", "other", "some", "such", "no", "nor", "not", "only",
    "own", "same", "so", "than", "too", "very", "s", "t", "just", "now", "get",
    "got", "also", "even", "well", "back", "new", "way", "see",
    "make", "take", "come", "go", "know", "think", "say", "tell", "give", "use",
    "find", "want", "look", "work", "feel", "try", "leave", "call", "put",
    "mean", "keep", "let", "begin", "seem", "help", "show", "need", "move",
    "one", "two", "three", "every", "much", "many", "lot", "lots", "bit",
    "piece", "part", "end", "start",
    "page", "post", "article", "blog", "site", "website",
    "today", "yesterday", "tomorrow", "day", "week", "month", "year",
})

# Broad marketing vocabulary that should never anchor a keyword
GENERIC_TERMS = frozenset({
    "things", "something", "anything", "everything", "nothing", "stuff",
    "item", "items", "thing",
    "guide", "tips", "ways", "steps", "methods", "strategies", "techniques",
    "approaches", "solution", "solutions",
    "best", "top", "great", "good", "better", "essential", "important", "key",
    "main", "major", "primary",
    "complete", "comprehensive", "ultimate", "definitive", "perfect",
    "excellent", "amazing", "awesome",
    "services", "parts", "material", "production", "system", "process",
    "quality", "time", "work", "people", "years",
})


def is_stopword(token: str) -> bool:
    """Check if a token is a stopword."""
    return token in STOPWORDS


def is_generic(token: str) -> bool:
    """Check if a token is a generic term."""
    return token in GENERIC_TERMS


def is_weak_term(token: str) -> bool:
    """Check if a token is either a stopword or a generic term."""
    return token in STOPWORDS or token in GENERIC_TERMS


def is_specific_term(token: str, min_length: int = 4) -> bool:
    """
    Check if a token is a specific, content-bearing word.

    Args:
        token: Lower-cased token.
        min_length: Minimum character length for the token to count.

    Returns:
        True if the token is neither weak nor shorter than min_length.
    """
    return len(token) >= min_length and not is_weak_term(token)
