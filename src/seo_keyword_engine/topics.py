"""
Recommended topic generation from ranked keywords.
"""

from typing import Callable, Optional, Sequence

from .config import EngineConfig
from .models import RankedKeyword, TopicSuggestion


def _headline(keyword: str) -> str:
    """Capitalize the first character only."""
    return keyword[:1].upper() + keyword[1:]


TopicTemplate = Callable[[str], str]

TOPIC_TEMPLATES: tuple[TopicTemplate, ...] = (
    lambda kw: f"{_headline(kw)}: Complete Guide",
    lambda kw: f"How to Master {_headline(kw)}",
    lambda kw: f"{_headline(kw)}: Best Practices and Tips",
    lambda kw: f"Understanding {_headline(kw)}: A Deep Dive",
    lambda kw: f"{_headline(kw)} Explained: What You Need to Know",
    lambda kw: f"Top Strategies for {_headline(kw)}",
)


def generate_topics(
    keywords: Sequence[RankedKeyword],
    config: Optional[EngineConfig] = None,
    templates: Sequence[TopicTemplate] = TOPIC_TEMPLATES,
) -> list[TopicSuggestion]:
    """
    Turn the best keywords into topic suggestions.

    Templates rotate by position, and each position decays the keyword's
    score by a fixed fraction so suggestions keep rank order.

    Args:
        keywords: Ranked keywords, best first.
        config: Engine configuration (count, decay, reason).
        templates: Title templates to rotate through.

    Returns:
        Up to topic_count suggestions.
    """
    config = config or EngineConfig()
    if not templates:
        return []

    suggestions = []
    for i, kw in enumerate(keywords[:config.topic_count]):
        template = templates[i % len(templates)]
        suggestions.append(TopicSuggestion(
            topic=template(kw.keyword),
            score=round(kw.score * (1 - i * config.topic_decay), 4),
            reason=config.topic_reason,
            keyword=kw.keyword,
            metrics=kw.metrics,
        ))
    return suggestions
