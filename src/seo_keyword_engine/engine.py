"""
Keyword extraction pipeline.

Runs the stages in order:
    normalize -> generate n-grams -> positional boost -> enrich
    -> quality filter / dedup -> rank -> topic suggestions

Every stage except enrichment is a pure transformation. The engine keeps
no state between calls, so one instance can serve concurrent requests.
"""

import logging
from typing import Iterable, Optional

from pydantic import ValidationError

from .candidates import generate_candidates
from .config import EngineConfig
from .enrichment import MetricsEnrichmentClient, MetricsProvider, select_enrichment_pool
from .models import ExtractionResult
from .positional import apply_positional_boosts
from .quality_filter import filter_candidates
from .ranker import rank_candidates
from .schemas import ContentInput
from .text_normalizer import normalize_content
from .topics import generate_topics

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """Raised when no usable text was provided."""
    pass


def validate_input(
    title: Optional[str],
    body: Optional[str],
    headings: Optional[Iterable[str]] = None,
) -> ContentInput:
    """
    Validate caller input.

    Args:
        title: Content title.
        body: Content body.
        headings: Optional heading strings.

    Returns:
        Validated ContentInput.

    Raises:
        InputError: If both title and body are empty or the values are
            not text.
    """
    try:
        return ContentInput(
            title=title,
            body=body,
            headings=list(headings) if headings is not None else None,
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise InputError(f"Invalid content: {messages}") from e


class KeywordEngine:
    """
    Extracts ranked SEO keywords and topic ideas from content.

    The metrics provider is optional. Without one, or when it fails, the
    engine ranks on structural and positional signals only and returns a
    shorter list.
    """

    def __init__(
        self,
        metrics_provider: Optional[MetricsProvider] = None,
        config: Optional[EngineConfig] = None,
        enrichment_client: Optional[MetricsEnrichmentClient] = None,
    ):
        """
        Initialize the engine.

        Args:
            metrics_provider: Source of keyword metrics, or None.
            config: Engine configuration.
            enrichment_client: Pre-built enrichment client; overrides
                metrics_provider when given.
        """
        self.config = config or EngineConfig()
        self.enrichment_client = enrichment_client or MetricsEnrichmentClient(
            metrics_provider, self.config
        )

    def extract(
        self,
        title: Optional[str] = "",
        body: Optional[str] = "",
        headings: Optional[Iterable[str]] = None,
    ) -> ExtractionResult:
        """
        Run the full pipeline for one piece of content.

        Args:
            title: Content title.
            body: Content body; HTML, Markdown or plain text.
            headings: Optional explicit headings, merged with any found
                in the body markup.

        Returns:
            ExtractionResult with ranked keywords and topic suggestions.
            The keyword list may be empty if nothing survives filtering.

        Raises:
            InputError: If no usable text was provided.
        """
        content_input = validate_input(title, body, headings)
        config = self.config

        # Step 1: Normalize
        content = normalize_content(
            content_input.title,
            content_input.body,
            content_input.headings,
            max_chars=config.max_input_chars,
        )

        # Step 2: Generate candidates
        candidates = generate_candidates(content.tokens, config)
        logger.info(f"Generated {len(candidates)} keyword candidates")

        # Step 3: Positional boosts
        boosted = apply_positional_boosts(candidates.values(), content, config)

        # Step 4: Enrich the strongest candidates
        pool = select_enrichment_pool(boosted, config.enrichment_pool_size)
        outcome = self.enrichment_client.enrich(pool)

        # Step 5: Quality filter and near-duplicate suppression
        accepted = filter_candidates(pool, config, use_metrics=outcome.available)

        # Step 6: Rank
        keywords = rank_candidates(accepted, enriched=outcome.available, config=config)

        # Step 7: Topic suggestions
        topics = generate_topics(keywords, config)

        logger.info(
            f"Extracted {len(keywords)} keywords and {len(topics)} topics "
            f"(enriched={outcome.available})"
        )
        return ExtractionResult(keywords=keywords, topics=topics, enriched=outcome.available)


def extract_keywords(
    title: Optional[str] = "",
    body: Optional[str] = "",
    headings: Optional[Iterable[str]] = None,
    metrics_provider: Optional[MetricsProvider] = None,
    config: Optional[EngineConfig] = None,
) -> ExtractionResult:
    """
    Convenience function to run the pipeline once.

    Args:
        title: Content title.
        body: Content body.
        headings: Optional explicit headings.
        metrics_provider: Optional keyword metrics provider.
        config: Optional engine configuration.

    Returns:
        ExtractionResult with keywords and topics.

    Raises:
        InputError: If no usable text was provided.
    """
    engine = KeywordEngine(metrics_provider=metrics_provider, config=config)
    return engine.extract(title, body, headings)
