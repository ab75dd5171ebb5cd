"""
DataForSEO integration for keyword search metrics.

This module looks up search volume, difficulty, cost-per-click and
competition for keyword phrases using the DataForSEO Google search-volume
endpoint, and classifies search intent from the returned SERP snippet.

It implements the metrics provider interface used by the enrichment
stage. Every failure is reported as EnrichmentUnavailable so the pipeline
can degrade instead of crashing.
"""

import logging
import os
from typing import Any, Optional, Sequence

import requests

from .enrichment import EnrichmentUnavailable
from .schemas import KeywordMetrics, SearchIntent

logger = logging.getLogger(__name__)


SEARCH_VOLUME_URL = "https://api.dataforseo.com/v3/keywords_data/google/search_volume/live"

# DataForSEO reports success with this status code in the JSON body
STATUS_OK = 20000

# Hard cap on phrases per call to stay inside the provider's limits
MAX_KEYWORDS_PER_CALL = 100

DEFAULT_LOCATION = "United States"

# Competition is sometimes reported as a level instead of a number
COMPETITION_LEVELS = {"LOW": 0.33, "MEDIUM": 0.66, "HIGH": 1.0}


def determine_intent(result: dict) -> SearchIntent:
    """
    Classify search intent from a result's title and description.

    Args:
        result: One entry of a DataForSEO task result.

    Returns:
        The inferred SearchIntent.
    """
    title = (result.get("title") or "").lower()
    description = (result.get("description") or "").lower()

    if "buy" in title or "price" in title or "shop" in description or "purchase" in description:
        return SearchIntent.TRANSACTIONAL
    if "vs" in title or "best" in title or "compare" in description:
        return SearchIntent.COMMERCIAL
    if "how" in title or "what" in title or "why" in title or "learn" in description:
        return SearchIntent.INFORMATIONAL
    return SearchIntent.NAVIGATIONAL


def _competition_value(value: Any) -> Optional[float]:
    if isinstance(value, str):
        return COMPETITION_LEVELS.get(value.strip().upper())
    return value


def parse_search_volume_response(data: Any) -> dict[str, KeywordMetrics]:
    """
    Parse a DataForSEO search-volume response.

    Args:
        data: Decoded JSON response body.

    Returns:
        Metrics keyed by lower-cased keyword.

    Raises:
        EnrichmentUnavailable: If the response reports an error or has an
            unexpected shape.
    """
    if not isinstance(data, dict):
        raise EnrichmentUnavailable("Malformed DataForSEO response")

    status = data.get("status_code")
    if status != STATUS_OK:
        raise EnrichmentUnavailable(
            f"DataForSEO error {status}: {data.get('status_message', 'unknown error')}"
        )

    results: dict[str, KeywordMetrics] = {}
    for task in data.get("tasks") or []:
        for item in (task or {}).get("result") or []:
            if not isinstance(item, dict):
                continue
            keyword = item.get("keyword")
            if not keyword or not isinstance(keyword, str):
                continue
            try:
                results[keyword.lower()] = KeywordMetrics(
                    search_volume=item.get("search_volume"),
                    difficulty=item.get("keyword_difficulty"),
                    cpc=item.get("cpc"),
                    competition=_competition_value(item.get("competition_level")),
                    intent=determine_intent(item),
                    trends=[
                        {"month": m.get("month"), "volume": m.get("search_volume")}
                        for m in item.get("monthly_searches") or []
                    ],
                )
            except (ValueError, TypeError, AttributeError) as e:
                logger.debug(f"Skipping malformed DataForSEO result for '{keyword}': {e}")
    return results


class DataForSEOClient:
    """
    Client for the DataForSEO keyword data API.

    Credentials fall back to the DATAFORSEO_LOGIN and DATAFORSEO_PASSWORD
    environment variables.
    """

    def __init__(
        self,
        login: Optional[str] = None,
        password: Optional[str] = None,
        location: str = DEFAULT_LOCATION,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the DataForSEO client.

        Args:
            login: API login. Falls back to DATAFORSEO_LOGIN env var.
            password: API password. Falls back to DATAFORSEO_PASSWORD env var.
            location: Location name used for search volumes.
            timeout: Request timeout in seconds.
            session: Optional requests session (connection reuse, testing).
        """
        self.login = login or os.environ.get("DATAFORSEO_LOGIN")
        self.password = password or os.environ.get("DATAFORSEO_PASSWORD")
        self.location = location
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def is_configured(self) -> bool:
        """Check if credentials are available."""
        return bool(self.login and self.password)

    def fetch_keyword_metrics(self, phrases: Sequence[str]) -> dict[str, KeywordMetrics]:
        """
        Fetch metrics for a batch of phrases.

        Args:
            phrases: Keyword phrases.

        Returns:
            Metrics keyed by lower-cased phrase. Phrases the API does not
            know are simply absent.

        Raises:
            EnrichmentUnavailable: If the client is unconfigured, the
                request fails, or the response is an error.
        """
        if not self.is_configured:
            raise EnrichmentUnavailable(
                "DataForSEO is not configured. Set the DATAFORSEO_LOGIN and "
                "DATAFORSEO_PASSWORD environment variables."
            )

        keywords = [p for p in phrases if p]
        if not keywords:
            return {}
        if len(keywords) > MAX_KEYWORDS_PER_CALL:
            logger.warning(
                f"Limiting keywords from {len(keywords)} to {MAX_KEYWORDS_PER_CALL}"
            )
            keywords = keywords[:MAX_KEYWORDS_PER_CALL]

        try:
            response = self.session.post(
                SEARCH_VOLUME_URL,
                json=[{"location_name": self.location, "keywords": keywords}],
                auth=(self.login, self.password),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise EnrichmentUnavailable(f"DataForSEO request failed: {e}") from e
        except ValueError as e:
            raise EnrichmentUnavailable(f"DataForSEO returned invalid JSON: {e}") from e

        results = parse_search_volume_response(data)
        logger.info(f"DataForSEO returned metrics for {len(results)}/{len(keywords)} keywords")
        return results
