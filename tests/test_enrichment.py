"""Tests for keyword metrics enrichment."""

import pytest

from seo_keyword_engine.config import EngineConfig
from seo_keyword_engine.enrichment import (
    EnrichmentOutcome,
    MetricsEnrichmentClient,
    apply_metrics,
    coerce_metrics,
    metric_multiplier,
    select_enrichment_pool,
)
from seo_keyword_engine.models import PhraseCandidate
from seo_keyword_engine.schemas import KeywordMetrics, SearchIntent


class TestMetricMultiplier:
    """Test stacked metric multipliers."""

    def test_sweet_spot_stack(self):
        """Test sweet spot, volume tier, difficulty tier and intent together."""
        metrics = KeywordMetrics(search_volume=5000, difficulty=30, intent="commercial")
        assert metric_multiplier(metrics) == pytest.approx(2.2 * 1.3 * 1.4 * 1.6)

    def test_high_volume_hard_keyword(self):
        """Test a high-volume, hard, navigational keyword."""
        metrics = KeywordMetrics(search_volume=60000, difficulty=70, intent="navigational")
        assert metric_multiplier(metrics) == pytest.approx(1.9)

    def test_no_volume(self):
        """Test that zero volume still gets difficulty and intent factors."""
        metrics = KeywordMetrics(search_volume=0, difficulty=50)
        assert metric_multiplier(metrics) == pytest.approx(1.2 * 1.5)

    def test_volume_thresholds_are_strict(self):
        """Test tier boundaries: 500 is a sweet spot but not above the 500 tier."""
        metrics = KeywordMetrics(search_volume=500, difficulty=39, intent="transactional")
        assert metric_multiplier(metrics) == pytest.approx(2.2 * 1.4 * 1.3)

    def test_difficulty_forty_misses_sweet_spot(self):
        """Test that difficulty 40 is outside the sweet spot."""
        metrics = KeywordMetrics(search_volume=2000, difficulty=40, intent="navigational")
        assert metric_multiplier(metrics) == pytest.approx(1.3 * 1.2)


class TestCoerceMetrics:
    """Test provider payload coercion."""

    def test_camel_case_keys(self):
        """Test persisted camelCase keys."""
        metrics = coerce_metrics({"searchVolume": 100, "keywordDifficulty": 12})
        assert metrics.search_volume == 100
        assert metrics.difficulty == 12

    def test_instance_passthrough(self):
        """Test that KeywordMetrics instances are returned as-is."""
        metrics = KeywordMetrics(search_volume=10)
        assert coerce_metrics(metrics) is metrics

    @pytest.mark.parametrize("raw", [
        "bad",
        None,
        42,
        {"search_volume": -5},
        {"difficulty": 150},
        {"search_volume": float("inf")},
        {"search_volume": float("nan")},
        {"cpc": float("inf")},
        {"difficulty": float("nan")},
    ])
    def test_malformed_entries(self, raw):
        """Test that malformed entries yield None."""
        assert coerce_metrics(raw) is None


class TestSelectEnrichmentPool:
    """Test pool selection."""

    def test_top_by_score(self):
        """Test that the highest scores are kept."""
        candidates = [PhraseCandidate(f"phrase {i:02d}", float(i)) for i in range(50)]
        pool = select_enrichment_pool(candidates, 40)
        assert len(pool) == 40
        assert pool[0].phrase == "phrase 49"
        assert min(c.raw_score for c in pool) == 10.0

    def test_ties_alphabetical(self):
        """Test deterministic ordering of tied scores."""
        candidates = [PhraseCandidate("roof tiles", 5.0), PhraseCandidate("attic fans", 5.0)]
        assert [c.phrase for c in select_enrichment_pool(candidates, 2)] == [
            "attic fans",
            "roof tiles",
        ]


class TestApplyMetrics:
    """Test score adjustment from metrics."""

    def test_matching_candidates_boosted(self):
        """Test that only candidates with metrics change."""
        candidates = [PhraseCandidate("solar panel", 10.0), PhraseCandidate("roof tiles", 10.0)]
        metrics = {"solar panel": KeywordMetrics(search_volume=0, difficulty=50)}

        count = apply_metrics(candidates, metrics)

        assert count == 1
        assert candidates[0].has_metrics
        assert candidates[0].raw_score == pytest.approx(18.0)
        assert not candidates[1].has_metrics
        assert candidates[1].raw_score == 10.0


class TestMetricsEnrichmentClient:
    """Test batching and failure handling."""

    def test_no_provider(self):
        """Test that a missing provider yields an unavailable outcome."""
        outcome = MetricsEnrichmentClient(None).fetch(["solar panel"])
        assert outcome.available is False
        assert outcome.requested == 1
        assert outcome.metrics == {}

    def test_batches_and_delay(self, recording_provider, no_sleep):
        """Test that phrases are batched and batches are spaced."""
        phrases = [f"phrase {i:03d}" for i in range(120)]
        provider = recording_provider({"phrase 007": {"search_volume": 300}})
        client = MetricsEnrichmentClient(provider, sleep=no_sleep)

        outcome = client.fetch(phrases)

        assert [len(batch) for batch in provider.calls] == [50, 50, 20]
        assert no_sleep.delays == [2.0, 2.0]
        assert outcome.available is True
        assert outcome.matched == 1

    def test_single_batch_no_delay(self, recording_provider, no_sleep):
        """Test that one batch never waits."""
        client = MetricsEnrichmentClient(recording_provider(), sleep=no_sleep)
        client.fetch(["solar panel", "roof tiles"])
        assert no_sleep.delays == []

    def test_phrases_deduplicated_case_insensitively(self, recording_provider, no_sleep):
        """Test that each phrase is requested once."""
        provider = recording_provider()
        client = MetricsEnrichmentClient(provider, sleep=no_sleep)
        outcome = client.fetch(["Solar Panel", "solar panel", "roof tiles"])
        assert provider.calls == [["solar panel", "roof tiles"]]
        assert outcome.requested == 2

    def test_failed_batch_skipped(self, recording_provider, no_sleep):
        """Test that a failing batch does not stop the others."""
        phrases = [f"phrase {i:03d}" for i in range(60)]
        provider = recording_provider(
            {"phrase 001": {"search_volume": 100}, "phrase 055": {"search_volume": 900}},
            fail_on={1},
        )
        client = MetricsEnrichmentClient(provider, sleep=no_sleep)

        outcome = client.fetch(phrases)

        assert outcome.failed_batches == 1
        assert list(outcome.metrics) == ["phrase 055"]
        assert outcome.available is True

    def test_all_batches_fail(self, failing_provider, no_sleep):
        """Test that a dead provider yields an unavailable outcome."""
        client = MetricsEnrichmentClient(failing_provider, sleep=no_sleep)
        outcome = client.fetch(["solar panel"])
        assert failing_provider.calls == 1
        assert outcome.available is False
        assert outcome.failed_batches == 1

    def test_unrequested_keys_ignored(self, no_sleep):
        """Test that metrics for phrases not asked about are dropped."""
        class ChattyProvider:
            def fetch_keyword_metrics(self, phrases):
                return {"something else": {"search_volume": 1000}}

        outcome = MetricsEnrichmentClient(ChattyProvider(), sleep=no_sleep).fetch(["solar panel"])
        assert outcome.available is False

    def test_malformed_entries_skipped(self, no_sleep):
        """Test that bad entries are skipped and good ones kept."""
        class SloppyProvider:
            def fetch_keyword_metrics(self, phrases):
                return {
                    "Solar Panel": {"searchVolume": 1000, "keywordDifficulty": 20},
                    "roof tiles": "n/a",
                    "attic fans": {"search_volume": -1},
                }

        outcome = MetricsEnrichmentClient(SloppyProvider(), sleep=no_sleep).fetch(
            ["solar panel", "roof tiles", "attic fans"]
        )
        assert list(outcome.metrics) == ["solar panel"]
        assert outcome.metrics["solar panel"].search_volume == 1000

    def test_non_finite_values_skipped(self, no_sleep):
        """Test that Infinity and NaN from a JSON payload are skipped, not raised."""
        class OverflowProvider:
            def fetch_keyword_metrics(self, phrases):
                return {
                    "solar panel": {"search_volume": float("inf"), "difficulty": 10},
                    "roof tiles": {"search_volume": float("nan")},
                    "attic fans": {"search_volume": 800, "cpc": float("inf")},
                    "inverter sizing": {"search_volume": 2400.0, "difficulty": 15},
                }

        outcome = MetricsEnrichmentClient(OverflowProvider(), sleep=no_sleep).fetch(
            ["solar panel", "roof tiles", "attic fans", "inverter sizing"]
        )
        assert list(outcome.metrics) == ["inverter sizing"]
        assert outcome.metrics["inverter sizing"].search_volume == 2400
        assert outcome.failed_batches == 0

    def test_non_mapping_response_is_failure(self, no_sleep):
        """Test that a provider returning a list counts as a failed batch."""
        class ListProvider:
            def fetch_keyword_metrics(self, phrases):
                return [{"keyword": p} for p in phrases]

        outcome = MetricsEnrichmentClient(ListProvider(), sleep=no_sleep).fetch(["solar panel"])
        assert outcome.failed_batches == 1
        assert outcome.available is False

    def test_enrich_applies_metrics(self, recording_provider, no_sleep):
        """Test that enrich attaches metrics and adjusts scores."""
        provider = recording_provider({
            "solar panel": {"search_volume": 5000, "difficulty": 30, "intent": "commercial"},
        })
        candidates = [PhraseCandidate("solar panel", 10.0), PhraseCandidate("roof tiles", 10.0)]

        outcome = MetricsEnrichmentClient(provider, sleep=no_sleep).enrich(candidates)

        assert isinstance(outcome, EnrichmentOutcome)
        assert candidates[0].metrics.intent == SearchIntent.COMMERCIAL
        assert candidates[0].raw_score == pytest.approx(10.0 * 2.2 * 1.3 * 1.4 * 1.6)
        assert candidates[1].raw_score == 10.0

    def test_enrich_without_metrics_leaves_scores(self, failing_provider, no_sleep):
        """Test that a failed enrichment changes nothing."""
        candidates = [PhraseCandidate("solar panel", 10.0)]
        MetricsEnrichmentClient(failing_provider, sleep=no_sleep).enrich(candidates)
        assert candidates[0].raw_score == 10.0
        assert candidates[0].metrics is None

    def test_custom_batch_size(self, recording_provider, no_sleep):
        """Test configurable batching."""
        provider = recording_provider()
        config = EngineConfig(enrichment_batch_size=2, enrichment_batch_delay=0.5)
        MetricsEnrichmentClient(provider, config, sleep=no_sleep).fetch(
            ["aaa bbb", "ccc ddd", "eee fff"]
        )
        assert [len(batch) for batch in provider.calls] == [2, 1]
        assert no_sleep.delays == [0.5]
