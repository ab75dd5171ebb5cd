"""Tests for stored keyword metrics loading."""

import pytest
import pandas as pd
from pathlib import Path

from seo_keyword_engine.metrics_loader import (
    MetricsLoadError,
    StaticMetricsProvider,
    load_metrics_file,
    parse_metrics_dataframe,
)
from seo_keyword_engine.schemas import KeywordMetrics, SearchIntent


class TestLoadMetricsFile:
    """Tests for CSV and Excel loading."""

    def test_load_csv(self, sample_metrics_csv: Path):
        """Test loading a CSV export with loose column names."""
        metrics = load_metrics_file(sample_metrics_csv)

        assert set(metrics) == {
            "solar panel installation",
            "panel installation",
            "residential inverters",
        }
        solar = metrics["solar panel installation"]
        assert solar.search_volume == 8100
        assert solar.difficulty == 35
        assert solar.cpc == pytest.approx(4.2)
        assert solar.intent == SearchIntent.COMMERCIAL

    def test_decimal_difficulty_scaled(self, sample_metrics_csv: Path):
        """Test that 0-1 difficulty values are scaled to 0-100."""
        metrics = load_metrics_file(sample_metrics_csv)
        assert metrics["panel installation"].difficulty == pytest.approx(25)

    def test_intent_alias(self, sample_metrics_csv: Path):
        """Test shorthand intent values."""
        metrics = load_metrics_file(sample_metrics_csv)
        assert metrics["panel installation"].intent == SearchIntent.INFORMATIONAL

    def test_load_excel(self, sample_metrics_excel: Path):
        """Test loading an Excel export."""
        metrics = load_metrics_file(sample_metrics_excel)
        assert metrics["residential inverters"].search_volume == 900
        assert metrics["residential inverters"].intent == SearchIntent.TRANSACTIONAL

    def test_file_not_found(self, tmp_path: Path):
        """Test loading a missing file."""
        with pytest.raises(MetricsLoadError, match="File not found"):
            load_metrics_file(tmp_path / "missing.csv")

    def test_unsupported_format(self, tmp_path: Path):
        """Test loading an unsupported file type."""
        path = tmp_path / "metrics.json"
        path.write_text("{}")
        with pytest.raises(MetricsLoadError, match="Unsupported file format"):
            load_metrics_file(path)

    def test_infinite_cells_ignored(self, tmp_path: Path):
        """Test that inf cells are treated as missing instead of raising."""
        path = tmp_path / "metrics.csv"
        path.write_text(
            "keyword,volume,cpc\n"
            "solar panel installation,inf,1.5\n"
            "attic fans,300,-inf\n"
        )

        metrics = load_metrics_file(path)

        assert metrics["solar panel installation"].search_volume == 0
        assert metrics["solar panel installation"].cpc == pytest.approx(1.5)
        assert metrics["attic fans"].search_volume == 300
        assert metrics["attic fans"].cpc == 0

    def test_missing_keyword_column(self, tmp_path: Path):
        """Test a file without a keyword column."""
        path = tmp_path / "metrics.csv"
        path.write_text("term_id,volume\n1,100\n")
        with pytest.raises(MetricsLoadError, match="No keyword column found"):
            load_metrics_file(path)


class TestParseMetricsDataframe:
    """Tests for DataFrame parsing."""

    def test_empty_frame(self):
        """Test that an empty frame is rejected."""
        with pytest.raises(MetricsLoadError, match="empty"):
            parse_metrics_dataframe(pd.DataFrame())

    def test_keyword_only(self):
        """Test that missing metric columns default to zero."""
        metrics = parse_metrics_dataframe(pd.DataFrame({"Query": ["Inverter Sizing"]}))
        assert metrics["inverter sizing"] == KeywordMetrics()

    def test_invalid_rows_skipped(self):
        """Test that rows with out-of-range values are skipped."""
        df = pd.DataFrame({
            "keyword": ["roof tiles", "attic fans"],
            "difficulty": [150, 20],
        })
        assert list(parse_metrics_dataframe(df)) == ["attic fans"]

    def test_unknown_intent_defaults(self):
        """Test that unrecognized intent values fall back to the default."""
        df = pd.DataFrame({"keyword": ["roof tiles"], "intent": ["mixed"]})
        assert parse_metrics_dataframe(df)["roof tiles"].intent == SearchIntent.INFORMATIONAL


class TestStaticMetricsProvider:
    """Tests for the in-memory provider."""

    def test_lookup_case_insensitive(self):
        """Test that lookups ignore case."""
        provider = StaticMetricsProvider({"Panel Installation": {"search_volume": 1200}})
        found = provider.fetch_keyword_metrics(["panel installation", "inverter sizing"])
        assert list(found) == ["panel installation"]
        assert found["panel installation"].search_volume == 1200

    def test_malformed_entries_dropped(self):
        """Test that bad entries never reach the pipeline."""
        provider = StaticMetricsProvider({
            "roof tiles": {"search_volume": -10},
            "attic fans": "n/a",
            "inverter sizing": KeywordMetrics(search_volume=300),
        })
        assert list(provider.metrics) == ["inverter sizing"]

    def test_from_file(self, sample_metrics_csv: Path):
        """Test building a provider from a CSV export."""
        provider = StaticMetricsProvider.from_file(sample_metrics_csv)
        assert "residential inverters" in provider.fetch_keyword_metrics(["residential inverters"])
