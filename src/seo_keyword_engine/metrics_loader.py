"""
Stored keyword metrics from CSV and Excel exports.

Callers that already persist keyword metrics (from an earlier provider
run or an SEO tool export) can feed them back to the engine without a
network call. Column names are matched loosely so exports from different
tools load without editing.
"""

import logging
import math
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

import pandas as pd

from .enrichment import coerce_metrics
from .schemas import INTENT_ALIASES, KeywordMetrics

logger = logging.getLogger(__name__)


class MetricsLoadError(Exception):
    """Raised when a metrics file cannot be loaded."""
    pass


# Common column name variations for keyword metric exports
KEYWORD_COLUMN_VARIANTS = ["keyword", "keywords", "term", "query", "phrase"]
VOLUME_COLUMN_VARIANTS = ["search_volume", "volume", "searchvolume", "sv", "avg_monthly_searches"]
DIFFICULTY_COLUMN_VARIANTS = ["difficulty", "kd", "keyword_difficulty", "seo_difficulty"]
CPC_COLUMN_VARIANTS = ["cpc", "cost_per_click", "avg_cpc"]
COMPETITION_COLUMN_VARIANTS = ["competition", "competition_level", "comp"]
INTENT_COLUMN_VARIANTS = ["intent", "search_intent", "keyword_intent"]


def _normalize_column_name(name: str) -> str:
    """Normalize column name for matching."""
    return str(name).lower().strip().replace(" ", "_").replace("-", "_")


def _find_column(df: pd.DataFrame, variants: list[str]) -> Optional[str]:
    """
    Find a column in the DataFrame matching one of the variant names.

    Args:
        df: The DataFrame to search.
        variants: List of possible column name variants.

    Returns:
        The actual column name if found, None otherwise.
    """
    normalized_columns = {_normalize_column_name(col): col for col in df.columns}

    for variant in variants:
        normalized = _normalize_column_name(variant)
        if normalized in normalized_columns:
            return normalized_columns[normalized]

    return None


def _cell_number(row: pd.Series, column: Optional[str]) -> Optional[float]:
    if column is None or pd.isna(row[column]):
        return None
    try:
        value = float(row[column])
    except (ValueError, TypeError):
        return None
    return value if math.isfinite(value) else None


def parse_metrics_dataframe(df: pd.DataFrame) -> dict[str, KeywordMetrics]:
    """
    Parse a DataFrame of keyword metrics.

    Args:
        df: DataFrame with at least a keyword column.

    Returns:
        Metrics keyed by lower-cased keyword. Rows with unusable values
        are skipped.

    Raises:
        MetricsLoadError: If the frame is empty or has no keyword column.
    """
    if df.empty:
        raise MetricsLoadError("Metrics file is empty")

    keyword_col = _find_column(df, KEYWORD_COLUMN_VARIANTS)
    if keyword_col is None:
        raise MetricsLoadError(
            f"No keyword column found. Expected one of: {', '.join(KEYWORD_COLUMN_VARIANTS)}. "
            f"Found columns: {', '.join(str(c) for c in df.columns)}"
        )

    volume_col = _find_column(df, VOLUME_COLUMN_VARIANTS)
    difficulty_col = _find_column(df, DIFFICULTY_COLUMN_VARIANTS)
    cpc_col = _find_column(df, CPC_COLUMN_VARIANTS)
    competition_col = _find_column(df, COMPETITION_COLUMN_VARIANTS)
    intent_col = _find_column(df, INTENT_COLUMN_VARIANTS)

    metrics: dict[str, KeywordMetrics] = {}

    for _, row in df.iterrows():
        phrase = row[keyword_col]
        if pd.isna(phrase) or not str(phrase).strip():
            continue
        key = str(phrase).strip().lower()

        entry: dict = {}
        volume = _cell_number(row, volume_col)
        if volume is not None:
            entry["search_volume"] = int(volume)

        difficulty = _cell_number(row, difficulty_col)
        if difficulty is not None:
            # Normalize to 0-100 range if it's a decimal
            if 0 < difficulty < 1:
                difficulty *= 100
            entry["difficulty"] = difficulty

        cpc = _cell_number(row, cpc_col)
        if cpc is not None:
            entry["cpc"] = cpc

        competition = _cell_number(row, competition_col)
        if competition is not None:
            entry["competition"] = competition

        if intent_col and not pd.isna(row[intent_col]):
            intent_value = str(row[intent_col]).strip().lower()
            if intent_value in INTENT_ALIASES:
                entry["intent"] = intent_value

        parsed = coerce_metrics(entry)
        if parsed is None:
            logger.debug(f"Skipping row with invalid metrics for '{key}'")
            continue
        metrics[key] = parsed

    return metrics


def load_metrics_file(
    file_path: Union[str, Path],
    sheet_name: Optional[str] = None,
) -> dict[str, KeywordMetrics]:
    """
    Load keyword metrics from a CSV or Excel file.

    Automatically detects file type based on extension.

    Args:
        file_path: Path to the metrics file.
        sheet_name: Optional sheet name for Excel files.

    Returns:
        Metrics keyed by lower-cased keyword.

    Raises:
        MetricsLoadError: If the file cannot be read or is invalid.
    """
    path = Path(file_path)

    if not path.exists():
        raise MetricsLoadError(f"File not found: {file_path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            try:
                df = pd.read_csv(path, encoding="utf-8")
            except UnicodeDecodeError:
                df = pd.read_csv(path, encoding="latin-1")
        elif suffix in (".xlsx", ".xls"):
            df = pd.read_excel(path, sheet_name=sheet_name or 0)
        else:
            raise MetricsLoadError(
                f"Unsupported file format: {suffix}. Supported formats: .csv, .xlsx, .xls"
            )
    except MetricsLoadError:
        raise
    except Exception as e:
        raise MetricsLoadError(f"Failed to read metrics file: {e}") from e

    return parse_metrics_dataframe(df)


class StaticMetricsProvider:
    """
    Metrics provider backed by an in-memory mapping.

    Useful for stored metrics and as a deterministic provider in tests.
    """

    def __init__(self, metrics: Mapping[str, object]):
        """
        Initialize the provider.

        Args:
            metrics: Mapping of phrase to KeywordMetrics or metric dict.
                Malformed entries are dropped.
        """
        self.metrics: dict[str, KeywordMetrics] = {}
        for phrase, raw in metrics.items():
            parsed = coerce_metrics(raw)
            if parsed is not None:
                self.metrics[str(phrase).lower()] = parsed

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        sheet_name: Optional[str] = None,
    ) -> "StaticMetricsProvider":
        """Create a provider from a CSV or Excel metrics export."""
        return cls(load_metrics_file(file_path, sheet_name))

    def fetch_keyword_metrics(self, phrases: Sequence[str]) -> dict[str, KeywordMetrics]:
        """Return stored metrics for the phrases that have them."""
        found = {}
        for phrase in phrases:
            key = phrase.lower()
            if key in self.metrics:
                found[key] = self.metrics[key]
        return found
