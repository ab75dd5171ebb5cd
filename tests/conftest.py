"""
Pytest fixtures and configuration for SEO Keyword Engine tests.
"""

import pytest
from pathlib import Path


class RecordingProvider:
    """Metrics provider that serves canned metrics and records each batch."""

    def __init__(self, metrics=None, fail_on=()):
        self.metrics = {k.lower(): v for k, v in (metrics or {}).items()}
        self.fail_on = set(fail_on)
        self.calls = []

    def fetch_keyword_metrics(self, phrases):
        self.calls.append(list(phrases))
        if len(self.calls) in self.fail_on:
            raise ConnectionError("provider timed out")
        return {p: self.metrics[p] for p in phrases if p in self.metrics}


class FailingProvider:
    """Metrics provider that always raises."""

    def __init__(self):
        self.calls = 0

    def fetch_keyword_metrics(self, phrases):
        self.calls += 1
        raise ConnectionError("provider unreachable")


@pytest.fixture
def recording_provider():
    """Factory for providers with canned metrics."""
    def _make(metrics=None, fail_on=()):
        return RecordingProvider(metrics, fail_on)
    return _make


@pytest.fixture
def failing_provider() -> FailingProvider:
    """A provider that never answers."""
    return FailingProvider()


@pytest.fixture
def no_sleep():
    """Delay function that records requested delays instead of sleeping."""
    delays = []

    def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep


@pytest.fixture
def solar_title() -> str:
    """Title for the solar installation article."""
    return "Best Solar Panel Installation Guide"


@pytest.fixture
def solar_body() -> str:
    """HTML body for the solar installation article."""
    return (
        "<h2>Choosing Residential Inverters</h2>"
        "<p>Homeowners considering solar panel installation should compare quotes carefully. "
        "A professional solar panel installation lowers electricity bills. "
        "Every solar panel installation requires permits. "
        "Reliable solar panel installation improves property value.</p>"
    )


@pytest.fixture
def sample_metrics_csv(tmp_path: Path) -> Path:
    """Create a sample keyword metrics CSV file."""
    csv_path = tmp_path / "metrics.csv"
    csv_content = """Keyword,Search Volume,KD,CPC,Intent
solar panel installation,8100,35,4.20,commercial
panel installation,1200,0.25,2.10,info
residential inverters,90,20,1.00,transactional
,500,10,1.00,commercial
"""
    csv_path.write_text(csv_content)
    return csv_path


@pytest.fixture
def sample_metrics_excel(tmp_path: Path) -> Path:
    """Create a sample keyword metrics Excel file."""
    import pandas as pd

    xlsx_path = tmp_path / "metrics.xlsx"
    data = {
        "keyword": ["solar panel installation", "residential inverters"],
        "search_volume": [8100, 900],
        "difficulty": [35, 20],
        "intent": ["commercial", "transactional"],
    }
    df = pd.DataFrame(data)
    df.to_excel(xlsx_path, index=False)
    return xlsx_path


@pytest.fixture
def sample_html_content() -> str:
    """Sample HTML page for testing content loading."""
    return """
<!DOCTYPE html>
<html>
<head>
    <title>Solar Panel Installation | Homeowner Handbook</title>
    <script>var tracking = "solar tracking pixel";</script>
</head>
<body>
    <header>
        <nav>Navigation content</nav>
    </header>
    <main>
        <h1>Understanding Solar Panel Installation</h1>
        <p>Solar panel installation is a practical upgrade for homeowners. Permits come first.</p>
        <h2>Inverter Sizing</h2>
        <p>Inverter sizing depends on roof orientation and battery storage plans.</p>
    </main>
    <footer>Footer content</footer>
</body>
</html>
"""
