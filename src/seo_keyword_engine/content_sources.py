"""
Content loading for the command-line interface.

This module handles fetching content from:
- Local files (HTML, Markdown or plain text)
- Web URLs (HTML pages fetched with requests)

The body is returned as markup so the extraction pipeline can still see
headings and the first paragraph.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


# Default headers for web requests
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

HTML_SUFFIXES = (".html", ".htm")
TEXT_SUFFIXES = (".md", ".markdown", ".txt")

MARKDOWN_TITLE_RE = re.compile(r"^\s{0,3}#\s+(.+?)\s*#*\s*$", re.MULTILINE)


class ContentSourceError(Exception):
    """Raised when content cannot be loaded."""
    pass


@dataclass
class LoadedContent:
    """Title and body loaded from a source."""
    title: str
    body: str
    source: str = ""


def parse_html_document(html: str, source: str = "") -> LoadedContent:
    """
    Split an HTML document into title and body markup.

    The title comes from <title>, falling back to the first <h1>. The body
    is the <main> or <article> element when present, else <body>.

    Args:
        html: Raw HTML.
        source: Where the HTML came from (for reporting).

    Returns:
        LoadedContent with the body as markup.
    """
    soup = BeautifulSoup(html, "lxml")

    title = ""
    if soup.title and soup.title.string:
        title = soup.title.string.strip()
    if not title:
        h1 = soup.find("h1")
        if h1:
            title = h1.get_text(" ").strip()

    for tag in soup(["script", "style", "noscript", "nav", "header", "footer"]):
        tag.decompose()

    container = soup.find("main") or soup.find("article") or soup.body or soup
    return LoadedContent(title=title, body=str(container), source=source)


def load_content_file(file_path: Union[str, Path]) -> LoadedContent:
    """
    Load content from a local file.

    Args:
        file_path: Path to an HTML, Markdown or text file.

    Returns:
        LoadedContent. For Markdown, the first level-1 heading becomes the
        title.

    Raises:
        ContentSourceError: If the file is missing or cannot be read.
    """
    path = Path(file_path)
    if not path.exists():
        raise ContentSourceError(f"File not found: {file_path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        text = path.read_text(encoding="latin-1")
    except OSError as e:
        raise ContentSourceError(f"Failed to read file: {e}") from e

    suffix = path.suffix.lower()
    if suffix in HTML_SUFFIXES:
        return parse_html_document(text, source=str(path))

    title = ""
    if suffix in TEXT_SUFFIXES or not suffix:
        match = MARKDOWN_TITLE_RE.search(text)
        if match:
            title = match.group(1).strip()
    return LoadedContent(title=title, body=text, source=str(path))


def fetch_url_content(url: str, timeout: int = 30) -> LoadedContent:
    """
    Fetch a web page and split it into title and body.

    Args:
        url: URL to fetch.
        timeout: Request timeout in seconds.

    Returns:
        LoadedContent with the page body as markup.

    Raises:
        ContentSourceError: If the page cannot be fetched.
    """
    try:
        response = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ContentSourceError(f"Failed to fetch URL: {e}") from e

    logger.info(f"Fetched {len(response.text)} characters from {url}")
    return parse_html_document(response.text, source=url)
