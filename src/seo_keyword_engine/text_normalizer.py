"""
Text normalization for keyword extraction.

Turns a title and a markup-tolerant body into:
- a flat, lower-cased token sequence (stopwords kept; consumers mask them)
- normalized title, heading and intro strings used for positional boosts

The body may be HTML, Markdown or plain text. Input longer than the
configured ceiling is truncated silently before tokenizing; this bounds
pipeline cost and is part of the contract, not an error.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


DEFAULT_MAX_INPUT_CHARS = 20000

# Heading tags treated as structural signals
HEADING_TAGS = ["h1", "h2", "h3"]

# Markdown ATX headings up to level 3
MARKDOWN_HEADING_RE = re.compile(r"^\s{0,3}#{1,3}\s+(.+?)\s*#*\s*$", re.MULTILINE)

# Everything that is neither a word character nor whitespace
NON_WORD_RE = re.compile(r"[^\w\s]")
WHITESPACE_RE = re.compile(r"\s+")
SENTENCE_END_RE = re.compile(r"[.!?](?:\s|$)")


def _looks_like_markup(text: str) -> bool:
    return "<" in text and ">" in text


def _parse(markup: str) -> BeautifulSoup:
    soup = BeautifulSoup(markup, "lxml")
    for element in soup(["script", "style", "noscript"]):
        element.decompose()
    return soup


def strip_markup(text: str) -> str:
    """
    Remove tag-delimited markup, keeping the visible text.

    Tags are replaced by a single space so adjacent elements never fuse
    into one word.

    Args:
        text: Raw text, possibly containing HTML.

    Returns:
        Text with all markup removed.
    """
    if not text:
        return ""
    if not _looks_like_markup(text):
        return text
    return _parse(text).get_text(" ")


def normalize_text(text: str) -> str:
    """
    Normalize text for matching.

    Strips markup, replaces every non-word character with a space,
    lower-cases, collapses whitespace and trims.

    Args:
        text: Input text.

    Returns:
        Normalized text with single spaces between tokens.
    """
    if not text:
        return ""
    result = strip_markup(text)
    result = NON_WORD_RE.sub(" ", result)
    result = WHITESPACE_RE.sub(" ", result.lower())
    return result.strip()


def tokenize(normalized: str) -> list[str]:
    """Split normalized text into tokens."""
    return [token for token in normalized.split(" ") if token]


def extract_headings(body: str) -> list[str]:
    """
    Extract heading text (H1-H3) from HTML or Markdown.

    Args:
        body: Raw body text.

    Returns:
        Normalized heading strings in document order.
    """
    if not body:
        return []

    raw_headings: list[str] = []
    if _looks_like_markup(body):
        soup = _parse(body)
        raw_headings.extend(tag.get_text(" ") for tag in soup.find_all(HEADING_TAGS))
    raw_headings.extend(MARKDOWN_HEADING_RE.findall(body))

    headings = []
    for heading in raw_headings:
        normalized = normalize_text(heading)
        if normalized:
            headings.append(normalized)
    return headings


def _first_paragraph(body: str) -> str:
    if _looks_like_markup(body):
        soup = _parse(body)
        for paragraph in soup.find_all("p"):
            text = paragraph.get_text(" ").strip()
            if text:
                return text
        return soup.get_text(" ").strip()

    # Plain text or Markdown: skip heading lines
    lines = [
        line for line in body.splitlines()
        if line.strip() and not MARKDOWN_HEADING_RE.match(line)
    ]
    return " ".join(lines).strip()


def extract_intro(body: str) -> str:
    """
    Extract the first sentence of the body.

    Args:
        body: Raw body text.

    Returns:
        Normalized text of the first sentence of the first paragraph.
    """
    if not body:
        return ""
    paragraph = _first_paragraph(body)
    first_sentence = SENTENCE_END_RE.split(paragraph, maxsplit=1)[0]
    return normalize_text(first_sentence)


@dataclass
class NormalizedContent:
    """Normalized view of one piece of content."""
    title: str = ""
    body: str = ""
    headings: list[str] = field(default_factory=list)
    intro: str = ""
    tokens: list[str] = field(default_factory=list)
    truncated: bool = False

    @property
    def headings_text(self) -> str:
        """All headings joined into one searchable string."""
        return " ".join(self.headings)

    @property
    def title_tokens(self) -> frozenset[str]:
        return frozenset(tokenize(self.title))

    @property
    def heading_tokens(self) -> frozenset[str]:
        return frozenset(tokenize(self.headings_text))

    @property
    def intro_tokens(self) -> frozenset[str]:
        return frozenset(tokenize(self.intro))


def normalize_content(
    title: str,
    body: str,
    headings: Optional[Iterable[str]] = None,
    max_chars: int = DEFAULT_MAX_INPUT_CHARS,
) -> NormalizedContent:
    """
    Normalize a title/body pair for the extraction pipeline.

    Headings supplied by the caller are merged with headings found in the
    body markup.

    Args:
        title: Content title.
        body: Content body (HTML, Markdown or plain text).
        headings: Optional explicit heading strings.
        max_chars: Ceiling on the combined title + body length.

    Returns:
        NormalizedContent with tokens and positional views.
    """
    title = title or ""
    body = body or ""

    combined = f"{title} {body}"
    truncated = len(combined) > max_chars
    if truncated:
        logger.debug(f"Truncating input from {len(combined)} to {max_chars} characters")
        combined = combined[:max_chars]
        body = body[:max_chars]

    all_headings: list[str] = []
    for heading in headings or []:
        normalized = normalize_text(heading)
        if normalized:
            all_headings.append(normalized)
    for heading in extract_headings(body):
        if heading not in all_headings:
            all_headings.append(heading)

    normalized_body = normalize_text(body)

    return NormalizedContent(
        title=normalize_text(title),
        body=normalized_body,
        headings=all_headings,
        intro=extract_intro(body),
        tokens=tokenize(normalize_text(combined)),
        truncated=truncated,
    )
