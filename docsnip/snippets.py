"""Snippet extraction for documentation code blocks.

A code listing can mark named regions with comment lines::

    // snippet-start: euro handler
    type euroHandler struct {
        logger log.Logger
    }
    // snippet-end: euro handler

Extracting ``"euro handler"`` returns only the lines between the markers,
with every marker comment removed and the first and last line of the region
dropped (authors leave one boundary line next to each marker). When the
requested region is not present the whole listing is returned, minus marker
comments, so a page referencing a snippet that does not exist yet still
renders.

Key classes and functions:
- SnippetExtractor: Extractor bound to a set of comment prefixes.
- Extraction: Cleaned text plus whether the region was isolated.
- extract: Module-level shortcut using the default prefixes.
- list_snippets: Names of the snippet regions declared in a listing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_COMMENT_PREFIXES: tuple[str, ...] = ("//", "#")

START_KEYWORD = "snippet-start"
END_KEYWORD = "snippet-end"


@dataclass(frozen=True)
class Extraction:
    """Result of extracting a snippet from a listing.

    Attributes:
        text: Cleaned display text.
        isolated: True when the requested region was found and isolated.
    """

    text: str
    isolated: bool


class SnippetExtractor:
    """Extracts named snippet regions from code listings.

    Region selection pairs the first start marker for a name with the last
    end marker for that name that follows it. Any nested or repeated markers
    for the same name in between are stripped like every other marker line.

    Attributes:
        comment_prefixes: Comment prefixes recognized in front of markers.
    """

    def __init__(self, comment_prefixes: Iterable[str] = DEFAULT_COMMENT_PREFIXES):
        """Initialize the extractor.

        Args:
            comment_prefixes: Comment syntaxes that may introduce a marker,
                such as ``//``, ``#`` or ``--``.

        Raises:
            ValueError: If no usable prefix is given.
        """
        prefixes = []
        for prefix in comment_prefixes:
            prefix = str(prefix).strip()
            if prefix and prefix not in prefixes:
                prefixes.append(prefix)
        if not prefixes:
            raise ValueError("At least one comment prefix is required")
        self.comment_prefixes: tuple[str, ...] = tuple(prefixes)
        # Longest first so "//" wins over "/" when both are configured
        alternatives = "|".join(
            re.escape(p) for p in sorted(self.comment_prefixes, key=len, reverse=True)
        )
        self._prefix_pattern = f"(?:{alternatives})"
        self._leftover_re = re.compile(f"{self._prefix_pattern} snippet")
        self._start_name_re = re.compile(
            rf"{self._prefix_pattern} {START_KEYWORD}: ([^\r]+?)\s*$"
        )

    def extract(self, text: str, snippet: str | None = None) -> str:
        """Return the display text for a listing.

        Args:
            text: Full code listing.
            snippet: Optional snippet name to isolate.

        Returns:
            Cleaned text without marker comments.
        """
        return self.extract_region(text, snippet).text

    def extract_region(self, text: str, snippet: str | None = None) -> Extraction:
        """Extract a snippet and report whether isolation succeeded.

        Args:
            text: Full code listing.
            snippet: Optional snippet name to isolate.

        Returns:
            Extraction holding the cleaned text and the isolation flag.
        """
        if text.endswith("\n"):
            text = text[:-1]
        lines = text.split("\n")

        region = self._isolate(lines, snippet) if snippet else None
        candidate = lines if region is None else region
        kept = [line for line in candidate if not self.is_marker(line)]

        if region is not None:
            kept = kept[1:-1]

        return Extraction(text="\n".join(kept), isolated=region is not None)

    def list_snippets(self, text: str) -> list[str]:
        """List snippet names declared by start markers.

        Args:
            text: Full code listing.

        Returns:
            Names in order of first appearance, without duplicates.
        """
        names: list[str] = []
        # Same line split as extract_region, so every listed name can isolate
        for line in text.split("\n"):
            match = self._start_name_re.search(line)
            if match and match.group(1) not in names:
                names.append(match.group(1))
        return names

    def is_marker(self, line: str) -> bool:
        """Check whether a line carries a snippet marker comment.

        Args:
            line: A single line of text.

        Returns:
            True if the line contains a comment prefix followed by ``snippet``.
        """
        return self._leftover_re.search(line) is not None

    def _isolate(self, lines: list[str], snippet: str) -> list[str] | None:
        """Return the lines strictly between the markers for a snippet.

        Args:
            lines: Listing split into lines.
            snippet: Snippet name, matched verbatim.

        Returns:
            The enclosed lines, or None if no start/end pair exists.
        """
        start_re = self._marker_re(START_KEYWORD, snippet)
        end_re = self._marker_re(END_KEYWORD, snippet)

        start = next((i for i, line in enumerate(lines) if start_re.search(line)), None)
        if start is None:
            return None

        end = None
        for i in range(len(lines) - 1, start, -1):
            if end_re.search(lines[i]):
                end = i
                break
        if end is None:
            return None

        return lines[start + 1 : end]

    def _marker_re(self, keyword: str, snippet: str) -> re.Pattern[str]:
        return re.compile(rf"{self._prefix_pattern} {keyword}: {re.escape(snippet)}\s*$")


# Default extractor instance
default_extractor = SnippetExtractor()


def extract(text: str, snippet: str | None = None) -> str:
    """Extract a snippet using the default comment prefixes.

    Args:
        text: Full code listing.
        snippet: Optional snippet name to isolate.

    Returns:
        Cleaned display text.
    """
    return default_extractor.extract(text, snippet)


def extract_region(text: str, snippet: str | None = None) -> Extraction:
    """Extract a snippet with the default prefixes, keeping the isolation flag."""
    return default_extractor.extract_region(text, snippet)


def list_snippets(text: str) -> list[str]:
    """List snippet names using the default comment prefixes."""
    return default_extractor.list_snippets(text)
