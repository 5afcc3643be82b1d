"""Metadata extractors for docsnip.

This module contains implementations of the MetadataExtractor protocol.
Each extractor handles a single type of metadata.

Key classes:
- FrontmatterExtractor: Splits YAML frontmatter from the page body.
- TitleExtractor: Extracts title from frontmatter, content or filename.
- DescriptionExtractor: Extracts a short description from content.
- CompositeMetadataExtractor: Runs several extractors and merges results.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from .utils import first_paragraph, titleize

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
        if not isinstance(data, dict):
            return {}, text
        return data, text[match.end() :]
    except yaml.YAMLError:
        return {}, text


class FrontmatterExtractor:
    """Extracts YAML frontmatter from content (between --- markers)."""

    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Extract frontmatter from content.

        Args:
            content: Source content with potential frontmatter.
            path: Path to the source file (unused).

        Returns:
            Dictionary with 'frontmatter' key and 'body' key.
        """
        frontmatter, body = extract_frontmatter(content)
        return {"frontmatter": frontmatter, "body": body}


class TitleExtractor:
    """Extracts title from frontmatter, content or filename.

    A ``title`` frontmatter key wins, then the first level-1 heading,
    then the titleized filename. Headings inside fenced code are ignored.
    """

    def extract(self, content: str, path: Path) -> dict[str, Any]:
        frontmatter, body = extract_frontmatter(content)
        title = frontmatter.get("title")
        if title:
            return {"title": str(title)}
        in_fence = False
        for line in body.splitlines():
            stripped = line.strip()
            if stripped.startswith(("```", "~~~")):
                in_fence = not in_fence
                continue
            if not in_fence and stripped.startswith("# "):
                return {"title": stripped[2:].strip()}
        return {"title": titleize(path.name)}


class DescriptionExtractor:
    """Extracts a description from frontmatter or the first paragraph."""

    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Extract description from content.

        Args:
            content: Source content.
            path: Path to the source file (unused).

        Returns:
            Dictionary with 'description' key.
        """
        frontmatter, body = extract_frontmatter(content)
        description = frontmatter.get("description")
        if description:
            return {"description": str(description)}
        return {"description": first_paragraph(body)}


class CompositeMetadataExtractor:
    """Combines multiple metadata extractors.

    Runs every registered extractor on the content and merges their
    results. Later extractors can override earlier ones.
    """

    def __init__(self, extractors: list | None = None):
        """Initialize with a list of extractors.

        Args:
            extractors: List of MetadataExtractor implementations.
                       If None, uses default extractors.
        """
        if extractors is None:
            self._extractors = [
                FrontmatterExtractor(),
                TitleExtractor(),
                DescriptionExtractor(),
            ]
        else:
            self._extractors = list(extractors)

    def add_extractor(self, extractor) -> None:
        """Add an extractor to the composite.

        Args:
            extractor: A MetadataExtractor implementation.
        """
        self._extractors.append(extractor)

    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Extract all metadata from content.

        Args:
            content: Source content.
            path: Path to the source file.

        Returns:
            Dictionary with all extracted metadata.
        """
        result: dict[str, Any] = {}
        for extractor in self._extractors:
            result.update(extractor.extract(content, path))
        return result


# Default composite extractor instance
default_metadata_extractor = CompositeMetadataExtractor()
