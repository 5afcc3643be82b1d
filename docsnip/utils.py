"""Utility functions for docsnip.

This module contains string and path helpers used throughout the docsnip codebase.

Key functions:
    slugify: Convert filenames to URL slugs.
    titleize: Convert filenames to human-readable titles.
    first_paragraph: Extract a short description from page text.
    is_markdown: Check if a path is a Markdown file.
    is_html: Check if a path is a plain HTML file.
    is_internal_path: Check if a path is hidden from the build.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path


def slugify(name: str) -> str:
    """Convert filename (without extension) to slug, dropping number prefix.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("01-Getting Started")
        'getting-started'
    """
    cleaned = re.sub(r"^\d+-", "", name)
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Removes number prefixes used for ordering, replaces hyphens and
    underscores with spaces, and capitalizes each word.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("02-http-server.md")
        'Http Server'
    """
    base = re.sub(r"^\d+-", "", Path(filename).stem)
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def first_paragraph(text: str, limit: int = 160) -> str:
    """Extract and clean the first prose paragraph from text.

    Skips headings and fenced code, strips HTML tags, collapses whitespace
    and truncates to the specified limit.

    Args:
        text: Text content to extract from.
        limit: Maximum character length of result.

    Returns:
        Cleaned first paragraph, truncated to limit characters.
    """
    paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
    for para in paragraphs:
        if para.startswith(("#", "```", "~~~", "![")):
            continue
        para = re.sub(r"<[^>]+>", "", para)
        collapsed = " ".join(para.split())
        if collapsed:
            return collapsed[:limit]
    return ""


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path))
    path.mkdir(parents=True, exist_ok=True)


def is_internal_path(path: Path) -> bool:
    """Check if a path is internal (contains components starting with _).

    Internal paths include layouts and listings kept next to pages.

    Args:
        path: Path to check.

    Returns:
        True if any path component starts with underscore.
    """
    return any(part.startswith("_") for part in path.parts)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def is_html(path: Path) -> bool:
    """Check if a path is a plain HTML file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .html extension.
    """
    return path.suffix.lower() == ".html"
