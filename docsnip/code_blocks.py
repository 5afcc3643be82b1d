"""Fenced code block options for docsnip.

The info string of a fenced block carries the language followed by
``key=value`` options::

    ```go snippet="euro handler" file=src/handler.go title=handler.go

Key classes and functions:
- CodeBlockOptions: Parsed language and options of a code block.
- parse_info: Parse an info string into CodeBlockOptions.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field


@dataclass
class CodeBlockOptions:
    """Options attached to a fenced code block.

    Attributes:
        language: Language tag used for highlighting (may be empty).
        snippet: Snippet name to isolate, or None for the whole listing.
        title: Caption shown above the block.
        file: Listing path relative to the page, replacing the fence body.
        extra: Any other key=value options, kept for templates and plugins.
    """

    language: str = ""
    snippet: str | None = None
    title: str | None = None
    file: str | None = None
    extra: dict[str, str] = field(default_factory=dict)


def _split(info: str) -> list[str]:
    try:
        return shlex.split(info)
    except ValueError:
        # Unbalanced quotes
        return info.split()


def parse_info(info: str | None) -> CodeBlockOptions:
    """Parse a fenced code block info string.

    The first word without ``=`` is the language. Empty option values are
    treated as absent.

    Args:
        info: Info string following the opening fence, or None.

    Returns:
        CodeBlockOptions for the block.

    Examples:
        >>> parse_info('go snippet="euro handler"').snippet
        'euro handler'

        >>> parse_info("python").language
        'python'
    """
    options = CodeBlockOptions()
    if not info:
        return options
    for word in _split(info.strip()):
        if "=" not in word:
            if not options.language:
                options.language = word
            continue
        key, value = word.split("=", 1)
        key = key.strip().lower()
        if not value:
            continue
        if key == "snippet":
            options.snippet = value
        elif key == "title":
            options.title = value
        elif key == "file":
            options.file = value
        else:
            options.extra[key] = value
    return options
