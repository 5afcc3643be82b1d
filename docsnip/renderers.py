"""Content renderers for docsnip.

This module contains implementations of the ContentRenderer protocol.
Markdown code blocks are routed through the snippet extractor before
Pygments highlights them, so a fence can show one named region of a
larger listing.

Key classes:
- MarkdownRenderer: Renders Markdown to HTML with snippets and highlighting.
- HTMLRenderer: Passes through HTML content.
- RendererRegistry: Picks a renderer for a source file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .code_blocks import parse_info
from .html_utils import escape_html
from .snippets import SnippetExtractor, default_extractor
from .utils import is_html


class SnippetSourceError(FileNotFoundError):
    """Raised when a code block's ``file=`` listing cannot be read."""


@dataclass
class MissingSnippet:
    """A snippet requested by a code block but absent from its listing.

    Attributes:
        name: Requested snippet name.
        source: The ``file=`` option of the block, if any.
    """

    name: str
    source: str | None = None

    def describe(self) -> str:
        where = self.source or "inline code block"
        return f"snippet '{self.name}' not found in {where}"


@dataclass
class RenderedContent:
    """Output of a content renderer.

    Attributes:
        html: Rendered HTML.
        toc: Heading objects collected for the table of contents.
        missing_snippets: Snippets that fell back to the whole listing.
    """

    html: str
    toc: list = field(default_factory=list)
    missing_snippets: list[MissingSnippet] = field(default_factory=list)


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = re.sub(r"<[^>]+>", "", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class _HighlightRenderer(mistune.HTMLRenderer):
    """Markdown renderer with heading anchors, snippets and highlighting.

    Attributes:
        folder: Folder containing the page being rendered.
        extractor: Snippet extractor applied to every code block.
        source_root: Directory that ``file=`` paths are resolved against.
        headings: Heading objects extracted during rendering.
        missing_snippets: Snippets requested but not found.
    """

    def __init__(
        self,
        folder: str,
        extractor: SnippetExtractor | None = None,
        source_root: Path | None = None,
        pygments_style: str = "default",
    ):
        super().__init__(escape=False)
        self.folder = folder
        self.extractor = extractor or default_extractor
        self.source_root = source_root
        self.pygments_style = pygments_style
        self.headings: list = []
        self.missing_snippets: list[MissingSnippet] = []
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with auto-generated ID and track for TOC.

        Args:
            text: Heading text content.
            level: Heading level (1-6).
            **attrs: Additional attributes.

        Returns:
            HTML heading tag with id attribute.
        """
        # Import here to avoid circular imports
        from .content import Heading

        base_id = _generate_heading_id(text)

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        self.headings.append(Heading(id=heading_id, text=text, level=level))

        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block, isolating a snippet when one is requested.

        Args:
            code: The fence body.
            info: Info string, e.g. ``go snippet="euro handler" file=handler.go``.

        Returns:
            HTML string with highlighted code.

        Raises:
            SnippetSourceError: If the ``file=`` listing cannot be read.
        """
        options = parse_info(info)
        if options.file:
            code = self._read_listing(options.file)

        extraction = self.extractor.extract_region(code, options.snippet)
        if options.snippet and not extraction.isolated:
            self.missing_snippets.append(MissingSnippet(options.snippet, options.file))

        html = self._highlight(extraction.text, options.language)
        if options.title:
            title = escape_html(options.title)
            return (
                f'<div class="code-block"><div class="code-title">{title}</div>\n'
                f"{html}</div>\n"
            )
        return html

    def _highlight(self, code: str, language: str) -> str:
        if language:
            try:
                lexer = get_lexer_by_name(language)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(cssclass="highlight", style=self.pygments_style)
                return highlight(code, lexer, formatter)
        lang_class = f' class="language-{escape_html(language)}"' if language else ""
        return f"<pre><code{lang_class}>{escape_html(code)}</code></pre>\n"

    def _read_listing(self, name: str) -> str:
        base = self.source_root if self.source_root is not None else Path()
        path = base / self.folder / name
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SnippetSourceError(f"Cannot read code listing {path}: {exc}") from exc


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    Attributes:
        extractor: Snippet extractor used for code blocks.
        source_root: Directory against which ``file=`` listings resolve.
        pygments_style: Pygments style name passed to the formatter.
    """

    def __init__(
        self,
        extractor: SnippetExtractor | None = None,
        source_root: Path | None = None,
        pygments_style: str = "default",
    ):
        self.extractor = extractor or default_extractor
        self.source_root = source_root
        self.pygments_style = pygments_style

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "markdown"

    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if the file is a Markdown file.
        """
        return path.suffix.lower() == ".md"

    def render(self, content: str, folder: str) -> RenderedContent:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.
            folder: Folder containing the page.

        Returns:
            RenderedContent with HTML, headings and missing snippets.
        """
        renderer = _HighlightRenderer(
            folder,
            extractor=self.extractor,
            source_root=self.source_root,
            pygments_style=self.pygments_style,
        )
        markdown = mistune.create_markdown(
            renderer=renderer, plugins=["strikethrough", "footnotes", "table", "url"]
        )
        html = markdown(content)
        return RenderedContent(
            html=html,
            toc=renderer.headings,
            missing_snippets=renderer.missing_snippets,
        )


class HTMLRenderer:
    """Passes through HTML content unchanged."""

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "html"

    def can_render(self, path: Path) -> bool:
        return is_html(path)

    def render(self, content: str, folder: str) -> RenderedContent:
        """Pass through HTML content.

        Args:
            content: HTML source content.
            folder: Folder containing the page (unused).

        Returns:
            RenderedContent with the content unchanged and no headings.
        """
        return RenderedContent(html=content)


class RendererRegistry:
    """Registry for content renderers.

    New renderers can be registered without modifying existing code.
    """

    def __init__(self, markdown: MarkdownRenderer | None = None):
        """Initialize the registry with default renderers.

        Args:
            markdown: Optional preconfigured Markdown renderer.
        """
        self._renderers: list = []
        self.register(markdown or MarkdownRenderer())
        self.register(HTMLRenderer())

    def register(self, renderer) -> None:
        """Register a new renderer.

        Args:
            renderer: A ContentRenderer implementation.
        """
        self._renderers.append(renderer)

    def get_renderer(self, path: Path):
        """Get the appropriate renderer for a file.

        Args:
            path: Path to the source file.

        Returns:
            The first renderer that can handle the file, or None.
        """
        for renderer in self._renderers:
            if renderer.can_render(path):
                return renderer
        return None
