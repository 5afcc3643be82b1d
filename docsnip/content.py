"""Content processing for docsnip.

This module discovers documentation pages, extracts their metadata,
renders them and creates Page objects.

Key classes:
- Page: Dataclass representing a documentation page.
- Heading: Dataclass representing a heading for TOC generation.
- FileContentLoader: Discovers page files under the docs directory.
- UrlDeriver: Maps a page path to its URL.
- DefaultPageBuilder: Builds a Page from a source file.
- ContentProcessor: Facade loading every page of a docs directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .extractors import CompositeMetadataExtractor, default_metadata_extractor
from .renderers import MarkdownRenderer, MissingSnippet, RendererRegistry
from .utils import is_html, is_internal_path, is_markdown, slugify, titleize


@dataclass
class Heading:
    """Represents a heading extracted from markdown content for TOC generation.

    Attributes:
        id: Anchor ID for the heading (URL-friendly slug).
        text: The text content of the heading.
        level: Heading level (1-6).
    """

    id: str
    text: str
    level: int


@dataclass
class Page:
    """Represents a documentation page with its metadata and content.

    Attributes:
        title: Human-readable title of the page.
        body: Source text without frontmatter.
        content: Rendered HTML content.
        description: Short description, from frontmatter or first paragraph.
        url: URL path for the page.
        slug: URL-friendly slug.
        path: Path to the source file.
        folder: Folder path relative to the docs directory.
        filename: Name of the source file.
        source_type: "markdown" or "html".
        frontmatter: Parsed YAML frontmatter.
        toc: Headings for the table of contents.
        missing_snippets: Snippets requested by code blocks but not found.
    """

    title: str
    body: str
    content: str
    description: str
    url: str
    slug: str
    path: Path
    folder: str
    filename: str
    source_type: str  # "markdown" | "html"
    frontmatter: dict[str, Any] = field(default_factory=dict)
    toc: list[Heading] = field(default_factory=list)
    missing_snippets: list[MissingSnippet] = field(default_factory=list)


class FileContentLoader:
    """Discovers page files in a docs directory.

    Files and folders starting with ``_`` are skipped, as is anything that
    is neither Markdown nor HTML (code listings live next to the pages).

    Attributes:
        docs_dir: Directory containing documentation pages.
    """

    def __init__(self, docs_dir: Path):
        self.docs_dir = docs_dir

    def iter_files(self) -> list[Path]:
        """Return page files in a stable order.

        Returns:
            Sorted list of paths to Markdown and HTML pages.
        """
        files: list[Path] = []
        for path in sorted(self.docs_dir.rglob("*")):
            if path.is_dir():
                continue
            if is_internal_path(path.relative_to(self.docs_dir)):
                continue
            if is_markdown(path) or is_html(path):
                files.append(path)
        return files


class UrlDeriver:
    """Derives URLs for pages from their location in the docs directory."""

    def derive(self, rel: Path, slug: str) -> str:
        """Derive the URL for a page.

        Args:
            rel: Relative path from the docs directory.
            slug: URL-friendly slug.

        Returns:
            URL path for the page.
        """
        segments = [slugify(p) for p in rel.parent.parts if p]
        url_parts = segments if slug == "index" else segments + [slug]
        path = "/".join(url_parts)
        return f"/{path}/" if path else "/"


class DefaultPageBuilder:
    """Builds Page objects from source files.

    Attributes:
        docs_dir: Directory containing documentation pages.
        renderer_registry: Registry of content renderers.
        metadata_extractor: Composite metadata extractor.
        url_deriver: URL deriver instance.
    """

    def __init__(
        self,
        docs_dir: Path,
        renderer_registry: RendererRegistry | None = None,
        metadata_extractor: CompositeMetadataExtractor | None = None,
    ):
        """Initialize the page builder.

        Args:
            docs_dir: Path to the docs directory.
            renderer_registry: Optional custom renderer registry.
            metadata_extractor: Optional custom metadata extractor.
        """
        self.docs_dir = docs_dir
        self.renderer_registry = renderer_registry or RendererRegistry(
            MarkdownRenderer(source_root=docs_dir)
        )
        self.metadata_extractor = metadata_extractor or default_metadata_extractor
        self.url_deriver = UrlDeriver()

    def build(self, path: Path) -> Page:
        """Build a Page object from a source file.

        Args:
            path: Path to the source file.

        Returns:
            Page object.
        """
        rel = path.relative_to(self.docs_dir)
        folder = rel.parent.as_posix() if rel.parent != Path(".") else ""
        raw_body = path.read_text(encoding="utf-8")

        metadata = self.metadata_extractor.extract(raw_body, path)
        frontmatter = metadata.get("frontmatter", {})
        body = metadata.get("body", raw_body)

        renderer = self.renderer_registry.get_renderer(path)
        if renderer:
            source_type = renderer.source_type
            rendered = renderer.render(body, folder)
            content = rendered.html
            toc = rendered.toc
            missing = rendered.missing_snippets
        else:
            source_type = "unknown"
            content = body
            toc = []
            missing = []

        slug = slugify(str(frontmatter.get("slug") or path.stem))

        return Page(
            title=metadata.get("title", titleize(path.name)),
            body=body,
            content=content,
            description=metadata.get("description", ""),
            url=self.url_deriver.derive(rel, slug),
            slug=slug,
            path=path,
            folder=folder,
            filename=path.name,
            source_type=source_type,
            frontmatter=frontmatter,
            toc=toc,
            missing_snippets=missing,
        )


class ContentProcessor:
    """Facade for loading every page of a docs directory.

    Attributes:
        docs_dir: Directory containing documentation pages.
    """

    def __init__(
        self,
        docs_dir: Path,
        content_loader: FileContentLoader | None = None,
        page_builder: DefaultPageBuilder | None = None,
    ):
        self.docs_dir = docs_dir
        self._content_loader = content_loader or FileContentLoader(docs_dir)
        self._page_builder = page_builder or DefaultPageBuilder(docs_dir)

    def iter_files(self) -> list[Path]:
        """Return the page files of the docs directory in build order."""
        return self._content_loader.iter_files()

    def build_page(self, path: Path) -> Page:
        """Build the Page for one file returned by iter_files."""
        return self._page_builder.build(path)

    def load(self) -> list[Page]:
        """Load all content files and create Page objects.

        Returns:
            List of Page objects in file order.
        """
        return [self.build_page(path) for path in self.iter_files()]
