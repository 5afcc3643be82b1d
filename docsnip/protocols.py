"""Protocol definitions for docsnip.

These protocols describe the seams between page discovery, rendering and
metadata extraction so that alternative implementations can be registered
without modifying existing code.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .renderers import RenderedContent


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for rendering content from source files.

    Implementations handle specific content types (Markdown, HTML).
    """

    @abstractmethod
    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if this renderer can process the file.
        """
        ...

    @abstractmethod
    def render(self, content: str, folder: str) -> RenderedContent:
        """Render content to HTML.

        Args:
            content: Source content to render.
            folder: Folder containing the page, relative to the docs directory.

        Returns:
            RenderedContent with HTML, headings and missing snippets.
        """
        ...

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the source type identifier (e.g., 'markdown', 'html')."""
        ...


@runtime_checkable
class MetadataExtractor(Protocol):
    """Protocol for extracting metadata from content."""

    @abstractmethod
    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Extract metadata from content.

        Args:
            content: Source content.
            path: Path to the source file.

        Returns:
            Dictionary of extracted metadata.
        """
        ...
