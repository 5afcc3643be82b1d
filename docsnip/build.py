"""Site building for docsnip.

This module loads configuration, renders every documentation page and
writes the output directory.

Key functions:
- load_config: Loads configuration from docsnip.yaml.
- make_extractor: Builds the snippet extractor described by a configuration.
- build_site: Builds the whole site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jinja2 import TemplateError

from .content import ContentProcessor, DefaultPageBuilder, Page
from .renderers import MarkdownRenderer, RendererRegistry
from .snippets import DEFAULT_COMMENT_PREFIXES, SnippetExtractor
from .templates import TemplateEngine
from .utils import ensure_clean_dir

CONFIG_FILENAME = "docsnip.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "docs_dir": "docs",
    "output_dir": "output",
    "title": "Documentation",
    "root_url": "",
    "comment_prefixes": list(DEFAULT_COMMENT_PREFIXES),
    "strict_snippets": False,
    "pygments_style": "default",
}


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: List of all pages in the site.
        output_dir: Directory where the site was built.
        warnings: (page, message) pairs for snippets that fell back.
    """

    pages: list[Page]
    output_dir: Path
    warnings: list[tuple[Page, str]] = field(default_factory=list)


def load_config(project_root: Path) -> dict[str, Any]:
    """Load configuration from docsnip.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)

    prefixes = config.get("comment_prefixes")
    if isinstance(prefixes, str):
        prefixes = [prefixes]
    if not isinstance(prefixes, list) or not any(str(p).strip() for p in prefixes):
        prefixes = list(DEFAULT_COMMENT_PREFIXES)
    config["comment_prefixes"] = [str(p) for p in prefixes]
    config["strict_snippets"] = bool(config.get("strict_snippets"))
    return config


def make_extractor(config: dict[str, Any]) -> SnippetExtractor:
    """Create the snippet extractor for a configuration.

    Args:
        config: Configuration as returned by load_config.

    Returns:
        SnippetExtractor recognizing the configured comment prefixes.
    """
    return SnippetExtractor(config.get("comment_prefixes", DEFAULT_COMMENT_PREFIXES))


def build_site(
    project_root: Path,
    strict: bool | None = None,
    output_dir_override: Path | None = None,
) -> BuildResult:
    """Build the documentation site.

    Args:
        project_root: Root directory of the project.
        strict: Fail on missing snippets; defaults to the strict_snippets setting.
        output_dir_override: Optional output path instead of config output_dir.

    Returns:
        BuildResult containing all pages, the output directory and warnings.

    Raises:
        FileNotFoundError: If the docs directory does not exist.
        BuildError: If a page fails to render, or a snippet is missing in strict mode.
    """
    config = load_config(project_root)
    if strict is None:
        strict = config["strict_snippets"]
    docs_dir = project_root / config["docs_dir"]
    if not docs_dir.exists():
        raise FileNotFoundError(f"Expected docs directory at {docs_dir}")
    output_dir = output_dir_override or (project_root / config["output_dir"])

    markdown = MarkdownRenderer(
        extractor=make_extractor(config),
        source_root=docs_dir,
        pygments_style=config["pygments_style"],
    )
    processor = ContentProcessor(
        docs_dir,
        page_builder=DefaultPageBuilder(docs_dir, renderer_registry=RendererRegistry(markdown)),
    )

    pages: list[Page] = []
    warnings: list[tuple[Page, str]] = []
    for path in processor.iter_files():
        try:
            page = processor.build_page(path)
        except Exception as exc:
            raise BuildError(path, _format_error_message(exc), exc) from exc
        for missing in page.missing_snippets:
            if strict:
                raise BuildError(path, missing.describe())
            warnings.append((page, missing.describe()))
        pages.append(page)

    ensure_clean_dir(output_dir)
    engine = TemplateEngine(docs_dir, config)
    engine.update_pages(pages)
    for page in pages:
        try:
            rendered = engine.render_page(page)
        except TemplateError as exc:
            raise BuildError(page.path, f"Template error: {exc}", exc) from exc
        _write_page(output_dir, page, rendered)

    css_dir = output_dir / "assets" / "css"
    css_dir.mkdir(parents=True, exist_ok=True)
    (css_dir / "pygments.css").write_text(engine.pygments_css(), encoding="utf-8")
    return BuildResult(pages=pages, output_dir=output_dir, warnings=warnings)


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    if isinstance(exc, FileNotFoundError):
        return str(exc)
    return f"{type(exc).__name__}: {exc}"


def _write_page(output_dir: Path, page: Page, rendered: str) -> None:
    """Write a rendered page to the output directory.

    Args:
        output_dir: Base output directory.
        page: Page object containing metadata.
        rendered: Rendered HTML content.
    """
    target_dir = output_dir / page.url.strip("/")
    target_dir.mkdir(parents=True, exist_ok=True)
    with open(target_dir / "index.html", "w", encoding="utf-8") as f:
        f.write(rendered)
