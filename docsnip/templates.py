"""Template rendering engine for docsnip.

This module uses Jinja2 to wrap rendered pages in a layout.
Layouts live in ``_layouts/`` inside the docs directory; a built-in
layout is used when the project has none.

Key functions and classes:
- render_toc: Render a page's headings as nested HTML lists.
- TemplateEngine: Handles layout rendering and template globals.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from markupsafe import Markup
from pygments.formatters import HtmlFormatter

from .content import Heading, Page
from .html_utils import escape_html, join_root_url

__all__ = ["DEFAULT_LAYOUT", "TemplateEngine", "render_toc"]

DEFAULT_LAYOUT = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ current_page.title }} | {{ site.title }}</title>
  <meta name="description" content="{{ current_page.description }}">
  <link rel="stylesheet" href="{{ url_for('/assets/css/pygments.css') }}">
</head>
<body>
  <nav class="sidebar">
    <ul>
    {% for page in pages %}
      <li><a href="{{ url_for(page.url) }}">{{ page.title }}</a></li>
    {% endfor %}
    </ul>
  </nav>
  <main>
    {{ page_content | safe }}
  </main>
  <aside class="toc">{{ render_toc(current_page) }}</aside>
</body>
</html>
"""


def render_toc(page: Page) -> Markup:
    """Render a table of contents as nested HTML from page headings.

    Args:
        page: Page object containing the toc (list of Heading objects).

    Returns:
        Markup-safe HTML string of the nested TOC, or empty Markup if no headings.
    """
    if not page.toc:
        return Markup("")

    return _render_toc_from_headings(page.toc)


def _render_toc_from_headings(headings: list[Heading]) -> Markup:
    html_parts: list[str] = []
    level_stack: list[int] = []

    for heading in headings:
        level = heading.level

        # Close nested lists if going to a shallower level
        while level_stack and level_stack[-1] > level:
            level_stack.pop()
            html_parts.append("</li></ul>")

        if level_stack and level_stack[-1] == level:
            html_parts.append("</li>")
        else:
            html_parts.append("<ul>")
            level_stack.append(level)

        html_parts.append(
            f'<li><a href="#{escape_html(heading.id)}">{escape_html(heading.text)}</a>'
        )

    while level_stack:
        level_stack.pop()
        html_parts.append("</li></ul>")

    return Markup("".join(html_parts))


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        docs_dir: Directory whose ``_layouts`` folder holds templates.
        site: Site configuration exposed to templates.
        env: Jinja2 environment.
        pages: All pages of the site, for navigation.
    """

    def __init__(self, docs_dir: Path, site: dict[str, Any]):
        """Initialize the template engine.

        Args:
            docs_dir: Directory with the ``_layouts`` folder.
            site: Site configuration.
        """
        self.docs_dir = docs_dir
        self.site = site
        self.root_url = str(site.get("root_url") or "")
        self.env = Environment(
            loader=FileSystemLoader([docs_dir / "_layouts"]),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.pages: Iterable[Page] = []
        self._install_globals()

    def _install_globals(self) -> None:
        """Install global variables and functions in the Jinja environment."""
        self.env.globals["site"] = self.site
        self.env.globals["pages"] = self.pages
        self.env.globals["url_for"] = self._url_for
        self.env.globals["pygments_css"] = self.pygments_css
        self.env.globals["render_toc"] = render_toc

    def pygments_css(self) -> str:
        """Return Pygments CSS for the configured style.

        Returns:
            CSS string for the .highlight class.
        """
        style = self.site.get("pygments_style", "default")
        return HtmlFormatter(style=style).get_style_defs(".highlight")

    def update_pages(self, pages: Iterable[Page]) -> None:
        """Update the page collection used for navigation.

        Args:
            pages: Iterable of all pages.
        """
        self.pages = list(pages)
        self.env.globals["pages"] = self.pages

    def _url_for(self, path: str) -> str:
        """Generate a URL for a path, applying root_url if configured.

        Args:
            path: Path to generate URL for.

        Returns:
            Full URL with root_url prefix if configured.
        """
        if path.startswith(("http://", "https://", "//")):
            return path
        path = path if path.startswith("/") else f"/{path}"
        return join_root_url(self.root_url, path)

    def render_page(self, page: Page) -> str:
        """Render a page with its layout.

        Args:
            page: Page object to render.

        Returns:
            Rendered HTML string.
        """
        layout = str(page.frontmatter.get("layout") or "default")
        template = self._resolve_layout_template(layout)
        return template.render(
            page_content=Markup(page.content),
            current_page=page,
            frontmatter=page.frontmatter,
        )

    def _resolve_layout_template(self, layout: str):
        """Resolve and return the layout template.

        Args:
            layout: Layout name to resolve.

        Returns:
            Jinja2 Template object.
        """
        candidates = [f"{layout}.html.jinja", f"{layout}.jinja", f"{layout}.html"]
        if layout != "default":
            candidates.extend(["default.html.jinja", "default.jinja", "default.html"])
        for name in candidates:
            try:
                return self.env.get_template(name)
            except TemplateNotFound:
                continue
        return self.env.from_string(DEFAULT_LAYOUT)
