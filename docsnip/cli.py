"""Command-line interface for docsnip.

This module defines the CLI commands using Click framework.

Commands:
- extract: Print one snippet (or the cleaned listing) of a source file.
- list: Print the snippet names declared in a source file.
- render: Render a single Markdown page body to HTML.
- build: Build the documentation site into the output directory.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .build import load_config
from .renderers import MarkdownRenderer, SnippetSourceError
from .snippets import SnippetExtractor

_prefix_option = click.option(
    "--prefix",
    "prefixes",
    multiple=True,
    help="Comment prefix introducing markers (repeatable, overrides docsnip.yaml).",
)


@click.group()
@click.version_option(version=__version__, prog_name="docsnip")
def cli():
    """Render documentation pages with code snippets."""


def _extractor(prefixes: tuple[str, ...]) -> SnippetExtractor:
    if prefixes:
        return SnippetExtractor(prefixes)
    return SnippetExtractor(load_config(Path.cwd())["comment_prefixes"])


def _read_source(source) -> str:
    try:
        return source.read()
    except UnicodeDecodeError as exc:
        raise click.ClickException(f"Cannot decode {source.name} as UTF-8: {exc}") from None


def _display_path(path: Path, root: Path) -> Path:
    # docs_dir may be an absolute path outside the project
    try:
        return path.relative_to(root)
    except ValueError:
        return path


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--snippet", "-s", default=None, help="Name of the snippet to isolate.")
@_prefix_option
def extract(source, snippet: str | None, prefixes: tuple[str, ...]):
    """Print the cleaned listing of SOURCE ('-' reads stdin)."""
    extraction = _extractor(prefixes).extract_region(_read_source(source), snippet)
    if snippet and not extraction.isolated:
        click.echo(
            click.style(
                f"Warning: snippet '{snippet}' not found; showing the whole listing.",
                fg="yellow",
            ),
            err=True,
        )
    click.echo(extraction.text)


@cli.command(name="list")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@_prefix_option
def list_command(source, prefixes: tuple[str, ...]):
    """List the snippet names declared in SOURCE."""
    for name in _extractor(prefixes).list_snippets(_read_source(source)):
        click.echo(name)


@cli.command()
@click.argument(
    "page", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@_prefix_option
def render(page: Path, prefixes: tuple[str, ...]):
    """Render the Markdown PAGE to HTML on stdout."""
    config = load_config(Path.cwd())
    renderer = MarkdownRenderer(
        extractor=_extractor(prefixes),
        source_root=page.parent,
        pygments_style=config["pygments_style"],
    )
    try:
        body = page.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Cannot read page {page}: {exc}") from None
    try:
        rendered = renderer.render(body, "")
    except SnippetSourceError as exc:
        raise click.ClickException(str(exc)) from None
    for missing in rendered.missing_snippets:
        click.echo(click.style(f"Warning: {missing.describe()}", fg="yellow"), err=True)
    click.echo(rendered.html, nl=False)


@cli.command()
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail when a code block requests a missing snippet (overrides docsnip.yaml).",
)
def build(strict: bool | None):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(project_root, strict=strict)
    except FileNotFoundError as exc:
        raise click.ClickException(str(exc)) from None
    except BuildError as exc:
        rel_path = _display_path(exc.source_path, project_root)
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    for page, message in result.warnings:
        rel_path = _display_path(page.path, project_root)
        click.echo(click.style(f"Warning: {rel_path}: {message}", fg="yellow"), err=True)
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


def main():
    """Entry point for the CLI application."""
    cli()
