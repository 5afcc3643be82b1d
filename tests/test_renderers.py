"""Tests for content renderers, code blocks and protocols."""

from pathlib import Path

import pytest

from docsnip.extractors import TitleExtractor
from docsnip.protocols import ContentRenderer, MetadataExtractor
from docsnip.renderers import (
    HTMLRenderer,
    MarkdownRenderer,
    MissingSnippet,
    RendererRegistry,
    SnippetSourceError,
    _generate_heading_id,
    _HighlightRenderer,
)
from docsnip.snippets import SnippetExtractor

HANDLER = """package main

// snippet-start: euro handler

type euroHandler struct {
    rate float64
}

// snippet-end: euro handler

// snippet-start: new euro handler

func NewEuroHandler() *euroHandler {
    return &euroHandler{rate: 1.1}
}

// snippet-end: new euro handler
"""


def fence(info: str, body: str) -> str:
    return f"```{info}\n{body}```\n"


def test_markdown_renderer_basics():
    renderer = MarkdownRenderer()
    assert renderer.can_render(Path("test.md"))
    assert not renderer.can_render(Path("test.html"))
    assert renderer.source_type == "markdown"
    rendered = renderer.render("# Hello\n\nWorld", "")
    assert '<h1 id="hello">Hello</h1>' in rendered.html
    assert rendered.toc[0].text == "Hello"
    assert rendered.missing_snippets == []


def test_code_block_shows_only_the_snippet():
    rendered = MarkdownRenderer().render(
        fence('go snippet="new euro handler"', HANDLER), ""
    )
    assert 'class="highlight"' in rendered.html
    assert "NewEuroHandler" in rendered.html
    assert "euroHandler struct" not in rendered.html
    assert "package" not in rendered.html
    assert "snippet-start" not in rendered.html
    assert rendered.missing_snippets == []


def test_code_block_without_snippet_strips_markers():
    rendered = MarkdownRenderer().render(fence("go", HANDLER), "")
    assert "package" in rendered.html
    assert "NewEuroHandler" in rendered.html
    assert "snippet-start" not in rendered.html
    assert "snippet-end" not in rendered.html


def test_plain_code_block_is_escaped():
    body = "// snippet-start: cmp\n\nif a < b && c > d {}\n\n// snippet-end: cmp\n"
    rendered = MarkdownRenderer().render(fence("snippet=cmp", body), "")
    assert "<pre><code>if a &lt; b &amp;&amp; c &gt; d {}</code></pre>" in rendered.html


def test_missing_snippet_is_recorded_not_raised():
    rendered = MarkdownRenderer().render(fence("go snippet=nope", HANDLER), "")
    assert rendered.missing_snippets == [MissingSnippet("nope")]
    assert "euroHandler" in rendered.html
    assert "snippet-start" not in rendered.html
    assert rendered.missing_snippets[0].describe() == (
        "snippet 'nope' not found in inline code block"
    )


def test_file_option_reads_listing_relative_to_page(tmp_path):
    docs = tmp_path / "docs"
    (docs / "guide" / "src").mkdir(parents=True)
    (docs / "guide" / "src" / "handler.go").write_text(HANDLER, encoding="utf-8")
    renderer = MarkdownRenderer(source_root=docs)

    rendered = renderer.render(
        fence('go file=src/handler.go snippet="euro handler"', ""), "guide"
    )
    assert "rate" in rendered.html
    assert "NewEuroHandler" not in rendered.html

    rendered = renderer.render(fence("go file=src/handler.go snippet=other", ""), "guide")
    assert rendered.missing_snippets == [MissingSnippet("other", "src/handler.go")]
    assert "src/handler.go" in rendered.missing_snippets[0].describe()


def test_missing_listing_file_raises(tmp_path):
    renderer = MarkdownRenderer(source_root=tmp_path)
    with pytest.raises(SnippetSourceError) as excinfo:
        renderer.render(fence("go file=nowhere.go", ""), "")
    assert isinstance(excinfo.value, FileNotFoundError)
    assert "nowhere.go" in str(excinfo.value)


def test_undecodable_listing_raises_source_error(tmp_path):
    (tmp_path / "legacy.py").write_bytes("nom = 'caf\u00e9'\n".encode("latin-1"))
    renderer = MarkdownRenderer(source_root=tmp_path)
    with pytest.raises(SnippetSourceError) as excinfo:
        renderer.render(fence("python file=legacy.py", ""), "")
    assert "legacy.py" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_code_block_title_caption():
    rendered = MarkdownRenderer().render(
        fence('go title="handler.go <main>"', "package main\n"), ""
    )
    assert '<div class="code-title">handler.go &lt;main&gt;</div>' in rendered.html


def test_custom_extractor_prefixes():
    sql = "-- snippet-start: q\n\nSELECT 1;\n\n-- snippet-end: q\n"
    renderer = MarkdownRenderer(extractor=SnippetExtractor(["--"]))
    rendered = renderer.render(fence("sql snippet=q", sql), "")
    assert "SELECT" in rendered.html
    assert "snippet" not in rendered.html


def test_highlight_renderer_block_code_directly():
    renderer = _HighlightRenderer("")
    result = renderer.block_code("print('hello')\n", info="python")
    assert "highlight" in result
    assert "print" in result

    result = renderer.block_code("code here", info="nonexistent_language_xyz123")
    assert '<pre><code class="language-nonexistent_language_xyz123">' in result
    assert "code here" in result

    result = renderer.block_code("plain code", info=None)
    assert result == "<pre><code>plain code</code></pre>\n"


def test_highlight_keeps_leading_indentation():
    renderer = _HighlightRenderer("")
    body = "# snippet-start: a\n\n    indented()\n\n# snippet-end: a\n"
    result = renderer.block_code(body, info="snippet=a")
    assert result == "<pre><code>    indented()</code></pre>\n"


def test_heading_ids_are_unique():
    rendered = MarkdownRenderer().render("## Setup\n\n## Setup\n\n### Next Step!", "")
    assert [h.id for h in rendered.toc] == ["setup", "setup-1", "next-step"]
    assert [h.level for h in rendered.toc] == [2, 2, 3]
    assert _generate_heading_id("Hello, <code>World</code>") == "hello-world"


def test_html_renderer():
    renderer = HTMLRenderer()
    assert renderer.can_render(Path("test.html"))
    assert not renderer.can_render(Path("test.md"))
    assert renderer.source_type == "html"
    rendered = renderer.render("<p>Test</p>", "")
    assert rendered.html == "<p>Test</p>"
    assert rendered.toc == []


def test_renderer_registry():
    registry = RendererRegistry()
    assert isinstance(registry.get_renderer(Path("a.md")), MarkdownRenderer)
    assert isinstance(registry.get_renderer(Path("a.html")), HTMLRenderer)
    assert registry.get_renderer(Path("a.txt")) is None

    markdown = MarkdownRenderer(extractor=SnippetExtractor(["--"]))
    assert RendererRegistry(markdown).get_renderer(Path("a.md")) is markdown


def test_renderers_and_extractors_implement_protocols():
    assert isinstance(MarkdownRenderer(), ContentRenderer)
    assert isinstance(HTMLRenderer(), ContentRenderer)
    assert isinstance(TitleExtractor(), MetadataExtractor)
