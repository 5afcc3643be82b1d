from pathlib import Path

from docsnip.content import Heading, Page
from docsnip.templates import TemplateEngine, render_toc


def make_page(docs: Path, **overrides) -> Page:
    values = dict(
        title="Hello",
        body="Hi",
        content="<p>Hi</p>",
        description="Greeting page",
        url="/hello/",
        slug="hello",
        path=docs / "hello.md",
        folder="",
        filename="hello.md",
        source_type="markdown",
    )
    values.update(overrides)
    return Page(**values)


def test_default_layout_used_without_layouts_dir(tmp_path):
    engine = TemplateEngine(tmp_path, {"title": "My Docs"})
    page = make_page(tmp_path)
    engine.update_pages([page])
    rendered = engine.render_page(page)
    assert "<title>Hello | My Docs</title>" in rendered
    assert "<p>Hi</p>" in rendered
    assert '<a href="/hello/">Hello</a>' in rendered
    assert 'href="/assets/css/pygments.css"' in rendered


def test_custom_layout_and_frontmatter_layout(tmp_path):
    layouts = tmp_path / "_layouts"
    layouts.mkdir()
    (layouts / "default.html.jinja").write_text(
        "<main>{{ page_content }}</main>", encoding="utf-8"
    )
    (layouts / "wide.html").write_text(
        "<div class='wide'>{{ page_content }}|{{ frontmatter.layout }}</div>",
        encoding="utf-8",
    )
    engine = TemplateEngine(tmp_path, {})

    assert engine.render_page(make_page(tmp_path)) == "<main><p>Hi</p></main>"
    wide = make_page(tmp_path, frontmatter={"layout": "wide"})
    assert engine.render_page(wide) == "<div class='wide'><p>Hi</p>|wide</div>"
    missing = make_page(tmp_path, frontmatter={"layout": "missing"})
    assert engine.render_page(missing) == "<main><p>Hi</p></main>"


def test_url_for_applies_root_url(tmp_path):
    engine = TemplateEngine(tmp_path, {"root_url": "https://example.com/docs/"})
    assert engine._url_for("/guide/") == "https://example.com/docs/guide/"
    assert engine._url_for("assets/app.css") == "https://example.com/docs/assets/app.css"
    assert engine._url_for("https://cdn.com/lib.js") == "https://cdn.com/lib.js"

    plain = TemplateEngine(tmp_path, {})
    assert plain._url_for("guide/") == "/guide/"


def test_pygments_css_uses_configured_style(tmp_path):
    default_css = TemplateEngine(tmp_path, {}).pygments_css()
    monokai_css = TemplateEngine(tmp_path, {"pygments_style": "monokai"}).pygments_css()
    assert ".highlight" in default_css
    assert default_css != monokai_css


def test_render_toc_nests_levels(tmp_path):
    page = make_page(
        tmp_path,
        toc=[
            Heading(id="intro", text="Intro", level=2),
            Heading(id="setup", text="Setup", level=3),
            Heading(id="run", text="Run <fast>", level=3),
            Heading(id="next", text="Next", level=2),
        ],
    )
    assert str(render_toc(page)) == (
        '<ul><li><a href="#intro">Intro</a>'
        '<ul><li><a href="#setup">Setup</a></li>'
        '<li><a href="#run">Run &lt;fast&gt;</a></li></ul>'
        '</li><li><a href="#next">Next</a></li></ul>'
    )
    assert str(render_toc(make_page(tmp_path))) == ""
