"""docsnip documentation renderer.

This package renders Markdown documentation pages whose fenced code blocks
can show a named region of a larger code listing. Regions are delimited by
``snippet-start: <name>`` / ``snippet-end: <name>`` marker comments, which
are stripped from everything that reaches the page.

The main entry point is the CLI module, which provides commands for
extracting snippets, rendering single pages and building a whole site.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
