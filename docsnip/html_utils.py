"""HTML utility functions for docsnip.

Functions:
    escape_html: Escape special HTML characters in a string.
    join_root_url: Join a base URL with a path.
"""

from __future__ import annotations


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Converts the following characters to their HTML entity equivalents:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;

    Args:
        text: The string to escape.

    Returns:
        The escaped string, safe for inclusion in HTML.

    Examples:
        >>> escape_html('if a < b && c > "d"')
        'if a &lt; b &amp;&amp; c &gt; &quot;d&quot;'
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def join_root_url(root_url: str, path: str) -> str:
    """Join a base URL with a path, avoiding duplicate slashes.

    Args:
        root_url: Base URL (e.g., "https://example.com/docs").
        path: Path to append (e.g., "/quickstart/").

    Returns:
        The joined URL, or the path unchanged if root_url is empty.
    """
    if not root_url:
        return path
    return f"{root_url.rstrip('/')}/{path.lstrip('/')}"
