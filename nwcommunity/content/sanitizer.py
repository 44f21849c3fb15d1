"""Allow-list HTML sanitizer for member-supplied rich text.

Disallowed tags are stripped and their text kept; ``script`` and ``style``
are dropped together with their content. Output is stable under repeated
sanitizing.
"""

from __future__ import annotations

from typing import Optional

import nh3

ALLOWED_TAGS: frozenset[str] = frozenset({
    "p", "br", "strong", "b", "em", "i", "u", "s", "a",
    "ul", "ol", "li",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "pre", "code", "span", "div",
})

ALLOWED_ATTRIBUTES: dict[str, set[str]] = {
    "a": {"href", "target", "rel"},
}

URL_SCHEMES: frozenset[str] = frozenset({"http", "https", "mailto", "tel"})


def sanitize_html(html: Optional[str]) -> str:
    """Strip every tag and attribute outside the allow-list."""
    if not html:
        return ""
    return nh3.clean(
        html,
        tags=set(ALLOWED_TAGS),
        attributes={tag: set(attrs) for tag, attrs in ALLOWED_ATTRIBUTES.items()},
        url_schemes=set(URL_SCHEMES),
        link_rel=None,
        strip_comments=True,
    )


def text_to_html(text: Optional[str]) -> str:
    """Render plain text with line breaks as sanitized markup."""
    if not text:
        return ""
    return sanitize_html(text.replace("\r\n", "\n").replace("\n", "<br />"))
