"""Pure transforms applied to user-supplied content."""

from nwcommunity.content.cities import canonical_city, dedupe_cities, normalize_city
from nwcommunity.content.sanitizer import sanitize_html, text_to_html

__all__ = [
    "canonical_city",
    "dedupe_cities",
    "normalize_city",
    "sanitize_html",
    "text_to_html",
]
