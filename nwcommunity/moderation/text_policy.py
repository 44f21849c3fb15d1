"""Community text policy.

Member rules: no slurs anywhere; no profanity in comments, titles, names,
descriptions or messages; no cannabis, sexual products, alcohol or political
merchandise in seller listings.
"""

from __future__ import annotations

import re
from typing import Optional, Union

from nwcommunity.moderation.models import ContentType, FlagReason, PolicyResult, TextContext
from nwcommunity.moderation.recorder import FlagRecorder

# ---------------------------------------------------------------------------
# Word lists
# ---------------------------------------------------------------------------

PROHIBITED_PRODUCT_CATEGORIES: tuple[str, ...] = (
    "cannabis", "marijuana", "weed", "thc", "cbd",
    "sexual", "adult", "sex",
    "alcohol", "beer", "wine", "liquor", "spirits",
    "political", "campaign", "election", "merchandise", "propaganda",
)

_PROFANITY_WORDS: frozenset[str] = frozenset({
    "fuck", "shit", "ass", "bitch", "damn", "crap", "dick", "cock",
    "pussy", "bastard", "slut", "whore", "cunt", "fag", "faggot",
    "nigger", "nigga", "retard", "retarded", "rape", "molest",
})

_SLUR_WORDS: frozenset[str] = frozenset({
    "nigger", "nigga", "fag", "faggot", "faggots", "tranny", "retard",
    "retarded", "chink", "spic", "kike", "raghead", "wetback",
})

_CATEGORY_PATTERNS: list[re.Pattern[str]] = [
    re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)
    for term in PROHIBITED_PRODUCT_CATEGORIES
]

_SLUR_PATTERNS: list[re.Pattern[str]] = [
    re.compile(rf"\b{re.escape(w)}\b", re.IGNORECASE) for w in sorted(_SLUR_WORDS)
]

_PROFANITY_PATTERNS: list[re.Pattern[str]] = [
    re.compile(rf"\b{re.escape(w)}\b", re.IGNORECASE) for w in sorted(_PROFANITY_WORDS)
]

_PROFANITY_MESSAGES: dict[TextContext, str] = {
    TextContext.comment: "Please remove inappropriate language from your message.",
    TextContext.product_title: (
        "Please remove inappropriate language. Titles and names require admin "
        "approval if they contain strong language."
    ),
    TextContext.business_name: (
        "Please remove inappropriate language. Titles and names require admin "
        "approval if they contain strong language."
    ),
    TextContext.product_description: "Please remove inappropriate language.",
    TextContext.message: "Please remove inappropriate language.",
}

SLUR_MESSAGE = "This content contains language that is not allowed on our platform."
CATEGORY_MESSAGE = (
    "Listings for cannabis, sexual products, alcohol or political merchandise "
    "are not allowed."
)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def _find(text: str, patterns: list[re.Pattern[str]]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(0).lower()
    return None


def contains_prohibited_category(
    title: Optional[str],
    category: Optional[str] = None,
    description: Optional[str] = None,
) -> bool:
    """True when any field names a prohibited product category."""
    combined = " ".join(part for part in (title, category, description) if part)
    return any(pattern.search(combined) for pattern in _CATEGORY_PATTERNS)


def check_text(text: Optional[str], context: Union[str, TextContext]) -> PolicyResult:
    """Validate *text* for the given context. Blank text is always allowed."""
    ctx = TextContext(context)
    if not text or not text.strip():
        return PolicyResult(allowed=True)
    trimmed = text.strip()

    if _find(trimmed, _SLUR_PATTERNS):
        return PolicyResult(allowed=False, reason=SLUR_MESSAGE, flag_reason=FlagReason.slur)

    if _find(trimmed, _PROFANITY_PATTERNS):
        return PolicyResult(
            allowed=False,
            reason=_PROFANITY_MESSAGES[ctx],
            flag_reason=FlagReason.profanity,
        )

    return PolicyResult(allowed=True)


def check_listing(
    title: str,
    category: Optional[str] = None,
    description: Optional[str] = None,
) -> PolicyResult:
    """Policy for a store item: category rules, then title and description text."""
    if contains_prohibited_category(title, category, description):
        return PolicyResult(
            allowed=False,
            reason=CATEGORY_MESSAGE,
            flag_reason=FlagReason.prohibited_category,
        )
    result = check_text(title, TextContext.product_title)
    if not result.allowed:
        return result
    return check_text(description, TextContext.product_description)


def moderate(
    recorder: FlagRecorder,
    text: Optional[str],
    context: Union[str, TextContext],
    content_type: Union[str, ContentType],
    content_id: Optional[str] = None,
    author_id: Optional[str] = None,
) -> PolicyResult:
    """Check *text* and record a flag when it breaks the policy."""
    result = check_text(text, context)
    if not result.allowed and result.flag_reason is not None:
        recorder.record(
            content_type,
            content_id=content_id,
            reason=result.flag_reason,
            snippet=text,
            author_id=author_id,
        )
    return result
