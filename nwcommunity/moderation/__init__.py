"""Moderation flagging, admin review, and the community text policy."""

from nwcommunity.moderation.flag_store import FlagStore
from nwcommunity.moderation.models import (
    ContentType,
    FlaggedContent,
    FlagReason,
    FlagStatus,
    PolicyResult,
    TextContext,
)
from nwcommunity.moderation.recorder import FlagRecorder, parse_status
from nwcommunity.moderation.text_policy import (
    check_listing,
    check_text,
    contains_prohibited_category,
    moderate,
)

__all__ = [
    "ContentType",
    "FlagRecorder",
    "FlagReason",
    "FlagStatus",
    "FlagStore",
    "FlaggedContent",
    "PolicyResult",
    "TextContext",
    "check_listing",
    "check_text",
    "contains_prohibited_category",
    "moderate",
    "parse_status",
]
