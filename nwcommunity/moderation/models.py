"""Data models for the content moderation system."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ContentType(str, Enum):
    post = "post"
    message = "message"
    business = "business"
    event = "event"
    store_item = "store_item"


class FlagReason(str, Enum):
    slur = "slur"
    prohibited_category = "prohibited_category"
    profanity = "profanity"
    restricted = "restricted"


class FlagStatus(str, Enum):
    """Review state of a flag: pending -> reviewed -> resolved."""

    pending = "pending"
    reviewed = "reviewed"
    resolved = "resolved"

    @property
    def rank(self) -> int:
        return {
            FlagStatus.pending: 0,
            FlagStatus.reviewed: 1,
            FlagStatus.resolved: 2,
        }[self]


class TextContext(str, Enum):
    """Where a piece of text appears; decides which word lists apply."""

    comment = "comment"
    product_title = "product_title"
    product_description = "product_description"
    business_name = "business_name"
    message = "message"


@dataclass
class FlaggedContent:
    """One moderation event raised against a piece of community content."""

    id: str
    content_type: ContentType
    reason: FlagReason
    content_id: Optional[str] = None
    snippet: Optional[str] = None
    author_id: Optional[str] = None
    status: FlagStatus = FlagStatus.pending
    created_at: str = ""
    updated_at: str = ""
    reviewed_by: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()
        if not self.updated_at:
            self.updated_at = self.created_at
        if isinstance(self.content_type, str):
            self.content_type = ContentType(self.content_type)
        if isinstance(self.reason, str):
            self.reason = FlagReason(self.reason)
        if isinstance(self.status, str):
            self.status = FlagStatus(self.status)


@dataclass
class PolicyResult:
    """Result of a text policy check."""

    allowed: bool
    reason: str = ""
    flag_reason: Optional[FlagReason] = None
