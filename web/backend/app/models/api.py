"""Pydantic models for API request/response serialization.

These models mirror the nwcommunity dataclasses and provide proper JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Auth models
# ---------------------------------------------------------------------------


class SignInRequest(BaseModel):
    email: str = Field(min_length=3)


class SignUpRequest(BaseModel):
    email: str = Field(min_length=3)
    display_name: str = ""


class MemberResponse(BaseModel):
    """Mirrors nwcommunity.auth.models.Member."""

    id: str
    email: str
    display_name: str = ""
    created_at: str = ""


class SessionResponse(BaseModel):
    token: str
    member: MemberResponse
    expires_at: str = ""


class AdminStatusResponse(BaseModel):
    """Mirrors nwcommunity.auth.models.AdminCredential."""

    is_admin: bool
    via: Optional[str] = None


# ---------------------------------------------------------------------------
# Moderation models
# ---------------------------------------------------------------------------


class FlaggedContentResponse(BaseModel):
    """Mirrors nwcommunity.moderation.models.FlaggedContent."""

    id: str
    content_type: str
    content_id: Optional[str] = None
    reason: str
    snippet: Optional[str] = None
    author_id: Optional[str] = None
    status: str
    created_at: str = ""
    updated_at: str = ""
    reviewed_by: Optional[str] = None


class FlagStatusUpdateRequest(BaseModel):
    id: str
    status: str


class FlagSummaryResponse(BaseModel):
    counts: dict[str, int] = Field(default_factory=dict)
    total: int = 0


class FlagTransitionResponse(BaseModel):
    """Mirrors nwcommunity.audit.review_log.FlagTransition."""

    id: str
    timestamp: str
    actor: str
    flag_id: str
    from_status: str
    to_status: str


class TextCheckRequest(BaseModel):
    text: str = ""
    context: str
    content_type: str
    content_id: Optional[str] = None
    author_id: Optional[str] = None


class ListingCheckRequest(BaseModel):
    title: str
    category: Optional[str] = None
    description: Optional[str] = None
    content_id: Optional[str] = None
    author_id: Optional[str] = None


class PolicyResultResponse(BaseModel):
    """Mirrors nwcommunity.moderation.models.PolicyResult."""

    allowed: bool
    reason: str = ""
    flag_reason: Optional[str] = None


# ---------------------------------------------------------------------------
# Content models
# ---------------------------------------------------------------------------


class SanitizeRequest(BaseModel):
    html: Optional[str] = None
    text: Optional[str] = None


class SanitizeResponse(BaseModel):
    html: str


class CityListRequest(BaseModel):
    cities: list[Optional[str]] = Field(default_factory=list)


class CityListResponse(BaseModel):
    cities: list[str] = Field(default_factory=list)
