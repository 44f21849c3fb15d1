"""Content router -- text policy checks, rich-text sanitizing and city lists.

Prefix: ``/api/content``. These routes are called by the post, message,
business, event and store-item forms before the primary write.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from nwcommunity.content.cities import dedupe_cities
from nwcommunity.content.sanitizer import sanitize_html, text_to_html
from nwcommunity.moderation.models import ContentType, PolicyResult, TextContext
from nwcommunity.moderation.recorder import FlagRecorder
from nwcommunity.moderation.text_policy import check_listing, moderate
from web.backend.app.middleware.auth import get_flag_recorder
from web.backend.app.models.api import (
    CityListRequest,
    CityListResponse,
    ListingCheckRequest,
    PolicyResultResponse,
    SanitizeRequest,
    SanitizeResponse,
    TextCheckRequest,
)

router = APIRouter(prefix="/api/content", tags=["content"])


def _policy_response(result: PolicyResult) -> PolicyResultResponse:
    return PolicyResultResponse(
        allowed=result.allowed,
        reason=result.reason,
        flag_reason=result.flag_reason.value if result.flag_reason else None,
    )


@router.post("/check", response_model=PolicyResultResponse)
async def check_content(
    body: TextCheckRequest,
    recorder: FlagRecorder = Depends(get_flag_recorder),
):
    """Check text against the community policy, flagging violations."""
    try:
        context = TextContext(body.context)
        content_type = ContentType(body.content_type)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid context or content type", "fields": ["context", "content_type"]},
        )
    result = moderate(
        recorder,
        body.text,
        context,
        content_type,
        content_id=body.content_id,
        author_id=body.author_id,
    )
    return _policy_response(result)


@router.post("/listings/check", response_model=PolicyResultResponse)
async def check_store_listing(
    body: ListingCheckRequest,
    recorder: FlagRecorder = Depends(get_flag_recorder),
):
    """Check a store item's title, category and description."""
    result = check_listing(body.title, body.category, body.description)
    if not result.allowed and result.flag_reason is not None:
        recorder.record(
            ContentType.store_item,
            content_id=body.content_id,
            reason=result.flag_reason,
            snippet=body.title,
            author_id=body.author_id,
        )
    return _policy_response(result)


@router.post("/sanitize", response_model=SanitizeResponse)
async def sanitize(body: SanitizeRequest):
    """Sanitize rich text, or render plain text with line breaks."""
    if body.html is not None:
        return SanitizeResponse(html=sanitize_html(body.html))
    return SanitizeResponse(html=text_to_html(body.text))


@router.post("/cities", response_model=CityListResponse)
async def cities(body: CityListRequest):
    """Collapse city spellings into one sorted display list."""
    return CityListResponse(cities=dedupe_cities(body.cities))
