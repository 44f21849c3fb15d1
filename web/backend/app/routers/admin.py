"""Admin router -- flagged content review and the moderation audit trail.

Prefix: ``/api/admin``. Every route requires an admin credential.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from nwcommunity.audit.review_log import ReviewAuditLog
from nwcommunity.auth.models import AdminCredential
from nwcommunity.config import Settings
from nwcommunity.errors import FlagNotFoundError, StoreCorruptError, ValidationError
from nwcommunity.moderation.models import FlaggedContent
from nwcommunity.moderation.recorder import FlagRecorder
from web.backend.app.middleware.auth import (
    admin_actor,
    get_app_settings,
    get_flag_recorder,
    get_review_log,
    require_admin,
)
from web.backend.app.models.api import (
    AdminStatusResponse,
    FlaggedContentResponse,
    FlagStatusUpdateRequest,
    FlagSummaryResponse,
    FlagTransitionResponse,
)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _flag_response(f: FlaggedContent) -> FlaggedContentResponse:
    return FlaggedContentResponse(
        id=f.id,
        content_type=f.content_type.value,
        content_id=f.content_id,
        reason=f.reason.value,
        snippet=f.snippet,
        author_id=f.author_id,
        status=f.status.value,
        created_at=f.created_at,
        updated_at=f.updated_at,
        reviewed_by=f.reviewed_by,
    )


def _validation_error(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": exc.message, "fields": exc.fields},
    )


@router.get("/me", response_model=AdminStatusResponse)
async def admin_status(credential: AdminCredential = Depends(require_admin)):
    """Report which credential path authorized the caller."""
    return AdminStatusResponse(
        is_admin=credential.is_admin,
        via=credential.via.value if credential.via else None,
    )


@router.get("/flagged", response_model=list[FlaggedContentResponse])
async def list_flagged(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(200, ge=1, le=1000),
    _: AdminCredential = Depends(require_admin),
    recorder: FlagRecorder = Depends(get_flag_recorder),
):
    """List flagged content, newest first, optionally by status."""
    try:
        flags = recorder.list_flags(status=status_filter, limit=limit)
    except ValidationError as exc:
        raise _validation_error(exc)
    return [_flag_response(f) for f in flags]


@router.get("/flagged/summary", response_model=FlagSummaryResponse)
async def flagged_summary(
    _: AdminCredential = Depends(require_admin),
    recorder: FlagRecorder = Depends(get_flag_recorder),
):
    counts = recorder.store.count_by_status()
    return FlagSummaryResponse(counts=counts, total=sum(counts.values()))


@router.patch("/flagged", response_model=FlaggedContentResponse)
async def update_flagged(
    body: FlagStatusUpdateRequest,
    credential: AdminCredential = Depends(require_admin),
    recorder: FlagRecorder = Depends(get_flag_recorder),
    settings: Settings = Depends(get_app_settings),
):
    """Move a flag to ``reviewed`` or ``resolved``."""
    try:
        flag = recorder.update_status(body.id, body.status, actor=admin_actor(credential, settings))
    except ValidationError as exc:
        raise _validation_error(exc)
    except FlagNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except StoreCorruptError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Flag store is unreadable",
        )
    return _flag_response(flag)


@router.get("/audit", response_model=list[FlagTransitionResponse])
async def list_review_history(
    flag_id: Optional[str] = Query(None),
    actor: Optional[str] = Query(None),
    limit: int = Query(200, ge=1, le=10000),
    _: AdminCredential = Depends(require_admin),
    review_log: ReviewAuditLog = Depends(get_review_log),
):
    """Status transitions made by admins, newest first."""
    entries = review_log.transitions(flag_id=flag_id, actor=actor, limit=limit)
    return [FlagTransitionResponse(**asdict(e)) for e in entries]
