"""Moderation flag recording and admin review.

Recording is fire-and-forget: a failed write is logged and swallowed so that
flagging never blocks the post, message or listing that triggered it. Each
trigger produces its own row; repeated triggers for the same content are
distinct signals and are not merged.

Review is a separate admin path. Status only moves forward
(pending -> reviewed -> resolved) and every accepted transition lands in the
audit log.
"""

from __future__ import annotations

from typing import Optional, Union

import structlog

from nwcommunity.audit.review_log import ReviewAuditLog
from nwcommunity.errors import UnauthorizedError, ValidationError
from nwcommunity.moderation.flag_store import FlagStore
from nwcommunity.moderation.models import ContentType, FlaggedContent, FlagReason, FlagStatus

logger = structlog.get_logger()

SNIPPET_MAX_CHARS = 500


def _snippet(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return text.strip()[:SNIPPET_MAX_CHARS]


def parse_status(value: Union[str, FlagStatus]) -> FlagStatus:
    """Coerce *value* into a :class:`FlagStatus` or raise ValidationError."""
    if isinstance(value, FlagStatus):
        return value
    try:
        return FlagStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in FlagStatus)
        raise ValidationError(
            f"Invalid status '{value}'. Expected one of: {allowed}",
            fields=["status"],
        ) from None


class FlagRecorder:
    """Records moderation flags and applies admin status transitions."""

    def __init__(self, store: FlagStore, audit: Optional[ReviewAuditLog] = None) -> None:
        self._store = store
        self._audit = audit

    @property
    def store(self) -> FlagStore:
        return self._store

    def record(
        self,
        content_type: Union[str, ContentType],
        content_id: Optional[str] = None,
        reason: Union[str, FlagReason] = FlagReason.restricted,
        snippet: Optional[str] = None,
        author_id: Optional[str] = None,
    ) -> None:
        """Insert a pending flag. Never raises."""
        try:
            flag = self._store.insert(
                content_type=ContentType(content_type),
                reason=FlagReason(reason),
                content_id=content_id,
                snippet=_snippet(snippet),
                author_id=author_id,
            )
        except Exception as exc:
            logger.exception(
                "moderation.flag_record_failed",
                content_type=str(content_type),
                content_id=content_id,
                reason=str(reason),
                error=str(exc),
            )
            return
        logger.info(
            "moderation.flag_recorded",
            flag_id=flag.id,
            content_type=flag.content_type.value,
            content_id=content_id,
            reason=flag.reason.value,
        )

    def list_flags(
        self, status: Optional[Union[str, FlagStatus]] = None, limit: int = 200
    ) -> list[FlaggedContent]:
        wanted = parse_status(status) if status else None
        return self._store.list_flags(status=wanted, limit=limit)

    def update_status(
        self, flag_id: str, status: Union[str, FlagStatus], actor: str
    ) -> FlaggedContent:
        """Move a flag forward in its review lifecycle.

        Raises ``ValidationError`` for an unknown or backward status,
        ``FlagNotFoundError`` for an unknown id and ``UnauthorizedError``
        when no admin actor is given. The stored record is untouched on
        every rejection.
        """
        if not actor:
            raise UnauthorizedError("Status updates require an admin actor")
        target = parse_status(status)

        previous, flag = self._store.transition(flag_id, target, reviewed_by=actor)
        if previous == target:
            return flag

        logger.info(
            "moderation.flag_status_updated",
            flag_id=flag_id,
            from_status=previous.value,
            to_status=target.value,
            actor=actor,
        )
        if self._audit is not None:
            self._audit.record_transition(flag_id, previous.value, target.value, actor=actor)
        return flag
