"""Append-only audit trail of flag review decisions."""

from nwcommunity.audit.review_log import FlagTransition, ReviewAuditLog

__all__ = ["FlagTransition", "ReviewAuditLog"]
