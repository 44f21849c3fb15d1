"""Error taxonomy shared by the core and the HTTP layer."""

from __future__ import annotations


class NWCError(Exception):
    """Base class for all Northwest Community errors."""


class UnauthorizedError(NWCError):
    """Raised when an admin-only action is attempted without a credential."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(NWCError):
    """A value fell outside its closed set of allowed values.

    ``fields`` names the input field(s) at fault so the HTTP layer can echo
    them back in a 400 response.
    """

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class FlagNotFoundError(NWCError):
    """Raised when a flag id does not resolve to a stored record."""

    def __init__(self, flag_id: str) -> None:
        super().__init__(f"Flag '{flag_id}' not found")
        self.flag_id = flag_id


class StoreCorruptError(NWCError):
    """A data file exists but does not hold a readable JSON list.

    Write paths refuse to continue rather than replace the unreadable file.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
