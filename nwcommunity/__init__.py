"""Northwest Community core: admin authorization, rate limiting, moderation
flagging, rich-text sanitizing and city canonicalization."""

__version__ = "0.1.0"
