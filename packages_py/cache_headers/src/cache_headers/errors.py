"""
Exceptions raised while configuring cache header components.
"""
import re
from typing import Optional


class CacheHeadersError(Exception):
    """Base class for cache header configuration errors."""


class CacheControlFrozenError(CacheHeadersError):
    """Raised when a CacheControl is modified after its directive was composed."""

    def __init__(self, field: str, composed: str) -> None:
        self.field = field
        self.composed = composed
        super().__init__(
            f"CacheControl is frozen (composed={composed!r}); cannot change '{field}'"
        )


class ChannelPatternError(CacheHeadersError):
    """Raised when the channel sanitizer pattern does not compile."""

    def __init__(self, pattern: str, cause: Optional[re.error] = None) -> None:
        self.pattern = pattern
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Invalid channel sanitizer pattern {pattern!r}{detail}")
