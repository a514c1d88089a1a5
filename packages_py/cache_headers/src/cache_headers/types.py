"""
Types for Cache-Control composition and cache channel headers.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Union


CACHE_CONTROL_HEADER = "Cache-Control"
"""Response header carrying the composed directives."""

CACHE_CHANNEL_HEADER = "X-Cache-Channel"
"""Cache channel header used by Varnish."""

CACHE_TAG_HEADER = "Cache-Tag"
"""Cache tag header used by Cloudflare (Enterprise only)."""

VARNISH_SEPARATOR = ", "
CLOUDFLARE_SEPARATOR = ","
DIRECTIVE_SEPARATOR = ", "


def _ttl_directives(
    max_age: Optional[int], stale_while_revalidate: Optional[int]
) -> List[str]:
    parts: List[str] = []
    if max_age is not None:
        parts.append(f"max-age={max_age}")
    if stale_while_revalidate is not None:
        parts.append(f"stale-while-revalidate={stale_while_revalidate}")
    return parts


@dataclass(frozen=True)
class NoStorePolicy:
    """Response holds sensitive data and must not be stored by anyone."""

    def directives(self) -> List[str]:
        return ["no-store"]

    def render(self) -> str:
        return DIRECTIVE_SEPARATOR.join(self.directives())


@dataclass(frozen=True)
class PrivatePolicy:
    """Response may be cached by browsers but never by shared proxies."""

    max_age: Optional[int] = None
    """Browser TTL in seconds."""

    stale_while_revalidate: Optional[int] = None
    """Seconds a stale response may be reused while revalidating."""

    def directives(self) -> List[str]:
        return _ttl_directives(self.max_age, self.stale_while_revalidate) + ["private"]

    def render(self) -> str:
        return DIRECTIVE_SEPARATOR.join(self.directives())


@dataclass(frozen=True)
class PublicPolicy:
    """Response may be cached by browsers and shared proxies."""

    max_age: Optional[int] = None
    """Browser TTL in seconds. Proxies use it when s_maxage is unset."""

    stale_while_revalidate: Optional[int] = None
    """Seconds a stale response may be reused while revalidating."""

    s_maxage: Optional[int] = None
    """Proxy TTL in seconds (Varnish, Cloudflare, ...)."""

    def directives(self) -> List[str]:
        parts = _ttl_directives(self.max_age, self.stale_while_revalidate)
        if self.s_maxage is not None:
            parts.append(f"s-maxage={self.s_maxage}")
        return parts

    def render(self) -> str:
        return DIRECTIVE_SEPARATOR.join(self.directives())


CachePolicy = Union[NoStorePolicy, PrivatePolicy, PublicPolicy]
"""Cache policy variants. Private policies cannot carry a proxy TTL."""


HeaderMap = Dict[str, str]
"""Response headers to inject, keyed by header name."""
