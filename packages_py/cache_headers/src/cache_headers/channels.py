"""
Cache channel / cache tag headers.

Cache proxies can ban or invalidate large groups of cached responses in one go
when the responses are labelled with channels (Varnish, "X-Cache-Channel") or
tags (Cloudflare Enterprise, "Cache-Tag"). Channel names are sanitized when
they are added; the proxy toggles are only read when headers are rendered.
"""
import logging
import re
from typing import Iterable, List, Optional, Union

from starlette.types import ASGIApp

from .errors import ChannelPatternError
from .middleware import CacheChannelsMiddleware
from .types import (
    CACHE_CHANNEL_HEADER,
    CACHE_TAG_HEADER,
    CLOUDFLARE_SEPARATOR,
    VARNISH_SEPARATOR,
    HeaderMap,
)

logger = logging.getLogger(__name__)

LOG_PREFIX = "[cache_headers.channels]"

DEFAULT_ILLEGAL_PATTERN = r"[^A-Za-z0-9_-]+"
"""Everything outside a-z, A-Z, 0-9, '_' and '-' is stripped from channel names."""

_DEFAULT_ILLEGAL_RE = re.compile(DEFAULT_ILLEGAL_PATTERN)


def compile_channel_pattern(
    pattern: Union[str, re.Pattern[str], None] = None,
) -> re.Pattern[str]:
    """Compile the illegal-character pattern, raising ChannelPatternError if invalid."""
    if pattern is None:
        return _DEFAULT_ILLEGAL_RE
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ChannelPatternError(pattern, e) from e


def sanitize_channel(name: str, pattern: Optional[re.Pattern[str]] = None) -> str:
    """
    Strip every illegal character from a channel name.

    A custom pattern can only strip more: the result always passes through the
    default [A-Za-z0-9_-] filter too, so it stays a valid header value.
    """
    if pattern is not None and pattern is not _DEFAULT_ILLEGAL_RE:
        name = pattern.sub("", name)
    return _DEFAULT_ILLEGAL_RE.sub("", name)


def render_channel_headers(
    channels: Iterable[str], *, varnish: bool = False, cloudflare: bool = False
) -> HeaderMap:
    """
    Render channel headers for the enabled proxies.

    Varnish separates channels with a comma and a space, Cloudflare with a bare
    comma. Both formats are part of the proxies' contracts.
    """
    channels = list(channels)
    headers: HeaderMap = {}
    if varnish:
        headers[CACHE_CHANNEL_HEADER] = VARNISH_SEPARATOR.join(channels)
    if cloudflare:
        headers[CACHE_TAG_HEADER] = CLOUDFLARE_SEPARATOR.join(channels)
    return headers


class CacheChannels:
    """
    Ordered set of cache channels sent as proxy invalidation headers.

    Example:
        channels = CacheChannels(varnish=True)
        channels.set("Cat(øøøøø)_Articles//")   # stored as "Cat_Articles"
        channels.add("Cat_Pictures", "Dog_Pictures")
        channels.cloudflare = True

        app = channels.wrap(app)
        # X-Cache-Channel: Cat_Articles, Cat_Pictures, Dog_Pictures
        # Cache-Tag: Cat_Articles,Cat_Pictures,Dog_Pictures
    """

    def __init__(
        self,
        *channels: str,
        varnish: bool = False,
        cloudflare: bool = False,
        illegal_pattern: Union[str, re.Pattern[str], None] = None,
    ) -> None:
        """
        Create a channel set.

        Args:
            channels: Initial channel names (sanitized like add())
            varnish: Send the Varnish "X-Cache-Channel" header
            cloudflare: Send the Cloudflare Enterprise "Cache-Tag" header
            illegal_pattern: Regex of extra characters to strip from channel names.
                Anything outside [A-Za-z0-9_-] is always stripped.

        Raises:
            ChannelPatternError: If illegal_pattern does not compile
        """
        self.varnish = varnish
        self.cloudflare = cloudflare
        self._pattern = compile_channel_pattern(illegal_pattern)
        self._channels: List[str] = []
        if channels:
            self.add(*channels)

    @property
    def channels(self) -> List[str]:
        """Sanitized channel names in insertion order (copy)."""
        return list(self._channels)

    @property
    def pattern(self) -> re.Pattern[str]:
        return self._pattern

    def add(self, *channels: str) -> None:
        """Sanitize, then append the given channels. Empty results are kept."""
        for name in channels:
            cleaned = sanitize_channel(name, self._pattern)
            if cleaned != name:
                logger.debug(f"{LOG_PREFIX} add: sanitized {name!r} -> {cleaned!r}")
            self._channels.append(cleaned)

    def set(self, *channels: str) -> None:
        """Replace all existing channels with the given ones."""
        self._channels = []
        self.add(*channels)

    def headers(self) -> HeaderMap:
        """Render headers using the toggles as they are right now."""
        return render_channel_headers(
            self._channels, varnish=self.varnish, cloudflare=self.cloudflare
        )

    def wrap(self, app: ASGIApp) -> CacheChannelsMiddleware:
        """Wrap an ASGI app so every response carries the channel headers."""
        return CacheChannelsMiddleware(app, cache_channels=self)

    def __len__(self) -> int:
        return len(self._channels)

    def __repr__(self) -> str:
        return (
            f"CacheChannels({self._channels!r}, varnish={self.varnish}, "
            f"cloudflare={self.cloudflare})"
        )
