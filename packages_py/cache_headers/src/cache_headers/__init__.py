"""
Cache-Control and cache channel response headers for ASGI apps.

Emits Cache-Control directives for browsers and proxies, and cache channel /
cache tag headers that let Varnish or Cloudflare invalidate groups of cached
responses at once.

Known gap: there is no keyed (highwayhash) checksum helper for building
channel names or ETags from request data; no maintained Python binding was
available to build one on.
"""
from .types import (
    CACHE_CONTROL_HEADER,
    CACHE_CHANNEL_HEADER,
    CACHE_TAG_HEADER,
    CachePolicy,
    NoStorePolicy,
    PrivatePolicy,
    PublicPolicy,
    HeaderMap,
)
from .errors import (
    CacheHeadersError,
    CacheControlFrozenError,
    ChannelPatternError,
)
from .middleware import (
    HeaderSource,
    CacheHeadersMiddleware,
    CacheControlMiddleware,
    CacheChannelsMiddleware,
)
from .control import CacheControl
from .channels import (
    CacheChannels,
    DEFAULT_ILLEGAL_PATTERN,
    compile_channel_pattern,
    sanitize_channel,
    render_channel_headers,
)
from .config import (
    CacheControlConfig,
    CacheChannelsConfig,
    CacheHeadersSettings,
    get_settings,
    create_cache_control,
    create_cache_channels,
)


__all__ = [
    # Types
    "CACHE_CONTROL_HEADER",
    "CACHE_CHANNEL_HEADER",
    "CACHE_TAG_HEADER",
    "CachePolicy",
    "NoStorePolicy",
    "PrivatePolicy",
    "PublicPolicy",
    "HeaderMap",
    # Errors
    "CacheHeadersError",
    "CacheControlFrozenError",
    "ChannelPatternError",
    # Middleware
    "HeaderSource",
    "CacheHeadersMiddleware",
    "CacheControlMiddleware",
    "CacheChannelsMiddleware",
    # Cache-Control
    "CacheControl",
    # Cache channels
    "CacheChannels",
    "DEFAULT_ILLEGAL_PATTERN",
    "compile_channel_pattern",
    "sanitize_channel",
    "render_channel_headers",
    # Configuration
    "CacheControlConfig",
    "CacheChannelsConfig",
    "CacheHeadersSettings",
    "get_settings",
    "create_cache_control",
    "create_cache_channels",
]

__version__ = "1.0.0"
