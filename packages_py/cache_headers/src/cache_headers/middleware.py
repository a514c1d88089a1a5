"""
ASGI middleware that adds cache headers to every HTTP response.

Works with any ASGI framework; with FastAPI / Starlette either wrap the app
directly or register the middleware:

    app.add_middleware(CacheControlMiddleware, cache_control=cc)
    app.add_middleware(CacheChannelsMiddleware, cache_channels=channels)

Requests pass through untouched. Headers are merged into the response start
message; a value the wrapped app already set for the same header is kept.
"""
from typing import Protocol

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .types import HeaderMap


class HeaderSource(Protocol):
    """Anything that can render the headers to inject into a response."""

    def headers(self) -> HeaderMap:
        ...


class CacheHeadersMiddleware:
    """Injects the headers of a HeaderSource, then delegates to the wrapped app."""

    def __init__(self, app: ASGIApp, *, source: HeaderSource) -> None:
        self.app = app
        self.source = source

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # rendered up front: toggles and tags are read per request
        extra_headers = self.source.headers()
        if not extra_headers:
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                headers = MutableHeaders(scope=message)
                for name, value in extra_headers.items():
                    headers.setdefault(name, value)
            await send(message)

        await self.app(scope, receive, send_with_headers)


class CacheControlMiddleware(CacheHeadersMiddleware):
    """Adds the Cache-Control header composed by a CacheControl."""

    def __init__(self, app: ASGIApp, *, cache_control: HeaderSource) -> None:
        super().__init__(app, source=cache_control)
        self.cache_control = cache_control


class CacheChannelsMiddleware(CacheHeadersMiddleware):
    """Adds X-Cache-Channel and / or Cache-Tag headers from a CacheChannels."""

    def __init__(self, app: ASGIApp, *, cache_channels: HeaderSource) -> None:
        super().__init__(app, source=cache_channels)
        self.cache_channels = cache_channels
