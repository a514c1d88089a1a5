"""Pytest configuration and fixtures for cache_headers tests."""
import os
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

from cache_headers import get_settings


def create_ok_app() -> FastAPI:
    """Barebones app with an endpoint that answers "ok!"."""
    app = FastAPI()

    @app.get("/", response_class=PlainTextResponse)
    async def ok() -> str:
        return "ok!"

    @app.get("/no-cache")
    async def no_cache() -> Response:
        return Response(content="fresh", headers={"Cache-Control": "no-cache"})

    @app.post("/echo")
    async def echo(payload: dict) -> dict:
        return payload

    return app


class RawASGIApp:
    """Plain ASGI app that records the scopes it receives."""

    def __init__(self, include_headers: bool = True) -> None:
        self.include_headers = include_headers
        self.scopes: list[Scope] = []

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.scopes.append(scope)
        start = {"type": "http.response.start", "status": 200}
        if self.include_headers:
            start["headers"] = [(b"content-type", b"text/plain")]
        await send(start)
        await send({"type": "http.response.body", "body": b"raw"})


@pytest.fixture
def ok_app() -> FastAPI:
    """Create the barebones FastAPI app."""
    return create_ok_app()


@pytest.fixture
def raw_app() -> RawASGIApp:
    """Create a plain ASGI app."""
    return RawASGIApp()


@pytest.fixture
def raw_app_without_headers() -> RawASGIApp:
    """Create a plain ASGI app whose response start message has no headers key."""
    return RawASGIApp(include_headers=False)


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop CACHE_HEADERS_* variables and the settings cache around a test."""
    for key in list(os.environ):
        if key.startswith("CACHE_HEADERS_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
