"""
Cache-Control directive composer.

Turns a small set of cache settings into a single Cache-Control value for
browsers and cache proxies. Only the core directives needed for configurable
caching and TTLs are supported: no-store, private, max-age, s-maxage and
stale-while-revalidate.

The configuration is expected to be set up once, before serving. The first
call to compose() (or freeze()) renders the directive and freezes the
instance; later changes raise CacheControlFrozenError.
"""
import logging
import threading
from typing import Optional

from starlette.types import ASGIApp

from .errors import CacheControlFrozenError
from .middleware import CacheControlMiddleware
from .types import (
    CACHE_CONTROL_HEADER,
    CachePolicy,
    HeaderMap,
    NoStorePolicy,
    PrivatePolicy,
    PublicPolicy,
)

logger = logging.getLogger(__name__)

LOG_PREFIX = "[cache_headers.control]"


class CacheControl:
    """
    Composes and memoizes a Cache-Control header value.

    Example:
        cc = CacheControl(private=True)
        cc.set_max_age(30)
        cc.set_s_maxage(60)  # ignored, private responses are never proxy-cached
        cc.compose()  # "max-age=30, private"

        app = cc.wrap(app)
    """

    def __init__(
        self,
        *,
        no_store: bool = False,
        private: bool = False,
        max_age: Optional[int] = None,
        s_maxage: Optional[int] = None,
        stale_while_revalidate: Optional[int] = None,
    ) -> None:
        self._no_store = no_store
        self._private = private
        self._max_age = max_age
        self._s_maxage = s_maxage
        self._stale_while_revalidate = stale_while_revalidate
        self._composed: Optional[str] = None
        self._lock = threading.Lock()

    @classmethod
    def from_policy(cls, policy: CachePolicy) -> "CacheControl":
        """Create a builder holding the settings of a policy variant."""
        if isinstance(policy, NoStorePolicy):
            return cls(no_store=True)
        if isinstance(policy, PrivatePolicy):
            return cls(
                private=True,
                max_age=policy.max_age,
                stale_while_revalidate=policy.stale_while_revalidate,
            )
        return cls(
            max_age=policy.max_age,
            s_maxage=policy.s_maxage,
            stale_while_revalidate=policy.stale_while_revalidate,
        )

    def _check_mutable(self, field: str) -> None:
        if self._composed is not None:
            logger.warning(
                f"{LOG_PREFIX} rejected change to '{field}' after compose "
                f"(composed={self._composed!r})"
            )
            raise CacheControlFrozenError(field, self._composed)

    @property
    def no_store(self) -> bool:
        """Send "no-store": nothing may cache or store the response."""
        return self._no_store

    @no_store.setter
    def no_store(self, value: bool) -> None:
        self._check_mutable("no_store")
        self._no_store = value

    @property
    def private(self) -> bool:
        """Send "private": browsers may cache the response, proxies must not."""
        return self._private

    @private.setter
    def private(self, value: bool) -> None:
        self._check_mutable("private")
        self._private = value

    @property
    def max_age(self) -> Optional[int]:
        return self._max_age

    @property
    def s_maxage(self) -> Optional[int]:
        return self._s_maxage

    @property
    def stale_while_revalidate(self) -> Optional[int]:
        return self._stale_while_revalidate

    @property
    def is_frozen(self) -> bool:
        return self._composed is not None

    def set_max_age(self, value: int) -> None:
        """
        Set "max-age", the TTL in seconds browsers should obey.

        Varnish uses it as well when s-maxage is not set.
        """
        self._check_mutable("max_age")
        self._max_age = value

    def set_s_maxage(self, value: int) -> None:
        """Set "s-maxage", the TTL in seconds for proxy caches."""
        self._check_mutable("s_maxage")
        self._s_maxage = value

    def set_stale_while_revalidate(self, value: int) -> None:
        """
        Set "stale-while-revalidate", the number of seconds during which a stale
        response is reused while a revalidation request runs in the background.
        """
        self._check_mutable("stale_while_revalidate")
        self._stale_while_revalidate = value

    def to_policy(self) -> CachePolicy:
        """Map the current settings onto a policy variant."""
        if self._no_store:
            return NoStorePolicy()

        if self._private:
            if self._s_maxage is not None:
                logger.debug(
                    f"{LOG_PREFIX} to_policy: dropping s-maxage={self._s_maxage} "
                    "for private response"
                )
            return PrivatePolicy(
                max_age=self._max_age,
                stale_while_revalidate=self._stale_while_revalidate,
            )

        return PublicPolicy(
            max_age=self._max_age,
            stale_while_revalidate=self._stale_while_revalidate,
            s_maxage=self._s_maxage,
        )

    def compose(self) -> str:
        """Return the Cache-Control value, rendering it on first use only."""
        composed = self._composed
        if composed is not None:
            return composed

        with self._lock:
            if self._composed is None:
                self._composed = self.to_policy().render()
                logger.debug(f"{LOG_PREFIX} compose: {self._composed!r}")
            return self._composed

    def freeze(self) -> str:
        """Compose the directive at startup. Alias of compose()."""
        return self.compose()

    def headers(self) -> HeaderMap:
        """Headers to add to a response; empty when there is nothing to send."""
        value = self.compose()
        if not value:
            return {}
        return {CACHE_CONTROL_HEADER: value}

    def wrap(self, app: ASGIApp) -> CacheControlMiddleware:
        """Wrap an ASGI app so every response carries the Cache-Control header."""
        return CacheControlMiddleware(app, cache_control=self)

    def __repr__(self) -> str:
        return (
            f"CacheControl(no_store={self._no_store}, private={self._private}, "
            f"max_age={self._max_age}, s_maxage={self._s_maxage}, "
            f"stale_while_revalidate={self._stale_while_revalidate})"
        )
