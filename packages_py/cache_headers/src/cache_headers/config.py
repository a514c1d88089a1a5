"""
Configuration models for cache header components.

Configuration can be built in code or loaded from the environment:

    CACHE_HEADERS_MAX_AGE=20
    CACHE_HEADERS_S_MAXAGE=40
    CACHE_HEADERS_CHANNELS='["Cat_Articles", "Cat_Pictures"]'
    CACHE_HEADERS_VARNISH=true

    settings = get_settings()
    cc = create_cache_control(settings.cache_control_config())
    channels = create_cache_channels(settings.cache_channels_config())
"""
import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .channels import DEFAULT_ILLEGAL_PATTERN, CacheChannels
from .control import CacheControl

logger = logging.getLogger(__name__)

LOG_PREFIX = "[cache_headers.config]"


class CacheControlConfig(BaseModel):
    """Cache-Control settings. TTLs are in seconds and are not range-checked."""

    no_store: bool = False
    private: bool = False
    max_age: Optional[int] = None
    s_maxage: Optional[int] = None
    stale_while_revalidate: Optional[int] = None

    model_config = {"extra": "forbid"}


class CacheChannelsConfig(BaseModel):
    """Cache channel settings."""

    channels: List[str] = Field(default_factory=list)
    varnish: bool = False
    cloudflare: bool = False
    illegal_pattern: str = DEFAULT_ILLEGAL_PATTERN

    model_config = {"extra": "forbid"}


class CacheHeadersSettings(BaseSettings):
    """Cache header settings loaded from CACHE_HEADERS_* environment variables."""

    no_store: bool = False
    private: bool = False
    max_age: Optional[int] = None
    s_maxage: Optional[int] = None
    stale_while_revalidate: Optional[int] = None

    channels: List[str] = Field(default_factory=list)
    varnish: bool = False
    cloudflare: bool = False
    illegal_pattern: str = DEFAULT_ILLEGAL_PATTERN

    model_config = SettingsConfigDict(env_prefix="CACHE_HEADERS_", env_file=None)

    def cache_control_config(self) -> CacheControlConfig:
        return CacheControlConfig(
            no_store=self.no_store,
            private=self.private,
            max_age=self.max_age,
            s_maxage=self.s_maxage,
            stale_while_revalidate=self.stale_while_revalidate,
        )

    def cache_channels_config(self) -> CacheChannelsConfig:
        return CacheChannelsConfig(
            channels=list(self.channels),
            varnish=self.varnish,
            cloudflare=self.cloudflare,
            illegal_pattern=self.illegal_pattern,
        )


@lru_cache()
def get_settings() -> CacheHeadersSettings:
    """Get cached settings instance."""
    return CacheHeadersSettings()


def create_cache_control(config: Optional[CacheControlConfig] = None) -> CacheControl:
    """Create a CacheControl from configuration (defaults send no header)."""
    config = config or CacheControlConfig()
    logger.debug(f"{LOG_PREFIX} create_cache_control: {config.model_dump()}")
    return CacheControl(
        no_store=config.no_store,
        private=config.private,
        max_age=config.max_age,
        s_maxage=config.s_maxage,
        stale_while_revalidate=config.stale_while_revalidate,
    )


def create_cache_channels(config: Optional[CacheChannelsConfig] = None) -> CacheChannels:
    """
    Create a CacheChannels from configuration.

    Raises:
        ChannelPatternError: If config.illegal_pattern does not compile
    """
    config = config or CacheChannelsConfig()
    logger.debug(
        f"{LOG_PREFIX} create_cache_channels: {len(config.channels)} channel(s), "
        f"varnish={config.varnish}, cloudflare={config.cloudflare}"
    )
    return CacheChannels(
        *config.channels,
        varnish=config.varnish,
        cloudflare=config.cloudflare,
        illegal_pattern=config.illegal_pattern,
    )
