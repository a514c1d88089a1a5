"""Tests for cache channel sanitizing and rendering."""
import re

import pytest

from cache_headers import (
    CACHE_CHANNEL_HEADER,
    CACHE_TAG_HEADER,
    CacheChannels,
    CacheHeadersError,
    ChannelPatternError,
    compile_channel_pattern,
    render_channel_headers,
    sanitize_channel,
)

PETS = ["Cat_Articles", "Cat_Pictures", "Dog_Pictures"]


class TestSanitizeChannel:
    def test_strips_non_ascii_and_punctuation(self):
        assert sanitize_channel("Cat(øøøøø)_Articles//") == "Cat_Articles"

    def test_keeps_legal_characters(self):
        assert sanitize_channel("abc-XYZ_019") == "abc-XYZ_019"

    def test_strips_whitespace_and_commas(self):
        assert sanitize_channel("news, sport") == "newssport"

    def test_everything_illegal_gives_empty_string(self):
        assert sanitize_channel("øø//()") == ""

    def test_custom_pattern(self):
        pattern = compile_channel_pattern(r"[^a-z]+")
        assert sanitize_channel("Cat_Articles-1", pattern) == "atrticles"

    def test_custom_pattern_cannot_keep_non_ascii(self):
        pattern = compile_channel_pattern(r"\s+")
        assert sanitize_channel("ø Cat 猫", pattern) == "Cat"


class TestCompileChannelPattern:
    def test_default_pattern(self):
        assert compile_channel_pattern().pattern == r"[^A-Za-z0-9_-]+"

    def test_precompiled_pattern_is_reused(self):
        rx = re.compile(r"\s+")
        assert compile_channel_pattern(rx) is rx

    def test_invalid_pattern_raises(self):
        with pytest.raises(ChannelPatternError) as exc_info:
            compile_channel_pattern(r"[unclosed")
        assert exc_info.value.pattern == r"[unclosed"
        assert isinstance(exc_info.value.cause, re.error)
        assert isinstance(exc_info.value, CacheHeadersError)


class TestRenderChannelHeaders:
    def test_varnish_uses_comma_space(self):
        assert render_channel_headers(PETS, varnish=True) == {
            CACHE_CHANNEL_HEADER: "Cat_Articles, Cat_Pictures, Dog_Pictures"
        }

    def test_cloudflare_uses_bare_comma(self):
        assert render_channel_headers(PETS, cloudflare=True) == {
            CACHE_TAG_HEADER: "Cat_Articles,Cat_Pictures,Dog_Pictures"
        }

    def test_both(self):
        headers = render_channel_headers(PETS, varnish=True, cloudflare=True)
        assert headers == {
            CACHE_CHANNEL_HEADER: "Cat_Articles, Cat_Pictures, Dog_Pictures",
            CACHE_TAG_HEADER: "Cat_Articles,Cat_Pictures,Dog_Pictures",
        }

    def test_neither(self):
        assert render_channel_headers(PETS) == {}

    def test_accepts_generators(self):
        headers = render_channel_headers((c for c in PETS[:2]), varnish=True)
        assert headers[CACHE_CHANNEL_HEADER] == "Cat_Articles, Cat_Pictures"


class TestCacheChannels:
    def test_set_sanitizes(self):
        cc = CacheChannels(varnish=True)
        cc.set("Cat(øøøøø)_Articles//")
        assert cc.channels == ["Cat_Articles"]
        assert cc.headers() == {CACHE_CHANNEL_HEADER: "Cat_Articles"}

    def test_add_appends_in_order(self):
        cc = CacheChannels(varnish=True)
        cc.set("Cat(øøøøø)_Articles//")
        cc.add("Cat_Pictures", "Dog_Pictures")
        cc.cloudflare = True
        assert cc.headers() == {
            CACHE_CHANNEL_HEADER: "Cat_Articles, Cat_Pictures, Dog_Pictures",
            CACHE_TAG_HEADER: "Cat_Articles,Cat_Pictures,Dog_Pictures",
        }

    def test_set_replaces_existing(self):
        cc = CacheChannels("a", "b")
        cc.set("c")
        assert cc.channels == ["c"]

    def test_set_without_arguments_clears(self):
        cc = CacheChannels("a", "b")
        cc.set()
        assert cc.channels == []
        assert len(cc) == 0

    def test_duplicates_are_kept(self):
        cc = CacheChannels("news", "news")
        assert cc.channels == ["news", "news"]

    def test_empty_results_are_kept(self):
        cc = CacheChannels(cloudflare=True)
        cc.add("a", "øø", "b")
        assert cc.channels == ["a", "", "b"]
        assert cc.headers() == {CACHE_TAG_HEADER: "a,,b"}

    def test_constructor_channels_are_sanitized(self):
        cc = CacheChannels("front page", "sport/football")
        assert cc.channels == ["frontpage", "sportfootball"]

    def test_toggles_are_read_at_render_time(self):
        cc = CacheChannels(*PETS)
        assert cc.headers() == {}

        cc.varnish = True
        assert cc.headers() == {
            CACHE_CHANNEL_HEADER: "Cat_Articles, Cat_Pictures, Dog_Pictures"
        }

        cc.varnish = False
        cc.cloudflare = True
        assert cc.headers() == {CACHE_TAG_HEADER: "Cat_Articles,Cat_Pictures,Dog_Pictures"}

    def test_channels_property_is_a_copy(self):
        cc = CacheChannels("a")
        cc.channels.append("b")
        assert cc.channels == ["a"]

    def test_custom_illegal_pattern(self):
        cc = CacheChannels("Front-Page_1", illegal_pattern=r"[^A-Za-z]+")
        assert cc.channels == ["FrontPage"]

    def test_narrow_illegal_pattern_still_strips_non_ascii(self):
        cc = CacheChannels("猫_news", "Cat, Dog", varnish=True, illegal_pattern=r"[,\s]+")
        assert cc.channels == ["_news", "CatDog"]
        assert cc.headers() == {"X-Cache-Channel": "_news, CatDog"}

    def test_invalid_illegal_pattern_fails_construction(self):
        with pytest.raises(ChannelPatternError):
            CacheChannels("a", illegal_pattern=r"(")

    def test_varnish_without_channels_sends_empty_header(self):
        cc = CacheChannels(varnish=True)
        assert cc.headers() == {CACHE_CHANNEL_HEADER: ""}
