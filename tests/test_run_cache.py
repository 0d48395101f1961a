"""Tests for run caches and cached parsing."""

import gc

import pytest

from runmark import (
    DictRunCache,
    LRURunCache,
    ParseConfig,
    StyleOptions,
    TextRun,
    TextStyle,
    Theme,
    parse,
    parse_config_context,
)
from runmark.cache import hash_config, make_cache_key
from runmark.styling import DefaultStyleResolver


class TestLRURunCache:
    def test_get_missing(self) -> None:
        assert LRURunCache().get("nope") is None

    def test_put_and_get(self) -> None:
        cache = LRURunCache()
        runs = (TextRun("a", TextStyle()),)
        cache.put("k", runs)
        assert cache.get("k") == runs
        assert "k" in cache

    def test_evicts_least_recently_used(self) -> None:
        cache = LRURunCache(max_entries=2)
        cache.put("a", ())
        cache.put("b", ())
        cache.get("a")
        cache.put("c", ())
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert len(cache) == 2

    def test_clear(self) -> None:
        cache = LRURunCache()
        cache.put("a", ())
        cache.clear()
        assert len(cache) == 0

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError, match="max_entries"):
            LRURunCache(max_entries=0)

    def test_defaults(self) -> None:
        cache = LRURunCache()
        assert cache.max_entries == 200
        assert cache.max_key_length == 1000


class TestCachedParse:
    def test_hit_equals_fresh_parse(self) -> None:
        cache = LRURunCache()
        first = parse("Hello **World**", cache=cache)
        second = parse("Hello **World**", cache=cache)
        assert first == second
        assert len(cache) == 1

    def test_hit_returns_new_list(self) -> None:
        cache = DictRunCache()
        first = parse("**a**", cache=cache)
        second = parse("**a**", cache=cache)
        assert first is not second
        second.append(TextRun("x", TextStyle()))
        assert parse("**a**", cache=cache) == first

    def test_placeholders_bypass_cache(self) -> None:
        cache = DictRunCache()
        parse("a {x}", placeholders={"x": 1}, cache=cache)
        assert len(cache) == 0

    def test_long_text_bypasses_cache(self) -> None:
        cache = LRURunCache(max_key_length=10)
        parse("*" * 11, cache=cache)
        assert len(cache) == 0

    def test_base_style_is_part_of_key(self) -> None:
        cache = DictRunCache()
        a = parse("**a**", TextStyle(color=0xFF000000), cache=cache)
        b = parse("**a**", TextStyle(color=0xFFFFFFFF), cache=cache)
        assert a != b
        assert len(cache) == 2

    def test_freed_resolver_does_not_leak_into_new_one(self) -> None:
        cache = DictRunCache()
        light = DefaultStyleResolver(theme=Theme.light())
        parse("[a](b.com)", resolver=light, cache=cache)
        del light
        gc.collect()
        dark = DefaultStyleResolver(theme=Theme.dark())
        link = parse("[a](b.com)", resolver=dark, cache=cache)[0].content
        assert link.style.color == Theme.dark().primary
        assert len(cache) == 2

    def test_custom_resolver_without_fingerprint_bypasses_cache(self) -> None:
        class PlainResolver(DefaultStyleResolver):
            cache_key = None

        cache = DictRunCache()
        parse("**a**", resolver=PlainResolver(), cache=cache)
        assert len(cache) == 0

    def test_distinct_callbacks_not_shared(self) -> None:
        def make_options(tag: str) -> StyleOptions:
            def on_tap(url: str, text: str) -> str:
                return tag

            return StyleOptions(on_link_tap=on_tap)

        cache = DictRunCache()
        first = DefaultStyleResolver(make_options("a"))
        second = DefaultStyleResolver(make_options("b"))
        link_a = parse("[x](y.com)", resolver=first, cache=cache)[0].content
        link_b = parse("[x](y.com)", resolver=second, cache=cache)[0].content
        assert link_a.on_tap("u", "t") == "a"
        assert link_b.on_tap("u", "t") == "b"

    def test_config_is_part_of_key(self) -> None:
        cache = DictRunCache()
        text = "**a *b ~~c~~ b* a**"
        shallow = parse(text, cache=cache)
        with parse_config_context(ParseConfig(max_nesting_depth=3)):
            deep = parse(text, cache=cache)
        assert len(shallow) == 3
        assert len(deep) == 5


class TestCacheKeys:
    def test_hash_config_differs(self) -> None:
        assert hash_config(ParseConfig()) != hash_config(ParseConfig(max_nesting_depth=3))

    def test_fast_path_flag_not_in_key(self) -> None:
        """The fast path never changes output, so it shares cache entries."""
        assert hash_config(ParseConfig()) == hash_config(ParseConfig(fast_path_enabled=False))

    def test_equal_resolvers_share_key(self) -> None:
        config = ParseConfig()
        style = TextStyle()
        first, second = DefaultStyleResolver(), DefaultStyleResolver()
        assert make_cache_key("x", style, config, first) == make_cache_key("x", style, config, second)

    def test_resolver_settings_in_key(self) -> None:
        config = ParseConfig()
        style = TextStyle()
        light = DefaultStyleResolver(theme=Theme.light())
        dark = DefaultStyleResolver(theme=Theme.dark())
        pointer = DefaultStyleResolver(StyleOptions(link_cursor="pointer"))
        keys = {make_cache_key("x", style, config, r) for r in (light, dark, pointer)}
        assert len(keys) == 3

    def test_resolver_without_fingerprint_not_keyed(self) -> None:
        class PlainResolver(DefaultStyleResolver):
            cache_key = None

        assert make_cache_key("x", TextStyle(), ParseConfig(), PlainResolver()) is None

    def test_stable_for_equal_inputs(self) -> None:
        resolver = DefaultStyleResolver()
        config = ParseConfig()
        assert make_cache_key("x", TextStyle(font_size=1.0), config, resolver) == make_cache_key(
            "x", TextStyle(font_size=1.0), config, resolver
        )
