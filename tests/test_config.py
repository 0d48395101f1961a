"""Tests for ContextVar-based parse configuration.

Validates defaults, validation, context manager behavior and thread isolation.
"""

from threading import Thread

import pytest

from runmark import (
    ConfigError,
    ParseConfig,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)


class TestParseConfigDataclass:
    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.max_nesting_depth == 2
        assert config.max_link_depth == 1
        assert config.default_link_scheme == "https://"
        assert config.fast_path_enabled is True
        assert config.nested_links_enabled is False

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.max_nesting_depth = 5  # type: ignore[misc]

    @pytest.mark.parametrize("field", ["max_nesting_depth", "max_link_depth"])
    def test_negative_depth_rejected(self, field: str) -> None:
        with pytest.raises(ConfigError, match=field):
            ParseConfig(**{field: -1})

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"max_nesting_depth": 4, "theme": "dark"})
        assert config.max_nesting_depth == 4
        assert config.max_link_depth == 1

    def test_from_dict_validates(self) -> None:
        with pytest.raises(ConfigError):
            ParseConfig.from_dict({"max_link_depth": -2})


class TestContextFunctions:
    def test_get_returns_default(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        set_parse_config(ParseConfig(max_nesting_depth=5))
        try:
            assert get_parse_config().max_nesting_depth == 5
        finally:
            reset_parse_config()
        assert get_parse_config().max_nesting_depth == 2

    def test_context_manager_restores_previous(self) -> None:
        outer = ParseConfig(max_nesting_depth=3)
        with parse_config_context(outer):
            with parse_config_context(ParseConfig(max_nesting_depth=1)):
                assert get_parse_config().max_nesting_depth == 1
            assert get_parse_config() is outer
        assert get_parse_config() == ParseConfig()

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(max_nesting_depth=7)):
                raise RuntimeError("boom")
        assert get_parse_config().max_nesting_depth == 2


class TestConfigAffectsParsing:
    def test_depth_one(self) -> None:
        with parse_config_context(ParseConfig(max_nesting_depth=1)):
            runs = parse("**a *b* a**")
        assert [r.text for r in runs] == ["a *b* a"]

    def test_link_scheme(self) -> None:
        with parse_config_context(ParseConfig(default_link_scheme="http://")):
            link = parse("[a](b.com)")[0].content
        assert link.url == "http://b.com"


class TestThreadIsolation:
    def test_threads_see_their_own_config(self) -> None:
        results: dict[str, int] = {}

        def worker(name: str, depth: int) -> None:
            with parse_config_context(ParseConfig(max_nesting_depth=depth)):
                results[name] = get_parse_config().max_nesting_depth

        threads = [Thread(target=worker, args=(f"t{i}", i)) for i in range(1, 5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {"t1": 1, "t2": 2, "t3": 3, "t4": 4}
        assert get_parse_config().max_nesting_depth == 2

