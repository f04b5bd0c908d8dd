"""Format cache tests.

Validates CacheConfig, FormatCache LRU behavior, and how SmartFormatter
uses the cache: one parse per template, invalidation on registration and
on parse-relevant settings.
"""

from types import SimpleNamespace

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from smartstrings import create_default_smart_format
from smartstrings.constants import DEFAULT_CACHE_SIZE
from smartstrings.extensions import TemplateFormatter
from smartstrings.runtime import CacheConfig, FormatCache, FormatCacheEntry
from smartstrings.syntax import Parser


class TestCacheConfig:
    """CacheConfig construction and validation."""

    def test_defaults(self) -> None:
        """Enabled with the default size."""
        config = CacheConfig()

        assert config.size == DEFAULT_CACHE_SIZE
        assert config.enabled is True

    @pytest.mark.parametrize("size", [0, -1])
    def test_size_must_be_positive(self, size: int) -> None:
        """Non-positive sizes are rejected."""
        with pytest.raises(ValueError, match="size must be positive"):
            CacheConfig(size=size)

    def test_maxsize_reported(self) -> None:
        """The configured size shows up in stats."""
        smart = create_default_smart_format(cache=CacheConfig(size=200))

        assert smart.get_cache_stats()["maxsize"] == 200


class TestFormatCache:
    """FormatCache on its own."""

    def test_get_or_parse_parses_once(self) -> None:
        """The parse callable runs on a miss only."""
        cache = FormatCache(maxsize=4)
        parser = Parser()
        calls: list[str] = []

        def parse() -> object:
            calls.append("parse")
            return parser.parse("{0}")

        first = cache.get_or_parse("{0}", (), parse)  # type: ignore[arg-type]
        second = cache.get_or_parse("{0}", (), parse)  # type: ignore[arg-type]

        assert first is second
        assert calls == ["parse"]
        assert cache.hits == 1
        assert cache.misses == 1

    def test_fingerprint_is_part_of_key(self) -> None:
        """Same text under different settings is a different entry."""
        cache = FormatCache()
        parser = Parser()

        a = cache.get_or_parse("x", ("a",), lambda: parser.parse("x"))
        b = cache.get_or_parse("x", ("b",), lambda: parser.parse("x"))

        assert a is not b
        assert len(cache) == 2

    def test_lru_eviction(self) -> None:
        """The least recently used entry is evicted first."""
        cache = FormatCache(maxsize=2)
        parser = Parser()

        cache.get_or_parse("a", (), lambda: parser.parse("a"))
        cache.get_or_parse("b", (), lambda: parser.parse("b"))
        cache.get_or_parse("a", (), lambda: parser.parse("a"))
        cache.get_or_parse("c", (), lambda: parser.parse("c"))

        misses = cache.misses
        cache.get_or_parse("a", (), lambda: parser.parse("a"))
        assert cache.misses == misses
        cache.get_or_parse("b", (), lambda: parser.parse("b"))
        assert cache.misses == misses + 1

    def test_stats_and_clear(self) -> None:
        """hit_rate is a percentage; clear resets everything."""
        cache = FormatCache()
        parser = Parser()
        for _ in range(4):
            cache.get_or_parse("t", (), lambda: parser.parse("t"))

        stats = cache.get_stats()
        assert stats["hits"] == 3
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 75.0

        cache.clear()
        assert cache.get_stats() == {
            "size": 0,
            "maxsize": 1000,
            "hits": 0,
            "misses": 0,
            "hit_rate": 0.0,
        }

    def test_parse_error_not_cached(self) -> None:
        """A failing parse stores nothing."""
        cache = FormatCache()

        def fail() -> object:
            msg = "boom"
            raise ValueError(msg)

        with pytest.raises(ValueError, match="boom"):
            cache.get_or_parse("t", (), fail)  # type: ignore[arg-type]
        assert len(cache) == 0

    def test_invalid_maxsize(self) -> None:
        """maxsize must be positive."""
        with pytest.raises(ValueError, match="maxsize must be positive"):
            FormatCache(maxsize=0)

    def test_entry_triggers_deduplicated(self) -> None:
        """add_trigger keeps first-read order without duplicates."""
        entry = FormatCacheEntry(Parser().parse("x"))
        first, second = object(), object()

        entry.add_trigger(first)
        entry.add_trigger(second)
        entry.add_trigger(first)

        assert entry.variable_triggers == [first, second]


class TestEngineCache:
    """SmartFormatter's use of the cache."""

    def test_template_parsed_once(self) -> None:
        """N formats of one template parse it once."""
        smart = create_default_smart_format()

        for value in range(5):
            smart.format("{0} {0:p:item|items}", value)

        stats = smart.get_cache_stats()
        assert smart.parse_count == 1
        assert stats["parses"] == 1
        assert stats["misses"] == 1
        assert stats["hits"] == 4

    def test_arguments_not_part_of_key(self) -> None:
        """Different arguments reuse the same entry."""
        smart = create_default_smart_format()

        first = smart.format_with_cache("{0}", "a")
        second = smart.format_with_cache("{0}", "b")

        assert first.text == "a"
        assert second.text == "b"
        assert first.cache is second.cache

    def test_cache_disabled(self) -> None:
        """With caching disabled every call parses."""
        smart = create_default_smart_format(cache=CacheConfig(enabled=False))

        smart.format("{0}", 1)
        smart.format("{0}", 1)

        stats = smart.get_cache_stats()
        assert smart.parse_count == 2
        assert stats["size"] == 0
        assert stats["maxsize"] == 0

    def test_registration_clears_cache(self) -> None:
        """Adding a formatter changes how templates parse, so the cache is dropped."""
        smart = create_default_smart_format()
        smart.format("{0:template:x}", 1)

        smart.add_formatter(TemplateFormatter())
        smart.format("{0:template:x}", 1)

        assert smart.parse_count == 2

    def test_parse_settings_change_key(self) -> None:
        """Changing a parse-relevant setting reparses."""
        smart = create_default_smart_format()
        assert smart.format("a\\tb") == "a\tb"

        smart.settings.convert_character_string_literals = False

        assert smart.format("a\\tb") == "a\\tb"
        assert smart.parse_count == 2

    def test_format_settings_keep_key(self) -> None:
        """Changing the format error action does not reparse."""
        from smartstrings import ErrorAction

        smart = create_default_smart_format()
        smart.format("{Missing}", None)
        smart.settings.format_error_action = ErrorAction.MAINTAIN_TOKENS

        assert smart.format("{Missing}", None) == "{Missing}"
        assert smart.parse_count == 1

    def test_clear_cache(self) -> None:
        """clear_cache forces a reparse."""
        smart = create_default_smart_format()
        smart.format("{0}", 1)

        smart.clear_cache()
        smart.format("{0}", 1)

        assert smart.parse_count == 2

    def test_lru_bound_respected(self) -> None:
        """The engine cache never exceeds its size."""
        smart = create_default_smart_format(cache=CacheConfig(size=2))

        for template in ("a{0}", "b{0}", "c{0}", "a{0}"):
            smart.format(template, 1)

        assert smart.parse_count == 4
        assert smart.get_cache_stats()["size"] == 2

    def test_reflection_memo_stored_in_entry(self) -> None:
        """Resolved member names are memoized per template."""
        smart = create_default_smart_format()

        result = smart.format_with_cache("{Name}", SimpleNamespace(Name="x"))

        assert result.text == "x"
        assert any(
            isinstance(key, tuple) and key[0] == "reflection"
            for key in result.cache.cached_objects
        )

    def test_triggers_empty_without_variables(self) -> None:
        """Templates that read no reactive variables have no triggers."""
        result = create_default_smart_format().format_with_cache("{0}", 1)

        assert result.triggers == ()


class TestCacheProperties:
    """Property-based tests for cache transparency."""

    @given(
        values=st.lists(
            st.one_of(st.integers(), st.text(max_size=10), st.none()), min_size=1, max_size=4
        )
    )
    def test_cached_equals_uncached(self, values: list[object]) -> None:
        """Cache hits and misses render the same text as an uncached engine."""
        template = " ".join(f"{{{index}}}" for index in range(len(values)))
        event(f"arg_count={len(values)}")

        cached = create_default_smart_format()
        uncached = create_default_smart_format(cache=CacheConfig(enabled=False))

        miss = cached.format(template, *values)
        hit = cached.format(template, *values)
        plain = uncached.format(template, *values)

        assert miss == hit == plain
