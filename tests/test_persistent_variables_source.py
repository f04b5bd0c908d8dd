"""Tests for PersistentVariablesSource and refresh triggers.

Python 3.13+.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from smartstrings import DuplicateKeyError, SmartFormatter
from smartstrings.diagnostics import ResolutionFailureError
from smartstrings.extensions import PersistentVariablesSource
from smartstrings.variables import (
    BoolVariable,
    IntVariable,
    NestedVariablesGroup,
    ObjectVariable,
    RefreshSubscription,
    StringVariable,
    UpdateBatch,
    VariablesGroup,
)


@pytest.fixture
def source(smart: SmartFormatter, batch: UpdateBatch) -> PersistentVariablesSource:
    """Source with a "global" group, registered with the shared engine."""
    further = VariablesGroup([("value", IntVariable(7, batch=batch))])
    nested = VariablesGroup(
        [
            ("my-nested-int", IntVariable(1, batch=batch)),
            ("further", NestedVariablesGroup(further, batch=batch)),
        ]
    )
    group = VariablesGroup(
        [
            ("myInt", IntVariable(9999, batch=batch)),
            ("apple count", IntVariable(10, batch=batch)),
            ("door-open", BoolVariable(True, batch=batch)),
            ("player", StringVariable("Ada", batch=batch)),
            ("nested", NestedVariablesGroup(nested, batch=batch)),
        ]
    )
    persistent = PersistentVariablesSource()
    persistent["global"] = group
    persistent["npc"] = VariablesGroup(
        [("emily", ObjectVariable(SimpleNamespace(Name="Emily", Mood="happy"), batch=batch))]
    )
    smart.add_source(persistent)
    return persistent


class TestResolution:
    """Selectors into persistent groups."""

    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("{global.myInt}", "9999"),
            ("{global.myint:N0}", "9,999"),
            ("{global.apple-count} {global.apple-count:p:apple|apples}", "10 apples"),
            ("The door is {global.door-open:open|closed}", "The door is open"),
            ("{npc.emily.Name} is {npc.emily.Mood}", "Emily is happy"),
            ("{global.nested.my-nested-int}", "1"),
            ("{global.nested.further.value}", "7"),
            ("{GLOBAL.PLAYER}", "Ada"),
        ],
    )
    def test_table(
        self, smart: SmartFormatter, source: PersistentVariablesSource, template: str, expected: str
    ) -> None:
        """Group and member names ignore case; values keep formatting."""
        assert smart.format(template) == expected

    def test_arguments_still_resolve(
        self, smart: SmartFormatter, source: PersistentVariablesSource
    ) -> None:
        """Persistent groups sit beside the call's arguments."""
        assert smart.format("{0} and {global.player}", "Bob") == "Bob and Ada"

    def test_unknown_member(self, smart: SmartFormatter, source: PersistentVariablesSource) -> None:
        """A missing member is an unresolved selector."""
        with pytest.raises(ResolutionFailureError):
            smart.format("{global.missing}")


class TestTriggers:
    """format_with_cache() reports the variables a template read."""

    def test_triggers_in_read_order(
        self, smart: SmartFormatter, source: PersistentVariablesSource
    ) -> None:
        """Each variable is reported once, in first-read order."""
        group = source["global"]
        result = smart.format_with_cache("{global.player} {global.myInt} {global.player}")

        assert result.triggers == (group["player"], group["myInt"])

    def test_nested_path(self, smart: SmartFormatter, source: PersistentVariablesSource) -> None:
        """Every group variable on the path is a trigger."""
        result = smart.format_with_cache("{global.nested.further.value}")

        assert len(result.triggers) == 3

    def test_triggers_reset_per_call(
        self, smart: SmartFormatter, source: PersistentVariablesSource
    ) -> None:
        """Triggers describe the latest evaluation only."""
        template = "{0:{global.player}|nobody}"

        assert len(smart.format_with_cache(template, True).triggers) == 1
        assert smart.format_with_cache(template, False).triggers == ()

    def test_refresh_on_change(
        self, smart: SmartFormatter, source: PersistentVariablesSource, batch: UpdateBatch
    ) -> None:
        """A subscription on the triggers re-formats after a change."""
        template = "{global.player} has {global.myInt} gold"
        texts: list[str] = []
        result = smart.format_with_cache(template)
        texts.append(result.text)

        def refresh() -> None:
            texts.append(smart.format(template))

        subscription = RefreshSubscription(refresh, result.triggers, batch=batch)
        group = source["global"]
        with batch.scope():
            group["player"].value = "Lin"  # type: ignore[attr-defined]
            group["myInt"].value = 5  # type: ignore[attr-defined]
        subscription.close()

        assert texts == ["Ada has 9999 gold", "Lin has 5 gold"]


class TestRegistry:
    """Mapping behavior of the source."""

    def test_case_insensitive_names(self) -> None:
        """Group names ignore case and normalize whitespace."""
        source = PersistentVariablesSource()
        group = VariablesGroup()
        source["my group"] = group

        assert source["MY-GROUP"] is group
        assert "My Group" in source
        assert list(source) == ["my-group"]

    def test_duplicate_rejected(self) -> None:
        """A name can be added once."""
        source = PersistentVariablesSource()
        source.add("g", VariablesGroup())

        with pytest.raises(DuplicateKeyError, match="already exists"):
            source.add("G", VariablesGroup())

    def test_invalid_group(self) -> None:
        """Only objects with try_get_value() are groups."""
        with pytest.raises(TypeError, match="try_get_value"):
            PersistentVariablesSource().add("g", {"a": 1})  # type: ignore[arg-type]

    def test_remove(self) -> None:
        """remove reports whether the group existed."""
        source = PersistentVariablesSource()
        source["g"] = VariablesGroup()

        assert source.remove("g") is True
        assert source.remove("g") is False
        assert len(source) == 0
        assert source.try_get_value("") is None
