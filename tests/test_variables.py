"""Tests for reactive variables, variable groups and update batching.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest

from smartstrings import DuplicateKeyError
from smartstrings.variables import (
    BoolVariable,
    FloatVariable,
    IntVariable,
    NestedVariablesGroup,
    ObjectVariable,
    ObservableVariable,
    SourceVariable,
    StringVariable,
    UpdateBatch,
    VariableGroup,
    VariablesGroup,
    default_batch,
    normalize_variable_name,
    update_scope,
)

# ============================================================================
# VARIABLES
# ============================================================================


class TestVariable:
    """Value changes and notifications."""

    def test_defaults(self, batch: UpdateBatch) -> None:
        """Typed variables start from their zero value."""
        assert IntVariable(batch=batch).value == 0
        assert FloatVariable(batch=batch).value == 0.0
        assert StringVariable(batch=batch).value == ""
        assert BoolVariable(batch=batch).value is False
        assert ObjectVariable(batch=batch).value is None
        assert NestedVariablesGroup(batch=batch).value is None

    def test_change_fires_once(self, batch: UpdateBatch) -> None:
        """Each unequal assignment fires value_changed with the variable."""
        score = IntVariable(10, batch=batch)
        seen: list[object] = []
        score.value_changed.connect(seen.append)

        score.value = 11
        score.value = 12

        assert seen == [score, score]
        assert score.value == 12

    def test_equal_value_is_silent(self, batch: UpdateBatch) -> None:
        """Assigning an equal value fires nothing."""
        name = StringVariable("Ada", batch=batch)
        seen: list[object] = []
        name.value_changed.connect(seen.append)

        name.value = "Ada"

        assert seen == []

    def test_protocols(self, batch: UpdateBatch) -> None:
        """Variables are observable source variables."""
        variable = IntVariable(1, batch=batch)

        assert isinstance(variable, SourceVariable)
        assert isinstance(variable, ObservableVariable)
        assert variable.get_source_value(None) == 1

    def test_str_and_repr(self, batch: UpdateBatch) -> None:
        """str() is the value's; repr() names the class."""
        variable = FloatVariable(1.5, batch=batch)

        assert str(variable) == "1.5"
        assert repr(variable) == "FloatVariable(1.5)"

    def test_default_batch_shared(self) -> None:
        """Variables without a batch share the default one."""
        assert IntVariable().batch is default_batch()


# ============================================================================
# UPDATE BATCH
# ============================================================================


class TestUpdateBatch:
    """Coalescing of change notifications."""

    def test_scope_coalesces(self, batch: UpdateBatch) -> None:
        """Three changes in a scope: no value_changed, one end_update."""
        hp, mp, gold = (IntVariable(0, batch=batch) for _ in range(3))
        changes: list[object] = []
        flushes: list[tuple[object, ...]] = []
        for variable in (hp, mp, gold):
            variable.value_changed.connect(changes.append)
        batch.end_update.connect(flushes.append)

        with batch.scope():
            hp.value = 50
            mp.value = 20
            gold.value = 7

        assert changes == []
        assert flushes == [(hp, mp, gold)]

    def test_outside_scope_fires_each(self, batch: UpdateBatch) -> None:
        """Without a scope every change fires on its own."""
        variables = [IntVariable(0, batch=batch) for _ in range(3)]
        changes: list[object] = []
        for variable in variables:
            variable.value_changed.connect(changes.append)

        for variable in variables:
            variable.value = 1

        assert len(changes) == 3

    def test_nested_scopes_flush_once(self, batch: UpdateBatch) -> None:
        """Only the outermost exit fires end_update."""
        score = IntVariable(0, batch=batch)
        flushes: list[tuple[object, ...]] = []
        batch.end_update.connect(flushes.append)

        with update_scope(batch):
            score.value = 1
            with update_scope(batch):
                score.value = 2
                assert batch.depth == 2
            assert flushes == []

        assert flushes == [(score,)]
        assert not batch.is_updating

    def test_changed_recorded_once(self, batch: UpdateBatch) -> None:
        """A variable changed twice appears once."""
        score = IntVariable(0, batch=batch)
        flushes: list[tuple[object, ...]] = []
        batch.end_update.connect(flushes.append)

        with batch.scope():
            score.value = 1
            score.value = 2

        assert flushes == [(score,)]

    def test_empty_scope(self, batch: UpdateBatch) -> None:
        """end_update fires even when nothing changed."""
        flushes: list[tuple[object, ...]] = []
        batch.end_update.connect(flushes.append)

        with batch.scope():
            pass

        assert flushes == [()]

    def test_exception_releases_scope(self, batch: UpdateBatch) -> None:
        """The scope closes and flushes when the block raises."""
        score = IntVariable(0, batch=batch)
        flushes: list[tuple[object, ...]] = []
        batch.end_update.connect(flushes.append)

        with pytest.raises(RuntimeError, match="boom"), batch.scope():
            score.value = 5
            msg = "boom"
            raise RuntimeError(msg)

        assert batch.depth == 0
        assert flushes == [(score,)]

    def test_unbalanced_end_warns(
        self, batch: UpdateBatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """end() without begin() is logged and ignored."""
        with caplog.at_level(logging.WARNING, logger="smartstrings.variables.batch"):
            batch.end()

        assert batch.depth == 0
        assert "without a matching begin" in caplog.text

    def test_begin_end(self, batch: UpdateBatch) -> None:
        """The manual pair behaves like scope()."""
        score = IntVariable(0, batch=batch)
        flushes: list[tuple[object, ...]] = []
        batch.end_update.connect(flushes.append)

        batch.begin()
        score.value = 3
        batch.end()

        assert flushes == [(score,)]


# ============================================================================
# VARIABLES GROUP
# ============================================================================


class TestNormalizeVariableName:
    """Whitespace handling in names."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("myVar", "myVar"),
            ("my var", "my-var"),
            (" my   Var    ", "-my-Var-"),
            ("a\tb\nc", "a-b-c"),
            ("already-dashed", "already-dashed"),
        ],
    )
    def test_table(self, name: str, expected: str) -> None:
        """Runs of whitespace become one "-"."""
        assert normalize_variable_name(name) == expected

    def test_empty(self) -> None:
        """Empty names are rejected."""
        with pytest.raises(ValueError, match="not a valid variable name"):
            normalize_variable_name("")


class TestVariablesGroup:
    """Mapping behavior of VariablesGroup."""

    def test_add_and_lookup(self, batch: UpdateBatch) -> None:
        """Lookups normalize whitespace and ignore case."""
        group = VariablesGroup()
        variable = IntVariable(1, batch=batch)

        group["hit points"] = variable

        assert list(group) == ["hit-points"]
        assert group["hit-points"] is variable
        assert group["HIT points"] is variable
        assert "hit points" in group
        assert "mana" not in group
        assert 3 not in group

    def test_initial_pairs(self, batch: UpdateBatch) -> None:
        """The constructor adds pairs in order."""
        group = VariablesGroup([("a", IntVariable(1, batch=batch)), ("b", IntVariable(2, batch=batch))])

        assert list(group) == ["a", "b"]
        assert len(group) == 2

    def test_duplicate_rejected(self, batch: UpdateBatch) -> None:
        """Names colliding after normalization raise DuplicateKeyError."""
        group = VariablesGroup([("my var", IntVariable(1, batch=batch))])

        with pytest.raises(DuplicateKeyError) as excinfo:
            group["MY   VAR"] = IntVariable(2, batch=batch)

        assert excinfo.value.key == "MY-VAR"
        assert isinstance(excinfo.value, KeyError)

    def test_invalid_values(self) -> None:
        """Only source variables can be stored; names must be non-empty."""
        group = VariablesGroup()

        with pytest.raises(TypeError, match="get_source_value"):
            group.add("x", 5)  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="not a valid variable name"):
            group.add("", IntVariable())

    def test_remove_and_readd(self, batch: UpdateBatch) -> None:
        """A removed name can be added again."""
        group = VariablesGroup([("x", IntVariable(1, batch=batch))])

        assert group.remove("X") is True
        assert group.remove("X") is False
        group["x"] = IntVariable(2, batch=batch)

        assert group["x"].get_source_value(None) == 2

    def test_delete_missing(self) -> None:
        """del of an unknown name raises KeyError."""
        with pytest.raises(KeyError):
            del VariablesGroup()["nope"]

    def test_clear(self, batch: UpdateBatch) -> None:
        """MutableMapping.clear empties the group."""
        group = VariablesGroup([("a", IntVariable(batch=batch)), ("b", IntVariable(batch=batch))])

        group.clear()

        assert len(group) == 0

    def test_try_get_value(self, batch: UpdateBatch) -> None:
        """case_sensitive also requires the stored case."""
        variable = IntVariable(1, batch=batch)
        group = VariablesGroup([("Gold", variable)])

        assert group.try_get_value("gold") is variable
        assert group.try_get_value("gold", case_sensitive=True) is None
        assert group.try_get_value("Gold", case_sensitive=True) is variable
        assert group.try_get_value("") is None
        assert group.try_get_value("silver") is None

    def test_identity_equality(self, batch: UpdateBatch) -> None:
        """Groups with the same members are still different groups."""
        variable = IntVariable(1, batch=batch)
        first = VariablesGroup([("a", variable)])
        second = VariablesGroup([("a", variable)])

        assert first != second
        assert first == first  # noqa: PLR0124
        assert len({first, second}) == 2

    def test_group_protocols(self) -> None:
        """A group is a variable group and its own source value."""
        group = VariablesGroup()

        assert isinstance(group, VariableGroup)
        assert group.get_source_value(None) is group

    def test_repr(self, batch: UpdateBatch) -> None:
        """repr lists the names."""
        assert repr(VariablesGroup([("a b", IntVariable(batch=batch))])) == "VariablesGroup(['a-b'])"
