"""Tests for core/depth_guard.py.

Tests the DepthGuard context manager, explicit check(), depth_clamp(),
and the limit as seen through SmartFormatter, with Hypothesis for
property-based testing.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

import pytest
from hypothesis import event, example, given, settings
from hypothesis import strategies as st

from smartstrings import SmartFormatter, SmartSettings
from smartstrings.constants import MAX_DEPTH
from smartstrings.core.depth_guard import DepthGuard, depth_clamp
from smartstrings.diagnostics import DepthLimitExceededError, DiagnosticCode, FormattingError

# ============================================================================
# Construction
# ============================================================================


class TestDepthGuardConstruction:
    """Test DepthGuard construction and defaults."""

    def test_default_construction(self) -> None:
        """DepthGuard uses MAX_DEPTH by default."""
        guard = DepthGuard()

        assert guard.max_depth == MAX_DEPTH
        assert guard.current_depth == 0

    def test_custom_max_depth(self) -> None:
        """DepthGuard accepts custom max_depth."""
        guard = DepthGuard(max_depth=50)

        assert guard.max_depth == 50
        assert guard.depth == 0

    def test_post_init_clamps_max_depth(self) -> None:
        """__post_init__ clamps max_depth against recursion limit."""
        limit = sys.getrecursionlimit()
        guard = DepthGuard(max_depth=limit + 1000)

        assert guard.max_depth == (limit - 50) // 8


# ============================================================================
# Context Manager
# ============================================================================


class TestDepthGuardContextManager:
    """Test DepthGuard as context manager."""

    def test_context_manager_nested(self) -> None:
        """Nested context managers increment depth correctly."""
        guard = DepthGuard(max_depth=10)

        with guard:
            assert guard.current_depth == 1
            with guard:
                assert guard.current_depth == 2

        assert guard.current_depth == 0

    def test_context_manager_raises_on_exceeded(self) -> None:
        """Entering past max_depth raises DepthLimitExceededError."""
        guard = DepthGuard(max_depth=3)

        with guard, guard, guard:  # noqa: SIM117
            with pytest.raises(DepthLimitExceededError) as exc_info:
                with guard:
                    pass

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.MAX_DEPTH_EXCEEDED
        assert "3" in str(exc_info.value)

    def test_depth_restored_on_error(self) -> None:
        """Depth is restored even if an exception occurs in the block."""
        guard = DepthGuard(max_depth=10)
        test_error_msg = "Test error"

        with guard:
            try:
                with guard:
                    raise ValueError(test_error_msg)
            except ValueError:
                pass
            assert guard.current_depth == 1

        assert guard.current_depth == 0

    def test_state_not_corrupted_on_enter_failure(self) -> None:
        """current_depth unchanged when __enter__ raises.

        __exit__ is never called for a failed __enter__, so the check must
        run before the increment.
        """
        guard = DepthGuard(max_depth=2)

        with guard, guard:
            with pytest.raises(DepthLimitExceededError), guard:
                pass
            assert guard.current_depth == 2

        assert guard.current_depth == 0

    def test_error_is_formatting_error(self) -> None:
        """The limit error goes through the format error policy."""
        guard = DepthGuard(max_depth=1)

        with guard, pytest.raises(FormattingError), guard:
            pass


# ---------------------------------------------------------------------------
# depth_clamp
# ---------------------------------------------------------------------------


class TestDepthClamp:
    """Test depth_clamp() utility function."""

    def test_returns_value_within_limit(self) -> None:
        """depth_clamp returns requested depth when within limit."""
        assert depth_clamp(50) == 50

    def test_custom_frames_per_level(self) -> None:
        """depth_clamp divides the usable frames by frames_per_level."""
        limit = sys.getrecursionlimit()

        assert depth_clamp(limit, reserve_frames=100, frames_per_level=1) == limit - 100

    def test_logs_warning_on_clamp(self, caplog: pytest.LogCaptureFixture) -> None:
        """depth_clamp logs warning when clamping occurs."""
        with caplog.at_level(logging.WARNING):
            depth_clamp(sys.getrecursionlimit())

        assert any("Clamping" in record.message for record in caplog.records)


# ============================================================================
# Engine integration
# ============================================================================


class TestEngineDepth:
    """settings.max_depth bounds nested formats."""

    def test_max_depth_must_be_positive(self) -> None:
        """Zero or negative limits are rejected."""
        with pytest.raises(ValueError, match="max_depth must be positive"):
            SmartSettings(max_depth=0)

    def test_nested_lists_within_limit(self, smart: SmartFormatter) -> None:
        """Ordinary nesting stays far below the limit."""
        assert smart.format("{0:{:{}|,}|;}", [[1, 2], [3]]) == "1,2;3"

    def test_nested_lists_past_limit(self, smart: SmartFormatter) -> None:
        """A small limit stops deep nesting."""
        smart.settings.max_depth = 2

        with pytest.raises(DepthLimitExceededError):
            smart.format("{0:{:{:{}|,}|,}|,}", [[[1]]])


# ============================================================================
# Hypothesis Property-Based Tests
# ============================================================================


@given(max_depth=st.integers(min_value=1, max_value=100))
def test_property_context_manager_enforces_limit(max_depth: int) -> None:
    """Property: context manager enforces max_depth limit exactly.

    For any max_depth in [1, 100]:
    - Nesting max_depth times succeeds
    - Nesting max_depth + 1 times raises DepthLimitExceededError
    """
    event(f"max_depth={max_depth}")
    guard = DepthGuard(max_depth=max_depth)

    def nest(remaining: int) -> None:
        if remaining == 0:
            return
        with guard:
            nest(remaining - 1)

    nest(max_depth)
    assert guard.current_depth == 0

    with pytest.raises(DepthLimitExceededError):
        nest(max_depth + 1)
    assert guard.current_depth == 0


@given(
    max_depth=st.integers(min_value=1, max_value=100),
    target_depth=st.integers(min_value=0, max_value=99),
)
def test_property_check_consistent_with_context_manager(
    max_depth: int, target_depth: int,
) -> None:
    """Property: check() and context manager agree on limit enforcement."""
    target_depth = min(target_depth, max_depth)
    event(f"boundary={'at_limit' if target_depth == max_depth else 'below'}")

    guard = DepthGuard(max_depth=max_depth)
    guard.current_depth = target_depth

    if target_depth >= max_depth:
        with pytest.raises(DepthLimitExceededError):
            guard.check()
        with pytest.raises(DepthLimitExceededError), guard:
            pass
    else:
        guard.check()
        with guard:
            pass


@given(
    requested=st.integers(min_value=1, max_value=100000),
    reserve=st.integers(min_value=10, max_value=200),
)
@example(requested=50, reserve=50)
@example(requested=99999, reserve=50)
@settings(max_examples=200)
def test_property_depth_clamp_never_exceeds_limit(requested: int, reserve: int) -> None:
    """Property: clamped depth times frames per level fits in the recursion limit."""
    event(f"requested={'within' if requested < 100 else 'excessive'}")

    result = depth_clamp(requested, reserve_frames=reserve)

    assert result * 8 + reserve <= sys.getrecursionlimit()
    assert result <= requested
