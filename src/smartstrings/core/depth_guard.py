"""Depth limiting for recursive evaluation.

Nested formats (list items, conditional branches, registered templates)
re-enter the evaluator. The parser is iterative, so only evaluation needs
a guard against stack overflow.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from smartstrings.constants import MAX_DEPTH
from smartstrings.diagnostics import DepthLimitExceededError
from smartstrings.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager tracking evaluation depth.

    Usage:
        guard = DepthGuard(max_depth=settings.max_depth)
        with guard:
            self._format_items(nested_format, info)

    Mutable by necessity: current_depth changes on every enter/exit.
    One guard belongs to one top-level format() call.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Checks the limit before incrementing: __exit__ does not run when
        __enter__ raises, so the counter must stay untouched on failure.
        """
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """Check if depth limit has been reached."""
        return self.current_depth >= self.max_depth

    def check(self) -> None:
        """Raise if entering one more level would exceed the limit.

        Raises:
            DepthLimitExceededError: If depth limit reached
        """
        if self.is_exceeded():
            raise DepthLimitExceededError(ErrorTemplate.max_depth_exceeded(self.max_depth))


def depth_clamp(requested_depth: int, reserve_frames: int = 50, frames_per_level: int = 8) -> int:
    """Clamp requested depth against Python recursion limit.

    One evaluation level costs several Python frames (placeholder,
    formatter dispatch, nested format), so the limit is divided by
    frames_per_level. Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)
        frames_per_level: Python frames consumed per evaluation level (default: 8)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(100)  # OK, 950 // 8 == 118
        100
        >>> depth_clamp(500)  # Exceeds limit, clamped
        118
    """
    max_safe_depth = (sys.getrecursionlimit() - reserve_frames) // frames_per_level
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
