"""Core utilities shared across syntax, runtime and variables layers.

Exports:
    DepthGuard: Context manager for recursion depth limiting
    Event: Synchronous notification hook
    depth_clamp: Clamp a depth limit against the interpreter recursion limit

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp
from .events import Event

__all__ = ["DepthGuard", "Event", "depth_clamp"]
