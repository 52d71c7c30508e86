"""Core utilities shared across syntax and runtime layers.

This package provides foundational utilities that both the syntax layer
(tree walking, serialization) and runtime layer (reference evaluation)
depend on. Isolating them here keeps the dependency graph clean:

    core <- syntax <- labels, runtime

Exports:
    DepthGuard: Context manager for recursion depth limiting
    depth_clamp: Clamp a depth against the interpreter recursion limit

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp

__all__ = ["DepthGuard", "depth_clamp"]
