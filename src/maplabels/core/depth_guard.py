"""Nesting limits for recursive walks over expression trees.

Each replacement step nests four levels deeper, so a large budget or a
hand-written style can yield trees deep enough to exhaust the Python
stack. Parsing, visiting and evaluating all enter one DepthGuard per tree
level, and the guard raises DepthLimitExceededError before the interpreter
would raise RecursionError.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from maplabels.constants import MAX_DEPTH
from maplabels.diagnostics import DepthLimitExceededError, ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# Python frames spent per tree level: the walk method, the operator or
# visit method, a generator expression and an argument helper.
_FRAMES_PER_LEVEL = 4


@dataclass(slots=True)
class DepthGuard:
    """Tracks the tree level a recursive walk is at.

    Enter once per level:

        with self._guard:
            value = self._eval(child, scope)

    One guard serves one walk at a time; give each evaluator, parser call
    or visitor its own.

    Attributes:
        max_depth: Deepest level that may be entered
        current_depth: Level of the node being walked, 0 outside a walk
        deepest: Deepest level entered so far, which is the depth of the
            tree once a complete walk has finished
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)
    deepest: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # __exit__ does not run when __enter__ raises; check before counting.
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.expression_depth_exceeded(self.max_depth)
            )
        self.current_depth += 1
        self.deepest = max(self.deepest, self.current_depth)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Lower a nesting limit that the Python stack could not reach.

    Every tree level costs several frames, so the usable depth is the
    recursion limit, less reserve_frames for the caller, divided by the
    frames spent per level.

    Args:
        requested_depth: Desired maximum tree depth
        reserve_frames: Frames left for the code that starts the walk

    Returns:
        requested_depth, or the largest depth the stack can hold

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(200)
        200
        >>> depth_clamp(500)
        237
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // _FRAMES_PER_LEVEL)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Expression depth limit %d needs more stack than the recursion limit "
            "(%d) allows; lowered to %d",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
