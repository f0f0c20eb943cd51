"""Nesting depth limits for recursion protection.

Lists, tuples, records and block comments are lexed recursively, so a
deeply nested input consumes interpreter stack proportional to its depth.
The lexer enforces an explicit depth limit; this module keeps that limit
below the point where Python itself would raise RecursionError.

Thread-safe: pure functions, no module state.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

from luxlex.constants import FRAMES_PER_LEVEL

__all__ = ["depth_clamp"]

logger = logging.getLogger(__name__)


def depth_clamp(
    requested_depth: int,
    *,
    frames_per_level: int = FRAMES_PER_LEVEL,
    reserve_frames: int = 50,
) -> int:
    """Clamp requested nesting depth against the Python recursion limit.

    Validates requested depth against sys.getrecursionlimit() to prevent
    RecursionError on systems with constrained stack limits. Logs warning
    if clamping occurs.

    Args:
        requested_depth: Desired maximum nesting depth
        frames_per_level: Interpreter frames consumed per nesting level
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary (never below 1)

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(100)  # 100 * 8 frames fit in 950
        100
        >>> depth_clamp(500)  # Clamped to 950 // 8
        118
    """
    available = sys.getrecursionlimit() - reserve_frames
    max_safe_depth = max(1, available // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested nesting depth %d exceeds what the Python recursion limit (%d) "
            "allows. Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
