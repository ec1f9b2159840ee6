"""Segment tree builders.

Two strategies produce the same :class:`ArcLengthParameterization` shape:

``adaptive`` (default)
    Recursive bisection driven by the adapter's length bounds. A segment
    becomes a leaf once half the width of its bound interval fits the
    tolerance budget; otherwise both halves are built with half the budget,
    so the per-leaf errors of the whole tree sum to at most ``tolerance``.

``fixed_height``
    One global height from the curve's second-derivative bound,
    ``ceil(log2(M / (8 * tolerance)))``, then a perfectly balanced tree whose
    leaf lengths come from the midpoint rule on the adapter's speed. Simpler,
    but curves with uneven curvature get more leaves than they need.

Depth guard
-----------
Both strategies stop at ``max_depth`` (default ``DEFAULT_MAX_DEPTH`` = 48).
A node at the guard becomes a leaf with its current estimate even if that
estimate misses its budget; the event is logged at DEBUG and otherwise not
reported. Fixed-height trees are additionally capped at
``MAX_FIXED_HEIGHT`` because they are fully balanced.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Tuple

from src.utils.validators import DEFAULT_MAX_DEPTH, BuildConfig

from .adapter import (
    AdapterContractError,
    CurveAdapter,
    checked_bisect,
    checked_length_bounds,
    checked_speed,
)
from .tree import ArcLengthParameterization, Interior, Leaf, SegmentNode, tree_stats

logger = logging.getLogger(__name__)

# 2**20 leaves; a balanced tree deeper than this is not worth building.
MAX_FIXED_HEIGHT = 20


def _check_build_args(tolerance: float, max_depth: int) -> None:
    if math.isnan(tolerance):
        raise ValueError("tolerance must be a number, got NaN")
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")


# ============================================================================
# ADAPTIVE STRATEGY
# ============================================================================

def build_segment(
    adapter: CurveAdapter,
    tolerance: float,
    segment: Any,
    length_at_start: float,
    param_at_start: float,
    param_at_end: float,
    *,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Tuple[SegmentNode, float]:
    """Build the subtree for ``segment`` covering [param_at_start, param_at_end].

    Parameters
    ----------
    adapter : CurveAdapter
        Family adapter providing ``bisect`` and ``length_bounds``
    tolerance : float
        Error budget for this subtree, in length units
    segment : Any
        Opaque segment, as produced by the adapter
    length_at_start : float
        Cumulative arc length where this segment starts
    param_at_start, param_at_end : float
        Parameter range the segment represents
    depth : int
        Depth of this node (root is 0)
    max_depth : int
        Depth guard; nodes at this depth are always leaves

    Returns
    -------
    tuple
        ``(node, length_at_end)``

    Raises
    ------
    AdapterContractError
        If the adapter returns invalid bounds or halves
    """
    lower, upper = checked_length_bounds(adapter, segment)
    max_error = 0.5 * (upper - lower)
    param_at_mid = param_at_start + 0.5 * (param_at_end - param_at_start)

    leaf = (
        max_error <= tolerance
        or tolerance <= 0.0
        or param_at_start == param_at_end
        # Range too narrow to split in floating point
        or param_at_mid == param_at_start
        or param_at_mid == param_at_end
    )
    if not leaf and depth >= max_depth:
        logger.debug(
            "Depth guard hit at t=[%.17g, %.17g]: error %.3g > budget %.3g",
            param_at_start, param_at_end, max_error, tolerance
        )
        leaf = True

    if leaf:
        length_at_end = length_at_start + (lower + max_error)
        return Leaf(length_at_start, param_at_start, length_at_end, param_at_end), length_at_end

    left_segment, right_segment = checked_bisect(adapter, segment)
    half_tolerance = 0.5 * tolerance

    left, length_at_mid = build_segment(
        adapter, half_tolerance, left_segment,
        length_at_start, param_at_start, param_at_mid,
        depth=depth + 1, max_depth=max_depth,
    )
    right, length_at_end = build_segment(
        adapter, half_tolerance, right_segment,
        length_at_mid, param_at_mid, param_at_end,
        depth=depth + 1, max_depth=max_depth,
    )
    return Interior(length_at_start, left, right), length_at_end


def build(
    adapter: CurveAdapter,
    tolerance: float,
    curve: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ArcLengthParameterization:
    """Build an adaptive arc-length parameterization of ``curve`` over t in [0, 1].

    Parameters
    ----------
    adapter : CurveAdapter
        Family adapter for ``curve``
    tolerance : float
        Max absolute error of the total length; ``<= 0`` keeps the root
        bound midpoint without subdividing
    curve : Any
        Full curve, used as the root segment
    max_depth : int
        Depth guard, default 48

    Returns
    -------
    ArcLengthParameterization
        Immutable parameterization; rebuild it if the curve or tolerance changes
    """
    _check_build_args(tolerance, max_depth)

    root, total_length = build_segment(
        adapter, tolerance, curve, 0.0, 0.0, 1.0, max_depth=max_depth
    )
    if logger.isEnabledFor(logging.DEBUG):
        stats = tree_stats(root)
        logger.debug(
            "Built adaptive tree: length=%.9g leaves=%d height=%d tolerance=%.3g",
            total_length, stats.leaf_count, stats.height, tolerance
        )
    return ArcLengthParameterization(root, tolerance, "adaptive")


# ============================================================================
# FIXED-HEIGHT STRATEGY
# ============================================================================

def fixed_tree_height(
    max_second_derivative_magnitude: float,
    tolerance: float,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> int:
    """Height of the balanced tree for the fixed-height strategy.

    Notes
    -----
    ``ceil(log2(M / (8 * tolerance)))`` clamped to
    ``[0, min(max_depth, MAX_FIXED_HEIGHT)]``. Zero when ``M == 0`` (the
    speed is constant, one leaf is exact) or ``tolerance <= 0``.
    """
    height = _uncapped_height(max_second_derivative_magnitude, tolerance)
    return min(height, max_depth, MAX_FIXED_HEIGHT)


def _uncapped_height(max_second_derivative_magnitude: float, tolerance: float) -> int:
    if tolerance <= 0.0 or max_second_derivative_magnitude <= 0.0:
        return 0

    ratio = max_second_derivative_magnitude / (8.0 * tolerance)
    if ratio <= 1.0:
        return 0
    return math.ceil(math.log2(ratio))


def _build_balanced(
    adapter: CurveAdapter,
    curve: Any,
    height: int,
    length_at_start: float,
    param_at_start: float,
    param_at_end: float,
) -> Tuple[SegmentNode, float]:
    if height == 0:
        param_at_mid = param_at_start + 0.5 * (param_at_end - param_at_start)
        speed = checked_speed(adapter, curve, param_at_mid)
        length_at_end = length_at_start + speed * (param_at_end - param_at_start)
        return Leaf(length_at_start, param_at_start, length_at_end, param_at_end), length_at_end

    param_at_mid = param_at_start + 0.5 * (param_at_end - param_at_start)
    left, length_at_mid = _build_balanced(
        adapter, curve, height - 1, length_at_start, param_at_start, param_at_mid
    )
    right, length_at_end = _build_balanced(
        adapter, curve, height - 1, length_at_mid, param_at_mid, param_at_end
    )
    return Interior(length_at_start, left, right), length_at_end


def build_fixed_height(
    adapter: CurveAdapter,
    tolerance: float,
    curve: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ArcLengthParameterization:
    """Build a balanced-tree parameterization from derivative magnitudes.

    Parameters
    ----------
    adapter : CurveAdapter
        Must implement ``derivative_magnitude`` and
        ``max_second_derivative_magnitude``
    tolerance : float
        Target absolute error
    curve : Any
        Full curve over t in [0, 1]
    max_depth : int
        Height cap (also capped at MAX_FIXED_HEIGHT)

    Raises
    ------
    NotImplementedError
        If the adapter lacks the fixed-height hooks
    """
    _check_build_args(tolerance, max_depth)

    bound = float(adapter.max_second_derivative_magnitude(curve))
    if not math.isfinite(bound) or bound < 0.0:
        raise AdapterContractError(
            f"{type(adapter).__name__}.max_second_derivative_magnitude returned {bound}"
        )

    height = fixed_tree_height(bound, tolerance, max_depth)
    wanted = _uncapped_height(bound, tolerance)
    if height < wanted:
        logger.debug(
            "Height cap hit: tolerance %.3g needs height %d, building %d "
            "(max_depth=%d, MAX_FIXED_HEIGHT=%d)",
            tolerance, wanted, height, max_depth, MAX_FIXED_HEIGHT
        )
    root, total_length = _build_balanced(adapter, curve, height, 0.0, 0.0, 1.0)
    logger.debug(
        "Built fixed-height tree: length=%.9g height=%d leaves=%d tolerance=%.3g",
        total_length, height, 2 ** height, tolerance
    )
    return ArcLengthParameterization(root, tolerance, "fixed_height")


def build_with_config(
    adapter: CurveAdapter,
    curve: Any,
    config: Optional[BuildConfig] = None,
) -> ArcLengthParameterization:
    """Build with the strategy, tolerance and depth guard from ``config``."""
    config = config or BuildConfig()
    if config.strategy == "fixed_height":
        return build_fixed_height(adapter, config.tolerance, curve, max_depth=config.max_depth)
    return build(adapter, config.tolerance, curve, max_depth=config.max_depth)
