"""Queries against a built arc-length parameterization.

Both directions share one descent: the search key is either the length
axis (``s → t``) or the parameter axis (``t → s``), and the leaf reached
is linearly interpolated on the other axis.

Tie-break: at an interior node a value equal to the right child's start
goes right (``value < boundary`` routes left). Both directions use the
same rule, so round trips never bounce between neighbouring leaves.

Out-of-domain inputs (``s`` outside [0, L], ``t`` outside [0, 1]) return
None. Queries never mutate the tree and need no locking.
"""

from __future__ import annotations

import math
from typing import Iterable, Literal, Optional

import numpy as np

from .tree import ArcLengthParameterization, Interior, Leaf, SegmentNode

Axis = Literal["length", "param"]


def interpolate(a: float, b: float, fraction: float) -> float:
    """Linear interpolation that returns exactly ``a`` at 0 and ``b`` at 1."""
    if fraction <= 0.5:
        return a + fraction * (b - a)
    return b + (1.0 - fraction) * (a - b)


def _descend(node: SegmentNode, value: float, key: Axis) -> Leaf:
    boundary = "length_at_start" if key == "length" else "param_at_start"
    while isinstance(node, Interior):
        if value < getattr(node.right, boundary):
            node = node.left
        else:
            node = node.right
    return node


def arc_length(parameterization: ArcLengthParameterization) -> float:
    """Total length of the curve (cached at the root)."""
    return parameterization.root.length_at_end


def to_parameter_value(parameterization: ArcLengthParameterization, s: float) -> Optional[float]:
    """Parameter ``t`` at arc length ``s``, or None if ``s`` is outside [0, L].

    Examples
    --------
    >>> to_parameter_value(p, 0.0)
    0.0
    >>> to_parameter_value(p, arc_length(p))
    1.0
    """
    if math.isnan(s) or s < 0.0 or s > parameterization.total_length:
        return None

    leaf = _descend(parameterization.root, s, "length")
    span = leaf.length_at_end - leaf.length_at_start
    if span <= 0.0:
        return leaf.param_at_start
    fraction = (s - leaf.length_at_start) / span
    return interpolate(leaf.param_at_start, leaf.param_at_end, fraction)


def from_parameter_value(parameterization: ArcLengthParameterization, t: float) -> Optional[float]:
    """Arc length ``s`` at parameter ``t``, or None if ``t`` is outside [0, 1]."""
    if math.isnan(t) or t < 0.0 or t > 1.0:
        return None

    leaf = _descend(parameterization.root, t, "param")
    span = leaf.param_at_end - leaf.param_at_start
    if span <= 0.0:
        return leaf.length_at_start
    fraction = (t - leaf.param_at_start) / span
    return interpolate(leaf.length_at_start, leaf.length_at_end, fraction)


def to_parameter_values(
    parameterization: ArcLengthParameterization,
    lengths: Iterable[float],
) -> np.ndarray:
    """Vectorised :func:`to_parameter_value`; out-of-domain entries are NaN."""
    lengths = np.asarray(lengths, dtype=np.float64).ravel()
    result = np.full(lengths.shape, np.nan)
    for i, s in enumerate(lengths):
        t = to_parameter_value(parameterization, float(s))
        if t is not None:
            result[i] = t
    return result


def from_parameter_values(
    parameterization: ArcLengthParameterization,
    params: Iterable[float],
) -> np.ndarray:
    """Vectorised :func:`from_parameter_value`; out-of-domain entries are NaN."""
    params = np.asarray(params, dtype=np.float64).ravel()
    result = np.full(params.shape, np.nan)
    for i, t in enumerate(params):
        s = from_parameter_value(parameterization, float(t))
        if s is not None:
            result[i] = s
    return result
