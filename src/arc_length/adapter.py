"""Curve adapter interface: the only contact point with curve-family math.

A curve family plugs into the builder by subclassing :class:`CurveAdapter`.
Segments are opaque to the builder; it only hands them back to the adapter
that produced them.

Adaptive strategy needs:
    - ``bisect(segment)``: exact split at the parameter midpoint
    - ``length_bounds(segment)``: guaranteed ``lower <= length <= upper``

Fixed-height strategy needs:
    - ``derivative_magnitude(curve, t)``: speed |dC/dt| on the full curve
    - ``max_second_derivative_magnitude(curve)``: global bound on |d²C/dt²|

Adapter output is checked here. A violation means a bug in the family
adapter, so it raises :class:`AdapterContractError` instead of producing a
silently wrong tree.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Generic, Tuple, TypeVar

SegmentT = TypeVar("SegmentT")


class ArcLengthError(Exception):
    """Base class for arc-length parameterization errors."""

    pass


class AdapterContractError(ArcLengthError):
    """Raised when a curve adapter returns values that break its contract."""

    pass


class CurveAdapter(ABC, Generic[SegmentT]):
    """Per-family operations the builder relies on."""

    @abstractmethod
    def bisect(self, segment: SegmentT) -> Tuple[SegmentT, SegmentT]:
        """Split ``segment`` at its parameter midpoint."""
        raise NotImplementedError

    @abstractmethod
    def length_bounds(self, segment: SegmentT) -> Tuple[float, float]:
        """Return ``(lower, upper)`` enclosing the true arc length."""
        raise NotImplementedError

    def derivative_magnitude(self, curve: SegmentT, t: float) -> float:
        """Speed |dC/dt| at parameter ``t`` of the full curve."""
        raise NotImplementedError(
            f"{type(self).__name__} does not support the fixed-height strategy"
        )

    def max_second_derivative_magnitude(self, curve: SegmentT) -> float:
        """Upper bound on |d²C/dt²| over [0, 1]."""
        raise NotImplementedError(
            f"{type(self).__name__} does not support the fixed-height strategy"
        )


def checked_length_bounds(adapter: CurveAdapter, segment: Any) -> Tuple[float, float]:
    """Call ``adapter.length_bounds`` and validate the enclosure.

    Raises
    ------
    AdapterContractError
        If a bound is not finite, ``lower`` is negative or ``lower > upper``.
    """
    lower, upper = adapter.length_bounds(segment)
    lower = float(lower)
    upper = float(upper)

    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise AdapterContractError(
            f"{type(adapter).__name__}.length_bounds returned non-finite bounds "
            f"({lower}, {upper})"
        )
    if lower < 0.0:
        raise AdapterContractError(
            f"{type(adapter).__name__}.length_bounds returned negative lower bound {lower}"
        )
    if lower > upper:
        raise AdapterContractError(
            f"{type(adapter).__name__}.length_bounds returned lower > upper "
            f"({lower} > {upper})"
        )
    return lower, upper


def checked_bisect(adapter: CurveAdapter, segment: Any) -> Tuple[Any, Any]:
    """Call ``adapter.bisect`` and check it produced two halves."""
    halves = adapter.bisect(segment)
    if not isinstance(halves, tuple) or len(halves) != 2:
        raise AdapterContractError(
            f"{type(adapter).__name__}.bisect must return a (left, right) tuple, "
            f"got {type(halves).__name__}"
        )
    return halves


def checked_speed(adapter: CurveAdapter, curve: Any, t: float) -> float:
    """Call ``adapter.derivative_magnitude`` and reject negative/non-finite speeds."""
    speed = float(adapter.derivative_magnitude(curve, t))
    if not math.isfinite(speed) or speed < 0.0:
        raise AdapterContractError(
            f"{type(adapter).__name__}.derivative_magnitude returned {speed} at t={t}"
        )
    return speed
