"""Curves queried by distance instead of by parameter.

:class:`ArcLengthParameterized` pairs a curve with its parameterization so
callers can ask for "the point 12.5 mm along the curve" directly. The
curve only needs ``point_at(t)`` and ``derivative_at(t)`` returning
``torch.Tensor`` of shape (2,).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

import torch

from .query import arc_length, from_parameter_value, to_parameter_value
from .tree import ArcLengthParameterization

MAX_DASHES = 1_000_000


class ParametricCurve(Protocol):
    def point_at(self, t: float) -> torch.Tensor: ...

    def derivative_at(self, t: float) -> torch.Tensor: ...


@dataclass(frozen=True)
class ArcLengthParameterized:
    """A curve plus the tree mapping its arc length to its parameter.

    Parameters
    ----------
    curve : ParametricCurve
        Curve over t in [0, 1]
    parameterization : ArcLengthParameterization
        Tree built for exactly this curve
    """

    curve: ParametricCurve
    parameterization: ArcLengthParameterization

    def length(self) -> float:
        return arc_length(self.parameterization)

    def parameter_along(self, s: float) -> Optional[float]:
        return to_parameter_value(self.parameterization, s)

    def distance_at(self, t: float) -> Optional[float]:
        return from_parameter_value(self.parameterization, t)

    def point_along(self, s: float) -> Optional[torch.Tensor]:
        """Point at arc length ``s``, or None outside [0, length]."""
        t = self.parameter_along(s)
        if t is None:
            return None
        return self.curve.point_at(t)

    def tangent_along(self, s: float) -> Optional[torch.Tensor]:
        """Unit tangent at arc length ``s``.

        Returns None outside [0, length] and where the curve is stationary
        (zero derivative), since no direction is defined there.
        """
        t = self.parameter_along(s)
        if t is None:
            return None
        derivative = self.curve.derivative_at(t)
        magnitude = torch.linalg.vector_norm(derivative)
        if magnitude.item() == 0.0:
            return None
        return derivative / magnitude

    def start_point(self) -> torch.Tensor:
        return self.curve.point_at(0.0)

    def end_point(self) -> torch.Tensor:
        return self.curve.point_at(1.0)

    def midpoint(self) -> torch.Tensor:
        """Point halfway along the curve by distance (not by parameter)."""
        return self.point_along(0.5 * self.length())

    def sample_evenly(self, segments: int) -> torch.Tensor:
        """Points equally spaced in arc length.

        Parameters
        ----------
        segments : int
            Number of equal-length pieces, >= 1

        Returns
        -------
        torch.Tensor
            Shape (segments + 1, 2); first and last rows are the curve's
            endpoints
        """
        if segments < 1:
            raise ValueError(f"segments must be >= 1, got {segments}")

        total = self.length()
        points = []
        for i in range(segments + 1):
            # Last sample pinned to the end so rounding can't push s past L
            s = total if i == segments else total * i / segments
            points.append(self.curve.point_at(self.parameter_along(s)))
        return torch.stack(points)

    def dash_intervals(
        self,
        dash: float,
        gap: float,
        offset: float = 0.0,
    ) -> List[Tuple[float, float]]:
        """Parameter intervals of a dash pattern laid along the curve.

        Parameters
        ----------
        dash : float
            Dash length (> 0)
        gap : float
            Gap length (>= 0)
        offset : float
            Distance into the pattern at the curve start (>= 0)

        Returns
        -------
        list[tuple[float, float]]
            ``(t_start, t_end)`` per visible dash, in order; the last dash is
            clipped at the curve end

        Raises
        ------
        ValueError
            On invalid arguments, or if the pattern needs more than
            MAX_DASHES dashes to cover the curve
        """
        if dash <= 0.0:
            raise ValueError(f"dash must be > 0, got {dash}")
        if gap < 0.0:
            raise ValueError(f"gap must be >= 0, got {gap}")
        if offset < 0.0:
            raise ValueError(f"offset must be >= 0, got {offset}")

        total = self.length()
        period = dash + gap
        phase = offset % period
        count = math.ceil((total + phase) / period)
        if count > MAX_DASHES:
            raise ValueError(
                f"dash pattern of period {period} needs {count} dashes on a curve "
                f"of length {total}; at most {MAX_DASHES} are supported"
            )

        intervals = []
        for k in range(count):
            # Dash start relative to the curve start; the first may begin before it
            s = k * period - phase
            s0 = max(s, 0.0)
            s1 = min(s + dash, total)
            if s1 > s0:
                intervals.append((self.parameter_along(s0), self.parameter_along(s1)))
        return intervals
