"""Cubic Bézier curves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import torch

from src.arc_length.adapter import CurveAdapter
from src.utils.geometry import (
    PointLike,
    as_point,
    bezier_cubic_derivative,
    bezier_cubic_eval,
    bezier_cubic_split,
    chord_length,
)

from .base import Curve


@dataclass(frozen=True, eq=False)
class CubicBezier(Curve):
    """Cubic Bézier with control points ``p1`` (start) … ``p4`` (end)."""

    p1: PointLike
    p2: PointLike
    p3: PointLike
    p4: PointLike

    def __post_init__(self) -> None:
        for name in ('p1', 'p2', 'p3', 'p4'):
            object.__setattr__(self, name, as_point(getattr(self, name)))

    @property
    def control_points(self) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor, torch.Tensor]:
        return self.p1, self.p2, self.p3, self.p4

    def point_at(self, t: float) -> torch.Tensor:
        return bezier_cubic_eval(*self.control_points, float(t))

    def derivative_at(self, t: float) -> torch.Tensor:
        return bezier_cubic_derivative(*self.control_points, float(t))

    def split(self, t: float = 0.5) -> Tuple["CubicBezier", "CubicBezier"]:
        left, right = bezier_cubic_split(*self.control_points, t)
        return CubicBezier(*left), CubicBezier(*right)

    def control_polygon_length(self) -> float:
        return (
            chord_length(self.p1, self.p2)
            + chord_length(self.p2, self.p3)
            + chord_length(self.p3, self.p4)
        )


class CubicBezierAdapter(CurveAdapter[CubicBezier]):
    """Chord below, control polygon above; both converge under subdivision."""

    def bisect(self, segment: CubicBezier) -> Tuple[CubicBezier, CubicBezier]:
        return segment.split(0.5)

    def length_bounds(self, segment: CubicBezier) -> Tuple[float, float]:
        chord = chord_length(segment.p1, segment.p4)
        polygon = segment.control_polygon_length()
        # Collinear control points can round the polygon a hair under the chord
        return min(chord, polygon), polygon

    def derivative_magnitude(self, curve: CubicBezier, t: float) -> float:
        return torch.linalg.vector_norm(curve.derivative_at(t)).item()

    def max_second_derivative_magnitude(self, curve: CubicBezier) -> float:
        # B'' is linear in t, so its magnitude peaks at an endpoint
        p1, p2, p3, p4 = curve.control_points
        at_start = torch.linalg.vector_norm(6.0 * (p1 - 2.0 * p2 + p3)).item()
        at_end = torch.linalg.vector_norm(6.0 * (p2 - 2.0 * p3 + p4)).item()
        return max(at_start, at_end)
