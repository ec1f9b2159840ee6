"""Straight line segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import torch

from src.arc_length.adapter import CurveAdapter
from src.utils.geometry import PointLike, as_point, chord_length

from .base import Curve


@dataclass(frozen=True, eq=False)
class LineSegment(Curve):
    """Segment from ``start`` (t=0) to ``end`` (t=1) at constant speed."""

    start: PointLike
    end: PointLike

    def __post_init__(self) -> None:
        object.__setattr__(self, 'start', as_point(self.start))
        object.__setattr__(self, 'end', as_point(self.end))

    def point_at(self, t: float) -> torch.Tensor:
        return torch.lerp(self.start, self.end, float(t))

    def derivative_at(self, t: float) -> torch.Tensor:
        return self.end - self.start

    def length(self) -> float:
        return chord_length(self.start, self.end)


class LineSegmentAdapter(CurveAdapter[LineSegment]):
    """Exact bounds: a line's length is its chord, so one leaf suffices."""

    def bisect(self, segment: LineSegment) -> Tuple[LineSegment, LineSegment]:
        mid = torch.lerp(segment.start, segment.end, 0.5)
        return LineSegment(segment.start, mid), LineSegment(mid, segment.end)

    def length_bounds(self, segment: LineSegment) -> Tuple[float, float]:
        length = segment.length()
        return length, length

    def derivative_magnitude(self, curve: LineSegment, t: float) -> float:
        return curve.length()

    def max_second_derivative_magnitude(self, curve: LineSegment) -> float:
        return 0.0
