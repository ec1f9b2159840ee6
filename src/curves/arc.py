"""Circular and elliptical arcs.

Angles are in radians; a positive sweep runs counterclockwise. The curve
parameter maps linearly onto the sweep: ``theta(t) = start_angle + t * sweep_angle``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import torch

from src.arc_length.adapter import CurveAdapter
from src.utils.geometry import DTYPE, PointLike, as_point, chord_length

from .base import Curve


# ============================================================================
# CIRCULAR ARC
# ============================================================================

@dataclass(frozen=True, eq=False)
class CircularArc(Curve):
    """Arc of a circle, traced at constant speed ``radius * |sweep_angle|``."""

    center: PointLike
    radius: float
    start_angle: float
    sweep_angle: float

    def __post_init__(self) -> None:
        if self.radius < 0.0:
            raise ValueError(f"radius must be >= 0, got {self.radius}")
        object.__setattr__(self, 'center', as_point(self.center))

    def theta_at(self, t: float) -> float:
        return self.start_angle + float(t) * self.sweep_angle

    def point_at(self, t: float) -> torch.Tensor:
        theta = self.theta_at(t)
        offset = torch.tensor([math.cos(theta), math.sin(theta)], dtype=DTYPE)
        return self.center + self.radius * offset

    def derivative_at(self, t: float) -> torch.Tensor:
        theta = self.theta_at(t)
        direction = torch.tensor([-math.sin(theta), math.cos(theta)], dtype=DTYPE)
        return (self.radius * self.sweep_angle) * direction

    def length(self) -> float:
        return self.radius * abs(self.sweep_angle)


class CircularArcAdapter(CurveAdapter[CircularArc]):
    """Closed-form length, so the bounds coincide."""

    def bisect(self, segment: CircularArc) -> Tuple[CircularArc, CircularArc]:
        half = 0.5 * segment.sweep_angle
        return (
            CircularArc(segment.center, segment.radius, segment.start_angle, half),
            CircularArc(segment.center, segment.radius, segment.start_angle + half, half),
        )

    def length_bounds(self, segment: CircularArc) -> Tuple[float, float]:
        length = segment.length()
        return length, length

    def derivative_magnitude(self, curve: CircularArc, t: float) -> float:
        return curve.length()

    def max_second_derivative_magnitude(self, curve: CircularArc) -> float:
        return curve.radius * curve.sweep_angle ** 2


# ============================================================================
# ELLIPTICAL ARC
# ============================================================================

def _contains_angle(lo: float, hi: float, base: float) -> bool:
    """True if some ``base + k*pi`` lies in [lo, hi]."""
    return math.ceil((lo - base) / math.pi) <= math.floor((hi - base) / math.pi)


@dataclass(frozen=True, eq=False)
class EllipticalArc(Curve):
    """Arc of an ellipse with semi-axes ``x_radius`` and ``y_radius``.

    ``x_direction`` is the angle of the ellipse's x axis. Its speed,
    ``|sweep| * sqrt(a² sin²θ + b² cos²θ)``, varies along the arc, so the
    length has no closed form.
    """

    center: PointLike
    x_radius: float
    y_radius: float
    start_angle: float
    sweep_angle: float
    x_direction: float = 0.0

    def __post_init__(self) -> None:
        if self.x_radius < 0.0 or self.y_radius < 0.0:
            raise ValueError(
                f"radii must be >= 0, got ({self.x_radius}, {self.y_radius})"
            )
        object.__setattr__(self, 'center', as_point(self.center))

    def theta_at(self, t: float) -> float:
        return self.start_angle + float(t) * self.sweep_angle

    def to_world(self, local_x: float, local_y: float) -> torch.Tensor:
        c = math.cos(self.x_direction)
        s = math.sin(self.x_direction)
        return torch.tensor([c * local_x - s * local_y, s * local_x + c * local_y], dtype=DTYPE)

    def point_at(self, t: float) -> torch.Tensor:
        theta = self.theta_at(t)
        return self.center + self.to_world(
            self.x_radius * math.cos(theta), self.y_radius * math.sin(theta)
        )

    def derivative_at(self, t: float) -> torch.Tensor:
        theta = self.theta_at(t)
        return self.sweep_angle * self.to_world(
            -self.x_radius * math.sin(theta), self.y_radius * math.cos(theta)
        )

    def angular_speed(self, theta: float) -> float:
        """|dC/dθ| at eccentric angle ``theta``."""
        return math.hypot(self.x_radius * math.sin(theta), self.y_radius * math.cos(theta))

    def halves(self) -> Tuple["EllipticalArc", "EllipticalArc"]:
        half = 0.5 * self.sweep_angle
        return (
            EllipticalArc(self.center, self.x_radius, self.y_radius,
                          self.start_angle, half, self.x_direction),
            EllipticalArc(self.center, self.x_radius, self.y_radius,
                          self.start_angle + half, half, self.x_direction),
        )


class EllipticalArcAdapter(CurveAdapter[EllipticalArc]):
    """Length bounds from speed extremes and the tangent triangle.

    Lower bound: the larger of the chord and ``min speed * |sweep|``.
    Upper bound: the smaller of ``max speed * |sweep|`` and, for sweeps
    under pi, the two legs of the triangle formed by the end tangents.
    The triangle is the affine image of a circular arc's tangent triangle,
    whose apex sits at angle ``mid`` and radius ``1 / cos(sweep / 2)``.
    """

    def bisect(self, segment: EllipticalArc) -> Tuple[EllipticalArc, EllipticalArc]:
        return segment.halves()

    def length_bounds(self, segment: EllipticalArc) -> Tuple[float, float]:
        a = segment.x_radius
        b = segment.y_radius
        theta0 = segment.start_angle
        theta1 = segment.start_angle + segment.sweep_angle
        lo, hi = min(theta0, theta1), max(theta0, theta1)
        sweep = hi - lo

        # speed² = b² + (a² - b²)·sin²θ is monotone in sin²θ
        sin2 = [math.sin(lo) ** 2, math.sin(hi) ** 2]
        if _contains_angle(lo, hi, 0.0):
            sin2.append(0.0)
        if _contains_angle(lo, hi, 0.5 * math.pi):
            sin2.append(1.0)
        speeds = [math.sqrt(max(b * b + (a * a - b * b) * s2, 0.0)) for s2 in sin2]

        start = segment.point_at(0.0)
        end = segment.point_at(1.0)
        lower = max(chord_length(start, end), min(speeds) * sweep)
        upper = max(speeds) * sweep

        if 0.0 < sweep < math.pi:
            mid = 0.5 * (lo + hi)
            reach = 1.0 / math.cos(0.5 * sweep)
            apex = segment.center + segment.to_world(
                a * reach * math.cos(mid), b * reach * math.sin(mid)
            )
            upper = min(upper, chord_length(start, apex) + chord_length(apex, end))

        # Rounding can cross the bounds by an ulp on near-straight pieces
        return min(lower, upper), upper

    def derivative_magnitude(self, curve: EllipticalArc, t: float) -> float:
        return abs(curve.sweep_angle) * curve.angular_speed(curve.theta_at(t))

    def max_second_derivative_magnitude(self, curve: EllipticalArc) -> float:
        return max(curve.x_radius, curve.y_radius) * curve.sweep_angle ** 2
