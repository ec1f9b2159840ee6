"""Curve families and their arc-length adapters.

Each family is a frozen dataclass with ``point_at`` / ``derivative_at``
(float64 torch tensors) plus an adapter implementing ``bisect`` and
``length_bounds`` (and the fixed-height hooks):

    - LineSegment: exact bounds
    - CircularArc: exact bounds
    - EllipticalArc: speed-extreme and tangent-triangle bounds
    - CubicBezier: chord / control-polygon bounds
"""

from .arc import CircularArc, CircularArcAdapter, EllipticalArc, EllipticalArcAdapter
from .base import Curve
from .bezier import CubicBezier, CubicBezierAdapter
from .line import LineSegment, LineSegmentAdapter
from .registry import (
    adapter_for,
    arc_length_parameterized,
    curve_from_spec,
    parameterize,
    register_adapter,
)

__all__ = [
    'Curve',
    'LineSegment',
    'LineSegmentAdapter',
    'CircularArc',
    'CircularArcAdapter',
    'EllipticalArc',
    'EllipticalArcAdapter',
    'CubicBezier',
    'CubicBezierAdapter',
    'adapter_for',
    'register_adapter',
    'parameterize',
    'arc_length_parameterized',
    'curve_from_spec',
]
