"""Curve family registry: adapter lookup and construction from config specs.

Usage:
    from src.curves import CircularArc, arc_length_parameterized

    arc = CircularArc((0.0, 0.0), 1.0, 0.0, math.pi / 2)
    along = arc_length_parameterized(arc)
    along.point_along(0.5)
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from src.arc_length import ArcLengthParameterization, ArcLengthParameterized, CurveAdapter, build_with_config
from src.utils.validators import ArcSpecV1, BezierSpecV1, BuildConfig, EllipseSpecV1, LineSpecV1

from .arc import CircularArc, CircularArcAdapter, EllipticalArc, EllipticalArcAdapter
from .base import Curve
from .bezier import CubicBezier, CubicBezierAdapter
from .line import LineSegment, LineSegmentAdapter

_ADAPTERS: Dict[Type[Curve], CurveAdapter] = {
    LineSegment: LineSegmentAdapter(),
    CircularArc: CircularArcAdapter(),
    EllipticalArc: EllipticalArcAdapter(),
    CubicBezier: CubicBezierAdapter(),
}


def register_adapter(curve_type: Type[Curve], adapter: CurveAdapter) -> None:
    """Register (or replace) the adapter used for ``curve_type``."""
    _ADAPTERS[curve_type] = adapter


def adapter_for(curve: Curve) -> CurveAdapter:
    """Adapter for ``curve``'s family.

    Raises
    ------
    TypeError
        If no adapter is registered for the curve's type
    """
    for curve_type in type(curve).__mro__:
        adapter = _ADAPTERS.get(curve_type)
        if adapter is not None:
            return adapter
    raise TypeError(f"No curve adapter registered for {type(curve).__name__}")


def parameterize(curve: Curve, config: Optional[BuildConfig] = None) -> ArcLengthParameterization:
    """Build the arc-length parameterization of ``curve`` with ``config``."""
    return build_with_config(adapter_for(curve), curve, config)


def arc_length_parameterized(
    curve: Curve,
    config: Optional[BuildConfig] = None,
) -> ArcLengthParameterized:
    """Build and wrap ``curve`` for queries by distance."""
    return ArcLengthParameterized(curve, parameterize(curve, config))


def curve_from_spec(spec) -> Curve:
    """Turn a validated curve spec (see src.utils.validators) into a curve."""
    if isinstance(spec, LineSpecV1):
        return LineSegment(spec.start, spec.end)
    if isinstance(spec, ArcSpecV1):
        return CircularArc(spec.center, spec.radius, spec.start_angle, spec.sweep_angle)
    if isinstance(spec, EllipseSpecV1):
        return EllipticalArc(
            spec.center, spec.x_radius, spec.y_radius,
            spec.start_angle, spec.sweep_angle, spec.x_direction,
        )
    if isinstance(spec, BezierSpecV1):
        return CubicBezier(spec.p1, spec.p2, spec.p3, spec.p4)
    raise TypeError(f"Unsupported curve spec: {type(spec).__name__}")
