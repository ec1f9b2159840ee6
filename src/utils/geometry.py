"""Planar geometry primitives used by the curve families.

Provides:
    - Point coercion to float64 tensors
    - Cubic Bézier evaluation, derivative and de Casteljau subdivision
    - Polyline length and cumulative length (reference lengths in tests)

All points are ``torch.Tensor`` of shape (2,) and dtype float64. Single
precision is not enough for the length tolerances the arc-length tree is
built with (1e-6 and below), so every constructor goes through as_point().
"""

from typing import Sequence, Tuple, Union

import torch

PointLike = Union[torch.Tensor, Sequence[float]]

DTYPE = torch.float64

BezierControlPoints = Tuple[torch.Tensor, torch.Tensor, torch.Tensor, torch.Tensor]


def as_point(xy: PointLike) -> torch.Tensor:
    """Coerce ``(x, y)`` into a float64 tensor of shape (2,).

    Raises
    ------
    ValueError
        If the input does not hold exactly two coordinates
    """
    point = torch.as_tensor(xy, dtype=DTYPE)
    if point.shape != (2,):
        raise ValueError(f"Expected a 2D point, got shape {tuple(point.shape)}")
    return point


def _as_params(t: Union[float, torch.Tensor]) -> Tuple[torch.Tensor, bool]:
    t = torch.as_tensor(t, dtype=DTYPE)
    scalar = t.ndim == 0
    return t.reshape(-1, 1), scalar


def bezier_cubic_eval(
    p1: torch.Tensor,
    p2: torch.Tensor,
    p3: torch.Tensor,
    p4: torch.Tensor,
    t: Union[float, torch.Tensor]
) -> torch.Tensor:
    """Evaluate a cubic Bézier curve at parameter t.

    Parameters
    ----------
    p1, p2, p3, p4 : torch.Tensor
        Control points, shape (2,)
    t : float or torch.Tensor
        Parameter value(s) in [0, 1], scalar or shape (N,)

    Returns
    -------
    torch.Tensor
        Shape (2,) for scalar t, (N, 2) otherwise

    Notes
    -----
    B(t) = (1-t)³·p1 + 3(1-t)²t·p2 + 3(1-t)t²·p3 + t³·p4
    """
    t, scalar = _as_params(t)
    s = 1.0 - t

    result = (s ** 3) * p1 + (3.0 * s * s * t) * p2 + (3.0 * s * t * t) * p3 + (t ** 3) * p4
    return result[0] if scalar else result


def bezier_cubic_derivative(
    p1: torch.Tensor,
    p2: torch.Tensor,
    p3: torch.Tensor,
    p4: torch.Tensor,
    t: Union[float, torch.Tensor]
) -> torch.Tensor:
    """First derivative dB/dt of a cubic Bézier curve.

    Notes
    -----
    B'(t) = 3(1-t)²·(p2-p1) + 6(1-t)t·(p3-p2) + 3t²·(p4-p3)
    """
    t, scalar = _as_params(t)
    s = 1.0 - t

    result = (3.0 * s * s) * (p2 - p1) + (6.0 * s * t) * (p3 - p2) + (3.0 * t * t) * (p4 - p3)
    return result[0] if scalar else result


def bezier_cubic_split(
    p1: torch.Tensor,
    p2: torch.Tensor,
    p3: torch.Tensor,
    p4: torch.Tensor,
    t: float = 0.5
) -> Tuple[BezierControlPoints, BezierControlPoints]:
    """Split a cubic Bézier at ``t`` with de Casteljau's algorithm.

    Returns
    -------
    tuple
        ``(left, right)`` control point quadruples; ``left`` covers
        [0, t] and ``right`` covers [t, 1] of the original curve.

    Notes
    -----
    Exact up to floating point: the two halves trace the same points as
    the original, only the parametrisation of each half is rescaled.
    """
    q12 = torch.lerp(p1, p2, t)
    q23 = torch.lerp(p2, p3, t)
    q34 = torch.lerp(p3, p4, t)
    q123 = torch.lerp(q12, q23, t)
    q234 = torch.lerp(q23, q34, t)
    q1234 = torch.lerp(q123, q234, t)

    return (p1, q12, q123, q1234), (q1234, q234, q34, p4)


def chord_length(a: torch.Tensor, b: torch.Tensor) -> float:
    """Straight-line distance between two points."""
    return torch.linalg.vector_norm(b - a).item()


def polyline_length(points: torch.Tensor) -> float:
    """Compute total length of a polyline.

    Parameters
    ----------
    points : torch.Tensor
        Polyline vertices, shape (N, 2)

    Returns
    -------
    float
        Sum of Euclidean distances between consecutive vertices; 0.0 for
        fewer than two vertices
    """
    if points.shape[0] < 2:
        return 0.0
    return torch.linalg.vector_norm(points[1:] - points[:-1], dim=1).sum().item()


def cumulative_lengths(points: torch.Tensor) -> torch.Tensor:
    """Arc length from the first vertex to every vertex of a polyline.

    Returns
    -------
    torch.Tensor
        Shape (N,), starts at 0.0 and is non-decreasing
    """
    if points.shape[0] < 2:
        return torch.zeros(points.shape[0], dtype=points.dtype)

    segment_lengths = torch.linalg.vector_norm(points[1:] - points[:-1], dim=1)
    return torch.cat([
        torch.zeros(1, dtype=points.dtype),
        torch.cumsum(segment_lengths, dim=0),
    ])
