"""Shared fixtures: sample curves and dense-polyline reference lengths."""

import logging
import math
from pathlib import Path

import pytest
import torch

from src.curves import CircularArc, CubicBezier, EllipticalArc, LineSegment
from src.utils import geometry, logging_config


def _dense_points(curve, t0: float, t1: float, n: int) -> torch.Tensor:
    ts = torch.linspace(t0, t1, n + 1, dtype=torch.float64)
    return torch.stack([curve.point_at(float(t)) for t in ts])


def _reference_length(curve, t0: float = 0.0, t1: float = 1.0, n: int = 2000) -> float:
    # Richardson extrapolation of two polyline lengths (error O(h^4))
    coarse = geometry.polyline_length(_dense_points(curve, t0, t1, n))
    fine = geometry.polyline_length(_dense_points(curve, t0, t1, 2 * n))
    return (4.0 * fine - coarse) / 3.0


def _reference_cumulative(curve, n: int = 2000) -> torch.Tensor:
    """Arc length at t = i/n, i = 0..n."""
    coarse = geometry.cumulative_lengths(_dense_points(curve, 0.0, 1.0, n))
    fine = geometry.cumulative_lengths(_dense_points(curve, 0.0, 1.0, 2 * n))
    return (4.0 * fine[::2] - coarse) / 3.0


@pytest.fixture(scope="session")
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def reference_length():
    return _reference_length


@pytest.fixture(scope="session")
def reference_cumulative():
    return _reference_cumulative


@pytest.fixture
def ruler():
    """Straight segment of length 10."""
    return LineSegment((0.0, 0.0), (10.0, 0.0))


@pytest.fixture
def quarter_arc():
    """Quarter circle of radius 1 (length pi/2)."""
    return CircularArc((0.0, 0.0), 1.0, 0.0, math.pi / 2)


@pytest.fixture
def half_ellipse():
    """Half of a 3:1 ellipse, speed varies by 3x along it."""
    return EllipticalArc((1.0, -2.0), 3.0, 1.0, 0.0, math.pi)


@pytest.fixture
def s_bend():
    return CubicBezier((0.0, 0.0), (30.0, 40.0), (70.0, -40.0), (100.0, 0.0))


@pytest.fixture
def restore_logging():
    """Undo root-logger changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging_config.pop_context()
    logging.captureWarnings(False)
