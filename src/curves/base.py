"""Abstract parametric curve shared by all families."""

from __future__ import annotations

from abc import ABC, abstractmethod

import torch


class Curve(ABC):
    """Planar parametric curve over t in [0, 1]."""

    @abstractmethod
    def point_at(self, t: float) -> torch.Tensor:
        """Return the point at parameter ``t``, shape (2,)."""
        raise NotImplementedError

    def derivative_at(self, t: float) -> torch.Tensor:
        """Return dC/dt at ``t`` using a central difference if not overridden."""
        eps = 1e-6
        t1 = min(1.0, t + eps)
        t0 = max(0.0, t - eps)
        return (self.point_at(t1) - self.point_at(t0)) / (t1 - t0)
