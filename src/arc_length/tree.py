"""Segment tree data model for arc-length parameterizations.

A tree is built once and never mutated. Its leaves partition the curve's
parameter domain [0, 1] and, in the same order, the length domain [0, L].
Inside a leaf, length and parameter are treated as affinely related.

Node variants
-------------
``Leaf``
    Stores both endpoints on both axes.
``Interior``
    Takes only ``length_at_start`` and its two children. The end length
    and the parameter range are derived from the children when the node is
    created, so a descent reads every boundary in O(1).
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Iterator, Literal, NamedTuple

Strategy = Literal["adaptive", "fixed_height"]


@dataclass(frozen=True, slots=True)
class SegmentNode(ABC):
    """Base class for tree nodes.

    Every concrete node exposes ``length_at_start``, ``length_at_end``,
    ``param_at_start`` and ``param_at_end``.
    """

    length_at_start: float


@dataclass(frozen=True, slots=True)
class Leaf(SegmentNode):
    """Sub-segment short enough for linear interpolation.

    Parameters
    ----------
    length_at_start, length_at_end : float
        Cumulative arc length at the leaf's endpoints.
    param_at_start, param_at_end : float
        Parameter sub-interval covered by the leaf.
    """

    param_at_start: float
    length_at_end: float
    param_at_end: float

    def __post_init__(self) -> None:
        if self.length_at_end < self.length_at_start:
            raise ValueError(
                f"Leaf length range is reversed: "
                f"[{self.length_at_start}, {self.length_at_end}]"
            )
        if self.param_at_end < self.param_at_start:
            raise ValueError(
                f"Leaf parameter range is reversed: "
                f"[{self.param_at_start}, {self.param_at_end}]"
            )


@dataclass(frozen=True, slots=True)
class Interior(SegmentNode):
    """Split node: ``left`` covers the first part of the parameter range.

    Raises
    ------
    ValueError
        If the children do not abut on both axes.
    """

    left: SegmentNode
    right: SegmentNode
    length_at_end: float = field(init=False)
    param_at_start: float = field(init=False)
    param_at_end: float = field(init=False)

    def __post_init__(self) -> None:
        if self.left.length_at_start != self.length_at_start:
            raise ValueError(
                f"Left child starts at length {self.left.length_at_start}, "
                f"parent at {self.length_at_start}"
            )
        if self.left.param_at_end != self.right.param_at_start:
            raise ValueError(
                f"Children do not share a parameter boundary: "
                f"{self.left.param_at_end} != {self.right.param_at_start}"
            )
        if self.left.length_at_end != self.right.length_at_start:
            raise ValueError(
                f"Children do not share a length boundary: "
                f"{self.left.length_at_end} != {self.right.length_at_start}"
            )
        object.__setattr__(self, 'length_at_end', self.right.length_at_end)
        object.__setattr__(self, 'param_at_start', self.left.param_at_start)
        object.__setattr__(self, 'param_at_end', self.right.param_at_end)


@dataclass(frozen=True, slots=True)
class ArcLengthParameterization:
    """Published result of a build: the tree plus how it was built.

    Instances are read-only and safe to query from several threads.
    """

    root: SegmentNode
    tolerance: float
    strategy: Strategy = "adaptive"

    @property
    def total_length(self) -> float:
        return self.root.length_at_end


class TreeStats(NamedTuple):
    leaf_count: int
    height: int


def iter_leaves(node: SegmentNode) -> Iterator[Leaf]:
    """Yield leaves in parameter order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Interior):
            stack.append(current.right)
            stack.append(current.left)
        else:
            yield current


def tree_stats(node: SegmentNode) -> TreeStats:
    """Count leaves and measure height (a lone leaf has height 0)."""
    leaf_count = 0
    height = 0
    stack = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        if isinstance(current, Interior):
            stack.append((current.left, depth + 1))
            stack.append((current.right, depth + 1))
        else:
            leaf_count += 1
            height = max(height, depth)
    return TreeStats(leaf_count, height)
