"""Arc-length parameterization engine.

Build once, query many times:

    from src.arc_length import build, to_parameter_value, from_parameter_value

    p = build(adapter, 1e-6, curve)
    t = to_parameter_value(p, 2.5)     # None if 2.5 is beyond the curve
    s = from_parameter_value(p, 0.25)  # None if 0.25 is outside [0, 1]

Modules:
    - tree: immutable Leaf / Interior nodes and the parameterization value
    - adapter: CurveAdapter interface and contract checks
    - builder: adaptive and fixed-height strategies
    - query: shared descent, scalar and vectorised queries
    - parameterized: curve + parameterization wrapper (points by distance)
"""

from .adapter import AdapterContractError, ArcLengthError, CurveAdapter
from .builder import (
    MAX_FIXED_HEIGHT,
    build,
    build_fixed_height,
    build_segment,
    build_with_config,
    fixed_tree_height,
)
from .parameterized import ArcLengthParameterized
from .query import (
    arc_length,
    from_parameter_value,
    from_parameter_values,
    interpolate,
    to_parameter_value,
    to_parameter_values,
)
from .tree import ArcLengthParameterization, Interior, Leaf, SegmentNode, TreeStats, iter_leaves, tree_stats

__all__ = [
    # Errors
    'ArcLengthError',
    'AdapterContractError',
    # Adapter interface
    'CurveAdapter',
    # Data model
    'ArcLengthParameterization',
    'SegmentNode',
    'Leaf',
    'Interior',
    'TreeStats',
    'iter_leaves',
    'tree_stats',
    # Building
    'build',
    'build_segment',
    'build_fixed_height',
    'build_with_config',
    'fixed_tree_height',
    'MAX_FIXED_HEIGHT',
    # Queries
    'arc_length',
    'to_parameter_value',
    'from_parameter_value',
    'to_parameter_values',
    'from_parameter_values',
    'interpolate',
    # Curves by distance
    'ArcLengthParameterized',
]
