"""Arc-length parameterization of planar curves.

Builds, to a caller-chosen absolute tolerance, a monotone mapping between
arc length ``s`` in [0, L] and curve parameter ``t`` in [0, 1], then
answers ``t → s`` and ``s → t`` queries in logarithmic time.

Architecture layers (strict one-way dependency):
    scripts/ → src/curves/ → src/arc_length/ → src/utils/

Key invariants:
    - Parameterizations are immutable; rebuild when the curve or tolerance changes
    - Out-of-domain queries return None, never raise
    - All point math in float64 torch tensors
    - YAML-only configs
"""

__version__ = "1.0.0"
