"""YAML schema validation and config loading.

Centralised pydantic models for every file the project reads:
    - Build config (arc_length.v1.yaml): tolerance, build strategy, depth guard
    - Curves file (curves.v1.yaml): named curves of the supported families

Loaders fail fast with the offending path in the message so a bad config
is reported before any tree is built.

Units:
    - Lengths and coordinates: same unit as the curve (commonly mm)
    - Angles: radians

Usage:
    from src.utils import validators

    build_cfg = validators.load_build_config("configs/arc_length.v1.yaml")
    curves = validators.load_curves_file("curves.yaml")
"""

from pathlib import Path
from typing import Annotated, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

# Deeper than this the parameter midpoint of a [0, 1] domain stops being
# distinct from its endpoints in float64.
MAX_DEPTH_LIMIT = 64
DEFAULT_MAX_DEPTH = 48


# ============================================================================
# BUILD CONFIG V1
# ============================================================================

class BuildConfig(BaseModel):
    """Arc-length parameterization build settings (arc_length.v1.yaml).

    ``tolerance == 0`` is accepted: the builder then keeps the root bound
    as-is instead of subdividing forever.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    schema_version: str = Field("arc_length.v1", alias="schema", description="Schema version")
    tolerance: float = Field(1e-6, ge=0.0, description="Max absolute length error (curve units)")
    strategy: Literal["adaptive", "fixed_height"] = Field(
        "adaptive", description="Adaptive bisection or fixed-height balanced tree"
    )
    max_depth: int = Field(
        DEFAULT_MAX_DEPTH, ge=0, le=MAX_DEPTH_LIMIT,
        description="Recursion guard; deeper nodes accept their current bound"
    )

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "arc_length.v1":
            raise ValueError(f"Expected schema 'arc_length.v1', got '{v}'")
        return v


# ============================================================================
# CURVES SCHEMA V1
# ============================================================================

Point2 = Tuple[float, float]


class LineSpecV1(BaseModel):
    """Straight segment from ``start`` to ``end``."""
    model_config = ConfigDict(extra="forbid")

    kind: Literal["line"]
    start: Point2
    end: Point2


class ArcSpecV1(BaseModel):
    """Circular arc; positive sweep is counterclockwise."""
    model_config = ConfigDict(extra="forbid")

    kind: Literal["arc"]
    center: Point2
    radius: float = Field(..., ge=0.0)
    start_angle: float = 0.0
    sweep_angle: float


class EllipseSpecV1(BaseModel):
    """Elliptical arc, ``x_direction`` rotates the ellipse axes."""
    model_config = ConfigDict(extra="forbid")

    kind: Literal["ellipse"]
    center: Point2
    x_radius: float = Field(..., ge=0.0)
    y_radius: float = Field(..., ge=0.0)
    start_angle: float = 0.0
    sweep_angle: float
    x_direction: float = 0.0


class BezierSpecV1(BaseModel):
    """Cubic Bézier control points."""
    model_config = ConfigDict(extra="forbid")

    kind: Literal["bezier"]
    p1: Point2
    p2: Point2
    p3: Point2
    p4: Point2


CurveSpecV1 = Annotated[
    Union[LineSpecV1, ArcSpecV1, EllipseSpecV1, BezierSpecV1],
    Field(discriminator="kind"),
]


class NamedCurveV1(BaseModel):
    """One entry of a curves file."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    curve: CurveSpecV1


class CurvesFileV1(BaseModel):
    """Container for named curves (YAML file format)."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    schema_version: str = Field("curves.v1", alias="schema", description="Schema version")
    curves: List[NamedCurveV1] = Field(..., min_length=1)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "curves.v1":
            raise ValueError(f"Expected schema 'curves.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_unique_names(self) -> 'CurvesFileV1':
        seen = set()
        for entry in self.curves:
            if entry.name in seen:
                raise ValueError(f"Duplicate curve name: {entry.name!r}")
            seen.add(entry.name)
        return self


# ============================================================================
# PUBLIC API
# ============================================================================

def load_build_config(path: Union[str, Path]) -> BuildConfig:
    """Load and validate an arc-length build config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to arc_length.v1.yaml

    Returns
    -------
    BuildConfig
        Validated, frozen build configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (message names the file and the field)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Build config not found: {path}")

    data = fs.load_yaml(path)
    try:
        return BuildConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Build config validation failed at {path}: {e}") from e


def load_curves_file(path: Union[str, Path]) -> CurvesFileV1:
    """Load and validate a curves file from YAML.

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Curves file not found: {path}")

    data = fs.load_yaml(path)
    try:
        return CurvesFileV1(**data)
    except ValidationError as e:
        raise ValueError(f"Curves file validation failed at {path}: {e}") from e
