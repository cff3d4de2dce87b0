"""Point types returned by the compound accessors of a configuration."""

from typing import NamedTuple


class Point2D(NamedTuple):
    """A point (or pixel index) in the plane."""

    x: int | float
    y: int | float


class Point3D(NamedTuple):
    """A point (or voxel index) in space."""

    x: int | float
    y: int | float
    z: int | float
