"""
Crop region and the coordinate transforms layered on top of the permutation.

Two independent affine rescalings live here:
    - remainder scaling: a last-row/last-column cell is narrower than the
      nominal cell, so its unit offsets are shrunk by last_size/cell_size;
    - region cropping: cell-fractional canvas coordinates are squeezed into
      the sub-rectangle the scrambled picture actually occupies.

Every transform is plain arithmetic and accepts Python scalars or numpy arrays.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .grid import GridGeometry


class RegionError(ValueError):
    """Invalid region specification."""


@dataclass(frozen=True)
class Region:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise RegionError(
                f"Region size must be positive. Got w={self.width}, h={self.height}"
            )

    @classmethod
    def full(cls, grid: GridGeometry) -> "Region":
        return cls(0, 0, grid.width, grid.height)


def parse_region(spec) -> Optional[Region]:
    """Parse a region spec into a Region, or None for the full canvas.

    Accepts None, a Region, an "x,y,w,h" string, or a 4-item sequence.
    A sequence shorter than four items means "no crop".

    Raises:
        RegionError: If the spec cannot be read as a rectangle.
    """
    if spec is None or isinstance(spec, Region):
        return spec

    if isinstance(spec, str):
        if not spec.strip():
            return None
        parts = spec.replace(" ", "").split(",")
        if len(parts) != 4:
            raise RegionError(f"Region must be 'x,y,w,h'. Got: '{spec}'")
        try:
            values = [float(p) for p in parts]
        except ValueError:
            raise RegionError(f"Region values must be numbers. Got: '{spec}'")
        return Region(*values)

    if isinstance(spec, (tuple, list)):
        if len(spec) < 4:
            return None
        if len(spec) > 4:
            raise RegionError(f"Region must have 4 values (x,y,w,h). Got {len(spec)}.")
        try:
            values = [float(v) for v in spec]
        except (TypeError, ValueError):
            raise RegionError(f"Region values must be numbers. Got: {spec!r}")
        return Region(*values)

    raise RegionError(f"Unknown region spec type: {type(spec).__name__}")


def resolve_region(region: Optional[Region], grid: GridGeometry) -> Region:
    return region if region is not None else Region.full(grid)


def edge_scale(index, count: int, last_size: int, cell_size: int):
    """last_size/cell_size for the last row/column, 1.0 elsewhere."""
    return np.where(np.asarray(index) >= count - 1, last_size / cell_size, 1.0)


def crop_axis(offset: float, extent: float, frac, size: int):
    # frac is a [0,1] fraction of the full canvas along one axis.
    return (offset + extent * frac) / size


def crop_mappers(region: Optional[Region], width: int, height: int) -> Tuple[Callable, Callable]:
    if region is None:
        return (lambda u: u), (lambda v: v)
    return (
        lambda u: crop_axis(region.x, region.width, u, width),
        lambda v: crop_axis(region.y, region.height, v, height),
    )


def uv_transform(region: Region, gx, gy, grid: GridGeometry):
    u = crop_axis(region.x, region.width, gx * grid.cell_width / grid.width, grid.width)
    v = crop_axis(region.y, region.height, gy * grid.cell_height / grid.height, grid.height)
    return u, v


def clip_transform(region: Region, gx, gy, grid: GridGeometry):
    # Canvas origin is top-left; clip space has +Y up.
    u, v = uv_transform(region, gx, gy, grid)
    return -1 + 2 * u, 1 - 2 * v
