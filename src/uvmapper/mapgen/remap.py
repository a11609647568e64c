# src/uvmapper/mapgen/remap.py
# Per-pixel UV maps: one texture lookup scrambles or unscrambles a frame.
# Output layout is (height, width, 2) float32, channel 0 = u, channel 1 = v.

from typing import Optional, Tuple

import numpy as np

from ..grid import GridGeometry
from ..permutation import Permutation
from ..region import Region, clip_transform, crop_mappers, edge_scale, resolve_region

# Fixed UVs for the region quad, triangle-strip order.
QUAD_UVS = np.array([(1, 0), (0, 0), (1, 1), (0, 1)], dtype=np.float32)


def _pixel_cells(grid: GridGeometry):
    xs = np.arange(grid.width)
    ys = np.arange(grid.height)
    cells = (ys // grid.cell_height)[:, None] * grid.cell_count_x + (xs // grid.cell_width)[None, :]
    return xs, ys, cells


def _pack(u, v) -> np.ndarray:
    out = np.stack([u, v], axis=-1).astype(np.float32)
    out.flags.writeable = False
    return out


def generate_reverse_uv_map(
    permutation: Permutation,
    grid: GridGeometry,
    region: Optional[Region] = None,
) -> np.ndarray:
    """
    Unscrambling map. Pixel [y, x] holds the UV in the scrambled frame whose
    colour belongs at (x, y). The source cell comes from the inverse
    permutation; a source cell in the last row/column is read compressed to
    its remainder size.
    """
    if len(permutation) != grid.cell_count:
        raise ValueError(
            f"permutation covers {len(permutation)} cells, grid has {grid.cell_count}"
        )
    nx, ny = grid.cell_count_x, grid.cell_count_y
    xs, ys, cells = _pixel_cells(grid)

    mapped = np.asarray(permutation.inverse)[cells]
    mx, my = mapped % nx, mapped // nx
    sx = edge_scale(mx, nx, grid.last_cell_width, grid.cell_width)
    sy = edge_scale(my, ny, grid.last_cell_height, grid.cell_height)

    new_x = mx * grid.cell_width + (xs % grid.cell_width)[None, :] * sx
    new_y = my * grid.cell_height + (ys % grid.cell_height)[:, None] * sy

    crop_x, crop_y = crop_mappers(region, grid.width, grid.height)
    return _pack(crop_x((new_x + 0.5) / grid.width), crop_y((new_y + 0.5) / grid.height))


def generate_uv_map(permutation: Permutation, grid: GridGeometry) -> np.ndarray:
    """
    Scrambling map, the encoder side. Pixel [y, x] in cell c samples cell
    permute(c) of the clean frame. The scale follows the output pixel: a
    remainder cell in the output is filled by stretching a full source cell
    into it.
    """
    if len(permutation) != grid.cell_count:
        raise ValueError(
            f"permutation covers {len(permutation)} cells, grid has {grid.cell_count}"
        )
    nx = grid.cell_count_x
    xs, ys, cells = _pixel_cells(grid)

    mapped = np.asarray(permutation.forward)[cells]
    mx, my = mapped % nx, mapped // nx
    last_x = (grid.cell_count_x - 1) * grid.cell_width
    last_y = (grid.cell_count_y - 1) * grid.cell_height
    # Output remainder cells are squeezed: stretch the source by cell/last.
    sx = np.where(xs >= last_x, grid.cell_width / grid.last_cell_width, 1.0)
    sy = np.where(ys >= last_y, grid.cell_height / grid.last_cell_height, 1.0)

    new_x = mx * grid.cell_width + ((xs % grid.cell_width) * sx)[None, :]
    new_y = my * grid.cell_height + ((ys % grid.cell_height) * sy)[:, None]
    return _pack((new_x + 0.5) / grid.width, (new_y + 0.5) / grid.height)


def region_quad(region: Optional[Region], grid: GridGeometry) -> Tuple[np.ndarray, np.ndarray]:
    """
    Clip-space corners (right-top, left-top, right-bottom, left-bottom) of the
    rectangle the remap is drawn over, plus the matching UVs.
    """
    region = resolve_region(region, grid)
    left, top = clip_transform(region, 0.0, 0.0, grid)
    right, bottom = clip_transform(
        region, grid.width / grid.cell_width, grid.height / grid.cell_height, grid,
    )
    positions = np.array([
        (right, top),
        (left, top),
        (right, bottom),
        (left, bottom),
    ], dtype=np.float32)
    return positions, QUAD_UVS.copy()
