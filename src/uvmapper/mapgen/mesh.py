# src/uvmapper/mapgen/mesh.py
# Vertex buffers for the animated mesh-warp unscrambler.
# Each cell is two triangles; the renderer lerps original -> mapped positions.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..grid import GridGeometry
from ..permutation import Permutation
from ..region import Region, clip_transform, edge_scale, resolve_region, uv_transform

# Unit-square corners per cell; both triangles share the left-top/right-bottom diagonal.
UNIT_QUAD_OFFSETS = np.array([
    (1, 0),  # right-top
    (0, 0),  # left-top
    (1, 1),  # right-bottom
    (1, 1),  # right-bottom
    (0, 0),  # left-top
    (0, 1),  # left-bottom
], dtype=np.float64)

VERTICES_PER_CELL = len(UNIT_QUAD_OFFSETS)


@dataclass(frozen=True)
class MeshBuffers:
    original_positions: np.ndarray  # (N*6, 2) clip space
    mapped_positions: np.ndarray    # (N*6, 2) clip space
    uvs: np.ndarray                 # (N*6, 2) texture space

    @property
    def vertex_count(self) -> int:
        return len(self.original_positions)

    @property
    def cell_count(self) -> int:
        return self.vertex_count // VERTICES_PER_CELL

    def blend(self, t: float) -> np.ndarray:
        """Positions at blend scalar t (0 = original layout, 1 = mapped layout)."""
        return self.original_positions + (self.mapped_positions - self.original_positions) * np.float32(t)


def _readonly_pairs(x, y) -> np.ndarray:
    out = np.stack([x, y], axis=-1).reshape(-1, 2).astype(np.float32)
    out.flags.writeable = False
    return out


def generate_buffers(
    permutation: Permutation,
    grid: GridGeometry,
    region: Optional[Region] = None,
) -> MeshBuffers:
    if len(permutation) != grid.cell_count:
        raise ValueError(
            f"permutation covers {len(permutation)} cells, grid has {grid.cell_count}"
        )
    region = resolve_region(region, grid)
    nx, ny = grid.cell_count_x, grid.cell_count_y

    cells = np.arange(grid.cell_count)
    cx, cy = cells % nx, cells // nx
    mapped = np.asarray(permutation.forward)
    mx, my = mapped % nx, mapped // nx

    ox = UNIT_QUAD_OFFSETS[:, 0][None, :]
    oy = UNIT_QUAD_OFFSETS[:, 1][None, :]

    def corners(ix, iy):
        sx = edge_scale(ix, nx, grid.last_cell_width, grid.cell_width)
        sy = edge_scale(iy, ny, grid.last_cell_height, grid.cell_height)
        return ix[:, None] + ox * sx[:, None], iy[:, None] + oy * sy[:, None]

    gx, gy = corners(cx, cy)
    gmx, gmy = corners(mx, my)

    return MeshBuffers(
        original_positions=_readonly_pairs(*clip_transform(region, gx, gy, grid)),
        mapped_positions=_readonly_pairs(*clip_transform(region, gmx, gmy, grid)),
        uvs=_readonly_pairs(*uv_transform(region, gx, gy, grid)),
    )
