"""
CPU reference consumer for the generated maps and buffers.

A GPU renderer samples the remap image with nearest filtering and clamp-to-edge
wrapping; sample_nearest does the same on numpy frames so tools and tests can
scramble and unscramble without a graphics context.
"""

from typing import List, Tuple

import numpy as np

from ..mapgen.mesh import VERTICES_PER_CELL, MeshBuffers

Rect = Tuple[int, int, int, int]  # x, y, w, h


def sample_nearest(frame: np.ndarray, uv_map: np.ndarray) -> np.ndarray:
    """Sample frame (H, W[, C]) at every UV of uv_map (h, w, 2).

    UVs outside [0, 1] are clamped to the edge pixels.
    """
    src_h, src_w = frame.shape[:2]
    ix = np.clip(np.floor(uv_map[..., 0] * src_w).astype(np.int64), 0, src_w - 1)
    iy = np.clip(np.floor(uv_map[..., 1] * src_h).astype(np.int64), 0, src_h - 1)
    return frame[iy, ix]


def clip_to_pixels(points: np.ndarray, width: int, height: int) -> np.ndarray:
    """Clip-space (x, y) pairs -> top-left-origin pixel coordinates."""
    px = (points[..., 0] + 1) * 0.5 * width
    py = (1 - points[..., 1]) * 0.5 * height
    return np.stack([px, py], axis=-1)


def _rects(top_left: np.ndarray, bottom_right: np.ndarray) -> List[Rect]:
    tl = np.rint(top_left).astype(np.int64)
    br = np.rint(bottom_right).astype(np.int64)
    size = br - tl
    return [(int(x), int(y), int(w), int(h)) for (x, y), (w, h) in zip(tl, size)]


def cell_rects(
    buffers: MeshBuffers,
    t: float,
    dst_size: Tuple[int, int],
    src_size: Tuple[int, int],
) -> List[Tuple[Rect, Rect]]:
    """
    (src_rect, dst_rect) per cell at blend scalar t.

    Cells are axis-aligned, so each quad is fully described by its left-top
    (vertex 1) and right-bottom (vertex 2) corners.
    """
    positions = buffers.blend(t).reshape(-1, VERTICES_PER_CELL, 2)
    uvs = buffers.uvs.reshape(-1, VERTICES_PER_CELL, 2)

    dst_w, dst_h = dst_size
    src_w, src_h = src_size
    dst_tl = clip_to_pixels(positions[:, 1], dst_w, dst_h)
    dst_br = clip_to_pixels(positions[:, 2], dst_w, dst_h)
    scale = np.array([src_w, src_h], dtype=np.float64)
    src_tl = uvs[:, 1] * scale
    src_br = uvs[:, 2] * scale
    return list(zip(_rects(src_tl, src_br), _rects(dst_tl, dst_br)))
