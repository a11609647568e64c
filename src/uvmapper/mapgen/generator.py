# src/uvmapper/mapgen/generator.py
# Config-level entry points: seed, geometry and permutation are derived once here.

import logging

import numpy as np

from ..config import ScrambleConfig
from ..permutation import Permutation, build_permutation
from .mesh import MeshBuffers, generate_buffers
from .remap import generate_reverse_uv_map, generate_uv_map

logger = logging.getLogger(__name__)


def permutation_for(config: ScrambleConfig) -> Permutation:
    grid = config.grid()
    return build_permutation(config.seed_value, grid.cell_count)


def build_mesh(config: ScrambleConfig) -> MeshBuffers:
    grid = config.grid()
    buffers = generate_buffers(permutation_for(config), grid, config.region)
    logger.debug(
        "Mesh: %d vertices for %dx%d cells (seed %r -> %d)",
        buffers.vertex_count, grid.cell_count_x, grid.cell_count_y,
        config.seed, config.seed_value,
    )
    return buffers


def build_remap(config: ScrambleConfig) -> np.ndarray:
    grid = config.grid()
    uv_map = generate_reverse_uv_map(permutation_for(config), grid, config.region)
    logger.debug("Reverse UV map: %dx%d, region=%s", grid.width, grid.height, config.region)
    return uv_map


def build_scramble_map(config: ScrambleConfig) -> np.ndarray:
    grid = config.grid()
    uv_map = generate_uv_map(permutation_for(config), grid)
    logger.debug("Forward UV map: %dx%d", grid.width, grid.height)
    return uv_map
