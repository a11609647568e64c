# tests/test_remap.py
import numpy as np
import pytest

from uvmapper.config import ScrambleConfig
from uvmapper.grid import GridGeometry
from uvmapper.mapgen.generator import build_remap, build_scramble_map, permutation_for
from uvmapper.mapgen.mesh import generate_buffers
from uvmapper.mapgen.remap import generate_reverse_uv_map, generate_uv_map, region_quad
from uvmapper.permutation import build_permutation
from uvmapper.region import Region, crop_mappers
from uvmapper.render.sampler import sample_nearest

def random_frame(w, h, seed=0):
    rng = np.random.RandomState(seed)
    return rng.randint(0, 256, (h, w, 3), dtype=np.uint8)

def test_reverse_map_golden_4x4_seed0():
    uv = build_remap(ScrambleConfig(seed="0", width=4, height=4, cell_width=2, cell_height=2))
    assert uv.shape == (4, 4, 2) and uv.dtype == np.float32
    # inverse permutation (3, 0, 1, 2)
    assert uv[0, 0].tolist() == [0.625, 0.625]
    assert uv[0, 3].tolist() == [0.375, 0.125]
    assert uv[3, 0].tolist() == [0.625, 0.375]
    assert uv[3, 3].tolist() == [0.375, 0.875]

def test_reverse_map_in_unit_square_with_remainders():
    grid = GridGeometry(10, 10, 4, 4)
    for seed in (0, 1, 42, 96354):
        uv = generate_reverse_uv_map(build_permutation(seed, grid.cell_count), grid)
        assert uv.min() > 0.0 and uv.max() <= 1.0, f"seed {seed}"

def test_reverse_map_compresses_into_remainder_cell():
    grid = GridGeometry(10, 10, 4, 4)
    perm = build_permutation(0, grid.cell_count)
    uv = generate_reverse_uv_map(perm, grid)
    # a full-width destination cell whose source is in the last column
    for dest in range(grid.cell_count):
        mx, _ = grid.cell_xy(perm.unpermute(dest))
        dx, dy = grid.cell_xy(dest)
        if mx == 2 and dx < 2:
            us = uv[dy * 4, dx * 4: dx * 4 + 4, 0] * 10 - 0.5
            # 4 output pixels read 2 source pixels at half-pixel steps
            np.testing.assert_allclose(us, [8.0, 8.5, 9.0, 9.5], atol=1e-5)
            break
    else:
        pytest.fail("no cell maps from the last column")

def test_scramble_then_unscramble_restores_frame():
    cfg = ScrambleConfig(seed="ganlvtech", width=64, height=48, cell_width=16, cell_height=8)
    frame = random_frame(64, 48)
    scrambled = sample_nearest(frame, build_scramble_map(cfg))
    assert not np.array_equal(scrambled, frame)
    restored = sample_nearest(scrambled, build_remap(cfg))
    np.testing.assert_array_equal(restored, frame)

def test_scrambled_cells_come_from_permuted_cells():
    cfg = ScrambleConfig(seed="7", width=32, height=32, cell_width=8, cell_height=8)
    grid = cfg.grid()
    perm = permutation_for(cfg)
    frame = random_frame(32, 32, seed=3)
    scrambled = sample_nearest(frame, build_scramble_map(cfg))
    for c in range(grid.cell_count):
        cx, cy = grid.cell_xy(c)
        sx, sy = grid.cell_xy(perm.permute(c))
        np.testing.assert_array_equal(
            scrambled[cy * 8:(cy + 1) * 8, cx * 8:(cx + 1) * 8],
            frame[sy * 8:(sy + 1) * 8, sx * 8:(sx + 1) * 8],
        )

def test_region_crop_matches_crop_mapper():
    grid = GridGeometry(64, 48, 16, 16)
    perm = build_permutation(5, grid.cell_count)
    r = Region(4, 6, 40, 30)
    plain = generate_reverse_uv_map(perm, grid)
    cropped = generate_reverse_uv_map(perm, grid, r)
    fx, fy = crop_mappers(r, 64, 48)
    np.testing.assert_allclose(cropped[..., 0], fx(plain[..., 0].astype(np.float64)), atol=1e-6)
    np.testing.assert_allclose(cropped[..., 1], fy(plain[..., 1].astype(np.float64)), atol=1e-6)

def test_region_crop_agrees_with_mesh_uvs():
    # The mesh and the remap image crop through independent code paths; for the
    # same region they must point at the same source texel for every cell.
    grid = GridGeometry(64, 48, 16, 16)
    perm = build_permutation(5, grid.cell_count)
    r = Region(4, 6, 40, 30)
    uv = generate_reverse_uv_map(perm, grid, r)
    mesh = generate_buffers(perm, grid, r)
    half_u = r.width * 0.5 / 64 / 64
    half_v = r.height * 0.5 / 48 / 48
    for c in range(grid.cell_count):
        dx, dy = grid.cell_xy(perm.permute(c))
        left_top = mesh.uvs[6 * c + 1]
        texel = uv[dy * 16, dx * 16]
        assert texel[0] - half_u == pytest.approx(left_top[0], abs=1e-6)
        assert texel[1] - half_v == pytest.approx(left_top[1], abs=1e-6)

def test_forward_map_stretches_source_into_remainder_column():
    grid = GridGeometry(10, 4, 4, 4)
    perm = build_permutation(0, grid.cell_count)
    uv = generate_uv_map(perm, grid)
    # output columns 8, 9 are the remainder cell; stride is 4/2 = 2 source px
    mx, _ = grid.cell_xy(perm.permute(2))
    np.testing.assert_allclose(uv[0, 8:10, 0] * 10 - 0.5, [mx * 4, mx * 4 + 2], atol=1e-5)

def test_maps_are_read_only_and_deterministic():
    cfg = ScrambleConfig(seed="hello", width=40, height=30, cell_width=8, cell_height=8)
    a, b = build_remap(cfg), build_remap(cfg)
    np.testing.assert_array_equal(a, b)
    with pytest.raises(ValueError):
        a[0, 0, 0] = 0.0

def test_region_quad():
    grid = GridGeometry(1920, 1080, 32, 32)
    pos, uvs = region_quad(None, grid)
    np.testing.assert_allclose(pos, [(1, 1), (-1, 1), (1, -1), (-1, -1)])
    np.testing.assert_array_equal(uvs, [(1, 0), (0, 0), (1, 1), (0, 1)])

    pos, _ = region_quad(Region(24, 36, 1552, 873), grid)
    left, top = -1 + 2 * 24 / 1920, 1 - 2 * 36 / 1080
    right, bottom = -1 + 2 * 1576 / 1920, 1 - 2 * 909 / 1080
    np.testing.assert_allclose(pos, [(right, top), (left, top), (right, bottom), (left, bottom)], atol=1e-6)
