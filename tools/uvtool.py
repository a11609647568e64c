#!/usr/bin/env python3
# Command-line front end: seeds, permutations, maps and image (un)scrambling.

import argparse, logging, os, sys

import numpy as np
from PIL import Image

from uvmapper.config import DEFAULTS, ScrambleConfig
from uvmapper.grid import InvalidDimension
from uvmapper.mapgen.generator import build_mesh, build_remap, build_scramble_map, permutation_for
from uvmapper.region import RegionError, parse_region
from uvmapper.render.sampler import sample_nearest
from uvmapper.rng import string_to_seed

def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

def config_from_args(args, size=None):
    width, height = size if size is not None else (DEFAULTS.width, DEFAULTS.height)
    return ScrambleConfig(
        seed=args.seed,
        width=args.width or width,
        height=args.height or height,
        cell_width=args.cell_x,
        cell_height=args.cell_y,
        region=parse_region(getattr(args, "region", None)),
    )

def load_rgb(path):
    with Image.open(path) as img:
        return np.asarray(img.convert("RGB"))

def save_rgb(arr, path):
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(arr)).save(path)

def cmd_seed(args):
    print(string_to_seed(args.text))

def cmd_perm(args):
    perm = permutation_for(config_from_args(args))
    print("forward:", " ".join(str(v) for v in perm.forward))
    print("inverse:", " ".join(str(v) for v in perm.inverse))

def cmd_remap(args):
    uv_map = build_remap(config_from_args(args))
    np.save(args.out, uv_map)
    print(f"Wrote {args.out} {uv_map.shape}")

def cmd_mesh(args):
    buffers = build_mesh(config_from_args(args))
    np.savez(
        args.out,
        original_positions=buffers.original_positions,
        mapped_positions=buffers.mapped_positions,
        uvs=buffers.uvs,
    )
    print(f"Wrote {args.out} ({buffers.vertex_count} vertices)")

def _resample(args, build):
    frame = load_rgb(args.inp)
    h, w = frame.shape[:2]
    config = config_from_args(args, size=(w, h))
    if (config.width, config.height) != (w, h):
        print(f"[uvtool] note: image is {w}x{h}, map is {config.width}x{config.height}")
    save_rgb(sample_nearest(frame, build(config)), args.out)
    print(f"Wrote {args.out}")

def cmd_scramble(args):
    _resample(args, build_scramble_map)

def cmd_unscramble(args):
    _resample(args, build_remap)

def add_grid_args(p, region=True):
    p.add_argument('--seed', type=str, default=DEFAULTS.seed, help="seed string (digits or any text)")
    p.add_argument('--width', type=int, default=None)
    p.add_argument('--height', type=int, default=None)
    p.add_argument('--cell-x', type=int, default=DEFAULTS.cell_width)
    p.add_argument('--cell-y', type=int, default=DEFAULTS.cell_height)
    if region:
        p.add_argument('--region', type=str, default=None, help="crop as x,y,w,h in pixels")

def main(argv=None):
    p = argparse.ArgumentParser(description="UV cell scrambler")
    p.add_argument('-v', '--verbose', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)

    p1 = sub.add_parser('seed', help="print the numeric seed for a string")
    p1.add_argument('text')
    p1.set_defaults(func=cmd_seed)

    p2 = sub.add_parser('perm', help="print the cell permutation and its inverse")
    add_grid_args(p2, region=False)
    p2.set_defaults(func=cmd_perm)

    p3 = sub.add_parser('remap', help="write the unscrambling UV map as .npy")
    add_grid_args(p3)
    p3.add_argument('--out', type=str, required=True)
    p3.set_defaults(func=cmd_remap)

    p4 = sub.add_parser('mesh', help="write mesh vertex buffers as .npz")
    add_grid_args(p4)
    p4.add_argument('--out', type=str, required=True)
    p4.set_defaults(func=cmd_mesh)

    p5 = sub.add_parser('scramble', help="scramble an image")
    add_grid_args(p5, region=False)
    p5.add_argument('--in', dest='inp', type=str, required=True)
    p5.add_argument('--out', type=str, required=True)
    p5.set_defaults(func=cmd_scramble)

    p6 = sub.add_parser('unscramble', help="unscramble an image")
    add_grid_args(p6)
    p6.add_argument('--in', dest='inp', type=str, required=True)
    p6.add_argument('--out', type=str, required=True)
    p6.set_defaults(func=cmd_unscramble)

    args = p.parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except (InvalidDimension, RegionError) as e:
        raise SystemExit(f"[uvtool] {e}")

if __name__ == '__main__':
    main()
