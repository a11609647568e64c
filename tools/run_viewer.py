#!/usr/bin/env python3
# Minimal interactive viewer for the unscrambler (reference renderer only).
# - Source: an image file, or a generated test card scrambled on the fly
# - Mesh variant: cells glide between scrambled and unscrambled layouts
# - Texture variant: instant unscramble through the reverse UV map
# - Toggle variant: T   Pause: SPACE   Quit: ESC

import argparse, logging

import numpy as np
import pygame

from uvmapper.config import DEFAULTS, ScrambleConfig
from uvmapper.mapgen.generator import build_mesh, build_remap, build_scramble_map
from uvmapper.region import parse_region
from uvmapper.render.cells import MeshPainter
from uvmapper.render.sampler import sample_nearest
from uvmapper.timing import pingpong_progress

# ---------- frames ----------
def make_test_card(width, height):
    """Gradient with a coarse checker so misplaced cells are obvious."""
    xs = np.linspace(0, 255, width, dtype=np.float32)[None, :]
    ys = np.linspace(0, 255, height, dtype=np.float32)[:, None]
    checker = (((np.arange(width)[None, :] // 64) + (np.arange(height)[:, None] // 64)) % 2) * 60
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[..., 0] = np.broadcast_to(xs, (height, width)).astype(np.uint8)
    frame[..., 1] = np.broadcast_to(ys, (height, width)).astype(np.uint8)
    frame[..., 2] = (128 + checker).astype(np.uint8)
    return frame

def load_frame(path):
    surf = pygame.image.load(path)
    # surfarray is (W, H, C); frames are (H, W, C)
    return np.transpose(pygame.surfarray.array3d(surf), (1, 0, 2))

def to_surface(frame):
    return pygame.surfarray.make_surface(np.ascontiguousarray(np.transpose(frame, (1, 0, 2))))

# ---------- viewer ----------
def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--image", type=str, default=None, help="Already-scrambled image to view")
    ap.add_argument("--seed", type=str, default=DEFAULTS.seed)
    ap.add_argument("--width", type=int, default=960, help="Test card width (ignored with --image)")
    ap.add_argument("--height", type=int, default=540, help="Test card height (ignored with --image)")
    ap.add_argument("--cell-x", type=int, default=32)
    ap.add_argument("--cell-y", type=int, default=32)
    ap.add_argument("--region", type=str, default=None, help="crop as x,y,w,h in pixels")
    ap.add_argument("--speed", type=float, default=0.2, help="Animation speed (1.0 = 2 s cycle)")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s [%(levelname)s] %(name)s | %(message)s")

    pygame.init()
    pygame.display.set_caption("UV Mapper Viewer")
    clock = pygame.time.Clock()

    if args.image:
        scrambled = load_frame(args.image)
        height, width = scrambled.shape[:2]
    else:
        width, height = args.width, args.height
        scrambled = None

    config = ScrambleConfig(
        seed=args.seed, width=width, height=height,
        cell_width=args.cell_x, cell_height=args.cell_y,
        region=parse_region(args.region),
    )
    if scrambled is None:
        scrambled = sample_nearest(make_test_card(width, height), build_scramble_map(config))

    screen = pygame.display.set_mode((width, height))
    source = to_surface(scrambled)
    painter = MeshPainter(source, build_mesh(config))
    unscrambled = to_surface(sample_nearest(scrambled, build_remap(config)))

    mode = "mesh"
    paused = False
    paused_at = 0
    offset = 0
    running = True
    while running:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key == pygame.K_t:
                    mode = "texture" if mode == "mesh" else "mesh"
                elif ev.key == pygame.K_SPACE:
                    if paused:
                        offset += pygame.time.get_ticks() - paused_at
                    else:
                        paused_at = pygame.time.get_ticks()
                    paused = not paused

        now = (paused_at if paused else pygame.time.get_ticks()) - offset
        screen.fill((0, 0, 0))
        if mode == "mesh":
            t = pingpong_progress(now, speed=args.speed)
            painter.draw(screen, t)
            label = f"t={t:.2f}"
        else:
            screen.blit(unscrambled, (0, 0))
            label = "remap"

        pygame.display.set_caption(
            f"UV Mapper Viewer — seed {config.seed!r} ({config.seed_value})  [{mode.upper()}]  {label}"
        )
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()

if __name__ == "__main__":
    main()
