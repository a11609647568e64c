from __future__ import annotations

import pygame

from ..mapgen.mesh import MeshBuffers
from .sampler import cell_rects


class MeshPainter:
    """
    Draws a source surface through the mesh at a blend scalar:
      - t=0 reproduces the source layout (scrambled frame stays scrambled)
      - t=1 moves every cell to its mapped slot
    Cells whose destination size matches the source are blitted directly;
    remainder cells are scaled.
    """
    def __init__(self, source: pygame.Surface, buffers: MeshBuffers):
        self.source = source
        self.buffers = buffers

    def draw(self, target: pygame.Surface, t: float) -> None:
        src_bounds = self.source.get_rect()
        for src, dst in cell_rects(self.buffers, t, target.get_size(), self.source.get_size()):
            src_rect = pygame.Rect(src).clip(src_bounds)
            if src_rect.width <= 0 or src_rect.height <= 0 or dst[2] <= 0 or dst[3] <= 0:
                continue
            piece = self.source.subsurface(src_rect)
            if piece.get_size() != (dst[2], dst[3]):
                piece = pygame.transform.scale(piece, (dst[2], dst[3]))
            target.blit(piece, (dst[0], dst[1]))
