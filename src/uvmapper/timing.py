# src/uvmapper/timing.py
"""
Animation progress helpers for renderers driving the mesh blend scalar.
The core never reads a clock; callers pass elapsed milliseconds in.
"""

import math
from typing import Callable

def ease(x: float) -> float:
    """Cubic ease-in-out on [0, 1]."""
    if x < 0.5:
        return 4 * x * x * x
    return 1 - (-2 * x + 2) ** 3 / 2

def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))

def pingpong_progress(now_ms: float, speed: float = 0.2) -> float:
    """
    Blend scalar t for a ping-pong cycle: scrambled -> unscrambled -> scrambled.
    At speed=1.0 a full cycle takes 2000 ms; the default 0.2 stretches it to 10 s.
    The middle half of each leg is eased, the ends hold at 0 and 1.
    """
    x = now_ms * speed
    secs = x / 1000 - math.floor(x / 2000) * 2   # 0 ~ 2
    mirror = min(secs, 2 - secs)                 # 0 ~ 1
    return ease(clamp01(mirror * 2 - 0.5))

def make_linear_clock(step_ms: float = 16.0, start: float = 0.0) -> Callable[[int], float]:
    """
    Deterministic millisecond provider for tests and offline rendering:
      returns start + frames * step_ms
    """
    def provider(frames: int) -> float:
        return start + frames * step_ms
    return provider
