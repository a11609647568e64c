import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .grid import GridGeometry
from .region import Region, parse_region
from .rng import string_to_seed

logger = logging.getLogger(__name__)

# Property ranges of the original streaming filter (min, max).
WIDTH_RANGE = (1, 3840)
HEIGHT_RANGE = (1, 2160)
CELL_RANGE = (1, 2048)

@dataclass(frozen=True)
class ScrambleConfig:
    # Defaults mirror the filter's factory settings (16 px cells recommended).
    seed: str = "0"
    width: int = 1920
    height: int = 1080
    cell_width: int = 16
    cell_height: int = 16
    region: Optional[Region] = None

    @property
    def seed_value(self) -> int:
        return string_to_seed(self.seed)

    def grid(self) -> GridGeometry:
        return GridGeometry(self.width, self.height, self.cell_width, self.cell_height)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "ScrambleConfig":
        """
        Build a config from a settings mapping using the filter's key names
        (seed, width, height, cell_size_x, cell_size_y, region). Missing keys
        take the defaults; integers are clamped to the property ranges.
        """
        d = DEFAULTS
        return cls(
            seed=str(settings.get("seed", d.seed)),
            width=_clamped(settings, "width", d.width, WIDTH_RANGE),
            height=_clamped(settings, "height", d.height, HEIGHT_RANGE),
            cell_width=_clamped(settings, "cell_size_x", d.cell_width, CELL_RANGE),
            cell_height=_clamped(settings, "cell_size_y", d.cell_height, CELL_RANGE),
            region=parse_region(settings.get("region")),
        )

def _clamped(settings: Mapping[str, Any], key: str, default: int, bounds) -> int:
    value = int(settings.get(key, default))
    lo, hi = bounds
    if not lo <= value <= hi:
        clamped = max(lo, min(hi, value))
        logger.warning("Setting %s=%d out of range %d..%d, using %d", key, value, lo, hi, clamped)
        return clamped
    return value

DEFAULTS = ScrambleConfig()
