from dataclasses import dataclass
from typing import Tuple


class InvalidDimension(ValueError):
    """Canvas or cell size that cannot be partitioned into a grid."""


@dataclass(frozen=True)
class GridGeometry:
    width: int
    height: int
    cell_width: int
    cell_height: int

    def __post_init__(self):
        for name in ("width", "height", "cell_width", "cell_height"):
            v = getattr(self, name)
            # bool is an int subclass; True is not a size.
            if not isinstance(v, int) or isinstance(v, bool):
                raise InvalidDimension(f"{name} must be an integer, got {v!r}")
            if v <= 0:
                raise InvalidDimension(f"{name} must be > 0, got {v}")

    @property
    def cell_count_x(self) -> int:
        return -(-self.width // self.cell_width)

    @property
    def cell_count_y(self) -> int:
        return -(-self.height // self.cell_height)

    @property
    def cell_count(self) -> int:
        return self.cell_count_x * self.cell_count_y

    @property
    def last_cell_width(self) -> int:
        return self.width - (self.cell_count_x - 1) * self.cell_width

    @property
    def last_cell_height(self) -> int:
        return self.height - (self.cell_count_y - 1) * self.cell_height

    def cell_xy(self, index: int) -> Tuple[int, int]:
        return index % self.cell_count_x, index // self.cell_count_x

    def cell_index(self, cx: int, cy: int) -> int:
        return cy * self.cell_count_x + cx
