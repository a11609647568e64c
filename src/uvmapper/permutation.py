# src/uvmapper/permutation.py
# Seeded cell permutation shared by the mesh (forward) and remap (inverse) paths.

from dataclasses import dataclass
from typing import List, MutableSequence, Optional, Sequence, Tuple

from .rng import LCGRandom


def shuffle(seq: MutableSequence, seed: int) -> MutableSequence:
    """
    Forward Fisher-Yates driven by LCGRandom. The modulus is the length of the
    remaining suffix, so j always lands in [i, n-1]. Shuffles in place and
    returns seq for convenience.
    """
    rng = LCGRandom(seed)
    n = len(seq)
    for i in range(n):
        j = i + rng.next() % (n - i)
        seq[i], seq[j] = seq[j], seq[i]
    return seq


def invert(perm: Sequence[int]) -> List[Optional[int]]:
    # Non-bijective input leaves None in the unvisited slots.
    inverse: List[Optional[int]] = [None] * len(perm)
    for i, v in enumerate(perm):
        inverse[v] = i
    return inverse


def is_bijection(seq: Sequence[int]) -> bool:
    return sorted(seq) == list(range(len(seq)))


@dataclass(frozen=True)
class Permutation:
    forward: Tuple[int, ...]
    inverse: Tuple[int, ...]

    def __post_init__(self):
        assert is_bijection(self.forward), "permutation is not a bijection"
        assert all(self.inverse[v] == i for i, v in enumerate(self.forward)), \
            "inverse does not undo forward"

    @classmethod
    def from_forward(cls, forward: Sequence[int]) -> "Permutation":
        forward = tuple(forward)
        return cls(forward=forward, inverse=tuple(invert(forward)))

    def __len__(self) -> int:
        return len(self.forward)

    def permute(self, i: int) -> int:
        """Destination cell of original cell i."""
        return self.forward[i]

    def unpermute(self, i: int) -> int:
        """Original cell that lands on destination cell i."""
        return self.inverse[i]


def build_permutation(seed: int, n: int) -> Permutation:
    if n < 1:
        raise ValueError("n must be >= 1")
    return Permutation.from_forward(shuffle(list(range(n)), seed))
