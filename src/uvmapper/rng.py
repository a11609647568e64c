import re
from dataclasses import dataclass
from typing import Union

A = 1103515245
C = 12345
MASK32 = 0xFFFFFFFF
MASK31 = 0x7FFFFFFF  # low 31 bits are the output

_NUMERIC_SEED = re.compile(r"[0-9]{1,10}")

def lcg_next(state: int) -> int:
    return (state * A + C) & MASK32

@dataclass
class LCGRandom:
    state: int

    def __post_init__(self):
        self.state &= MASK32

    def next(self) -> int:
        self.state = lcg_next(self.state)
        return self.state & MASK31

def hashcode(s: Union[str, bytes]) -> int:
    """
    31-multiplier string hash over the UTF-8 bytes of s, wrapped to 32 bits.
    Bytes, not code points: "é" hashes as 0xC3, 0xA9.
    """
    data = s.encode("utf-8") if isinstance(s, str) else s
    h = 0
    for b in data:
        h = (h * 31 + b) & MASK32
    return h

def string_to_seed(s: str) -> int:
    # 1..10 ASCII digits that fit in 32 bits are taken literally; anything
    # else (including "4294967296") goes through hashcode.
    if _NUMERIC_SEED.fullmatch(s):
        n = int(s)
        if n <= MASK32:
            return n
    return hashcode(s)
