# combinatorics.py
from typing import Sequence, Tuple

Edge = Tuple[int, int]
Simplex = Tuple[int, ...]


def canon_edge(a: int, b: int) -> Edge:
    a, b = int(a), int(b)
    return (a, b) if a < b else (b, a)


def canon_simplex(vertices: Sequence[int]) -> Simplex:
    return tuple(sorted(int(v) for v in vertices))
