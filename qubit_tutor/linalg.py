# qubit_tutor/linalg.py
import math
from typing import Sequence, Tuple

from .complexmath import ZERO, add, mul, conj, abs2, scale

Vec2 = Tuple[complex, complex]


class ZeroNormError(ValueError):
    pass


def inner(u: Sequence[complex], v: Sequence[complex]) -> complex:
    """<u|v> = sum_i conj(u_i) * v_i"""
    acc = ZERO
    for ui, vi in zip(u, v):
        acc = add(acc, mul(conj(ui), vi))
    return acc

def _entry(m, row: int, col: int) -> complex:
    # missing entries count as zero
    try:
        z = m[row][col]
    except (IndexError, KeyError, TypeError):
        return ZERO
    return ZERO if z is None else complex(z)

def mat_vec(m, v: Sequence[complex]) -> Vec2:
    """2x2 matrix times 2-vector, same pairwise update as the state kernel."""
    a0 = complex(v[0])
    a1 = complex(v[1])
    out0 = add(mul(_entry(m, 0, 0), a0), mul(_entry(m, 0, 1), a1))
    out1 = add(mul(_entry(m, 1, 0), a0), mul(_entry(m, 1, 1), a1))
    return out0, out1

def norm(v: Sequence[complex]) -> float:
    return math.sqrt(sum(abs2(complex(z)) for z in v))

def normalize(v: Sequence[complex]) -> Vec2:
    n = norm(v)
    if not math.isfinite(n) or n == 0.0:
        raise ZeroNormError(f"Cannot normalize vector with norm {n}")
    return scale(complex(v[0]), 1.0 / n), scale(complex(v[1]), 1.0 / n)
