"""Small numeric helpers: random permutations, set-membership to CSR, integer logs."""

from __future__ import annotations

import math
import random
from collections.abc import MutableSequence, Sequence
from typing import Any


def random_permute(values: MutableSequence[Any], rng: random.Random | None = None) -> MutableSequence[Any]:
    """Shuffle ``values`` in place with len(values)//2 random swaps and return it."""
    rng = rng if rng is not None else random.Random()
    n = len(values)
    for _ in range(n // 2):
        v = rng.randrange(n)
        u = rng.randrange(n)
        values[v], values[u] = values[u], values[v]
    return values


def identity_permutation(n: int, rng: random.Random | None = None) -> list[int]:
    """Return ``range(n)`` as a list, randomly permuted by :func:`random_permute`."""
    if n < 0:
        raise ValueError("n must be non-negative")
    perm = list(range(n))
    random_permute(perm, rng)
    return perm


def array_to_csr(membership: Sequence[int], nsets: int) -> tuple[list[int], list[int]]:
    """Convert per-element set membership into CSR form.

    Returns ``(ptr, ind)`` where the elements of set ``s`` are
    ``ind[ptr[s]:ptr[s + 1]]``, listed in increasing element order.
    """
    counts = [0] * (nsets + 1)
    for s in membership:
        if not 0 <= s < nsets:
            raise ValueError(f"set id {s} outside range [0, {nsets})")
        counts[s + 1] += 1
    ptr = [0] * (nsets + 1)
    for s in range(nsets):
        ptr[s + 1] = ptr[s] + counts[s + 1]
    cursor = ptr[:-1]
    ind = [0] * len(membership)
    for element, s in enumerate(membership):
        ind[cursor[s]] = element
        cursor[s] += 1
    return ptr, ind


def log2(a: int) -> int:
    """Floor of the base-2 logarithm of ``a``; 0 for any ``a`` <= 1."""
    return a.bit_length() - 1 if a > 1 else 0


def is_pow2(a: int) -> bool:
    """Tell whether ``a`` is a power of two."""
    return a == 1 << log2(a)


def flog2(a: float) -> float:
    """Base-2 logarithm of a positive number."""
    if a <= 0:
        raise ValueError("flog2 requires a positive argument")
    return math.log(a) / math.log(2.0)