# perlin_chunks/index_stream.py

"""
================================================================================
DETERMINISTIC INDEX STREAM
================================================================================
This module turns lattice coordinates into stable integer identities and
derives the i-th pseudorandom value of a seeded stream, without keeping any
state between calls.

Data Contract:
---------------
- Inputs:
    - seed: Any Python int (reduced modulo 2**64 before seeding NumPy).
    - index: A non-negative position in the stream.
    - x, y: Integer lattice coordinates, which may be negative.
- Outputs:
    - Floats in [0, bound) or ints in [0, bound); non-negative spiral indices.
- Side Effects: None. IndexStream only caches and counts inside one
  generation pass.
- Invariants:
    - The value at (seed, index) never depends on what was asked before it.
      Two chunks that share a lattice corner therefore derive bit-identical
      values for it.
    - point_to_spiral is a bijection from Z^2 onto the non-negative integers.
================================================================================
"""

import logging

import numpy as np

from . import config as DEFAULTS


def point_to_spiral(x: int, y: int) -> int:
    """
    Converts a Cartesian location into its index on a square spiral around
    the origin: (0,0)->0, (1,0)->1, (1,1)->2, (0,1)->3, (-1,1)->4, ...
    """
    x = int(x)
    y = int(y)
    if y * y >= x * x:
        p = 4 * y * y - y - x
        if y < x:
            p -= 2 * (y - x)
    else:
        p = 4 * x * x - y - x
        if y < x:
            p += 2 * (y - x)
    return p


def _rng(seed: int) -> np.random.Generator:
    return np.random.default_rng(_stream_seed(seed))


def _stream_seed(seed: int) -> int:
    return int(seed) & DEFAULTS.SEED_MASK


def _check_draw(index: int, bound) -> None:
    if index < 0:
        raise ValueError(f"Stream index must be non-negative, got {index}")
    if bound <= 0:
        raise ValueError(f"Stream bound must be positive, got {bound}")


def _replay(seed: int, index: int, draw):
    """
    Steps the seeded generator through draws 0..index in fixed-size batches
    and returns draw number index. Memory stays constant in the index.
    """
    rng = _rng(seed)
    remaining = int(index) + 1
    batch = DEFAULTS.STREAM_BATCH_SIZE
    while remaining > batch:
        draw(rng, batch)
        remaining -= batch
    return draw(rng, remaining)[-1]


def random_float_at_index(seed: int, index: int, bound: float) -> float:
    """
    Returns the index-th float in [0, bound) of the stream seeded by seed.
    The generator is reseeded on every call, so the cost is O(index).
    """
    _check_draw(index, bound)
    value = _replay(seed, index, lambda rng, n: rng.random(n))
    return float(value * bound)


def random_int_at_index(seed: int, index: int, bound: int) -> int:
    """Returns the index-th int in [0, bound) of the stream seeded by seed."""
    _check_draw(index, bound)
    return int(_replay(seed, index, lambda rng, n: rng.integers(0, bound, size=n)))


class IndexStream:
    """
    Memoizes stream draws for the lifetime of one generation pass.

    Neighbouring chunks and sibling octave chunks ask for the same corners
    over and over; replaying the seeded generator for each of them is the
    expensive part of generation. The cache key includes the seed, so a
    stream never hands a value from one seed to another. The request counters
    exist so callers and tests can observe which draws were made.
    """

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self._cache = {}
        self.float_requests = 0
        self.int_requests = 0
        self.cache_hits = 0

    def random_float(self, seed: int, index: int, bound: float) -> float:
        self.float_requests += 1
        key = ("float", _stream_seed(seed), int(index), float(bound))
        if key in self._cache:
            self.cache_hits += 1
            return self._cache[key]
        value = random_float_at_index(seed, index, bound)
        self._cache[key] = value
        return value

    def random_int(self, seed: int, index: int, bound: int) -> int:
        self.int_requests += 1
        key = ("int", _stream_seed(seed), int(index), int(bound))
        if key in self._cache:
            self.cache_hits += 1
            return self._cache[key]
        value = random_int_at_index(seed, index, bound)
        self._cache[key] = value
        return value

    def log_stats(self) -> None:
        self.logger.debug(
            f"Index stream: {self.float_requests} float / {self.int_requests} int requests, "
            f"{self.cache_hits} served from cache."
        )
