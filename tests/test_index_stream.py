import math
import tracemalloc

import numpy as np
import pytest

from perlin_chunks import IndexStream, point_to_spiral, random_float_at_index, random_int_at_index
from perlin_chunks import config

KNOWN_SPIRAL = {
    (0, 0): 0, (1, 0): 1, (1, 1): 2, (0, 1): 3, (-1, 1): 4,
    (-1, 0): 5, (-1, -1): 6, (0, -1): 7, (1, -1): 8, (2, -1): 9,
    (2, 0): 10, (2, 1): 11, (2, 2): 12, (1, 2): 13, (2, -2): 24,
}


@pytest.mark.parametrize("point,index", sorted(KNOWN_SPIRAL.items()))
def test_spiral_known_positions(point, index):
    assert point_to_spiral(*point) == index


def test_spiral_is_a_bijection_on_square_rings():
    n = 6
    indices = [point_to_spiral(x, y) for x in range(-n, n + 1) for y in range(-n, n + 1)]
    assert sorted(indices) == list(range((2 * n + 1) ** 2))


def test_float_draw_replays_the_seeded_stream():
    expected = np.random.default_rng(7).random(6)[5] * 3.0
    assert random_float_at_index(7, 5, 3.0) == expected


def test_draws_do_not_depend_on_call_order():
    forward = [random_float_at_index(99, i, 1.0) for i in range(10)]
    backward = [random_float_at_index(99, i, 1.0) for i in reversed(range(10))]
    assert forward == list(reversed(backward))

    ints_forward = [random_int_at_index(99, i, 5) for i in range(10)]
    ints_backward = [random_int_at_index(99, i, 5) for i in reversed(range(10))]
    assert ints_forward == list(reversed(ints_backward))


def test_draws_stay_in_bounds():
    for i in range(50):
        f = random_float_at_index(3, i, 2 * math.pi)
        assert 0.0 <= f < 2 * math.pi
        assert 0 <= random_int_at_index(3, i, 4) < 4


def test_negative_seeds_are_valid_and_distinct():
    assert random_float_at_index(-1, 3, 1.0) == random_float_at_index(-1, 3, 1.0)
    assert random_float_at_index(-1, 3, 1.0) != random_float_at_index(1, 3, 1.0)


@pytest.mark.parametrize("index,bound", [(-1, 1.0), (0, 0.0), (0, -2.0)])
def test_invalid_draws_rejected(index, bound):
    with pytest.raises(ValueError):
        random_float_at_index(1, index, bound)


def test_index_stream_caches_per_pass(logger):
    stream = IndexStream(logger)
    first = stream.random_float(11, 4, 1.0)
    second = stream.random_float(11, 4, 1.0)
    assert first == second == random_float_at_index(11, 4, 1.0)
    assert stream.float_requests == 2
    assert stream.cache_hits == 1

    # a different seed is never served from another seed's entry
    assert stream.random_float(12, 4, 1.0) == random_float_at_index(12, 4, 1.0)
    assert stream.cache_hits == 1

    assert stream.random_int(11, 4, 3) == random_int_at_index(11, 4, 3)
    assert stream.int_requests == 1


@pytest.mark.parametrize("index", [0, 6, 7, 8, 13, 14, 15, 50])
def test_batched_replay_matches_a_single_draw(monkeypatch, index):
    monkeypatch.setattr(config, "STREAM_BATCH_SIZE", 7)
    assert random_float_at_index(5, index, 1.0) == np.random.default_rng(5).random(index + 1)[index]
    assert random_int_at_index(5, index, 4) == np.random.default_rng(5).integers(0, 4, size=index + 1)[index]


def test_far_lookups_use_bounded_memory():
    index = point_to_spiral(1000, 1000)
    assert index > 50 * config.STREAM_BATCH_SIZE

    tracemalloc.start()
    try:
        random_float_at_index(1, index, 1.0)
        random_int_at_index(1, index, 3)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    assert peak < 4 * 1024 * 1024


def test_cache_is_keyed_on_the_reduced_seed(logger):
    stream = IndexStream(logger)
    first = stream.random_float(5, 2, 1.0)
    assert stream.random_float(5 + 2 ** 64, 2, 1.0) == first
    assert stream.random_int(-1, 2, 3) == stream.random_int(2 ** 64 - 1, 2, 3)
    assert stream.cache_hits == 2
