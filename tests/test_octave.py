import numpy as np
import pytest

from perlin_chunks import CornerMask, OctaveChunkCoordinate, OctaveGeometry


def test_geometry_samples_pixel_centres():
    g = OctaveGeometry(0, 4)
    assert g.distance_vectors.shape == (4, 4, 4, 2)
    assert np.array_equal(g.fractions, [0.125, 0.375, 0.625, 0.875])

    assert np.allclose(g.pixel_distance_vectors(CornerMask.TOP_LEFT)[0, 0], (0.125, 0.125))
    assert np.allclose(g.pixel_distance_vectors(CornerMask.TOP_RIGHT)[0, 0], (-0.875, 0.125))
    assert np.allclose(g.pixel_distance_vectors(CornerMask.BOTTOM_LEFT)[3, 0], (0.875, -0.875))
    assert np.allclose(g.pixel_distance_vectors(CornerMask.BOTTOM_RIGHT)[3, 3], (-0.125, -0.125))


def test_geometry_is_read_only():
    g = OctaveGeometry(1, 2)
    with pytest.raises(ValueError):
        g.distance_vectors[0, 0, 0, 0] = 1.0
    with pytest.raises(ValueError):
        g.fractions[0] = 0.0


def test_geometry_needs_pixels():
    with pytest.raises(ValueError):
        OctaveGeometry(3, 0)


def test_corner_masks():
    assert [m.offset for m in CornerMask] == [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert CornerMask.TOP_RIGHT.is_top and not CornerMask.TOP_RIGHT.is_left
    assert CornerMask.BOTTOM_LEFT.is_left and not CornerMask.BOTTOM_LEFT.is_top


def test_main_chunk_has_no_parent():
    root = OctaveChunkCoordinate.main_chunk(3, -2)
    assert root.parent is None
    assert root.is_main
    assert (root.level, root.rx, root.ry, root.ax, root.ay, root.span) == (0, 3, -2, 3, -2, 1)


def test_children_chain_back_to_the_main_chunk():
    root = OctaveChunkCoordinate.main_chunk(3, -2)
    child = root.child(1, 0, 2)
    grandchild = child.child(0, 1, 2)

    assert (child.level, child.ax, child.ay, child.span) == (1, 7, -4, 2)
    assert child.parent == root
    assert (grandchild.level, grandchild.ax, grandchild.ay) == (2, 14, -7)
    assert grandchild.parent == child
    assert grandchild.lineage() == (root, child, grandchild)
    assert not grandchild.is_main


def test_all_satisfy_folds_over_the_lineage():
    root = OctaveChunkCoordinate.main_chunk(0, 0)
    top_row = root.child(1, 0, 3).child(2, 0, 3)
    off_top = root.child(1, 1, 3).child(2, 0, 3)

    on_top = lambda c: c.is_main or c.ry == 0  # noqa: E731
    assert top_row.all_satisfy(on_top)
    assert not off_top.all_satisfy(on_top)


def test_corner_indices_use_the_spiral():
    assert OctaveChunkCoordinate.main_chunk(0, 0).corner_indices() == (0, 1, 3, 2)
    # the right-hand corners of (0, 0) are the left-hand corners of (1, 0)
    left = OctaveChunkCoordinate.main_chunk(0, 0).corner_indices()
    right = OctaveChunkCoordinate.main_chunk(1, 0).corner_indices()
    assert left[CornerMask.TOP_RIGHT] == right[CornerMask.TOP_LEFT]
    assert left[CornerMask.BOTTOM_RIGHT] == right[CornerMask.BOTTOM_LEFT]
