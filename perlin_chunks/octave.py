# perlin_chunks/octave.py

"""
================================================================================
OCTAVE GEOMETRY AND CHUNK COORDINATES
================================================================================
Precomputed per-octave geometry, the four corner masks of a chunk, and the
coordinate of a chunk inside the octave recursion.

Data Contract:
---------------
- OctaveGeometry(level, pixel_size):
    - distance_vectors: float array (MASK_COUNT, size, size, 2) holding, for
      every corner mask and pixel, the pixel centre minus that corner, in the
      chunk's own unit frame.
    - fractions: float array (size,) of pixel-centre positions in (0, 1).
- OctaveChunkCoordinate: (level, rx, ry, ax, ay) plus the immutable chain of
  ancestor coordinates, root first.
- Side Effects: None.
- Invariants:
    - Geometry depends only on (level, size); it is read-only and shared by
      every chunk of that octave regardless of seed or location.
    - A coordinate's parent is None exactly at level 0.
================================================================================
"""

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from . import config as DEFAULTS
from .index_stream import point_to_spiral


class CornerMask(IntEnum):
    """The four corners of a unit chunk. y grows downwards."""
    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_LEFT = 2
    BOTTOM_RIGHT = 3

    @property
    def offset(self) -> tuple[int, int]:
        """The corner's position in the unit square."""
        return _CORNER_OFFSETS[self]

    @property
    def is_top(self) -> bool:
        return self.offset[1] == 0

    @property
    def is_left(self) -> bool:
        return self.offset[0] == 0


_CORNER_OFFSETS = {
    CornerMask.TOP_LEFT: (0, 0),
    CornerMask.TOP_RIGHT: (1, 0),
    CornerMask.BOTTOM_LEFT: (0, 1),
    CornerMask.BOTTOM_RIGHT: (1, 1),
}


class OctaveGeometry:
    """
    Represents the pixel layout of a single octave chunk.
    Built once per octave on configuration and then only read.
    """
    def __init__(self, level: int, pixel_size: int):
        if pixel_size < 1:
            raise ValueError(f"Octave {level} would have a pixel size of {pixel_size}")
        self.level = level
        self.pixel_size = pixel_size

        # Pixels are sampled at their centres.
        fractions = (np.arange(pixel_size, dtype=np.float64) + 0.5) / pixel_size
        px, py = np.meshgrid(fractions, fractions, indexing="ij")

        distance_vectors = np.empty((DEFAULTS.MASK_COUNT, pixel_size, pixel_size, 2), dtype=np.float64)
        for mask in CornerMask:
            ox, oy = mask.offset
            distance_vectors[mask, :, :, 0] = px - ox
            distance_vectors[mask, :, :, 1] = py - oy

        fractions.setflags(write=False)
        distance_vectors.setflags(write=False)
        self.fractions = fractions
        self.distance_vectors = distance_vectors

    def pixel_distance_vectors(self, mask: CornerMask) -> np.ndarray:
        """The (size, size, 2) distance vectors of one corner mask."""
        return self.distance_vectors[mask]

    def __repr__(self) -> str:
        return f"OctaveGeometry(level={self.level}, pixel_size={self.pixel_size})"


@dataclass(frozen=True)
class OctaveChunkCoordinate:
    """
    Identifies one chunk inside the octave recursion.

    ax/ay are the lattice coordinates of the chunk at its own octave and are
    what corner identities are derived from. rx/ry are the position inside
    the parent chunk; at the main level they equal the chunk coordinates.
    span is how many siblings share the parent along each axis (1 at the
    main level).
    """
    level: int
    rx: int
    ry: int
    ax: int
    ay: int
    span: int = 1
    ancestors: tuple = field(default=(), repr=False)

    @classmethod
    def main_chunk(cls, cx: int, cy: int) -> "OctaveChunkCoordinate":
        return cls(0, cx, cy, cx, cy)

    def child(self, i: int, j: int, lacunarity: int) -> "OctaveChunkCoordinate":
        """The sub-chunk at (i, j) of this chunk one octave further down."""
        return OctaveChunkCoordinate(
            self.level + 1, i, j,
            self.ax * lacunarity + i, self.ay * lacunarity + j,
            span=lacunarity,
            ancestors=self.ancestors + (self,),
        )

    @property
    def parent(self):
        return self.ancestors[-1] if self.ancestors else None

    @property
    def is_main(self) -> bool:
        return not self.ancestors

    def lineage(self) -> tuple:
        """Every coordinate from the main chunk down to this one."""
        return self.ancestors + (self,)

    def all_satisfy(self, predicate) -> bool:
        """True if this coordinate and every ancestor match the predicate."""
        return all(predicate(c) for c in reversed(self.lineage()))

    def corner(self, mask: CornerMask) -> tuple[int, int]:
        """The lattice position of one corner at this octave."""
        ox, oy = mask.offset
        return self.ax + ox, self.ay + oy

    def corner_indices(self) -> tuple[int, ...]:
        """The spiral index of each corner, in CornerMask order."""
        return tuple(point_to_spiral(*self.corner(mask)) for mask in CornerMask)
