# perlin_chunks/influence.py

"""
================================================================================
INFLUENCE VECTOR PROVIDERS
================================================================================
Decides which vector sits on each lattice corner.

Data Contract:
---------------
- Inputs:
    - seed, the corner's spiral index, the chunk location and the corner mask.
- Outputs:
    - A vector value, or None from an override to mean "use the default".
- Side Effects: None.
- Invariants: A provider must be a pure function of its inputs. A provider
  that hands out different vectors for the same (seed, spiral index) breaks
  the seam continuity between neighbouring chunks.
================================================================================
"""

from typing import Optional, Sequence

from . import config as DEFAULTS
from .exceptions import ConfigurationError
from .index_stream import IndexStream
from .octave import CornerMask, OctaveChunkCoordinate
from .vector_space import VectorSpace


class InfluenceProvider:
    """
    Override hook for corner influence vectors.
    Both methods return None by default, which falls through to the
    generator's possibility set. Subclass and override either one.
    """

    def main_influence(self, seed: int, spiral_index: int, cx: int, cy: int,
                       mask: CornerMask) -> Optional[VectorSpace]:
        """Influence vector for a corner of the main chunk, or None."""
        return None

    def octave_influence(self, seed: int, spiral_index: int, mask: CornerMask,
                         coord: OctaveChunkCoordinate) -> Optional[VectorSpace]:
        """Influence vector for a corner of a sub-octave chunk, or None."""
        return None

    def validate(self, dimension: int) -> None:
        """Called at configuration with the dimension of the possibilities."""


class PossibilityInfluence:
    """
    The default provider: picks uniformly among a fixed set of vectors using
    the index stream keyed by the corner's spiral index.
    """

    def __init__(self, possibilities: Sequence[VectorSpace]):
        possibilities = tuple(possibilities)
        if not possibilities:
            raise ConfigurationError("At least one influence possibility is required", setting="possibilities")
        dimension = possibilities[0].size
        for i, p in enumerate(possibilities):
            if p.size != dimension:
                raise ConfigurationError(
                    "All influence possibilities must share one dimension",
                    setting="possibilities",
                    details={"expected": dimension, "index": i, "found": p.size},
                )
        self.possibilities = possibilities
        self.dimension = dimension
        self.vector_type = type(possibilities[0])
        # A single possibility needs no random draw at all.
        self.run_possibilities = len(possibilities) > 1

    def pick(self, seed: int, spiral_index: int, stream: IndexStream) -> VectorSpace:
        i = 0
        if self.run_possibilities:
            i = stream.random_int(seed, spiral_index, len(self.possibilities))
        return self.possibilities[i]

    def max_norm(self) -> float:
        return max(p.norm() for p in self.possibilities)


def resolve_influence(provider: Optional[InfluenceProvider], default: PossibilityInfluence,
                      stream: IndexStream, seed: int, spiral_index: int,
                      mask: CornerMask, coord: OctaveChunkCoordinate) -> VectorSpace:
    """Asks the override first and falls back to the default on None."""
    influence = None
    if provider is not None:
        if coord.is_main:
            influence = provider.main_influence(seed, spiral_index, coord.ax, coord.ay, mask)
        else:
            influence = provider.octave_influence(seed, spiral_index, mask, coord)
    if influence is None:
        influence = default.pick(seed, spiral_index, stream)
    return influence


class EdgePinnedInfluence(InfluenceProvider):
    """
    Pins every corner lying on the chosen edges of the main chunk to a fixed
    vector, at every octave. Pinning to the zero vector forces the field to
    vanish along those edges.

    The pin is relative to whichever chunk is being generated, so the corner
    shared with the neighbour across a pinned edge is only pinned on this
    side. Use it for standalone chunks, not for seamless tiling.
    """

    def __init__(self, pinned: VectorSpace, edges: Sequence[str] = DEFAULTS.CHUNK_EDGES):
        edges = tuple(edges)
        for edge in edges:
            if edge not in DEFAULTS.CHUNK_EDGES:
                raise ConfigurationError(f"Unknown chunk edge '{edge}'", setting="edges",
                                         details={"allowed": DEFAULTS.CHUNK_EDGES})
        self.pinned = pinned
        self.edges = edges

    def validate(self, dimension: int) -> None:
        if self.pinned.size != dimension:
            raise ConfigurationError(
                "Pinned vector dimension does not match the influence possibilities",
                setting="pinned",
                details={"expected": dimension, "found": self.pinned.size},
            )

    def _on_edge(self, mask: CornerMask, coord: OctaveChunkCoordinate) -> bool:
        # A sub-chunk corner lies on the main chunk's edge only if every
        # chunk in its lineage sits on that side of its own parent.
        if "top" in self.edges and mask.is_top:
            if coord.all_satisfy(lambda c: c.is_main or c.ry == 0):
                return True
        if "bottom" in self.edges and not mask.is_top:
            if coord.all_satisfy(lambda c: c.is_main or c.ry == c.span - 1):
                return True
        if "left" in self.edges and mask.is_left:
            if coord.all_satisfy(lambda c: c.is_main or c.rx == 0):
                return True
        if "right" in self.edges and not mask.is_left:
            if coord.all_satisfy(lambda c: c.is_main or c.rx == c.span - 1):
                return True
        return False

    def main_influence(self, seed, spiral_index, cx, cy, mask):
        return self.pinned if self._on_edge(mask, OctaveChunkCoordinate.main_chunk(cx, cy)) else None

    def octave_influence(self, seed, spiral_index, mask, coord):
        return self.pinned if self._on_edge(mask, coord) else None
