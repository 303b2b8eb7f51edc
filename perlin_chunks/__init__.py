# perlin_chunks/__init__.py

# Public API of the chunked noise generator.

from .exceptions import ConfigurationError, DimensionMismatchError, PerlinChunksError
from .generator import ChunkResult, PerlinNoise
from .index_stream import IndexStream, point_to_spiral, random_float_at_index, random_int_at_index
from .influence import EdgePinnedInfluence, InfluenceProvider, PossibilityInfluence
from .noise import interpolate_at, interpolate_chunk, smoothstep
from .octave import CornerMask, OctaveChunkCoordinate, OctaveGeometry
from .vector_space import Color3, DirectedInfluence, Scalar, VectorN, VectorSpace

__all__ = [
    "ChunkResult",
    "Color3",
    "ConfigurationError",
    "CornerMask",
    "DimensionMismatchError",
    "DirectedInfluence",
    "EdgePinnedInfluence",
    "IndexStream",
    "InfluenceProvider",
    "OctaveChunkCoordinate",
    "OctaveGeometry",
    "PerlinChunksError",
    "PerlinNoise",
    "PossibilityInfluence",
    "Scalar",
    "VectorN",
    "VectorSpace",
    "interpolate_at",
    "interpolate_chunk",
    "point_to_spiral",
    "random_float_at_index",
    "random_int_at_index",
    "smoothstep",
]
