# perlin_chunks/generator.py

"""
================================================================================
CORE NOISE GENERATOR
================================================================================
This module contains the main PerlinNoise class, responsible for generating
chunks of a multi-octave, vector-valued gradient noise field over an infinite
2D lattice.

Data Contract:
---------------
- Inputs (on initialization):
    - possibilities: The vectors an influence corner may take. All must share
      one dimension.
    - config (dict): Parameters which can override the internal defaults.
      Expected keys: 'chunk_pixel_size', 'octaves', 'lacunarity',
      'persistence'.
    - logger: A configured Python logging object for runtime messages.
    - influence_provider (optional): An InfluenceProvider override.
- Outputs (from methods):
    - ChunkResult: a (size, size, dim) NumPy array indexed [x, y, component]
      plus the max and min component over the chunk.
- Side Effects: Logs messages using the provided logger.
- Invariants:
    - Given the same seed and configuration, the value at a global lattice
      position is identical no matter which chunk produced it or in which
      order chunks were requested.
    - Every output component satisfies
      |value| <= sqrt(1/2) * (1 - p^c) / (1 - p) * max possibility norm.
================================================================================
"""

import logging
import math
import numbers
import time

import numpy as np

from . import config as DEFAULTS
from . import noise
from .exceptions import ConfigurationError
from .index_stream import IndexStream
from .influence import InfluenceProvider, PossibilityInfluence, resolve_influence
from .octave import CornerMask, OctaveChunkCoordinate, OctaveGeometry
from .vector_space import DirectedInfluence


class ChunkResult:
    """
    The generated values of a chunk (or a stitched block of chunks) together
    with the largest and smallest component found in them.
    """
    def __init__(self, values: np.ndarray, max_component: float, min_component: float, vector_type):
        values.setflags(write=False)
        self.values = values
        self.max_component = max_component
        self.min_component = min_component
        self.vector_type = vector_type

    @property
    def width(self) -> int:
        return self.values.shape[0]

    @property
    def height(self) -> int:
        return self.values.shape[1]

    def __getitem__(self, key):
        x, y = key
        return self.vector_type.from_components(self.values[x, y])

    def grid(self) -> list:
        """The values as nested lists of vectors, indexed [x][y]."""
        return [[self[x, y] for y in range(self.height)] for x in range(self.width)]

    def normalized(self, max_component: float = None, min_component: float = None) -> np.ndarray:
        """
        Rescales every component into [0, 1] using the given bounds, or the
        chunk's own max/min when they are omitted. A flat field maps to 0.
        """
        hi = self.max_component if max_component is None else max_component
        lo = self.min_component if min_component is None else min_component
        span = hi - lo
        if span == 0:
            return np.zeros_like(self.values)
        return (self.values - lo) / span

    def normalized_value(self, x: int, y: int, max_component: float = None, min_component: float = None):
        hi = self.max_component if max_component is None else max_component
        lo = self.min_component if min_component is None else min_component
        span = hi - lo
        if span == 0:
            return self.vector_type.from_components(np.zeros(self.values.shape[2]))
        return self.vector_type.from_components((self.values[x, y] - lo) / span)

    def __repr__(self) -> str:
        return (f"ChunkResult({self.width}x{self.height}, {self.vector_type.__name__}, "
                f"max={self.max_component:.6g}, min={self.min_component:.6g})")


class PerlinNoise:
    """
    Generates chunks of an infinite, deterministic, multi-octave noise field.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, possibilities, config: dict = None, logger: logging.Logger = None,
                 influence_provider: InfluenceProvider = None):
        """
        Initializes the noise generator.

        Args:
            possibilities: The set of influence vectors a corner can take.
            config (dict, optional): User-defined parameters to override defaults.
            logger (logging.Logger, optional): The logger instance for all output.
            influence_provider (InfluenceProvider, optional): Per-corner
                overrides. The possibility set is used wherever it returns None.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.user_config = config or {}
        self.logger.info("PerlinNoise initializing...")

        # --- Consolidate Configuration ---
        self.settings = {
            'chunk_pixel_size': self.user_config.get('chunk_pixel_size', DEFAULTS.DEFAULT_CHUNK_PIXEL_SIZE),
            'octaves': self.user_config.get('octaves', DEFAULTS.DEFAULT_OCTAVES),
            'lacunarity': self.user_config.get('lacunarity', DEFAULTS.DEFAULT_LACUNARITY),
            'persistence': self.user_config.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE),
        }

        if not _is_whole(self.settings['chunk_pixel_size']) or self.settings['chunk_pixel_size'] < 1:
            self._fail("Chunk pixel size must be a positive integer", 'chunk_pixel_size',
                       {'value': self.settings['chunk_pixel_size']})
        self.chunk_pixel_size = int(self.settings['chunk_pixel_size'])

        # --- Influence Vectors ---
        try:
            self.default_influence = PossibilityInfluence(possibilities)
            if influence_provider is not None:
                influence_provider.validate(self.default_influence.dimension)
        except ConfigurationError as e:
            self.logger.error(f"Invalid influence configuration: {e}")
            raise
        self.influence_provider = influence_provider

        # --- Octave Geometry ---
        self._octaves = ()
        self.set_octaves(self.settings['octaves'], self.settings['lacunarity'], self.settings['persistence'])

        self.logger.info(
            f"PerlinNoise initialized: {self.chunk_pixel_size}px chunks, "
            f"{len(self.default_influence.possibilities)} possibilities of dimension {self.dimension}"
        )

    # --- Public Properties ---
    @property
    def octaves(self) -> int:
        return self.settings['octaves']

    @property
    def lacunarity(self) -> int:
        return self.settings['lacunarity']

    @property
    def persistence(self) -> float:
        return self.settings['persistence']

    @property
    def dimension(self) -> int:
        return self.default_influence.dimension

    @property
    def vector_type(self):
        return self.default_influence.vector_type

    @property
    def geometries(self) -> tuple:
        return self._octaves

    # --- Configuration ---
    def _fail(self, message: str, setting: str, details: dict) -> None:
        self.logger.error(f"{message}: {details}")
        raise ConfigurationError(message, setting=setting, details=details)

    def set_octaves(self, octaves: int, lacunarity: int, persistence: float = None) -> None:
        """
        Sets the octaves and lacunarity (and optionally the persistence) and
        rebuilds the geometry of every octave.
        The chunk pixel size must be divisible by lacunarity^(octaves - 1).
        """
        if persistence is not None:
            persistence = self._check_persistence(persistence)
        if not _is_whole(octaves) or octaves < 1:
            self._fail("Octave count must be a positive integer", 'octaves', {'value': octaves})
        if not _is_whole(lacunarity) or lacunarity < 1:
            self._fail("Lacunarity must be a positive integer", 'lacunarity', {'value': lacunarity})
        octaves = int(octaves)
        lacunarity = int(lacunarity)

        divisor = lacunarity ** (octaves - 1)
        if self.chunk_pixel_size % divisor != 0:
            self._fail(
                "Chunk pixel size is not divisible by lacunarity^(octaves - 1)",
                'chunk_pixel_size',
                {'chunk_pixel_size': self.chunk_pixel_size, 'lacunarity': lacunarity,
                 'octaves': octaves, 'divisor': divisor},
            )

        geometries = []
        pixel_size = self.chunk_pixel_size
        for level in range(octaves):
            geometries.append(OctaveGeometry(level, pixel_size))
            pixel_size //= lacunarity

        self._octaves = tuple(geometries)
        self.settings['octaves'] = octaves
        self.settings['lacunarity'] = lacunarity
        self.logger.debug(
            f"Rebuilt {octaves} octave(s) with lacunarity {lacunarity}: "
            f"pixel sizes {[g.pixel_size for g in geometries]}"
        )

        if persistence is not None:
            self.set_persistence(persistence)

    def set_octave_count(self, octaves: int) -> None:
        """Changes only the number of octaves, keeping the lacunarity."""
        self.set_octaves(octaves, self.settings['lacunarity'])

    def set_lacunarity(self, lacunarity: int) -> None:
        """Changes only the lacunarity, keeping the number of octaves."""
        self.set_octaves(self.settings['octaves'], lacunarity)

    def _check_persistence(self, persistence) -> float:
        if isinstance(persistence, bool) or not isinstance(persistence, numbers.Real):
            self._fail("Persistence must be a real number", 'persistence', {'value': persistence})
        if not math.isfinite(persistence):
            self._fail("Persistence must be finite", 'persistence', {'value': persistence})
        return float(persistence)

    def set_persistence(self, persistence: float) -> None:
        """Sets the amplitude of each octave relative to its parent."""
        persistence = self._check_persistence(persistence)
        if abs(persistence) >= 1.0:
            self.logger.warning(
                f"Persistence {persistence} does not decay; output is no longer bounded independently of the octave count."
            )
        self.settings['persistence'] = persistence

    def component_bound(self, strict: bool = False) -> float:
        """
        The bound every output component stays under, for the configured
        possibilities. strict=True gives the bound over infinitely many
        octaves. Vectors supplied by an influence override are not included.
        """
        x = self.default_influence.max_norm()
        p = abs(self.settings['persistence'])
        if strict:
            if p >= 1.0:
                return math.inf
            return DEFAULTS.SINGLE_OCTAVE_BOUND * x / (1.0 - p)
        c = self.settings['octaves']
        if p == 1.0:
            return DEFAULTS.SINGLE_OCTAVE_BOUND * c * x
        return DEFAULTS.SINGLE_OCTAVE_BOUND * (1.0 - p ** c) / (1.0 - p) * x

    # --- Generation ---
    def corner_influences(self, seed: int, coord: OctaveChunkCoordinate, stream: IndexStream = None) -> list:
        """
        The four DirectedInfluence corners of one octave chunk, in CornerMask
        order. seed is the main seed; the octave offset is applied here.
        """
        stream = stream or IndexStream(self.logger)
        level_seed = seed + coord.level

        corners = []
        for mask, index in zip(CornerMask, coord.corner_indices()):
            angle = stream.random_float(level_seed, index, DEFAULTS.DIRECTION_ANGLE_BOUND)
            vector = resolve_influence(
                self.influence_provider, self.default_influence, stream,
                level_seed, index, mask, coord,
            )
            corners.append(DirectedInfluence.from_angle(angle, vector))
        return corners

    def generate(self, seed: int, cx: int, cy: int, consumer=None) -> ChunkResult:
        """
        Runs the noise algorithm for the chunk at (cx, cy).

        Args:
            seed (int): The seed the corner vectors are derived from.
            cx, cy (int): The chunk's lattice position.
            consumer (callable, optional): Called once with every output
                vector, in [x][y] order.

        Returns:
            ChunkResult: The chunk's values and their component max/min.
        """
        start_time = time.perf_counter()
        stream = IndexStream(self.logger)

        values = self._generate_level(seed, OctaveChunkCoordinate.main_chunk(cx, cy), stream)
        result = ChunkResult(values, float(values.max()), float(values.min()), self.vector_type)

        if consumer is not None:
            for x in range(result.width):
                for y in range(result.height):
                    consumer(result[x, y])

        stream.log_stats()
        self.logger.debug(
            f"Generated chunk ({cx}, {cy}) for seed {seed} in {time.perf_counter() - start_time:.4f}s"
        )
        return result

    def _generate_level(self, seed: int, coord: OctaveChunkCoordinate, stream: IndexStream) -> np.ndarray:
        """
        Interpolates one octave chunk and, if octaves remain, adds its
        children's tiled field scaled by the persistence.
        """
        geometry = self._octaves[coord.level]
        values = noise.interpolate_chunk(self.corner_influences(seed, coord, stream), geometry)

        if coord.level < len(self._octaves) - 1:
            values += self.settings['persistence'] * self._generate_children(seed, coord, stream)
        return values

    def _generate_children(self, seed: int, parent: OctaveChunkCoordinate, stream: IndexStream) -> np.ndarray:
        """Tiles the lacunarity x lacunarity children of a chunk into its pixel grid."""
        lacunarity = self.settings['lacunarity']
        size = self._octaves[parent.level + 1].pixel_size
        values = np.empty((size * lacunarity, size * lacunarity, self.dimension))

        for i in range(lacunarity):
            for j in range(lacunarity):
                child = parent.child(i, j, lacunarity)
                values[i * size:(i + 1) * size, j * size:(j + 1) * size] = self._generate_level(seed, child, stream)
        return values

    def generate_region(self, seed: int, cx: int, cy: int, width: int, height: int) -> ChunkResult:
        """
        Generates a width x height block of chunks starting at (cx, cy) and
        stitches them into one array with a shared max/min.
        """
        if width < 1 or height < 1:
            raise ValueError(f"A region needs at least one chunk per axis, got {width}x{height}")

        size = self.chunk_pixel_size
        values = np.empty((width * size, height * size, self.dimension))
        for i in range(width):
            for j in range(height):
                chunk = self.generate(seed, cx + i, cy + j)
                values[i * size:(i + 1) * size, j * size:(j + 1) * size] = chunk.values

        self.logger.info(f"Generated {width}x{height} chunk region at ({cx}, {cy}) for seed {seed}")
        return ChunkResult(values, float(values.max()), float(values.min()), self.vector_type)

    def __repr__(self) -> str:
        return (f"PerlinNoise(chunk_pixel_size={self.chunk_pixel_size}, octaves={self.octaves}, "
                f"lacunarity={self.lacunarity}, persistence={self.persistence})")


def _is_whole(value) -> bool:
    """True for ints and integral floats, False for bools and everything else."""
    if isinstance(value, bool):
        return False
    try:
        return int(value) == value
    except (TypeError, ValueError, OverflowError):
        return False
