# perlin_chunks/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the chunked
noise generator. These values are used if they are not explicitly provided by
the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC FIELD.
Instead, pass a configuration dictionary to the PerlinNoise instance.
================================================================================
"""

import math

# --- Seeds ---
# Seeds are reduced to this many bits before being handed to NumPy, which only
# accepts non-negative seeds. Negative 64-bit seeds stay distinct this way.
SEED_MASK = 0xFFFFFFFFFFFFFFFF
# Draws replayed per step when skipping to the index-th value of a stream.
# Peak memory of a lookup is one batch (512 KiB of float64) at any index.
STREAM_BATCH_SIZE = 65536

# --- Chunk Geometry ---
# The number of pixels on one side of a main chunk.
DEFAULT_CHUNK_PIXEL_SIZE = 256

# --- Octave Settings ---
# One octave with no subdivision is plain single-level gradient noise.
DEFAULT_OCTAVES = 1
# Sub-chunks per axis when descending one octave.
DEFAULT_LACUNARITY = 1
# Amplitude of each octave relative to the one above it.
DEFAULT_PERSISTENCE = 0.5

# --- Corner Masks ---
# Every chunk has exactly four corners, and so four masks.
MASK_COUNT = 4

# --- Influence Directions ---
# Corner directions are drawn as an angle in [0, 2*pi).
DIRECTION_ANGLE_BOUND = 2.0 * math.pi

# --- Output Bounds ---
# The largest magnitude a single octave of unit-gradient 2D noise can reach.
SINGLE_OCTAVE_BOUND = math.sqrt(0.5)

# --- Edge Pinning ---
# The names accepted by EdgePinnedInfluence.
CHUNK_EDGES = ("top", "bottom", "left", "right")
