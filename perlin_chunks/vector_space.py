# perlin_chunks/vector_space.py

"""
================================================================================
VECTOR SPACE VALUES
================================================================================
This module defines the algebraic contract every value produced or consumed by
the noise generator must satisfy, together with NumPy-backed implementations
of it.

Data Contract:
---------------
- Inputs:
    - Float components (any sequence or 1D array).
- Outputs:
    - Immutable vector values. Every operation returns a new value; stored
      components are read-only NumPy arrays, so no value can be aliased and
      then changed behind another owner's back.
- Side Effects: None.
- Invariants:
    - add, sub, scale, dot and lerp are closed over the value type.
    - lerp(a, b, 0) == a and lerp(a, b, 1) == b.
    - Combining vectors of different dimension raises DimensionMismatchError;
      nothing is ever truncated or padded.
================================================================================
"""

import math
from typing import Protocol, TypeVar

import numpy as np

from .exceptions import DimensionMismatchError

E = TypeVar("E", bound="VectorSpace")


class VectorSpace(Protocol):
    """
    A protocol for an inner-product vector space over the floats.

    The generator works on the component arrays of these values for speed, so
    besides the arithmetic an implementation must be able to expose its
    components and to rebuild itself from a component array.
    """
    def add(self: E, other: E) -> E: ...
    def sub(self: E, other: E) -> E: ...
    def scale(self: E, factor: float) -> E: ...
    def dot(self: E, other: E) -> float: ...
    def lerp(self: E, other: E, t: float) -> E: ...

    @property
    def size(self) -> int: ...

    @property
    def components(self) -> np.ndarray: ...

    @classmethod
    def from_components(cls: type[E], components) -> E: ...


def assert_compatible(a: VectorSpace, b: VectorSpace) -> None:
    """Ensures vector operations can be performed between two vectors."""
    if a.size != b.size:
        raise DimensionMismatchError(a.size, b.size)


class VectorN:
    """A vector of n float components."""

    __slots__ = ("_vec",)

    # Subclasses with a fixed dimension set this.
    DIMENSION = None

    def __init__(self, *components):
        # Accept both VectorN(1, 2, 3) and VectorN([1, 2, 3]).
        if len(components) == 1 and np.ndim(components[0]) == 1:
            components = components[0]
        self._vec = self._freeze(components)

    @classmethod
    def _freeze(cls, components) -> np.ndarray:
        vec = np.array(components, dtype=np.float64)
        if vec.ndim != 1 or vec.size == 0:
            raise ValueError(f"A vector needs a non-empty 1D list of components, got shape {vec.shape}")
        if cls.DIMENSION is not None and vec.size != cls.DIMENSION:
            raise DimensionMismatchError(cls.DIMENSION, vec.size, {"type": cls.__name__})
        vec.setflags(write=False)
        return vec

    @classmethod
    def from_components(cls, components):
        """Builds a vector of this type directly from a component array (copied)."""
        obj = object.__new__(cls)
        obj._vec = cls._freeze(components)
        return obj

    @classmethod
    def const(cls, size: int, f: float):
        """A vector with every component equal to f."""
        return cls.from_components(np.full(size, f, dtype=np.float64))

    @classmethod
    def zero(cls, size: int):
        return cls.const(size, 0.0)

    @classmethod
    def standard_vectors(cls, size: int) -> list:
        """All standard basis vectors of a dimension; the i-th entry is e_i."""
        return [cls.from_components(row) for row in np.eye(size, dtype=np.float64)]

    # --- Properties ---
    @property
    def size(self) -> int:
        return int(self._vec.size)

    @property
    def components(self) -> np.ndarray:
        """The read-only component array."""
        return self._vec

    def norm(self) -> float:
        return float(np.linalg.norm(self._vec))

    # --- Vector Space Operations ---
    def add(self, other):
        assert_compatible(self, other)
        return self.from_components(self._vec + other.components)

    def sub(self, other):
        assert_compatible(self, other)
        return self.from_components(self._vec - other.components)

    def scale(self, factor: float):
        return self.from_components(self._vec * float(factor))

    def dot(self, other) -> float:
        assert_compatible(self, other)
        return float(np.dot(self._vec, other.components))

    def lerp(self, other, t: float):
        """Linear interpolation; exactly self at t=0 and other at t=1."""
        assert_compatible(self, other)
        t = float(t)
        return self.from_components(self._vec * (1.0 - t) + other.components * t)

    # --- Python Protocols ---
    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.sub(other)

    def __neg__(self):
        return self.scale(-1.0)

    def __mul__(self, factor):
        if isinstance(factor, VectorN):
            return NotImplemented
        return self.scale(factor)

    __rmul__ = __mul__

    def __truediv__(self, factor):
        return self.scale(1.0 / factor)

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, i) -> float:
        return float(self._vec[i])

    def __iter__(self):
        return (float(c) for c in self._vec)

    def __eq__(self, other) -> bool:
        if not isinstance(other, VectorN):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._vec, other.components))

    def __hash__(self) -> int:
        return hash(tuple(self._vec.tolist()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(float(c)) for c in self._vec)})"


class Scalar(VectorN):
    """A one-dimensional vector; a plain float field."""

    __slots__ = ()
    DIMENSION = 1

    def __init__(self, value: float):
        super().__init__(value)

    @property
    def value(self) -> float:
        return float(self._vec[0])


class Color3(VectorN):
    """A three-component color vector. Components are unbounded floats."""

    __slots__ = ()
    DIMENSION = 3

    def __init__(self, r: float, g: float, b: float):
        super().__init__(r, g, b)

    @classmethod
    def from_rgb255(cls, r: int, g: int, b: int) -> "Color3":
        """Create a color from 8-bit channels, scaled into [0, 1]."""
        return cls(r / 255.0, g / 255.0, b / 255.0)

    @property
    def r(self) -> float:
        return float(self._vec[0])

    @property
    def g(self) -> float:
        return float(self._vec[1])

    @property
    def b(self) -> float:
        return float(self._vec[2])


class DirectedInfluence:
    """
    A unit 2D direction paired with an influence vector.

    Dotting it with a 2D distance vector projects the distance onto the
    direction and scales the influence vector by the result.
    """

    __slots__ = ("direction", "vector")

    def __init__(self, direction, vector: VectorSpace):
        direction = np.array(direction, dtype=np.float64)
        if direction.shape != (2,):
            raise ValueError(f"A direction must have exactly two components, got shape {direction.shape}")
        direction.setflags(write=False)
        self.direction = direction
        self.vector = vector

    @classmethod
    def from_angle(cls, angle: float, vector: VectorSpace) -> "DirectedInfluence":
        return cls((math.cos(angle), math.sin(angle)), vector)

    @property
    def a(self) -> VectorSpace:
        """The influence vector scaled by the x component of the direction."""
        return self.vector.scale(self.direction[0])

    @property
    def b(self) -> VectorSpace:
        """The influence vector scaled by the y component of the direction."""
        return self.vector.scale(self.direction[1])

    def dot(self, distance) -> VectorSpace:
        """a * dx + b * dy, the distance projected onto the direction times the vector."""
        dx, dy = distance
        return self.a.scale(dx).add(self.b.scale(dy))

    def __repr__(self) -> str:
        return f"DirectedInfluence(direction={self.direction.tolist()}, vector={self.vector!r})"
