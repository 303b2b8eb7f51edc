"""
Shared fixtures for the perlin_chunks test suite.

Provides: a test logger, standard possibility sets, a PerlinNoise factory
"""

import logging

import pytest

from perlin_chunks import PerlinNoise, VectorN


@pytest.fixture
def logger():
    return logging.getLogger("perlin_chunks.tests")


@pytest.fixture
def basis3():
    """The three standard basis vectors of R^3; every norm is 1."""
    return VectorN.standard_vectors(3)


@pytest.fixture
def make_noise(logger, basis3):
    """
    Factory for generators. Keyword arguments become the config dict;
    possibilities default to the R^3 basis.
    """
    def _make(possibilities=None, influence_provider=None, **config):
        return PerlinNoise(
            basis3 if possibilities is None else possibilities,
            config=config,
            logger=logger,
            influence_provider=influence_provider,
        )
    return _make
