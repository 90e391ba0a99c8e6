"""Pytest configuration and shared fixtures for newtonstep tests.

This module provides:
- A deterministic numpy RNG fixture
- Isolation of the global scalar-precision and singularity settings
"""

import os
from typing import Iterator

import numpy as np
import pytest

from newtonstep import config


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def default_numeric_config() -> Iterator[None]:
    """Run every test in float64 with the default singularity threshold."""
    factor = config.get_singular_rcond_factor()
    with config.precision_context("float64"):
        yield
    config.set_singular_rcond_factor(factor)
