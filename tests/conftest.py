"""Pytest configuration and fixtures for bayesplot tests."""

import numpy as np
import pandas as pd
import pytest

import bayesplot as bp

N_OBS = 40
N_DRAWS = 12


@pytest.fixture(autouse=True)
def reset_globals():
    """Restore the default color scheme and seed the global RNG for every test."""
    bp.color_scheme_set("blue")
    bp.manual_seed(1234)
    yield
    bp.color_scheme_set("blue")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240101)


@pytest.fixture
def example_y_data(rng) -> np.ndarray:
    """Observed data: N draws from a normal distribution."""
    return rng.normal(loc=1.0, scale=2.0, size=N_OBS)


@pytest.fixture
def example_yrep_draws(rng) -> np.ndarray:
    """Replicated data with shape (S, N)."""
    return rng.normal(loc=1.0, scale=2.0, size=(N_DRAWS, N_OBS))


@pytest.fixture
def example_group_data() -> pd.Categorical:
    """Grouping variable whose level order differs from the sorted order."""
    labels = np.array(["GroupB", "GroupA", "GroupC", "GroupD"])
    return pd.Categorical(
        np.repeat(labels, N_OBS // len(labels)),
        categories=["GroupB", "GroupA", "GroupC", "GroupD"],
    )


@pytest.fixture
def example_lw(rng) -> np.ndarray:
    """Unnormalized log importance weights with the shape of the replicates."""
    return rng.normal(scale=0.5, size=(N_DRAWS, N_OBS))


@pytest.fixture
def small_y() -> np.ndarray:
    return np.array([1.0, 2.0, 3.0])


@pytest.fixture
def small_yrep() -> np.ndarray:
    return np.array([[1.5, 2.5, 2.0], [0.5, 3.5, 4.0]])
