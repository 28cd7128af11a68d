"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable posterior samples and draw tables shared across
  test files.

Notes
-----
- Install the package in editable mode (`pip install -e .[test]`) so that
  imports resolve the same way locally and in CI.
- Random samples always come from an explicit, seeded jax.random key.
"""

import jax.numpy as jnp
import jax.random as jr
import numpy as np
import pytest

from bayesindex import DrawTable, ModelInfo, PosteriorModel


@pytest.fixture
def standard_normal_draws():
    """10000 seeded draws from N(0, 1)."""
    return jr.normal(jr.PRNGKey(333), (10000,))


@pytest.fixture
def positive_draws():
    """10000 seeded draws from N(1, 1)."""
    return 1.0 + jr.normal(jr.PRNGKey(42), (10000,))


@pytest.fixture
def four_param_table():
    """DrawTable with 4 parameters of 100 draws each."""
    draws = np.asarray(jr.normal(jr.PRNGKey(0), (100, 4)))
    return DrawTable.from_array(draws)


@pytest.fixture
def tagged_table():
    """DrawTable with fixed / random and conditional / zero-inflated tags."""
    key1, key2, key3, key4 = jr.split(jr.PRNGKey(7), 4)
    return DrawTable(
        {
            "b_Intercept": 2.0 + jr.normal(key1, (500,)),
            "b_x": -0.5 + 0.2 * jr.normal(key2, (500,)),
            "sd_group": jnp.abs(jr.normal(key3, (500,))),
            "b_zi_Intercept": 0.05 * jr.normal(key4, (500,)),
        },
        effects={
            "b_Intercept": "fixed",
            "b_x": "fixed",
            "sd_group": "random",
            "b_zi_Intercept": "fixed",
        },
        component={
            "b_Intercept": "conditional",
            "b_x": "conditional",
            "sd_group": "conditional",
            "b_zi_Intercept": "zero_inflated",
        },
    )


@pytest.fixture
def logit_model(tagged_table):
    """In-memory logistic model over the tagged table."""
    return PosteriorModel(tagged_table, ModelInfo.from_family("binomial"))
