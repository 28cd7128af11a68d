"""
distributions.py
----------------

Deterministic "perfect" samples from reference distributions.

Instead of random draws, the quantiles at evenly spaced probabilities are
returned, so the sample has exactly the shape of the target distribution.
Useful for examples and tests that must not depend on an RNG.

Examples
--------
>>> from bayesindex.utils.distributions import distribution_normal
>>> x = distribution_normal(1000, mean=1.0, sd=1.0)
>>> x.shape
(1000,)
"""

from __future__ import annotations

import jax.numpy as jnp
from jax.scipy import stats


def _probabilities(n: int) -> jnp.ndarray:
    if n < 2:
        raise ValueError("n must be >= 2")
    return jnp.linspace(1.0 / n, 1.0 - 1.0 / n, n)


def distribution_normal(n: int, mean: float = 0.0, sd: float = 1.0) -> jnp.ndarray:
    """
    Normal quantiles at n evenly spaced probabilities in [1/n, 1 - 1/n].

    Parameters
    ----------
    n : int
        Sample size (>= 2).
    mean : float, default=0.0
    sd : float, default=1.0

    Returns
    -------
    jnp.ndarray, shape (n,)
        Sorted, symmetric about `mean`.
    """
    if sd <= 0:
        raise ValueError("sd must be positive")
    return mean + sd * stats.norm.ppf(_probabilities(n))


def distribution_uniform(n: int, low: float = 0.0, high: float = 1.0) -> jnp.ndarray:
    """Uniform quantiles at n evenly spaced probabilities in [1/n, 1 - 1/n]."""
    if high <= low:
        raise ValueError("high must be greater than low")
    return low + (high - low) * _probabilities(n)
