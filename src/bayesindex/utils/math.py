"""
math.py
-------

Math utilities for bayesindex.

Includes:
- trapezoid : area under a sampled curve.
- integrate_curve : area under a sampled curve between two bounds.
- gaussian_pdf : standard normal kernel.

All functions use JAX (jax.numpy).

Examples
--------
>>> import jax.numpy as jnp
>>> from bayesindex.utils import math
>>> x = jnp.linspace(0.0, 2.0, 11)
>>> round(float(math.trapezoid(x, x)), 6)
2.0
"""

from __future__ import annotations

import math

import jax.numpy as jnp

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def trapezoid(y: jnp.ndarray, x: jnp.ndarray) -> jnp.ndarray:
    """
    Area under the piecewise-linear curve through (x, y).

    Parameters
    ----------
    y : jnp.ndarray, shape (N,)
    x : jnp.ndarray, shape (N,), increasing

    Returns
    -------
    jnp.ndarray
        Scalar area. Zero when fewer than two points are given.
    """
    if x.shape[0] < 2:
        return jnp.zeros((), dtype=jnp.result_type(y, 0.0))
    return jnp.sum(0.5 * (y[1:] + y[:-1]) * jnp.diff(x))


def integrate_curve(
    x: jnp.ndarray, y: jnp.ndarray, low: float = -jnp.inf, high: float = jnp.inf
) -> float:
    """
    Area under the curve (x, y) restricted to [low, high].

    The curve is treated as piecewise linear and as zero outside the grid.
    Bounds falling between grid points are handled by linear interpolation.

    Parameters
    ----------
    x : jnp.ndarray, shape (N,), increasing
    y : jnp.ndarray, shape (N,)
    low, high : float
        Integration bounds. Infinite bounds are clipped to the grid.

    Returns
    -------
    float
        Area between the clipped bounds; 0.0 if they do not overlap the grid.
    """
    lo = max(float(low), float(x[0]))
    hi = min(float(high), float(x[-1]))
    if hi <= lo:
        return 0.0

    inside = (x > lo) & (x < hi)
    xs = jnp.concatenate([jnp.array([lo]), x[inside], jnp.array([hi])])
    ys = jnp.interp(xs, x, y)
    return float(trapezoid(ys, xs))


def gaussian_pdf(u: jnp.ndarray) -> jnp.ndarray:
    """Standard normal density, used as smoothing kernel."""
    return _INV_SQRT_2PI * jnp.exp(-0.5 * u * u)
