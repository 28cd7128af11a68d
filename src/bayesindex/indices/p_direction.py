"""
p_direction.py
--------------

Probability of Direction (pd).

pd is the share of the posterior on the dominant side of the null value
(0 by default): the certainty that an effect is positive or negative.
It ranges from 0.5 (no preferred direction) to 1 (every draw on one side).

Methods
-------
- "direct": count draws. Draws exactly equal to the null value are
  counted on the positive side, so pd = max(P(x >= null), P(x < null)).
- density methods ("kernel", "logspline", "local-polynomial"): estimate
  the density and integrate it on either side of the null value. If the
  estimator fails, a warning is emitted and the direct method is used.

References
----------
Makowski, D., Ben-Shachar, M. S., Chen, S. H. A., & Lüdecke, D. (2019).
Indices of effect existence and significance in the Bayesian framework.
Frontiers in Psychology, 10, 2767.
"""

from __future__ import annotations

from typing import Any

import jax.numpy as jnp

from bayesindex.data.draws import DrawTable, as_sample
from bayesindex.density.estimate import canonical_method, try_estimate_density
from bayesindex.indices.driver import IndexResult, apply_index, resolve_draws


def pd_direct(sample: jnp.ndarray, null: float = 0.0) -> float:
    """pd by counting draws on each side of `null` (ties go positive)."""
    n = int(sample.shape[0])
    n_pos = int(jnp.sum(sample >= null))
    return max(n_pos, n - n_pos) / n


def pd_density(
    sample: jnp.ndarray, method: str = "kernel", null: float = 0.0, **density_params: Any
) -> float:
    """pd by integrating an estimated density; falls back to `pd_direct`."""
    curve = try_estimate_density(sample, method, **density_params)
    if curve is None:
        return pd_direct(sample, null)
    above = min(max(curve.mass(null, jnp.inf), 0.0), 1.0)
    return max(above, 1.0 - above)


def p_direction(
    x: Any,
    method: str = "direct",
    null: float = 0.0,
    *,
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
    **density_params: Any,
) -> float | IndexResult:
    """
    Compute the Probability of Direction.

    Parameters
    ----------
    x : sample, DrawTable, mapping, 2-D array or ModelIntrospector
        Posterior draws.
    method : str, default="direct"
        "direct", or a density method ("kernel", "logspline",
        "local-polynomial").
    null : float, default=0.0
        Value separating the two directions.
    effects, component : str
        Parameter selection for model inputs.
    n_jobs : int, optional
        Worker threads for tables.
    **density_params
        Options for the density estimator.

    Returns
    -------
    float or IndexResult
        pd in [0.5, 1] for a sample; a table with column "pd" otherwise.

    Examples
    --------
    >>> p_direction([-1.0, -1.0, 0.0, 1.0, 1.0])
    0.6
    """
    method = canonical_method(method)

    def compute(sample: jnp.ndarray) -> float:
        if method == "direct":
            return pd_direct(sample, null)
        return pd_density(sample, method, null, **density_params)

    draws = resolve_draws(x, effects, component)
    if isinstance(draws, DrawTable):
        return apply_index(
            draws, compute, column="pd", n_jobs=n_jobs, attrs={"method": method, "null": null}
        )
    return compute(as_sample(draws))


def pd_to_p(pd: float, direction: str = "two-sided") -> float:
    """
    Convert a pd value to a frequentist-like p-value.

    Parameters
    ----------
    pd : float
        Probability of direction in [0.5, 1].
    direction : {"two-sided", "one-sided"}, default="two-sided"

    Returns
    -------
    float
        2 * (1 - pd) for two-sided, 1 - pd for one-sided.
    """
    if not 0.5 <= pd <= 1.0:
        raise ValueError(f"pd must lie in [0.5, 1], got {pd}")
    if direction in ("two-sided", "two_sided", "2"):
        return 2.0 * (1.0 - pd)
    if direction in ("one-sided", "one_sided", "1"):
        return 1.0 - pd
    raise ValueError(f"unknown direction {direction!r}")
