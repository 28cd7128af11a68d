"""
estimate.py
-----------

Name-based selection of density estimators.

Connections
-----------
- p_direction, rope and map_estimate call `try_estimate_density`, which
  turns an estimator failure into a warning so the caller can fall back
  to counting draws directly.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any

import jax.numpy as jnp

from bayesindex.data.draws import as_sample
from bayesindex.density.base import DensityCurve, DensityEstimator
from bayesindex.density.kernel import KernelDensity
from bayesindex.density.local_polynomial import LocalPolynomialDensity
from bayesindex.density.logspline import LogsplineDensity
from bayesindex.errors import DensityEstimationError

logger = logging.getLogger(__name__)

ESTIMATORS: dict[str, type] = {
    "kernel": KernelDensity,
    "logspline": LogsplineDensity,
    "local-polynomial": LocalPolynomialDensity,
}

_ALIASES = {
    "kde": "kernel",
    "local_polynomial": "local-polynomial",
    "locpoly": "local-polynomial",
}


def canonical_method(method: str) -> str:
    """
    Normalize an index computation method name.

    Returns "direct" or the registered name of a density estimator.

    Raises
    ------
    ValueError
        If `method` is neither "direct" nor a known estimator.
    """
    key = method.lower()
    if key == "direct":
        return key
    key = _ALIASES.get(key, key)
    if key not in ESTIMATORS:
        raise ValueError(
            f"unknown method {method!r}; expected 'direct' or one of {sorted(ESTIMATORS)}"
        )
    return key


def get_estimator(method: str = "kernel", **params: Any) -> DensityEstimator:
    """
    Instantiate the estimator registered under `method`.

    Parameters
    ----------
    method : str, default="kernel"
        "kernel", "logspline" or "local-polynomial" (aliases: "kde",
        "locpoly", "local_polynomial").
    **params
        Passed to the estimator constructor (e.g. bandwidth, precision).

    Raises
    ------
    ValueError
        If `method` is not a known estimator.
    """
    key = _ALIASES.get(method.lower(), method.lower())
    try:
        cls = ESTIMATORS[key]
    except KeyError:
        raise ValueError(
            f"unknown density method {method!r}; expected one of {sorted(ESTIMATORS)}"
        ) from None
    return cls(**params)


def estimate_density(sample: Any, method: str = "kernel", **params: Any) -> DensityCurve:
    """
    Estimate the density of a posterior sample.

    Parameters
    ----------
    sample : array-like, shape (n,)
        Posterior draws.
    method : str, default="kernel"
        Estimator name, see `get_estimator`.
    **params
        Estimator options.

    Returns
    -------
    DensityCurve

    Raises
    ------
    InvalidSampleError
        If the sample is empty or has no finite values.
    DensityEstimationError
        If the estimator cannot fit the sample.

    Examples
    --------
    >>> import jax.random as jr
    >>> x = jr.normal(jr.PRNGKey(0), (1000,))
    >>> curve = estimate_density(x, method="kernel", precision=256)
    >>> len(curve)
    256
    """
    estimator = get_estimator(method, **params)
    return estimator.estimate(as_sample(sample))


def try_estimate_density(
    sample: jnp.ndarray, method: str = "kernel", **params: Any
) -> DensityCurve | None:
    """
    Like `estimate_density`, but warn and return None if the fit fails.

    `sample` must already be validated (see data.draws.as_sample).
    """
    estimator = get_estimator(method, **params)
    try:
        return estimator.estimate(sample)
    except DensityEstimationError as exc:
        warnings.warn(
            f"Density estimation with method '{method}' failed ({exc}); "
            "falling back to the direct method.",
            UserWarning,
            stacklevel=3,
        )
        logger.debug("density fallback for method=%s: %s", method, exc)
        return None
