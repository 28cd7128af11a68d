"""
ci.py
-----

Credible intervals of posterior draws.

- hdi: Highest Density Interval, the narrowest interval holding a share
  `ci` of the draws (computed by arviz.hdi).
- eti: Equal-Tailed Interval, bounded by the (1-ci)/2 and (1+ci)/2 quantiles.
- restrict_to_ci: the draws falling inside either interval; this is the
  subsample that rope() and equivalence_test() work on.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import arviz as az
import jax.numpy as jnp
import numpy as np

from bayesindex.config import DEFAULT_CI
from bayesindex.data.draws import DrawTable, as_sample
from bayesindex.indices.driver import IndexResult, apply_index, resolve_draws


def check_ci(ci: float) -> float:
    ci = float(ci)
    if not 0.0 < ci <= 1.0:
        raise ValueError(f"ci must lie in (0, 1], got {ci}")
    return ci


def is_ci_list(ci: Any) -> bool:
    """True for a list, tuple or 1-D array of CI levels."""
    return not isinstance(ci, str) and np.ndim(ci) == 1


def as_ci_list(ci: float | Sequence[float]) -> list[float]:
    if is_ci_list(ci):
        if len(ci) == 0:
            raise ValueError("ci must not be empty")
        return [check_ci(c) for c in ci]
    return [check_ci(ci)]


def hdi_bounds(sample: jnp.ndarray, ci: float = DEFAULT_CI) -> tuple[float, float]:
    """
    HDI of a validated sample.

    Delegates to arviz.hdi: the narrowest window spanning floor(ci * n) + 1
    sorted draws, the lowest window winning ties. ci=1 spans every draw.
    """
    x = np.asarray(sample)
    if ci >= 1.0 or x.shape[0] < 2:
        return float(x.min()), float(x.max())
    lo, hi = az.hdi(x, hdi_prob=ci)
    return float(lo), float(hi)


def eti_bounds(sample: jnp.ndarray, ci: float = DEFAULT_CI) -> tuple[float, float]:
    """Equal-tailed interval of a validated sample."""
    q = jnp.quantile(sample, jnp.array([(1.0 - ci) / 2.0, (1.0 + ci) / 2.0]))
    return float(q[0]), float(q[1])


_CI_METHODS = {"hdi": hdi_bounds, "eti": eti_bounds}


def ci_bounds(sample: jnp.ndarray, ci: float, ci_method: str = "hdi") -> tuple[float, float]:
    try:
        fn = _CI_METHODS[ci_method.lower()]
    except KeyError:
        raise ValueError(f"unknown ci_method {ci_method!r}; use 'hdi' or 'eti'") from None
    return fn(sample, ci)


def restrict_to_ci(sample: Any, ci: float = DEFAULT_CI, ci_method: str = "hdi") -> jnp.ndarray:
    """
    Draws lying inside the `ci` credible interval.

    Parameters
    ----------
    sample : array-like, shape (n,)
    ci : float, default=0.95
        Interval mass. 1 returns every draw.
    ci_method : {"hdi", "eti"}, default="hdi"

    Returns
    -------
    jnp.ndarray
        The restricted subsample (never empty).
    """
    sample = as_sample(sample)
    ci = check_ci(ci)
    if ci == 1.0:
        return sample
    lo, hi = ci_bounds(sample, ci, ci_method)
    return sample[(sample >= lo) & (sample <= hi)]


def _interval(x, ci, ci_method, effects, component, n_jobs):
    cis = as_ci_list(ci)

    def compute(sample):
        rows = []
        for c in cis:
            lo, hi = ci_bounds(sample, c, ci_method)
            rows.append({"CI": c, "CI_low": lo, "CI_high": hi})
        return rows

    draws = resolve_draws(x, effects, component)
    if isinstance(draws, DrawTable):
        return apply_index(draws, compute, n_jobs=n_jobs, attrs={"ci_method": ci_method})
    sample = as_sample(draws)
    if is_ci_list(ci):
        return IndexResult(compute(sample), attrs={"ci_method": ci_method})
    return ci_bounds(sample, cis[0], ci_method)


def hdi(
    x: Any,
    ci: float | Sequence[float] = DEFAULT_CI,
    *,
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
) -> tuple[float, float] | IndexResult:
    """
    Highest Density Interval.

    Parameters
    ----------
    x : sample, DrawTable, mapping, 2-D array or ModelIntrospector
    ci : float or sequence of float, default=0.95

    Returns
    -------
    tuple or IndexResult
        (low, high) for a sample and a single ci; otherwise a table with
        columns CI, CI_low, CI_high.

    Examples
    --------
    >>> hdi([1.0, 2.0, 3.0, 4.0, 100.0], ci=0.75)
    (1.0, 4.0)
    """
    return _interval(x, ci, "hdi", effects, component, n_jobs)


def eti(
    x: Any,
    ci: float | Sequence[float] = DEFAULT_CI,
    *,
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
) -> tuple[float, float] | IndexResult:
    """Equal-Tailed Interval; same interface as `hdi`."""
    return _interval(x, ci, "eti", effects, component, n_jobs)
