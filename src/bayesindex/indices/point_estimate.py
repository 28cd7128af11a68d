"""
point_estimate.py
-----------------

Point estimates of posterior draws: median, mean and MAP (the mode of
the estimated density).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import jax.numpy as jnp

from bayesindex.data.draws import DrawTable, as_sample
from bayesindex.density.estimate import canonical_method, try_estimate_density
from bayesindex.indices.driver import IndexResult, apply_index, resolve_draws

_CENTRALITY = ("median", "mean", "map")


def map_value(sample: jnp.ndarray, method: str = "kernel", **density_params: Any) -> float:
    """
    Maximum A Posteriori estimate of a validated sample.

    Falls back to the median (with a warning) if the density fit fails.
    """
    curve = try_estimate_density(sample, method, **density_params)
    if curve is None:
        return float(jnp.median(sample))
    return curve.mode()


def map_estimate(
    x: Any,
    method: str = "kernel",
    *,
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
    **density_params: Any,
) -> float | IndexResult:
    """
    Maximum A Posteriori (MAP) estimate: the peak of the posterior density.

    Parameters
    ----------
    x : sample, DrawTable, mapping, 2-D array or ModelIntrospector
    method : str, default="kernel"
        Density method ("direct" is not allowed here).

    Returns
    -------
    float or IndexResult
        MAP for a sample; a table with column "MAP_Estimate" otherwise.
    """
    method = canonical_method(method)
    if method == "direct":
        raise ValueError("map_estimate needs a density method")

    def compute(sample):
        return map_value(sample, method, **density_params)

    draws = resolve_draws(x, effects, component)
    if isinstance(draws, DrawTable):
        return apply_index(draws, compute, column="MAP_Estimate", n_jobs=n_jobs)
    return compute(as_sample(draws))


def centrality_list(centrality: str | Sequence[str]) -> list[str]:
    if isinstance(centrality, str):
        centrality = _CENTRALITY if centrality == "all" else [centrality]
    out = [c.lower() for c in centrality]
    unknown = [c for c in out if c not in _CENTRALITY]
    if unknown:
        raise ValueError(f"unknown centrality {unknown}; use 'all' or any of {_CENTRALITY}")
    return out


def centrality_values(sample: jnp.ndarray, centrality: list[str], method: str = "kernel") -> dict:
    out = {}
    for c in centrality:
        if c == "median":
            out["Median"] = float(jnp.median(sample))
        elif c == "mean":
            out["Mean"] = float(jnp.mean(sample))
        else:
            out["MAP"] = map_value(sample, method)
    return out


def point_estimate(
    x: Any,
    centrality: str | Sequence[str] = "all",
    *,
    method: str = "kernel",
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
) -> dict[str, float] | IndexResult:
    """
    Compute point estimates of posterior draws.

    Parameters
    ----------
    x : sample, DrawTable, mapping, 2-D array or ModelIntrospector
    centrality : "all" or any of "median", "mean", "map", default="all"
    method : str, default="kernel"
        Density method used for the MAP.

    Returns
    -------
    dict or IndexResult
        {"Median": ..., "Mean": ..., "MAP": ...} for a sample; a table with
        those columns otherwise.
    """
    cols = centrality_list(centrality)
    method = canonical_method(method)
    if "map" in cols and method == "direct":
        raise ValueError("the MAP estimate needs a density method")

    def compute(sample):
        return centrality_values(sample, cols, method)

    draws = resolve_draws(x, effects, component)
    if isinstance(draws, DrawTable):
        return apply_index(draws, compute, n_jobs=n_jobs)
    return compute(as_sample(draws))
