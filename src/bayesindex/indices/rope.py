"""
rope.py
-------

Region Of Practical Equivalence (ROPE) percentage.

The ROPE is an interval of values considered practically equivalent to
the null. rope() reports the share of the posterior, optionally restricted
to its credible interval, that falls inside that interval.

Connections
-----------
- Calls model.rope_range when range="default" and a model is available.
- Uses indices.ci.restrict_to_ci for the HDI/ETI-restricted subsample.
- Density methods use density.try_estimate_density and fall back to
  counting draws when the estimator fails.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

import jax.numpy as jnp

from bayesindex.config import DEFAULT_CI, DEFAULT_ROPE
from bayesindex.data.draws import DrawTable, as_sample
from bayesindex.density.estimate import canonical_method, try_estimate_density
from bayesindex.indices.ci import as_ci_list, is_ci_list, restrict_to_ci
from bayesindex.indices.driver import IndexResult, apply_index, resolve_draws
from bayesindex.model.introspection import ModelIntrospector
from bayesindex.model.rope_range import rope_range as default_rope_range

logger = logging.getLogger(__name__)

Interval = tuple[float, float]


def check_interval(interval: Sequence[float]) -> Interval:
    if len(interval) != 2:
        raise ValueError(f"a ROPE range needs exactly two values, got {interval!r}")
    low, high = float(interval[0]), float(interval[1])
    if low > high:
        raise ValueError(f"ROPE range must satisfy low <= high, got ({low}, {high})")
    return low, high


def resolve_rope_range(
    range: str | Sequence[float] | Mapping[str, Sequence[float]],
    x: Any = None,
    model: Any = None,
    verbose: bool = True,
) -> Interval | list[Interval] | dict[str, Interval]:
    """
    Turn a user-supplied `range` argument into concrete bounds.

    "default" asks model.rope_range for `model`, or for `x` itself when it
    is a ModelIntrospector; without a model the generic (-0.1, 0.1) is used.
    """
    if isinstance(range, str):
        if range != "default":
            raise ValueError(f"range must be 'default' or (low, high), got {range!r}")
        source = model if model is not None else x
        if isinstance(source, ModelIntrospector) or model is not None:
            return default_rope_range(source, verbose=verbose)
        return DEFAULT_ROPE
    if isinstance(range, Mapping):
        return {str(k): check_interval(v) for k, v in range.items()}
    return check_interval(range)


def _has_token(name: str, token: str) -> bool:
    return re.search(rf"(?<![A-Za-z0-9]){re.escape(token)}(?![A-Za-z0-9])", name) is not None


def range_for_parameter(
    ranges: Interval | list[Interval] | dict[str, Interval], parameter: str | None
) -> Interval:
    """
    Pick the ROPE for one parameter.

    Multivariate models have one range per response; a parameter uses the
    range of the response whose name appears in the parameter name as a
    whole token (delimited by non-alphanumerics, as in "b_y2_x"). When
    several responses match, the longest name wins.

    Examples
    --------
    >>> range_for_parameter({"y": (-0.1, 0.1), "y2": (-5.0, 5.0)}, "b_y2_x")
    (-5.0, 5.0)
    """
    if isinstance(ranges, tuple):
        return ranges
    if isinstance(ranges, Mapping):
        if parameter is not None:
            matches = [r for r in ranges if _has_token(parameter, r)]
            if matches:
                return ranges[max(matches, key=len)]
        logger.debug("no response matched parameter %s; using first ROPE range", parameter)
        return next(iter(ranges.values()))
    return ranges[0]


def rope_fraction(
    sample: Any,
    interval: Sequence[float] = DEFAULT_ROPE,
    method: str = "direct",
    **density_params: Any,
) -> float:
    """
    Share of a sample lying inside `interval`.

    Parameters
    ----------
    sample : array-like, shape (n,)
        Draws (already restricted to a credible interval, if wanted).
    interval : (low, high), default=(-0.1, 0.1)
    method : str, default="direct"
        "direct" counts draws with low <= draw <= high; a density method
        integrates the estimated density over [low, high].

    Returns
    -------
    float
        Fraction in [0, 1].
    """
    sample = as_sample(sample)
    low, high = check_interval(interval)
    method = canonical_method(method)
    if method != "direct":
        curve = try_estimate_density(sample, method, **density_params)
        if curve is not None:
            return min(max(curve.mass(low, high), 0.0), 1.0)
    n = int(sample.shape[0])
    return int(jnp.sum((sample >= low) & (sample <= high))) / n


def rope(
    x: Any,
    range: str | Sequence[float] | Mapping[str, Sequence[float]] = "default",
    ci: float | Sequence[float] = DEFAULT_CI,
    ci_method: str = "hdi",
    method: str = "direct",
    *,
    model: Any = None,
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
    verbose: bool = True,
    **density_params: Any,
) -> float | IndexResult:
    """
    Compute the proportion of the credible interval inside the ROPE.

    Parameters
    ----------
    x : sample, DrawTable, mapping, 2-D array or ModelIntrospector
        Posterior draws.
    range : "default", (low, high), or dict of response -> (low, high)
        ROPE bounds. "default" derives them from `model` (see rope_range).
    ci : float or sequence of float, default=0.95
        Credible-interval mass the draws are restricted to; 1 uses all draws.
    ci_method : {"hdi", "eti"}, default="hdi"
    method : str, default="direct"
        "direct" or a density method.
    model : ModelIntrospector or ModelInfo, optional
        Source of metadata for range="default".
    verbose : bool, default=True
        Warn when the default range cannot be derived.

    Returns
    -------
    float or IndexResult
        For a sample and a single ci, the fraction inside the ROPE.
        Otherwise a table with columns CI, ROPE_low, ROPE_high,
        ROPE_Percentage (one row per parameter and ci).

    Examples
    --------
    >>> rope([-0.05, 0.0, 0.05, 0.5], range=(-0.1, 0.1), ci=1.0)
    0.75
    """
    cis = as_ci_list(ci)
    method = canonical_method(method)
    ranges = resolve_rope_range(range, x, model, verbose)

    def rows_for(sample, parameter=None):
        interval = range_for_parameter(ranges, parameter)
        rows = []
        for c in cis:
            sub = restrict_to_ci(sample, c, ci_method)
            rows.append(
                {
                    "CI": c,
                    "ROPE_low": interval[0],
                    "ROPE_high": interval[1],
                    "ROPE_Percentage": rope_fraction(sub, interval, method, **density_params),
                }
            )
        return rows

    attrs = {"method": method, "ci_method": ci_method, "range": ranges}
    draws = resolve_draws(x, effects, component)
    if isinstance(draws, DrawTable):
        return apply_index(draws, rows_for, n_jobs=n_jobs, attrs=attrs, with_name=True)

    sample = as_sample(draws)
    rows = rows_for(sample)
    if len(rows) == 1 and not is_ci_list(ci):
        return rows[0]["ROPE_Percentage"]
    return IndexResult(rows, attrs=attrs)
