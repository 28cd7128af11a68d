"""
p_significance.py
-----------------

Probability of practical Significance (ps).

ps is the share of the posterior that is both on the dominant side of
zero and larger in magnitude than a threshold: the probability that an
effect is in the expected direction and not negligible.

The dominant side is taken from the sign of the median. Draws equal to
the threshold are not counted (strict inequality). With a median of
exactly zero the larger of the two tails is reported.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import jax.numpy as jnp
import numpy as np

from bayesindex.data.draws import DrawTable, as_sample
from bayesindex.indices.driver import IndexResult, apply_index, resolve_draws
from bayesindex.indices.rope import check_interval, range_for_parameter, resolve_rope_range


def ps_direct(sample: jnp.ndarray, low: float, high: float) -> float:
    """
    ps of a validated sample for the non-significance band [low, high].

    Counts draws above `high` when the median is positive and draws below
    `low` when it is negative.
    """
    n = int(sample.shape[0])
    n_above = int(jnp.sum(sample > high))
    n_below = int(jnp.sum(sample < low))
    median = float(jnp.median(sample))
    if median > 0:
        return n_above / n
    if median < 0:
        return n_below / n
    return max(n_above, n_below) / n


def _threshold_band(threshold, x, model, verbose):
    if isinstance(threshold, str):
        if threshold != "default":
            raise ValueError(f"threshold must be 'default', a number or (low, high), got {threshold!r}")
        return resolve_rope_range("default", x, model, verbose)
    if np.ndim(threshold) == 1:
        return check_interval(threshold)
    t = float(threshold)
    if not t >= 0:
        raise ValueError(f"threshold must be non-negative, got {threshold}")
    return (-t, t)


def p_significance(
    x: Any,
    threshold: str | float | Sequence[float] = "default",
    *,
    model: Any = None,
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
    verbose: bool = True,
) -> float | IndexResult:
    """
    Compute the Probability of practical Significance.

    Parameters
    ----------
    x : sample, DrawTable, mapping, 2-D array or ModelIntrospector
        Posterior draws.
    threshold : "default", float >= 0, or (low, high), default="default"
        Values inside [-threshold, threshold] (or [low, high]) are
        considered negligible. "default" uses the upper bound of the
        model's default ROPE, or 0.1 when no model is available.
    model : ModelIntrospector or ModelInfo, optional
        Source of metadata for threshold="default".
    verbose : bool, default=True
        Warn when the default range cannot be derived.

    Returns
    -------
    float or IndexResult
        ps in [0, 1] for a sample; a table with column "ps" otherwise.

    Examples
    --------
    >>> p_significance([0.05, 0.2, 0.3, 0.5, -0.4], threshold=0.1)
    0.6
    """
    bands = _threshold_band(threshold, x, model, verbose)

    def compute(sample, parameter=None):
        low, high = range_for_parameter(bands, parameter)
        return ps_direct(sample, low, high)

    draws = resolve_draws(x, effects, component)
    if isinstance(draws, DrawTable):
        return apply_index(
            draws,
            compute,
            column="ps",
            n_jobs=n_jobs,
            attrs={"threshold": bands},
            with_name=True,
        )
    return compute(as_sample(draws))
