"""
equivalence_test.py
-------------------

Test for practical equivalence (HDI + ROPE decision rule).

For each parameter the `ci` HDI is compared with the ROPE (Kruschke, 2014):
- HDI entirely outside the ROPE -> "Rejected" (the null is rejected)
- HDI entirely inside the ROPE  -> "Accepted" (the null is accepted)
- otherwise                     -> "Undecided"

References
----------
Kruschke, J. K. (2014). Doing Bayesian Data Analysis: A Tutorial with R,
JAGS, and Stan. Academic Press.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from bayesindex.config import DEFAULT_CI
from bayesindex.data.draws import DrawTable, as_sample
from bayesindex.indices.ci import as_ci_list, hdi_bounds, restrict_to_ci
from bayesindex.indices.driver import IndexResult, apply_index, resolve_draws
from bayesindex.indices.rope import range_for_parameter, resolve_rope_range, rope_fraction


def equivalence_decision(
    hdi_low: float, hdi_high: float, rope_low: float, rope_high: float
) -> str:
    """Classify an HDI against a ROPE."""
    if hdi_high < rope_low or hdi_low > rope_high:
        return "Rejected"
    if hdi_low >= rope_low and hdi_high <= rope_high:
        return "Accepted"
    return "Undecided"


def equivalence_test(
    x: Any,
    range: str | Sequence[float] | Mapping[str, Sequence[float]] = "default",
    ci: float | Sequence[float] = DEFAULT_CI,
    *,
    model: Any = None,
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
    verbose: bool = True,
) -> IndexResult:
    """
    Test posterior draws for practical equivalence with the null.

    Parameters
    ----------
    x : sample, DrawTable, mapping, 2-D array or ModelIntrospector
        Posterior draws.
    range : "default", (low, high), or dict of response -> (low, high)
        ROPE bounds, see `rope`.
    ci : float or sequence of float, default=0.95
        HDI mass.
    model : ModelIntrospector or ModelInfo, optional
        Source of metadata for range="default".

    Returns
    -------
    IndexResult
        Columns CI, ROPE_low, ROPE_high, ROPE_Percentage,
        ROPE_Equivalence, HDI_low, HDI_high (plus Parameter and tags for
        tables).
    """
    cis = as_ci_list(ci)
    ranges = resolve_rope_range(range, x, model, verbose)

    def rows_for(sample, parameter=None):
        rope_low, rope_high = range_for_parameter(ranges, parameter)
        rows = []
        for c in cis:
            lo, hi = hdi_bounds(sample, c)
            pct = rope_fraction(restrict_to_ci(sample, c, "hdi"), (rope_low, rope_high))
            rows.append(
                {
                    "CI": c,
                    "ROPE_low": rope_low,
                    "ROPE_high": rope_high,
                    "ROPE_Percentage": pct,
                    "ROPE_Equivalence": equivalence_decision(lo, hi, rope_low, rope_high),
                    "HDI_low": lo,
                    "HDI_high": hi,
                }
            )
        return rows

    attrs = {"range": ranges}
    draws = resolve_draws(x, effects, component)
    if isinstance(draws, DrawTable):
        return apply_index(draws, rows_for, n_jobs=n_jobs, attrs=attrs, with_name=True)
    return IndexResult(rows_for(as_sample(draws)), attrs=attrs)
