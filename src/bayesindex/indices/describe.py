"""
describe.py
-----------

One table summarizing every parameter: centrality, credible interval and
the requested indices (pd, ROPE percentage, ps, equivalence decision).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from bayesindex.config import DEFAULT_CI
from bayesindex.data.draws import DrawTable, as_sample
from bayesindex.density.estimate import canonical_method
from bayesindex.indices.ci import check_ci, ci_bounds, restrict_to_ci
from bayesindex.indices.driver import IndexResult, apply_index, resolve_draws
from bayesindex.indices.equivalence_test import equivalence_decision
from bayesindex.indices.p_direction import pd_density, pd_direct
from bayesindex.indices.p_significance import ps_direct
from bayesindex.indices.point_estimate import centrality_list, centrality_values
from bayesindex.indices.rope import range_for_parameter, resolve_rope_range, rope_fraction

_TESTS = {
    "p_direction": "p_direction",
    "pd": "p_direction",
    "rope": "rope",
    "p_significance": "p_significance",
    "ps": "p_significance",
    "equivalence_test": "equivalence_test",
}


def _test_list(test: str | Sequence[str] | None) -> list[str]:
    if test is None:
        return []
    if isinstance(test, str):
        test = list(_TESTS.values()) if test == "all" else [test]
    out = []
    for t in test:
        try:
            name = _TESTS[t.lower()]
        except KeyError:
            raise ValueError(f"unknown test {t!r}; use any of {sorted(_TESTS)}") from None
        if name not in out:
            out.append(name)
    return out


def describe_posterior(
    x: Any,
    centrality: str | Sequence[str] = "median",
    ci: float = DEFAULT_CI,
    ci_method: str = "hdi",
    test: str | Sequence[str] | None = ("p_direction", "rope"),
    rope_range: str | Sequence[float] | Mapping[str, Sequence[float]] = "default",
    rope_ci: float = DEFAULT_CI,
    *,
    method: str = "direct",
    model: Any = None,
    effects: str = "fixed",
    component: str = "conditional",
    n_jobs: int | None = None,
    verbose: bool = True,
) -> IndexResult:
    """
    Describe posterior draws with a single table.

    Parameters
    ----------
    x : sample, DrawTable, mapping, 2-D array or ModelIntrospector
        Posterior draws. A single sample is reported as parameter "Posterior".
    centrality : "all" or any of "median", "mean", "map", default="median"
    ci : float, default=0.95
        Credible-interval mass for CI_low / CI_high.
    ci_method : {"hdi", "eti"}, default="hdi"
    test : sequence of str, "all" or None
        Any of "p_direction" ("pd"), "rope", "p_significance" ("ps"),
        "equivalence_test".
    rope_range : "default", (low, high) or dict, default="default"
        ROPE for the rope / p_significance / equivalence_test columns.
    rope_ci : float, default=0.95
        Credible-interval mass the ROPE percentage is computed on.
    method : str, default="direct"
        Method for pd and the ROPE percentage.
    model : ModelIntrospector or ModelInfo, optional
        Source of metadata for rope_range="default".

    Returns
    -------
    IndexResult
        One row per parameter.
    """
    cols = centrality_list(centrality)
    tests = _test_list(test)
    ci = check_ci(ci)
    rope_ci = check_ci(rope_ci)
    method = canonical_method(method)
    density_method = "kernel" if method == "direct" else method
    needs_rope = any(t != "p_direction" for t in tests)
    ranges = resolve_rope_range(rope_range, x, model, verbose) if needs_rope else None

    def compute(sample, parameter=None):
        row = centrality_values(sample, cols, density_method)
        lo, hi = ci_bounds(sample, ci, ci_method)
        row.update({"CI": ci, "CI_low": lo, "CI_high": hi})

        if "p_direction" in tests:
            row["pd"] = pd_direct(sample) if method == "direct" else pd_density(sample, method)
        if ranges is not None:
            rope_low, rope_high = range_for_parameter(ranges, parameter)
        if "rope" in tests or "equivalence_test" in tests:
            sub = restrict_to_ci(sample, rope_ci, "hdi")
            row.update(
                {
                    "ROPE_CI": rope_ci,
                    "ROPE_low": rope_low,
                    "ROPE_high": rope_high,
                    "ROPE_Percentage": rope_fraction(sub, (rope_low, rope_high), method),
                }
            )
        if "equivalence_test" in tests:
            h_lo, h_hi = ci_bounds(sample, rope_ci, "hdi")
            row["ROPE_Equivalence"] = equivalence_decision(h_lo, h_hi, rope_low, rope_high)
        if "p_significance" in tests:
            row["ps"] = ps_direct(sample, rope_low, rope_high)
        return row

    attrs = {"ci_method": ci_method, "method": method, "range": ranges}
    draws = resolve_draws(x, effects, component)
    if not isinstance(draws, DrawTable):
        draws = DrawTable({"Posterior": as_sample(draws)})
    return apply_index(draws, compute, n_jobs=n_jobs, attrs=attrs, with_name=True)
