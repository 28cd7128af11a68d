"""
report.py
---------

Plain-text rendering of index tables.

Provides:
- format_index_table : any IndexResult as an aligned text table
- print_equivalence_test : report for equivalence_test() results

Tables carrying Effects / Component columns are split into one block
per group (e.g. "Fixed Effects", "Random Effects (Zero-Inflated Model)").

Examples
--------
>>> from bayesindex import p_direction
>>> from bayesindex.utils.report import format_index_table
>>> res = p_direction({"a": [1.0, 2.0, -1.0], "b": [-1.0, -2.0, 3.0]})
>>> print(format_index_table(res))
Parameter |   pd
----------+-----
a         | 0.67
b         | 0.67
"""

from __future__ import annotations

import math
from typing import Any

from bayesindex.indices.driver import IndexResult

_GROUP_TITLES = {
    "fixed": "Fixed Effects",
    "conditional": "Fixed Effects",
    "random": "Random Effects",
    "conditional.fixed": "Fixed Effects",
    "conditional.random": "Random Effects",
    "zero_inflated": "Zero-Inflated",
    "zero_inflated.fixed": "Fixed Effects (Zero-Inflated Model)",
    "zero_inflated.random": "Random Effects (Zero-Inflated Model)",
    "smooth_sd": "Smooth Terms (SD)",
    "smooth_terms": "Smooth Terms",
}

_PERCENT_COLUMNS = {"ROPE_Percentage"}


def _format_value(value: Any, column: str, digits: int) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return "NA"
        if column in _PERCENT_COLUMNS:
            return f"{100 * value:.{digits}f} %"
        return f"{value:.{digits}f}"
    return str(value)


def _render(rows: list[dict[str, Any]], columns: list[str], digits: int) -> str:
    cells = [[_format_value(r.get(c), c, digits) for c in columns] for r in rows]
    widths = [max([len(c)] + [len(row[i]) for row in cells]) for i, c in enumerate(columns)]

    def line(values, align_first=True):
        parts = []
        for i, v in enumerate(values):
            parts.append(v.ljust(widths[i]) if i == 0 and align_first else v.rjust(widths[i]))
        return " | ".join(parts).rstrip()

    header = line(columns)
    rule = "-+-".join("-" * w for w in widths)
    return "\n".join([header, rule] + [line(c) for c in cells])


def _group_key(row: dict[str, Any]) -> str:
    parts = [row.get("Component"), row.get("Effects")]
    return ".".join(p for p in parts if p)


def format_index_table(
    result: IndexResult,
    digits: int = 2,
    columns: list[str] | None = None,
) -> str:
    """
    Render an IndexResult as text.

    Parameters
    ----------
    result : IndexResult
        Table to render.
    digits : int, default=2
        Decimals for floats.
    columns : list of str, optional
        Subset (and order) of columns to show. Effects / Component are
        never shown as columns; they define the group blocks instead.

    Returns
    -------
    str
    """
    cols = [c for c in (columns or result.columns) if c not in ("Effects", "Component")]
    rows = result.rows
    if not rows:
        return "(no parameters)"

    groups: dict[str, list[dict[str, Any]]] = {}
    for r in rows:
        groups.setdefault(_group_key(r), []).append(r)

    if len(groups) == 1:
        return _render(rows, cols, digits)

    blocks = []
    for key, group_rows in groups.items():
        title = _GROUP_TITLES.get(key, key)
        blocks.append(f"# {title}\n\n{_render(group_rows, cols, digits)}")
    return "\n\n".join(blocks)


def print_equivalence_test(result: IndexResult, digits: int = 2) -> None:
    """
    Print an equivalence_test() result.

    Examples
    --------
    >>> res = equivalence_test(draws, range=(-0.1, 0.1))
    >>> print_equivalence_test(res)
    # Test for Practical Equivalence

      ROPE: [-0.10 0.10]
    ...
    """
    rows = result.rows
    print("# Test for Practical Equivalence\n")
    if rows:
        print(f"  ROPE: [{rows[0]['ROPE_low']:.{digits}f} {rows[0]['ROPE_high']:.{digits}f}]\n")

    # bounds are right-aligned across every row, whatever its CI
    lows = {i: _bound(r.get("HDI_low"), digits) for i, r in enumerate(rows)}
    highs = {i: _bound(r.get("HDI_high"), digits) for i, r in enumerate(rows)}
    width_low = max((len(s) for s in lows.values() if s), default=0)
    width_high = max((len(s) for s in highs.values() if s), default=0)

    display = []
    for i, r in enumerate(rows):
        d = {k: v for k, v in r.items() if k not in ("HDI_low", "HDI_high")}
        d["H0"] = d.pop("ROPE_Equivalence", None)
        d["inside ROPE"] = d.pop("ROPE_Percentage", None)
        if lows[i] and highs[i]:
            d["HDI"] = f"[{lows[i]:>{width_low}} {highs[i]:>{width_high}}]"
        display.append(d)

    for ci in dict.fromkeys(r.get("CI") for r in display):
        subset = [d for d in display if d.get("CI") == ci]
        for d in subset:
            if "HDI" in d:
                d[f"{round(100 * ci)}% HDI"] = d.pop("HDI")
        columns = [
            c
            for c in ("Parameter", "H0", "inside ROPE", f"{round(100 * ci)}% HDI")
            if any(c in d for d in subset)
        ]
        table = IndexResult(
            [{**d, "inside ROPE": _percent(d.get("inside ROPE"), digits)} for d in subset]
        )
        print(format_index_table(table, digits=digits, columns=columns))
        print()


def _bound(value: float | None, digits: int) -> str | None:
    if value is None:
        return None
    if math.isnan(value):
        return "NA"
    return f"{value:.{digits}f}"


def _percent(value: float | None, digits: int) -> str | None:
    if value is None:
        return None
    if math.isnan(value):
        return "NA"
    return f"{100 * value:.{digits}f} %"
