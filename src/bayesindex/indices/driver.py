"""
driver.py
---------

Apply a single-sample index to every parameter of a DrawTable.

defines:
- IndexResult: ordered rows, one (or more) per parameter
- resolve_draws: turn any supported input into a sample or a DrawTable
- apply_index: map an index function over the parameters of a table

Notes
-----
- Parameters are independent, so `apply_index(..., n_jobs=k)` may run them
  in a thread pool; rows always come back in the table's order.
- A parameter whose draws are unusable (empty, all non-finite) gets NaN
  values and a warning; the other parameters are still computed.
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Callable, Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np

from bayesindex.data.draws import DrawTable, as_sample
from bayesindex.errors import InvalidSampleError, UnsupportedModelTypeError
from bayesindex.model.introspection import ModelIntrospector

logger = logging.getLogger(__name__)

_TAG_COLUMNS = ("Effects", "Component")


class IndexResult:
    """
    Table of index values.

    Parameters
    ----------
    rows : list of dict
        One dict per row, column name -> value.
    attrs : dict, optional
        Call settings carried along for reporting (e.g. threshold, ROPE).

    Examples
    --------
    >>> res = IndexResult([{"Parameter": "a", "pd": 0.9}, {"Parameter": "b", "pd": 0.6}])
    >>> len(res), res["pd"]
    (2, [0.9, 0.6])
    """

    def __init__(self, rows: list[dict[str, Any]], attrs: dict[str, Any] | None = None):
        self._rows = [dict(r) for r in rows]
        self.attrs = dict(attrs or {})

    @property
    def columns(self) -> list[str]:
        """Column names in first-seen order, Effects/Component last."""
        cols: list[str] = []
        for row in self._rows:
            for key in row:
                if key not in cols:
                    cols.append(key)
        return [c for c in cols if c not in _TAG_COLUMNS] + [
            c for c in _TAG_COLUMNS if c in cols
        ]

    @property
    def rows(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.rows)

    def __getitem__(self, column: str) -> list[Any]:
        if column not in self.columns:
            raise KeyError(column)
        return [row.get(column) for row in self._rows]

    def __contains__(self, column: object) -> bool:
        return column in self.columns

    def row(self, parameter: str) -> dict[str, Any]:
        """First row for `parameter`."""
        for r in self._rows:
            if r.get("Parameter") == parameter:
                return dict(r)
        raise KeyError(parameter)

    def to_dict(self) -> dict[str, list[Any]]:
        """Column-oriented copy of the table."""
        return {col: self[col] for col in self.columns}

    def __repr__(self) -> str:
        return f"IndexResult(n_rows={len(self)}, columns={self.columns})"


def resolve_draws(
    x: Any, effects: str = "fixed", component: str = "conditional"
) -> DrawTable | Any:
    """
    Classify an index function's input.

    Returns a DrawTable for tables, mappings, 2-D arrays and model
    introspectors, and `x` unchanged when it looks like a single sample.

    Parameters
    ----------
    x : Any
        Sample, DrawTable, mapping, 2-D array (draws x parameters) or
        ModelIntrospector.
    effects, component : str
        Passed to `ModelIntrospector.get_draw_table`; ignored otherwise.

    Raises
    ------
    UnsupportedModelTypeError
        If `x` cannot be interpreted as posterior draws.
    """
    if isinstance(x, DrawTable):
        return x
    if isinstance(x, ModelIntrospector):
        table = x.get_draw_table(effects=effects, component=component)
        if isinstance(table, DrawTable):
            return table
        if isinstance(table, Mapping):
            return DrawTable(table)
        raise UnsupportedModelTypeError(
            f"{type(x).__name__}.get_draw_table() returned {type(table).__name__}, "
            "expected a DrawTable"
        )
    if isinstance(x, Mapping):
        return DrawTable(x)
    if x is None or isinstance(x, (str, bytes)):
        raise UnsupportedModelTypeError(f"cannot compute indices for {type(x).__name__}")

    try:
        arr = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as exc:
        raise UnsupportedModelTypeError(
            f"cannot extract posterior draws from {type(x).__name__}"
        ) from exc
    if arr.ndim <= 1:
        return x
    if arr.ndim == 2:
        return DrawTable.from_array(arr)
    raise UnsupportedModelTypeError(f"draws must be 1-D or 2-D, got shape {arr.shape}")


def _as_rows(value: Any, column: str) -> list[dict[str, Any]]:
    if isinstance(value, IndexResult):
        return value.rows
    if isinstance(value, Mapping):
        return [dict(value)]
    if isinstance(value, list):
        return [dict(v) for v in value]
    return [{column: value}]


def apply_index(
    draws: DrawTable,
    index_fn: Callable[[Any], Any],
    *,
    column: str = "value",
    n_jobs: int | None = None,
    attrs: dict[str, Any] | None = None,
    with_name: bool = False,
) -> IndexResult:
    """
    Compute an index for every parameter of a DrawTable.

    Parameters
    ----------
    draws : DrawTable
        Posterior draws.
    index_fn : callable
        Called with one validated sample (jnp.ndarray). May return a
        scalar (stored under `column`), a dict of columns, or a list of
        dicts (several rows for one parameter).
    column : str, default="value"
        Column name for scalar results.
    n_jobs : int, optional
        Worker threads. None or 1 runs sequentially.
    attrs : dict, optional
        Stored on the result as `IndexResult.attrs`.
    with_name : bool, default=False
        Call `index_fn(sample, parameter_name)` instead of `index_fn(sample)`.

    Returns
    -------
    IndexResult
        Rows in the table's parameter order, with Effects / Component
        copied from the table when it carries them.
    """

    def run(name: str) -> list[dict[str, Any]] | None:
        try:
            sample = as_sample(draws[name])
        except InvalidSampleError as exc:
            warnings.warn(
                f"Parameter '{name}': {exc}. Its indices are set to NaN.",
                UserWarning,
                stacklevel=4,
            )
            return None
        value = index_fn(sample, name) if with_name else index_fn(sample)
        return _as_rows(value, column)

    names = draws.parameters
    if n_jobs is not None and n_jobs > 1 and len(names) > 1:
        logger.debug("computing %d parameters on %d threads", len(names), n_jobs)
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            outputs = list(executor.map(run, names))
    else:
        outputs = [run(name) for name in names]

    value_columns: list[str] = []
    for out in outputs:
        for row in out or []:
            for key in row:
                if key not in value_columns:
                    value_columns.append(key)
    if not value_columns:
        value_columns = [column]

    rows = []
    for name, out in zip(names, outputs):
        if out is None:
            out = [{key: math.nan for key in value_columns}]
        for values in out:
            rows.append({"Parameter": name, **values, **draws.tags(name)})
    return IndexResult(rows, attrs=attrs)
