"""
draws.py
--------

Containers for posterior draws.

defines:
- as_sample: validate and convert one parameter's draws
- Effects, Component: grouping tags supplied by model introspection
- DrawTable: ordered, read-only mapping of parameter name -> draws

Notes
-----
- Draws are stored as read-only NumPy arrays.
- Convert to jax.numpy (jnp) only when an index is computed.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any

import jax.numpy as jnp
import numpy as np

from bayesindex.errors import InvalidSampleError


class Effects(str, Enum):
    """Whether a parameter belongs to the fixed or random part of a model."""

    FIXED = "fixed"
    RANDOM = "random"


class Component(str, Enum):
    """Model component a parameter belongs to."""

    CONDITIONAL = "conditional"
    ZERO_INFLATED = "zero_inflated"
    SMOOTH_TERMS = "smooth_terms"
    SMOOTH_SD = "smooth_sd"
    DISPERSION = "dispersion"
    SIGMA = "sigma"
    LOCATION = "location"
    DISTRIBUTIONAL = "distributional"
    AUXILIARY = "auxiliary"


def as_sample(x: Any) -> jnp.ndarray:
    """
    Convert draws for a single parameter into a 1-D float array.

    Non-finite values (nan, inf) are dropped.

    Parameters
    ----------
    x : array-like
        Posterior draws. Scalars are treated as a sample of size one.

    Returns
    -------
    jnp.ndarray, shape (n,)
        Finite draws, n >= 1.

    Raises
    ------
    InvalidSampleError
        If `x` is empty, not 1-D, or has no finite values.
    """
    try:
        arr = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidSampleError(f"cannot interpret draws as numbers: {exc}") from exc

    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise InvalidSampleError(f"a sample must be 1-D, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidSampleError("sample is empty")

    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        raise InvalidSampleError("sample has no finite values")
    return jnp.asarray(arr)


def _coerce_tag(value, enum_cls):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value))
    except ValueError as exc:
        valid = ", ".join(m.value for m in enum_cls)
        raise ValueError(
            f"unknown {enum_cls.__name__} tag {value!r}; expected one of: {valid}"
        ) from exc


def _freeze(values: Any) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise ValueError(f"draws for one parameter must be 1-D, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


class DrawTable(Mapping):
    """
    Posterior draws for several parameters.

    Behaves as a read-only mapping from parameter name to its draws, in
    insertion order.

    Parameters
    ----------
    draws : Mapping[str, array-like]
        Parameter name -> 1-D draws. Parameters may have different lengths.
    effects : Mapping[str, Effects | str], optional
        Per-parameter effects tag.
    component : Mapping[str, Component | str], optional
        Per-parameter component tag.

    Notes
    -----
    Draws are copied on construction and stored read-only, so a table
    never changes after it is built.
    """

    def __init__(
        self,
        draws: Mapping[str, Any],
        *,
        effects: Mapping[str, Effects | str] | None = None,
        component: Mapping[str, Component | str] | None = None,
    ) -> None:
        self._draws: dict[str, np.ndarray] = {}
        for name, values in draws.items():
            self._draws[str(name)] = _freeze(values)

        effects = dict(effects or {})
        component = dict(component or {})
        unknown = (set(effects) | set(component)) - set(self._draws)
        if unknown:
            raise ValueError(f"tags given for unknown parameters: {sorted(unknown)}")

        self._effects = {k: _coerce_tag(v, Effects) for k, v in effects.items()}
        self._component = {k: _coerce_tag(v, Component) for k, v in component.items()}

    # ------------------------------------------------------------------
    # Mapping interface
    # ------------------------------------------------------------------

    def __getitem__(self, name: str) -> np.ndarray:
        return self._draws[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._draws)

    def __len__(self) -> int:
        return len(self._draws)

    def __repr__(self) -> str:
        return f"DrawTable(parameters={list(self._draws)})"

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> list[str]:
        """Parameter names in insertion order."""
        return list(self._draws)

    @property
    def has_effects(self) -> bool:
        return bool(self._effects)

    @property
    def has_component(self) -> bool:
        return bool(self._component)

    def effects(self, name: str) -> Effects | None:
        return self._effects.get(name)

    def component(self, name: str) -> Component | None:
        return self._component.get(name)

    def tags(self, name: str) -> dict[str, str]:
        """
        Grouping columns for one parameter.

        Only columns the table actually carries are returned, so untagged
        tables produce no Effects/Component columns downstream.
        """
        out = {}
        if self.has_effects:
            tag = self._effects.get(name)
            out["Effects"] = tag.value if tag is not None else None
        if self.has_component:
            tag = self._component.get(name)
            out["Component"] = tag.value if tag is not None else None
        return out

    def filter(
        self,
        effects: str | Effects = "all",
        component: str | Component = "all",
    ) -> DrawTable:
        """
        Return a new table restricted to the given effects / component.

        Parameters
        ----------
        effects : {"all", "fixed", "random"}, default="all"
        component : "all" or a Component value, default="all"
        """
        eff = None if effects == "all" else _coerce_tag(effects, Effects)
        comp = None if component == "all" else _coerce_tag(component, Component)

        keep = [
            name
            for name in self._draws
            if (eff is None or self._effects.get(name, Effects.FIXED) == eff)
            and (comp is None or self._component.get(name, Component.CONDITIONAL) == comp)
        ]
        return DrawTable(
            {name: self._draws[name] for name in keep},
            effects={k: v for k, v in self._effects.items() if k in keep},
            component={k: v for k, v in self._component.items() if k in keep},
        )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, draws: Mapping[str, Any], **tags) -> DrawTable:
        """Build a table from a plain dict (alias of the constructor)."""
        return cls(draws, **tags)

    @classmethod
    def from_array(
        cls,
        draws: jnp.ndarray | np.ndarray,
        names: list[str] | None = None,
        **tags,
    ) -> DrawTable:
        """
        Build a table from a 2-D array of shape (n_draws, n_parameters).

        Parameters
        ----------
        draws : array, shape (n_draws, n_parameters)
            One column per parameter.
        names : list of str, optional
            Column names. Defaults to "X1", "X2", ...

        Examples
        --------
        >>> import numpy as np
        >>> table = DrawTable.from_array(np.zeros((100, 3)))
        >>> table.parameters
        ['X1', 'X2', 'X3']
        """
        arr = np.asarray(draws, dtype=float)
        if arr.ndim != 2:
            raise ValueError(f"from_array expects shape (n_draws, n_parameters), got {arr.shape}")
        n_params = arr.shape[1]
        if names is None:
            names = [f"X{i + 1}" for i in range(n_params)]
        if len(names) != n_params:
            raise ValueError(f"got {len(names)} names for {n_params} columns")
        return cls({name: arr[:, i] for i, name in enumerate(names)}, **tags)
