"""
introspection.py
----------------

Boundary between bayesindex and fitted model objects.

bayesindex never inspects model classes itself. Anything that can hand
over its posterior draws and family metadata satisfies the
`ModelIntrospector` protocol and can be passed to every index function in
place of raw draws:

    get_draw_table(effects, component) -> DrawTable
    get_family_metadata()              -> ModelInfo | list[ModelInfo]

One adapter per model library (PyMC, NumPyro, Stan, ...) lives outside
this package. `PosteriorModel` is the minimal in-memory implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import numpy as np

from bayesindex.data.draws import DrawTable

_LOGIT_FAMILIES = {"binomial", "bernoulli", "quasibinomial", "beta_binomial"}
_COUNT_FAMILIES = {
    "poisson",
    "quasipoisson",
    "negbinomial",
    "negative_binomial",
    "zero_inflated_poisson",
    "zero_inflated_negbinomial",
    "hurdle_poisson",
    "hurdle_negbinomial",
}
_LINEAR_FAMILIES = {"gaussian", "student", "student_t", "lognormal", "skew_normal"}


@dataclass(frozen=True)
class ModelInfo:
    """
    Family metadata of a fitted model (one response).

    Parameters
    ----------
    family : str, default="gaussian"
        Family name, lower case (e.g. "gaussian", "binomial", "poisson").
    link_function : str, default="identity"
        Link function name.
    is_linear, is_logit, is_probit, is_correlation, is_count : bool
        Model-type flags.
    response : array-like, optional
        Observed response, used for identity-link ROPE scaling.
    response_transform : str, optional
        Transformation applied to the response in the model formula
        (e.g. "log", "log1p").
    dispersion : float, optional
        Residual standard deviation / dispersion estimate.
    response_name : str, optional
        Name of the response; keys multivariate ROPE ranges.
    """

    family: str = "gaussian"
    link_function: str = "identity"
    is_linear: bool = False
    is_logit: bool = False
    is_probit: bool = False
    is_correlation: bool = False
    is_count: bool = False
    response: Any = field(default=None, repr=False)
    response_transform: str | None = None
    dispersion: float | None = None
    response_name: str | None = None

    @classmethod
    def from_family(
        cls,
        family: str,
        link_function: str | None = None,
        **kwargs: Any,
    ) -> ModelInfo:
        """
        Derive the model-type flags from a family / link pair.

        Examples
        --------
        >>> ModelInfo.from_family("binomial").is_logit
        True
        >>> ModelInfo.from_family("binomial", "probit").is_probit
        True
        """
        family = family.lower()
        if link_function is None:
            if family in _LOGIT_FAMILIES:
                link_function = "logit"
            elif family in _COUNT_FAMILIES or family == "lognormal":
                link_function = "log"
            else:
                link_function = "identity"
        link_function = link_function.lower()

        flags = {
            "is_linear": family in _LINEAR_FAMILIES,
            "is_logit": link_function == "logit",
            "is_probit": link_function == "probit",
            "is_correlation": family == "correlation",
            "is_count": family in _COUNT_FAMILIES,
        }
        flags.update({k: kwargs.pop(k) for k in list(kwargs) if k in flags})
        return cls(family=family, link_function=link_function, **flags, **kwargs)


@runtime_checkable
class ModelIntrospector(Protocol):
    """Protocol for objects that expose posterior draws and family metadata."""

    def get_draw_table(
        self, effects: str = "fixed", component: str = "conditional"
    ) -> DrawTable:
        """Posterior draws, optionally restricted to effects / component."""
        ...

    def get_family_metadata(self) -> ModelInfo | Sequence[ModelInfo]:
        """Family metadata; a sequence for multivariate-response models."""
        ...


@dataclass
class PosteriorModel:
    """
    In-memory model: a DrawTable plus its family metadata.

    Parameters
    ----------
    draws : DrawTable or mapping
        Posterior draws, with Effects / Component tags where relevant.
    info : ModelInfo or sequence of ModelInfo
        Family metadata (one entry per response for multivariate models).

    Examples
    --------
    >>> import numpy as np
    >>> model = PosteriorModel(
    ...     {"b_Intercept": np.random.normal(1, 1, 500)},
    ...     ModelInfo.from_family("binomial"),
    ... )
    >>> model.get_draw_table().parameters
    ['b_Intercept']
    """

    draws: DrawTable
    info: ModelInfo | Sequence[ModelInfo] = field(default_factory=ModelInfo)

    def __post_init__(self):
        if not isinstance(self.draws, DrawTable):
            self.draws = DrawTable(self.draws)

    def get_draw_table(
        self, effects: str = "fixed", component: str = "conditional"
    ) -> DrawTable:
        return self.draws.filter(effects=effects, component=component)

    def get_family_metadata(self) -> ModelInfo | Sequence[ModelInfo]:
        return self.info


def response_sd(info: ModelInfo) -> float:
    """Sample standard deviation of the response, ignoring non-finite values."""
    y = np.asarray(info.response, dtype=float).ravel()
    y = y[np.isfinite(y)]
    if y.size < 2:
        raise ValueError("need at least two finite response values")
    return float(np.std(y, ddof=1))
