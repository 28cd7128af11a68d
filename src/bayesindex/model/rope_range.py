"""
rope_range.py
-------------

Default bounds for the Region Of Practical Equivalence (ROPE).

Kruschke (2018) suggests treating -0.1..0.1 of a standardized parameter as
negligible (Cohen, 1988). The rules below rescale that value to the
parameter scale implied by the model family; the first matching rule wins:

1. log-transformed response, linear model with log link, or lognormal
   family -> 0.01 (a 1% change)
2. identity link with an observed response -> 0.1 * SD(response)
3. logit link -> 0.1 * pi / sqrt(3)
4. probit link -> 0.1
5. correlation -> 0.05 (half a negligible correlation)
6. count model with a finite dispersion estimate -> 0.1 * dispersion
7. anything else -> 0.1, with a warning

The range is always symmetric: (-v, v).

References
----------
Kruschke, J. K. (2018). Rejecting or accepting parameter values in
Bayesian estimation. Advances in Methods and Practices in Psychological
Science, 1(2), 270-280.
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from bayesindex.config import DEFAULT_ROPE
from bayesindex.data.draws import DrawTable
from bayesindex.errors import RopeRangeSelectionError, UnsupportedModelTypeError
from bayesindex.model.introspection import ModelInfo, ModelIntrospector, response_sd

logger = logging.getLogger(__name__)


def _negligible_value(info: ModelInfo) -> float:
    """Rules 1-6; raises RopeRangeSelectionError when none applies."""
    transform = info.response_transform
    if transform is not None and "log" in transform:
        return 0.01
    if info.is_linear and info.link_function == "log":
        return 0.01
    if info.family == "lognormal":
        return 0.01
    if info.response is not None and info.link_function == "identity":
        return 0.1 * response_sd(info)
    if info.is_logit:
        return 0.1 * math.pi / math.sqrt(3)
    if info.is_probit:
        return 0.1
    if info.is_correlation:
        return 0.05
    if info.is_count:
        sigma = info.dispersion
        if sigma is None or not np.isfinite(sigma):
            raise RopeRangeSelectionError("count model without a finite dispersion estimate")
        return 0.1 * float(sigma)
    raise RopeRangeSelectionError(f"no default ROPE rule for family {info.family!r}")


def select_rope_range(info: ModelInfo, verbose: bool = True) -> tuple[float, float]:
    """
    ROPE for a single response.

    Parameters
    ----------
    info : ModelInfo
        Family metadata.
    verbose : bool, default=True
        Warn when falling back to the generic range.

    Returns
    -------
    tuple of float
        (-v, v)
    """
    try:
        value = _negligible_value(info)
        if not np.isfinite(value):
            raise RopeRangeSelectionError("derived ROPE bound is not finite")
    except (RopeRangeSelectionError, ValueError, TypeError, ArithmeticError) as exc:
        logger.debug("rope range fallback for family=%s: %s", info.family, exc)
        if verbose:
            warnings.warn(
                "Could not estimate a good default ROPE range. Using '(-0.1, 0.1)'. "
                "Consider specifying the range manually.",
                UserWarning,
                stacklevel=3,
            )
        value = DEFAULT_ROPE[1]
    return (-float(value), float(value))


def rope_range(
    x: Any, verbose: bool = True
) -> tuple[float, float] | list[tuple[float, float]] | dict[str, tuple[float, float]]:
    """
    Find default ROPE bounds for a model or its family metadata.

    Parameters
    ----------
    x : ModelInfo, sequence of ModelInfo, ModelIntrospector, or draws
        - ModelInfo: one range.
        - sequence of ModelInfo (multivariate response): one range per
          response, as a dict keyed by `response_name` when every entry is
          named, otherwise as a list.
        - ModelIntrospector: ranges for its family metadata.
        - raw draws (sample, mapping or DrawTable): (-0.1, 0.1); there is
          no metadata to scale by.
    verbose : bool, default=True
        Warn when a range falls back to (-0.1, 0.1).

    Returns
    -------
    tuple, list of tuples, or dict of tuples

    Raises
    ------
    UnsupportedModelTypeError
        If `x` is none of the above.

    Examples
    --------
    >>> [round(v, 3) for v in rope_range(ModelInfo.from_family("binomial"))]
    [-0.181, 0.181]
    >>> rope_range(ModelInfo.from_family("correlation"))
    (-0.05, 0.05)
    """
    if isinstance(x, ModelInfo):
        return select_rope_range(x, verbose=verbose)
    if isinstance(x, ModelIntrospector):
        return rope_range(x.get_family_metadata(), verbose=verbose)
    if isinstance(x, (DrawTable, Mapping, np.ndarray)) or hasattr(x, "__array__"):
        return DEFAULT_ROPE
    if isinstance(x, Sequence) and not isinstance(x, str) and len(x) > 0:
        if all(isinstance(i, ModelInfo) for i in x):
            ranges = [select_rope_range(i, verbose=verbose) for i in x]
            names = [i.response_name for i in x]
            if all(names) and len(set(names)) == len(names):
                return dict(zip(names, ranges))
            return ranges
        if all(isinstance(i, (int, float)) for i in x):
            return DEFAULT_ROPE
    raise UnsupportedModelTypeError(
        f"cannot derive a ROPE range from an object of type {type(x).__name__}"
    )
