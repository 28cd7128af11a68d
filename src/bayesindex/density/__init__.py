"""
density
=======

Density estimation for posterior draws.

This subpackage provides:
- DensityCurve: density values on an increasing grid
- DensityEstimator: protocol implemented by every strategy
- KernelDensity, LogsplineDensity, LocalPolynomialDensity: strategies
- estimate_density: select a strategy by name and fit it

Adding a method
---------------
Write a class with `name` and `estimate(sample) -> DensityCurve`, then
register it in `estimate.ESTIMATORS`.
"""

from .base import DensityCurve, DensityEstimator
from .estimate import (
    ESTIMATORS,
    canonical_method,
    estimate_density,
    get_estimator,
    try_estimate_density,
)
from .kernel import KernelDensity, fit_kde, select_bandwidth
from .local_polynomial import LocalPolynomialDensity
from .logspline import LogsplineDensity

__all__ = [
    "DensityCurve",
    "DensityEstimator",
    "KernelDensity",
    "LogsplineDensity",
    "LocalPolynomialDensity",
    "ESTIMATORS",
    "canonical_method",
    "estimate_density",
    "get_estimator",
    "try_estimate_density",
    "fit_kde",
    "select_bandwidth",
]
