"""
base.py
-------

Density curve container and the estimator protocol.

Every estimator implements `estimate(sample) -> DensityCurve`. Estimators
are plain objects selected by name (see density/estimate.py), so adding a
new method means adding one class and one registry entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import jax.numpy as jnp

from bayesindex.errors import DensityEstimationError
from bayesindex.utils.math import integrate_curve, trapezoid


@dataclass(frozen=True)
class DensityCurve:
    """
    Density evaluated on an increasing grid.

    Attributes
    ----------
    x : jnp.ndarray, shape (N,)
        Grid points, strictly increasing.
    y : jnp.ndarray, shape (N,)
        Non-negative density values at `x`.
    method : str
        Name of the estimator that produced the curve.
    """

    x: jnp.ndarray
    y: jnp.ndarray
    method: str = ""

    def __len__(self) -> int:
        return int(self.x.shape[0])

    def area(self) -> float:
        """Total area under the curve (close to 1 for a proper estimate)."""
        return float(trapezoid(self.y, self.x))

    def integrate(self, low: float = -jnp.inf, high: float = jnp.inf) -> float:
        """Area under the curve between `low` and `high`."""
        return integrate_curve(self.x, self.y, low, high)

    def mass(self, low: float = -jnp.inf, high: float = jnp.inf) -> float:
        """Fraction of the total area lying in [low, high]."""
        total = self.area()
        if total <= 0:
            raise DensityEstimationError("density curve has zero area")
        return self.integrate(low, high) / total

    def mode(self) -> float:
        """Grid point with the highest density."""
        return float(self.x[jnp.argmax(self.y)])


@runtime_checkable
class DensityEstimator(Protocol):
    """
    Protocol for density estimation strategies.

    Implementations raise DensityEstimationError when they cannot fit the
    sample (too few points, zero variance, non-finite output).
    """

    name: str

    def estimate(self, sample: jnp.ndarray) -> DensityCurve:
        """
        Estimate the density of a 1-D sample.

        Parameters
        ----------
        sample : jnp.ndarray, shape (n,)
            Finite draws.

        Returns
        -------
        DensityCurve
            Curve covering at least [min(sample), max(sample)].
        """
        ...


def make_grid(sample: jnp.ndarray, precision: int, extend_scale: float) -> jnp.ndarray:
    """
    Evenly spaced grid over the sample range, extended on both sides.

    The range is widened by `extend_scale * (max - min)` at each end so
    that the tails of smooth estimates are not truncated.
    """
    if precision < 2:
        raise ValueError("precision must be >= 2")
    lo = float(jnp.min(sample))
    hi = float(jnp.max(sample))
    pad = extend_scale * (hi - lo)
    return jnp.linspace(lo - pad, hi + pad, precision)


def check_fit_inputs(sample: jnp.ndarray, *, min_points: int, method: str) -> None:
    """Raise DensityEstimationError if `sample` cannot support an estimate."""
    n = int(sample.shape[0])
    if n < min_points:
        raise DensityEstimationError(
            f"{method} density needs at least {min_points} draws, got {n}"
        )
    spread = float(jnp.max(sample) - jnp.min(sample))
    scale = max(1.0, float(jnp.max(jnp.abs(sample))))
    if spread <= 1e-12 * scale:
        raise DensityEstimationError(f"{method} density: sample has zero variance")


def finalize_curve(x: jnp.ndarray, y: jnp.ndarray, method: str) -> DensityCurve:
    """Clip, validate and normalize an estimated curve."""
    y = jnp.clip(y, 0.0, None)
    if not bool(jnp.all(jnp.isfinite(y))):
        raise DensityEstimationError(f"{method} density produced non-finite values")
    area = float(trapezoid(y, x))
    if not area > 0:
        raise DensityEstimationError(f"{method} density has zero area")
    return DensityCurve(x=x, y=y / area, method=method)
