"""
errors.py
---------

Exception types raised by bayesindex.

Structural failures (nothing to compute on) propagate to the caller.
Numerical failures (a density estimator that cannot fit, a ROPE range that
cannot be derived from model metadata) are recovered where they occur and
surface only as warnings.
"""

from __future__ import annotations


class BayesIndexError(Exception):
    """Base class for all bayesindex errors."""


class InvalidSampleError(BayesIndexError, ValueError):
    """A sample is empty or has no finite values."""


class DensityEstimationError(BayesIndexError, RuntimeError):
    """A density estimator could not fit the sample."""


class RopeRangeSelectionError(BayesIndexError, ValueError):
    """Model metadata is insufficient to pick a principled ROPE range."""


class UnsupportedModelTypeError(BayesIndexError, TypeError):
    """The input cannot be turned into a DrawTable."""
