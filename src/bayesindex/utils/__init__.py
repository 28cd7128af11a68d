"""
utils
=====

Shared utility functions for bayesindex.

This subpackage provides:
- math : trapezoid integration, Gaussian kernel.
- distributions : deterministic quantile samples of reference distributions.
- report : plain-text rendering of index tables (import from
  bayesindex.utils.report; it depends on bayesindex.indices).
"""

from .distributions import distribution_normal, distribution_uniform
from .math import gaussian_pdf, integrate_curve, trapezoid

__all__ = [
    # distributions
    "distribution_normal",
    "distribution_uniform",
    # math
    "gaussian_pdf",
    "integrate_curve",
    "trapezoid",
]
