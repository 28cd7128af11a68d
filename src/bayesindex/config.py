"""
config.py
---------

Package-wide defaults.

Every public function takes these as keyword arguments, so the values below
only apply when the caller leaves an argument unset.
"""

from __future__ import annotations

# Credible-interval mass used by rope(), equivalence_test() and hdi()
DEFAULT_CI = 0.95

# Generic ROPE for standardized parameters (Kruschke, 2018); its upper
# bound is also the default practical-significance threshold
DEFAULT_ROPE = (-0.1, 0.1)

# Density grid size and how far (as fraction of the range) to extend it
DEFAULT_DENSITY_PRECISION = 512
DEFAULT_EXTEND_SCALE = 0.1
