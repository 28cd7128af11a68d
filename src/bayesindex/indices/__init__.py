"""
indices
=======

Indices describing posterior draws.

This subpackage provides:
- p_direction: Probability of Direction (pd) and pd_to_p
- p_significance: Probability of practical Significance (ps)
- rope: share of the posterior inside the ROPE
- equivalence_test: HDI + ROPE decision rule
- hdi / eti: credible intervals
- point_estimate / map_estimate: centrality
- describe_posterior: all of the above in one table
- apply_index / IndexResult: the per-parameter driver behind every index

Inputs
------
Every index accepts a single sample (1-D array-like), a DrawTable, a
mapping of name -> draws, a 2-D array (draws x parameters) or any object
implementing model.ModelIntrospector. Single samples give scalars; the
others give an IndexResult with one row per parameter.
"""

from .ci import eti, hdi, restrict_to_ci
from .describe import describe_posterior
from .driver import IndexResult, apply_index, resolve_draws
from .equivalence_test import equivalence_test
from .p_direction import p_direction, pd_to_p
from .p_significance import p_significance
from .point_estimate import map_estimate, point_estimate
from .rope import rope, rope_fraction

__all__ = [
    "p_direction",
    "pd_to_p",
    "p_significance",
    "rope",
    "rope_fraction",
    "equivalence_test",
    "hdi",
    "eti",
    "restrict_to_ci",
    "point_estimate",
    "map_estimate",
    "describe_posterior",
    "apply_index",
    "resolve_draws",
    "IndexResult",
]
