"""
bayesindex
==========

Indices describing Bayesian posterior distributions.

Given posterior draws (one sample, a table of samples, or a fitted model
that exposes its draws), bayesindex quantifies the existence and the
practical relevance of each effect.

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. Draws (data/draws.py):
   - DrawTable: read-only, ordered parameter -> draws mapping, with
     optional Effects / Component tags.

2. Density estimation (density/):
   - Strategies selected by name: "kernel", "logspline", "local-polynomial".
   - Failures warn and fall back to counting draws directly.

3. Indices (indices/):
   - p_direction: Probability of Direction (pd).
   - p_significance: Probability of practical Significance (ps).
   - rope / equivalence_test: ROPE percentage and decision rule.
   - hdi / eti, point_estimate / map_estimate, describe_posterior.

4. Model layer (model/):
   - ModelIntrospector protocol: get_draw_table + get_family_metadata.
   - rope_range: default ROPE from the model family.

Unified import style
--------------------
Top-level:
  from bayesindex import p_direction, p_significance, rope, rope_range
  from bayesindex import DrawTable, ModelInfo, PosteriorModel

Subpackages:
  from bayesindex.density import estimate_density, KernelDensity
  from bayesindex.indices import apply_index, IndexResult
  from bayesindex.utils.report import format_index_table

Data flow
---------
- Every index calls indices.driver.resolve_draws on its input.
- A single sample gives a scalar; a table gives an IndexResult with one
  row per parameter, in the table's order.

----------------------------------------------------------------------
"""

import jax

# Draws are compared and counted in double precision
jax.config.update("jax_enable_x64", True)

from . import data as data
from . import density as density
from . import indices as indices
from . import model as model
from . import utils as utils
from .data.draws import Component, DrawTable, Effects
from .density import DensityCurve, estimate_density
from .errors import (
    BayesIndexError,
    DensityEstimationError,
    InvalidSampleError,
    RopeRangeSelectionError,
    UnsupportedModelTypeError,
)
from .indices import (
    IndexResult,
    apply_index,
    describe_posterior,
    equivalence_test,
    eti,
    hdi,
    map_estimate,
    p_direction,
    p_significance,
    pd_to_p,
    point_estimate,
    rope,
)
from .model import ModelInfo, ModelIntrospector, PosteriorModel, rope_range
from .utils.report import format_index_table, print_equivalence_test

__version__ = "0.1.0"

__all__ = [
    # Indices
    "p_direction",
    "pd_to_p",
    "p_significance",
    "rope",
    "rope_range",
    "equivalence_test",
    "hdi",
    "eti",
    "point_estimate",
    "map_estimate",
    "describe_posterior",
    "apply_index",
    "IndexResult",
    # Data
    "DrawTable",
    "Effects",
    "Component",
    # Density
    "DensityCurve",
    "estimate_density",
    # Model
    "ModelInfo",
    "ModelIntrospector",
    "PosteriorModel",
    # Report
    "format_index_table",
    "print_equivalence_test",
    # Errors
    "BayesIndexError",
    "InvalidSampleError",
    "DensityEstimationError",
    "RopeRangeSelectionError",
    "UnsupportedModelTypeError",
    # Subpackages
    "data",
    "density",
    "indices",
    "model",
    "utils",
]
