"""
Describing a Logistic Regression Posterior
------------------------------------------

This example builds a small in-memory "fitted model" from synthetic
posterior draws and reports the indices bayesindex provides: the
Probability of Direction, the ROPE percentage with a model-derived default
range, the Probability of practical Significance and the test for
practical equivalence.

"""

from __future__ import annotations

import os
import sys

import jax
import jax.random as jr

# Ensure local src is importable when running directly
sys.path.insert(
    0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../src"))
)

from bayesindex import (
    DrawTable,
    ModelInfo,
    PosteriorModel,
    describe_posterior,
    equivalence_test,
    format_index_table,
    p_direction,
    p_significance,
    print_equivalence_test,
    rope_range,
)

print("Device used:", jax.devices()[0])

# Synthetic posterior: two fixed effects, one random-effect SD
key_a, key_b, key_c = jr.split(jr.PRNGKey(0), 3)
draws = DrawTable(
    {
        "b_Intercept": 0.8 + 0.3 * jr.normal(key_a, (4000,)),
        "b_dose": 0.05 + 0.1 * jr.normal(key_b, (4000,)),
        "sd_subject": 0.5 + 0.1 * jr.normal(key_c, (4000,)),
    },
    effects={"b_Intercept": "fixed", "b_dose": "fixed", "sd_subject": "random"},
)
model = PosteriorModel(draws, ModelInfo.from_family("binomial"))

print("\nDefault ROPE for a logistic model:", rope_range(model))

print("\n# Probability of Direction\n")
print(format_index_table(p_direction(model, effects="all")))

print("\n# Probability of practical Significance\n")
print(format_index_table(p_significance(model)))

print("\n# Posterior summary\n")
summary = describe_posterior(model, centrality="all", test="all")
print(format_index_table(summary))

print()
print_equivalence_test(equivalence_test(model, ci=[0.89, 0.95]))
