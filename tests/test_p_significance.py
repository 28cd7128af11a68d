"""
test_p_significance.py
----------------------

Tests for the Probability of practical Significance.

Coverage:
- reference value on a deterministic N(1, 1) sample
- monotonicity in the threshold
- edge cases (all draws negligible, median of zero, asymmetric band)
- "default" threshold from model metadata
- tables
"""

import jax.numpy as jnp
import jax.random as jr
import numpy as np
import pytest

from bayesindex import ModelInfo, p_direction, p_significance
from bayesindex.utils.distributions import distribution_normal

# ============================================================================
# Single samples
# ============================================================================


class TestSample:
    """ps of a single sample."""

    def test_reference_value(self):
        x = distribution_normal(10000, mean=1.0, sd=1.0)
        assert p_significance(x, threshold=0.1) == pytest.approx(0.816, abs=0.1)

    def test_reference_value_seeded_draws(self, positive_draws):
        assert p_significance(positive_draws, threshold=0.1) == pytest.approx(0.816, abs=0.1)

    def test_default_threshold_without_model_is_0_1(self):
        x = distribution_normal(10000, mean=1.0, sd=1.0)
        assert p_significance(x) == p_significance(x, threshold=0.1)

    def test_counts_only_beyond_threshold(self):
        x = [0.05, 0.2, 0.3, 0.5, -0.4]
        assert p_significance(x, threshold=0.1) == pytest.approx(0.6)

    def test_draw_equal_to_threshold_is_not_significant(self):
        assert p_significance([0.5, 1.0, 2.0], threshold=0.5) == pytest.approx(2 / 3)

    def test_negative_dominant_side(self):
        x = [-2.0, -1.5, -0.05, 0.3]
        assert p_significance(x, threshold=0.1) == pytest.approx(0.5)

    def test_all_inside_band_gives_zero(self):
        assert p_significance([-0.05, 0.0, 0.02, 0.08], threshold=0.1) == 0.0

    def test_zero_median_takes_larger_tail(self):
        x = [-3.0, -2.0, 0.0, 0.0, 0.0, 1.0]
        assert p_significance(x, threshold=0.5) == pytest.approx(2 / 6)

    def test_zero_threshold_matches_pd_for_one_signed_sample(self, positive_draws):
        x = positive_draws + 10.0
        assert p_significance(x, threshold=0.0) == pytest.approx(p_direction(x))

    def test_monotone_in_threshold(self, positive_draws):
        thresholds = [0.0, 0.05, 0.1, 0.3, 0.5, 1.0, 2.0, 5.0]
        values = [p_significance(positive_draws, threshold=t) for t in thresholds]
        assert all(a >= b for a, b in zip(values, values[1:]))

    def test_asymmetric_band(self):
        x = [0.15, 0.25, 0.35, 0.45, -1.0]
        assert p_significance(x, threshold=(-0.1, 0.3)) == pytest.approx(0.4)

    def test_array_band(self):
        x = [0.15, 0.25, 0.35, 0.45, -1.0]
        band = np.array([-0.1, 0.3])
        assert p_significance(x, threshold=band) == p_significance(x, threshold=(-0.1, 0.3))
        assert p_significance(x, threshold=jnp.asarray(band)) == pytest.approx(0.4)

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            p_significance([1.0, 2.0], threshold=-0.1)

    def test_band_order_checked(self):
        with pytest.raises(ValueError, match="low <= high"):
            p_significance([1.0, 2.0], threshold=(0.2, -0.2))


# ============================================================================
# Default threshold from a model
# ============================================================================


class TestDefaultThreshold:
    def test_logit_model_uses_wider_band(self):
        x = [0.15, 0.17, 0.19, 0.5, 1.0]
        info = ModelInfo.from_family("binomial")
        # band is +-0.181, so only 0.19, 0.5 and 1.0 count
        assert p_significance(x, model=info) == pytest.approx(0.6)

    def test_model_input(self, logit_model):
        res = p_significance(logit_model)
        assert res["Parameter"] == ["b_Intercept", "b_x"]
        assert res.attrs["threshold"][1] == pytest.approx(0.1813799364)


# ============================================================================
# Tables
# ============================================================================


class TestTable:
    def test_four_parameters(self):
        draws = jr.normal(jr.PRNGKey(1), (100, 4))
        res = p_significance(draws)
        assert len(res) == 4
        assert res.columns == ["Parameter", "ps"]

    def test_tags_carried(self, tagged_table):
        res = p_significance(tagged_table, threshold=0.1)
        assert res.columns == ["Parameter", "ps", "Effects", "Component"]
        assert res.row("b_zi_Intercept")["Component"] == "zero_inflated"

    def test_parallel_matches_sequential(self, tagged_table):
        seq = p_significance(tagged_table, threshold=0.2)
        par = p_significance(tagged_table, threshold=0.2, n_jobs=3)
        assert seq.rows == par.rows
