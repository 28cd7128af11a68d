"""
test_describe.py
----------------

Tests for describe_posterior, the one-table summary.
"""

import pytest

from bayesindex import describe_posterior, eti, p_direction, p_significance, rope
from bayesindex.utils.distributions import distribution_normal


@pytest.fixture
def shifted():
    return distribution_normal(1000, mean=1.0)


class TestDescribePosterior:
    def test_default_columns(self, shifted):
        res = describe_posterior(shifted)
        assert res["Parameter"] == ["Posterior"]
        assert res.columns == [
            "Parameter",
            "Median",
            "CI",
            "CI_low",
            "CI_high",
            "pd",
            "ROPE_CI",
            "ROPE_low",
            "ROPE_high",
            "ROPE_Percentage",
        ]

    def test_values_match_single_indices(self, shifted):
        row = describe_posterior(shifted).rows[0]
        assert row["pd"] == p_direction(shifted)
        assert row["ROPE_Percentage"] == rope(shifted)

    def test_all_tests(self, shifted):
        res = describe_posterior(shifted, test="all")
        assert res.columns[-2:] == ["ROPE_Equivalence", "ps"]
        assert res["ps"][0] == p_significance(shifted)

    def test_no_tests(self, shifted):
        res = describe_posterior(shifted, test=None)
        assert res.columns == ["Parameter", "Median", "CI", "CI_low", "CI_high"]
        assert res.attrs["range"] is None

    def test_test_aliases(self, shifted):
        res = describe_posterior(shifted, test=["pd", "ps"])
        assert "pd" in res and "ps" in res and "ROPE_Percentage" not in res

    def test_eti(self, shifted):
        row = describe_posterior(shifted, ci=0.89, ci_method="eti").rows[0]
        assert (row["CI_low"], row["CI_high"]) == eti(shifted, ci=0.89)

    def test_all_centralities(self, shifted):
        row = describe_posterior(shifted, centrality="all", test=None).rows[0]
        assert row["MAP"] == pytest.approx(1.0, abs=0.25)

    def test_density_method(self, shifted):
        row = describe_posterior(shifted, method="kernel", test="pd").rows[0]
        # P(N(1, 1) > 0) = 0.841
        assert row["pd"] == pytest.approx(0.841, abs=0.03)

    def test_explicit_rope_range(self, shifted):
        row = describe_posterior(shifted, rope_range=(-2.0, 2.0), rope_ci=1.0).rows[0]
        assert row["ROPE_low"] == -2.0
        assert row["ROPE_Percentage"] == pytest.approx(0.84, abs=0.01)

    def test_model(self, logit_model):
        res = describe_posterior(logit_model)
        assert res["Parameter"] == ["b_Intercept", "b_x"]
        assert res.columns[-2:] == ["Effects", "Component"]
        assert res["ROPE_high"][0] == pytest.approx(0.1813799364)

    def test_table(self, four_param_table):
        assert len(describe_posterior(four_param_table)) == 4

    def test_unknown_test(self, shifted):
        with pytest.raises(ValueError, match="unknown test"):
            describe_posterior(shifted, test="bayes_factor")
