"""
test_equivalence_test.py
------------------------

Tests for the HDI + ROPE equivalence decision.
"""

import jax.random as jr
import pytest

from bayesindex import IndexResult, equivalence_test
from bayesindex.indices.equivalence_test import equivalence_decision
from bayesindex.utils.distributions import distribution_normal


class TestDecision:
    @pytest.mark.parametrize(
        "hdi_bounds, expected",
        [
            ((0.2, 0.5), "Rejected"),
            ((-0.5, -0.2), "Rejected"),
            ((-0.05, 0.05), "Accepted"),
            ((-0.1, 0.1), "Accepted"),
            ((-0.05, 0.3), "Undecided"),
            ((-1.0, 1.0), "Undecided"),
        ],
    )
    def test_table(self, hdi_bounds, expected):
        assert equivalence_decision(*hdi_bounds, -0.1, 0.1) == expected


class TestEquivalenceTest:
    def test_clear_effect_is_rejected(self):
        res = equivalence_test(distribution_normal(1000, mean=5.0), range=(-0.1, 0.1))
        row = res.rows[0]
        assert row["ROPE_Equivalence"] == "Rejected"
        assert row["ROPE_Percentage"] == 0.0

    def test_negligible_effect_is_accepted(self):
        res = equivalence_test(distribution_normal(1000, sd=0.01), range=(-0.1, 0.1))
        row = res.rows[0]
        assert row["ROPE_Equivalence"] == "Accepted"
        assert row["ROPE_Percentage"] == 1.0

    def test_overlap_is_undecided(self, standard_normal_draws):
        res = equivalence_test(standard_normal_draws)
        assert res["ROPE_Equivalence"] == ["Undecided"]

    def test_columns(self):
        res = equivalence_test(distribution_normal(100), range=(-0.1, 0.1))
        assert isinstance(res, IndexResult)
        assert res.columns == [
            "CI",
            "ROPE_low",
            "ROPE_high",
            "ROPE_Percentage",
            "ROPE_Equivalence",
            "HDI_low",
            "HDI_high",
        ]
        assert res.attrs["range"] == (-0.1, 0.1)

    def test_several_ci_values(self):
        res = equivalence_test(distribution_normal(1000, mean=0.3, sd=0.1), ci=[0.5, 0.999])
        # narrow HDI sits above the ROPE, the wide one reaches into it
        assert res["ROPE_Equivalence"] == ["Rejected", "Undecided"]

    def test_table(self):
        key1, key2 = jr.split(jr.PRNGKey(11))
        draws = {
            "big": 3.0 + 0.1 * jr.normal(key1, (2000,)),
            "tiny": 0.01 * jr.normal(key2, (2000,)),
        }
        res = equivalence_test(draws, range=(-0.1, 0.1))
        assert res["Parameter"] == ["big", "tiny"]
        assert res["ROPE_Equivalence"] == ["Rejected", "Accepted"]

    def test_model_default_range(self, logit_model):
        res = equivalence_test(logit_model)
        assert res["ROPE_high"][0] == pytest.approx(0.1813799364)
        assert res.row("b_Intercept")["ROPE_Percentage"] < 0.1
        assert set(res["ROPE_Equivalence"]) <= {"Accepted", "Rejected", "Undecided"}
