"""
test_report.py
--------------

Tests for plain-text rendering of result tables.
"""

from bayesindex import (
    IndexResult,
    equivalence_test,
    format_index_table,
    p_direction,
    print_equivalence_test,
)
from bayesindex.utils.distributions import distribution_normal


def test_simple_table():
    res = p_direction({"a": [1.0, 2.0, -1.0], "b": [-1.0, -2.0, 3.0]})
    assert format_index_table(res).splitlines() == [
        "Parameter |   pd",
        "----------+-----",
        "a         | 0.67",
        "b         | 0.67",
    ]


def test_digits_and_columns():
    res = IndexResult([{"Parameter": "a", "pd": 0.91234, "ps": 0.5}])
    text = format_index_table(res, digits=3, columns=["Parameter", "ps"])
    assert "0.500" in text
    assert "pd" not in text


def test_percentage_and_missing_values():
    res = IndexResult(
        [
            {"Parameter": "a", "ROPE_Percentage": 0.125},
            {"Parameter": "b", "ROPE_Percentage": float("nan")},
        ]
    )
    text = format_index_table(res)
    assert "12.50 %" in text
    assert "NA" in text


def test_groups_by_effects_and_component(tagged_table):
    text = format_index_table(p_direction(tagged_table))
    assert "# Fixed Effects\n" in text
    assert "# Random Effects\n" in text
    assert "# Fixed Effects (Zero-Inflated Model)" in text
    assert "Effects |" not in text


def test_empty_table():
    assert format_index_table(IndexResult([])) == "(no parameters)"


def test_print_equivalence_test(capsys):
    res = equivalence_test(distribution_normal(1000, mean=5.0), range=(-0.1, 0.1))
    print_equivalence_test(res)
    out = capsys.readouterr().out
    assert out.startswith("# Test for Practical Equivalence")
    assert "ROPE: [-0.10 0.10]" in out
    assert "95% HDI" in out
    assert "Rejected" in out
    assert "0.00 %" in out


def test_hdi_bounds_padded_without_comma(capsys):
    res = IndexResult(
        [
            {
                "Parameter": "a",
                "CI": 0.95,
                "ROPE_low": -0.1,
                "ROPE_high": 0.1,
                "ROPE_Percentage": 0.0,
                "ROPE_Equivalence": "Rejected",
                "HDI_low": -12.5,
                "HDI_high": 3.0,
            },
            {
                "Parameter": "b",
                "CI": 0.95,
                "ROPE_low": -0.1,
                "ROPE_high": 0.1,
                "ROPE_Percentage": 1.0,
                "ROPE_Equivalence": "Accepted",
                "HDI_low": 0.0,
                "HDI_high": 0.05,
            },
        ]
    )
    print_equivalence_test(res)
    out = capsys.readouterr().out
    assert "[-12.50 3.00]" in out
    assert "[  0.00 0.05]" in out
    assert "," not in out


def test_hdi_padding_shared_across_ci_blocks(capsys):
    x = distribution_normal(1000, mean=5.0, sd=10.0)
    res = equivalence_test(x, range=(-0.1, 0.1), ci=[0.5, 0.95])
    print_equivalence_test(res)
    lines = capsys.readouterr().out.splitlines()
    cells = [ln.split("|")[-1].strip() for ln in lines if "[" in ln and "ROPE:" not in ln]
    assert len(cells) == 2
    # the 50% lower bound is one character shorter and gets padded
    assert cells[0].startswith("[ -")
    assert len(cells[0]) == len(cells[1])
