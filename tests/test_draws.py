"""
test_draws.py
-------------

Tests for sample validation and the DrawTable container.
"""

import numpy as np
import pytest

from bayesindex import Component, DrawTable, Effects
from bayesindex.data.draws import as_sample
from bayesindex.errors import InvalidSampleError


class TestAsSample:
    def test_drops_non_finite(self):
        x = as_sample([1.0, float("nan"), 2.0, float("-inf")])
        assert x.tolist() == [1.0, 2.0]

    def test_scalar_becomes_length_one(self):
        assert as_sample(3.0).shape == (1,)

    def test_keeps_double_precision(self):
        x = as_sample(1e8 + np.array([0.0, 1.0, 2.0]))
        assert x.dtype == np.float64
        assert float(x[1] - x[0]) == 1.0

    @pytest.mark.parametrize(
        "bad",
        [[], [float("nan")], np.zeros((3, 2)), ["a", "b"]],
    )
    def test_invalid(self, bad):
        with pytest.raises(InvalidSampleError):
            as_sample(bad)

    def test_invalid_sample_is_value_error(self):
        with pytest.raises(ValueError):
            as_sample([])


class TestDrawTable:
    def test_mapping_interface(self):
        table = DrawTable({"b": [1.0, 2.0], "a": [3.0]})
        assert list(table) == ["b", "a"]
        assert len(table) == 2
        assert table["a"].tolist() == [3.0]
        assert "b" in table

    def test_read_only(self):
        table = DrawTable({"a": [1.0, 2.0]})
        with pytest.raises(ValueError):
            table["a"][0] = 5.0

    def test_copies_input(self):
        source = np.array([1.0, 2.0])
        table = DrawTable({"a": source})
        source[0] = 99.0
        assert table["a"][0] == 1.0

    def test_rejects_2d_column(self):
        with pytest.raises(ValueError, match="1-D"):
            DrawTable({"a": np.zeros((2, 2))})

    def test_tags(self, tagged_table):
        assert tagged_table.effects("sd_group") is Effects.RANDOM
        assert tagged_table.component("b_zi_Intercept") is Component.ZERO_INFLATED
        assert tagged_table.tags("b_x") == {"Effects": "fixed", "Component": "conditional"}

    def test_tags_only_for_present_kinds(self):
        table = DrawTable({"a": [1.0]}, effects={"a": "random"})
        assert table.tags("a") == {"Effects": "random"}
        assert DrawTable({"a": [1.0]}).tags("a") == {}

    def test_unknown_tag_value(self):
        with pytest.raises(ValueError, match="unknown Effects tag"):
            DrawTable({"a": [1.0]}, effects={"a": "mixed"})

    def test_tag_for_missing_parameter(self):
        with pytest.raises(ValueError, match="unknown parameters"):
            DrawTable({"a": [1.0]}, component={"b": "conditional"})


class TestFilter:
    def test_default_keeps_everything(self, tagged_table):
        assert tagged_table.filter().parameters == tagged_table.parameters

    def test_fixed_conditional(self, tagged_table):
        table = tagged_table.filter(effects="fixed", component="conditional")
        assert table.parameters == ["b_Intercept", "b_x"]

    def test_random(self, tagged_table):
        assert tagged_table.filter(effects=Effects.RANDOM).parameters == ["sd_group"]

    def test_untagged_counts_as_fixed_conditional(self):
        table = DrawTable({"a": [1.0], "b": [2.0]}, effects={"b": "random"})
        assert table.filter(effects="fixed", component="conditional").parameters == ["a"]

    def test_filtered_table_keeps_tags(self, tagged_table):
        table = tagged_table.filter(component="zero_inflated")
        assert table.tags("b_zi_Intercept")["Component"] == "zero_inflated"


class TestConstructors:
    def test_from_array_default_names(self):
        table = DrawTable.from_array(np.arange(6.0).reshape(3, 2))
        assert table.parameters == ["X1", "X2"]
        assert table["X2"].tolist() == [1.0, 3.0, 5.0]

    def test_from_array_names(self):
        table = DrawTable.from_array(np.zeros((4, 2)), names=["alpha", "beta"])
        assert table.parameters == ["alpha", "beta"]

    def test_from_array_name_count(self):
        with pytest.raises(ValueError, match="names"):
            DrawTable.from_array(np.zeros((4, 2)), names=["alpha"])

    def test_from_array_shape(self):
        with pytest.raises(ValueError):
            DrawTable.from_array(np.zeros(4))

    def test_from_dict_with_tags(self):
        table = DrawTable.from_dict({"a": [1.0]}, effects={"a": "random"})
        assert table.has_effects and not table.has_component
