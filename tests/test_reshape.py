"""Tests for reshaping data into plotting tables."""

import numpy as np
import pandas as pd
import pytest

from bayesplot import reshape
from bayesplot.exceptions import ValidationError


def test_melt_yrep(small_yrep):
    """Draws vary fastest and ids start at 1."""
    molten = reshape.melt_yrep(small_yrep)

    assert list(molten.columns) == ["y_id", "rep_id", "rep_label", "value"]
    assert molten["y_id"].tolist() == [1, 1, 2, 2, 3, 3]
    assert molten["rep_id"].tolist() == [1, 2, 1, 2, 1, 2]
    assert molten["rep_label"].tolist()[:2] == ["y_rep (1)", "y_rep (2)"]
    np.testing.assert_array_equal(molten["value"], [1.5, 0.5, 2.5, 3.5, 2.0, 4.0])


class TestPpcData:
    """Tests for ppc_data and melt_and_stack."""

    def test_layout(self, small_y, small_yrep):
        data = reshape.ppc_data(small_y, small_yrep)

        assert list(data.columns) == [
            "y_id",
            "rep_id",
            "rep_label",
            "is_y",
            "is_y_label",
            "value",
        ]
        assert len(data) == small_yrep.size + len(small_y)

    def test_observed_rows(self, small_y, small_yrep):
        data = reshape.ppc_data(small_y, small_yrep)
        observed = data[data["is_y"]]

        np.testing.assert_array_equal(observed["value"], small_y)
        assert observed["rep_id"].isna().all()
        assert (observed["rep_label"] == "y").all()
        assert (observed["is_y_label"] == "y").all()
        assert not data.loc[~data["is_y"], "rep_id"].isna().any()

    def test_label_order(self, example_y_data, example_yrep_draws):
        """The observed data come first in the label ordering."""
        data = reshape.ppc_data(example_y_data, example_yrep_draws)
        categories = list(data["rep_label"].cat.categories)

        assert data["rep_label"].cat.ordered
        assert categories[0] == "y"
        assert categories[1:] == [
            f"y_rep ({i})" for i in range(1, len(example_yrep_draws) + 1)
        ]
        assert list(data["is_y_label"].cat.categories) == ["y", "y_rep"]

    def test_with_group(self, example_y_data, example_yrep_draws, example_group_data):
        data = reshape.ppc_data(example_y_data, example_yrep_draws, example_group_data)

        assert data.columns[0] == "group"
        assert len(data) == example_yrep_draws.size + len(example_y_data)

        # Every row gets the group of its observation
        expected = np.asarray(example_group_data)[data["y_id"].to_numpy() - 1]
        np.testing.assert_array_equal(data["group"].astype(str), expected)

    def test_validation_errors(self, small_y):
        with pytest.raises(ValidationError):
            reshape.ppc_data(small_y, np.ones((2, 4)))
        with pytest.raises(ValidationError):
            reshape.ppc_data(small_y, np.ones((2, 3)), group=["a", "b"])


class TestIntervalsData:
    """Tests for the interval tables."""

    def test_central_probs(self):
        assert reshape.central_probs(0.9) == pytest.approx((0.05, 0.5, 0.95))
        assert reshape.central_probs(0.5) == pytest.approx((0.25, 0.5, 0.75))

    def test_intervals_data(self, small_y):
        intervals = np.array([[0.0, 1.0, 2.0], [1.0, 2.0, 3.0], [2.0, 3.0, 4.0]])
        data = reshape.intervals_data(small_y, np.array([10.0, 20.0, 30.0]), intervals)

        assert list(data.columns) == ["y_id", "y_obs", "x", "lo", "mid", "hi"]
        np.testing.assert_array_equal(data["mid"], [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(data["x"], [10.0, 20.0, 30.0])

    def test_intervals_data_length(self, small_y):
        with pytest.raises(ValidationError, match="same length"):
            reshape.intervals_data(small_y, np.arange(3), np.ones((2, 3)))

    def test_ppc_intervals_data(self, example_y_data, example_yrep_draws):
        data = reshape.ppc_intervals_data(example_y_data, example_yrep_draws, prob=0.5)

        np.testing.assert_allclose(
            data["lo"], np.quantile(example_yrep_draws, 0.25, axis=0)
        )
        np.testing.assert_allclose(data["mid"], np.median(example_yrep_draws, axis=0))
        np.testing.assert_allclose(
            data["hi"], np.quantile(example_yrep_draws, 0.75, axis=0)
        )
        np.testing.assert_array_equal(data["x"], np.arange(1, len(example_y_data) + 1))

    def test_ppc_intervals_data_with_x_and_group(
        self, example_y_data, example_yrep_draws, example_group_data
    ):
        x = np.linspace(0, 1, len(example_y_data))
        data = reshape.ppc_intervals_data(
            example_y_data, example_yrep_draws, x, example_group_data
        )

        assert data.columns[0] == "group"
        assert isinstance(data["group"].dtype, pd.CategoricalDtype)
        np.testing.assert_array_equal(data["x"], x)

    @pytest.mark.parametrize(
        "x,match", [(np.arange(3), "same length"), (np.array(["a"] * 40), "numeric")]
    )
    def test_bad_x(self, example_y_data, example_yrep_draws, x, match):
        with pytest.raises(ValidationError, match=match):
            reshape.ppc_intervals_data(example_y_data, example_yrep_draws, x)
