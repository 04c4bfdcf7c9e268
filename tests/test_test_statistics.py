"""Tests for the PPC test statistic plots."""

import holoviews as hv
import numpy as np
import pytest

import bayesplot as bp
from bayesplot.exceptions import ValidationError


class TestStat:
    """Tests for ppc_stat."""

    def test_default_mean(self, example_y_data, example_yrep_draws):
        plot = bp.ppc_stat(example_y_data, example_yrep_draws)
        histogram, line = plot.values()

        assert isinstance(histogram, hv.Histogram)
        assert isinstance(line, hv.VLine)
        assert line.data == pytest.approx(np.mean(example_y_data))
        assert histogram.dimension_values(1).sum() == len(example_yrep_draws)
        assert histogram.label == "mean(y_rep)"

    def test_custom_function(self, example_y_data, example_yrep_draws):
        def q25(x):
            return np.quantile(x, 0.25)

        plot = bp.ppc_stat(example_y_data, example_yrep_draws, stat=q25, binwidth=0.1)
        histogram, line = plot.values()

        assert line.data == pytest.approx(q25(example_y_data))
        assert histogram.kdims[0].name == "q25"
        np.testing.assert_allclose(np.diff(histogram.edges), 0.1)

    def test_unknown_stat(self, example_y_data, example_yrep_draws):
        with pytest.raises(ValidationError, match="'stat'"):
            bp.ppc_stat(example_y_data, example_yrep_draws, stat="skew")


@pytest.mark.parametrize(
    "plot_func,element_type",
    [(bp.ppc_stat_grouped, hv.Histogram), (bp.ppc_stat_freqpoly_grouped, hv.Area)],
)
def test_grouped(
    example_y_data, example_yrep_draws, example_group_data, plot_func, element_type
):
    plot = plot_func(example_y_data, example_yrep_draws, example_group_data, stat="max")

    assert isinstance(plot, hv.NdLayout)
    assert plot.keys() == ["GroupB", "GroupA", "GroupC", "GroupD"]

    in_group = np.asarray(example_group_data == "GroupC")
    element, line = plot["GroupC"].values()
    assert isinstance(element, element_type)
    assert line.data == pytest.approx(example_y_data[in_group].max())


class TestStat2d:
    """Tests for ppc_stat_2d."""

    def test_points(self, example_y_data, example_yrep_draws):
        plot = bp.ppc_stat_2d(example_y_data, example_yrep_draws)
        elements = list(plot.values())
        replicates, observed = elements[0], elements[-1]

        assert isinstance(replicates, hv.Scatter)
        assert len(replicates) == len(example_yrep_draws)
        np.testing.assert_allclose(
            replicates.dimension_values("mean"), example_yrep_draws.mean(axis=1)
        )
        np.testing.assert_allclose(
            replicates.dimension_values("sd"), example_yrep_draws.std(axis=1, ddof=1)
        )
        assert observed.dimension_values(0)[0] == pytest.approx(example_y_data.mean())
        assert observed.dimension_values(1)[0] == pytest.approx(
            example_y_data.std(ddof=1)
        )

    def test_unnamed_functions(self, example_y_data, example_yrep_draws):
        """Two anonymous statistics still get distinct axes."""
        plot = bp.ppc_stat_2d(
            example_y_data,
            example_yrep_draws,
            stat=(lambda x: x.min(), lambda x: x.max()),
        )
        replicates = list(plot.values())[0]
        assert [dim.name for dim in replicates.dimensions()][:2] == ["T1", "T2"]

    @pytest.mark.parametrize("stat", ["mean", ("mean",), ("mean", "sd", "var")])
    def test_needs_two_stats(self, example_y_data, example_yrep_draws, stat):
        with pytest.raises(ValidationError, match="exactly two"):
            bp.ppc_stat_2d(example_y_data, example_yrep_draws, stat=stat)


class TestNonFiniteStats:
    """Statistics that are undefined for some datasets."""

    @pytest.mark.filterwarnings("ignore::RuntimeWarning")
    def test_single_observation_group(self, rng):
        """The sample standard deviation of one value is undefined."""
        y = rng.normal(size=5)
        yrep = rng.normal(size=(10, 5))
        with pytest.raises(ValidationError, match="'sd' of 'y' in group 'b'"):
            bp.ppc_stat_grouped(y, yrep, ["a"] * 4 + ["b"], stat="sd")

    def test_drops_non_finite_replicates(self, example_y_data, example_yrep_draws):
        def first_positive(x):
            return x[x > 0].min() if (x > 0).any() else np.nan

        yrep = example_yrep_draws.copy()
        yrep[0] = -1.0
        with pytest.warns(UserWarning, match="Removed 1 non-finite"):
            plot = bp.ppc_stat(example_y_data, yrep, stat=first_positive)

        histogram = list(plot.values())[0]
        assert histogram.dimension_values(1).sum() == len(yrep) - 1

    def test_no_finite_replicates(self, example_y_data, example_yrep_draws):
        with pytest.raises(ValidationError, match="any replicate"):
            bp.ppc_stat(
                example_y_data,
                example_yrep_draws,
                stat=lambda x: 0.0 if np.array_equal(x, example_y_data) else np.inf,
            )

    def test_stat_2d_drops_rows(self, example_y_data, example_yrep_draws):
        def positive_mean(x):
            return x.mean() if x.mean() > -10 else np.nan

        yrep = example_yrep_draws.copy()
        yrep[:2] = -100.0
        with pytest.warns(UserWarning, match="Removed 2 replicates"):
            plot = bp.ppc_stat_2d(example_y_data, yrep, stat=(positive_mean, "sd"))
        assert len(list(plot.values())[0]) == len(yrep) - 2
