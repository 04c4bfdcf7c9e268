"""Tests for the LOO predictive checks."""

import warnings

import holoviews as hv
import numpy as np
import pytest

from scipy import stats as sp_stats

import bayesplot as bp
from bayesplot import stats
from bayesplot.exceptions import ValidationError
from bayesplot.plotting import plotting


@pytest.fixture
def example_pit(rng) -> np.ndarray:
    return rng.uniform(size=30)


class TestPitOverlay:
    """Tests for ppc_loo_pit_overlay."""

    def test_from_draws(self, example_y_data, example_yrep_draws, example_lw):
        plot = bp.ppc_loo_pit_overlay(
            example_y_data, example_yrep_draws, example_lw, samples=20
        )
        uniforms, pit = plot.values()

        assert isinstance(uniforms, hv.Path)
        assert len(uniforms.split()) == 20
        assert uniforms.label == "Unif"
        assert pit.label == "PIT"

    def test_axes(self, example_pit):
        plot = bp.ppc_loo_pit_overlay(pit=example_pit)
        options = hv.Store.lookup_options("bokeh", plot, "plot").kwargs

        assert options["xlim"] == (0.1, 0.9)
        assert options["xticks"] == [0.1, 0.3, 0.5, 0.7, 0.9]
        max_density = max(element.range(1)[1] for element in plot.values())
        assert options["ylim"] == (0, pytest.approx(1.25 * max_density))

    def test_reproducible(self, example_pit):
        """Uniform samples come from the global RNG."""
        bp.manual_seed(7)
        first = bp.ppc_loo_pit_overlay(pit=example_pit, samples=5)
        bp.manual_seed(7)
        second = bp.ppc_loo_pit_overlay(pit=example_pit, samples=5)

        for path1, path2 in zip(
            list(first.values())[0].split(), list(second.values())[0].split()
        ):
            np.testing.assert_array_equal(path1.array(), path2.array())

    def test_pit_ignores_draws(self, example_y_data, example_pit):
        with pytest.warns(UserWarning, match="'pit' specified so ignoring 'y'"):
            bp.ppc_loo_pit_overlay(example_y_data, pit=example_pit)

    def test_warning_location(self, example_y_data, example_pit):
        """Ignored-input warnings point at the user's call."""
        with warnings.catch_warnings(record=True) as record:
            warnings.simplefilter("always")
            bp.ppc_loo_pit_overlay(example_y_data, pit=example_pit)

        ignored = [w for w in record if "specified so ignoring" in str(w.message)]
        assert [w.filename for w in ignored] == [__file__]

    def test_pit_alone_does_not_warn(self, example_pit):
        with warnings.catch_warnings(record=True) as record:
            warnings.simplefilter("always")
            bp.ppc_loo_pit_overlay(pit=example_pit)
        assert not [w for w in record if "specified so ignoring" in str(w.message)]

    def test_missing_inputs(self, example_y_data, example_yrep_draws):
        with pytest.raises(ValidationError, match="'lw'"):
            bp.ppc_loo_pit_overlay(example_y_data, example_yrep_draws)

    def test_weight_shape(self, example_y_data, example_yrep_draws):
        with pytest.raises(ValidationError, match="same shape"):
            bp.ppc_loo_pit_overlay(
                example_y_data, example_yrep_draws, np.zeros((3, 3))
            )

    def test_bad_pit(self):
        with pytest.raises(ValidationError, match="between 0 and 1"):
            bp.ppc_loo_pit_overlay(pit=[0.2, 1.5])


class TestPitQQ:
    """Tests for ppc_loo_pit_qq."""

    def test_uniform(self, example_pit):
        plot = bp.ppc_loo_pit_qq(pit=example_pit)
        points, line = plot.values()

        assert isinstance(points, hv.Scatter)
        assert isinstance(line, hv.Slope)
        np.testing.assert_allclose(points.dimension_values(0), stats.qq_points(30))
        np.testing.assert_array_equal(points.dimension_values(1), np.sort(example_pit))

        options = hv.Store.lookup_options("bokeh", plot, "plot").kwargs
        assert options["xlim"] == options["ylim"] == (0.0, 1.0)
        assert options["xlabel"] == "Uniform"
        assert options["ylabel"] == "LOO-PIT"

    def test_normal(self, example_pit):
        plot = bp.ppc_loo_pit_qq(pit=example_pit, compare="normal")
        points = list(plot.values())[0]
        sample = points.dimension_values(1)
        theoretical = points.dimension_values(0)

        # Standardized PIT values against normal quantiles
        assert sample.mean() == pytest.approx(0.0, abs=1e-12)
        assert sample.std(ddof=1) == pytest.approx(1.0)
        np.testing.assert_allclose(theoretical, sp_stats.norm.ppf(stats.qq_points(30)))

        options = hv.Store.lookup_options("bokeh", plot, "plot").kwargs
        lo = min(sample.min(), theoretical.min())
        hi = max(sample.max(), theoretical.max())
        assert options["xlim"] == options["ylim"] == pytest.approx((lo, hi))

    def test_from_draws(self, example_y_data, example_yrep_draws):
        lw = np.zeros_like(example_yrep_draws)
        plot = bp.ppc_loo_pit_qq(example_y_data, example_yrep_draws, lw)
        points = list(plot.values())[0]
        expected = np.sort((example_yrep_draws <= example_y_data).mean(axis=0))
        np.testing.assert_allclose(points.dimension_values(1), expected)

    def test_bad_compare(self, example_pit):
        with pytest.raises(ValidationError, match="'compare'"):
            bp.ppc_loo_pit_qq(pit=example_pit, compare="exponential")

    def test_deprecated_alias(self, example_pit):
        with pytest.warns(DeprecationWarning, match="ppc_loo_pit_qq"):
            plot = bp.ppc_loo_pit(pit=example_pit)
        assert isinstance(plot, hv.Overlay)

    def test_deprecated_alias_warning_location(self, example_y_data, example_pit):
        with warnings.catch_warnings(record=True) as record:
            warnings.simplefilter("always")
            bp.ppc_loo_pit(example_y_data, pit=example_pit)

        ignored = [w for w in record if "specified so ignoring" in str(w.message)]
        assert [w.filename for w in ignored] == [__file__]


class TestLooIntervals:
    """Tests for ppc_loo_intervals and ppc_loo_ribbon."""

    def test_equal_weights_match_quantiles(self, example_y_data, example_yrep_draws):
        plot = bp.ppc_loo_intervals(
            example_y_data,
            example_yrep_draws,
            np.zeros_like(example_yrep_draws),
            prob=0.5,
        )
        bars = list(plot.values())[0]
        np.testing.assert_allclose(
            bars.dimension_values("mid"), np.median(example_yrep_draws, axis=0)
        )

    def test_order_by_median(self, example_y_data, example_yrep_draws, example_lw):
        plot = bp.ppc_loo_intervals(
            example_y_data, example_yrep_draws, example_lw, order="median"
        )
        bars = list(plot.values())[0]

        # Sorted by x, the medians increase
        assert np.all(np.diff(bars.dimension_values("mid")) >= 0)
        options = hv.Store.lookup_options("bokeh", plot, "plot").kwargs
        assert options["xlabel"] == "Ordered by median"
        assert options["hooks"] == [plotting.hide_x_ticks]

        figure = hv.render(plot, backend="bokeh")
        assert figure.xaxis[0].axis_label == "Ordered by median"
        assert figure.xaxis[0].major_label_text_font_size == "0pt"

    def test_precomputed_intervals(self, example_y_data, example_yrep_draws):
        intervals = np.column_stack(
            [example_y_data - 1, example_y_data, example_y_data + 1]
        )
        with pytest.warns(
            UserWarning, match="'intervals' specified so ignoring 'yrep'"
        ) as record:
            plot = bp.ppc_loo_intervals(
                example_y_data, example_yrep_draws, intervals=intervals
            )
        ignored = [w for w in record if "specified so ignoring" in str(w.message)]
        assert [w.filename for w in ignored] == [__file__]
        bars = list(plot.values())[0]
        np.testing.assert_allclose(bars.dimension_values("mid"), example_y_data)

    def test_bad_order(self, example_y_data, example_yrep_draws, example_lw):
        with pytest.raises(ValidationError, match="'order'"):
            bp.ppc_loo_intervals(
                example_y_data, example_yrep_draws, example_lw, order="random"
            )

    def test_ribbon(self, example_y_data, example_yrep_draws, example_lw):
        plot = bp.ppc_loo_ribbon(example_y_data, example_yrep_draws, example_lw)
        band = list(plot.values())[0]

        assert isinstance(band, hv.Area)
        expected = stats.loo_quantiles(
            example_yrep_draws, example_lw, (0.05, 0.5, 0.95)
        )
        np.testing.assert_allclose(band.dimension_values("lo"), expected[:, 0])
        np.testing.assert_allclose(band.dimension_values("hi"), expected[:, 2])

    def test_ribbon_needs_weights(self, example_y_data, example_yrep_draws):
        with pytest.raises(ValidationError, match="Missing"):
            bp.ppc_loo_ribbon(example_y_data, example_yrep_draws)
