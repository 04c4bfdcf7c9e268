"""Tests for the ArviZ adapters."""

import warnings

import arviz as az
import numpy as np
import pytest
from scipy import stats as sp_stats

import bayesplot as bp
from bayesplot import inference
from bayesplot.exceptions import ValidationError

N_CHAINS = 2
N_DRAWS = 50


@pytest.fixture
def example_inference_obj(rng) -> az.InferenceData:
    """Normal model with a 1D and a 2D observed variable."""
    y = rng.normal(size=8)
    z = rng.normal(size=(3, 2))
    mu = rng.normal(scale=0.1, size=(N_CHAINS, N_DRAWS, 1))
    y_rep = rng.normal(loc=mu, size=(N_CHAINS, N_DRAWS, 8))
    z_rep = rng.normal(size=(N_CHAINS, N_DRAWS, 3, 2))

    return az.from_dict(
        posterior={"mu": mu[..., 0]},
        posterior_predictive={"y": y_rep, "z": z_rep},
        observed_data={"y": y, "z": z},
        log_likelihood={"y": sp_stats.norm.logpdf(y, loc=mu)},
    )


class TestExtractPpcInputs:
    """Tests for extract_ppc_inputs."""

    def test_shapes(self, example_inference_obj):
        inputs = inference.extract_ppc_inputs(example_inference_obj, "y")

        assert inputs.varname == "y"
        assert inputs.y.shape == (8,)
        assert inputs.yrep.shape == (N_CHAINS * N_DRAWS, 8)
        assert inputs.lw.shape == inputs.yrep.shape

    def test_chain_major_stacking(self, example_inference_obj):
        """Samples are ordered by chain, then draw."""
        inputs = inference.extract_ppc_inputs(example_inference_obj, "y")
        raw = example_inference_obj.posterior_predictive["y"].to_numpy()

        np.testing.assert_array_equal(inputs.yrep[0], raw[0, 0])
        np.testing.assert_array_equal(inputs.yrep[N_DRAWS], raw[1, 0])

    def test_weights_are_normalized(self, example_inference_obj):
        inputs = inference.extract_ppc_inputs(example_inference_obj, "y")
        np.testing.assert_allclose(np.exp(inputs.lw).sum(axis=0), 1.0)

    def test_flattens_observations(self, example_inference_obj):
        inputs = inference.extract_ppc_inputs(example_inference_obj, "z")
        observed = example_inference_obj.observed_data["z"].to_numpy()

        np.testing.assert_array_equal(inputs.y, observed.reshape(-1))
        assert inputs.yrep.shape == (N_CHAINS * N_DRAWS, 6)
        # No log likelihood for this variable
        assert inputs.lw is None

    def test_without_weights(self, example_inference_obj):
        inputs = inference.extract_ppc_inputs(
            example_inference_obj, "y", with_weights=False
        )
        assert inputs.lw is None

    def test_inputs_feed_plots(self, example_inference_obj):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            inputs = inference.extract_ppc_inputs(example_inference_obj, "y")
        bp.ppc_loo_pit_overlay(inputs.y, inputs.yrep, inputs.lw, samples=10)
        bp.ppc_dens_overlay(inputs.y, inputs.yrep[:20])

    def test_unknown_variable(self, example_inference_obj):
        with pytest.raises(ValidationError, match="'w'"):
            inference.extract_ppc_inputs(example_inference_obj, "w")

    def test_missing_group(self, rng):
        inference_obj = az.from_dict(
            posterior_predictive={"y": rng.normal(size=(1, 10, 3))}
        )
        with pytest.raises(ValidationError, match="observed_data"):
            inference.extract_ppc_inputs(inference_obj, "y")

    def test_from_netcdf(self, example_inference_obj, tmp_path):
        path = tmp_path / "results.nc"
        example_inference_obj.to_netcdf(str(path))

        inputs = inference.extract_ppc_inputs(str(path), "y", with_weights=False)
        assert inputs.yrep.shape == (N_CHAINS * N_DRAWS, 8)


def test_high_pareto_k_warns(rng):
    """Heavy-tailed weights trigger the Pareto k warning."""
    y = np.array([0.0, 8.0])
    log_lik = sp_stats.norm.logpdf(y, loc=rng.normal(size=(1, 100, 1)))
    inference_obj = az.from_dict(
        posterior_predictive={"y": rng.normal(size=(1, 100, 2))},
        observed_data={"y": y},
        log_likelihood={"y": log_lik},
    )
    with pytest.warns(UserWarning, match="Pareto k"):
        inference.extract_ppc_inputs(inference_obj, "y")


def test_iter_ppc_inputs(example_inference_obj):
    inputs = list(inference.iter_ppc_inputs(example_inference_obj, with_weights=False))
    assert [item.varname for item in inputs] == ["y", "z"]
    assert all(item.lw is None for item in inputs)


def test_lazy_module_access():
    assert bp.inference.extract_ppc_inputs is inference.extract_ppc_inputs
