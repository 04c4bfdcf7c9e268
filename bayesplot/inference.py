# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Adapters for ArviZ ``InferenceData`` objects.

The plotting functions take plain arrays, so any model-fitting package can feed
them. This module pulls those arrays out of an ArviZ ``InferenceData`` object
(as produced by PyMC, CmdStanPy, NumPyro and others), which is the most common
container for posterior predictive draws in Python:

    - ``y`` comes from the ``observed_data`` group
    - ``yrep`` comes from the ``posterior_predictive`` group, with the ``chain``
      and ``draw`` dimensions stacked into one sample dimension
    - ``lw`` is computed by Pareto smoothed importance sampling of the pointwise
      ``log_likelihood`` group, if present

Observations with more than one dimension are flattened in C order, so ``y``
and the columns of ``yrep`` and ``lw`` always line up.

Example:
    >>> idata = az.load_arviz_data("centered_eight")
    >>> inputs = bp.inference.extract_ppc_inputs(idata, "obs")
    >>> bp.ppc_loo_pit_overlay(inputs.y, inputs.yrep, inputs.lw)
    >>> # One set of inputs per observed variable
    >>> for inputs in bp.inference.iter_ppc_inputs(idata, with_weights=False):
    ...     bp.ppc_dens_overlay(inputs.y, inputs.yrep[:50])
"""

from __future__ import annotations

import warnings

from typing import Generator, NamedTuple, Optional

import arviz as az
import numpy as np
import numpy.typing as npt
import xarray as xr

from bayesplot import custom_types, defaults
from bayesplot.exceptions import ValidationError


class PPCInputs(NamedTuple):
    """Arrays extracted for one observed variable."""

    varname: str
    y: npt.NDArray[np.floating]
    yrep: npt.NDArray[np.floating]
    lw: Optional[npt.NDArray[np.floating]]


def load_inference_obj(inference_obj: az.InferenceData | str) -> az.InferenceData:
    """Get an ``InferenceData`` object, loading it from NetCDF if given a path.

    :param inference_obj: ArviZ InferenceData object or path to a saved one
    :type inference_obj: Union[az.InferenceData, str]

    :returns: The InferenceData object
    :rtype: az.InferenceData

    :raises ValidationError: If the ``observed_data`` or ``posterior_predictive``
        group is missing
    """
    # A string is assumed to be a path to a netcdf file
    if isinstance(inference_obj, str):
        inference_obj = az.from_netcdf(inference_obj)

    if missing_groups := (
        {"observed_data", "posterior_predictive"} - set(inference_obj.groups())
    ):
        raise ValidationError(
            "ArviZ object is missing the following groups: "
            f"{', '.join(sorted(missing_groups))}"
        )

    return inference_obj


def _stack_samples(array: xr.DataArray) -> npt.NDArray:
    """Stack chains and draws into the first axis and flatten the rest."""
    stacked = array.stack(__sample__=("chain", "draw")).transpose("__sample__", ...)
    return stacked.to_numpy().reshape(stacked.sizes["__sample__"], -1)


def loo_log_weights(
    log_likelihood: xr.DataArray,
    varname: str,
    reff: custom_types.Numeric = 1.0,
) -> npt.NDArray[np.floating]:
    """Calculate PSIS-smoothed log weights from pointwise log likelihoods.

    :param log_likelihood: Log likelihood with ``chain`` and ``draw`` dimensions
    :type log_likelihood: xr.DataArray
    :param varname: Name of the variable, used in warnings
    :type varname: str
    :param reff: Relative MCMC efficiency, ``ess / n`` (Default: 1.0)
    :type reff: custom_types.Numeric

    :returns: Log weights with shape (n_samples, n_observations)
    :rtype: npt.NDArray[np.floating]

    A warning is issued if any Pareto :math:`\\hat{k}` estimate exceeds
    :py:data:`~bayesplot.defaults.DEFAULT_PARETO_K_THRESH`, as the importance
    sampling estimates of those observations are unreliable.
    """
    # Same sample stacking as az.loo
    stacked = log_likelihood.stack(__sample__=("chain", "draw"))
    log_weights, pareto_k = az.psislw(-stacked, reff)

    if (n_bad := int((pareto_k > defaults.DEFAULT_PARETO_K_THRESH).sum())) > 0:
        warnings.warn(
            f"{n_bad} of {pareto_k.size} Pareto k estimates for '{varname}' exceed "
            f"{defaults.DEFAULT_PARETO_K_THRESH}. LOO estimates for these "
            "observations may be unreliable."
        )

    log_weights = log_weights.transpose("__sample__", ...)
    return log_weights.to_numpy().reshape(log_weights.sizes["__sample__"], -1)


def extract_ppc_inputs(
    inference_obj: az.InferenceData | str,
    varname: str,
    *,
    reff: custom_types.Numeric = 1.0,
    with_weights: bool = True,
) -> PPCInputs:
    """Extract the plotting inputs of one observed variable.

    :param inference_obj: ArviZ InferenceData object or path to a saved one
    :type inference_obj: Union[az.InferenceData, str]
    :param varname: Name of the observed variable
    :type varname: str
    :param reff: Relative MCMC efficiency passed to PSIS. (Default: 1.0)
    :type reff: custom_types.Numeric
    :param with_weights: Whether to compute LOO log weights. Weights are only
        computed if the ``log_likelihood`` group holds ``varname``.
        (Default: True)
    :type with_weights: bool

    :returns: Observed data, replicates, and log weights (or None)
    :rtype: PPCInputs

    :raises ValidationError: If the variable is missing or the observed data do
        not match the shape of the posterior predictive draws
    """
    inference_obj = load_inference_obj(inference_obj)
    posterior_predictive = inference_obj.posterior_predictive
    if varname not in posterior_predictive or varname not in inference_obj.observed_data:
        raise ValidationError(
            f"'{varname}' must be in both the observed data and the posterior "
            "predictive groups."
        )

    observed = inference_obj.observed_data[varname].to_numpy()
    reference = posterior_predictive[varname]
    if observed.shape != reference.shape[2:]:
        raise ValidationError(
            f"Observed data for '{varname}' have shape {observed.shape}, but the "
            f"posterior predictive draws have shape {reference.shape[2:]}."
        )

    lw = None
    if (
        with_weights
        and "log_likelihood" in inference_obj.groups()
        and varname in inference_obj.log_likelihood
    ):
        lw = loo_log_weights(inference_obj.log_likelihood[varname], varname, reff)

    return PPCInputs(
        varname=varname,
        y=observed.reshape(-1).astype(float),
        yrep=_stack_samples(reference).astype(float),
        lw=lw,
    )


def iter_ppc_inputs(
    inference_obj: az.InferenceData | str, **kwargs
) -> Generator[PPCInputs, None, None]:
    """Extract the plotting inputs of every posterior predictive variable.

    :param inference_obj: ArviZ InferenceData object or path to a saved one
    :type inference_obj: Union[az.InferenceData, str]
    :param kwargs: Passed to :py:func:`extract_ppc_inputs`

    :yields: :py:class:`PPCInputs` for each variable also in ``observed_data``
    """
    inference_obj = load_inference_obj(inference_obj)
    for varname in inference_obj.posterior_predictive.data_vars:
        if varname in inference_obj.observed_data:
            yield extract_ppc_inputs(inference_obj, varname, **kwargs)
