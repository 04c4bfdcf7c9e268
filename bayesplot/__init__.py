# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
bayesplot: Posterior predictive check graphics for Bayesian models.

bayesplot renders diagnostic plots that compare observed data to data simulated
from the posterior predictive distribution of a fitted model. Inputs are plain
arrays (an observed outcome vector and a matrix of replicated datasets), so any
model-fitting package can be used to produce them. Adapters for ArviZ
``InferenceData`` objects are provided in :py:mod:`bayesplot.inference`.

Key Features:
    - Histograms, frequency polygons, densities, ECDFs, box plots and violins
      of observed versus replicated data
    - Test-statistic distributions
    - Central predictive intervals and ribbons
    - LOO-PIT calibration plots and LOO predictive intervals
    - Configurable color schemes
    - Type-safe plotting functions with runtime type checking

Global Variables:
    RNG: Global random number generator used for simulations inside plots
    __version__: Package version string

Example:
    >>> import bayesplot as bp
    >>> bp.manual_seed(42)
    >>> bp.color_scheme_set("brightblue")
    >>> plot = bp.ppc_dens_overlay(y, yrep[:25])
"""

from typing import Optional, TYPE_CHECKING

from typeguard import install_import_hook

import numpy as np

# Define the version
__version__ = "0.1.0"

# Set up type checking
install_import_hook("bayesplot")

# Define the global random number generator
RNG: np.random.Generator
"""Global random number generator for bayesplot.

Used wherever a plot needs simulated reference data (e.g., the standard-uniform
datasets drawn by :py:func:`~bayesplot.plotting.loo.ppc_loo_pit_overlay`). It
can be seeded using the manual_seed() function to ensure consistent results
across runs.

:type: np.random.Generator
"""

# Get custom types if TYPE_CHECKING is True
if TYPE_CHECKING:
    from bayesplot import custom_types


def manual_seed(seed: Optional["custom_types.Integer"] = None):
    """Set the seed for the global random number generator.

    :param seed: Seed value for random number generation. If None, uses
                system entropy to generate a random seed.
    :type seed: Union[custom_types.Integer, None]

    Example:
        >>> import bayesplot as bp
        >>> bp.manual_seed(42)
        >>> # Simulated reference data is now reproducible
        >>> plot = bp.ppc_loo_pit_overlay(pit=pit_values)
    """
    global RNG  # pylint: disable=global-statement
    RNG = np.random.default_rng(seed)


manual_seed()  # Set the seed for the global random number generator

# Import objects that should be easily accessible from the package level
# pylint: disable=wrong-import-position
from bayesplot import utils

from bayesplot.color_scheme import (
    color_scheme_get,
    color_scheme_set,
    color_scheme_view,
    get_color,
)
from bayesplot.exceptions import BayesPlotError, ValidationError
from bayesplot.reshape import ppc_data
from bayesplot.plotting import (
    ppc_boxplot,
    ppc_dens,
    ppc_dens_overlay,
    ppc_ecdf_overlay,
    ppc_freqpoly,
    ppc_freqpoly_grouped,
    ppc_hist,
    ppc_intervals,
    ppc_intervals_grouped,
    ppc_loo_intervals,
    ppc_loo_pit,
    ppc_loo_pit_overlay,
    ppc_loo_pit_qq,
    ppc_loo_ribbon,
    ppc_ribbon,
    ppc_ribbon_grouped,
    ppc_stat,
    ppc_stat_2d,
    ppc_stat_freqpoly_grouped,
    ppc_stat_grouped,
    ppc_violin_grouped,
)

# ArviZ is slow to import and only needed by the adapters
inference = utils.lazy_import("bayesplot.inference")
