# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Posterior predictive check plots.

This subpackage holds the plotting functions of bayesplot. Every function takes
the observed data ``y`` and replicated data ``yrep`` (plus a grouping variable,
x-axis positions, or LOO weights where relevant), validates them, and returns a
HoloViews object that renders with the Bokeh backend. The functions are also
available at the package level.

The plots are organized by the kind of comparison they make:

    - Distributions of the observed and replicated data
      (:py:mod:`~bayesplot.plotting.distributions`)
    - Central predictive intervals (:py:mod:`~bayesplot.plotting.intervals`)
    - Test statistics (:py:mod:`~bayesplot.plotting.test_statistics`)
    - Leave-one-out calibration and intervals (:py:mod:`~bayesplot.plotting.loo`)
"""

import holoviews as hv

# Plot options are Bokeh options
hv.renderer("bokeh")

# pylint: disable=wrong-import-position
from .distributions import (
    ppc_boxplot,
    ppc_dens,
    ppc_dens_overlay,
    ppc_ecdf_overlay,
    ppc_freqpoly,
    ppc_freqpoly_grouped,
    ppc_hist,
    ppc_violin_grouped,
)
from .intervals import (
    ppc_intervals,
    ppc_intervals_grouped,
    ppc_ribbon,
    ppc_ribbon_grouped,
)
from .loo import (
    ppc_loo_intervals,
    ppc_loo_pit,
    ppc_loo_pit_overlay,
    ppc_loo_pit_qq,
    ppc_loo_ribbon,
)
from .test_statistics import (
    ppc_stat,
    ppc_stat_2d,
    ppc_stat_freqpoly_grouped,
    ppc_stat_grouped,
)
