# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Default configuration values for bayesplot plotting functions.

This module centralizes default values used across the plotting functions,
including plot dimensions, labels, binning and density settings, and
diagnostic thresholds.

The module is organized into logical groups covering:
    - Figure dimensions
    - Labels used for observed and replicated data
    - Binning and density estimation defaults
    - Interval and LOO defaults
    - Conversion of line/point sizes to screen units

Default values cannot be programmatically altered. This documentation serves as a
reference for users and developers to understand the standard configuration used
by bayesplot.
"""

# Figure dimensions
DEFAULT_WIDTH: int = 600
"""Default width of single-panel plots in pixels.

:type: int
"""

DEFAULT_HEIGHT: int = 400
"""Default height of single-panel plots in pixels.

:type: int
"""

DEFAULT_SQUARE_SIZE: int = 450
"""Default width and height of plots with a fixed 1:1 aspect (Q-Q plots).

:type: int
"""

DEFAULT_FACET_WIDTH: int = 220
"""Default width of each panel in faceted plots in pixels.

:type: int
"""

DEFAULT_FACET_HEIGHT: int = 180
"""Default height of each panel in faceted plots in pixels.

:type: int
"""

DEFAULT_FACET_COLS: int = 3
"""Default number of columns in faceted plots that are not laid out as a grid.

:type: int
"""

# Labels
Y_LABEL: str = "y"
"""Label used for the observed data.

:type: str
"""

YREP_LABEL: str = "y_rep"
"""Label used for the replicated data.

:type: str
"""

# Binning and densities
DEFAULT_BINS: int = 30
"""Default number of histogram bins when no bin width is given.

:type: int
"""

DEFAULT_N_DENS: int = 1024
"""Default number of grid points at which kernel densities are evaluated.

:type: int
"""

DEFAULT_BW: str = "nrd0"
"""Default bandwidth rule for kernel density estimates.

:type: str
"""

DEFAULT_KERNEL: str = "gaussian"
"""Default smoothing kernel for kernel density estimates.

:type: str
"""

# Intervals and LOO
DEFAULT_PROB: float = 0.9
"""Default probability mass included in central predictive intervals.

:type: float
"""

DEFAULT_VIOLIN_PROBS: tuple[float, ...] = (0.1, 0.5, 0.9)
"""Default quantiles marked on grouped violin plots.

:type: tuple[float, ...]
"""

DEFAULT_PIT_SAMPLES: int = 100
"""Default number of standard-uniform datasets simulated for LOO-PIT overlays.

:type: int
"""

DEFAULT_PARETO_K_THRESH: float = 0.7
"""Pareto k value above which PSIS weights are considered unreliable.

:type: float
"""

# Size conversions
LINE_WIDTH_SCALE: float = 2.0
"""Multiplier converting the ``size`` arguments of line layers to pixels.

:type: float
"""

POINT_SIZE_SCALE: float = 3.0
"""Multiplier converting the ``size`` arguments of point layers to pixels.

:type: float
"""
