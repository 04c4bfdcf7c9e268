# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Statistical helpers behind the PPC plots.

This module holds the small amount of computation the plots need before they
can be drawn:

    - Bandwidth rules and kernel density estimates evaluated on a grid
    - Empirical CDF coordinates
    - Histogram bin edges shared across panels
    - Importance-weighted quantiles and LOO probability integral transforms
    - Test statistics applied to observed and replicated datasets
    - Plotting positions for Q-Q plots

Users will not typically need to interact with this module directly.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np
import numpy.typing as npt

from scipy import special, stats

from bayesplot import custom_types, defaults, validation
from bayesplot.exceptions import ValidationError


def _bw_nrd0(x: npt.NDArray[np.floating]) -> float:
    """Silverman's rule of thumb with fallbacks for data without spread."""
    hi = np.std(x, ddof=1)
    lo = min(hi, stats.iqr(x) / 1.34)
    if not lo:
        lo = hi or abs(x[0]) or 1.0
    return 0.9 * lo * len(x) ** -0.2


def _bw_nrd(x: npt.NDArray[np.floating]) -> float:
    """Scott's variation of the rule of thumb."""
    return 1.06 * min(np.std(x, ddof=1), stats.iqr(x) / 1.34) * len(x) ** -0.2


BANDWIDTH_RULES: dict[str, Callable[[npt.NDArray[np.floating]], float]] = {
    "nrd0": _bw_nrd0,
    "nrd": _bw_nrd,
    "scott": lambda x: np.std(x, ddof=1) * len(x) ** -0.2,
    "silverman": lambda x: np.std(x, ddof=1) * (len(x) * 3 / 4) ** -0.2,
}
"""Named bandwidth rules accepted by :py:func:`bandwidth`.

:type: dict[str, Callable[[npt.NDArray[np.floating]], float]]
"""


def bandwidth(
    x: npt.NDArray[np.floating], method: custom_types.BandwidthType = defaults.DEFAULT_BW
) -> float:
    """Calculate the bandwidth of a kernel density estimate.

    :param x: Data the density will be estimated from
    :type x: npt.NDArray[np.floating]
    :param method: Name of a rule in :py:data:`BANDWIDTH_RULES` or a positive
        number. (Default: "nrd0")
    :type method: custom_types.BandwidthType

    :returns: The bandwidth, which is the standard deviation of the kernel
    :rtype: float

    :raises ValidationError: If the rule is unknown, the number is not positive,
        there are fewer than two data points for a rule-based bandwidth, or the
        rule gives a non-positive bandwidth
    """
    if not isinstance(method, str):
        if method <= 0:
            raise ValidationError(f"'bw' must be positive. Got {method}.")
        return float(method)

    validation.validate_choice(method, BANDWIDTH_RULES, "bw")
    if len(x) < 2:
        raise ValidationError("Need at least 2 data points to select a bandwidth.")

    # Only nrd0 falls back to a positive value for data without spread
    if not (h := float(BANDWIDTH_RULES[method](x))) > 0:
        raise ValidationError(
            f"Bandwidth rule '{method}' gave a non-positive bandwidth ({h}). "
            "Use 'nrd0' or a numeric bandwidth for data without spread."
        )
    return h


# Kernels are standardized to unit variance so that the bandwidth is the standard
# deviation of the kernel.
def _gaussian(u: npt.NDArray[np.floating]) -> npt.NDArray[np.floating]:
    return np.exp(-0.5 * u**2) / np.sqrt(2 * np.pi)


def _rectangular(u: npt.NDArray[np.floating]) -> npt.NDArray[np.floating]:
    a = np.sqrt(3)
    return np.where(np.abs(u) < a, 0.5 / a, 0.0)


def _triangular(u: npt.NDArray[np.floating]) -> npt.NDArray[np.floating]:
    a = np.sqrt(6)
    return np.where(np.abs(u) < a, (1 - np.abs(u) / a) / a, 0.0)


def _epanechnikov(u: npt.NDArray[np.floating]) -> npt.NDArray[np.floating]:
    a = np.sqrt(5)
    return np.where(np.abs(u) < a, 0.75 * (1 - (u / a) ** 2) / a, 0.0)


def _biweight(u: npt.NDArray[np.floating]) -> npt.NDArray[np.floating]:
    a = np.sqrt(7)
    return np.where(np.abs(u) < a, 15 / 16 * (1 - (u / a) ** 2) ** 2 / a, 0.0)


KERNELS: dict[str, Callable[[npt.NDArray[np.floating]], npt.NDArray[np.floating]]] = {
    "gaussian": _gaussian,
    "rectangular": _rectangular,
    "triangular": _triangular,
    "epanechnikov": _epanechnikov,
    "biweight": _biweight,
}
"""Smoothing kernels accepted by :py:func:`kernel_density`.

:type: dict[str, Callable[[npt.NDArray[np.floating]], npt.NDArray[np.floating]]]
"""


def kernel_density(
    x: npt.NDArray[np.floating],
    *,
    bw: custom_types.BandwidthType = defaults.DEFAULT_BW,
    adjust: custom_types.Numeric = 1.0,
    kernel: str = defaults.DEFAULT_KERNEL,
    n_dens: custom_types.Integer = defaults.DEFAULT_N_DENS,
    support: Optional[tuple[custom_types.Numeric, custom_types.Numeric]] = None,
) -> tuple[npt.NDArray[np.floating], npt.NDArray[np.floating]]:
    """Evaluate a kernel density estimate on an evenly spaced grid.

    :param x: Data to estimate the density of
    :type x: npt.NDArray[np.floating]
    :param bw: Bandwidth rule or value, see :py:func:`bandwidth`. (Default: "nrd0")
    :type bw: custom_types.BandwidthType
    :param adjust: Multiplier applied to the bandwidth. (Default: 1.0)
    :type adjust: custom_types.Numeric
    :param kernel: Name of a kernel in :py:data:`KERNELS`. (Default: "gaussian")
    :type kernel: str
    :param n_dens: Number of grid points. (Default: 1024)
    :type n_dens: custom_types.Integer
    :param support: Range of the grid. Defaults to the range of ``x``.
    :type support: Optional[tuple[custom_types.Numeric, custom_types.Numeric]]

    :returns: Grid points and density values at those points
    :rtype: tuple[npt.NDArray[np.floating], npt.NDArray[np.floating]]

    :raises ValidationError: If the kernel is unknown or the settings are invalid

    Mathematical Definition:
        For bandwidth :math:`h` and standardized kernel :math:`K`,
        :math:`\\hat{f}(g) = \\frac{1}{nh}\\sum_{i=1}^{n} K\\left(\\frac{g - x_i}{h}\\right)`
    """
    validation.validate_choice(kernel, KERNELS, "kernel")
    if adjust <= 0:
        raise ValidationError(f"'adjust' must be positive. Got {adjust}.")
    if n_dens < 2:
        raise ValidationError(f"'n_dens' must be at least 2. Got {n_dens}.")

    h = bandwidth(x, bw) * adjust
    lo, hi = support if support is not None else (x.min(), x.max())

    # A degenerate range still gets a visible bump
    if lo == hi:
        lo, hi = lo - 3 * h, hi + 3 * h

    grid = np.linspace(lo, hi, n_dens)
    density = KERNELS[kernel]((grid[:, None] - x[None, :]) / h).mean(axis=1) / h

    return grid, density


def ecdf(
    x: npt.NDArray[np.floating],
    pad_to: Optional[tuple[custom_types.Numeric, custom_types.Numeric]] = None,
) -> tuple[npt.NDArray[np.floating], npt.NDArray[np.floating]]:
    """Get the coordinates of an empirical CDF for plotting as a step function.

    :param x: Data to build the ECDF from
    :type x: npt.NDArray[np.floating]
    :param pad_to: If given, the curve is extended to start at probability 0 at the
        first value and end at probability 1 at the second value. (Default: None)
    :type pad_to: Optional[tuple[custom_types.Numeric, custom_types.Numeric]]

    :returns: Step locations and cumulative probabilities, to be drawn with
        post-step interpolation
    :rtype: tuple[npt.NDArray[np.floating], npt.NDArray[np.floating]]
    """
    cdf = stats.ecdf(x).cdf
    quantiles, probabilities = cdf.quantiles, cdf.probabilities

    if pad_to is not None:
        quantiles = np.concatenate([[pad_to[0]], quantiles, [pad_to[1]]])
        probabilities = np.concatenate([[0.0], probabilities, [1.0]])

    return quantiles, probabilities


def bin_edges(
    x: npt.NDArray[np.floating],
    binwidth: Optional[custom_types.Numeric] = None,
    bins: custom_types.Integer = defaults.DEFAULT_BINS,
) -> npt.NDArray[np.floating]:
    """Calculate histogram bin edges covering all of ``x``.

    With a bin width, bins are centered on multiples of the width (so a width of 1
    puts integers at bin centers). Otherwise ``bins`` equal-width bins span the
    range of the data.

    :param x: All values that will be binned with these edges
    :type x: npt.NDArray[np.floating]
    :param binwidth: Width of the bins. (Default: None)
    :type binwidth: Optional[custom_types.Numeric]
    :param bins: Number of bins when no width is given. (Default: 30)
    :type bins: custom_types.Integer

    :returns: Monotonically increasing bin edges
    :rtype: npt.NDArray[np.floating]

    :raises ValidationError: If the bin width is not positive
    """
    if binwidth is None:
        return np.histogram_bin_edges(x, bins=bins)
    if binwidth <= 0:
        raise ValidationError(f"'binwidth' must be positive. Got {binwidth}.")

    lo, hi = x.min(), x.max()
    start = (np.floor(lo / binwidth - 0.5) + 0.5) * binwidth
    n_bins = max(1, int(np.ceil((hi - start) / binwidth)))
    edges = start + binwidth * np.arange(n_bins + 1)

    # Guard against floating point shortfall on the last edge
    if edges[-1] < hi:
        edges = np.append(edges, edges[-1] + binwidth)

    return edges


def bin_heights(
    x: npt.NDArray[np.floating], edges: npt.NDArray[np.floating], freq: bool = True
) -> npt.NDArray[np.floating]:
    """Histogram heights of ``x``: counts if ``freq`` else densities."""
    heights, _ = np.histogram(x, bins=edges, density=not freq)
    return heights.astype(float)


def weighted_quantile(
    x: npt.NDArray[np.floating],
    weights: npt.NDArray[np.floating],
    probs: Sequence[custom_types.Numeric],
) -> npt.NDArray[np.floating]:
    """Calculate quantiles of importance-weighted draws.

    The weights are normalized and accumulated over the sorted draws. Each
    quantile is found by linear interpolation between the two draws whose
    cumulative weights bracket the requested probability. With equal weights
    this reduces to ``np.quantile``.

    :param x: Draws
    :type x: npt.NDArray[np.floating]
    :param weights: Non-negative weight of each draw
    :type weights: npt.NDArray[np.floating]
    :param probs: Probabilities in (0, 1)
    :type probs: Sequence[custom_types.Numeric]

    :returns: One quantile per probability
    :rtype: npt.NDArray[np.floating]
    """
    probs_array = np.asarray(probs, dtype=float)
    if np.allclose(weights, weights[0]):
        return np.quantile(x, probs_array)

    order = np.argsort(x, kind="stable")
    x, weights = x[order], weights[order]
    cumulative = np.cumsum(weights)
    cumulative /= cumulative[-1]

    # First draw whose cumulative weight reaches each probability
    inds = np.minimum(np.searchsorted(cumulative, probs_array, side="left"), len(x) - 1)
    quantiles = np.empty(len(probs_array))
    for i, (prob, ind) in enumerate(zip(probs_array, inds)):
        if ind == 0:
            quantiles[i] = x[0]
            continue
        w1, x1 = cumulative[ind - 1], x[ind - 1]
        quantiles[i] = x1 + (x[ind] - x1) * (prob - w1) / (cumulative[ind] - w1)

    return quantiles


def normalize_log_weights(lw: npt.NDArray[np.floating]) -> npt.NDArray[np.floating]:
    """Normalize log weights so that the weights in each column sum to 1."""
    return lw - special.logsumexp(lw, axis=0, keepdims=True)


def loo_quantiles(
    yrep: npt.NDArray[np.floating],
    lw: npt.NDArray[np.floating],
    probs: Sequence[custom_types.Numeric],
) -> npt.NDArray[np.floating]:
    """Calculate LOO predictive quantiles of each observation.

    :param yrep: Validated replicate matrix with shape (S, N)
    :type yrep: npt.NDArray[np.floating]
    :param lw: Validated log weights with shape (S, N)
    :type lw: npt.NDArray[np.floating]
    :param probs: Probabilities in (0, 1)
    :type probs: Sequence[custom_types.Numeric]

    :returns: Array with shape (N, len(probs))
    :rtype: npt.NDArray[np.floating]
    """
    weights = np.exp(normalize_log_weights(lw))
    return np.stack(
        [
            weighted_quantile(yrep[:, i], weights[:, i], probs)
            for i in range(yrep.shape[1])
        ]
    )


def loo_pit(
    y: npt.NDArray[np.floating],
    yrep: npt.NDArray[np.floating],
    lw: npt.NDArray[np.floating],
) -> npt.NDArray[np.floating]:
    """Calculate LOO probability integral transform values.

    :param y: Validated observed data with length N
    :type y: npt.NDArray[np.floating]
    :param yrep: Validated replicate matrix with shape (S, N)
    :type yrep: npt.NDArray[np.floating]
    :param lw: Validated log weights with shape (S, N)
    :type lw: npt.NDArray[np.floating]

    :returns: PIT value of each observation, clipped to [0, 1]
    :rtype: npt.NDArray[np.floating]

    Mathematical Definition:
        :math:`\\mathrm{PIT}_i = \\sum_{s} w_{si} \\mathbb{1}[y^{rep}_{si} \\le y_i]`
        where the weights of each observation are normalized to sum to 1.
    """
    weights = np.exp(normalize_log_weights(lw))
    return np.clip((weights * (yrep <= y[None])).sum(axis=0), 0.0, 1.0)


def _sd(x: npt.NDArray[np.floating], axis: Optional[int] = None):
    return np.std(x, axis=axis, ddof=1)


def _var(x: npt.NDArray[np.floating], axis: Optional[int] = None):
    return np.var(x, axis=axis, ddof=1)


def _mad(x: npt.NDArray[np.floating], axis: Optional[int] = None):
    return stats.median_abs_deviation(x, axis=axis, scale="normal")


def _iqr(x: npt.NDArray[np.floating], axis: Optional[int] = None):
    return stats.iqr(x, axis=axis)


NAMED_STATS: dict[str, Callable] = {
    "mean": np.mean,
    "median": np.median,
    "sd": _sd,
    "std": _sd,
    "var": _var,
    "min": np.min,
    "max": np.max,
    "iqr": _iqr,
    "mad": _mad,
}
"""Test statistics that can be requested by name.

Standard deviations and variances use the sample (``ddof=1``) estimators and
``mad`` is scaled to be consistent with the standard deviation of a normal.

:type: dict[str, Callable]
"""


def compute_stat(
    values: npt.NDArray[np.floating], stat: custom_types.StatType
) -> npt.NDArray[np.floating]:
    """Apply a test statistic to a dataset or to each row of a replicate matrix.

    :param values: 1D observed data or 2D replicate matrix
    :type values: npt.NDArray[np.floating]
    :param stat: Name in :py:data:`NAMED_STATS` or a function reducing a 1D array
        to a scalar
    :type stat: custom_types.StatType

    :returns: 0D array for 1D input, otherwise one value per row
    :rtype: npt.NDArray[np.floating]

    :raises ValidationError: If the statistic name is unknown
    """
    axis = None if values.ndim == 1 else 1
    if isinstance(stat, str):
        validation.validate_choice(stat, NAMED_STATS, "stat")
        return np.asarray(NAMED_STATS[stat](values, axis=axis), dtype=float)

    if axis is None:
        return np.asarray(stat(values), dtype=float)
    return np.array([stat(row) for row in values], dtype=float)


def stat_label(stat: custom_types.StatType) -> str:
    """Name a test statistic for legends and axis labels."""
    if isinstance(stat, str):
        return stat
    name = getattr(stat, "__name__", "")
    return "T" if not name or name == "<lambda>" else name


def qq_points(n: custom_types.Integer) -> npt.NDArray[np.floating]:
    """Probability points for Q-Q plots.

    :param n: Number of points
    :type n: custom_types.Integer

    :returns: :math:`(i - a) / (n + 1 - 2a)` for :math:`i = 1..n`, with
        :math:`a = 3/8` for :math:`n \\le 10` and :math:`a = 1/2` otherwise
    :rtype: npt.NDArray[np.floating]
    """
    a = 3 / 8 if n <= 10 else 0.5
    return (np.arange(1, n + 1) - a) / (n + 1 - 2 * a)
