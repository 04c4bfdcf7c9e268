# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Leave-one-out (LOO) predictive checks.

These plots use importance weights from Pareto smoothed importance sampling
(PSIS) to approximate the leave-one-out predictive distribution of each
observation. The (smoothed) log weights ``lw`` must have the same shape as
``yrep``; :py:func:`bayesplot.inference.extract_ppc_inputs` computes them from
an ArviZ ``InferenceData`` object.

Plot Descriptions:
    - :py:func:`ppc_loo_pit_overlay`: The density of the LOO probability integral
      transform (PIT) values overlaid on the densities of many simulated
      standard-uniform datasets. For a well-calibrated model the PIT values are
      close to uniform.
    - :py:func:`ppc_loo_pit_qq`: Quantile-quantile plot of the LOO-PIT values
      against the standard uniform, or of the standardized values against the
      standard normal.
    - :py:func:`ppc_loo_intervals`, :py:func:`ppc_loo_ribbon`: Central LOO
      predictive intervals computed from weighted quantiles of ``yrep``, with the
      observed data on top.

If precomputed ``pit`` values or ``intervals`` are passed, the other data
arguments are not needed and are ignored with a warning.
"""

from __future__ import annotations

import warnings

from typing import Optional

import holoviews as hv
import numpy as np
import numpy.typing as npt
from scipy import stats as sp_stats

import bayesplot

from bayesplot import custom_types, defaults, reshape, stats, validation
from bayesplot.color_scheme import get_color
from bayesplot.exceptions import ValidationError
from bayesplot.plotting import plotting
from bayesplot.plotting.distributions import density_overlay
from bayesplot.plotting.intervals import INDEX_LABEL, interval_plot


def _warn_ignored(given: str, **others) -> None:
    """Warn if arguments made redundant by ``given`` were also passed.

    Only called from helpers of the public plotting functions, so the warning
    points three frames up at the user's call.
    """
    ignored = [name for name, value in others.items() if value is not None]
    if ignored:
        warnings.warn(
            f"'{given}' specified so ignoring {', '.join(map(repr, ignored))}.",
            stacklevel=4,
        )


def _require(**inputs) -> None:
    missing = [name for name, value in inputs.items() if value is None]
    if missing:
        raise ValidationError(
            f"Missing required argument(s): {', '.join(map(repr, missing))}."
        )


def _get_pit(
    y: Optional[custom_types.ArrayInput],
    yrep: Optional[custom_types.ArrayInput],
    lw: Optional[custom_types.ArrayInput],
    pit: Optional[custom_types.ArrayInput],
) -> npt.NDArray[np.floating]:
    """Validate precomputed PIT values or compute them from the draws."""
    if pit is not None:
        _warn_ignored("pit", y=y, yrep=yrep, lw=lw)
        return validation.validate_pit(pit)

    _require(y=y, yrep=yrep, lw=lw)
    y = validation.validate_y(y)
    yrep = validation.validate_yrep(yrep, y)
    return stats.loo_pit(y, yrep, validation.validate_lw(lw, yrep))


def _get_intervals(
    y: npt.NDArray[np.floating],
    yrep: Optional[custom_types.ArrayInput],
    lw: Optional[custom_types.ArrayInput],
    intervals: Optional[custom_types.ArrayInput],
    prob: custom_types.Numeric,
) -> npt.NDArray[np.floating]:
    """Validate precomputed intervals or compute them from weighted quantiles."""
    if intervals is not None:
        _warn_ignored("intervals", yrep=yrep, lw=lw)
        return validation.validate_intervals(intervals, len(y))

    _require(yrep=yrep, lw=lw)
    yrep = validation.validate_yrep(yrep, y)
    return stats.loo_quantiles(
        yrep, validation.validate_lw(lw, yrep), reshape.central_probs(prob)
    )


def ppc_loo_pit_overlay(
    y: Optional[custom_types.ArrayInput] = None,
    yrep: Optional[custom_types.ArrayInput] = None,
    lw: Optional[custom_types.ArrayInput] = None,
    *,
    pit: Optional[custom_types.ArrayInput] = None,
    samples: custom_types.Integer = defaults.DEFAULT_PIT_SAMPLES,
    size: custom_types.Numeric = 0.25,
    alpha: custom_types.Numeric = 0.7,
    trim: bool = False,
    bw: custom_types.BandwidthType = defaults.DEFAULT_BW,
    adjust: custom_types.Numeric = 1.0,
    kernel: str = defaults.DEFAULT_KERNEL,
    n_dens: custom_types.Integer = defaults.DEFAULT_N_DENS,
) -> hv.Overlay:
    """Density of the LOO-PIT values over densities of standard-uniform samples.

    The uniform samples are drawn from :py:obj:`bayesplot.RNG`; seed it with
    :py:func:`bayesplot.manual_seed` for reproducible plots.

    :param y: Observed outcome vector of length N. Not needed if ``pit`` is given.
    :type y: Optional[custom_types.ArrayInput]
    :param yrep: Replicate matrix with shape (S, N). Not needed if ``pit`` is
        given.
    :type yrep: Optional[custom_types.ArrayInput]
    :param lw: Smoothed log importance weights with shape (S, N). Not needed if
        ``pit`` is given.
    :type lw: Optional[custom_types.ArrayInput]
    :param pit: Precomputed LOO-PIT values. (Default: None)
    :type pit: Optional[custom_types.ArrayInput]
    :param samples: Number of simulated uniform datasets. (Default: 100)
    :type samples: custom_types.Integer

    The density arguments (``size``, ``alpha``, ``trim``, ``bw``, ``adjust``,
    ``kernel``, ``n_dens``) are those of
    :py:func:`~bayesplot.plotting.distributions.ppc_dens_overlay`.

    :returns: Overlay of the uniform densities (labeled "Unif") and the PIT
        density (labeled "PIT"), zoomed to [0.1, 0.9]
    :rtype: hv.Overlay

    :raises ValidationError: If neither ``pit`` nor all of ``y``, ``yrep`` and
        ``lw`` are given, or if the inputs fail validation
    """
    if samples < 1:
        raise ValidationError(f"'samples' must be at least 1. Got {samples}.")
    pit = _get_pit(y, yrep, lw, pit)
    unifs = bayesplot.RNG.uniform(size=(int(samples), len(pit)))

    overlay, max_density = density_overlay(
        pit,
        unifs,
        labels=("PIT", "Unif"),
        size=size,
        alpha=alpha,
        trim=trim,
        bw=bw,
        adjust=adjust,
        kernel=kernel,
        n_dens=n_dens,
    )

    return overlay.opts(
        xlim=(0.1, 0.9),
        xticks=[0.1, 0.3, 0.5, 0.7, 0.9],
        ylim=(0, 1.25 * max_density),
    )


def ppc_loo_pit_qq(
    y: Optional[custom_types.ArrayInput] = None,
    yrep: Optional[custom_types.ArrayInput] = None,
    lw: Optional[custom_types.ArrayInput] = None,
    *,
    pit: Optional[custom_types.ArrayInput] = None,
    compare: str = "uniform",
    size: custom_types.Numeric = 2.0,
    alpha: custom_types.Numeric = 1.0,
) -> hv.Overlay:
    """Quantile-quantile plot of the LOO-PIT values.

    :param y: Observed outcome vector of length N. Not needed if ``pit`` is given.
    :type y: Optional[custom_types.ArrayInput]
    :param yrep: Replicate matrix with shape (S, N). Not needed if ``pit`` is
        given.
    :type yrep: Optional[custom_types.ArrayInput]
    :param lw: Smoothed log importance weights with shape (S, N). Not needed if
        ``pit`` is given.
    :type lw: Optional[custom_types.ArrayInput]
    :param pit: Precomputed LOO-PIT values. (Default: None)
    :type pit: Optional[custom_types.ArrayInput]
    :param compare: "uniform" to compare the PIT values to the standard uniform,
        or "normal" to compare the standardized PIT values to the standard
        normal. (Default: "uniform")
    :type compare: str
    :param size: Point size. (Default: 2.0)
    :type size: custom_types.Numeric
    :param alpha: Point opacity. (Default: 1.0)
    :type alpha: custom_types.Numeric

    :returns: Q-Q points with a dashed identity line on equal, square axes
    :rtype: hv.Overlay
    """
    validation.validate_choice(compare, ("uniform", "normal"), "compare")
    pit = np.sort(_get_pit(y, yrep, lw, pit))
    probs = stats.qq_points(len(pit))

    if compare == "uniform":
        theoretical = probs
        x_lab, y_lab = "Uniform", "LOO-PIT"
        limits = (0.0, 1.0)
    else:
        # A constant or single PIT value cannot be scaled, so it is only centered
        scale = np.std(pit, ddof=1) if len(pit) > 1 else 0.0
        pit = (pit - pit.mean()) / (scale if scale > 0 else 1.0)
        theoretical = sp_stats.norm.ppf(probs)
        x_lab, y_lab = "Normal", "LOO-PIT (standardized)"
        limits = (
            float(min(pit.min(), theoretical.min())),
            float(max(pit.max(), theoretical.max())),
        )

    return hv.Overlay(
        [
            hv.Scatter((theoretical, pit), kdims=[x_lab], vdims=[y_lab]).opts(
                color=get_color("m"),
                size=plotting.point_size(size),
                alpha=float(alpha),
            ),
            hv.Slope(1, 0).opts(color="black", line_dash="dashed"),
        ]
    ).opts(
        xlim=limits,
        ylim=limits,
        xlabel=x_lab,
        ylabel=y_lab,
        width=defaults.DEFAULT_SQUARE_SIZE,
        height=defaults.DEFAULT_SQUARE_SIZE,
    )


def ppc_loo_pit(
    y: Optional[custom_types.ArrayInput] = None,
    yrep: Optional[custom_types.ArrayInput] = None,
    lw: Optional[custom_types.ArrayInput] = None,
    *,
    pit: Optional[custom_types.ArrayInput] = None,
    compare: str = "uniform",
    size: custom_types.Numeric = 2.0,
    alpha: custom_types.Numeric = 1.0,
) -> hv.Overlay:
    """Deprecated. Use :py:func:`ppc_loo_pit_qq` or :py:func:`ppc_loo_pit_overlay`."""
    warnings.warn(
        "'ppc_loo_pit' is deprecated. Use 'ppc_loo_pit_qq' or "
        "'ppc_loo_pit_overlay' instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    # Resolved here so that warnings about ignored inputs point at the caller
    pit = _get_pit(y, yrep, lw, pit)
    return ppc_loo_pit_qq(pit=pit, compare=compare, size=size, alpha=alpha)


def ppc_loo_intervals(
    y: custom_types.ArrayInput,
    yrep: Optional[custom_types.ArrayInput] = None,
    lw: Optional[custom_types.ArrayInput] = None,
    *,
    intervals: Optional[custom_types.ArrayInput] = None,
    prob: custom_types.Numeric = defaults.DEFAULT_PROB,
    size: custom_types.Numeric = 1.0,
    fatten: custom_types.Numeric = 3.0,
    order: str = "index",
) -> hv.Overlay:
    """LOO predictive intervals of each observation, with ``y``.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N). Not needed if ``intervals``
        is given.
    :type yrep: Optional[custom_types.ArrayInput]
    :param lw: Smoothed log importance weights with shape (S, N). Not needed if
        ``intervals`` is given.
    :type lw: Optional[custom_types.ArrayInput]
    :param intervals: Precomputed intervals with shape (N, 3) and columns lower
        bound, median, upper bound. (Default: None)
    :type intervals: Optional[custom_types.ArrayInput]
    :param prob: Probability mass of each interval. (Default: 0.9)
    :type prob: custom_types.Numeric
    :param size: Width of the interval bars. (Default: 1.0)
    :type size: custom_types.Numeric
    :param fatten: Factor by which the points are larger than ``size``.
        (Default: 3.0)
    :type fatten: custom_types.Numeric
    :param order: "index" to place observations by index, or "median" to sort
        them by the median of their interval. (Default: "index")
    :type order: str

    :returns: Point ranges for the LOO predictive distributions overlaid with the
        observed points
    :rtype: hv.Overlay
    """
    validation.validate_choice(order, ("index", "median"), "order")
    y = validation.validate_y(y)
    intervals = _get_intervals(y, yrep, lw, intervals, prob)

    if order == "index":
        x = np.arange(1, len(y) + 1, dtype=float)
    else:
        x = np.argsort(np.argsort(intervals[:, 1], kind="stable")).astype(float) + 1

    graph = interval_plot(
        reshape.intervals_data(y, x, intervals),
        style="intervals",
        size=size,
        fatten=fatten,
        x_lab=INDEX_LABEL,
    )
    if order == "index":
        return graph

    return graph.opts(xlabel="Ordered by median", hooks=[plotting.hide_x_ticks])


def ppc_loo_ribbon(
    y: custom_types.ArrayInput,
    yrep: Optional[custom_types.ArrayInput] = None,
    lw: Optional[custom_types.ArrayInput] = None,
    *,
    intervals: Optional[custom_types.ArrayInput] = None,
    prob: custom_types.Numeric = defaults.DEFAULT_PROB,
    alpha: custom_types.Numeric = 0.33,
    size: custom_types.Numeric = 0.25,
) -> hv.Overlay:
    """LOO predictive intervals of all observations as a shaded ribbon.

    Arguments are those of :py:func:`ppc_loo_intervals`, except ``alpha``, which
    sets the ribbon opacity, and ``size``, which sets the width of the median line.
    """
    y = validation.validate_y(y)
    intervals = _get_intervals(y, yrep, lw, intervals, prob)

    return interval_plot(
        reshape.intervals_data(y, np.arange(1, len(y) + 1, dtype=float), intervals),
        style="ribbon",
        size=size,
        alpha=alpha,
        x_lab=INDEX_LABEL,
    )
