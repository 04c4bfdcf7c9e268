# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""PPC distribution plots.

These plots compare the empirical distribution of the observed data ``y`` to the
distributions of replicated datasets ``yrep`` drawn from the posterior predictive
distribution.

Plot Descriptions:
    - :py:func:`ppc_hist`, :py:func:`ppc_freqpoly`, :py:func:`ppc_dens`,
      :py:func:`ppc_boxplot`: A separate histogram, shaded frequency polygon,
      kernel density estimate, or box and whiskers plot is displayed for ``y``
      and each dataset (row) in ``yrep``. For these plots ``yrep`` should
      therefore contain only a small number of rows.
    - :py:func:`ppc_freqpoly_grouped`: A separate frequency polygon is plotted
      for each level of a grouping variable for ``y`` and each dataset (row) in
      ``yrep``. ``yrep`` should again contain only a small number of rows.
    - :py:func:`ppc_dens_overlay`, :py:func:`ppc_ecdf_overlay`: Kernel density or
      empirical CDF estimates of each dataset (row) in ``yrep`` are overlaid,
      with the distribution of ``y`` itself on top (and in a darker shade).
    - :py:func:`ppc_violin_grouped`: The density estimate of ``yrep`` within
      each level of a grouping variable is plotted as a violin with markers at
      notable quantiles. ``y`` is overlaid on the plot either as a violin,
      points, or both, depending on the ``y_draw`` argument.

Example:
    >>> bp.ppc_dens_overlay(y, yrep[:25])
    >>> # Use a subset of yrep rows so only a few histograms are plotted
    >>> bp.ppc_hist(y, yrep[:8])
    >>> bp.ppc_violin_grouped(y, yrep, group, y_draw="both", y_jitter=0.33)
"""

from __future__ import annotations

from typing import Optional, Sequence

import holoviews as hv
import numpy as np
import numpy.typing as npt
import pandas as pd

from bayesplot import custom_types, defaults, reshape, stats, utils, validation
from bayesplot.color_scheme import get_color
from bayesplot.plotting import plotting


def _iter_datasets(data: pd.DataFrame):
    """Yield (label, is_y, values) for the observed data then each replicate."""
    for label, subdf in data.groupby("rep_label", observed=True, sort=True):
        yield label, label == defaults.Y_LABEL, subdf["value"].to_numpy()


def ppc_hist(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    *,
    binwidth: Optional[custom_types.Numeric] = None,
    freq: bool = True,
) -> hv.NdLayout:
    """Histograms of the observed data and each replicated dataset.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N). Only a few rows should be
        given.
    :type yrep: custom_types.ArrayInput
    :param binwidth: Width of the histogram bins. If None, 30 bins spanning all of
        the data are used. (Default: None)
    :type binwidth: Optional[custom_types.Numeric]
    :param freq: Whether to show counts (True) or densities (False). (Default: True)
    :type freq: bool

    :returns: One panel per dataset, observed data first
    :rtype: hv.NdLayout

    :raises ValidationError: If the inputs fail validation
    """
    data = reshape.ppc_data(y, yrep)
    edges = stats.bin_edges(data["value"].to_numpy(), binwidth)

    return plotting.facet(
        {
            label: plotting.histogram_panel(values, edges, is_y=is_y, freq=freq)
            for label, is_y, values in _iter_datasets(data)
        },
        ["Dataset"],
    )


def ppc_freqpoly(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    *,
    binwidth: Optional[custom_types.Numeric] = None,
    freq: bool = True,
    size: custom_types.Numeric = 0.25,
    alpha: custom_types.Numeric = 1.0,
) -> hv.NdLayout:
    """Shaded frequency polygons of the observed data and each replicated dataset.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N). Only a few rows should be
        given.
    :type yrep: custom_types.ArrayInput
    :param binwidth: Width of the bins. If None, 30 bins are used. (Default: None)
    :type binwidth: Optional[custom_types.Numeric]
    :param freq: Whether to show counts (True) or densities (False). (Default: True)
    :type freq: bool
    :param size: Outline width. (Default: 0.25)
    :type size: custom_types.Numeric
    :param alpha: Fill opacity. (Default: 1.0)
    :type alpha: custom_types.Numeric

    :returns: One panel per dataset, observed data first
    :rtype: hv.NdLayout
    """
    data = reshape.ppc_data(y, yrep)
    edges = stats.bin_edges(data["value"].to_numpy(), binwidth)

    return plotting.facet(
        {
            label: plotting.freqpoly_panel(
                values, edges, is_y=is_y, freq=freq, size=size, alpha=alpha
            )
            for label, is_y, values in _iter_datasets(data)
        },
        ["Dataset"],
    )


def ppc_freqpoly_grouped(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    group: custom_types.GroupInput,
    *,
    binwidth: Optional[custom_types.Numeric] = None,
    freq: bool = True,
    size: custom_types.Numeric = 0.25,
    alpha: custom_types.Numeric = 1.0,
) -> hv.NdLayout:
    """Frequency polygons for each combination of dataset and group.

    Panels are laid out as a grid with one row per dataset (observed data first)
    and one column per group. Bins are shared within a group, and each panel has
    its own axis ranges.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N). Only a few rows should be
        given.
    :type yrep: custom_types.ArrayInput
    :param group: Grouping variable of length N
    :type group: custom_types.GroupInput
    :param binwidth: Width of the bins. If None, 30 bins per group are used.
        (Default: None)
    :type binwidth: Optional[custom_types.Numeric]
    :param freq: Whether to show counts (True) or densities (False). (Default: True)
    :type freq: bool
    :param size: Outline width. (Default: 0.25)
    :type size: custom_types.Numeric
    :param alpha: Fill opacity. (Default: 1.0)
    :type alpha: custom_types.Numeric

    :returns: Grid of panels keyed by dataset and group
    :rtype: hv.NdLayout
    """
    data = reshape.ppc_data(y, yrep, group)
    groups = data["group"].cat.categories

    # Bin edges are shared across datasets within each group
    edges = {
        level: stats.bin_edges(
            data.loc[data["group"] == level, "value"].to_numpy(), binwidth
        )
        for level in groups
    }

    panels = {}
    for label, is_y, _ in _iter_datasets(data):
        dataset = data[data["rep_label"] == label]
        for level in groups:
            panels[(label, level)] = plotting.freqpoly_panel(
                dataset.loc[dataset["group"] == level, "value"].to_numpy(),
                edges[level],
                is_y=is_y,
                freq=freq,
                size=size,
                alpha=alpha,
            )

    return plotting.facet(
        panels, ["Dataset", "Group"], cols=len(groups), shared_axes=False
    )


def ppc_dens(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    *,
    trim: bool = False,
    size: custom_types.Numeric = 0.5,
    alpha: custom_types.Numeric = 1.0,
) -> hv.NdLayout:
    """Kernel density estimates of the observed data and each replicated dataset.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N). Only a few rows should be
        given.
    :type yrep: custom_types.ArrayInput
    :param trim: If True, each density is evaluated over the range of its own data.
        Otherwise all densities span the range of all data. (Default: False)
    :type trim: bool
    :param size: Outline width. (Default: 0.5)
    :type size: custom_types.Numeric
    :param alpha: Fill opacity. (Default: 1.0)
    :type alpha: custom_types.Numeric

    :returns: One panel per dataset, observed data first
    :rtype: hv.NdLayout
    """
    data = reshape.ppc_data(y, yrep)
    support = None if trim else (data["value"].min(), data["value"].max())

    panels = {}
    for label, is_y, values in _iter_datasets(data):
        grid, density = stats.kernel_density(values, support=support)
        panels[label] = hv.Area(
            (grid, density), kdims=["value"], vdims=["Density"]
        ).opts(
            **utils.set_defaults(
                {
                    "fill_color": plotting.fill_color(is_y),
                    "line_color": plotting.line_color(is_y),
                    "fill_alpha": float(alpha),
                    "line_width": plotting.line_width(size),
                    "width": defaults.DEFAULT_FACET_WIDTH,
                    "height": defaults.DEFAULT_FACET_HEIGHT,
                },
                plotting.HIDDEN_Y_AXIS,
            )
        )

    return plotting.facet(panels, ["Dataset"])


def density_overlay(
    y: npt.NDArray[np.floating],
    yrep: npt.NDArray[np.floating],
    *,
    labels: tuple[str, str] = (defaults.Y_LABEL, defaults.YREP_LABEL),
    size: custom_types.Numeric = 0.25,
    alpha: custom_types.Numeric = 0.7,
    trim: bool = False,
    bw: custom_types.BandwidthType = defaults.DEFAULT_BW,
    adjust: custom_types.Numeric = 1.0,
    kernel: str = defaults.DEFAULT_KERNEL,
    n_dens: custom_types.Integer = defaults.DEFAULT_N_DENS,
) -> tuple[hv.Overlay, float]:
    """Overlay the densities of validated replicates under the density of ``y``.

    This is the engine behind :py:func:`ppc_dens_overlay` and the LOO-PIT overlay,
    which relabels the two layers.

    :param labels: Legend labels of the observed and replicated layers
    :type labels: tuple[str, str]

    Other parameters are documented in :py:func:`ppc_dens_overlay`.

    :returns: The overlay and the largest density value in it
    :rtype: tuple[hv.Overlay, float]
    """
    support = None if trim else (min(y.min(), yrep.min()), max(y.max(), yrep.max()))
    density_kwargs = {
        "bw": bw,
        "adjust": adjust,
        "kernel": kernel,
        "n_dens": n_dens,
        "support": support,
    }

    # All replicate curves are drawn as a single path so they share one legend entry
    rep_curves = [
        np.column_stack(stats.kernel_density(draw, **density_kwargs)) for draw in yrep
    ]
    y_grid, y_density = stats.kernel_density(y, **density_kwargs)
    max_density = float(max(y_density.max(), *(curve[:, 1].max() for curve in rep_curves)))

    overlay = hv.Path(rep_curves, kdims=["value", "Density"], label=labels[1]).opts(
        color=plotting.line_color(False),
        line_width=plotting.line_width(size),
        alpha=float(alpha),
    ) * hv.Curve((y_grid, y_density), kdims=["value"], vdims=["Density"], label=labels[0]).opts(
        color=plotting.line_color(True), line_width=plotting.line_width(1)
    )

    return (
        overlay.opts(
            yaxis=None,
            xlabel="",
            width=defaults.DEFAULT_WIDTH,
            height=defaults.DEFAULT_HEIGHT,
            legend_position="right",
        ),
        max_density,
    )


def ppc_dens_overlay(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    *,
    size: custom_types.Numeric = 0.25,
    alpha: custom_types.Numeric = 0.7,
    trim: bool = False,
    bw: custom_types.BandwidthType = defaults.DEFAULT_BW,
    adjust: custom_types.Numeric = 1.0,
    kernel: str = defaults.DEFAULT_KERNEL,
    n_dens: custom_types.Integer = defaults.DEFAULT_N_DENS,
) -> hv.Overlay:
    """Overlay kernel density estimates of the replicated datasets and ``y``.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N)
    :type yrep: custom_types.ArrayInput
    :param size: Width of the replicate lines. (Default: 0.25)
    :type size: custom_types.Numeric
    :param alpha: Opacity of the replicate lines. (Default: 0.7)
    :type alpha: custom_types.Numeric
    :param trim: If True, each density is evaluated over the range of its own data.
        Otherwise all densities span the range of all data. (Default: False)
    :type trim: bool
    :param bw: Bandwidth rule ("nrd0", "nrd", "scott", "silverman") or a positive
        number. (Default: "nrd0")
    :type bw: custom_types.BandwidthType
    :param adjust: Multiplier applied to the bandwidth. (Default: 1.0)
    :type adjust: custom_types.Numeric
    :param kernel: Smoothing kernel: "gaussian", "epanechnikov", "rectangular",
        "triangular" or "biweight". (Default: "gaussian")
    :type kernel: str
    :param n_dens: Number of points at which each density is evaluated.
        (Default: 1024)
    :type n_dens: custom_types.Integer

    :returns: Overlay of the replicate densities (thin, light) and the density of
        ``y`` (thick, dark)
    :rtype: hv.Overlay

    Example:
        >>> bp.ppc_dens_overlay(y, yrep[:50], bw="nrd", adjust=0.8)
    """
    y = validation.validate_y(y)
    yrep = validation.validate_yrep(yrep, y)
    overlay, _ = density_overlay(
        y,
        yrep,
        size=size,
        alpha=alpha,
        trim=trim,
        bw=bw,
        adjust=adjust,
        kernel=kernel,
        n_dens=n_dens,
    )

    return overlay


def ppc_ecdf_overlay(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    *,
    pad: bool = True,
    size: custom_types.Numeric = 0.25,
    alpha: custom_types.Numeric = 0.7,
) -> hv.Overlay:
    """Overlay empirical CDFs of the replicated datasets and ``y``.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N)
    :type yrep: custom_types.ArrayInput
    :param pad: Whether to extend every ECDF from probability 0 at the smallest
        value in the plot to probability 1 at the largest. (Default: True)
    :type pad: bool
    :param size: Width of the replicate lines. (Default: 0.25)
    :type size: custom_types.Numeric
    :param alpha: Opacity of the replicate lines. (Default: 0.7)
    :type alpha: custom_types.Numeric

    :returns: Overlay of reference lines at 0, 0.5 and 1, the replicate ECDFs, and
        the ECDF of ``y``
    :rtype: hv.Overlay
    """
    y = validation.validate_y(y)
    yrep = validation.validate_yrep(yrep, y)
    pad_to = (min(y.min(), yrep.min()), max(y.max(), yrep.max())) if pad else None

    # Dashed reference lines
    reference_lines = [
        hv.HLine(level).opts(
            color=get_color("dh"),
            line_dash="dashed",
            line_width=plotting.line_width(linesize),
        )
        for level, linesize in ((0.0, 0.2), (0.5, 0.1), (1.0, 0.2))
    ]

    rep_steps = [
        plotting.step_coordinates(*stats.ecdf(draw, pad_to)) for draw in yrep
    ]
    y_steps = plotting.step_coordinates(*stats.ecdf(y, pad_to))

    return hv.Overlay(
        reference_lines
        + [
            hv.Path(rep_steps, kdims=["value", "ECDF"], label=defaults.YREP_LABEL).opts(
                color=plotting.line_color(False),
                line_width=plotting.line_width(size),
                alpha=float(alpha),
            ),
            hv.Curve(y_steps, kdims=["value"], vdims=["ECDF"], label=defaults.Y_LABEL).opts(
                color=plotting.line_color(True), line_width=plotting.line_width(1)
            ),
        ]
    ).opts(
        yticks=[0, 0.5, 1],
        xlabel="",
        ylabel="",
        width=defaults.DEFAULT_WIDTH,
        height=defaults.DEFAULT_HEIGHT,
        legend_position="right",
    )


def ppc_boxplot(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    *,
    notch: bool = True,
    size: custom_types.Numeric = 0.5,
    alpha: custom_types.Numeric = 1.0,
) -> hv.Overlay:
    """Box and whiskers plots of the observed data and each replicated dataset.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N). Only a few rows should be
        given.
    :type yrep: custom_types.ArrayInput
    :param notch: Whether to mark the approximate 95% confidence interval of each
        median, :math:`\\pm 1.58 \\, \\mathrm{IQR} / \\sqrt{n}`. (Default: True)
    :type notch: bool
    :param size: Outline width of the boxes. (Default: 0.5)
    :type size: custom_types.Numeric
    :param alpha: Fill opacity of the boxes. (Default: 1.0)
    :type alpha: custom_types.Numeric

    :returns: Box plots (with median notches if requested), observed data first
    :rtype: hv.Overlay
    """
    # Sort so that the observed data come first, then use string labels for the
    # categorical axis
    data = reshape.ppc_data(y, yrep).sort_values("rep_label", kind="stable")
    labels = list(data["rep_label"].cat.categories)
    data["rep_label"] = data["rep_label"].astype(str)
    dataset_dim = hv.Dimension("rep_label", label="Dataset", values=labels)

    fills = {label: plotting.fill_color(label == defaults.Y_LABEL) for label in labels}
    lines = {label: plotting.line_color(label == defaults.Y_LABEL) for label in labels}
    plots = [
        hv.BoxWhisker(data, kdims=[dataset_dim], vdims=["value"]).opts(
            box_fill_color=hv.dim("rep_label").categorize(fills),
            box_line_color=hv.dim("rep_label").categorize(lines),
            box_fill_alpha=float(alpha),
            box_line_width=plotting.line_width(size),
            whisker_line_color=plotting.line_color(False),
            outlier_fill_alpha=2 / 3,
            outlier_line_alpha=2 / 3,
        )
    ]

    if notch:
        summary = data.groupby("rep_label", sort=False)["value"].agg(
            median="median",
            iqr=lambda values: stats.NAMED_STATS["iqr"](values.to_numpy()),
            n="size",
        )
        halfwidth = 1.58 * summary["iqr"] / np.sqrt(summary["n"])
        plots.append(
            hv.ErrorBars(
                (summary.index.to_numpy(), summary["median"], halfwidth),
                kdims=[dataset_dim],
                vdims=["value", "notch"],
            ).opts(color=get_color("dh"), line_width=plotting.line_width(size))
        )

    return hv.Overlay(plots).opts(
        xaxis=None,
        ylabel="",
        width=defaults.DEFAULT_WIDTH,
        height=defaults.DEFAULT_HEIGHT,
    )


def ppc_violin_grouped(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    group: custom_types.GroupInput,
    *,
    probs: Optional[Sequence[custom_types.Numeric]] = defaults.DEFAULT_VIOLIN_PROBS,
    size: custom_types.Numeric = 1.0,
    alpha: custom_types.Numeric = 1.0,
    y_draw: str = "violin",
    y_size: custom_types.Numeric = 1.0,
    y_alpha: custom_types.Numeric = 1.0,
    y_jitter: custom_types.Numeric = 0.1,
) -> hv.Overlay:
    """Violins of the pooled replicated data within each group, with ``y`` on top.

    Unlike the other distribution plots, all rows of ``yrep`` can be used here since
    the draws are pooled within groups.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N)
    :type yrep: custom_types.ArrayInput
    :param group: Grouping variable of length N
    :type group: custom_types.GroupInput
    :param probs: Quantiles of the pooled replicates to mark on each violin. None or
        an empty sequence removes the markers. (Default: (0.1, 0.5, 0.9))
    :type probs: Optional[Sequence[custom_types.Numeric]]
    :param size: Outline width of the replicate violins. (Default: 1.0)
    :type size: custom_types.Numeric
    :param alpha: Fill opacity of the replicate violins. (Default: 1.0)
    :type alpha: custom_types.Numeric
    :param y_draw: How to draw ``y``: "violin" (an unfilled violin), "points"
        (jittered points), or "both". (Default: "violin")
    :type y_draw: str
    :param y_size: Size of the ``y`` points. (Default: 1.0)
    :type y_size: custom_types.Numeric
    :param y_alpha: Opacity of the ``y`` points. (Default: 1.0)
    :type y_alpha: custom_types.Numeric
    :param y_jitter: Width of the horizontal jitter applied to the ``y`` points.
        (Default: 0.1)
    :type y_jitter: custom_types.Numeric

    :returns: Overlay of the violins and markers
    :rtype: hv.Overlay

    :raises ValidationError: If the inputs fail validation or ``y_draw`` is unknown
    """
    validation.validate_choice(y_draw, ("violin", "points", "both"), "y_draw")
    data = reshape.ppc_data(y, yrep, group).sort_values("group", kind="stable")
    levels = [str(level) for level in data["group"].cat.categories]
    data["group"] = data["group"].astype(str)
    group_dim = hv.Dimension("group", label="Group", values=levels)
    rep_data = data.loc[~data["is_y"], ["group", "value"]]
    y_data = data.loc[data["is_y"], ["group", "value"]]

    plots = [
        hv.Violin(rep_data, kdims=[group_dim], vdims=["value"]).opts(
            violin_fill_color=plotting.fill_color(False),
            violin_line_color=plotting.line_color(False),
            violin_fill_alpha=float(alpha),
            violin_line_width=plotting.line_width(size),
            inner=None,
        )
    ]

    if probs is not None and len(probs) > 0:
        probs = [validation.validate_prob(prob, "probs") for prob in probs]
        quantiles = (
            rep_data.groupby("group", sort=False)["value"]
            .quantile(probs)
            .rename("value")
            .reset_index()
        )
        plots.append(
            hv.Scatter(quantiles, kdims=[group_dim], vdims=["value"]).opts(
                marker="dash",
                size=plotting.point_size(4 * size),
                color=plotting.line_color(False),
            )
        )

    if y_draw in ("violin", "both"):
        plots.append(
            hv.Violin(y_data, kdims=[group_dim], vdims=["value"]).opts(
                violin_fill_alpha=0.0,
                violin_line_color=plotting.line_color(True),
                violin_line_width=plotting.line_width(size),
                inner=None,
            )
        )

    if y_draw in ("points", "both"):
        plots.append(
            hv.Scatter(y_data, kdims=[group_dim], vdims=["value"]).opts(
                color=plotting.line_color(True),
                fill_color=plotting.fill_color(True),
                size=plotting.point_size(y_size),
                alpha=float(y_alpha),
                jitter=float(y_jitter),
            )
        )

    return hv.Overlay(plots).opts(
        xlabel="",
        ylabel="",
        width=defaults.DEFAULT_WIDTH,
        height=defaults.DEFAULT_HEIGHT,
    )
