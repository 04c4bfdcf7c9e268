# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""PPC intervals and ribbons.

Central predictive intervals of each observation, computed from the columns of
``yrep``, are drawn with the observed value of each observation on top. The
intervals plots show a median point with an interval bar per observation; the
ribbon plots connect the intervals into a shaded band. The grouped variants
facet by a grouping variable.
"""

from __future__ import annotations

from typing import Optional

import holoviews as hv
import pandas as pd

from bayesplot import custom_types, defaults, reshape, validation
from bayesplot.color_scheme import get_color
from bayesplot.plotting import plotting

INDEX_LABEL = "Data point (index)"


def _x_label(x: Optional[custom_types.ArrayInput]) -> str:
    return INDEX_LABEL if x is None else "x"


def interval_plot(
    data: pd.DataFrame,
    *,
    style: str = "intervals",
    size: custom_types.Numeric = 1.0,
    fatten: custom_types.Numeric = 3.0,
    alpha: custom_types.Numeric = 0.33,
    x_lab: str = INDEX_LABEL,
) -> hv.Overlay:
    """Draw interval data as point ranges or as a ribbon.

    :param data: Table with columns ``x``, ``y_obs``, ``lo``, ``mid`` and ``hi``
        (see :py:func:`~bayesplot.reshape.intervals_data`)
    :type data: pd.DataFrame
    :param style: "intervals" or "ribbon". (Default: "intervals")
    :type style: str
    :param size: Width of the interval bars or ribbon lines. (Default: 1.0)
    :type size: custom_types.Numeric
    :param fatten: Factor by which the points are larger than ``size``. Only used
        by the "intervals" style. (Default: 3.0)
    :type fatten: custom_types.Numeric
    :param alpha: Ribbon opacity. Only used by the "ribbon" style. (Default: 0.33)
    :type alpha: custom_types.Numeric
    :param x_lab: Label of the x-axis. (Default: "Data point (index)")
    :type x_lab: str

    :returns: The predictive intervals with the observed data on top
    :rtype: hv.Overlay

    :raises ValidationError: If ``style`` is unknown
    """
    validation.validate_choice(style, ("intervals", "ribbon"), "style")
    data = data.sort_values("x", kind="stable")

    if style == "intervals":
        ranges = data.assign(neg=data["mid"] - data["lo"], pos=data["hi"] - data["mid"])
        layers = [
            hv.ErrorBars(ranges, kdims=["x"], vdims=["mid", "neg", "pos"]).opts(
                color=get_color("m"), line_width=plotting.line_width(size)
            ),
            hv.Scatter(data, kdims=["x"], vdims=["mid"], label=defaults.YREP_LABEL).opts(
                color=get_color("m"),
                fill_color=get_color("l"),
                size=plotting.point_size(size * fatten / 2),
            ),
            hv.Scatter(data, kdims=["x"], vdims=["y_obs"], label=defaults.Y_LABEL).opts(
                color=plotting.line_color(True),
                fill_color=plotting.fill_color(True),
                size=plotting.point_size(size * fatten / 2),
            ),
        ]
    else:
        layers = [
            hv.Area(data, kdims=["x"], vdims=["lo", "hi"], label=defaults.YREP_LABEL).opts(
                fill_color=get_color("l"),
                fill_alpha=float(alpha),
                line_alpha=0.0,
            ),
            hv.Curve(data, kdims=["x"], vdims=["mid"]).opts(
                color=get_color("m"), line_width=plotting.line_width(size)
            ),
            hv.Curve(data, kdims=["x"], vdims=["y_obs"], label=defaults.Y_LABEL).opts(
                color=plotting.line_color(True), line_width=plotting.line_width(0.5)
            ),
        ]

    return hv.Overlay(layers).opts(
        xlabel=x_lab,
        ylabel="",
        width=defaults.DEFAULT_WIDTH,
        height=defaults.DEFAULT_HEIGHT,
        legend_position="right",
    )


def _grouped_interval_plot(data: pd.DataFrame, **kwargs) -> hv.NdLayout:
    """Facet :py:func:`interval_plot` by the ``group`` column of ``data``."""
    panels = {
        level: interval_plot(subdf, **kwargs).opts(
            width=defaults.DEFAULT_FACET_WIDTH * 3 // 2,
            height=defaults.DEFAULT_FACET_HEIGHT,
            show_legend=False,
        )
        for level, subdf in data.groupby("group", observed=True, sort=True)
    }
    return plotting.facet(panels, ["Group"], shared_axes=False)


def ppc_intervals(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    *,
    x: Optional[custom_types.ArrayInput] = None,
    prob: custom_types.Numeric = defaults.DEFAULT_PROB,
    size: custom_types.Numeric = 1.0,
    fatten: custom_types.Numeric = 3.0,
) -> hv.Overlay:
    """Central predictive interval and median of each observation, with ``y``.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N)
    :type yrep: custom_types.ArrayInput
    :param x: Numeric x-axis position of each observation. Defaults to the
        observation index. (Default: None)
    :type x: Optional[custom_types.ArrayInput]
    :param prob: Probability mass of each interval. (Default: 0.9)
    :type prob: custom_types.Numeric
    :param size: Width of the interval bars. (Default: 1.0)
    :type size: custom_types.Numeric
    :param fatten: Factor by which the points are larger than ``size``.
        (Default: 3.0)
    :type fatten: custom_types.Numeric

    :returns: Point ranges for the replicates overlaid with the observed points
    :rtype: hv.Overlay

    Example:
        >>> bp.ppc_intervals(y, yrep, x=covariate, prob=0.5)
    """
    return interval_plot(
        reshape.ppc_intervals_data(y, yrep, x, prob=prob),
        style="intervals",
        size=size,
        fatten=fatten,
        x_lab=_x_label(x),
    )


def ppc_ribbon(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    *,
    x: Optional[custom_types.ArrayInput] = None,
    prob: custom_types.Numeric = defaults.DEFAULT_PROB,
    alpha: custom_types.Numeric = 0.33,
    size: custom_types.Numeric = 0.25,
) -> hv.Overlay:
    """Central predictive intervals of all observations as a shaded ribbon.

    Arguments are those of :py:func:`ppc_intervals`, except ``alpha``, which sets
    the ribbon opacity, and ``size``, which sets the width of the median line.
    """
    return interval_plot(
        reshape.ppc_intervals_data(y, yrep, x, prob=prob),
        style="ribbon",
        size=size,
        alpha=alpha,
        x_lab=_x_label(x),
    )


def ppc_intervals_grouped(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    group: custom_types.GroupInput,
    *,
    x: Optional[custom_types.ArrayInput] = None,
    prob: custom_types.Numeric = defaults.DEFAULT_PROB,
    size: custom_types.Numeric = 1.0,
    fatten: custom_types.Numeric = 3.0,
) -> hv.NdLayout:
    """:py:func:`ppc_intervals` with one panel per level of ``group``.

    Each panel has its own axis ranges.
    """
    return _grouped_interval_plot(
        reshape.ppc_intervals_data(y, yrep, x, group, prob),
        style="intervals",
        size=size,
        fatten=fatten,
        x_lab=_x_label(x),
    )


def ppc_ribbon_grouped(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    group: custom_types.GroupInput,
    *,
    x: Optional[custom_types.ArrayInput] = None,
    prob: custom_types.Numeric = defaults.DEFAULT_PROB,
    alpha: custom_types.Numeric = 0.33,
    size: custom_types.Numeric = 0.25,
) -> hv.NdLayout:
    """:py:func:`ppc_ribbon` with one panel per level of ``group``."""
    return _grouped_interval_plot(
        reshape.ppc_intervals_data(y, yrep, x, group, prob),
        style="ribbon",
        size=size,
        alpha=alpha,
        x_lab=_x_label(x),
    )
