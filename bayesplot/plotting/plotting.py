"""Shared building blocks for the bayesplot plotting functions.

This module implements the pieces every PPC plot is assembled from: size
conversion from the package's ``size`` arguments to screen units, the
observed-versus-replicated colors drawn from the active color scheme,
histogram, frequency polygon and density panels, step coordinates for ECDFs,
and faceted layouts.

All plots are HoloViews objects rendered with the Bokeh backend. Options set here
are Bokeh options, so the backend is registered when the plotting subpackage is
imported.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import holoviews as hv
import numpy as np
import numpy.typing as npt

from bayesplot import custom_types, defaults, stats, utils
from bayesplot.color_scheme import get_color

# Options that hide the y-axis of distribution panels, where the scale of the
# counts or densities carries no information
HIDDEN_Y_AXIS: tuple[tuple[str, Any], ...] = (("yaxis", None), ("xlabel", ""))


def line_width(size: custom_types.Numeric) -> float:
    """Convert a ``size`` argument of a line layer to a width in pixels."""
    return float(size) * defaults.LINE_WIDTH_SCALE


def point_size(size: custom_types.Numeric) -> float:
    """Convert a ``size`` argument of a point layer to a marker size in pixels."""
    return float(size) * defaults.POINT_SIZE_SCALE


def fill_color(is_y: bool) -> str:
    """Fill color of observed (dark) or replicated (light) data."""
    return get_color("d" if is_y else "l")


def line_color(is_y: bool) -> str:
    """Line color of observed (dark highlight) or replicated (light highlight) data."""
    return get_color("dh" if is_y else "lh")


def hide_x_ticks(plot, element):  # pylint: disable=unused-argument
    """Plot hook removing the x tick marks and tick labels but keeping the label."""
    plot.state.xaxis.major_tick_line_color = None
    plot.state.xaxis.minor_tick_line_color = None
    plot.state.xaxis.major_label_text_font_size = "0pt"


def height_label(freq: bool) -> str:
    return "Count" if freq else "Density"


def histogram_panel(
    values: npt.NDArray[np.floating],
    edges: npt.NDArray[np.floating],
    *,
    is_y: bool,
    freq: bool = True,
    label: str = "",
    xlabel: str = "value",
    **kwargs,
) -> hv.Histogram:
    """Build a histogram of one dataset with the observed/replicated styling.

    :param values: Data to bin
    :type values: npt.NDArray[np.floating]
    :param edges: Bin edges, shared across all panels of a plot
    :type edges: npt.NDArray[np.floating]
    :param is_y: Whether the data are the observed data
    :type is_y: bool
    :param freq: Counts (True) or densities (False). (Default: True)
    :type freq: bool
    :param label: Element label, used in legends. (Default: "")
    :type label: str
    :param xlabel: Name of the binned dimension. (Default: "value")
    :type xlabel: str
    :param kwargs: Options overriding the defaults. See `hv.opts.Histogram`.

    :returns: Styled histogram
    :rtype: hv.Histogram
    """
    heights = stats.bin_heights(values, edges, freq)
    opts = utils.set_defaults(
        kwargs,
        (
            ("fill_color", fill_color(is_y)),
            ("line_color", line_color(is_y)),
            ("line_width", line_width(0.25)),
            ("width", defaults.DEFAULT_FACET_WIDTH),
            ("height", defaults.DEFAULT_FACET_HEIGHT),
        )
        + HIDDEN_Y_AXIS,
    )
    return hv.Histogram(
        (edges, heights), kdims=[xlabel], vdims=[height_label(freq)], label=label
    ).opts(**opts)


def freqpoly_panel(
    values: npt.NDArray[np.floating],
    edges: npt.NDArray[np.floating],
    *,
    is_y: bool,
    freq: bool = True,
    size: custom_types.Numeric = 0.25,
    alpha: custom_types.Numeric = 1.0,
    label: str = "",
    xlabel: str = "value",
    **kwargs,
) -> hv.Area:
    """Build a shaded frequency polygon (an area through the bin midpoints).

    Arguments are those of :py:func:`histogram_panel`, plus ``size`` and ``alpha``
    controlling the outline width and fill opacity.
    """
    heights = stats.bin_heights(values, edges, freq)
    midpoints = (edges[1:] + edges[:-1]) / 2
    opts = utils.set_defaults(
        kwargs,
        (
            ("fill_color", fill_color(is_y)),
            ("line_color", line_color(is_y)),
            ("fill_alpha", float(alpha)),
            ("line_width", line_width(size)),
            ("width", defaults.DEFAULT_FACET_WIDTH),
            ("height", defaults.DEFAULT_FACET_HEIGHT),
        )
        + HIDDEN_Y_AXIS,
    )
    return hv.Area(
        (midpoints, heights), kdims=[xlabel], vdims=[height_label(freq)], label=label
    ).opts(**opts)


def step_coordinates(
    x: npt.NDArray[np.floating], y: npt.NDArray[np.floating]
) -> npt.NDArray[np.floating]:
    """Expand points of a right-continuous step function into line vertices.

    :param x: Step locations, sorted
    :type x: npt.NDArray[np.floating]
    :param y: Function value from each location until the next
    :type y: npt.NDArray[np.floating]

    :returns: Array with shape (2 * len(x) - 1, 2) tracing the steps
    :rtype: npt.NDArray[np.floating]
    """
    return np.column_stack([np.repeat(x, 2)[1:], np.repeat(y, 2)[:-1]])


def facet(
    panels: dict,
    kdims: Sequence[str],
    *,
    cols: Optional[custom_types.Integer] = defaults.DEFAULT_FACET_COLS,
    shared_axes: bool = True,
) -> hv.NdLayout:
    """Lay out panels in a grid keyed by one or more dimensions.

    :param panels: Panels keyed by a value (one dimension) or a tuple of values
        (several dimensions), in display order
    :type panels: dict
    :param kdims: Names of the key dimensions, shown in panel titles
    :type kdims: Sequence[str]
    :param cols: Number of columns. (Default: 3)
    :type cols: Optional[custom_types.Integer]
    :param shared_axes: Whether panels share axis ranges. (Default: True)
    :type shared_axes: bool

    :returns: The faceted layout
    :rtype: hv.NdLayout
    """
    layout = hv.NdLayout(panels, kdims=list(kdims), sort=False)
    if cols is not None:
        layout = layout.cols(int(cols))

    return layout.opts(shared_axes=shared_axes)
