# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Color schemes used by the bayesplot plotting functions.

Every plot draws its colors from the active color scheme, a set of six shades
ordered from light to dark:

    ``light``, ``light_highlight``, ``mid``, ``mid_highlight``, ``dark``,
    ``dark_highlight``

Replicated data are drawn with the light shades and observed data with the dark
shades. The active scheme is package-global state changed with
:py:func:`color_scheme_set`.

Example:
    >>> import bayesplot as bp
    >>> bp.color_scheme_set("red")
    >>> bp.get_color(["l", "dh"])
    ['#DCBCBC', '#7C0000']
    >>> # Mix two schemes
    >>> bp.color_scheme_set("mix-blue-red")
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Sequence, Union

import holoviews as hv
import hvplot.pandas  # pylint: disable=unused-import
import pandas as pd

from bayesplot.exceptions import ValidationError


class ColorScheme(NamedTuple):
    """Six shades making up a color scheme, ordered from light to dark."""

    light: str
    light_highlight: str
    mid: str
    mid_highlight: str
    dark: str
    dark_highlight: str


SCHEMES: dict[str, ColorScheme] = {
    "blue": ColorScheme(
        "#d1e1ec", "#b3cde0", "#6497b1", "#005b96", "#03396c", "#011f4b"
    ),
    "brightblue": ColorScheme(
        "#cce5ff", "#99cbff", "#4ca5ff", "#198bff", "#0065cc", "#004c99"
    ),
    "gray": ColorScheme(
        "#dfdfdf", "#bfbfbf", "#999999", "#737373", "#505050", "#383838"
    ),
    "darkgray": ColorScheme(
        "#bfbfbf", "#999999", "#737373", "#505050", "#383838", "#0d0d0d"
    ),
    "green": ColorScheme(
        "#d9f2e6", "#9fdfbf", "#66cc99", "#40bf80", "#2d8659", "#1a4d33"
    ),
    "pink": ColorScheme(
        "#dcbccc", "#c799b0", "#b97c9b", "#a25079", "#8f275b", "#7c0037"
    ),
    "purple": ColorScheme(
        "#e5cce5", "#bf7fbf", "#a64ca6", "#800080", "#660066", "#400040"
    ),
    "red": ColorScheme(
        "#DCBCBC", "#C79999", "#B97C7C", "#A25050", "#8F2727", "#7C0000"
    ),
    "orange": ColorScheme(
        "#fecba2", "#feb174", "#fe8a2f", "#e5670d", "#b44f07", "#833f0c"
    ),
    "teal": ColorScheme(
        "#bcdcdc", "#99c7c7", "#7cb9b9", "#50a2a2", "#278f8f", "#007c7c"
    ),
    "yellow": ColorScheme(
        "#fbf3da", "#f8e8b5", "#f5dc90", "#f2d16b", "#efc546", "#ecba21"
    ),
    "viridis": ColorScheme(
        "#fde725", "#7ad151", "#22a884", "#2a788e", "#414487", "#440154"
    ),
}
"""Named color schemes available to :py:func:`color_scheme_set`.

:type: dict[str, ColorScheme]
"""

# Short codes accepted by `get_color`
_SHORT_CODES: dict[str, str] = {
    "l": "light",
    "lh": "light_highlight",
    "m": "mid",
    "mh": "mid_highlight",
    "d": "dark",
    "dh": "dark_highlight",
}

# The active scheme
_ACTIVE_SCHEME: ColorScheme = SCHEMES["blue"]


def _mixed_scheme(name: str) -> ColorScheme:
    """Build a ``mix-<first>-<second>`` scheme.

    Shades alternate between the two schemes: the plain shades come from the
    first scheme and the highlight shades from the second.
    """
    parts = name.split("-")
    if len(parts) != 3 or any(part not in SCHEMES for part in parts[1:]):
        raise ValidationError(
            f"Mixed schemes must be specified as 'mix-<scheme>-<scheme>' using "
            f"names from {sorted(SCHEMES)}. Got '{name}'."
        )
    first, second = SCHEMES[parts[1]], SCHEMES[parts[2]]
    return ColorScheme(
        first.light,
        second.light_highlight,
        first.mid,
        second.mid_highlight,
        first.dark,
        second.dark_highlight,
    )


def _resolve_scheme(scheme: Union[str, Sequence[str]]) -> ColorScheme:
    """Convert a scheme name or a sequence of six colors into a ColorScheme."""
    if isinstance(scheme, str):
        if scheme.startswith("mix-"):
            return _mixed_scheme(scheme)
        if scheme not in SCHEMES:
            raise ValidationError(
                f"Unknown color scheme '{scheme}'. Options are {sorted(SCHEMES)} "
                "or 'mix-<scheme>-<scheme>'."
            )
        return SCHEMES[scheme]

    # Custom schemes
    colors = list(scheme)
    if len(colors) != len(ColorScheme._fields):
        raise ValidationError(
            f"Custom color schemes must have exactly {len(ColorScheme._fields)} "
            f"colors. Got {len(colors)}."
        )
    if not all(isinstance(color, str) for color in colors):
        raise ValidationError("Custom color schemes must be given as strings.")
    return ColorScheme(*colors)


def color_scheme_set(scheme: Union[str, Sequence[str]] = "blue") -> ColorScheme:
    """Set the color scheme used by all subsequent plots.

    :param scheme: Name of a built-in scheme, a ``mix-<scheme>-<scheme>`` name,
        or a sequence of six colors ordered from light to dark. (Default: "blue")
    :type scheme: Union[str, Sequence[str]]

    :returns: The scheme that is now active
    :rtype: ColorScheme

    :raises ValidationError: If the scheme name is unknown or a custom scheme does
        not have six colors
    """
    global _ACTIVE_SCHEME  # pylint: disable=global-statement
    _ACTIVE_SCHEME = _resolve_scheme(scheme)
    return _ACTIVE_SCHEME


def color_scheme_get(scheme: Optional[Union[str, Sequence[str]]] = None) -> ColorScheme:
    """Get a color scheme.

    :param scheme: Scheme to look up. If None, the active scheme is returned.
    :type scheme: Optional[Union[str, Sequence[str]]]

    :returns: The requested scheme
    :rtype: ColorScheme
    """
    if scheme is None:
        return _ACTIVE_SCHEME
    return _resolve_scheme(scheme)


def get_color(levels: Union[str, Sequence[str]]) -> Union[str, list[str]]:
    """Get colors of the active scheme by shade name or short code.

    Short codes are ``l``, ``lh``, ``m``, ``mh``, ``d`` and ``dh``.

    :param levels: A single shade or a sequence of shades
    :type levels: Union[str, Sequence[str]]

    :returns: A single color if a single shade was given, a list otherwise
    :rtype: Union[str, list[str]]

    :raises ValidationError: If a shade is unknown
    """
    single = isinstance(levels, str)
    colors = []
    for level in [levels] if single else levels:
        name = _SHORT_CODES.get(level, level)
        if name not in ColorScheme._fields:
            raise ValidationError(
                f"Unknown color level '{level}'. Options are "
                f"{list(_SHORT_CODES) + list(ColorScheme._fields)}."
            )
        colors.append(getattr(_ACTIVE_SCHEME, name))

    return colors[0] if single else colors


def color_scheme_view(scheme: Optional[Union[str, Sequence[str]]] = None) -> hv.Bars:
    """Plot a swatch of a color scheme.

    :param scheme: Scheme to view. If None, the active scheme is shown.
    :type scheme: Optional[Union[str, Sequence[str]]]

    :returns: Bar chart with one bar per shade
    :rtype: hv.Bars
    """
    colors = color_scheme_get(scheme)
    swatch = pd.DataFrame({"shade": list(ColorScheme._fields), "value": 1})
    return swatch.hvplot.bar(x="shade", y="value").opts(
        color=hv.dim("shade").categorize(colors._asdict()),
        yaxis=None,
        xlabel="",
        width=600,
        height=200,
        toolbar=None,
    )
