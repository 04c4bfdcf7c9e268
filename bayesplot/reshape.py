# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Reshaping of observed and replicated data into plotting tables.

The plotting functions work on long-format DataFrames in which every row is a
single value tagged with the observation it belongs to and the dataset (the
observed data or one of the replicates) it comes from. This module builds those
tables and the summary tables used by interval plots.

Example:
    >>> y = np.array([1.0, 2.0, 3.0])
    >>> yrep = np.array([[1.1, 2.2, 2.9], [0.8, 1.9, 3.3]])
    >>> ppc_data(y, yrep).head()
       y_id  rep_id  rep_label   is_y is_y_label  value
    0     1       1  y_rep (1)  False      y_rep    1.1
    1     1       2  y_rep (2)  False      y_rep    0.8
    ...
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import numpy.typing as npt
import pandas as pd

from bayesplot import custom_types, defaults, validation
from bayesplot.exceptions import ValidationError


def rep_labels(n_draws: custom_types.Integer) -> list[str]:
    """Labels of the replicated datasets, numbered from 1."""
    return [f"{defaults.YREP_LABEL} ({i})" for i in range(1, n_draws + 1)]


def melt_yrep(yrep: npt.NDArray[np.floating]) -> pd.DataFrame:
    """Convert a replicate matrix to long format.

    :param yrep: Validated replicate matrix with shape (n_draws, n_observations)
    :type yrep: npt.NDArray[np.floating]

    :returns: DataFrame with columns ``y_id``, ``rep_id``, ``rep_label`` and
        ``value``. Ids are 1-based and the draw index varies fastest.
    :rtype: pd.DataFrame
    """
    n_draws, n_obs = yrep.shape
    labels = rep_labels(n_draws)
    rep_id = np.tile(np.arange(1, n_draws + 1), n_obs)

    return pd.DataFrame(
        {
            "y_id": np.repeat(np.arange(1, n_obs + 1), n_draws),
            "rep_id": pd.array(rep_id, dtype="Int64"),
            "rep_label": pd.Categorical.from_codes(rep_id - 1, categories=labels),
            "value": yrep.ravel(order="F"),
        }
    )


def melt_and_stack(
    y: npt.NDArray[np.floating], yrep: npt.NDArray[np.floating]
) -> pd.DataFrame:
    """Stack the observed data underneath the molten replicates.

    :param y: Validated observed data
    :type y: npt.NDArray[np.floating]
    :param yrep: Validated replicate matrix
    :type yrep: npt.NDArray[np.floating]

    :returns: DataFrame with columns ``y_id``, ``rep_id``, ``rep_label``, ``is_y``,
        ``is_y_label`` and ``value``. ``rep_label`` is an ordered categorical whose
        first level is the observed-data label; ``rep_id`` is missing for the rows
        holding the observed data.
    :rtype: pd.DataFrame
    """
    molten_reps = melt_yrep(yrep)
    y_df = pd.DataFrame(
        {
            "y_id": np.arange(1, len(y) + 1),
            "rep_id": pd.array([pd.NA] * len(y), dtype="Int64"),
            "rep_label": defaults.Y_LABEL,
            "value": y,
        }
    )

    # Concatenate as strings, then restore the label ordering with y first
    labels = [defaults.Y_LABEL] + rep_labels(yrep.shape[0])
    molten_reps["rep_label"] = molten_reps["rep_label"].astype(str)
    data = pd.concat([molten_reps, y_df], ignore_index=True)
    data["rep_label"] = pd.Categorical(data["rep_label"], categories=labels, ordered=True)
    data["is_y"] = data["rep_id"].isna().to_numpy()
    data["is_y_label"] = pd.Categorical(
        np.where(data["is_y"], defaults.Y_LABEL, defaults.YREP_LABEL),
        categories=[defaults.Y_LABEL, defaults.YREP_LABEL],
        ordered=True,
    )

    return data[["y_id", "rep_id", "rep_label", "is_y", "is_y_label", "value"]]


def ppc_data(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    group: Optional[custom_types.GroupInput] = None,
) -> pd.DataFrame:
    """Get the long-format data behind the PPC distribution plots.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N)
    :type yrep: custom_types.ArrayInput
    :param group: Optional grouping variable of length N (Default: None)
    :type group: Optional[custom_types.GroupInput]

    :returns: DataFrame built by :py:func:`melt_and_stack`. If ``group`` is given,
        a categorical ``group`` column is joined on ``y_id`` and placed first.
    :rtype: pd.DataFrame

    :raises ValidationError: If any input fails validation

    Example:
        >>> data = ppc_data(y, yrep[:5], group=group)
        >>> data.groupby(["rep_label", "group"], observed=True)["value"].mean()
    """
    y = validation.validate_y(y)
    yrep = validation.validate_yrep(yrep, y)
    data = melt_and_stack(y, yrep)

    if group is not None:
        group = validation.validate_group(group, len(y))
        group_indices = pd.DataFrame({"group": group, "y_id": np.arange(1, len(y) + 1)})
        data = data.merge(group_indices, on="y_id", how="left", sort=False)
        data = data[["group"] + [col for col in data.columns if col != "group"]]

    return data


def central_probs(prob: custom_types.Numeric) -> tuple[float, float, float]:
    """Lower, median and upper probabilities of a central interval."""
    prob = validation.validate_prob(prob)
    alpha = (1 - prob) / 2
    return (alpha, 0.5, 1 - alpha)


def intervals_data(
    y: npt.NDArray[np.floating],
    x: npt.NDArray,
    intervals: npt.NDArray[np.floating],
) -> pd.DataFrame:
    """Build the table behind interval and ribbon plots.

    :param y: Validated observed data
    :type y: npt.NDArray[np.floating]
    :param x: Position of each observation on the x-axis
    :type x: npt.NDArray
    :param intervals: Matrix with columns lower bound, median, upper bound
    :type intervals: npt.NDArray[np.floating]

    :returns: DataFrame with columns ``y_id``, ``y_obs``, ``x``, ``lo``, ``mid``
        and ``hi``
    :rtype: pd.DataFrame

    :raises ValidationError: If the inputs do not have one entry per observation
    """
    if not len(y) == len(x) == len(intervals):
        raise ValidationError(
            "'y', 'x', and 'intervals' must have the same length. Got "
            f"{len(y)}, {len(x)}, and {len(intervals)}."
        )

    return pd.DataFrame(
        {
            "y_id": np.arange(1, len(y) + 1),
            "y_obs": y,
            "x": x,
            "lo": intervals[:, 0],
            "mid": intervals[:, 1],
            "hi": intervals[:, 2],
        }
    )


def ppc_intervals_data(
    y: custom_types.ArrayInput,
    yrep: custom_types.ArrayInput,
    x: Optional[custom_types.ArrayInput] = None,
    group: Optional[custom_types.GroupInput] = None,
    prob: custom_types.Numeric = defaults.DEFAULT_PROB,
) -> pd.DataFrame:
    """Get the data behind the central predictive interval plots.

    :param y: Observed outcome vector of length N
    :type y: custom_types.ArrayInput
    :param yrep: Replicate matrix with shape (S, N)
    :type yrep: custom_types.ArrayInput
    :param x: Optional numeric x-axis position of each observation. Defaults to
        the 1-based observation index.
    :type x: Optional[custom_types.ArrayInput]
    :param group: Optional grouping variable of length N (Default: None)
    :type group: Optional[custom_types.GroupInput]
    :param prob: Probability mass of the central interval (Default: 0.9)
    :type prob: custom_types.Numeric

    :returns: DataFrame built by :py:func:`intervals_data`, with a leading
        ``group`` column if ``group`` is given
    :rtype: pd.DataFrame
    """
    y = validation.validate_y(y)
    yrep = validation.validate_yrep(yrep, y)
    x = validate_x(x, y)
    intervals = np.quantile(yrep, central_probs(prob), axis=0).T
    data = intervals_data(y, x, intervals)

    if group is not None:
        data.insert(0, "group", validation.validate_group(group, len(y)))

    return data


def validate_x(
    x: Optional[custom_types.ArrayInput], y: npt.NDArray[np.floating]
) -> npt.NDArray[np.floating]:
    """Validate x-axis positions, defaulting to the observation index."""
    if x is None:
        return np.arange(1, len(y) + 1, dtype=float)

    x = np.asarray(x)
    if not (np.issubdtype(x.dtype, np.integer) or np.issubdtype(x.dtype, np.floating)):
        raise ValidationError(f"'x' must be numeric. Got dtype {x.dtype}.")
    x = x.astype(float).ravel()
    if np.isnan(x).any():
        raise ValidationError("NaNs not allowed in 'x'.")
    if len(x) != len(y):
        raise ValidationError(
            f"'x' must have the same length as 'y'. Got {len(x)} and {len(y)}."
        )
    return x
