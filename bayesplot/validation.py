# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Validation of the data passed to the plotting functions.

Every plotting function validates its inputs before doing anything else. The
functions in this module convert array-like inputs into NumPy arrays (or a
pandas Categorical for grouping variables) and raise
:py:class:`~bayesplot.exceptions.ValidationError` as soon as an invariant is
violated:

    - ``y`` is a numeric vector of finite values
    - ``yrep`` is a numeric matrix of finite values whose number of
      columns equals ``len(y)``
    - ``group`` has one entry per observation and no missing values
    - log weights ``lw`` have exactly the shape of ``yrep``
"""

from __future__ import annotations

from typing import Collection, Optional

import numpy as np
import numpy.typing as npt
import pandas as pd

from bayesplot import custom_types
from bayesplot.exceptions import ValidationError


def _as_numeric_array(x: custom_types.ArrayInput, argname: str) -> npt.NDArray:
    """Convert an array-like to a float array, rejecting non-numeric data."""
    array = np.asarray(x)
    if array.dtype == np.bool_ or not (
        np.issubdtype(array.dtype, np.integer)
        or np.issubdtype(array.dtype, np.floating)
    ):
        raise ValidationError(f"'{argname}' must be numeric. Got dtype {array.dtype}.")
    return array.astype(float)


def _check_no_nan(array: npt.NDArray, argname: str) -> None:
    if np.isnan(array).any():
        raise ValidationError(f"NaNs not allowed in '{argname}'.")


def _check_finite(array: npt.NDArray, argname: str) -> None:
    if not np.isfinite(array).all():
        raise ValidationError(
            f"'{argname}' must be finite. NaNs and infinite values are not allowed."
        )


def validate_y(y: custom_types.ArrayInput) -> npt.NDArray[np.floating]:
    """Validate the observed data.

    :param y: Observed outcome vector. Multi-dimensional input is accepted as long
        as at most one dimension is longer than 1.
    :type y: custom_types.ArrayInput

    :returns: Flat float array of observations
    :rtype: npt.NDArray[np.floating]

    :raises ValidationError: If ``y`` is not numeric, is not a vector, is empty,
        or contains NaN
        or infinite values
    """
    y = np.atleast_1d(_as_numeric_array(y, "y"))
    if sum(dimsize > 1 for dimsize in y.shape) > 1:
        raise ValidationError(f"'y' must be a vector. Got shape {y.shape}.")
    y = y.ravel()
    if y.size == 0:
        raise ValidationError("'y' must contain at least one observation.")
    _check_finite(y, "y")

    return y


def validate_yrep(
    yrep: custom_types.ArrayInput, y: npt.NDArray[np.floating]
) -> npt.NDArray[np.floating]:
    """Validate the replicated data against already-validated observed data.

    :param yrep: Replicate matrix with one draw per row and one observation per
        column. A 1D input is treated as a single draw.
    :type yrep: custom_types.ArrayInput
    :param y: Validated observed data (see :py:func:`validate_y`)
    :type y: npt.NDArray[np.floating]

    :returns: Float array with shape (n_draws, n_observations)
    :rtype: npt.NDArray[np.floating]

    :raises ValidationError: If ``yrep`` is not a numeric matrix, contains
        non-finite values, or its number of columns differs from the length of ``y``
    """
    yrep = _as_numeric_array(yrep, "yrep")
    if yrep.ndim == 1:
        yrep = yrep[None]
    elif yrep.ndim != 2:
        raise ValidationError(f"'yrep' must be a matrix. Got {yrep.ndim} dimensions.")
    if yrep.shape[0] == 0:
        raise ValidationError("'yrep' must contain at least one draw.")
    _check_finite(yrep, "yrep")
    if yrep.shape[1] != len(y):
        raise ValidationError(
            "The number of columns of 'yrep' must be equal to the length of 'y'. "
            f"Got {yrep.shape[1]} columns and {len(y)} observations."
        )

    return yrep


def validate_group(
    group: custom_types.GroupInput, n_obs: custom_types.Integer
) -> pd.Categorical:
    """Validate a grouping variable.

    :param group: One group label per observation
    :type group: custom_types.GroupInput
    :param n_obs: Number of observations
    :type n_obs: custom_types.Integer

    :returns: Categorical grouping variable. Categorical input keeps its category
        order (unused categories are dropped); other input gets sorted categories.
    :rtype: pd.Categorical

    :raises ValidationError: If the length does not match or values are missing
    """
    if isinstance(group, (pd.Series, pd.Categorical)) and isinstance(
        group.dtype, pd.CategoricalDtype
    ):
        group = pd.Categorical(group).remove_unused_categories()
    else:
        values = np.asarray(group)
        if values.ndim != 1:
            raise ValidationError(f"'group' must be a vector. Got shape {values.shape}.")
        group = pd.Categorical(values)

    if len(group) != n_obs:
        raise ValidationError(
            f"'group' must have one entry per observation. Got {len(group)} "
            f"entries and {n_obs} observations."
        )
    if pd.isna(group).any():
        raise ValidationError("Missing values not allowed in 'group'.")

    return group


def validate_lw(
    lw: custom_types.ArrayInput, yrep: npt.NDArray[np.floating]
) -> npt.NDArray[np.floating]:
    """Validate a matrix of (smoothed) log importance weights.

    :param lw: Log weights with one row per draw and one column per observation
    :type lw: custom_types.ArrayInput
    :param yrep: Validated replicated data (see :py:func:`validate_yrep`)
    :type yrep: npt.NDArray[np.floating]

    :returns: Float array of log weights
    :rtype: npt.NDArray[np.floating]

    :raises ValidationError: If the shapes differ or weights are not finite
    """
    lw = _as_numeric_array(lw, "lw")
    if lw.shape != yrep.shape:
        raise ValidationError(
            f"'lw' must have the same shape as 'yrep'. Got {lw.shape} and {yrep.shape}."
        )
    if not np.isfinite(lw).all():
        raise ValidationError("All values of 'lw' must be finite.")

    return lw


def validate_pit(pit: custom_types.ArrayInput) -> npt.NDArray[np.floating]:
    """Validate precomputed probability integral transform values.

    :param pit: PIT values, one per observation
    :type pit: custom_types.ArrayInput

    :returns: Flat float array of PIT values
    :rtype: npt.NDArray[np.floating]

    :raises ValidationError: If the values are not a numeric vector in [0, 1]
    """
    pit = np.atleast_1d(_as_numeric_array(pit, "pit"))
    if pit.ndim != 1:
        raise ValidationError(f"'pit' must be a vector. Got shape {pit.shape}.")
    _check_no_nan(pit, "pit")
    if (pit < 0).any() or (pit > 1).any():
        raise ValidationError("'pit' values must be between 0 and 1.")

    return pit


def validate_intervals(
    intervals: custom_types.ArrayInput, n_obs: custom_types.Integer
) -> npt.NDArray[np.floating]:
    """Validate a matrix of precomputed predictive intervals.

    :param intervals: Matrix with one row per observation and three columns:
        lower bound, median, upper bound. Column names are ignored.
    :type intervals: custom_types.ArrayInput
    :param n_obs: Number of observations
    :type n_obs: custom_types.Integer

    :returns: Float array with shape (n_obs, 3)
    :rtype: npt.NDArray[np.floating]

    :raises ValidationError: If the shape is wrong or values are missing
    """
    intervals = _as_numeric_array(intervals, "intervals")
    if intervals.ndim != 2 or intervals.shape[1] != 3:
        raise ValidationError(
            f"'intervals' must be a matrix with 3 columns. Got shape {intervals.shape}."
        )
    if intervals.shape[0] != n_obs:
        raise ValidationError(
            f"'intervals' must have one row per observation. Got {intervals.shape[0]} "
            f"rows and {n_obs} observations."
        )
    _check_no_nan(intervals, "intervals")

    return intervals


def validate_prob(prob: custom_types.Numeric, argname: str = "prob") -> float:
    """Check that a probability lies strictly between 0 and 1."""
    if not 0 < prob < 1:
        raise ValidationError(f"'{argname}' must be between 0 and 1. Got {prob}.")
    return float(prob)


def validate_choice(
    value: str, options: Collection[str], argname: Optional[str] = None
) -> str:
    """Check that a string option is one of the allowed values.

    :param value: The option passed by the user
    :type value: str
    :param options: Allowed values
    :type options: Collection[str]
    :param argname: Name of the argument for the error message
    :type argname: Optional[str]

    :returns: The validated option
    :rtype: str

    :raises ValidationError: If ``value`` is not one of ``options``
    """
    if value not in options:
        raise ValidationError(
            f"'{argname or 'value'}' must be one of {list(options)}. Got '{value}'."
        )
    return value
