# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Custom type definitions for bayesplot.

This module provides type aliases and unions used in the annotations of the
plotting functions. The aliases are evaluated at runtime (the package installs
a typeguard import hook), so every name referenced here is imported eagerly.
"""

from typing import Callable, Union

import numpy as np
import pandas as pd
import xarray as xr

# Scalar types
Integer = Union[int, np.integer]
"""Type alias for integer values.

Accepts both Python's built-in int and NumPy integer types.

:type: Union[int, np.integer]
"""

Float = Union[float, np.floating]
"""Type alias for floating-point values.

Accepts both Python's built-in float and NumPy floating-point types.

:type: Union[float, np.floating]
"""

Numeric = Union[Integer, Float]
"""Type alias for any real scalar.

:type: Union[Integer, Float]
"""

# Data inputs
ArrayInput = Union[
    np.ndarray, pd.Series, pd.DataFrame, pd.Index, xr.DataArray, list, tuple
]
"""Type alias for the array-like inputs accepted by the plotting functions.

Observed data, replicated data, weights, precomputed PIT values, and
precomputed intervals can all be given in any of these containers. They are
converted to NumPy arrays during validation.

:type: Union[np.ndarray, pd.Series, pd.DataFrame, pd.Index, xr.DataArray, list, tuple]
"""

GroupInput = Union[ArrayInput, pd.Categorical]
"""Type alias for grouping variables.

:type: Union[ArrayInput, pd.Categorical]
"""

StatType = Union[str, Callable]
"""Type alias for a test statistic: a known name or a reducing function.

:type: Union[str, Callable]
"""

BandwidthType = Union[str, Numeric]
"""Type alias for a kernel density bandwidth: a rule name or a positive number.

:type: Union[str, Numeric]
"""
