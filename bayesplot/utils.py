# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Utility functions for the bayesplot package.

This module provides small helpers that support the rest of the package:

    - Lazy importing of heavy optional modules
    - Merging user styling options with package defaults

Users will not typically need to interact with this module directly--it is designed
to be used internally by bayesplot.
"""

from __future__ import annotations

import importlib.util
import sys

from typing import Any


def lazy_import(name: str):
    """Import a module only when it is first needed.

    This function implements lazy module importing to improve package import
    performance by deferring module loading until actual use.

    :param name: The fully qualified module name to import
    :type name: str

    :returns: The imported module
    :rtype: module

    :raises ImportError: If the specified module cannot be found

    Example:
        >>> # ArviZ is not loaded until the adapters are first used
        >>> inference = lazy_import('bayesplot.inference')
        >>> y, yrep, lw = inference.extract_ppc_inputs(idata, "y")[1:]

    .. note::
        If the module is already imported, returns the cached version
        from sys.modules for efficiency.
    """
    # Check if the module is already imported
    if name in sys.modules:
        return sys.modules[name]

    # If not, import it lazily (modified from here:
    # https://docs.python.org/3/library/importlib.html#implementing-lazy-imports)
    spec = importlib.util.find_spec(name)
    if spec is None:
        raise ImportError(f"Module '{name}' not found.")

    # Create the module with a lazy loader
    spec.loader = importlib.util.LazyLoader(spec.loader)
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module


def set_defaults(
    kwargs: dict[str, Any] | None, default_values: tuple[tuple[str, Any], ...]
) -> dict[str, Any]:
    """Apply default values to kwargs dictionary without overwriting existing keys.

    :param kwargs: User-provided keyword arguments (may be None)
    :type kwargs: Union[dict[str, Any], None]
    :param default_values: Tuple of (key, value) pairs for defaults
    :type default_values: tuple[tuple[str, Any], ...]

    :returns: Dictionary with defaults applied for missing keys
    :rtype: dict[str, Any]

    Example:
        >>> defaults = (('color', 'blue'), ('alpha', 0.5))
        >>> user_kwargs = {'color': 'red'}
        >>> final = set_defaults(user_kwargs, defaults)
        >>> # final == {'color': 'red', 'alpha': 0.5}
    """
    # Copy so that the caller's dictionary is never modified
    kwargs = dict(kwargs or {})
    for k, v in default_values:
        if k not in kwargs:
            kwargs[k] = v

    return kwargs
