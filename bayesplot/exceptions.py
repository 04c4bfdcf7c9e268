"""Custom exception classes for the bayesplot package.

All custom exceptions inherit from the base BayesPlotError class to allow for
unified exception handling when needed.
"""


class BayesPlotError(Exception):
    """Base class for all exceptions in the bayesplot package.

    Example:
        >>> try:
        ...     bp.ppc_hist(y, yrep)
        ... except BayesPlotError as e:
        ...     print(f"bayesplot error occurred: {e}")
    """


class ValidationError(BayesPlotError, ValueError):
    """Raised when plotting inputs fail validation.

    This exception is raised when the observed data, replicated data, grouping
    variable, weights, or any of the plotting options are not valid for the
    requested plot: mismatched dimensions, missing values, non-numeric data,
    or unknown option strings.

    It also derives from ``ValueError`` so that generic handlers keep working.

    :param message: Error message describing why the input is invalid
    :type message: str
    """
