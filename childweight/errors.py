"""Exception hierarchy for childweight.

Each error also derives from the matching builtin so callers that only
know about ValueError / IndexError / ArithmeticError still catch it.
"""


class ChildWeightError(Exception):
    """Base class for all childweight errors."""


class InvalidInputError(ChildWeightError, ValueError):
    """Cohort arrays are malformed or carry an unknown sex/category code."""


class InvalidConfigurationError(ChildWeightError, ValueError):
    """Simulation settings cannot produce a trajectory (e.g. dt <= 0)."""


class NumericDegeneracyError(ChildWeightError, ArithmeticError):
    """A model quantity became singular or non-finite."""


class IntakeIndexError(ChildWeightError, IndexError):
    """Tabulated intake was read outside the columns it provides."""
