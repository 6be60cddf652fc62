"""Input sanity checks, run when a model is built with check_values=True.

Hard problems (non-finite values, negative masses or ages) raise
InvalidInputError. Values that are legal but outside the range the
reference curves were built on only warn.
"""

from __future__ import annotations

import warnings

import numpy as np

from childweight.constants import REFERENCE_MAX_AGE, REFERENCE_MIN_AGE
from childweight.errors import InvalidInputError
from childweight.types import Cohort

# Body-fat fraction outside this band is unusual for children.
FAT_FRACTION_RANGE = (0.02, 0.60)


def check_cohort(cohort: Cohort) -> None:
    """Check a cohort's initial state.

    Raises:
        InvalidInputError: Non-finite entries, age < 0, FFM <= 0 or FM < 0.
    """
    for name in ('age', 'ffm', 'fm'):
        arr = getattr(cohort, name)
        if not np.all(np.isfinite(arr)):
            raise InvalidInputError(f"{name} contains non-finite values")
    if np.any(cohort.age < 0):
        raise InvalidInputError("age must be >= 0")
    if np.any(cohort.ffm <= 0):
        raise InvalidInputError("ffm must be > 0")
    if np.any(cohort.fm < 0):
        raise InvalidInputError("fm must be >= 0")

    outside = (cohort.age < REFERENCE_MIN_AGE) | (cohort.age > REFERENCE_MAX_AGE)
    if np.any(outside):
        warnings.warn(
            f"{int(outside.sum())} individual(s) start outside the "
            f"{REFERENCE_MIN_AGE}–{REFERENCE_MAX_AGE} year reference range; "
            f"reference curves are clamped there",
            UserWarning,
            stacklevel=3,
        )

    fat_fraction = cohort.fm / cohort.body_weight
    lo, hi = FAT_FRACTION_RANGE
    unusual = (fat_fraction < lo) | (fat_fraction > hi)
    if np.any(unusual):
        warnings.warn(
            f"{int(unusual.sum())} individual(s) have body fat fraction "
            f"outside [{lo}, {hi}]",
            UserWarning,
            stacklevel=3,
        )
