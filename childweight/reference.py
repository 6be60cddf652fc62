"""Reference body-composition curves by age, sex and BMI category.

Each curve is a 17-row table (ages 2..18). For an individual the row
values are the sex blend male*(1 − sex) + female*sex taken from the
individual's BMI-category column. Lookup rules:

  age ≥ 18:  row 16 (flat, no extrapolation)
  age < 18:  j = max(floor(age), 2) − 2,  j_hi = min(j + 1, 16)
             value = row[j] + (age − floor(age)) · (row[j_hi] − row[j])

References:
  - Ellis et al. 2000; Fomon et al. 1982; Haschke 1989
"""

from __future__ import annotations

import numpy as np

from childweight.constants import (
    FFM_REFERENCE_FEMALE,
    FFM_REFERENCE_MALE,
    FM_REFERENCE_FEMALE,
    FM_REFERENCE_MALE,
    N_REFERENCE_ROWS,
    REFERENCE_MAX_AGE,
    REFERENCE_MIN_AGE,
)


def cohort_table(male_table: np.ndarray, female_table: np.ndarray,
                 sex: np.ndarray, category: np.ndarray) -> np.ndarray:
    """Select and sex-blend one column per individual.

    Args:
        male_table, female_table: (17, 4) tables, columns = category 1..4.
        sex: (N,) sex weights in [0, 1].
        category: (N,) category codes 1..4.

    Returns:
        (17, N) table; column i is individual i's reference curve.
    """
    sex = np.asarray(sex, dtype=np.float64)
    col = np.asarray(category, dtype=np.intp) - 1
    return male_table[:, col] * (1.0 - sex) + female_table[:, col] * sex


def interpolate_reference(table: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Piecewise-linear lookup of a (17, N) table at ages t (N,)."""
    t = np.asarray(t, dtype=np.float64)
    n = table.shape[1]
    cols = np.arange(n)

    floor_t = np.floor(t)
    j = np.maximum(floor_t, REFERENCE_MIN_AGE).astype(np.intp) - REFERENCE_MIN_AGE
    j = np.minimum(j, N_REFERENCE_ROWS - 1)
    j_hi = np.minimum(j + 1, N_REFERENCE_ROWS - 1)
    frac = t - floor_t

    low = table[j, cols]
    value = low + frac * (table[j_hi, cols] - low)
    return np.where(t >= REFERENCE_MAX_AGE, table[N_REFERENCE_ROWS - 1, cols], value)


class ReferenceCurves:
    """Reference FFM and FM curves for a fixed cohort assignment."""

    def __init__(self, sex: np.ndarray, category: np.ndarray):
        self.ffm_table = cohort_table(FFM_REFERENCE_MALE, FFM_REFERENCE_FEMALE,
                                      sex, category)
        self.fm_table = cohort_table(FM_REFERENCE_MALE, FM_REFERENCE_FEMALE,
                                     sex, category)
        self.ffm_table.setflags(write=False)
        self.fm_table.setflags(write=False)

    def ffm(self, t: np.ndarray) -> np.ndarray:
        """Reference fat-free mass (kg) at ages t."""
        return interpolate_reference(self.ffm_table, t)

    def fm(self, t: np.ndarray) -> np.ndarray:
        """Reference fat mass (kg) at ages t."""
        return interpolate_reference(self.fm_table, t)
