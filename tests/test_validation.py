"""Tests for childweight.validation — cohort sanity checks."""

import warnings

import numpy as np
import pytest

from childweight.errors import InvalidInputError
from childweight.types import Cohort
from childweight.validation import check_cohort


def _cohort(**kw):
    data = dict(age=[5.0, 9.0], sex=[0, 1], category=[2, 2],
                ffm=[15.0, 22.0], fm=[3.0, 5.0])
    data.update(kw)
    return Cohort(**data)


class TestCheckCohort:
    def test_valid_cohort_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            check_cohort(_cohort())

    def test_zero_fat_allowed(self):
        with pytest.warns(UserWarning, match="body fat fraction"):
            check_cohort(_cohort(fm=[0.0, 5.0]))

    @pytest.mark.parametrize("field,values", [
        ('age', [5.0, np.nan]),
        ('ffm', [np.inf, 22.0]),
        ('fm', [3.0, np.nan]),
    ])
    def test_non_finite(self, field, values):
        with pytest.raises(InvalidInputError, match=field):
            check_cohort(_cohort(**{field: values}))

    def test_negative_age(self):
        with pytest.raises(InvalidInputError, match="age"):
            check_cohort(_cohort(age=[-0.1, 9.0]))

    def test_zero_ffm(self):
        with pytest.raises(InvalidInputError, match="ffm"):
            check_cohort(_cohort(ffm=[0.0, 22.0]))

    def test_negative_fm(self):
        with pytest.raises(InvalidInputError, match="fm"):
            check_cohort(_cohort(fm=[-1.0, 5.0]))

    def test_age_outside_reference_warns(self):
        with pytest.warns(UserWarning, match="2 individual"):
            check_cohort(_cohort(age=[1.5, 19.0]))

    def test_age_boundaries_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            check_cohort(_cohort(age=[2.0, 18.0]))
