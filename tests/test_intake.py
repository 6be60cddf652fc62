"""Tests for childweight.intake — tabulated and generalised logistic intake."""

import numpy as np
import pytest

from childweight.errors import (
    IntakeIndexError,
    InvalidConfigurationError,
    InvalidInputError,
)
from childweight.intake import (
    GeneralizedLogisticIntake,
    TabulatedIntake,
    minimum_columns,
)


class TestGeneralizedLogistic:
    def test_formula(self):
        curve = GeneralizedLogisticIntake(K=2400.0, Q=2.0, A=1000.0, B=0.3, nu=0.5, C=1.0)
        t = np.array([4.0, 10.0])
        expected = 1000.0 + 1400.0 / (1.0 + 2.0 * np.exp(-0.3 * t)) ** 2.0
        np.testing.assert_allclose(curve.intake(t), expected)

    def test_q_zero_is_constant(self):
        curve = GeneralizedLogisticIntake(K=1600.0, Q=0.0, A=0.0, B=0.7, nu=1.0, C=1.0)
        t = np.linspace(2.0, 18.0, 40)
        np.testing.assert_allclose(curve.intake(t), 1600.0)

    def test_b_zero_is_constant(self):
        curve = GeneralizedLogisticIntake(K=2000.0, Q=1.0, A=1000.0, B=0.0, nu=1.0, C=1.0)
        t = np.linspace(2.0, 18.0, 40)
        np.testing.assert_allclose(curve.intake(t), 1500.0)

    def test_constant_helper(self):
        curve = GeneralizedLogisticIntake.constant(1750.0)
        np.testing.assert_allclose(curve(np.array([2.0, 9.0, 17.0])), 1750.0)

    def test_increasing_curve(self):
        curve = GeneralizedLogisticIntake(K=2800.0, Q=5.0, A=1200.0, B=0.4, nu=1.0, C=1.0)
        values = curve.intake(np.linspace(2.0, 18.0, 30))
        assert np.all(np.diff(values) > 0)
        assert values[-1] < 2800.0

    def test_nu_zero_rejected(self):
        with pytest.raises(InvalidConfigurationError, match="nu"):
            GeneralizedLogisticIntake(K=1.0, Q=1.0, A=1.0, B=1.0, nu=0.0, C=1.0)

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidConfigurationError):
            GeneralizedLogisticIntake(K=np.nan, Q=1.0, A=1.0, B=1.0, nu=1.0, C=1.0)

    def test_bind_is_identity(self):
        curve = GeneralizedLogisticIntake.constant(1500.0)
        assert curve.bind(np.array([5.0]), 1.0) is curve
        assert curve.kind == 'logistic'


class TestTabulated:
    @pytest.fixture
    def table(self) -> TabulatedIntake:
        matrix = np.vstack([1000.0 + np.arange(10.0), 2000.0 + np.arange(10.0)])
        return TabulatedIntake(matrix).bind(np.array([5.0, 5.0]), 1.0)

    def test_shape(self, table):
        assert table.matrix.shape == (2, 10)
        assert table.n_columns == 10
        assert table.kind == 'tabulated'

    def test_step_start(self, table):
        t = np.full(2, 5.0 + 3.0 / 365.0)
        np.testing.assert_array_equal(table.intake(t), [1003.0, 2003.0])

    def test_midpoint_reads_step_column(self, table):
        t = np.full(2, 5.0 + 3.5 / 365.0)
        np.testing.assert_array_equal(table.column_index(t), [3, 3])

    def test_accumulated_age_keeps_column(self, table):
        age = np.full(2, 5.0)
        for _ in range(7):
            age = age + 1.0 / 365.0
        np.testing.assert_array_equal(table.column_index(age), [7, 7])

    def test_heterogeneous_start_ages(self):
        matrix = np.vstack([np.arange(5.0), 10.0 + np.arange(5.0)])
        table = TabulatedIntake(matrix).bind(np.array([4.0, 11.0]), 1.0)
        t = np.array([4.0, 11.0]) + 2.0 / 365.0
        np.testing.assert_array_equal(table.intake(t), [2.0, 12.0])

    def test_step_size_scaling(self):
        matrix = np.arange(6.0)[None, :]
        table = TabulatedIntake(matrix).bind(np.array([6.0]), 7.0)
        t = np.array([6.0 + 21.0 / 365.0])
        assert table.intake(t)[0] == 3.0

    def test_out_of_range(self, table):
        with pytest.raises(IntakeIndexError, match="10 columns"):
            table.intake(np.full(2, 5.0 + 10.0 / 365.0))
        with pytest.raises(IndexError):
            table.intake(np.full(2, 5.0 - 1.0 / 365.0))

    def test_unbound(self):
        table = TabulatedIntake(np.ones((1, 3)))
        with pytest.raises(InvalidConfigurationError, match="bound"):
            table.intake(np.array([5.0]))

    def test_row_count_check(self, table):
        table.check_cohort_size(2)
        with pytest.raises(InvalidInputError, match="rows"):
            table.check_cohort_size(3)

    def test_matrix_read_only(self, table):
        with pytest.raises(ValueError):
            table.matrix[0, 0] = 0.0

    def test_three_dimensional_rejected(self):
        with pytest.raises(InvalidInputError):
            TabulatedIntake(np.ones((2, 2, 2)))


def test_minimum_columns():
    assert minimum_columns(365, 1.0) == 366
    assert minimum_columns(0.5, 1.0) == 1
    assert minimum_columns(30, 7.0) == 5
