"""Shared fixtures for childweight tests."""

import numpy as np
import pytest

from childweight.intake import GeneralizedLogisticIntake
from childweight.model import ChildWeightModel
from childweight.types import BodyCompositionCategory, Cohort, Sex


@pytest.fixture
def boy() -> Cohort:
    """Single 5-year-old boy of normal weight."""
    return Cohort(
        age=[5.0],
        sex=[Sex.MALE],
        category=[BodyCompositionCategory.NORMAL],
        ffm=[15.0],
        fm=[3.0],
    )


@pytest.fixture
def pair() -> Cohort:
    """Boy and girl with identical inputs apart from sex."""
    return Cohort(
        age=[5.0, 5.0],
        sex=[Sex.MALE, Sex.FEMALE],
        category=[BodyCompositionCategory.NORMAL] * 2,
        ffm=[15.0, 15.0],
        fm=[3.0, 3.0],
    )


@pytest.fixture
def constant_1600() -> GeneralizedLogisticIntake:
    return GeneralizedLogisticIntake(K=1600.0, Q=0.0, A=0.0, B=1.0, nu=1.0, C=1.0)


@pytest.fixture
def boy_model(boy, constant_1600) -> ChildWeightModel:
    return ChildWeightModel(boy, constant_1600, dt=1.0)
