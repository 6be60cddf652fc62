"""Energy intake models.

Exactly one intake model is attached to a simulation:

  - TabulatedIntake: per-individual, per-time-step intake matrix of shape
    (N, T). At age t the column read for individual i is
        floor(365 · (t_i − age0_i) / dt)
    i.e. elapsed days since the start of the run in units of dt. RK4
    midpoint stages read the column of the step they start from; the last
    stage of step k reads column k, so an n-step run needs T ≥ n + 1.

  - GeneralizedLogisticIntake: Richards curve in age (years), shared by the
    cohort,
        I(t) = A + (K − A) / (C + Q·exp(−B·t))^(1/ν)

Both are resolved once when the model is built (bind()); afterwards the
model only calls intake(t).
"""

from __future__ import annotations

import dataclasses
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from childweight.constants import DAYS_PER_YEAR
from childweight.errors import (
    IntakeIndexError,
    InvalidConfigurationError,
    InvalidInputError,
)

# Elapsed-step values are rounded before floor() so that accumulated
# age drift (t = age0 + k·dt/365 summed k times) cannot drop a column.
_INDEX_DECIMALS = 9


def minimum_columns(days: float, dt: float) -> int:
    """Number of tabulated intake columns a run of `days` reads."""
    return int(math.floor(days / dt)) + 1


class IntakeModel(ABC):
    """Intake source: intake(t) returns kcal/d per individual."""

    kind: str = ''

    def bind(self, start_age: np.ndarray, dt: float) -> 'IntakeModel':
        """Attach the cohort's start ages and step size. Default: no-op."""
        return self

    def check_cohort_size(self, n: int) -> None:
        """Raise InvalidInputError if this model cannot serve n individuals."""

    @abstractmethod
    def intake(self, t: np.ndarray) -> np.ndarray:
        ...

    def __call__(self, t: np.ndarray) -> np.ndarray:
        return self.intake(t)


@dataclass(frozen=True)
class GeneralizedLogisticIntake(IntakeModel):
    """Generalised logistic (Richards) intake curve, t in years.

    With Q = 0 or B = 0 the curve is the constant A + (K − A)/(C + Q)^(1/ν).
    """
    K: float
    Q: float
    A: float
    B: float
    nu: float
    C: float
    kind = 'logistic'

    def __post_init__(self):
        values = (self.K, self.Q, self.A, self.B, self.nu, self.C)
        if not all(np.isfinite(v) for v in values):
            raise InvalidConfigurationError(
                f"generalized logistic parameters must be finite, got "
                f"K={self.K}, Q={self.Q}, A={self.A}, B={self.B}, "
                f"nu={self.nu}, C={self.C}"
            )
        if self.nu == 0:
            raise InvalidConfigurationError("generalized logistic nu must be non-zero")

    @classmethod
    def constant(cls, kcal: float) -> 'GeneralizedLogisticIntake':
        """Curve that evaluates to `kcal` at every age."""
        return cls(K=kcal, Q=0.0, A=kcal, B=0.0, nu=1.0, C=1.0)

    def intake(self, t: np.ndarray) -> np.ndarray:
        t = np.asarray(t, dtype=np.float64)
        base = self.C + self.Q * np.exp(-self.B * t)
        return self.A + (self.K - self.A) / base ** (1.0 / self.nu)


@dataclass(frozen=True, eq=False)
class TabulatedIntake(IntakeModel):
    """Intake table of shape (N, T): row = individual, column = time step.

    Attributes:
        matrix: (N, T) intake in kcal/d.
        start_age: (N,) ages at step 0; set by bind().
        dt: Step size in days; set by bind().
    """
    matrix: np.ndarray
    start_age: Optional[np.ndarray] = None
    dt: Optional[float] = None
    kind = 'tabulated'

    def __post_init__(self):
        matrix = np.array(self.matrix, dtype=np.float64, ndmin=2)
        if matrix.ndim != 2:
            raise InvalidInputError(
                f"intake matrix must be 2-D (N, T), got shape {matrix.shape}"
            )
        matrix.setflags(write=False)
        object.__setattr__(self, 'matrix', matrix)

    @property
    def n_columns(self) -> int:
        return self.matrix.shape[1]

    def check_cohort_size(self, n: int) -> None:
        if self.matrix.shape[0] != n:
            raise InvalidInputError(
                f"intake matrix has {self.matrix.shape[0]} rows, "
                f"expected one per individual ({n})"
            )

    def bind(self, start_age: np.ndarray, dt: float) -> 'TabulatedIntake':
        start_age = np.array(start_age, dtype=np.float64)
        start_age.setflags(write=False)
        return dataclasses.replace(self, start_age=start_age, dt=float(dt))

    def column_index(self, t: np.ndarray) -> np.ndarray:
        """Column read by each individual at ages t."""
        if self.start_age is None or self.dt is None:
            raise InvalidConfigurationError(
                "tabulated intake must be bound to a cohort before use"
            )
        t = np.asarray(t, dtype=np.float64)
        steps = np.round(DAYS_PER_YEAR * (t - self.start_age) / self.dt,
                         _INDEX_DECIMALS)
        return np.floor(steps).astype(np.intp)

    def intake(self, t: np.ndarray) -> np.ndarray:
        idx = self.column_index(t)
        bad = (idx < 0) | (idx >= self.n_columns)
        if np.any(bad):
            raise IntakeIndexError(
                f"intake column {idx[bad][0]} requested but the table has "
                f"{self.n_columns} columns (0..{self.n_columns - 1})"
            )
        return self.matrix[np.arange(self.matrix.shape[0]), idx]
