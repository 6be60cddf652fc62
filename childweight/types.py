"""Core data types for childweight.

This module is the SINGLE SOURCE OF TRUTH for:
  - Sex and BodyCompositionCategory enumerations
  - Cohort: per-individual initial state arrays (struct-of-arrays)
  - TrajectoryState / Trajectory: simulation output

All arrays in a Cohort or Trajectory share the cohort dimension N.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Dict, Union

import numpy as np

from childweight.constants import MODEL_TYPE
from childweight.errors import InvalidInputError


# ═══════════════════════════════════════════════════════════════════════
# ENUMERATIONS
# ═══════════════════════════════════════════════════════════════════════

class Sex(IntEnum):
    """Sex indicator used as the blending weight of the coefficient table."""
    MALE   = 0
    FEMALE = 1


class BodyCompositionCategory(IntEnum):
    """BMI category selecting the reference body-composition column."""
    UNDERWEIGHT = 1
    NORMAL      = 2
    OVERWEIGHT  = 3
    OBESE       = 4


# ═══════════════════════════════════════════════════════════════════════
# COHORT
# ═══════════════════════════════════════════════════════════════════════

def _as_vector(name: str, values, dtype=np.float64) -> np.ndarray:
    arr = np.array(values, dtype=dtype, ndmin=1)
    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {arr.shape}")
    return arr


def _check_codes(name: str, values: np.ndarray, enum_cls) -> np.ndarray:
    valid = np.array([m.value for m in enum_cls], dtype=np.float64)
    bad = ~np.isin(values, valid)
    if np.any(bad):
        raise InvalidInputError(
            f"{name} must be one of {sorted(int(v) for v in valid)}, "
            f"got {values[bad][:5].tolist()}"
        )
    return values.astype(np.int8)


@dataclass(frozen=True)
class Cohort:
    """Initial state of N individuals sharing one simulation clock.

    Attributes:
        age: Age in years, shape (N,).
        sex: Sex codes (0=male, 1=female), shape (N,) int8.
        category: BMI category codes (1..4), shape (N,) int8.
        ffm: Initial fat-free mass (kg), shape (N,).
        fm: Initial fat mass (kg), shape (N,).

    Arrays are copied and flagged read-only on construction.
    """
    age: np.ndarray
    sex: np.ndarray
    category: np.ndarray
    ffm: np.ndarray
    fm: np.ndarray

    def __post_init__(self):
        age = _as_vector('age', self.age)
        sex = _check_codes('sex', _as_vector('sex', self.sex), Sex)
        category = _check_codes(
            'category', _as_vector('category', self.category),
            BodyCompositionCategory,
        )
        ffm = _as_vector('ffm', self.ffm)
        fm = _as_vector('fm', self.fm)

        n = len(age)
        for name, arr in (('sex', sex), ('category', category),
                          ('ffm', ffm), ('fm', fm)):
            if len(arr) != n:
                raise InvalidInputError(
                    f"{name} has {len(arr)} entries, expected {n} (len(age))"
                )

        for name, arr in (('age', age), ('sex', sex), ('category', category),
                          ('ffm', ffm), ('fm', fm)):
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    @property
    def n(self) -> int:
        """Number of individuals."""
        return len(self.age)

    @property
    def body_weight(self) -> np.ndarray:
        return self.ffm + self.fm


# ═══════════════════════════════════════════════════════════════════════
# TRAJECTORY
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class TrajectoryState:
    """Cohort state at one recorded step."""
    elapsed_days: float
    age: np.ndarray
    ffm: np.ndarray
    fm: np.ndarray

    @property
    def body_weight(self) -> np.ndarray:
        return self.ffm + self.fm


@dataclass
class Trajectory:
    """Full simulation output.

    Shapes: time (n_steps,); age, ffm, fm, body_weight (n_steps, N).
    body_weight is always ffm + fm.
    """
    time: np.ndarray
    age: np.ndarray
    ffm: np.ndarray
    fm: np.ndarray
    correct_values: bool = True
    model_type: str = MODEL_TYPE

    @property
    def body_weight(self) -> np.ndarray:
        return self.ffm + self.fm

    @property
    def n_steps(self) -> int:
        return len(self.time)

    @property
    def n_individuals(self) -> int:
        return self.ffm.shape[1]

    def state(self, i: int) -> TrajectoryState:
        """Snapshot at step index i (negative indices allowed)."""
        return TrajectoryState(
            elapsed_days=float(self.time[i]),
            age=self.age[i].copy(),
            ffm=self.ffm[i].copy(),
            fm=self.fm[i].copy(),
        )

    @property
    def final_state(self) -> TrajectoryState:
        return self.state(-1)

    def to_dict(self) -> Dict[str, object]:
        """Plain dict of all outputs, body weight included."""
        return {
            'time': self.time,
            'age': self.age,
            'fat_free_mass': self.ffm,
            'fat_mass': self.fm,
            'body_weight': self.body_weight,
            'correct_values': self.correct_values,
            'model_type': self.model_type,
        }

    def save(self, path: Union[str, Path]) -> None:
        """Save to a compressed .npz file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        np.savez_compressed(
            path,
            time=self.time,
            age=self.age,
            ffm=self.ffm,
            fm=self.fm,
            correct_values=np.array(self.correct_values),
            model_type=np.array(self.model_type),
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'Trajectory':
        """Load a trajectory written by save()."""
        with np.load(path) as data:
            return cls(
                time=data['time'],
                age=data['age'],
                ffm=data['ffm'],
                fm=data['fm'],
                correct_values=bool(data['correct_values']),
                model_type=str(data['model_type']),
            )
