"""childweight: Body-composition dynamics for children and adolescents.

Forward simulation of fat-free mass, fat mass and body weight for a
cohort of children using the mechanistic energy-balance model of
Hall et al. (2013), integrated with fixed-step RK4:
  - Reference body-composition curves by age, sex and BMI category
  - Growth and energy-balance kinetics (sum-of-exponentials kernels)
  - Energy partition between fat-free and fat mass
  - Tabulated or generalised-logistic energy intake
"""

from childweight.config import SimulationConfig, default_config, load_config
from childweight.errors import (
    ChildWeightError,
    IntakeIndexError,
    InvalidConfigurationError,
    InvalidInputError,
    NumericDegeneracyError,
)
from childweight.intake import GeneralizedLogisticIntake, TabulatedIntake
from childweight.model import ChildWeightModel, build_model, run_simulation
from childweight.types import BodyCompositionCategory, Cohort, Sex, Trajectory

__version__ = "0.1.0"

__all__ = [
    'BodyCompositionCategory',
    'ChildWeightError',
    'ChildWeightModel',
    'Cohort',
    'GeneralizedLogisticIntake',
    'IntakeIndexError',
    'InvalidConfigurationError',
    'InvalidInputError',
    'NumericDegeneracyError',
    'Sex',
    'SimulationConfig',
    'TabulatedIntake',
    'Trajectory',
    'build_model',
    'default_config',
    'load_config',
    'run_simulation',
]
