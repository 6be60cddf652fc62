"""Childhood body-composition model: mass derivative and RK4 integrator.

State per individual: fat-free mass (FFM) and fat mass (FM), in kg.

  dFFM/dt = (p·(I − E) + g) / ρ_FFM
  dFM/dt  = ((1 − p)·(I − E) − g) / ρ_FM

with p the partition fraction, I the intake, E the expenditure and g the
growth term, all evaluated at age t (years). Derivatives are kg/day.

Integration is classical fixed-step RK4 over days; stage ages advance by
dt/365 years. The cohort is advanced as a whole (elementwise over N);
steps are strictly sequential.

Integrator lifecycle: NOT_STARTED → STEPPING → COMPLETE. Any failure
raises and leaves the model in NOT_STARTED for the next run.

References:
  - Hall et al. 2013 (model equations)
  - Press et al., Numerical Recipes §17.1 (RK4)
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from childweight.config import PhysicsSection, SimulationConfig
from childweight.constants import DAYS_PER_YEAR
from childweight.energy import EnergyPartition, ffm_energy_density
from childweight.errors import InvalidConfigurationError, NumericDegeneracyError
from childweight.growth import growth_dynamic
from childweight.intake import (
    GeneralizedLogisticIntake,
    IntakeModel,
    TabulatedIntake,
)
from childweight.parameters import SexParameterSet
from childweight.reference import ReferenceCurves
from childweight.types import Cohort, Trajectory
from childweight.validation import check_cohort

logger = logging.getLogger(__name__)


class IntegratorStatus(Enum):
    NOT_STARTED = "not_started"
    STEPPING = "stepping"
    COMPLETE = "complete"


def _check_dt(dt: float) -> float:
    try:
        dt = float(dt)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"dt must be a number, got {dt!r}") from None
    if not math.isfinite(dt) or dt <= 0:
        raise InvalidConfigurationError(f"dt must be positive and finite, got {dt}")
    return dt


class ChildWeightModel:
    """Energy-balance model for a cohort of children.

    Args:
        cohort: Initial state of the cohort.
        intake: Intake model (tabulated or generalised logistic).
        dt: Fixed step (days).
        check_values: Run check_cohort() on the cohort before building.
        physics: Physical constants; defaults from constants.py.
    """

    def __init__(
        self,
        cohort: Cohort,
        intake: IntakeModel,
        dt: float = 1.0,
        check_values: bool = True,
        physics: Optional[PhysicsSection] = None,
    ):
        self.dt = _check_dt(dt)
        intake.check_cohort_size(cohort.n)
        if check_values:
            check_cohort(cohort)
        if physics is None:
            physics = PhysicsSection()

        self.cohort = cohort
        self.check_values = check_values
        self.physics = physics
        self.rho_fm = physics.rho_fm
        self.params = SexParameterSet(cohort.sex)
        self.reference = ReferenceCurves(cohort.sex, cohort.category)
        self.energy = EnergyPartition(
            self.params, self.reference,
            rho_fm=physics.rho_fm,
            delta_min=physics.delta_min,
            p_half=physics.p_half,
            hill=physics.hill,
        )
        self.intake_model = intake.bind(cohort.age, self.dt)
        self.status = IntegratorStatus.NOT_STARTED

        logger.debug(
            "Built model: n=%d, intake=%s, dt=%g",
            cohort.n, self.intake_model.kind, self.dt,
        )

    # ── Alternate constructors ──────────────────────────────────────

    @classmethod
    def from_table(cls, age, sex, category, ffm, fm, intake_matrix,
                   dt: float = 1.0, check_values: bool = True,
                   physics: Optional[PhysicsSection] = None) -> 'ChildWeightModel':
        """Model with a per-individual intake table of shape (N, T)."""
        cohort = Cohort(age=age, sex=sex, category=category, ffm=ffm, fm=fm)
        return cls(cohort, TabulatedIntake(intake_matrix), dt=dt,
                   check_values=check_values, physics=physics)

    @classmethod
    def from_logistic(cls, age, sex, category, ffm, fm,
                      K: float, Q: float, A: float, B: float, nu: float, C: float,
                      dt: float = 1.0, check_values: bool = True,
                      physics: Optional[PhysicsSection] = None) -> 'ChildWeightModel':
        """Model with a generalised logistic intake curve shared by the cohort."""
        cohort = Cohort(age=age, sex=sex, category=category, ffm=ffm, fm=fm)
        intake = GeneralizedLogisticIntake(K=K, Q=Q, A=A, B=B, nu=nu, C=C)
        return cls(cohort, intake, dt=dt, check_values=check_values,
                   physics=physics)

    # ── Model equations ─────────────────────────────────────────────

    def intake(self, t: np.ndarray) -> np.ndarray:
        """Energy intake (kcal/d) at ages t."""
        return self.intake_model.intake(t)

    def intake_reference(self, t: np.ndarray) -> np.ndarray:
        """Intake (kcal/d) that keeps each individual on its reference curve."""
        return self.energy.reference_intake(t)

    def expenditure(self, t: np.ndarray, ffm: np.ndarray,
                    fm: np.ndarray) -> np.ndarray:
        """Total energy expenditure (kcal/d)."""
        return self.energy.expenditure(t, ffm, fm, self.intake(t))

    def mass_derivative(self, t: np.ndarray, ffm: np.ndarray,
                        fm: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Return (dFFM/dt, dFM/dt) in kg/day."""
        rho_ffm = ffm_energy_density(ffm)
        p = self.energy.partition_fraction(ffm, fm)
        growth = growth_dynamic(t, self.params)
        intake = self.intake(t)
        imbalance = intake - self.energy.expenditure(t, ffm, fm, intake)
        d_ffm = (p * imbalance + growth) / rho_ffm
        d_fm = ((1.0 - p) * imbalance - growth) / self.rho_fm
        return d_ffm, d_fm

    # ── Integrator ──────────────────────────────────────────────────

    def rk4_step(self, age: np.ndarray, ffm: np.ndarray,
                 fm: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Advance (FFM, FM) by one step of dt days from age `age`."""
        dt = self.dt
        half_years = 0.5 * dt / DAYS_PER_YEAR
        full_years = dt / DAYS_PER_YEAR

        k1_ffm, k1_fm = self.mass_derivative(age, ffm, fm)
        k2_ffm, k2_fm = self.mass_derivative(
            age + half_years, ffm + 0.5 * dt * k1_ffm, fm + 0.5 * dt * k1_fm)
        k3_ffm, k3_fm = self.mass_derivative(
            age + half_years, ffm + 0.5 * dt * k2_ffm, fm + 0.5 * dt * k2_fm)
        k4_ffm, k4_fm = self.mass_derivative(
            age + full_years, ffm + dt * k3_ffm, fm + dt * k3_fm)

        ffm_new = ffm + dt * (k1_ffm + 2.0 * k2_ffm + 2.0 * k3_ffm + k4_ffm) / 6.0
        fm_new = fm + dt * (k1_fm + 2.0 * k2_fm + 2.0 * k3_fm + k4_fm) / 6.0
        return ffm_new, fm_new

    def n_steps(self, days: float) -> int:
        """Number of RK4 steps taken for a horizon of `days`."""
        try:
            days = float(days)
        except (TypeError, ValueError):
            raise InvalidConfigurationError(f"days must be a number, got {days!r}") from None
        if not math.isfinite(days) or days < 0:
            raise InvalidConfigurationError(f"days must be >= 0 and finite, got {days}")
        return int(math.floor(days / self.dt))

    def run(self, days: float) -> Trajectory:
        """Integrate the cohort forward for `days` days.

        Returns:
            Trajectory with floor(days/dt) + 1 recorded steps; step 0 is the
            initial cohort state.

        Raises:
            InvalidConfigurationError: days negative or non-finite.
            IntakeIndexError: Tabulated intake has too few columns.
            NumericDegeneracyError: A state became non-finite.
        """
        nsims = self.n_steps(days)
        n = self.cohort.n

        time = np.zeros(nsims + 1, dtype=np.float64)
        age = np.zeros((nsims + 1, n), dtype=np.float64)
        ffm = np.zeros((nsims + 1, n), dtype=np.float64)
        fm = np.zeros((nsims + 1, n), dtype=np.float64)

        age[0] = self.cohort.age
        ffm[0] = self.cohort.ffm
        fm[0] = self.cohort.fm

        logger.info("Running %d step(s) of %g day(s) for %d individual(s)",
                    nsims, self.dt, n)
        self.status = IntegratorStatus.STEPPING
        try:
            with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
                for i in range(1, nsims + 1):
                    ffm[i], fm[i] = self.rk4_step(age[i - 1], ffm[i - 1], fm[i - 1])
                    if not (np.all(np.isfinite(ffm[i])) and np.all(np.isfinite(fm[i]))):
                        bad = np.flatnonzero(~(np.isfinite(ffm[i]) & np.isfinite(fm[i])))
                        raise NumericDegeneracyError(
                            f"non-finite body composition at step {i} "
                            f"for individuals {bad[:10].tolist()}"
                        )
                    time[i] = time[i - 1] + self.dt
                    age[i] = age[i - 1] + self.dt / DAYS_PER_YEAR
        except Exception:
            self.status = IntegratorStatus.NOT_STARTED
            raise
        self.status = IntegratorStatus.COMPLETE

        trajectory = Trajectory(time=time, age=age, ffm=ffm, fm=fm)
        logger.info("Finished: mean body weight %.2f → %.2f kg",
                    float(np.mean(trajectory.body_weight[0])),
                    float(np.mean(trajectory.body_weight[-1])))
        return trajectory


# ═══════════════════════════════════════════════════════════════════════
# CONFIG-DRIVEN CONSTRUCTION
# ═══════════════════════════════════════════════════════════════════════

def build_model(config: SimulationConfig, cohort: Cohort,
                intake_matrix: Optional[np.ndarray] = None) -> ChildWeightModel:
    """Build a model from a SimulationConfig.

    For intake.model == "tabulated" the table must be given as
    intake_matrix (N, T); for "logistic" the curve parameters come from
    the config and intake_matrix must be None.
    """
    ic = config.intake
    if ic.model == "tabulated":
        if intake_matrix is None:
            raise InvalidConfigurationError(
                "intake.model is 'tabulated' but no intake_matrix was given"
            )
        intake = TabulatedIntake(intake_matrix)
    elif ic.model == "logistic":
        if intake_matrix is not None:
            raise InvalidConfigurationError(
                "intake.model is 'logistic'; intake_matrix must not be given"
            )
        intake = GeneralizedLogisticIntake(
            K=ic.K, Q=ic.Q, A=ic.A, B=ic.B, nu=ic.nu, C=ic.C)
    else:
        raise InvalidConfigurationError(f"unknown intake.model '{ic.model}'")

    return ChildWeightModel(
        cohort, intake,
        dt=config.simulation.dt,
        check_values=config.simulation.check_values,
        physics=config.physics,
    )


def run_simulation(config: SimulationConfig, cohort: Cohort,
                   intake_matrix: Optional[np.ndarray] = None) -> Trajectory:
    """Build a model from config and run it for config.simulation.days."""
    model = build_model(config, cohort, intake_matrix)
    return model.run(config.simulation.days)
