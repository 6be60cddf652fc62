"""Energy partition and expenditure closure of the childhood model.

  ρ_FFM(FFM) = 4.3·FFM + 837                        (kcal/kg)
  p(FFM, FM) = C / (C + FM),  C = 10.4·ρ_FFM/ρ_FM    (share of imbalance to FFM)
  δ(t)       = δ_min + (δ_max − δ_min) / (1 + (t/P)^h)

Reference intake is the intake that keeps an individual exactly on the
reference curves. Expenditure is the algebraic solution of the implicit
energy-balance identity (expenditure appears on both sides), so no
iteration is needed.

References:
  - Hall et al. 2013, Supplementary Appendix eqs. for EE and I_ref
  - Forbes 1987 (partition constant 10.4 kg)
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from childweight import constants
from childweight.errors import NumericDegeneracyError
from childweight.growth import eb_impact, growth_dynamic
from childweight.parameters import SexParameterSet
from childweight.reference import ReferenceCurves


# ═══════════════════════════════════════════════════════════════════════
# CLOSED-FORM SUB-MODELS
# ═══════════════════════════════════════════════════════════════════════

def ffm_energy_density(ffm: np.ndarray) -> np.ndarray:
    """ρ_FFM (kcal/kg) as a linear function of fat-free mass."""
    return constants.RHO_FFM_SLOPE * np.asarray(ffm, dtype=np.float64) \
        + constants.RHO_FFM_INTERCEPT


def partition_fraction(ffm: np.ndarray, fm: np.ndarray,
                       rho_fm: float = constants.RHO_FM) -> np.ndarray:
    """Fraction p of the energy imbalance directed to fat-free mass.

    Raises:
        NumericDegeneracyError: If C + FM is zero for any individual.
    """
    c = constants.PARTITION_FORBES * ffm_energy_density(ffm) / rho_fm
    denom = c + np.asarray(fm, dtype=np.float64)
    if np.any(denom == 0.0):
        raise NumericDegeneracyError(
            f"partition denominator C + FM is zero for individuals "
            f"{np.flatnonzero(denom == 0.0).tolist()}"
        )
    return c / denom


def delta(t: np.ndarray, deltamax: np.ndarray,
          delta_min: float = constants.DELTA_MIN,
          p_half: float = constants.P_HALF,
          hill: float = constants.HILL) -> np.ndarray:
    """Age-modulated physical activity coefficient δ(t)."""
    t = np.asarray(t, dtype=np.float64)
    return delta_min + (deltamax - delta_min) / (1.0 + (t / p_half) ** hill)


# ═══════════════════════════════════════════════════════════════════════
# ENERGY PARTITION (bound to one cohort)
# ═══════════════════════════════════════════════════════════════════════

class EnergyPartition:
    """Reference intake and expenditure for a fixed cohort.

    Args:
        params: Sex-blended coefficients of the cohort.
        reference: Reference curves of the cohort.
        rho_fm: Fat-mass energy density (kcal/kg).
        delta_min, p_half, hill: Shape of δ(t).
    """

    def __init__(self, params: SexParameterSet, reference: ReferenceCurves,
                 rho_fm: float = constants.RHO_FM,
                 delta_min: float = constants.DELTA_MIN,
                 p_half: float = constants.P_HALF,
                 hill: float = constants.HILL):
        self.params = params
        self.reference = reference
        self.rho_fm = rho_fm
        self.delta_min = delta_min
        self.p_half = p_half
        self.hill = hill

    def delta(self, t: np.ndarray) -> np.ndarray:
        return delta(t, self.params.deltamax, self.delta_min,
                     self.p_half, self.hill)

    def partition_fraction(self, ffm: np.ndarray, fm: np.ndarray) -> np.ndarray:
        return partition_fraction(ffm, fm, self.rho_fm)

    def reference_intake(self, t: np.ndarray) -> np.ndarray:
        """Intake (kcal/d) that keeps the cohort on its reference curves."""
        eb = eb_impact(t, self.params)
        ffm_ref = self.reference.ffm(t)
        fm_ref = self.reference.fm(t)
        d = self.delta(t)
        growth = growth_dynamic(t, self.params)
        p = self.partition_fraction(ffm_ref, fm_ref)
        rho_ffm = ffm_energy_density(ffm_ref)
        return (eb + self.params.K
                + (constants.BMR_FFM + d) * ffm_ref
                + (constants.BMR_FM + d) * fm_ref
                + constants.SYNTHESIS_FFM / rho_ffm * (p * eb + growth)
                + constants.SYNTHESIS_FM / self.rho_fm * ((1.0 - p) * eb - growth))

    def expenditure(self, t: np.ndarray, ffm: np.ndarray, fm: np.ndarray,
                    intake: np.ndarray,
                    intake_ref: Optional[np.ndarray] = None) -> np.ndarray:
        """Total energy expenditure (kcal/d) at state (FFM, FM) and intake.

        Args:
            t: Age (years).
            ffm, fm: Current masses (kg).
            intake: Actual intake at t (kcal/d).
            intake_ref: Precomputed reference intake at t; computed if None.
        """
        if intake_ref is None:
            intake_ref = self.reference_intake(t)
        d = self.delta(t)
        p = self.partition_fraction(ffm, fm)
        rho_ffm = ffm_energy_density(ffm)
        growth = growth_dynamic(t, self.params)

        synthesis = (constants.SYNTHESIS_FFM / rho_ffm * p
                     + constants.SYNTHESIS_FM / self.rho_fm * (1.0 - p))
        numerator = (self.params.K
                     + (constants.BMR_FFM + d) * ffm
                     + (constants.BMR_FM + d) * fm
                     + constants.THERMIC_FRACTION * (intake - intake_ref)
                     + synthesis * intake
                     + growth * (constants.SYNTHESIS_FFM / rho_ffm
                                 - constants.SYNTHESIS_FM / self.rho_fm))
        return numerator / (1.0 + synthesis)
