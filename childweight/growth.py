"""Growth kinetics: the three-term exponential/Gaussian kernel.

g(t) = A·exp(−(t − tA)/τA) + B·exp(−½((t − tB)/τB)²) + D·exp(−½((t − tD)/τD)²)

Three instantiations share the kernel with distinct coefficient sets:
  - growth dynamic:   net growth term in the mass derivative (kcal/d)
  - growth impact:    growth term of the reference trajectory
  - EB impact:        energy-balance term of the reference intake (kcal/d)

All functions are pure and elementwise over the cohort; t is age in years.

References:
  - Hall et al. 2013, Supplementary Appendix (growth and EB terms)
"""

from __future__ import annotations

import numpy as np

from childweight.parameters import SexParameterSet


def general_kernel(t: np.ndarray,
                   A: np.ndarray, B: np.ndarray, D: np.ndarray,
                   tA: np.ndarray, tB: np.ndarray, tD: np.ndarray,
                   tauA: np.ndarray, tauB: np.ndarray,
                   tauD: np.ndarray) -> np.ndarray:
    """Evaluate the three-term kernel elementwise."""
    t = np.asarray(t, dtype=np.float64)
    return (A * np.exp(-(t - tA) / tauA)
            + B * np.exp(-0.5 * ((t - tB) / tauB) ** 2)
            + D * np.exp(-0.5 * ((t - tD) / tauD) ** 2))


def growth_dynamic(t: np.ndarray, params: SexParameterSet) -> np.ndarray:
    """Growth term g(t) of the mass derivative (kcal/d)."""
    return general_kernel(t, *params.kernel_coefficients(''))


def growth_impact(t: np.ndarray, params: SexParameterSet) -> np.ndarray:
    return general_kernel(t, *params.kernel_coefficients('1'))


def eb_impact(t: np.ndarray, params: SexParameterSet) -> np.ndarray:
    """Energy-balance impact of the reference child (kcal/d)."""
    return general_kernel(t, *params.kernel_coefficients('_EB'))
