"""Fixed scientific parameters of the childhood energy-balance model.

This module is the SINGLE SOURCE OF TRUTH for:
  - Physical constants (fat-mass energy density, delta sigmoid shape)
  - Male/female coefficient pairs blended into the SexParameterSet
  - Reference fat-free mass and fat mass tables (ages 2–18)

References:
  - Hall KD, Butte NF, Swinburn BA, Chow CC (2013). Dynamics of childhood
    growth and obesity. Lancet Diabetes Endocrinol 1(2):97–105.
  - Ellis et al. (2000); Fomon et al. (1982); Haschke (1989): reference
    body composition by age.
  - Deurenberg et al. (1991): BMI-based body fat fractions.
"""

import numpy as np


# ═══════════════════════════════════════════════════════════════════════
# PHYSICAL CONSTANTS
# ═══════════════════════════════════════════════════════════════════════

DAYS_PER_YEAR = 365.0

RHO_FM = 9400.0       # Fat mass energy density (kcal/kg)
DELTA_MIN = 10.0      # Asymptotic physical activity coefficient (kcal/kg/d)
P_HALF = 12.0         # Age at half-transition of delta(t) (years)
HILL = 10.0           # Hill exponent of delta(t)

# Fat-free mass energy density: rho_FFM = a*FFM + b (kcal/kg)
RHO_FFM_SLOPE = 4.3
RHO_FFM_INTERCEPT = 837.0

# Partition constant C = PARTITION_FORBES * rho_FFM / rho_FM
PARTITION_FORBES = 10.4

# Expenditure terms
BMR_FFM = 22.4        # kcal/kg/d per kg FFM
BMR_FM = 4.5          # kcal/kg/d per kg FM
THERMIC_FRACTION = 0.24
SYNTHESIS_FFM = 230.0  # Tissue deposition cost, FFM (kcal/kg)
SYNTHESIS_FM = 180.0   # Tissue deposition cost, FM (kcal/kg)

MODEL_TYPE = "Children"


# ═══════════════════════════════════════════════════════════════════════
# SEX-SPECIFIC COEFFICIENTS — (male, female)
# ═══════════════════════════════════════════════════════════════════════

# Blended per individual as male*(1 - sex) + female*sex (sex: 0=male, 1=female).
# Times (t*) and time constants (tau*) are in years.
SEX_COEFFICIENTS = {
    # Energy expenditure
    'K':        (800.0, 700.0),
    'deltamax': (19.0, 17.0),

    # Growth dynamic g(t)
    'A':        (3.2, 2.3),
    'B':        (9.6, 8.4),
    'D':        (10.1, 1.1),
    'tA':       (4.7, 4.5),
    'tB':       (12.5, 11.7),
    'tD':       (15.0, 16.2),
    'tauA':     (2.5, 1.0),
    'tauB':     (1.0, 0.9),
    'tauD':     (1.5, 0.7),

    # Energy-balance impact
    'A_EB':     (7.2, 16.5),
    'B_EB':     (30.0, 47.0),
    'D_EB':     (21.0, 41.0),
    'tA_EB':    (5.6, 4.8),
    'tB_EB':    (9.8, 9.1),
    'tD_EB':    (15.0, 13.5),
    'tauA_EB':  (15.0, 7.0),
    'tauB_EB':  (1.5, 1.0),
    'tauD_EB':  (2.0, 1.5),

    # Growth impact
    'A1':       (3.2, 2.3),
    'B1':       (9.6, 8.4),
    'D1':       (10.0, 1.1),
    'tA1':      (4.7, 4.5),
    'tB1':      (12.5, 11.7),
    'tD1':      (15.0, 16.0),
    'tauA1':    (1.0, 1.0),
    'tauB1':    (0.94, 0.94),
    'tauD1':    (0.69, 0.69),
}


# ═══════════════════════════════════════════════════════════════════════
# REFERENCE BODY COMPOSITION (kg) — rows: age 2..18, cols: category 1..4
# ═══════════════════════════════════════════════════════════════════════

REFERENCE_MIN_AGE = 2
REFERENCE_MAX_AGE = 18
N_REFERENCE_ROWS = REFERENCE_MAX_AGE - REFERENCE_MIN_AGE + 1  # 17

# Columns: underweight, normal, overweight, obese
FFM_REFERENCE_MALE = np.array([
    [10.134, 10.134, 10.134, 10.134],   # 2
    [12.099, 12.099, 12.099, 12.099],   # 3
    [14.0,   14.0,   14.0,   14.0],     # 4
    [13.54,  14.85,  16.21,  18.37],    # 5
    [15.68,  16.09,  17.97,  21.24],    # 6
    [18.85,  17.84,  20.14,  24.47],    # 7
    [19.08,  19.98,  23.46,  28.09],    # 8
    [20.23,  22.49,  25.96,  30.82],    # 9
    [20.37,  24.89,  29.20,  34.86],    # 10
    [21.89,  26.92,  32.76,  37.89],    # 11
    [25.60,  29.91,  37.16,  43.62],    # 12
    [30.52,  34.82,  43.11,  47.03],    # 13
    [31.05,  39.96,  45.87,  52.54],    # 14
    [36.28,  43.25,  49.94,  55.78],    # 15
    [41.04,  45.41,  53.66,  59.45],    # 16
    [44.75,  47.55,  55.59,  61.07],    # 17
    [41.59,  48.67,  56.70,  62.52],    # 18
], dtype=np.float64)

FFM_REFERENCE_FEMALE = np.array([
    [9.477,  9.477,  9.477,  9.477],    # 2
    [11.494, 11.494, 11.494, 11.494],   # 3
    [13.2,   13.2,   13.2,   13.2],     # 4
    [12.45,  13.78,  15.71,  18.81],    # 5
    [12.69,  14.95,  17.54,  20.16],    # 6
    [14.42,  17.13,  20.15,  23.31],    # 7
    [15.98,  18.51,  22.86,  26.66],    # 8
    [19.52,  20.97,  25.51,  30.43],    # 9
    [20.12,  24.04,  28.86,  32.19],    # 10
    [25.15,  27.03,  34.25,  38.15],    # 11
    [26.63,  30.50,  36.51,  42.63],    # 12
    [26.47,  34.59,  40.20,  45.31],    # 13
    [29.63,  36.49,  41.33,  46.58],    # 14
    [37.05,  38.77,  42.44,  47.64],    # 15
    [34.60,  38.45,  44.30,  49.83],    # 16
    [36.61,  39.81,  44.43,  48.59],    # 17
    [36.38,  41.01,  46.73,  49.89],    # 18
], dtype=np.float64)

FM_REFERENCE_MALE = np.array([
    [2.456, 2.456, 2.456, 2.456],       # 2
    [2.576, 2.576, 2.576, 2.576],       # 3
    [2.7,   2.7,   2.7,   2.7],         # 4
    [2.05,  3.10,  4.13,  5.60],        # 5
    [2.13,  3.23,  4.43,  6.91],        # 6
    [2.36,  3.49,  5.08,  8.05],        # 7
    [2.49,  3.85,  5.75,  9.80],        # 8
    [2.49,  4.25,  6.41,  10.41],       # 9
    [2.58,  4.50,  7.64,  13.15],       # 10
    [2.90,  4.89,  8.92,  14.56],       # 11
    [2.80,  5.52,  10.43, 18.72],       # 12
    [3.65,  6.86,  12.58, 21.70],       # 13
    [3.09,  7.72,  14.07, 23.93],       # 14
    [4.33,  8.71,  16.44, 26.63],       # 15
    [4.86,  9.22,  17.43, 28.70],       # 16
    [5.29,  10.04, 18.74, 29.78],       # 17
    [4.65,  10.05, 18.89, 34.51],       # 18
], dtype=np.float64)

FM_REFERENCE_FEMALE = np.array([
    [2.433, 2.433, 2.433, 2.433],       # 2
    [2.606, 2.606, 2.606, 2.606],       # 3
    [2.8,   2.8,   2.8,   2.8],         # 4
    [2.33,  3.72,  5.19,  7.58],        # 5
    [2.33,  3.80,  5.67,  8.27],        # 6
    [2.38,  4.20,  6.50,  9.60],        # 7
    [2.61,  4.41,  7.35,  11.61],       # 8
    [3.36,  5.00,  8.39,  14.26],       # 9
    [3.28,  5.69,  9.61,  15.76],       # 10
    [4.16,  6.44,  12.13, 19.70],       # 11
    [4.45,  7.57,  13.45, 21.80],       # 12
    [3.63,  9.41,  15.76, 25.10],       # 13
    [5.11,  10.38, 16.88, 29.30],       # 14
    [5.79,  11.07, 17.06, 28.89],       # 15
    [5.32,  10.74, 18.07, 30.17],       # 16
    [5.68,  10.78, 17.86, 30.29],       # 17
    [6.74,  11.19, 19.14, 29.10],       # 18
], dtype=np.float64)
