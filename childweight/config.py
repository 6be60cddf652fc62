"""Configuration system for childweight.

Hierarchical YAML configuration with deep-merge support:
  base.yaml → scenario override → programmatic overrides

Sections map 1:1 to YAML top-level keys:
  simulation:  horizon, step size, input checking
  intake:      intake model selection and Richards-curve parameters
  physics:     fixed physical constants (defaults from constants.py)
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from childweight import constants


# ═══════════════════════════════════════════════════════════════════════
# CONFIGURATION DATACLASSES
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class SimulationSection:
    """Simulation horizon and control."""
    days: float = 365.0          # Horizon (days)
    dt: float = 1.0              # Fixed RK4 step (days)
    check_values: bool = True    # Run cohort sanity checks before simulating


@dataclass
class IntakeSection:
    """Energy intake model.

    model: "logistic"  — generalised logistic curve with K, Q, A, B, nu, C
           "tabulated" — per-individual table supplied at build time
    """
    model: str = "logistic"
    K: float = 2000.0            # Upper asymptote (kcal/d)
    Q: float = 1.0
    A: float = 1200.0            # Lower asymptote (kcal/d)
    B: float = 0.5               # Growth rate (yr⁻¹)
    nu: float = 1.0
    C: float = 1.0


@dataclass
class PhysicsSection:
    """Physical constants of the energy-balance model."""
    rho_fm: float = constants.RHO_FM          # Fat-mass energy density (kcal/kg)
    delta_min: float = constants.DELTA_MIN    # Adult activity coefficient (kcal/kg/d)
    p_half: float = constants.P_HALF          # δ(t) half-transition age (yr)
    hill: float = constants.HILL              # δ(t) Hill exponent


@dataclass
class SimulationConfig:
    """Complete simulation configuration.

    Load from YAML via `load_config()`.
    """
    simulation: SimulationSection = field(default_factory=SimulationSection)
    intake: IntakeSection = field(default_factory=IntakeSection)
    physics: PhysicsSection = field(default_factory=PhysicsSection)


# ═══════════════════════════════════════════════════════════════════════
# YAML LOADING & MERGING
# ═══════════════════════════════════════════════════════════════════════

def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into base. Modifies base in place.

    - Dict values are merged recursively
    - Non-dict values are replaced
    - Keys in override but not base are added

    Returns:
        The merged base dictionary.
    """
    for key, value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _dict_to_section(section_cls, data: Dict) -> Any:
    """Convert a dict to a dataclass, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(section_cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return section_cls(**filtered)


_SECTION_MAP = {
    'simulation': SimulationSection,
    'intake': IntakeSection,
    'physics': PhysicsSection,
}


def _yaml_to_config(data: Dict) -> SimulationConfig:
    """Convert a merged YAML dict to a SimulationConfig."""
    sections = {}
    for key, cls in _SECTION_MAP.items():
        if key in data and isinstance(data[key], dict):
            sections[key] = _dict_to_section(cls, data[key])
        else:
            sections[key] = cls()
    return SimulationConfig(**sections)


def validate_config(config: SimulationConfig) -> None:
    """Validate configuration constraints. Raises ValueError on failure."""
    sim = config.simulation
    if not math.isfinite(sim.dt) or sim.dt <= 0:
        raise ValueError(f"simulation.dt must be a positive number, got {sim.dt}")
    if not math.isfinite(sim.days) or sim.days < 0:
        raise ValueError(f"simulation.days must be >= 0, got {sim.days}")

    valid_models = {"logistic", "tabulated"}
    if config.intake.model not in valid_models:
        raise ValueError(
            f"intake.model must be one of {valid_models}, "
            f"got '{config.intake.model}'"
        )
    if config.intake.model == "logistic" and config.intake.nu == 0:
        raise ValueError("intake.nu must be non-zero for the logistic model")

    phys = config.physics
    if phys.rho_fm <= 0:
        raise ValueError(f"physics.rho_fm must be positive, got {phys.rho_fm}")
    if phys.p_half <= 0:
        raise ValueError(f"physics.p_half must be positive, got {phys.p_half}")


def load_config(
    base_path: Union[str, Path],
    scenario_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict] = None,
) -> SimulationConfig:
    """Load and merge hierarchical YAML configuration.

    Merge order: base → scenario → overrides.

    Raises:
        FileNotFoundError: If base_path doesn't exist.
        ValueError: If validation fails.
    """
    base_path = Path(base_path)
    if not base_path.exists():
        raise FileNotFoundError(f"Config file not found: {base_path}")

    with open(base_path) as f:
        config_dict = yaml.safe_load(f) or {}

    if scenario_path is not None:
        scenario_path = Path(scenario_path)
        if scenario_path.exists():
            with open(scenario_path) as f:
                scenario = yaml.safe_load(f) or {}
            deep_merge(config_dict, scenario)

    if overrides is not None:
        deep_merge(config_dict, overrides)

    config = _yaml_to_config(config_dict)
    validate_config(config)
    return config


def default_config() -> SimulationConfig:
    """Return a SimulationConfig with all default values."""
    config = SimulationConfig()
    validate_config(config)
    return config
