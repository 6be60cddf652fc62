"""Tests for childweight.config — configuration loading and validation."""

from pathlib import Path

import pytest
import yaml

from childweight.config import (
    IntakeSection,
    PhysicsSection,
    SimulationConfig,
    SimulationSection,
    deep_merge,
    default_config,
    load_config,
    validate_config,
)
from childweight.constants import RHO_FM


# ── deep_merge tests ──────────────────────────────────────────────────

class TestDeepMerge:
    def test_simple_override(self):
        assert deep_merge({'a': 1, 'b': 2}, {'b': 3}) == {'a': 1, 'b': 3}

    def test_nested_merge(self):
        base = {'x': {'a': 1, 'b': 2}, 'y': 10}
        override = {'x': {'b': 3, 'c': 4}}
        assert deep_merge(base, override) == {'x': {'a': 1, 'b': 3, 'c': 4}, 'y': 10}

    def test_override_dict_with_scalar(self):
        assert deep_merge({'a': {'nested': 1}}, {'a': 'replaced'}) == {'a': 'replaced'}

    def test_empty_override(self):
        assert deep_merge({'a': 1}, {}) == {'a': 1}


# ── default_config tests ─────────────────────────────────────────────

class TestDefaultConfig:
    def test_creates_valid_config(self):
        assert isinstance(default_config(), SimulationConfig)

    def test_default_values(self):
        config = default_config()
        assert config.simulation.days == 365.0
        assert config.simulation.dt == 1.0
        assert config.simulation.check_values is True
        assert config.intake.model == "logistic"
        assert config.physics.rho_fm == RHO_FM
        assert config.physics.delta_min == 10.0
        assert config.physics.p_half == 12.0
        assert config.physics.hill == 10.0


# ── YAML loading tests ───────────────────────────────────────────────

def _write(path: Path, data) -> Path:
    with open(path, 'w') as f:
        yaml.dump(data, f)
    return path


class TestLoadConfig:
    def test_load_from_yaml(self, tmp_path):
        path = _write(tmp_path / "base.yaml",
                      {'simulation': {'days': 730, 'dt': 0.5}})
        config = load_config(path)
        assert config.simulation.days == 730
        assert config.simulation.dt == 0.5
        # Unspecified sections get defaults
        assert config.intake.model == "logistic"
        assert config.physics.rho_fm == RHO_FM

    def test_unknown_keys_ignored(self, tmp_path):
        path = _write(tmp_path / "base.yaml",
                      {'simulation': {'days': 10, 'colour': 'blue'}, 'extra': 1})
        assert load_config(path).simulation.days == 10

    def test_scenario_override(self, tmp_path):
        base = _write(tmp_path / "base.yaml",
                      {'intake': {'model': 'logistic', 'K': 2000.0, 'A': 1200.0}})
        scen = _write(tmp_path / "scenario.yaml", {'intake': {'K': 2600.0}})
        config = load_config(base, scenario_path=scen)
        assert config.intake.K == 2600.0
        assert config.intake.A == 1200.0

    def test_missing_scenario_skipped(self, tmp_path):
        base = _write(tmp_path / "base.yaml", {'simulation': {'days': 5}})
        config = load_config(base, scenario_path=tmp_path / "nope.yaml")
        assert config.simulation.days == 5

    def test_overrides_applied_last(self, tmp_path):
        base = _write(tmp_path / "base.yaml", {'simulation': {'dt': 1.0}})
        config = load_config(base, overrides={'simulation': {'dt': 7.0}})
        assert config.simulation.dt == 7.0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).simulation.dt == 1.0

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_invalid_yaml_values_rejected(self, tmp_path):
        path = _write(tmp_path / "bad.yaml", {'simulation': {'dt': -1.0}})
        with pytest.raises(ValueError, match="simulation.dt"):
            load_config(path)

    def test_load_project_default_yaml(self):
        default_path = Path(__file__).parent.parent / "configs" / "default.yaml"
        if default_path.exists():
            config = load_config(default_path)
            assert config.simulation.dt == 1.0
            assert config.intake.model == "logistic"
            assert config.physics.rho_fm == 9400.0


# ── Validation tests ──────────────────────────────────────────────────

class TestValidation:
    @pytest.mark.parametrize("dt", [0.0, -2.0, float('inf'), float('nan')])
    def test_bad_dt(self, dt):
        config = default_config()
        config.simulation.dt = dt
        with pytest.raises(ValueError, match="simulation.dt"):
            validate_config(config)

    def test_negative_days(self):
        config = default_config()
        config.simulation.days = -1
        with pytest.raises(ValueError, match="simulation.days"):
            validate_config(config)

    def test_zero_days_allowed(self):
        config = default_config()
        config.simulation.days = 0
        validate_config(config)

    def test_unknown_intake_model(self):
        config = default_config()
        config.intake.model = "classic"
        with pytest.raises(ValueError, match="intake.model"):
            validate_config(config)

    def test_logistic_nu_zero(self):
        config = default_config()
        config.intake.nu = 0.0
        with pytest.raises(ValueError, match="intake.nu"):
            validate_config(config)

    def test_tabulated_ignores_nu(self):
        config = default_config()
        config.intake.model = "tabulated"
        config.intake.nu = 0.0
        validate_config(config)

    def test_physics_positive(self):
        config = default_config()
        config.physics.rho_fm = 0.0
        with pytest.raises(ValueError, match="physics.rho_fm"):
            validate_config(config)
        config = default_config()
        config.physics.p_half = -1.0
        with pytest.raises(ValueError, match="physics.p_half"):
            validate_config(config)


# ── Section dataclass tests ───────────────────────────────────────────

class TestSections:
    def test_simulation_section_defaults(self):
        s = SimulationSection()
        assert s.days == 365.0
        assert s.dt == 1.0

    def test_intake_section_defaults(self):
        s = IntakeSection()
        assert s.model == "logistic"
        assert s.K > s.A

    def test_physics_section_defaults(self):
        assert PhysicsSection().rho_fm == 9400.0
