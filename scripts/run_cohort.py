#!/usr/bin/env python3
"""Simulate a cohort described by a CSV file and a YAML configuration.

The cohort CSV has one row per individual with columns
age, sex, category, ffm, fm (sex: 0=male, 1=female; category 1..4).
With intake.model = tabulated, --intake gives a CSV table with one row
per individual and one column per time step.

Usage:
    python scripts/run_cohort.py configs/cohort_example.csv
    python scripts/run_cohort.py cohort.csv --config configs/default.yaml --days 730
    python scripts/run_cohort.py cohort.csv --scenario tabulated.yaml --intake intake.csv
"""

import argparse
import csv
import logging
import sys
from pathlib import Path

import numpy as np

# ── Project imports ──────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from childweight.config import load_config
from childweight.model import build_model
from childweight.types import Cohort

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

COHORT_COLUMNS = ('age', 'sex', 'category', 'ffm', 'fm')


def read_cohort(path: Path) -> Cohort:
    with open(path, newline='') as f:
        rows = list(csv.DictReader(f))
    if not rows:
        raise ValueError(f"No individuals in {path}")
    missing = [c for c in COHORT_COLUMNS if c not in rows[0]]
    if missing:
        raise ValueError(f"{path} is missing column(s): {', '.join(missing)}")
    columns = {c: [float(r[c]) for r in rows] for c in COHORT_COLUMNS}
    return Cohort(**columns)


def main():
    parser = argparse.ArgumentParser(description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('cohort', type=Path, help='Cohort CSV')
    parser.add_argument('--config', type=Path,
                        default=PROJECT_ROOT / 'configs' / 'default.yaml')
    parser.add_argument('--scenario', type=Path, default=None,
                        help='Scenario YAML merged over --config')
    parser.add_argument('--intake', type=Path, default=None,
                        help='Intake table CSV (N rows x T columns)')
    parser.add_argument('--days', type=float, default=None,
                        help='Override simulation.days')
    parser.add_argument('--output', type=Path,
                        default=PROJECT_ROOT / 'results' / 'trajectory.npz')
    args = parser.parse_args()

    overrides = {'simulation': {'days': args.days}} if args.days is not None else None
    config = load_config(args.config, scenario_path=args.scenario,
                         overrides=overrides)
    cohort = read_cohort(args.cohort)
    intake_matrix = (np.loadtxt(args.intake, delimiter=',', ndmin=2)
                     if args.intake is not None else None)

    model = build_model(config, cohort, intake_matrix)
    trajectory = model.run(config.simulation.days)
    trajectory.save(args.output)

    final = trajectory.final_state
    print(f"{'#':>3} {'age':>6} {'FFM':>8} {'FM':>8} {'BW':>8}")
    for i in range(cohort.n):
        print(f"{i:>3} {final.age[i]:>6.2f} {final.ffm[i]:>8.2f} "
              f"{final.fm[i]:>8.2f} {final.body_weight[i]:>8.2f}")
    logger.info("Saved trajectory to %s", args.output)


if __name__ == '__main__':
    main()
