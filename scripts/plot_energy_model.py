#!/usr/bin/env python3
"""Plot the average-power surfaces and print reference operating points.

Usage:
    uv run scripts/plot_energy_model.py [--output DIR]
"""

import argparse
from pathlib import Path

from pass_learner.energy.model import power
from pass_learner.evaluation.sweep import REFERENCE_OPERATING_POINTS
from pass_learner.evaluation.visualization import plot_power_surfaces, save_figure


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Modem energy model plots")
    parser.add_argument("--output", type=str, default="results",
                        help="Output directory (default: results)")
    parser.add_argument("--eps", type=float, default=0.5,
                        help="Listening fraction for operating points (default: 0.5)")
    parser.add_argument("--pass-minutes", type=float, default=25.0,
                        help="Pass duration for operating points (default: 25)")
    return parser.parse_args()


def main():
    args = parse_args()

    path = save_figure(plot_power_surfaces(), Path(args.output) / "avg_power.png")
    print(f"Saved {path}")

    print(f"\n{'Model':<14} {'Hours':>6} {'P(success)':>11} {'Power (mW)':>11}")
    print("-" * 45)
    for model, hours, p_success in REFERENCE_OPERATING_POINTS:
        watts = power(1 / (hours * 3600), p_success, args.eps, args.pass_minutes * 60)
        print(f"{model.name:<14} {hours:>6.2f} {p_success:>11.2f} {watts * 1e3:>11.3f}")


if __name__ == "__main__":
    main()
