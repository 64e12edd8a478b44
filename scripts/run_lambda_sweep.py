#!/usr/bin/env python3
"""Simulate learning transmitters and plot discount-factor tradeoffs.

Usage:
    # Learning curves for lambda in {0.9, 0.95, 0.99} against the baseline
    uv run scripts/run_lambda_sweep.py compare --model 1 --noise BUCKET

    # Full lambda sweep with settled success rate, time to TX and modem power
    uv run scripts/run_lambda_sweep.py sweep --model 2 --noise BUCKET

    # Quick smoke run
    uv run scripts/run_lambda_sweep.py sweep --quick --output results/smoke
"""

import argparse
import logging
import time
from pathlib import Path

import numpy as np

from pass_learner.environment.passes import NoiseMode
from pass_learner.environment.preference import PreferenceModel
from pass_learner.evaluation.sweep import (
    COMPARISON_DISCOUNTS,
    LambdaSweepConfig,
    compare_discounts,
    run_lambda_sweep,
)
from pass_learner.evaluation.visualization import (
    plot_lambda_tradeoffs,
    plot_learning_curves,
    save_figure,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Discount-factor experiments")
    parser.add_argument("command", choices=["compare", "sweep"],
                        help="compare: learning curves; sweep: lambda tradeoffs")
    parser.add_argument("--model", type=str, default="2",
                        help="Preference model number or name (default: 2)")
    parser.add_argument("--noise", type=str, default="BUCKET",
                        choices=[m.value for m in NoiseMode],
                        help="Noise generation mode (default: BUCKET)")
    parser.add_argument("--transmitters", type=int, default=100,
                        help="Transmitters per run (default: 100)")
    parser.add_argument("--epochs", type=int, default=5000,
                        help="Epochs per run (default: 5000)")
    parser.add_argument("--window", type=int, default=1000,
                        help="Moving-average window (default: 1000)")
    parser.add_argument("--workers", type=int, default=1,
                        help="Worker processes per run (default: 1)")
    parser.add_argument("--seed", type=int, default=42,
                        help="Base random seed (default: 42)")
    parser.add_argument("--quick", action="store_true",
                        help="Small fleet, few epochs, coarse lambda grid")
    parser.add_argument("--output", type=str, default="results",
                        help="Output directory (default: results)")
    parser.add_argument("--verbose", action="store_true",
                        help="Log per-run progress")
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = LambdaSweepConfig(
        preference=PreferenceModel.from_value(args.model),
        noise_mode=args.noise,
        n_transmitters=10 if args.quick else args.transmitters,
        n_epochs=500 if args.quick else args.epochs,
        window=100 if args.quick else args.window,
        base_seed=args.seed,
        n_workers=args.workers,
        show_progress=args.verbose,
    )
    output_dir = Path(args.output)
    tag = f"{config.noise_mode.value.lower()}_noise_model{int(config.preference)}"

    print(f"Preference model: {config.preference.name} | noise: {config.noise_mode.value}")
    print(f"Fleet: {config.n_transmitters} transmitters x {config.n_epochs} epochs")
    start = time.time()

    if args.command == "compare":
        comparison = compare_discounts(config, COMPARISON_DISCOUNTS)
        path = save_figure(plot_learning_curves(comparison), output_dir / f"{tag}.png")

        print(f"\n{'Policy':<14} {'Final success':>14} {'IQM':>7} {'95% CI':>15} {'Final time (h)':>15}")
        print("-" * 69)
        for row in comparison.summary_rows():
            ci = f"[{row['success_ci_low']:.3f}, {row['success_ci_high']:.3f}]"
            t = "-" if np.isnan(row["stable_time_to_tx"]) else f"{row['stable_time_to_tx']:.2f}"
            print(
                f"{row['policy']:<14} {row['stable_success_rate']:>14.3f} "
                f"{row['success_iqm']:>7.3f} {ci:>15} {t:>15}"
            )
    else:
        discounts = np.linspace(0.0, 1.0, 11) if args.quick else None
        result = run_lambda_sweep(config, discounts=discounts)
        path = save_figure(plot_lambda_tradeoffs(result), output_dir / f"lambda_tradeoffs_{tag}.png")

        print(f"\n{'λ':>6} {'Success':>8} {'Time (h)':>9} {'Power (mW)':>11}")
        print("-" * 37)
        for row in result.as_rows():
            print(
                f"{row['discount']:>6.3f} {row['success_rate']:>8.3f} "
                f"{row['time_to_tx_hours']:>9.2f} {row['power_w'] * 1e3:>11.3f}"
            )
        print(f"\nBaseline success rate: {result.baseline_success_rate:.3f}")
        print(f"Best λ by success rate: {result.best_discount():g}")

    print(f"\nSaved {path} ({time.time() - start:.1f}s)")


if __name__ == "__main__":
    main()
