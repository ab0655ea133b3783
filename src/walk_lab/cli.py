"""
Command-line runner for the bankroll random walk.

Usage:
    walk-lab --bank 1000 --bet 100 --win-pct 45 --steps 100 --trials 20
    walk-lab --trials 500 --seed 7 --workers 4 --format json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

from walk_lab.core.config import load_settings
from walk_lab.core.contracts import AggregateResult
from walk_lab.core.enums import OutputFormat
from walk_lab.core.exceptions import WalkLabError
from walk_lab.core.logging import setup_logging
from walk_lab.engine.aggregator import ResultAggregator
from walk_lab.engine.inputs import config_from_form
from walk_lab.reporting.summary import classify_trial, summary_dict, trials_frame, walk_status

logger = logging.getLogger(__name__)

EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="walk-lab",
        description="Monte Carlo simulation of a gambler's bankroll under fixed bets.",
    )
    # Raw strings: normalisation happens in config_from_form
    parser.add_argument("--bank", help="Initial bankroll (default from settings)")
    parser.add_argument("--bet", help="Bet size per step")
    parser.add_argument("--win-pct", help="Win probability in percent, 1-99")
    parser.add_argument("--steps", help="Maximum steps per trial, 10-1000")
    parser.add_argument("--trials", help="Number of independent trials")
    parser.add_argument(
        "--no-cap",
        action="store_true",
        help="Allow win probabilities above 50%%",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--workers", type=int, default=None, help="Process pool size")
    parser.add_argument(
        "--summary-only",
        action="store_true",
        help="Do not keep per-step trajectories",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
    )
    parser.add_argument("--config-dir", type=Path, default=None)
    parser.add_argument("--log-level", default=None)
    return parser


def render_text(result: AggregateResult, out: TextIO) -> None:
    """Write the stats grid, the primary trial and per-trial lines."""
    config = result.config
    primary = result.primary
    n = config.trial_count

    print("=" * 60, file=out)
    print(f"  Initial Bank:      ${config.initial_bankroll}", file=out)
    print(f"  Bet Size:          ${config.bet_size}", file=out)
    print(f"  Win Probability:   {config.win_probability * 100:.1f}%", file=out)
    print(f"  Simulations:       {n}", file=out)
    print(f"  Bankruptcy Rate:   {result.bankruptcy_rate * 100:.1f}%", file=out)
    print(f"  Average Profit:    ${result.average_profit:.2f}", file=out)
    print(f"  Average Steps:     {result.average_steps_taken:.1f}", file=out)
    print("=" * 60, file=out)

    print("Simulation Results" if n == 1 else "Primary Simulation", file=out)
    print(f"  Final Bankroll:    ${primary.final_bankroll}", file=out)
    print(f"  Steps Taken:       {primary.steps_taken} of {config.max_steps}", file=out)
    print(f"  Maximum Bankroll:  ${primary.max_bankroll}", file=out)
    print(f"  Minimum Bankroll:  ${primary.min_bankroll}", file=out)
    print(f"  Profit/Loss:       ${primary.profit:.2f}", file=out)
    print(f"  Status:            {walk_status(primary).value}", file=out)

    if n > 1:
        print("Individual Simulations:", file=out)
        for i, trial in enumerate(result.trials, start=1):
            print(
                f"  Simulation {i}: Final: ${trial.final_bankroll} | "
                f"Steps: {trial.steps_taken} | Max: ${trial.max_bankroll} | "
                f"{classify_trial(trial).value}",
                file=out,
            )


def render(result: AggregateResult, fmt: OutputFormat, out: TextIO) -> None:
    if fmt == OutputFormat.JSON:
        payload = summary_dict(result)
        payload["trial_records"] = json.loads(
            trials_frame(result).to_json(orient="records")
        )
        json.dump(payload, out, indent=2)
        out.write("\n")
    elif fmt == OutputFormat.CSV:
        trials_frame(result).to_csv(out, index=False)
    else:
        render_text(result, out)


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout

    try:
        settings = load_settings(args.config_dir)
        setup_logging(args.log_level or settings.log_level)

        config = config_from_form(
            initial_bankroll=args.bank,
            bet_size=args.bet,
            win_probability_pct=args.win_pct,
            max_steps=args.steps,
            trial_count=args.trials,
            cap_at_50=False if args.no_cap else None,
            keep_history=not args.summary_only,
            defaults=settings.defaults,
            limits=settings.limits,
        )
        result = ResultAggregator(seed=args.seed, max_workers=args.workers).run(config)
    except WalkLabError as exc:
        logger.error("%s", exc)
        return EXIT_INVALID

    render(result, OutputFormat(args.format), out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
