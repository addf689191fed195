"""Command-line interface for swap quotes and fuzz runs."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from amm_fuzz.core.errors import InvalidQuoteParameters
from amm_fuzz.core.quote import price_impact, quote
from amm_fuzz.harness.boundary import ExecutionBoundary, LeoExecutionBoundary, SimulatedPoolBoundary
from amm_fuzz.harness.config import FuzzSettings, InvalidSettings, resolve_settings
from amm_fuzz.harness.runner import FuzzRunner


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _build_settings(args: argparse.Namespace) -> FuzzSettings:
    """Environment settings with any explicit CLI flags applied on top."""
    settings = resolve_settings()
    return settings.with_overrides(
        iterations=args.iterations,
        slippage_bps=args.slippage_bps,
        fee_bps=args.fee_bps,
        base_reserve_in=args.base_reserve_in,
        base_reserve_out=args.base_reserve_out,
        perturb_percent=args.perturb_percent,
        trade_divisor=args.trade_divisor,
        token_id=args.token_id,
        program_dir=args.program_dir,
        seed=args.seed,
    )


def _build_boundary(args: argparse.Namespace, settings: FuzzSettings) -> ExecutionBoundary:
    if args.simulate:
        return SimulatedPoolBoundary(fee_bps=settings.fee_bps)
    return LeoExecutionBoundary(
        program_dir=Path(settings.program_dir),
        token_id=settings.token_id,
        function=args.function,
    )


def run_fuzz_command(args: argparse.Namespace) -> int:
    """Run the fuzz harness and print its JSON report."""
    _configure_logging(args.verbose)
    try:
        settings = _build_settings(args)
    except InvalidSettings as e:
        print(f"Error: {e}")
        return 1

    boundary = _build_boundary(args, settings)
    report = FuzzRunner(boundary, settings).run()
    print(json.dumps(report.to_dict(), indent=2))

    return 0 if report.summary.clean else 1


def quote_command(args: argparse.Namespace) -> int:
    """Print a single swap preview."""
    try:
        preview = quote(
            args.amount_in,
            args.reserve_in,
            args.reserve_out,
            fee_bps=args.fee_bps,
            slippage_bps=args.slippage_bps,
        )
        impact = price_impact(args.amount_in, args.reserve_in, args.reserve_out)
    except InvalidQuoteParameters as e:
        print(f"Error: {e}")
        return 1

    print(f"Amount in:     {preview.amount_in}")
    print(f"Fee ({preview.fee_bps} bps): {preview.fee_amount}")
    print(f"Expected out:  {preview.expected_out}")
    print(f"Minimum out:   {preview.min_out} ({preview.slippage_bps} bps slippage)")
    print(f"Price impact:  {impact:.4f}%")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Constant product swap quotes and fuzz harness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  amm-fuzz quote 1000000 50000000 5000000000 --fee-bps 30 --slippage-bps 10
  amm-fuzz run --simulate --iterations 100 --seed 7
  FUZZ_ITERATIONS=50 amm-fuzz run --program-dir ./program
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser(
        "run", help="Fuzz swaps against an execution boundary (defaults from FUZZ_* env vars)"
    )
    run_parser.add_argument("--iterations", type=int, default=None, help="Iterations to attempt")
    run_parser.add_argument("--slippage-bps", type=int, default=None, help="Slippage tolerance in bps")
    run_parser.add_argument("--fee-bps", type=int, default=None, help="Pool fee in bps")
    run_parser.add_argument(
        "--base-reserve-in", type=int, default=None, help="Baseline input-side reserve"
    )
    run_parser.add_argument(
        "--base-reserve-out", type=int, default=None, help="Baseline output-side reserve"
    )
    run_parser.add_argument(
        "--perturb-percent",
        type=int,
        default=None,
        help="Max jitter applied to each baseline reserve, in percent",
    )
    run_parser.add_argument(
        "--trade-divisor",
        type=int,
        default=None,
        help="Cap each trade at reserve_in // N",
    )
    run_parser.add_argument("--token-id", default=None, help="Token identifier passed to the program")
    run_parser.add_argument("--program-dir", default=None, help="Directory of the Leo program")
    run_parser.add_argument(
        "--function",
        default=LeoExecutionBoundary.DEFAULT_FUNCTION,
        help="Program transition to execute",
    )
    run_parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    run_parser.add_argument(
        "--simulate",
        action="store_true",
        help="Use the in-process pool simulator instead of invoking leo",
    )
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Log every iteration")
    run_parser.set_defaults(func=run_fuzz_command)

    # Quote command
    quote_parser = subparsers.add_parser("quote", help="Preview a single swap")
    quote_parser.add_argument("amount_in", type=int, help="Input amount (smallest units)")
    quote_parser.add_argument("reserve_in", type=int, help="Input-side reserve")
    quote_parser.add_argument("reserve_out", type=int, help="Output-side reserve")
    quote_parser.add_argument("--fee-bps", type=int, default=30, help="Pool fee in bps")
    quote_parser.add_argument("--slippage-bps", type=int, default=10, help="Slippage tolerance in bps")
    quote_parser.set_defaults(func=quote_command)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
