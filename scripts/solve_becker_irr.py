#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from becker_irr.balance import balance_irr
from becker_irr.cashflow_io import parse_flows, read_cashflows_csv
from becker_irr.core import solve_becker_irr
from becker_irr.errors import BeckerIRRError
from becker_irr.solver import SolverConfig

LOGGER = logging.getLogger("solve_becker_irr")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solve the Becker generalized IRR of periodic cash flows.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--flows", help='Comma-separated cash flows; use --flows=-100,20,110 when the first is negative.')
    source.add_argument("--csv", type=Path, help="CSV file with one cash flow per row.")
    parser.add_argument("--column", default=None, help="CSV column holding the flows (default: last).")
    parser.add_argument("--external-rate", type=float, required=True, help="Known external rate.")
    parser.add_argument("--guess", type=float, default=0.1, help="Initial rate guess (default: 0.1).")
    parser.add_argument("--decimals", type=int, default=6, help="Decimal places of agreement (default: 6).")
    parser.add_argument("--max-iterations", type=int, default=None, help="Iteration bound.")
    parser.add_argument(
        "--method",
        choices=("newton", "balance"),
        default="newton",
        help="newton: terminal-value equation; balance: outstanding-balance bracketing.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        cashflows = read_cashflows_csv(args.csv, args.column) if args.csv else parse_flows(args.flows)
        config = SolverConfig(max_iterations=args.max_iterations) if args.max_iterations is not None else None
        if args.method == "balance":
            result = balance_irr(cashflows, args.external_rate, args.guess, args.decimals, config=config)
        else:
            result = solve_becker_irr(cashflows, args.external_rate, args.guess, args.decimals, config=config)
    except (BeckerIRRError, ValueError) as exc:
        LOGGER.error("%s: %s", type(exc).__name__, exc)
        print(json.dumps({"error": type(exc).__name__, "message": str(exc)}))
        return 1

    print(json.dumps(asdict(result), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
