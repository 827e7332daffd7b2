from __future__ import annotations

import logging

import numpy as np
from scipy.optimize import brentq

from becker_irr.classifier import classify_cashflows, validate_rate
from becker_irr.errors import DomainViolation, NonConvergent
from becker_irr.solver import SolverConfig, SolverResult, round_half_away, validate_decimals

LOGGER = logging.getLogger(__name__)

DEFAULT_BRACKET_ITERATIONS = 50
DEFAULT_INIT_INCREMENT = 0.05


def _roll_balance(values: np.ndarray, external_rate: float, rate: float) -> float:
    balance = float(values[0])
    owed_growth = 1.0 + rate
    held_growth = 1.0 + external_rate
    for flow in values[1:]:
        balance = balance * (owed_growth if balance < 0.0 else held_growth) + float(flow)
    return balance


def outstanding_balance(cashflows, external_rate: float, rate: float) -> float:
    """
    Terminal outstanding balance of a cash-flow series.

    The balance starts at the first flow and is rolled forward one period at a
    time: while it is negative (capital still owed to the investor) it grows at
    `rate`, while it is positive it grows at `external_rate`. The Becker IRR is
    the rate that brings the terminal balance to zero.
    """
    values = np.asarray(cashflows, dtype=float)
    if values.ndim != 1:
        raise ValueError("cashflows must be a 1D sequence.")
    external_rate = validate_rate(external_rate, "external_rate")
    rate = validate_rate(rate, "rate")
    if values.size == 0:
        return 0.0
    return _roll_balance(values, external_rate, rate)


def _find_bracket(balance, guess: float, start: float, config: SolverConfig) -> tuple[float, int]:
    # A negative balance shrinks towards zero as the rate falls, a positive one as it rises.
    direction = -1.0 if start < 0.0 else 1.0
    step = DEFAULT_INIT_INCREMENT
    trial = guess
    current = start

    for iteration in range(1, config.max_iterations + 1):
        trial += direction * step
        if 1.0 + trial <= 0.0:
            raise DomainViolation(f"bracket search reached {trial!r}, outside 1 + r > 0.")
        value = balance(trial)
        LOGGER.debug("bracket step %d: r=%r balance=%r", iteration, trial, value)
        if value * direction <= 0.0:
            return trial, iteration
        if abs(value) > abs(current):
            step *= 2.0
        current = value

    raise NonConvergent(f"no sign change found within {config.max_iterations} bracket steps.")


def balance_irr(
    cashflows,
    external_rate: float,
    initial_guess: float,
    decimals: int,
    config: SolverConfig | None = None,
) -> SolverResult:
    """
    Becker IRR as the zero of the terminal outstanding balance.

    Walks away from initial_guess until the balance changes sign, then refines
    the bracket with Brent's method to within 10**-decimals.
    """
    flows = classify_cashflows(cashflows)
    external_rate = validate_rate(external_rate, "external_rate")
    guess = validate_rate(initial_guess, "initial_guess")
    decimals = validate_decimals(decimals)
    config = config or SolverConfig(max_iterations=DEFAULT_BRACKET_ITERATIONS)
    tol = max(10.0**-decimals, np.finfo(float).tiny)

    def balance(rate: float) -> float:
        return _roll_balance(flows.values, external_rate, rate)

    start = balance(guess)
    if abs(start) < tol:
        return SolverResult(
            rate=round_half_away(guess, decimals),
            root=guess,
            iterations=0,
            residual=start,
            decimals=decimals,
            method="balance",
        )

    bound, bracket_steps = _find_bracket(balance, guess, start, config)
    lo, hi = min(guess, bound), max(guess, bound)

    root, info = brentq(
        balance,
        lo,
        hi,
        xtol=tol,
        maxiter=config.max_iterations,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        raise NonConvergent(f"Brent refinement on [{lo!r}, {hi!r}] did not converge: {info.flag}.")

    root = float(root)
    LOGGER.debug("balance irr %r after %d bracket and %d Brent steps", root, bracket_steps, info.iterations)
    return SolverResult(
        rate=round_half_away(root, decimals),
        root=root,
        iterations=bracket_steps + int(info.iterations),
        residual=balance(root),
        decimals=decimals,
        method="balance",
    )
