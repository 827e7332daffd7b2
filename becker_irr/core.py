from __future__ import annotations

import logging

from becker_irr.classifier import classify_cashflows, validate_rate
from becker_irr.equation import build_residual
from becker_irr.solver import DEFAULT_MAX_ITERATIONS, SolverConfig, SolverResult, newton_solve

LOGGER = logging.getLogger(__name__)


def solve_becker_irr(
    cashflows,
    external_rate: float,
    initial_guess: float,
    decimals: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    config: SolverConfig | None = None,
) -> SolverResult:
    """
    Solve the Becker generalized IRR of a periodic cash-flow series.

    Parameters
    ----------
    cashflows:
        One signed flow per period; negative values commit capital, positive
        values return it. Needs at least one of each.
    external_rate:
        Known rate at which outflows are compounded to the terminal period.
    initial_guess:
        Starting rate for the Newton iteration.
    decimals:
        Consecutive iterates must agree to this many decimal places.
    max_iterations:
        Iteration bound, ignored when an explicit config is passed.

    Returns
    -------
    SolverResult
        `rate` is the solved rate rounded to `decimals`; `root` keeps full precision.
    """
    flows = classify_cashflows(cashflows)
    external_rate = validate_rate(external_rate, "external_rate")
    validate_rate(initial_guess, "initial_guess")
    config = config or SolverConfig(max_iterations=max_iterations)

    equation = build_residual(flows, external_rate)
    result = newton_solve(equation, equation.derivative, initial_guess, decimals, config)
    LOGGER.debug(
        "becker irr %r after %d iterations (%d periods, residual %.3e)",
        result.rate,
        result.iterations,
        flows.n_periods,
        result.residual,
    )
    return result


def becker_irr(
    cashflows,
    external_rate: float,
    initial_guess: float,
    decimals: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """
    Becker generalized IRR rounded to `decimals` places.

    See solve_becker_irr for the parameters and the raised errors.
    """
    return solve_becker_irr(
        cashflows,
        external_rate,
        initial_guess,
        decimals,
        max_iterations=max_iterations,
    ).rate
