from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Callable

from becker_irr.classifier import validate_rate
from becker_irr.errors import DerivativeVanished, DomainViolation, NonConvergent

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 100
DEFAULT_DERIVATIVE_TOL = 1e-12


@dataclass(frozen=True)
class SolverConfig:
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    derivative_tol: float = DEFAULT_DERIVATIVE_TOL

    def __post_init__(self):
        bound = self.max_iterations
        if isinstance(bound, bool) or not isinstance(bound, numbers.Integral) or bound <= 0:
            raise ValueError("max_iterations must be a positive integer.")
        if not self.derivative_tol >= 0.0:
            raise ValueError("derivative_tol must be non-negative.")


@dataclass(frozen=True)
class SolverResult:
    rate: float
    root: float
    iterations: int
    residual: float
    decimals: int
    method: str = "newton"


def validate_decimals(decimals: int) -> int:
    if isinstance(decimals, bool) or int(decimals) != decimals:
        raise ValueError("decimals must be an integer.")
    decimals = int(decimals)
    if decimals < 0:
        raise ValueError("decimals must be non-negative.")
    return decimals


def round_half_away(x: float, decimals: int) -> float:
    """
    Round x to `decimals` places, ties away from zero.

    Works on the exact binary value of x, so 2.675 (stored as 2.67499...)
    rounds down to 2.67 while 0.125 rounds up to 0.13.
    """
    quantum = Decimal(1).scaleb(-decimals)
    # Enough digits for any finite double at any requested scale.
    context = Context(prec=decimals + 340)
    return float(Decimal(x).quantize(quantum, rounding=ROUND_HALF_UP, context=context))


def newton_solve(
    f: Callable[[float], float],
    fprime: Callable[[float], float],
    initial_guess: float,
    decimals: int,
    config: SolverConfig | None = None,
) -> SolverResult:
    """
    Newton-Raphson iteration on f, starting from initial_guess.

    Converges when two consecutive iterates agree once rounded to `decimals`
    places. The comparison is the only place rounding happens: `root` keeps the
    full-precision last iterate and `rate` is its rounded value.

    Raises
    ------
    DomainViolation
        initial_guess <= -1, or an iterate with 1 + r <= 0.
    DerivativeVanished
        |f'(r)| fell below config.derivative_tol.
    NonConvergent
        The iterate became non-finite or config.max_iterations steps were spent.
    """
    config = config or SolverConfig()
    decimals = validate_decimals(decimals)
    rate = validate_rate(initial_guess, "initial_guess")

    for iteration in range(1, config.max_iterations + 1):
        value = f(rate)
        slope = fprime(rate)
        if not abs(slope) >= config.derivative_tol:
            raise DerivativeVanished(
                f"|f'(r)| = {abs(slope):.3e} below {config.derivative_tol:.1e} at r = {rate!r}."
            )

        rate_next = rate - value / slope
        LOGGER.debug("newton step %d: r=%r f=%r f'=%r -> %r", iteration, rate, value, slope, rate_next)

        if not math.isfinite(rate_next):
            raise NonConvergent(f"iterate diverged after {iteration} steps.")
        if 1.0 + rate_next <= 0.0:
            raise DomainViolation(f"iterate {rate_next!r} leaves the domain 1 + r > 0.")

        if round_half_away(rate_next, decimals) == round_half_away(rate, decimals):
            return SolverResult(
                rate=round_half_away(rate_next, decimals),
                root=rate_next,
                iterations=iteration,
                residual=float(f(rate_next)),
                decimals=decimals,
            )
        rate = rate_next

    raise NonConvergent(
        f"no agreement to {decimals} decimals within {config.max_iterations} iterations."
    )
