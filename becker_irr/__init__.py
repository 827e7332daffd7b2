"""Becker generalized internal rate of return for periodic cash flows."""

from becker_irr.balance import balance_irr, outstanding_balance
from becker_irr.classifier import ClassifiedFlows, classify_cashflows
from becker_irr.core import becker_irr, solve_becker_irr
from becker_irr.equation import BeckerEquation, build_residual, residual_curve
from becker_irr.errors import (
    BeckerIRRError,
    DegenerateSeries,
    DerivativeVanished,
    DomainViolation,
    NonConvergent,
)
from becker_irr.solver import SolverConfig, SolverResult, newton_solve, round_half_away

__all__ = [
    "BeckerEquation",
    "BeckerIRRError",
    "ClassifiedFlows",
    "DegenerateSeries",
    "DerivativeVanished",
    "DomainViolation",
    "NonConvergent",
    "SolverConfig",
    "SolverResult",
    "balance_irr",
    "becker_irr",
    "build_residual",
    "classify_cashflows",
    "newton_solve",
    "outstanding_balance",
    "residual_curve",
    "round_half_away",
    "solve_becker_irr",
]
