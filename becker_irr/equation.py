from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from becker_irr.classifier import ClassifiedFlows, classify_cashflows, validate_rate
from becker_irr.errors import DomainViolation


@dataclass(frozen=True)
class BeckerEquation:
    """
    Residual of the Becker balancing equation as a function of the trial rate r.

    Every flow is carried to the terminal period T = N - 1:

        f(r) = sum_inflow CF_i (1 + r)^(T - i) - sum_outflow |CF_j| (1 + e)^(T - j)

    The outflow side only depends on the external rate e, so it is computed
    once when the equation is built.
    """

    inflow_amounts: np.ndarray
    inflow_exponents: np.ndarray
    outflow_value: float
    external_rate: float

    def _base(self, rate: float) -> float:
        base = 1.0 + float(rate)
        if base <= 0.0:
            raise DomainViolation("trial rate must be greater than -1.")
        return base

    def inflow_value(self, rate: float) -> float:
        base = self._base(rate)
        # Far trial rates overflow to inf; the solver reports that as NonConvergent.
        with np.errstate(over="ignore"):
            return float(np.sum(self.inflow_amounts * np.power(base, self.inflow_exponents)))

    def derivative(self, rate: float) -> float:
        base = self._base(rate)
        # Terminal inflows have exponent 0 and drop out of the sum.
        exps = self.inflow_exponents
        with np.errstate(over="ignore"):
            return float(np.sum(self.inflow_amounts * exps * np.power(base, exps - 1.0)))

    def __call__(self, rate: float) -> float:
        return self.inflow_value(rate) - self.outflow_value


def build_residual(flows: ClassifiedFlows, external_rate: float) -> BeckerEquation:
    """
    Build the residual f(r) whose root is the Becker IRR.

    Outflows are compounded to the terminal period at the known external rate,
    inflows at the unknown rate r.
    """
    external_rate = validate_rate(external_rate, "external_rate")
    terminal = flows.terminal_period

    out_periods = np.array([i for i, _ in flows.outflows], dtype=float)
    out_amounts = np.abs(np.array([v for _, v in flows.outflows], dtype=float))
    outflow_value = float(np.sum(out_amounts * np.power(1.0 + external_rate, terminal - out_periods)))

    in_periods = np.array([i for i, _ in flows.inflows], dtype=float)
    in_amounts = np.array([v for _, v in flows.inflows], dtype=float)

    return BeckerEquation(
        inflow_amounts=in_amounts,
        inflow_exponents=terminal - in_periods,
        outflow_value=outflow_value,
        external_rate=external_rate,
    )


def residual_curve(cashflows, external_rate: float, rates) -> np.ndarray:
    """
    Evaluate the Becker residual across a grid of trial rates.

    Returns an array with the same shape as rates.
    """
    equation = build_residual(classify_cashflows(cashflows), external_rate)
    rates = np.asarray(rates, dtype=float)
    if np.any(rates <= -1.0):
        raise DomainViolation("rates must be greater than -1.")

    with np.errstate(over="ignore"):
        growth = np.power(1.0 + rates[..., None], equation.inflow_exponents)
    return np.sum(equation.inflow_amounts * growth, axis=-1) - equation.outflow_value
