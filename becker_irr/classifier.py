from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from becker_irr.errors import DegenerateSeries, DomainViolation


@dataclass(frozen=True)
class ClassifiedFlows:
    values: np.ndarray
    outflows: tuple[tuple[int, float], ...]
    inflows: tuple[tuple[int, float], ...]

    @property
    def n_periods(self) -> int:
        return int(self.values.size)

    @property
    def terminal_period(self) -> int:
        return self.n_periods - 1


def validate_rate(rate: float, name: str = "rate") -> float:
    rate = float(rate)
    if not math.isfinite(rate):
        raise DomainViolation(f"{name} must be finite.")
    if rate <= -1.0:
        raise DomainViolation(f"{name} must be greater than -1.")
    return rate


def classify_cashflows(cashflows) -> ClassifiedFlows:
    """
    Split a periodic cash-flow series into outflows (< 0) and inflows (> 0).

    Each flow keeps its position in the series as its period index. Zero
    entries land on neither side but still occupy a period.
    """
    values = np.asarray(cashflows, dtype=float)

    if values.ndim != 1:
        raise DegenerateSeries("cashflows must be a 1D sequence.")
    if values.size < 2:
        raise DegenerateSeries("cashflows must contain at least two periods.")
    if not np.all(np.isfinite(values)):
        raise DegenerateSeries("cashflows must be finite.")

    outflows = tuple((int(i), float(v)) for i, v in enumerate(values) if v < 0.0)
    inflows = tuple((int(i), float(v)) for i, v in enumerate(values) if v > 0.0)

    if not outflows:
        raise DegenerateSeries("cashflows must contain at least one negative flow.")
    if not inflows:
        raise DegenerateSeries("cashflows must contain at least one positive flow.")

    return ClassifiedFlows(values=values, outflows=outflows, inflows=inflows)
