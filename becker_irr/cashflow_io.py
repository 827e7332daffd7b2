from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

LOGGER = logging.getLogger(__name__)


def parse_flows(text: str) -> np.ndarray:
    """Parse a comma-separated list of cash flows, e.g. "-100, 20, 110"."""
    items = [item.strip() for item in str(text).split(",") if item.strip()]
    if not items:
        raise ValueError("At least one cash flow is required.")
    try:
        return np.array([float(item) for item in items], dtype=float)
    except ValueError as exc:
        raise ValueError(f"Cash flows must be numeric: {text!r}") from exc


def read_cashflows_csv(path: Path, column: str | None = None) -> np.ndarray:
    """
    Read one cash flow per row from a CSV file.

    Uses `column` when given, otherwise the last column. Rows are kept in file
    order since the row position is the period index; blank trailing rows are
    dropped.
    """
    raw = pd.read_csv(path)
    if raw.empty:
        raise ValueError(f"{path} contains no rows.")
    if column is None:
        column = raw.columns[-1]
    if column not in raw.columns:
        raise ValueError(f"Column {column!r} not found in {path}.")

    flows = pd.to_numeric(raw[column], errors="coerce")
    last_valid = flows.last_valid_index()
    if last_valid is None:
        raise ValueError(f"Column {column!r} in {path} has no numeric values.")
    trailing = int(len(flows) - 1 - last_valid)
    if trailing:
        LOGGER.info("Dropped %s trailing blank rows from %s.", trailing, path)
        flows = flows.loc[:last_valid]
    if flows.isna().any():
        raise ValueError(f"Column {column!r} in {path} has missing or non-numeric periods.")
    return flows.to_numpy(dtype=float)
