"""Utility functions for the boundary-value solver."""

from .types import Array, ArrayLike, CoefficientFn
from .utils import (
    setup_logging,
    compute_error_metrics,
    save_solution,
    plot_solution,
)

__all__ = [
    "Array",
    "ArrayLike",
    "CoefficientFn",
    "setup_logging",
    "compute_error_metrics",
    "save_solution",
    "plot_solution",
]
