"""Exceptions raised by the boundary-value solver."""

from typing import Optional


class SolverError(Exception):
    """Base class for every error raised while solving a boundary-value problem."""


class InvalidDomainError(SolverError, ValueError):
    """Raised when the interval or the number of grid points is unusable."""


class InvalidSystemError(SolverError, ValueError):
    """Raised when the bands of a tridiagonal system do not line up."""


class CoefficientEvaluationError(SolverError):
    """
    Raised when a coefficient function fails or returns a non-finite value.

    Args:
        index: Grid node index at which the evaluation failed
        x: Coordinate of that node
        coefficient: Name of the coefficient ("h", "g" or "c")
        reason: Optional human readable cause
    """

    def __init__(
        self, index: int, x: float, coefficient: str, reason: Optional[str] = None
    ):
        self.index = index
        self.x = x
        self.coefficient = coefficient
        self.reason = reason
        message = f"Coefficient {coefficient}(x) could not be evaluated at node {index} (x={x!r})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SingularSystemError(SolverError, ZeroDivisionError):
    """Raised when the Thomas elimination meets an exactly zero pivot."""

    def __init__(self, row: int):
        self.row = row
        super().__init__(f"Zero pivot encountered at row {row}; system is singular")
