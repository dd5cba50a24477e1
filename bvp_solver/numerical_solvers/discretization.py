import logging
import math
from dataclasses import dataclass
from numbers import Integral, Real

import numpy as np

from bvp_solver.errors import CoefficientEvaluationError, InvalidDomainError
from bvp_solver.numerical_solvers.tridiagonal import TridiagonalSystem
from bvp_solver.utils.types import CoefficientFn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UniformGrid:
    """
    Uniform one-dimensional grid including both end points.

    n_points: number of nodes (at least 3, so there is one interior node)
    """

    xmin: float
    xmax: float
    n_points: int

    def __post_init__(self) -> None:
        validate_domain(self.xmin, self.xmax, self.n_points)

    @property
    def dx(self) -> float:
        return (self.xmax - self.xmin) / (self.n_points - 1)

    @property
    def x(self) -> np.ndarray:
        """Node coordinates, end points included."""
        return np.linspace(self.xmin, self.xmax, self.n_points, dtype=float)

    def node(self, index: int) -> float:
        return self.xmin + index * self.dx

    def interior_indices(self) -> range:
        return range(1, self.n_points - 1)


def validate_domain(xmin: float, xmax: float, n_points: int) -> None:
    if isinstance(n_points, bool) or not isinstance(n_points, Integral):
        raise InvalidDomainError(f"n_points must be an integer, got {n_points!r}")
    if n_points < 3:
        raise InvalidDomainError(f"n_points must be >= 3, got {n_points}")
    for name, value in (("xmin", xmin), ("xmax", xmax)):
        if not isinstance(value, Real) or not math.isfinite(value):
            raise InvalidDomainError(f"{name} must be a finite real number, got {value!r}")
    if xmin >= xmax:
        raise InvalidDomainError(f"xmin must be smaller than xmax, got [{xmin}, {xmax}]")


def _evaluate(fn: CoefficientFn, name: str, index: int, x: float) -> float:
    try:
        value = float(fn(x))
    except Exception as exc:
        raise CoefficientEvaluationError(index, x, name, str(exc)) from exc
    if not math.isfinite(value):
        raise CoefficientEvaluationError(index, x, name, f"non-finite value {value}")
    return value


def discretize(
    h: CoefficientFn,
    g: CoefficientFn,
    c: CoefficientFn,
    xmin: float,
    xmax: float,
    n_points: int,
    f_left: float,
    f_right: float,
) -> TridiagonalSystem:
    """
    Discretize h f'' + g f' + c f = 0 with second-order central differences.

    Interior rows use
        f''(x_i) ~ (f[i-1] - 2 f[i] + f[i+1]) / dx^2
        f'(x_i)  ~ (f[i+1] - f[i-1]) / (2 dx)
    and the two end rows are identity rows carrying the Dirichlet values.

    Args:
        h, g, c: Coefficient functions of f'', f' and f
        xmin, xmax: Interval bounds
        n_points: Number of grid nodes, end points included
        f_left, f_right: Boundary values f(xmin) and f(xmax)

    Returns:
        TridiagonalSystem with bands of length n_points
    """
    grid = UniformGrid(xmin, xmax, n_points)
    for name, value in (("f_left", f_left), ("f_right", f_right)):
        if not math.isfinite(value):
            raise InvalidDomainError(f"{name} must be finite, got {value!r}")

    dx = grid.dx
    dx_sq = dx * dx
    dx2 = 2.0 * dx

    sub = np.zeros(n_points, dtype=float)
    diag = np.zeros(n_points, dtype=float)
    sup = np.zeros(n_points, dtype=float)
    rhs = np.zeros(n_points, dtype=float)

    for i in grid.interior_indices():
        x = grid.node(i)
        h_i = _evaluate(h, "h", i, x)
        g_i = _evaluate(g, "g", i, x)
        c_i = _evaluate(c, "c", i, x)
        sub[i] = h_i / dx_sq - g_i / dx2
        diag[i] = c_i - 2.0 * h_i / dx_sq
        sup[i] = h_i / dx_sq + g_i / dx2

    # Dirichlet rows
    diag[0] = 1.0
    rhs[0] = f_left
    diag[-1] = 1.0
    rhs[-1] = f_right

    logger.debug("Discretized [%s, %s] with %d points (dx=%g)", xmin, xmax, n_points, dx)
    return TridiagonalSystem(sub, diag, sup, rhs)
