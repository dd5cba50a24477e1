import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from bvp_solver.errors import InvalidDomainError
from bvp_solver.numerical_solvers.discretization import UniformGrid, discretize
from bvp_solver.numerical_solvers.tridiagonal import TridiagonalSystem, solve_tridiagonal
from bvp_solver.utils.types import ArrayLike, CoefficientFn
from bvp_solver.utils.utils import compute_error_metrics


@dataclass
class FDMConfig:
    """Configuration for the second-order boundary-value FDM solver."""

    n_points: int = 101  # Number of grid nodes, end points included
    domain: Tuple[float, float] = (0.0, 1.0)  # (xmin, xmax)
    boundary_conditions: Dict[str, float] = field(
        default_factory=lambda: {"left": 0.0, "right": 1.0}
    )

    def __post_init__(self):
        if len(self.domain) != 2:
            raise InvalidDomainError("domain must be a pair (xmin, xmax)")
        self.domain = (float(self.domain[0]), float(self.domain[1]))
        for side in ("left", "right"):
            if side not in self.boundary_conditions:
                raise InvalidDomainError(f"Missing '{side}' boundary condition")

    @property
    def f_left(self) -> float:
        return float(self.boundary_conditions["left"])

    @property
    def f_right(self) -> float:
        return float(self.boundary_conditions["right"])


@dataclass
class BVPSolution:
    """Discrete solution paired with its grid coordinates."""

    x: np.ndarray
    f: np.ndarray

    def interpolate(self, points: ArrayLike) -> np.ndarray:
        """Piecewise linear interpolation between grid nodes."""
        points = np.asarray(points, dtype=float)
        if np.any(points < self.x[0]) or np.any(points > self.x[-1]):
            raise ValueError(
                f"Points outside the solution domain [{self.x[0]}, {self.x[-1]}]"
            )
        return np.interp(points, self.x, self.f)

    def as_table(self):
        return list(zip(self.x.tolist(), self.f.tolist()))


def solve_second_order_ode(
    h: CoefficientFn,
    g: CoefficientFn,
    c: CoefficientFn,
    xmin: float,
    xmax: float,
    n_points: int,
    f_left: float,
    f_right: float,
) -> np.ndarray:
    """
    Solve h(x) f'' + g(x) f' + c(x) f = 0 on [xmin, xmax] with f(xmin) = f_left
    and f(xmax) = f_right.

    Returns:
        Approximate values of f at the n_points uniformly spaced nodes

    Raises:
        InvalidDomainError: xmin >= xmax or n_points < 3
        CoefficientEvaluationError: a coefficient fails or is non-finite at a node
        SingularSystemError: a zero pivot is met during elimination
    """
    system = discretize(h, g, c, xmin, xmax, n_points, f_left, f_right)
    return solve_tridiagonal(*system)


class SecondOrderODEFDM:
    """
    Finite difference solver for linear second-order boundary-value problems.
    Keeps the grid, the assembled system and the last solution around so that
    they can be inspected, compared against an exact solution or plotted.
    """

    def __init__(
        self,
        h: CoefficientFn,
        g: CoefficientFn,
        c: CoefficientFn,
        config: Optional[FDMConfig] = None,
    ):
        """
        Initialize the solver.

        Args:
            h: Coefficient of f''
            g: Coefficient of f'
            c: Coefficient of f
            config: Grid and boundary configuration, defaults to FDMConfig()
        """
        self.h = h
        self.g = g
        self.c = c
        self.config = config or FDMConfig()
        self.grid = UniformGrid(self.config.domain[0], self.config.domain[1], self.config.n_points)
        self.system: Optional[TridiagonalSystem] = None
        self.u: Optional[np.ndarray] = None

        self.logger = logging.getLogger(__name__)

    @property
    def x(self) -> np.ndarray:
        return self.grid.x

    @property
    def dx(self) -> float:
        return self.grid.dx

    def discretize_equation(self) -> TridiagonalSystem:
        """Assemble the tridiagonal system for the current configuration."""
        self.system = discretize(
            self.h,
            self.g,
            self.c,
            self.grid.xmin,
            self.grid.xmax,
            self.grid.n_points,
            self.config.f_left,
            self.config.f_right,
        )
        return self.system

    def solve(self) -> np.ndarray:
        """
        Solve the boundary-value problem.

        Returns:
            Solution array of length n_points
        """
        self.logger.info(
            "Solving equation using finite differences on [%g, %g] with %d points...",
            self.grid.xmin,
            self.grid.xmax,
            self.grid.n_points,
        )
        system = self.discretize_equation()
        self.u = solve_tridiagonal(*system)
        self.logger.info("Solution completed successfully")
        return self.u

    def solve_with_grid(self) -> BVPSolution:
        return BVPSolution(x=self.x, f=self.solve())

    def get_solution(self) -> np.ndarray:
        if self.u is None:
            raise RuntimeError("solve() has not been called yet")
        return self.u

    def residual(self) -> np.ndarray:
        """A f - rhs of the assembled system for the last solution."""
        solution = self.get_solution()
        return self.system.residual(solution)

    def get_error(self, exact: Callable[[np.ndarray], np.ndarray]) -> Dict[str, float]:
        """
        Compare the last solution against an exact solution.

        Args:
            exact: Vectorised exact solution f(x)

        Returns:
            Dictionary with l2_error, max_error and mean_error
        """
        return compute_error_metrics(self.get_solution(), exact(self.x))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": list(self.config.domain),
            "n_points": self.config.n_points,
            "dx": self.dx,
            "boundary_conditions": dict(self.config.boundary_conditions),
            "x": self.x.tolist(),
            "solution": None if self.u is None else self.u.tolist(),
        }
