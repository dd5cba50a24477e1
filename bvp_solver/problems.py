# Catalogue of linear second-order boundary-value problems with known solutions.
# Used by the CLI, the convergence study and the tests.

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from bvp_solver.numerical_solvers.second_order_fdm import FDMConfig, SecondOrderODEFDM
from bvp_solver.utils.types import CoefficientFn


@dataclass
class ODEProblem:
    """A boundary-value problem h f'' + g f' + c f = 0 with Dirichlet data."""

    name: str
    h: CoefficientFn
    g: CoefficientFn
    c: CoefficientFn
    domain: Tuple[float, float]
    boundary_conditions: Dict[str, float]
    exact_solution: Optional[Callable[[np.ndarray], np.ndarray]] = None
    description: str = ""

    def make_solver(self, n_points: int) -> SecondOrderODEFDM:
        config = FDMConfig(
            n_points=n_points,
            domain=self.domain,
            boundary_conditions=dict(self.boundary_conditions),
        )
        return SecondOrderODEFDM(self.h, self.g, self.c, config)

    def exact(self, x: np.ndarray) -> np.ndarray:
        if self.exact_solution is None:
            raise ValueError(f"Problem '{self.name}' has no exact solution")
        return self.exact_solution(np.asarray(x, dtype=float))


def _damped_exact(x: np.ndarray) -> np.ndarray:
    # 1.5 r^2 + 5 r + 1.5 = 0  ->  r = -3, -1/3
    c2 = 1.0 / (math.exp(-1.0 / 3.0) - math.exp(-3.0))
    c1 = -c2
    return c1 * np.exp(-3.0 * x) + c2 * np.exp(-x / 3.0)


_PROBLEMS: Dict[str, ODEProblem] = {
    "linear": ODEProblem(
        name="linear",
        h=lambda x: 1.0,
        g=lambda x: 0.0,
        c=lambda x: 0.0,
        domain=(0.0, 1.0),
        boundary_conditions={"left": 0.0, "right": 1.0},
        exact_solution=lambda x: x,
        description="f'' = 0, f(0) = 0, f(1) = 1",
    ),
    "exponential": ODEProblem(
        name="exponential",
        h=lambda x: 1.0,
        g=lambda x: 0.0,
        c=lambda x: -1.0,
        domain=(0.0, 1.0),
        boundary_conditions={"left": 1.0, "right": math.e},
        exact_solution=np.exp,
        description="f'' = f, f(0) = 1, f(1) = e",
    ),
    "damped": ODEProblem(
        name="damped",
        h=lambda x: 1.5,
        g=lambda x: 5.0,
        c=lambda x: 1.5,
        domain=(0.0, 1.0),
        boundary_conditions={"left": 0.0, "right": 1.0},
        exact_solution=_damped_exact,
        description="1.5 f'' + 5 f' + 1.5 f = 0, f(0) = 0, f(1) = 1",
    ),
    "harmonic": ODEProblem(
        name="harmonic",
        h=lambda x: 1.0,
        g=lambda x: 0.0,
        c=lambda x: 1.0,
        domain=(0.0, math.pi / 2.0),
        boundary_conditions={"left": 0.0, "right": 1.0},
        exact_solution=np.sin,
        description="f'' + f = 0, f(0) = 0, f(pi/2) = 1",
    ),
    "cauchy_euler": ODEProblem(
        name="cauchy_euler",
        h=lambda x: x * x,
        g=lambda x: x,
        c=lambda x: -1.0,
        domain=(1.0, 2.0),
        boundary_conditions={"left": 1.0, "right": 2.0},
        exact_solution=lambda x: x,
        description="x^2 f'' + x f' - f = 0, f(1) = 1, f(2) = 2",
    ),
}


def list_problems() -> List[str]:
    return sorted(_PROBLEMS)


def get_problem(name: str) -> ODEProblem:
    """
    Look up a catalogued problem by name.

    :param name: Problem name, see list_problems()
    :return: The ODEProblem
    """
    key = name.lower()
    if key not in _PROBLEMS:
        raise ValueError(f"Unknown problem: {name}. Available: {', '.join(list_problems())}")
    return _PROBLEMS[key]
