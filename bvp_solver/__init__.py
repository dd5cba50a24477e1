"""
Finite difference solver for linear second-order boundary-value problems
h(x) f''(x) + g(x) f'(x) + c(x) f(x) = 0 with Dirichlet boundary values.
"""

from .errors import (
    SolverError,
    InvalidDomainError,
    InvalidSystemError,
    CoefficientEvaluationError,
    SingularSystemError,
)
from .numerical_solvers import (
    TridiagonalSystem,
    solve_tridiagonal,
    UniformGrid,
    discretize,
    BVPSolution,
    FDMConfig,
    SecondOrderODEFDM,
    solve_second_order_ode,
)
from .problems import ODEProblem, get_problem, list_problems

__version__ = "0.1.0"

__all__ = [
    # Errors
    "SolverError",
    "InvalidDomainError",
    "InvalidSystemError",
    "CoefficientEvaluationError",
    "SingularSystemError",

    # Core
    "TridiagonalSystem",
    "solve_tridiagonal",
    "UniformGrid",
    "discretize",
    "solve_second_order_ode",

    # Solver class
    "BVPSolution",
    "FDMConfig",
    "SecondOrderODEFDM",

    # Problem catalogue
    "ODEProblem",
    "get_problem",
    "list_problems",
]
