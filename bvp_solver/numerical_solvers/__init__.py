"""
Numerical solvers for linear second-order boundary-value problems.
"""

from .tridiagonal import TridiagonalSystem, solve_tridiagonal
from .discretization import UniformGrid, discretize, validate_domain
from .second_order_fdm import (
    BVPSolution,
    FDMConfig,
    SecondOrderODEFDM,
    solve_second_order_ode,
)

__all__ = [
    "TridiagonalSystem",
    "solve_tridiagonal",
    "UniformGrid",
    "discretize",
    "validate_domain",
    "BVPSolution",
    "FDMConfig",
    "SecondOrderODEFDM",
    "solve_second_order_ode",
]
