"""Grid refinement study for problems with a known exact solution."""

import logging
import math
from typing import Any, Dict, List, Sequence

from bvp_solver.problems import ODEProblem

logger = logging.getLogger(__name__)


def convergence_study(problem: ODEProblem, levels: Sequence[int]) -> Dict[str, Any]:
    """
    Solve a problem on successively finer grids and measure the error.

    Args:
        problem: Problem with an exact solution
        levels: Increasing numbers of grid points

    Returns:
        Dictionary with one row per level (n_points, dx, max_error, l2_error)
        and the observed orders between consecutive levels
    """
    if len(levels) < 2:
        raise ValueError("A convergence study needs at least two grid levels")
    if any(b <= a for a, b in zip(levels, levels[1:])):
        raise ValueError(f"Grid levels must be strictly increasing, got {list(levels)}")

    rows: List[Dict[str, float]] = []
    for n_points in levels:
        solver = problem.make_solver(n_points)
        solver.solve()
        metrics = solver.get_error(problem.exact)
        rows.append(
            {
                "n_points": n_points,
                "dx": solver.dx,
                "max_error": metrics["max_error"],
                "l2_error": metrics["l2_error"],
            }
        )
        logger.info(
            "%s: n_points=%d dx=%.4e max_error=%.4e",
            problem.name,
            n_points,
            solver.dx,
            metrics["max_error"],
        )

    orders = []
    for coarse, fine in zip(rows, rows[1:]):
        if coarse["max_error"] == 0.0 or fine["max_error"] == 0.0:
            # Exact up to rounding, no meaningful rate
            orders.append(float("nan"))
            continue
        orders.append(
            math.log(coarse["max_error"] / fine["max_error"])
            / math.log(coarse["dx"] / fine["dx"])
        )

    return {"problem": problem.name, "levels": rows, "observed_orders": orders}
