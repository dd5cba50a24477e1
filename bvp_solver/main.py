import argparse
import dataclasses
import json
import logging
import os
import sys
from typing import List, Optional

from bvp_solver.config import DEFAULT_CONFIG_PATH, Config
from bvp_solver.convergence import convergence_study
from bvp_solver.errors import SolverError
from bvp_solver.problems import ODEProblem, get_problem, list_problems
from bvp_solver.utils import compute_error_metrics, plot_solution, save_solution, setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Finite difference solver for h(x) f'' + g(x) f' + c(x) f = 0",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Solve the problem configured in config.yaml:
    python -m bvp_solver.main

  Solve a catalogued problem on 201 points and plot it:
    python -m bvp_solver.main --problem harmonic --n-points 201 --plot

  Run a grid refinement study:
    python -m bvp_solver.main --problem exponential --convergence
        """,
    )
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML configuration file")
    parser.add_argument("--problem", type=str, default=None, help="Name of a catalogued problem")
    parser.add_argument("--n-points", type=int, default=None, help="Number of grid points (>= 3)")
    parser.add_argument("--output-dir", type=str, default=None, help="Directory for saved results")
    parser.add_argument("--plot", action="store_true", help="Save a plot of the solution")
    parser.add_argument("--save", action="store_true", help="Save the solution as JSON")
    parser.add_argument(
        "--convergence",
        action="store_true",
        help="Run a grid refinement study instead of a single solve",
    )
    parser.add_argument("--list-problems", action="store_true", help="List catalogued problems and exit")
    return parser.parse_args(argv)


def build_config(args) -> Config:
    overrides = {}
    if args.problem is not None:
        overrides.setdefault("problem", {})["name"] = args.problem
    if args.n_points is not None:
        overrides.setdefault("solver", {})["n_points"] = args.n_points
    if args.output_dir is not None:
        overrides.setdefault("output", {})["output_dir"] = args.output_dir
    if args.plot:
        overrides.setdefault("output", {})["save_plots"] = True
    if args.save:
        overrides.setdefault("output", {})["save_solution"] = True

    config_path = args.config
    if config_path is None and os.path.exists(DEFAULT_CONFIG_PATH):
        config_path = DEFAULT_CONFIG_PATH
    return Config(config_path, overrides=overrides)


def resolve_problem(config: Config) -> ODEProblem:
    """Catalogued problem with the domain and boundary values from the configuration applied."""
    problem = get_problem(config.problem.name)
    changes = {}
    if config.problem.domain is not None:
        changes["domain"] = tuple(float(v) for v in config.problem.domain)
    if config.problem.boundary_conditions is not None:
        changes["boundary_conditions"] = {
            side: float(v) for side, v in config.problem.boundary_conditions.items()
        }
    if changes:
        # The catalogued exact solution only holds for the catalogued data
        changes["exact_solution"] = None
        problem = dataclasses.replace(problem, **changes)
    return problem


def run_solve(problem: ODEProblem, config: Config) -> int:
    solver = problem.make_solver(config.solver.n_points)
    solution = solver.solve_with_grid()

    print(f"{'x':>14} {'f(x)':>20}")
    for x, f in solution.as_table():
        print(f"{x:14.6f} {f:20.12g}")

    exact = None
    metadata = {"problem": problem.name, **solver.to_dict()}
    metadata.pop("x")
    metadata.pop("solution")
    if problem.exact_solution is not None:
        exact = problem.exact(solution.x)
        metrics = compute_error_metrics(solution.f, exact)
        metadata["metrics"] = metrics
        print(
            f"\nL2 error = {metrics['l2_error']:.6e}, "
            f"Max error = {metrics['max_error']:.6e}, "
            f"Mean error = {metrics['mean_error']:.6e}"
        )

    if config.output.save_solution:
        path = save_solution(solution.x, solution.f, config.output.output_dir, metadata)
        logger.info("Solution saved to: %s", path)
    if config.output.save_plots:
        plot_solution(
            solution.x,
            solution.f,
            exact=exact,
            save_path=os.path.join(config.output.output_dir, f"{problem.name}.png"),
            title=problem.description or problem.name,
        )
    return 0


def run_convergence(problem: ODEProblem, config: Config) -> int:
    if problem.exact_solution is None:
        logger.error("Problem '%s' has no exact solution to compare against", problem.name)
        return 1

    report = convergence_study(problem, config.solver.convergence_levels)
    print(f"{'n_points':>10} {'dx':>14} {'max error':>14} {'order':>8}")
    orders = [None] + report["observed_orders"]
    for row, order in zip(report["levels"], orders):
        order_str = "" if order is None else f"{order:8.3f}"
        print(f"{row['n_points']:>10d} {row['dx']:14.6e} {row['max_error']:14.6e} {order_str:>8}")

    if config.output.save_solution:
        os.makedirs(config.output.output_dir, exist_ok=True)
        path = os.path.join(config.output.output_dir, f"convergence_{problem.name}.json")
        with open(path, "w") as f:
            json.dump(report, f, indent=2)
        logger.info("Convergence report saved to: %s", path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.list_problems:
        for name in list_problems():
            print(f"{name:<14} {get_problem(name).description}")
        return 0

    try:
        config = build_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.log_dir, config.logging.level, config.logging.log_to_file)

    try:
        problem = resolve_problem(config)
        if args.convergence:
            return run_convergence(problem, config)
        return run_solve(problem, config)
    except SolverError as e:
        logger.error("Solve failed: %s", e)
        return 1
    except ValueError as e:
        logger.error("Invalid input: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
